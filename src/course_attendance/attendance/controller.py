from __future__ import annotations

from flask import Flask, Response, jsonify, request

from ..common.datetime_utils import format_date
from ..common.http import json_body, json_endpoint, token_required
from ..container import Container
from .schema import UploadedImage


def register(app: Flask, container: Container) -> None:
    auth_required = token_required(container.auth_service)

    def _uploaded_image():
        file = request.files.get("attendanceImage")
        if file is None or not file.filename:
            return None
        return UploadedImage(filename=file.filename, content_type=file.mimetype, data=file.read())

    @app.route("/attendance", methods=["POST"], endpoint="create_attendance")
    @json_endpoint("Attendance creation failed")
    @auth_required
    def create_attendance(current_user):
        record = container.attendance_service.create_attendance(
            current_user.user_id,
            request.form,
            _uploaded_image(),
        )
        return (
            jsonify(
                {
                    "message": "Attendance created successfully",
                    "attendance": {
                        "id": record.attendance_id,
                        "date": format_date(record.date),
                        "status": record.status.value,
                    },
                }
            ),
            201,
        )

    @app.route("/attendance/image/<int:image_id>", methods=["GET"], endpoint="attendance_image")
    @json_endpoint("Failed to retrieve image")
    def get_image(image_id: int):
        if app.config.get("PUBLIC_IMAGE_ACCESS", True):
            image = container.attendance_service.get_image(image_id)
        else:
            user = container.auth_service.resolve_token(request.headers.get("Authorization"))
            image = container.attendance_service.get_image(image_id, requester_id=user.user_id, public=False)
        return Response(image.data, mimetype=image.content_type)

    @app.route("/attendance/course/<int:course_id>", methods=["GET"], endpoint="attendance_by_course")
    @json_endpoint("Failed to fetch attendances")
    @auth_required
    def get_attendances_by_course(current_user, course_id: int):
        records = container.attendance_service.list_for_course(current_user.user_id, course_id)
        return jsonify([r.to_dict() for r in records]), 200

    @app.route("/attendance/<int:attendance_id>", methods=["GET"], endpoint="get_attendance")
    @json_endpoint("Failed to fetch attendance")
    @auth_required
    def get_attendance(current_user, attendance_id: int):
        record = container.attendance_service.get_attendance(current_user.user_id, attendance_id)
        return jsonify(record.to_dict()), 200

    @app.route("/attendance/<int:attendance_id>", methods=["PUT"], endpoint="update_attendance")
    @json_endpoint("Failed to update attendance")
    @auth_required
    def update_attendance(current_user, attendance_id: int):
        record = container.attendance_service.update_attendance(current_user.user_id, attendance_id, json_body())
        return jsonify({"message": "Attendance updated successfully", "attendance": record.to_dict()}), 200

    @app.route("/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="delete_attendance")
    @json_endpoint("Failed to delete attendance")
    @auth_required
    def delete_attendance(current_user, attendance_id: int):
        container.attendance_service.delete_attendance(current_user.user_id, attendance_id)
        return jsonify({"message": "Attendance and its image deleted successfully"}), 200
