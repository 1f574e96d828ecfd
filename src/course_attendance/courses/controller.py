from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, json_endpoint, token_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth_required = token_required(container.auth_service)

    @app.route("/courses/<int:course_id>", methods=["GET"], endpoint="get_course")
    @json_endpoint("Failed to get course")
    @auth_required
    def get_course(current_user, course_id: int):
        course = container.course_service.get_course(current_user.user_id, course_id)
        return jsonify(course.to_dict(sort_students=True)), 200

    @app.route("/courses", methods=["POST"], endpoint="create_course")
    @json_endpoint("Course creation failed")
    @auth_required
    def create_course(current_user):
        course_id = container.course_service.create_course(current_user.user_id, json_body())
        return jsonify({"message": "Course created successfully", "id": course_id}), 201

    @app.route("/courses/<int:course_id>", methods=["PUT"], endpoint="update_course")
    @json_endpoint("Failed to update course")
    @auth_required
    def update_course(current_user, course_id: int):
        course = container.course_service.update_course(current_user.user_id, course_id, json_body())
        return jsonify({"message": "Course updated successfully", "course": course.to_dict()}), 200

    @app.route("/courses/<int:course_id>", methods=["DELETE"], endpoint="delete_course")
    @json_endpoint("Failed to delete course")
    @auth_required
    def delete_course(current_user, course_id: int):
        removed = container.course_service.delete_course(current_user.user_id, course_id)
        return (
            jsonify(
                {
                    "message": "Course and associated attendance records deleted successfully",
                    "deletedAttendances": removed,
                }
            ),
            200,
        )

    @app.route("/courses/<int:course_id>/stats", methods=["GET"], endpoint="course_stats")
    @json_endpoint("Failed to fetch course statistics")
    @auth_required
    def course_stats(current_user, course_id: int):
        stats = container.course_service.course_stats(current_user.user_id, course_id)
        return jsonify(stats.to_dict()), 200
