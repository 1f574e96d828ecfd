from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, json_endpoint, token_required
from ..container import Container
from ..universities.catalog import UNIVERSITIES


def register(app: Flask, container: Container) -> None:
    auth_required = token_required(container.auth_service)

    @app.route("/auth/register", methods=["POST"], endpoint="register")
    @json_endpoint("Registration failed")
    def register_user():
        token = container.auth_service.register(json_body())
        return jsonify({"message": "User registered successfully", "token": token}), 201

    @app.route("/auth/login", methods=["POST"], endpoint="login")
    @json_endpoint("Login failed")
    def login():
        token = container.auth_service.login(json_body())
        return jsonify({"token": token}), 200

    @app.route("/auth/user", methods=["GET"], endpoint="current_user")
    @json_endpoint("Failed to get user")
    @auth_required
    def get_user(current_user):
        user = container.user_service.profile(current_user.user_id)
        return jsonify(user.to_public_dict()), 200

    @app.route("/auth/user/courses", methods=["GET"], endpoint="user_courses")
    @json_endpoint("Failed to get courses")
    @auth_required
    def get_user_courses(current_user):
        courses = container.course_service.list_courses(current_user.user_id)
        return jsonify([c.to_dict() for c in courses]), 200

    @app.route("/auth/user/courses/<university>", methods=["GET"], endpoint="user_courses_by_university")
    @json_endpoint("Failed to get courses")
    @auth_required
    def get_user_courses_by_university(current_user, university: str):
        courses = container.course_service.list_courses(current_user.user_id, university=university)
        return jsonify([c.to_dict() for c in courses]), 200

    @app.route("/auth/user/university", methods=["POST"], endpoint="add_university")
    @json_endpoint("Failed to add university")
    @auth_required
    def add_university(current_user):
        universities = container.user_service.add_university(current_user.user_id, json_body())
        return jsonify({"message": "University added successfully", "university": list(universities)}), 200

    @app.route("/auth/user/university", methods=["PUT"], endpoint="update_universities")
    @json_endpoint("Failed to update universities")
    @auth_required
    def update_universities(current_user):
        change = container.user_service.update_universities(current_user.user_id, json_body())
        return (
            jsonify(
                {
                    "message": "Universities updated successfully",
                    "university": list(change.universities),
                    "deletedUniversities": list(change.deleted_universities),
                }
            ),
            200,
        )

    @app.route("/universities", methods=["GET"], endpoint="universities")
    def list_universities():
        return jsonify([{"code": code, "name": name} for code, name in UNIVERSITIES.items()]), 200
