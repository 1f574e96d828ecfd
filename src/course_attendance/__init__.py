"""Course attendance service package.

Organized by feature modules (users, courses, attendance) with a thin Flask
controller layer over service/repository layers.
"""
from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .attendance.controller import register as register_attendance
from .courses.controller import register as register_courses
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(RequestEntityTooLarge)
    def too_large(_e):
        return jsonify({"error": "Uploaded data is too large"}), 413

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return jsonify({"error": e.description or e.name}), e.code


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    db_config = getattr(settings, "DB_CONFIG")
    max_image_bytes = int(getattr(settings, "MAX_IMAGE_BYTES"))
    max_form_field_bytes = int(getattr(settings, "MAX_FORM_FIELD_BYTES"))

    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PORT"] = int(getattr(settings, "PORT", 3000))
    app.config["PUBLIC_IMAGE_ACCESS"] = bool(getattr(settings, "PUBLIC_IMAGE_ACCESS", True))
    app.config["MAX_CONTENT_LENGTH"] = max_image_bytes + max_form_field_bytes
    app.config["MAX_FORM_MEMORY_SIZE"] = max_form_field_bytes

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            token_secret=getattr(settings, "TOKEN_SECRET"),
            token_validity_days=int(getattr(settings, "TOKEN_VALIDITY_DAYS", 7)),
            connect_timeout=int(getattr(settings, "DB_CONNECT_TIMEOUT", 10)),
            statement_timeout_ms=int(getattr(settings, "DB_STATEMENT_TIMEOUT_MS", 0)),
            max_image_bytes=max_image_bytes,
        )

    _register_error_handlers(app)
    register_users(app, container)
    register_courses(app, container)
    register_attendance(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "healthy"}), 200

    return app
