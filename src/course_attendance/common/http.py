from __future__ import annotations

from functools import wraps
from typing import Any

from flask import current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, UnexpectedError, ValidationError


def error_response(error: DomainError, failure_message: str):
    if isinstance(error, ValidationError):
        body: dict[str, Any] = {"error": str(error)}
        if error.issues:
            body["errors"] = error.issues
        return jsonify(body), 400
    if isinstance(error, UnexpectedError):
        return jsonify({"error": failure_message, "message": str(error)}), 500
    return jsonify({"error": str(error)}), error.status_code


def json_endpoint(failure_message: str):
    """Every failure of the view ends as exactly one JSON response.

    Domain errors map to their status code; anything else is logged and
    answered with 500 and ``failure_message``.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                if isinstance(e, UnexpectedError):
                    current_app.logger.error("%s: %s", failure_message, e)
                return error_response(e, failure_message)
            except HTTPException as e:
                return jsonify({"error": e.description or e.name}), e.code
            except Exception as e:
                current_app.logger.exception(failure_message)
                return jsonify({"error": failure_message, "message": str(e)}), 500

        return wrapper

    return decorator


def token_required(auth_service):
    """Resolve the bearer token and hand the user to the view as ``current_user``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = auth_service.resolve_token(request.headers.get("Authorization"))
            return view(*args, current_user=user, **kwargs)

        return wrapper

    return decorator


def json_body() -> Any:
    return request.get_json(silent=True)
