from __future__ import annotations

from typing import Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 500


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``issues`` holds field-level details: ``[{"field": ..., "message": ...}]``.
    """

    status_code = 400

    def __init__(self, message: str, *, issues: Optional[Sequence[dict]] = None):
        super().__init__(message)
        self.issues = list(issues or [])

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, issues=[{"field": field, "message": message}])


class AuthenticationError(DomainError):
    """Raised when the token or the login credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class UnexpectedError(DomainError):
    """Storage or internal failure."""

    status_code = 500
