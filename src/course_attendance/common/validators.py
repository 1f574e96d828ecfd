from __future__ import annotations

import re
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Iterable, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError.for_field(field_name, f"{field_name} must be a non-empty string")
    return value.strip()


def require_min_length(value: Any, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError.for_field(field_name, f"{field_name} must be at least {min_len} characters")
    return value


def require_exact_length(value: Any, field_name: str, length: int, message: str | None = None) -> str:
    if not isinstance(value, str) or len(value) != length:
        raise ValidationError.for_field(field_name, message or f"{field_name} must be exactly {length} characters")
    return value


def require_email(value: Any, field_name: str = "email") -> str:
    if not isinstance(value, str) or not _EMAIL_RE.match(value.strip()):
        raise ValidationError.for_field(field_name, "Invalid email")
    return value.strip().lower()


def require_enum(value: Any, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError.for_field(field_name, f"{field_name} must be one of: {allowed}")


def require_id(value: Any, field_name: str, message: str | None = None) -> int:
    """Accept a positive integer or its decimal string form."""
    if isinstance(value, bool):
        raise ValidationError.for_field(field_name, message or f"Invalid {field_name} format")
    if isinstance(value, int) and value > 0:
        return value
    if isinstance(value, str):
        digits = value.strip()
        if digits.isascii() and digits.isdigit() and int(digits) > 0:
            return int(digits)
    raise ValidationError.for_field(field_name, message or f"Invalid {field_name} format")


def require_date(value: Any, field_name: str = "date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
        except ValueError:
            pass
    raise ValidationError.for_field(field_name, "Invalid date")


def require_clock_time(value: Any, field_name: str) -> time:
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), "%H:%M").time()
        except ValueError:
            pass
    raise ValidationError.for_field(field_name, f"{field_name} must be in HH:MM format")


def require_list(value: Any, field_name: str, *, min_items: int = 0, message: str | None = None) -> list:
    if not isinstance(value, list):
        raise ValidationError.for_field(field_name, f"{field_name} must be a list")
    if len(value) < min_items:
        raise ValidationError.for_field(field_name, message or f"{field_name} must contain at least {min_items} item(s)")
    return value


def reject_unknown_fields(data: Any, allowed: Iterable[str]) -> dict:
    """Strict object check: payload must be a JSON object with known keys only."""
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object", issues=[{"field": "", "message": "Expected object"}])
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise ValidationError(
            "Unrecognized field(s): " + ", ".join(unknown),
            issues=[{"field": k, "message": "Unrecognized field"} for k in unknown],
        )
    return data


class IssueCollector:
    """Runs validators and gathers every field issue before failing once."""

    def __init__(self) -> None:
        self._issues: list[dict] = []

    def check(self, validator, *args, **kwargs):
        try:
            return validator(*args, **kwargs)
        except ValidationError as e:
            self._issues.extend(e.issues or [{"field": "", "message": str(e)}])
            return None

    def add(self, field: str, message: str) -> None:
        self._issues.append({"field": field, "message": message})

    def raise_if_any(self, message: str = "Invalid request data") -> None:
        if self._issues:
            raise ValidationError(message, issues=self._issues)


def require_university(value: Any, field_name: str = "university") -> str:
    from ..universities.catalog import is_known_university

    if not is_known_university(value):
        raise ValidationError.for_field(field_name, "Invalid university")
    return value
