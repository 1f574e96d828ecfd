from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Tuple

from ..common.validators import (
    IssueCollector,
    reject_unknown_fields,
    require_date,
    require_enum,
    require_id,
    require_list,
    require_non_empty,
)
from ..core.enums import AttendanceStatus, StudentStatus
from ..core.exceptions import ValidationError
from .model import StudentAttendance


@dataclass(frozen=True)
class UploadedImage:
    """Attendance sheet file taken from a multipart request."""

    filename: str
    content_type: str
    data: bytes


def decode_students_field(value: Any) -> Any:
    """Multipart forms carry the student list as a JSON string."""
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return json.loads(value)
        except ValueError:
            raise ValidationError.for_field("students", "students must be a JSON array")
    return value


def _student_statuses(issues: IssueCollector, value: Any, *, min_items: int = 0) -> Tuple[StudentAttendance, ...]:
    items = issues.check(
        require_list, value, "students", min_items=min_items, message="At least one student is required"
    )
    if items is None:
        return ()
    out: list[StudentAttendance] = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            issues.add(f"students.{i}", "Student entry must be an object")
            continue
        for key in sorted(set(item) - {"student_name", "neptun_code", "status"}):
            issues.add(f"students.{i}.{key}", "Unrecognized field")
        name = issues.check(require_non_empty, item.get("student_name"), f"students.{i}.student_name")
        code = item.get("neptun_code")
        if not isinstance(code, str):
            issues.add(f"students.{i}.neptun_code", "neptun_code must be a string")
            code = None
        status = issues.check(require_enum, item.get("status"), StudentStatus, f"students.{i}.status")
        if name is not None and code is not None and status is not None:
            out.append(StudentAttendance(student_name=name, neptun_code=code, status=status))
    return tuple(out)


@dataclass(frozen=True)
class AttendanceCreate:
    course_id: int
    date: date
    students: Tuple[StudentAttendance, ...]

    @classmethod
    def from_form(cls, form: Mapping[str, Any], students: Any) -> "AttendanceCreate":
        issues = IssueCollector()
        course_id = issues.check(require_id, form.get("course_id"), "course_id", "Invalid course ID format")
        session_date = issues.check(require_date, form.get("date"), "date")
        parsed = _student_statuses(issues, students, min_items=1)
        issues.raise_if_any()
        return cls(course_id=course_id, date=session_date, students=parsed)


@dataclass(frozen=True)
class AttendanceUpdate:
    """Partial update of date, student statuses and upload status."""

    changes: dict = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> "AttendanceUpdate":
        reject_unknown_fields(data, {"date", "students", "status"})
        issues = IssueCollector()
        changes: dict = {}
        if data.get("date") is not None:
            changes["date"] = issues.check(require_date, data["date"], "date")
        if data.get("students") is not None:
            changes["students"] = _student_statuses(issues, data["students"])
        if data.get("status") is not None:
            changes["status"] = issues.check(require_enum, data["status"], AttendanceStatus, "status")
        issues.raise_if_any()
        return cls(changes=changes)
