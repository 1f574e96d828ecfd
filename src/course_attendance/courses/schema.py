from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from typing import Any, Optional, Tuple

from ..common.validators import (
    IssueCollector,
    reject_unknown_fields,
    require_clock_time,
    require_enum,
    require_exact_length,
    require_list,
    require_non_empty,
    require_university,
)
from ..core.constants import NEPTUN_CODE_LENGTH
from ..core.enums import DayOfWeek
from .model import Student

_FIELDS = {"name", "university", "students", "dayOfWeek", "startTime", "endTime", "location"}


def _students(issues: IssueCollector, value: Any) -> Tuple[Student, ...]:
    items = issues.check(require_list, value, "students")
    if items is None:
        return ()
    out: list[Student] = []
    seen_codes: set[str] = set()
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            issues.add(f"students.{i}", "Student must be an object")
            continue
        unknown = sorted(set(item) - {"neptun_code", "name"})
        for key in unknown:
            issues.add(f"students.{i}.{key}", "Unrecognized field")
        code = issues.check(
            require_exact_length,
            item.get("neptun_code"),
            f"students.{i}.neptun_code",
            NEPTUN_CODE_LENGTH,
            "Neptun code must be exactly 6 characters",
        )
        if code is not None:
            if code in seen_codes:
                issues.add(f"students.{i}.neptun_code", "Neptun code must be unique within the course")
                code = None
            else:
                seen_codes.add(code)
        name = issues.check(require_non_empty, item.get("name"), f"students.{i}.name")
        if code is not None and name is not None:
            out.append(Student(neptun_code=code, name=name))
    return tuple(out)


_SCHEDULE_FIELDS = {"dayOfWeek": "day_of_week", "startTime": "start_time", "endTime": "end_time", "location": "location"}


def _schedule(issues: IssueCollector, data: dict, *, clear_nulls: bool = False) -> dict:
    """Parsed schedule fields. With ``clear_nulls`` an explicit null clears the field."""
    out: dict = {}
    if clear_nulls:
        out.update({attr: None for key, attr in _SCHEDULE_FIELDS.items() if key in data and data[key] is None})
    if data.get("dayOfWeek") is not None:
        out["day_of_week"] = issues.check(require_enum, data["dayOfWeek"], DayOfWeek, "dayOfWeek")
    if data.get("startTime") is not None:
        out["start_time"] = issues.check(require_clock_time, data["startTime"], "startTime")
    if data.get("endTime") is not None:
        out["end_time"] = issues.check(require_clock_time, data["endTime"], "endTime")
    if data.get("location") is not None:
        location = data["location"]
        if not isinstance(location, str):
            issues.add("location", "location must be a string")
        else:
            out["location"] = location.strip() or None
    return out


@dataclass(frozen=True)
class CourseCreate:
    name: str
    university: str
    students: Tuple[Student, ...] = ()
    day_of_week: Optional[DayOfWeek] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    location: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> "CourseCreate":
        reject_unknown_fields(data, _FIELDS)
        issues = IssueCollector()
        name = issues.check(require_non_empty, data.get("name"), "name")
        university = issues.check(require_university, data.get("university"))
        students = _students(issues, data.get("students", []))
        schedule = _schedule(issues, data)
        issues.raise_if_any()
        return cls(name=name, university=university, students=students, **schedule)


@dataclass(frozen=True)
class CourseUpdate:
    """Partial replacement: only the provided fields are changed."""

    changes: dict = field(default_factory=dict)

    @property
    def university(self) -> Optional[str]:
        return self.changes.get("university")

    @classmethod
    def from_json(cls, data: Any) -> "CourseUpdate":
        reject_unknown_fields(data, _FIELDS)
        issues = IssueCollector()
        changes: dict = {}
        if "name" in data:
            changes["name"] = issues.check(require_non_empty, data["name"], "name")
        if "university" in data:
            changes["university"] = issues.check(require_university, data["university"])
        if "students" in data:
            changes["students"] = _students(issues, data["students"])
        changes.update(_schedule(issues, data, clear_nulls=True))
        issues.raise_if_any()
        return cls(changes=changes)
