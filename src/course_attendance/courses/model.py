from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from datetime import time
from typing import Optional, Tuple

from ..core.enums import DayOfWeek


def name_sort_key(name: str) -> tuple[str, str]:
    """Alphabetical order for accented names: base letters first, exact spelling breaks ties."""
    decomposed = unicodedata.normalize("NFD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name


@dataclass(frozen=True)
class Student:
    neptun_code: str
    name: str

    def to_dict(self) -> dict:
        return {"neptun_code": self.neptun_code, "name": self.name}


@dataclass(frozen=True)
class Course:
    """Domain entity: a course owned by one user, with its student roster."""

    course_id: int
    user_id: int
    name: str
    university: str
    students: Tuple[Student, ...] = ()
    day_of_week: Optional[DayOfWeek] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    location: Optional[str] = None

    def owned_by(self, user_id: Optional[int]) -> bool:
        return user_id is not None and self.user_id == int(user_id)

    def to_dict(self, *, sort_students: bool = False) -> dict:
        students = sorted(self.students, key=lambda s: name_sort_key(s.name)) if sort_students else list(self.students)
        return {
            "id": self.course_id,
            "user_id": self.user_id,
            "name": self.name,
            "university": self.university,
            "students": [s.to_dict() for s in students],
            "dayOfWeek": self.day_of_week.value if self.day_of_week else None,
            "startTime": self.start_time.strftime("%H:%M") if self.start_time else None,
            "endTime": self.end_time.strftime("%H:%M") if self.end_time else None,
            "location": self.location,
        }


@dataclass(frozen=True)
class StudentStats:
    student_name: str
    neptun_code: str
    total_sessions: int
    attended: int = 0
    missed: int = 0
    late: int = 0
    excused: int = 0

    def to_dict(self) -> dict:
        return {
            "student_name": self.student_name,
            "neptun_code": self.neptun_code,
            "totalSessions": self.total_sessions,
            "attended": self.attended,
            "missed": self.missed,
            "late": self.late,
            "excused": self.excused,
        }


@dataclass(frozen=True)
class CourseStats:
    """Read-model: per-student attendance counts across all sessions of a course."""

    course_name: str
    total_sessions: int
    students: Tuple[StudentStats, ...]

    def to_dict(self) -> dict:
        return {
            "courseName": self.course_name,
            "totalSessions": self.total_sessions,
            "students": [s.to_dict() for s in self.students],
        }
