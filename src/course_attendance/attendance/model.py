from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from ..common.datetime_utils import format_date
from ..core.enums import AttendanceStatus, StudentStatus


@dataclass(frozen=True)
class StudentAttendance:
    student_name: str
    neptun_code: str
    status: StudentStatus

    def to_dict(self) -> dict:
        return {"student_name": self.student_name, "neptun_code": self.neptun_code, "status": self.status.value}


@dataclass(frozen=True)
class ImageInfo:
    """Image metadata without the binary payload."""

    image_id: int
    name: str
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {"id": self.image_id, "name": self.name, "desc": self.description}


@dataclass(frozen=True)
class Image:
    image_id: int
    name: str
    description: Optional[str]
    data: bytes
    content_type: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Attendance:
    """Domain entity: one recorded session of a course."""

    attendance_id: int
    course_id: int
    date: date
    image_id: Optional[int]
    status: AttendanceStatus
    students: Tuple[StudentAttendance, ...] = ()
    image: Optional[ImageInfo] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "course_id": self.course_id,
            "date": format_date(self.date),
            "status": self.status.value,
            "students": [s.to_dict() for s in self.students],
            "attendanceImage": self.image.to_dict() if self.image else self.image_id,
        }
