from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import Attendance, Image, StudentAttendance


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[Attendance]:
        raise NotImplementedError

    def get_by_image_id(self, image_id: int) -> Optional[Attendance]:
        raise NotImplementedError

    def list_for_course(self, course_id: int) -> Sequence[Attendance]:
        """Newest session first, with image metadata populated."""

        raise NotImplementedError

    def create_attendance(
        self,
        *,
        course_id: int,
        session_date: date,
        image_id: Optional[int],
        status: AttendanceStatus,
        students: Sequence[StudentAttendance],
    ) -> int:
        raise NotImplementedError

    def update_attendance(self, attendance_id: int, changes: dict) -> bool:
        """Apply a partial update; keys are `date`, `students`, `status`."""

        raise NotImplementedError

    def delete_by_id(self, attendance_id: int) -> bool:
        raise NotImplementedError

    def delete_for_course(self, course_id: int) -> int:
        raise NotImplementedError


class ImageRepository(Protocol):
    def get_by_id(self, image_id: int) -> Optional[Image]:
        raise NotImplementedError

    def create_image(self, *, name: str, description: Optional[str], data: bytes, content_type: str) -> int:
        raise NotImplementedError

    def delete_by_id(self, image_id: int) -> bool:
        raise NotImplementedError

    def delete_many(self, image_ids: Sequence[int]) -> int:
        raise NotImplementedError
