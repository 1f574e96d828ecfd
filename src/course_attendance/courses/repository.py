from __future__ import annotations

from datetime import time
from typing import Optional, Protocol, Sequence

from ..core.enums import DayOfWeek
from .model import Course, Student


class CourseRepository(Protocol):
    def get_by_id(self, course_id: int) -> Optional[Course]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, university: Optional[str] = None) -> Sequence[Course]:
        raise NotImplementedError

    def create_course(
        self,
        *,
        user_id: int,
        name: str,
        university: str,
        students: Sequence[Student],
        day_of_week: Optional[DayOfWeek] = None,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        location: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_course(self, course_id: int, changes: dict) -> bool:
        """Apply a partial update; keys are Course field names."""

        raise NotImplementedError

    def delete_by_id(self, course_id: int) -> bool:
        raise NotImplementedError
