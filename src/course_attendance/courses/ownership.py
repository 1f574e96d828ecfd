from __future__ import annotations

from typing import Optional

from ..attendance.model import Attendance
from ..attendance.repository import AttendanceRepository
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError
from .model import Course
from .repository import CourseRepository


class OwnershipGate:
    """Checks that the acting user owns a course, directly or through one of its attendances.

    Order matters: identity first, then existence, then ownership. A non-owner
    asking for a missing resource gets "not found", never "forbidden".
    """

    def __init__(self, courses: CourseRepository, attendance: AttendanceRepository):
        self._courses = courses
        self._attendance = attendance

    @staticmethod
    def require_identity(requester_id: Optional[int]) -> int:
        if requester_id is None:
            raise AuthenticationError("Authentication failed")
        return int(requester_id)

    @staticmethod
    def ensure_owner(course: Course, requester_id: int) -> Course:
        if not course.owned_by(requester_id):
            raise AuthorizationError("You do not have access to this course")
        return course

    def course_for(self, requester_id: Optional[int], course_id: int) -> Course:
        requester_id = self.require_identity(requester_id)
        course = self._courses.get_by_id(course_id)
        if not course:
            raise NotFoundError("Course not found")
        return self.ensure_owner(course, requester_id)

    def attendance_for(self, requester_id: Optional[int], attendance_id: int) -> tuple[Attendance, Course]:
        requester_id = self.require_identity(requester_id)
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance not found")
        course = self._courses.get_by_id(record.course_id)
        if not course:
            raise NotFoundError("Course not found")
        return record, self.ensure_owner(course, requester_id)
