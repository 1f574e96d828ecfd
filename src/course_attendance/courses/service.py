from __future__ import annotations

from contextlib import nullcontext
from typing import Any, Callable, ContextManager, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.validators import require_university
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..users.repository import UserRepository
from .cascade import CourseCascade
from .model import Course, CourseStats
from .ownership import OwnershipGate
from .repository import CourseRepository
from .schema import CourseCreate, CourseUpdate
from .stats import aggregate_course_stats

Transaction = Callable[[], ContextManager[None]]


class CourseService:
    """Use cases: course lifecycle and statistics, all gated by ownership."""

    def __init__(
        self,
        courses: CourseRepository,
        users: UserRepository,
        attendance: AttendanceRepository,
        *,
        gate: OwnershipGate,
        cascade: CourseCascade,
        transaction: Transaction = nullcontext,
    ):
        self._courses = courses
        self._users = users
        self._attendance = attendance
        self._gate = gate
        self._cascade = cascade
        self._transaction = transaction

    def _require_declared_university(self, requester_id: int, university: str) -> None:
        user = self._users.get_by_id(requester_id)
        if not user:
            raise AuthenticationError("Authentication failed")
        if university not in user.universities:
            raise AuthorizationError("User does not belong to the specified university")

    def get_course(self, requester_id: Optional[int], course_id: int) -> Course:
        return self._gate.course_for(requester_id, course_id)

    def list_courses(self, requester_id: Optional[int], *, university: Optional[str] = None) -> Sequence[Course]:
        requester_id = self._gate.require_identity(requester_id)
        if university is not None:
            require_university(university)
            self._require_declared_university(requester_id, university)
        return self._courses.list_for_user(requester_id, university=university)

    def create_course(self, requester_id: Optional[int], data: Any) -> int:
        requester_id = self._gate.require_identity(requester_id)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        # An undeclared university is forbidden whatever else the payload holds.
        self._require_declared_university(requester_id, data.get("university"))
        payload = CourseCreate.from_json(data)

        return self._courses.create_course(
            user_id=requester_id,
            name=payload.name,
            university=payload.university,
            students=payload.students,
            day_of_week=payload.day_of_week,
            start_time=payload.start_time,
            end_time=payload.end_time,
            location=payload.location,
        )

    def update_course(self, requester_id: Optional[int], course_id: int, data: Any) -> Course:
        course = self._gate.course_for(requester_id, course_id)
        payload = CourseUpdate.from_json(data)
        if payload.university is not None and payload.university != course.university:
            self._require_declared_university(course.user_id, payload.university)

        with self._transaction():
            if payload.changes:
                self._courses.update_course(course_id, payload.changes)
            return self._courses.get_by_id(course_id)

    def delete_course(self, requester_id: Optional[int], course_id: int) -> int:
        self._gate.course_for(requester_id, course_id)
        with self._transaction():
            return self._cascade.delete_course(course_id)

    def course_stats(self, requester_id: Optional[int], course_id: int) -> CourseStats:
        course = self._gate.course_for(requester_id, course_id)
        return aggregate_course_stats(course, self._attendance.list_for_course(course_id))
