from __future__ import annotations

import logging
from contextlib import nullcontext
from typing import Any, Callable, ContextManager, Mapping, Optional, Sequence

from ..common.datetime_utils import format_date
from ..core.constants import DEFAULT_IMAGE_CONTENT_TYPE, DEFAULT_MAX_IMAGE_BYTES
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..courses.ownership import OwnershipGate
from .model import Attendance, Image
from .repository import AttendanceRepository, ImageRepository
from .schema import AttendanceCreate, AttendanceUpdate, UploadedImage, decode_students_field

logger = logging.getLogger(__name__)

Transaction = Callable[[], ContextManager[None]]


class AttendanceService:
    """Use cases: attendance sessions and their sheet images.

    Every read and write goes through the owning course's gate.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        images: ImageRepository,
        *,
        gate: OwnershipGate,
        transaction: Transaction = nullcontext,
        max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
    ):
        self._attendance = attendance
        self._images = images
        self._gate = gate
        self._transaction = transaction
        self._max_image_bytes = int(max_image_bytes)

    def create_attendance(
        self,
        requester_id: Optional[int],
        form: Mapping[str, Any],
        image: Optional[UploadedImage],
    ) -> Attendance:
        requester_id = self._gate.require_identity(requester_id)

        if image is None or not image.data:
            raise ValidationError.for_field("attendanceImage", "Attendance image is required")
        if len(image.data) > self._max_image_bytes:
            raise ValidationError.for_field("attendanceImage", "Attendance image is too large")

        students = decode_students_field(form.get("students"))
        if not students:
            raise ValidationError.for_field("students", "At least one student is required")

        payload = AttendanceCreate.from_form(form, students)
        course = self._gate.course_for(requester_id, payload.course_id)

        session_date = format_date(payload.date)
        with self._transaction():
            image_id = self._images.create_image(
                name=f"Attendance-{session_date}",
                description=f"Attendance sheet for {course.name} on {session_date}",
                data=image.data,
                content_type=image.content_type or DEFAULT_IMAGE_CONTENT_TYPE,
            )
            attendance_id = self._attendance.create_attendance(
                course_id=course.course_id,
                session_date=payload.date,
                image_id=image_id,
                status=AttendanceStatus.UPLOADED,
                students=payload.students,
            )

        logger.info("Recorded attendance %s for course %s on %s", attendance_id, course.course_id, session_date)
        return Attendance(
            attendance_id=attendance_id,
            course_id=course.course_id,
            date=payload.date,
            image_id=image_id,
            status=AttendanceStatus.UPLOADED,
            students=payload.students,
        )

    def get_attendance(self, requester_id: Optional[int], attendance_id: int) -> Attendance:
        record, _ = self._gate.attendance_for(requester_id, attendance_id)
        return record

    def list_for_course(self, requester_id: Optional[int], course_id: int) -> Sequence[Attendance]:
        self._gate.course_for(requester_id, course_id)
        return self._attendance.list_for_course(course_id)

    def update_attendance(self, requester_id: Optional[int], attendance_id: int, data: Any) -> Attendance:
        self._gate.attendance_for(requester_id, attendance_id)
        payload = AttendanceUpdate.from_json(data)

        with self._transaction():
            if payload.changes:
                self._attendance.update_attendance(attendance_id, payload.changes)
            return self._attendance.get_by_id(attendance_id)

    def delete_attendance(self, requester_id: Optional[int], attendance_id: int) -> None:
        record, _ = self._gate.attendance_for(requester_id, attendance_id)

        with self._transaction():
            if record.image_id is not None:
                self._images.delete_by_id(record.image_id)
            self._attendance.delete_by_id(attendance_id)

        logger.info("Deleted attendance %s of course %s", attendance_id, record.course_id)

    def get_image(self, image_id: int, *, requester_id: Optional[int] = None, public: bool = True) -> Image:
        """Image bytes by id.

        With ``public`` the id alone is enough; otherwise the image must belong to
        an attendance of a course the requester owns.
        """

        if not public:
            self._gate.require_identity(requester_id)
            record = self._attendance.get_by_image_id(image_id)
            if not record:
                raise NotFoundError("Image not found")
            self._gate.attendance_for(requester_id, record.attendance_id)

        image = self._images.get_by_id(image_id)
        if not image:
            raise NotFoundError("Image not found")
        return image
