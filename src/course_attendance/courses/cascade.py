from __future__ import annotations

import logging

from ..attendance.repository import AttendanceRepository, ImageRepository
from .repository import CourseRepository

logger = logging.getLogger(__name__)


class CourseCascade:
    """Deletes a course together with its attendances and their images.

    Callers run it inside a transaction so no orphaned child survives a failure.
    """

    def __init__(self, courses: CourseRepository, attendance: AttendanceRepository, images: ImageRepository):
        self._courses = courses
        self._attendance = attendance
        self._images = images

    def delete_course(self, course_id: int) -> int:
        records = self._attendance.list_for_course(course_id)
        image_ids = [r.image_id for r in records if r.image_id is not None]

        removed = self._attendance.delete_for_course(course_id)
        self._images.delete_many(image_ids)
        self._courses.delete_by_id(course_id)

        logger.info("Deleted course %s with %s attendance record(s)", course_id, removed)
        return removed
