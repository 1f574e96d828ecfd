from __future__ import annotations

from typing import Iterable

from ..attendance.model import Attendance
from ..core.enums import StudentStatus
from .model import Course, CourseStats, StudentStats, name_sort_key

_COUNTER_FOR_STATUS = {
    StudentStatus.PRESENT: "attended",
    StudentStatus.ABSENT: "missed",
    StudentStatus.LATE: "late",
    StudentStatus.EXCUSED: "excused",
}


def aggregate_course_stats(course: Course, attendances: Iterable[Attendance]) -> CourseStats:
    """Count each roster student's statuses across all sessions of the course.

    Entries are matched to the roster by student name; names that are not on the
    current roster are ignored. The result does not depend on record order.
    """

    records = list(attendances)
    total_sessions = len(records)

    neptun_codes = {s.name: s.neptun_code for s in course.students}
    counters = {name: dict.fromkeys(_COUNTER_FOR_STATUS.values(), 0) for name in neptun_codes}

    for record in records:
        for entry in record.students:
            counts = counters.get(entry.student_name)
            if counts is None:
                continue
            counts[_COUNTER_FOR_STATUS[entry.status]] += 1

    students = tuple(
        StudentStats(
            student_name=name,
            neptun_code=neptun_codes[name],
            total_sessions=total_sessions,
            **counts,
        )
        for name, counts in sorted(counters.items(), key=lambda item: name_sort_key(item[0]))
    )
    return CourseStats(course_name=course.name, total_sessions=total_sessions, students=students)
