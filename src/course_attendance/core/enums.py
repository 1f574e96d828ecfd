from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Whether the attendance sheet image of a session has been uploaded."""

    UPLOADED = "uploaded"
    NOT_UPLOADED = "not_uploaded"


class StudentStatus(str, Enum):
    """Per-student status recorded for one session."""

    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    EXCUSED = "Excused"


class DayOfWeek(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"
