from __future__ import annotations

from datetime import time

import pytest

from course_attendance.core.enums import DayOfWeek
from course_attendance.core.exceptions import ValidationError
from course_attendance.courses.schema import CourseCreate, CourseUpdate


def _payload(**overrides):
    data = {
        "name": "Algorithms",
        "university": "BME",
        "students": [{"neptun_code": "ABC123", "name": "Anna"}],
    }
    data.update(overrides)
    return data


@pytest.mark.parametrize("code", ["ABC12", "ABC1234", ""])
def test_neptun_code_must_be_six_characters(code):
    with pytest.raises(ValidationError) as exc:
        CourseCreate.from_json(_payload(students=[{"neptun_code": code, "name": "Anna"}]))

    fields = [issue["field"] for issue in exc.value.issues]
    assert "students.0.neptun_code" in fields
    assert "Neptun code must be exactly 6 characters" in [i["message"] for i in exc.value.issues]


def test_collects_every_issue():
    with pytest.raises(ValidationError) as exc:
        CourseCreate.from_json(_payload(name="  ", university="NOPE", students=[{"neptun_code": "X", "name": ""}]))

    fields = {issue["field"] for issue in exc.value.issues}
    assert {"name", "university", "students.0.neptun_code", "students.0.name"} <= fields


def test_unknown_fields_are_rejected():
    with pytest.raises(ValidationError):
        CourseCreate.from_json(_payload(teacher="me"))


def test_schedule_fields_are_parsed():
    payload = CourseCreate.from_json(
        _payload(dayOfWeek="Tuesday", startTime="08:15", endTime="09:45", location="Q building")
    )

    assert payload.day_of_week == DayOfWeek.TUESDAY
    assert payload.start_time == time(8, 15)
    assert payload.end_time == time(9, 45)
    assert payload.location == "Q building"


def test_invalid_day_of_week():
    with pytest.raises(ValidationError):
        CourseCreate.from_json(_payload(dayOfWeek="Someday"))


def test_update_only_keeps_provided_fields():
    update = CourseUpdate.from_json({"name": "Advanced Algorithms"})

    assert update.changes == {"name": "Advanced Algorithms"}
    assert update.university is None


def test_neptun_codes_must_be_unique_within_the_course():
    students = [
        {"neptun_code": "ABC123", "name": "Anna"},
        {"neptun_code": "XYZ789", "name": "Bela"},
        {"neptun_code": "ABC123", "name": "Csaba"},
    ]

    with pytest.raises(ValidationError) as exc:
        CourseCreate.from_json(_payload(students=students))
    assert exc.value.issues == [
        {"field": "students.2.neptun_code", "message": "Neptun code must be unique within the course"}
    ]
    with pytest.raises(ValidationError):
        CourseUpdate.from_json({"students": students})


def test_update_with_null_clears_schedule_fields():
    update = CourseUpdate.from_json({"dayOfWeek": None, "startTime": None, "endTime": "10:00", "location": None})

    assert update.changes == {"day_of_week": None, "start_time": None, "end_time": time(10, 0), "location": None}


def test_create_treats_null_schedule_fields_as_absent():
    payload = CourseCreate.from_json(_payload(dayOfWeek=None, location=None))

    assert payload.day_of_week is None
    assert payload.location is None
