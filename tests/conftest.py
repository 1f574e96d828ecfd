from __future__ import annotations

from datetime import date

import pytest
from werkzeug.security import generate_password_hash

from course_attendance import create_app
from course_attendance.attendance.model import StudentAttendance
from course_attendance.attendance.schema import UploadedImage
from course_attendance.container import wire_container
from course_attendance.core.enums import AttendanceStatus, StudentStatus
from course_attendance.courses.model import Student
from course_attendance.users.tokens import TokenSigner

from tests.fakes import InMemoryStore


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def tokens() -> TokenSigner:
    return TokenSigner("test-secret")


@pytest.fixture
def container(store, tokens):
    return wire_container(
        users=store.users,
        courses=store.courses,
        attendance=store.attendance,
        images=store.images,
        tokens=tokens,
        transaction=store.transaction,
        max_image_bytes=1024,
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(store):
    def _make(email="teacher@example.com", universities=("BME",), password="password123"):
        return store.users.create_user(
            name=email.split("@")[0],
            email=email,
            password_hash=generate_password_hash(password),
            universities=universities,
        )

    return _make


@pytest.fixture
def make_course(store):
    def _make(user_id, *, university="BME", name="Algorithms", students=None):
        roster = students if students is not None else [Student("ABC123", "Anna"), Student("XYZ789", "Bela")]
        return store.courses.create_course(user_id=user_id, name=name, university=university, students=roster)

    return _make


@pytest.fixture
def make_attendance(store):
    def _make(course_id, *, on=date(2026, 3, 2), statuses=None):
        image_id = store.images.create_image(name="sheet", description=None, data=b"img", content_type="image/png")
        entries = [
            StudentAttendance(student_name=name, neptun_code=code, status=status)
            for name, code, status in (statuses or [("Anna", "ABC123", StudentStatus.PRESENT)])
        ]
        return store.attendance.create_attendance(
            course_id=course_id,
            session_date=on,
            image_id=image_id,
            status=AttendanceStatus.UPLOADED,
            students=entries,
        )

    return _make


@pytest.fixture
def sheet() -> UploadedImage:
    return UploadedImage(filename="sheet.png", content_type="image/png", data=b"\x89PNG fake")
