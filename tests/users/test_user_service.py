from __future__ import annotations

import pytest

from course_attendance.core.exceptions import AuthenticationError, ValidationError


def test_profile_requires_existing_user(container, make_user):
    user_id = make_user()

    assert container.user_service.profile(user_id).to_public_dict() == {
        "id": user_id,
        "name": "teacher",
        "email": "teacher@example.com",
        "university": ["BME"],
    }
    with pytest.raises(AuthenticationError):
        container.user_service.profile(None)
    with pytest.raises(AuthenticationError):
        container.user_service.profile(42)


def test_add_university_appends(container, store, make_user):
    user_id = make_user(universities=("BME",))

    assert container.user_service.add_university(user_id, {"university": "ELTE"}) == ("BME", "ELTE")
    assert store.users.get_by_id(user_id).universities == ("BME", "ELTE")


@pytest.mark.parametrize(
    "code, message",
    [("NOPE", "Invalid university"), ("BME", "University already added")],
)
def test_add_university_rejects(container, store, make_user, code, message):
    user_id = make_user(universities=("BME",))

    with pytest.raises(ValidationError, match=message):
        container.user_service.add_university(user_id, {"university": code})
    assert store.users.get_by_id(user_id).universities == ("BME",)


def test_update_universities_deletes_courses_of_removed_universities(
    container, store, make_user, make_course, make_attendance
):
    user_id = make_user(universities=("BME", "ELTE", "SZTE"))
    kept_course = make_course(user_id, university="BME")
    elte_a = make_course(user_id, university="ELTE", name="A")
    szte_b = make_course(user_id, university="SZTE", name="B")
    make_attendance(elte_a)
    make_attendance(elte_a)
    make_attendance(szte_b)
    kept_attendance = make_attendance(kept_course)

    change = container.user_service.update_universities(user_id, {"university": ["BME", "PTE"]})

    assert change.universities == ("BME", "PTE")
    assert change.deleted_universities == ("ELTE", "SZTE")
    assert list(store.courses.items) == [kept_course]
    assert list(store.attendance.items) == [kept_attendance]
    assert len(store.images.items) == 1
    assert store.users.get_by_id(user_id).universities == ("BME", "PTE")


def test_update_universities_requires_a_valid_non_empty_list(container, store, make_user, make_course):
    user_id = make_user(universities=("BME",))
    make_course(user_id)

    with pytest.raises(ValidationError):
        container.user_service.update_universities(user_id, {"university": []})
    with pytest.raises(ValidationError):
        container.user_service.update_universities(user_id, {"university": ["ELTE", "NOPE"]})

    assert len(store.courses.items) == 1
    assert store.users.get_by_id(user_id).universities == ("BME",)


def test_update_universities_rolls_back_when_persisting_fails(
    container, store, make_user, make_course, make_attendance, monkeypatch
):
    user_id = make_user(universities=("BME", "ELTE"))
    course_id = make_course(user_id, university="ELTE")
    make_attendance(course_id)

    def boom(*_args):
        raise RuntimeError("connection lost")

    monkeypatch.setattr(store.users, "set_universities", boom)

    with pytest.raises(RuntimeError):
        container.user_service.update_universities(user_id, {"university": ["BME"]})

    assert list(store.courses.items) == [course_id]
    assert len(store.attendance.items) == 1
    assert len(store.images.items) == 1
    assert store.users.get_by_id(user_id).universities == ("BME", "ELTE")
