from __future__ import annotations

import io
import json

import pytest

from course_attendance.universities.catalog import UNIVERSITIES


def _register(client, email="kata@example.com", universities=("BME",)):
    res = client.post(
        "/auth/register",
        json={"name": "Kata", "email": email, "password": "password123", "university": list(universities)},
    )
    assert res.status_code == 201
    return {"Authorization": f"Bearer {res.get_json()['token']}"}


def _create_course(client, headers, **overrides):
    body = {
        "name": "Algorithms",
        "university": "BME",
        "students": [{"neptun_code": "XYZ789", "name": "Bela"}, {"neptun_code": "ABC123", "name": "Anna"}],
    }
    body.update(overrides)
    return client.post("/courses", json=body, headers=headers)


def _upload(client, headers, course_id, *, on="2026-03-02", statuses=("Present", "Absent")):
    students = [
        {"student_name": "Anna", "neptun_code": "ABC123", "status": statuses[0]},
        {"student_name": "Bela", "neptun_code": "XYZ789", "status": statuses[1]},
    ]
    return client.post(
        "/attendance",
        data={
            "course_id": str(course_id),
            "date": on,
            "students": json.dumps(students),
            "attendanceImage": (io.BytesIO(b"\x89PNG sheet"), "sheet.png", "image/png"),
        },
        headers=headers,
        content_type="multipart/form-data",
    )


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.get_json() == {"status": "healthy"}


def test_unknown_route_is_json_404(client):
    res = client.get("/nope")
    assert res.status_code == 404
    assert "error" in res.get_json()


def test_register_login_and_profile(client):
    headers = _register(client)

    res = client.post("/auth/login", json={"email": "kata@example.com", "password": "password123"})
    assert res.status_code == 200
    assert "token" in res.get_json()

    res = client.get("/auth/user", headers=headers)
    assert res.status_code == 200
    assert res.get_json() == {"id": 1, "name": "Kata", "email": "kata@example.com", "university": ["BME"]}


def test_login_failures_share_one_body(client):
    _register(client)

    wrong = client.post("/auth/login", json={"email": "kata@example.com", "password": "nope-nope"})
    unknown = client.post("/auth/login", json={"email": "x@example.com", "password": "password123"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.get_json() == unknown.get_json() == {"error": "Authentication failed"}


def test_register_validation_errors_list_fields(client):
    res = client.post("/auth/register", json={"name": "", "email": "bad", "password": "x", "university": []})

    assert res.status_code == 400
    fields = {issue["field"] for issue in res.get_json()["errors"]}
    assert fields == {"name", "email", "password", "university"}


@pytest.mark.parametrize(
    "method, path",
    [("get", "/auth/user"), ("post", "/courses"), ("get", "/courses/1"), ("get", "/attendance/1")],
)
def test_missing_token(client, method, path):
    res = getattr(client, method)(path)
    assert res.status_code == 401
    assert res.get_json() == {"error": "Access denied, no token given"}


def test_bad_token(client):
    res = client.get("/auth/user", headers={"Authorization": "Bearer garbage"})
    assert res.status_code == 401
    assert res.get_json() == {"error": "Invalid token"}


def test_course_lifecycle(client):
    headers = _register(client)

    res = _create_course(client, headers, dayOfWeek="Monday", startTime="10:15", endTime="11:45")
    assert res.status_code == 201
    course_id = res.get_json()["id"]

    body = client.get(f"/courses/{course_id}", headers=headers).get_json()
    assert [s["name"] for s in body["students"]] == ["Anna", "Bela"]
    assert body["startTime"] == "10:15"

    res = client.put(f"/courses/{course_id}", json={"location": "Q building"}, headers=headers)
    assert res.status_code == 200
    assert res.get_json()["course"]["location"] == "Q building"

    assert [c["id"] for c in client.get("/auth/user/courses/BME", headers=headers).get_json()] == [course_id]
    assert client.get("/auth/user/courses/ELTE", headers=headers).status_code == 403
    assert client.get("/auth/user/courses/NOPE", headers=headers).status_code == 400

    res = client.delete(f"/courses/{course_id}", headers=headers)
    assert res.status_code == 200
    assert client.get(f"/courses/{course_id}", headers=headers).status_code == 404


def test_course_for_undeclared_university(client):
    headers = _register(client)

    res = _create_course(client, headers, university="ELTE", students=[{"neptun_code": "x", "name": ""}])

    assert res.status_code == 403
    assert res.get_json() == {"error": "User does not belong to the specified university"}


def test_foreign_course_is_forbidden_and_missing_is_not_found(client):
    owner = _register(client, "a@example.com")
    other = _register(client, "b@example.com")
    course_id = _create_course(client, owner).get_json()["id"]

    assert client.get(f"/courses/{course_id}", headers=other).status_code == 403
    assert client.put(f"/courses/{course_id}", json={"nope": 1}, headers=other).status_code == 403
    assert client.delete(f"/courses/{course_id}", headers=other).status_code == 403
    assert client.get("/courses/999", headers=other).get_json() == {"error": "Course not found"}


def test_attendance_upload_stats_and_image(client):
    headers = _register(client)
    course_id = _create_course(client, headers).get_json()["id"]

    res = _upload(client, headers, course_id)
    assert res.status_code == 201
    created = res.get_json()["attendance"]
    assert created["date"] == "2026-03-02"
    assert created["status"] == "uploaded"
    _upload(client, headers, course_id, on="2026-03-09", statuses=("Late", "Excused"))

    records = client.get(f"/attendance/course/{course_id}", headers=headers).get_json()
    assert [r["date"] for r in records] == ["2026-03-09", "2026-03-02"]
    image = records[1]["attendanceImage"]
    assert image["name"] == "Attendance-2026-03-02"

    res = client.get(f"/attendance/image/{image['id']}")
    assert res.status_code == 200
    assert res.data == b"\x89PNG sheet"
    assert res.mimetype == "image/png"

    stats = client.get(f"/courses/{course_id}/stats", headers=headers).get_json()
    assert stats["courseName"] == "Algorithms"
    assert stats["totalSessions"] == 2
    assert stats["students"] == [
        {"student_name": "Anna", "neptun_code": "ABC123", "totalSessions": 2, "attended": 1, "missed": 0, "late": 1, "excused": 0},
        {"student_name": "Bela", "neptun_code": "XYZ789", "totalSessions": 2, "attended": 0, "missed": 1, "late": 0, "excused": 1},
    ]


def test_attendance_upload_without_image(client):
    headers = _register(client)
    course_id = _create_course(client, headers).get_json()["id"]

    res = client.post(
        "/attendance",
        data={"course_id": str(course_id), "date": "2026-03-02", "students": "[]"},
        headers=headers,
        content_type="multipart/form-data",
    )

    assert res.status_code == 400
    assert res.get_json()["error"] == "Attendance image is required"


def test_attendance_delete_removes_image(client):
    headers = _register(client)
    course_id = _create_course(client, headers).get_json()["id"]
    attendance_id = _upload(client, headers, course_id).get_json()["attendance"]["id"]
    image_id = client.get(f"/attendance/{attendance_id}", headers=headers).get_json()["attendanceImage"]["id"]

    assert client.delete(f"/attendance/{attendance_id}", headers=headers).status_code == 200
    assert client.get(f"/attendance/{attendance_id}", headers=headers).status_code == 404
    assert client.get(f"/attendance/image/{image_id}").status_code == 404


def test_private_image_access(app, client):
    app.config["PUBLIC_IMAGE_ACCESS"] = False
    owner = _register(client, "a@example.com")
    other = _register(client, "b@example.com")
    course_id = _create_course(client, owner).get_json()["id"]
    attendance_id = _upload(client, owner, course_id).get_json()["attendance"]["id"]
    image_id = client.get(f"/attendance/{attendance_id}", headers=owner).get_json()["attendanceImage"]["id"]

    assert client.get(f"/attendance/image/{image_id}").status_code == 401
    assert client.get(f"/attendance/image/{image_id}", headers=other).status_code == 403
    assert client.get(f"/attendance/image/{image_id}", headers=owner).status_code == 200


def test_update_universities_reports_deleted(client):
    headers = _register(client, universities=("BME", "ELTE"))
    _create_course(client, headers, university="ELTE")

    res = client.put("/auth/user/university", json={"university": ["BME"]}, headers=headers)

    assert res.status_code == 200
    assert res.get_json() == {
        "message": "Universities updated successfully",
        "university": ["BME"],
        "deletedUniversities": ["ELTE"],
    }
    assert client.get("/auth/user/courses", headers=headers).get_json() == []


def test_universities_catalog(client):
    body = client.get("/universities").get_json()

    assert len(body) == len(UNIVERSITIES)
    assert {"code": "BME", "name": UNIVERSITIES["BME"]} in body


def test_attendance_upload_with_non_ascii_digit_course_id(client):
    headers = _register(client)
    _create_course(client, headers)

    res = _upload(client, headers, "\u00b2")

    assert res.status_code == 400
    assert res.get_json()["errors"] == [{"field": "course_id", "message": "Invalid course ID format"}]
