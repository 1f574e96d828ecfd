from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, StudentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Attendance, ImageInfo, StudentAttendance
from .repository import AttendanceRepository

_SELECT = """
    SELECT a.attendance_id, a.course_id, a.date, a.image_id, a.status,
           i.name AS image_name, i.description AS image_description
    FROM attendances a
    LEFT JOIN images i ON i.image_id = a.image_id
"""


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _students_by_attendance(cur, attendance_ids: Sequence[int]) -> dict[int, list[StudentAttendance]]:
        out: dict[int, list[StudentAttendance]] = {aid: [] for aid in attendance_ids}
        if not attendance_ids:
            return out
        cur.execute(
            f"""
            SELECT attendance_id, student_name, neptun_code, status
            FROM attendance_students
            WHERE attendance_id IN ({in_clause(attendance_ids)})
            ORDER BY attendance_id, position
            """,
            tuple(attendance_ids),
        )
        for r in fetchall(cur):
            out[int(r["attendance_id"])].append(
                StudentAttendance(
                    student_name=r["student_name"],
                    neptun_code=r["neptun_code"],
                    status=StudentStatus(r["status"]),
                )
            )
        return out

    def _hydrate(self, cur, rows: Sequence[dict]) -> list[Attendance]:
        students = self._students_by_attendance(cur, [int(r["attendance_id"]) for r in rows])
        out: list[Attendance] = []
        for r in rows:
            image_id = int(r["image_id"]) if r.get("image_id") is not None else None
            image = (
                ImageInfo(image_id=image_id, name=r["image_name"], description=r.get("image_description"))
                if image_id is not None and r.get("image_name") is not None
                else None
            )
            out.append(
                Attendance(
                    attendance_id=int(r["attendance_id"]),
                    course_id=int(r["course_id"]),
                    date=r["date"],
                    image_id=image_id,
                    status=AttendanceStatus(r["status"]),
                    students=tuple(students[int(r["attendance_id"])]),
                    image=image,
                )
            )
        return out

    def _get_one(self, where: str, value) -> Optional[Attendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {where}=%s", (value,))
            row = fetchone(cur)
            if not row:
                return None
            return self._hydrate(cur, [row])[0]

    def get_by_id(self, attendance_id: int) -> Optional[Attendance]:
        return self._get_one("a.attendance_id", attendance_id)

    def get_by_image_id(self, image_id: int) -> Optional[Attendance]:
        return self._get_one("a.image_id", image_id)

    def list_for_course(self, course_id: int) -> Sequence[Attendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE a.course_id=%s ORDER BY a.date DESC, a.attendance_id DESC", (course_id,))
            return self._hydrate(cur, fetchall(cur))

    def create_attendance(
        self,
        *,
        course_id: int,
        session_date: date,
        image_id: Optional[int],
        status: AttendanceStatus,
        students: Sequence[StudentAttendance],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO attendances(course_id, date, image_id, status) VALUES(%s,%s,%s,%s)",
                (course_id, session_date, image_id, status.value),
            )
            attendance_id = int(cur.lastrowid)
            self._insert_students(cur, attendance_id, students)
            return attendance_id

    def update_attendance(self, attendance_id: int, changes: dict) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 FROM attendances WHERE attendance_id=%s", (attendance_id,))
            if not fetchone(cur):
                return False

            if "date" in changes:
                cur.execute("UPDATE attendances SET date=%s WHERE attendance_id=%s", (changes["date"], attendance_id))
            if "status" in changes:
                cur.execute(
                    "UPDATE attendances SET status=%s WHERE attendance_id=%s",
                    (changes["status"].value, attendance_id),
                )
            if "students" in changes:
                cur.execute("DELETE FROM attendance_students WHERE attendance_id=%s", (attendance_id,))
                self._insert_students(cur, attendance_id, changes["students"])
            return True

    def delete_by_id(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendances WHERE attendance_id=%s", (attendance_id,))
            return cur.rowcount > 0

    def delete_for_course(self, course_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendances WHERE course_id=%s", (course_id,))
            return int(cur.rowcount)

    @staticmethod
    def _insert_students(cur, attendance_id: int, students: Sequence[StudentAttendance]) -> None:
        if not students:
            return
        cur.executemany(
            """
            INSERT INTO attendance_students(attendance_id, position, student_name, neptun_code, status)
            VALUES(%s,%s,%s,%s,%s)
            """,
            [(attendance_id, pos, s.student_name, s.neptun_code, s.status.value) for pos, s in enumerate(students)],
        )
