from __future__ import annotations

from datetime import time
from typing import Optional, Sequence

from ..core.enums import DayOfWeek
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, normalize_mysql_time
from .model import Course, Student
from .repository import CourseRepository

_COLUMNS = "course_id, user_id, name, university, day_of_week, start_time, end_time, location"

# Course field name -> column, for partial updates.
_UPDATABLE = {
    "name": "name",
    "university": "university",
    "day_of_week": "day_of_week",
    "start_time": "start_time",
    "end_time": "end_time",
    "location": "location",
}


class MySQLCourseRepository(CourseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_course(row: dict, students: Sequence[Student]) -> Course:
        return Course(
            course_id=int(row["course_id"]),
            user_id=int(row["user_id"]),
            name=row["name"],
            university=row["university"],
            students=tuple(students),
            day_of_week=DayOfWeek(row["day_of_week"]) if row.get("day_of_week") else None,
            start_time=normalize_mysql_time(row.get("start_time")),
            end_time=normalize_mysql_time(row.get("end_time")),
            location=row.get("location"),
        )

    @staticmethod
    def _students_by_course(cur, course_ids: Sequence[int]) -> dict[int, list[Student]]:
        out: dict[int, list[Student]] = {cid: [] for cid in course_ids}
        if not course_ids:
            return out
        cur.execute(
            f"""
            SELECT course_id, neptun_code, name
            FROM course_students
            WHERE course_id IN ({in_clause(course_ids)})
            ORDER BY course_id, position
            """,
            tuple(course_ids),
        )
        for r in fetchall(cur):
            out[int(r["course_id"])].append(Student(neptun_code=r["neptun_code"], name=r["name"]))
        return out

    def get_by_id(self, course_id: int) -> Optional[Course]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM courses WHERE course_id=%s", (course_id,))
            row = fetchone(cur)
            if not row:
                return None
            students = self._students_by_course(cur, [int(row["course_id"])])
            return self._to_course(row, students[int(row["course_id"])])

    def list_for_user(self, user_id: int, *, university: Optional[str] = None) -> Sequence[Course]:
        with db_cursor(self._conn_factory) as (_, cur):
            sql = f"SELECT {_COLUMNS} FROM courses WHERE user_id=%s"
            params: list = [user_id]
            if university is not None:
                sql += " AND university=%s"
                params.append(university)
            cur.execute(sql + " ORDER BY name, course_id", tuple(params))
            rows = fetchall(cur)
            students = self._students_by_course(cur, [int(r["course_id"]) for r in rows])
            return [self._to_course(r, students[int(r["course_id"])]) for r in rows]

    def create_course(
        self,
        *,
        user_id: int,
        name: str,
        university: str,
        students: Sequence[Student],
        day_of_week: Optional[DayOfWeek] = None,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        location: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO courses(user_id, name, university, day_of_week, start_time, end_time, location)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    user_id,
                    name,
                    university,
                    day_of_week.value if day_of_week else None,
                    start_time,
                    end_time,
                    location,
                ),
            )
            course_id = int(cur.lastrowid)
            self._insert_students(cur, course_id, students)
            return course_id

    def update_course(self, course_id: int, changes: dict) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 FROM courses WHERE course_id=%s", (course_id,))
            if not fetchone(cur):
                return False

            assignments = []
            params: list = []
            for key, column in _UPDATABLE.items():
                if key in changes:
                    value = changes[key]
                    assignments.append(f"{column}=%s")
                    params.append(value.value if isinstance(value, DayOfWeek) else value)
            if assignments:
                cur.execute(
                    f"UPDATE courses SET {', '.join(assignments)} WHERE course_id=%s",
                    (*params, course_id),
                )

            if "students" in changes:
                cur.execute("DELETE FROM course_students WHERE course_id=%s", (course_id,))
                self._insert_students(cur, course_id, changes["students"])
            return True

    def delete_by_id(self, course_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM courses WHERE course_id=%s", (course_id,))
            return cur.rowcount > 0

    @staticmethod
    def _insert_students(cur, course_id: int, students: Sequence[Student]) -> None:
        if not students:
            return
        cur.executemany(
            "INSERT INTO course_students(course_id, position, neptun_code, name) VALUES(%s,%s,%s,%s)",
            [(course_id, pos, s.neptun_code, s.name) for pos, s in enumerate(students)],
        )
