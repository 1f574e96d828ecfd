from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load(self, where: str, value) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, name, email, password_hash
                FROM users
                WHERE {where}=%s
                """,
                (value,),
            )
            row = fetchone(cur)
            if not row:
                return None

            cur.execute(
                "SELECT university FROM user_universities WHERE user_id=%s ORDER BY position",
                (row["user_id"],),
            )
            universities = tuple(r["university"] for r in fetchall(cur))
            return User(
                user_id=int(row["user_id"]),
                name=row["name"],
                email=row["email"],
                password_hash=row["password_hash"],
                universities=universities,
            )

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._load("user_id", user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._load("email", email)

    def create_user(self, *, name: str, email: str, password_hash: str, universities: Sequence[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    "INSERT INTO users(name, email, password_hash) VALUES(%s,%s,%s)",
                    (name, email, password_hash),
                )
            except mysql.connector.IntegrityError:
                raise ValidationError.for_field("email", "Email is already in use")
            user_id = int(cur.lastrowid)
            self._insert_universities(cur, user_id, universities)
            return user_id

    def set_universities(self, user_id: int, universities: Sequence[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 FROM users WHERE user_id=%s", (user_id,))
            if not fetchone(cur):
                return False
            cur.execute("DELETE FROM user_universities WHERE user_id=%s", (user_id,))
            self._insert_universities(cur, user_id, universities)
            return True

    @staticmethod
    def _insert_universities(cur, user_id: int, universities: Sequence[str]) -> None:
        if not universities:
            return
        cur.executemany(
            "INSERT INTO user_universities(user_id, university, position) VALUES(%s,%s,%s)",
            [(user_id, code, pos) for pos, code in enumerate(universities)],
        )
