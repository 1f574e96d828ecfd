from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from functools import partial
from typing import Callable, ContextManager

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.mysql_image_repository import MySQLImageRepository
from .attendance.repository import AttendanceRepository, ImageRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_MAX_IMAGE_BYTES, DEFAULT_TOKEN_VALIDITY_DAYS
from .courses.cascade import CourseCascade
from .courses.mysql_course_repository import MySQLCourseRepository
from .courses.ownership import OwnershipGate
from .courses.repository import CourseRepository
from .courses.service import CourseService
from .database.connection import DBConfig, DatabaseConnection
from .database.mysql_base import transaction
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .users.tokens import TokenSigner


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    courses_repo: CourseRepository
    attendance_repo: AttendanceRepository
    images_repo: ImageRepository

    auth_service: AuthService
    user_service: UserService
    course_service: CourseService
    attendance_service: AttendanceService


def wire_container(
    *,
    users: UserRepository,
    courses: CourseRepository,
    attendance: AttendanceRepository,
    images: ImageRepository,
    tokens: TokenSigner,
    transaction: Callable[[], ContextManager[None]],
    max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
) -> Container:
    """Builds the services over any repository implementation (MySQL or in-memory)."""

    gate = OwnershipGate(courses, attendance)
    cascade = CourseCascade(courses, attendance, images)

    return Container(
        users_repo=users,
        courses_repo=courses,
        attendance_repo=attendance,
        images_repo=images,
        auth_service=AuthService(users, tokens),
        user_service=UserService(users, courses, cascade=cascade, transaction=transaction),
        course_service=CourseService(courses, users, attendance, gate=gate, cascade=cascade, transaction=transaction),
        attendance_service=AttendanceService(
            attendance,
            images,
            gate=gate,
            transaction=transaction,
            max_image_bytes=max_image_bytes,
        ),
    )


def build_container(
    *,
    db_config: dict,
    token_secret: str,
    token_validity_days: int = DEFAULT_TOKEN_VALIDITY_DAYS,
    connect_timeout: int = 10,
    statement_timeout_ms: int = 0,
    max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        connect_timeout=int(connect_timeout),
        statement_timeout_ms=int(statement_timeout_ms),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire_container(
        users=MySQLUserRepository(conn),
        courses=MySQLCourseRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        images=MySQLImageRepository(conn),
        tokens=TokenSigner(token_secret, validity=timedelta(days=int(token_validity_days))),
        transaction=partial(transaction, conn),
        max_image_bytes=max_image_bytes,
    )
