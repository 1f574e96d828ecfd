from __future__ import annotations

import logging
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Any, Callable, ContextManager, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import AuthenticationError, ValidationError
from ..courses.cascade import CourseCascade
from ..courses.repository import CourseRepository
from .model import User
from .repository import UserRepository
from .schema import LoginPayload, RegisterPayload, UniversitiesReplace, UniversityAdd
from .tokens import TokenSigner

logger = logging.getLogger(__name__)

Transaction = Callable[[], ContextManager[None]]


@dataclass(frozen=True)
class UniversitiesChange:
    universities: tuple[str, ...]
    deleted_universities: tuple[str, ...]


class AuthService:
    """Use cases: register, login and bearer token resolution."""

    def __init__(self, users: UserRepository, tokens: TokenSigner):
        self._users = users
        self._tokens = tokens

    def register(self, data: Any) -> str:
        payload = RegisterPayload.from_json(data)

        if self._users.get_by_email(payload.email):
            raise ValidationError.for_field("email", "Email is already in use")

        user_id = self._users.create_user(
            name=payload.name,
            email=payload.email,
            password_hash=generate_password_hash(payload.password),
            universities=payload.universities,
        )
        logger.info("Registered user %s", user_id)
        return self._tokens.issue(user_id)

    def login(self, data: Any) -> str:
        payload = LoginPayload.from_json(data)

        user = self._users.get_by_email(payload.email)
        if not user:
            raise AuthenticationError("Authentication failed")

        try:
            ok = check_password_hash(user.password_hash, payload.password)
        except ValueError:
            # e.g. corrupted or unsupported hash values
            ok = False

        if not ok:
            logger.info("Failed login for user %s", user.user_id)
            raise AuthenticationError("Authentication failed")

        return self._tokens.issue(user.user_id)

    def resolve_token(self, authorization: Optional[str]) -> User:
        """Map an `Authorization: Bearer <token>` header to the user, failing closed."""

        if not authorization:
            raise AuthenticationError("Access denied, no token given")

        scheme, _, token = authorization.strip().partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise AuthenticationError("Invalid token")

        user = self._users.get_by_id(self._tokens.verify(token.strip()))
        if not user:
            raise AuthenticationError("Authentication failed")
        return user


class UserService:
    """Use cases: profile and the user's university list."""

    def __init__(
        self,
        users: UserRepository,
        courses: CourseRepository,
        *,
        cascade: CourseCascade,
        transaction: Transaction = nullcontext,
    ):
        self._users = users
        self._courses = courses
        self._cascade = cascade
        self._transaction = transaction

    def _require_user(self, requester_id: Optional[int]) -> User:
        user = self._users.get_by_id(requester_id) if requester_id is not None else None
        if not user:
            raise AuthenticationError("Authentication failed")
        return user

    def profile(self, requester_id: Optional[int]) -> User:
        return self._require_user(requester_id)

    def add_university(self, requester_id: Optional[int], data: Any) -> tuple[str, ...]:
        user = self._require_user(requester_id)
        payload = UniversityAdd.from_json(data)

        if payload.university in user.universities:
            raise ValidationError.for_field("university", "University already added")

        universities = (*user.universities, payload.university)
        self._users.set_universities(user.user_id, universities)
        return universities

    def update_universities(self, requester_id: Optional[int], data: Any) -> UniversitiesChange:
        """Replace the university list; every dropped university takes its courses along."""

        user = self._require_user(requester_id)
        payload = UniversitiesReplace.from_json(data)

        removed = tuple(code for code in user.universities if code not in payload.universities)
        with self._transaction():
            for code in removed:
                for course in self._courses.list_for_user(user.user_id, university=code):
                    self._cascade.delete_course(course.course_id)
            self._users.set_universities(user.user_id, payload.universities)

        if removed:
            logger.info("User %s removed universities %s", user.user_id, ", ".join(removed))
        return UniversitiesChange(universities=payload.universities, deleted_universities=removed)
