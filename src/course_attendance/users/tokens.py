from __future__ import annotations

from datetime import timedelta

from itsdangerous import BadSignature, URLSafeTimedSerializer

from ..core.constants import DEFAULT_TOKEN_VALIDITY_DAYS, TOKEN_SALT
from ..core.exceptions import AuthenticationError


class TokenSigner:
    """Issues and verifies signed, time-limited bearer tokens carrying the user id."""

    def __init__(self, secret: str, *, validity: timedelta = timedelta(days=DEFAULT_TOKEN_VALIDITY_DAYS)):
        if not secret:
            raise ValueError("Token secret must be configured")
        self._serializer = URLSafeTimedSerializer(secret, salt=TOKEN_SALT)
        self._max_age = int(validity.total_seconds())

    def issue(self, user_id: int) -> str:
        return self._serializer.dumps({"userId": int(user_id)})

    def verify(self, token: str) -> int:
        try:
            payload = self._serializer.loads(token, max_age=self._max_age)
            return int(payload["userId"])
        except (BadSignature, KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token")
