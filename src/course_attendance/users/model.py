from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class User:
    """Domain entity: a teacher who owns courses.

    Plain data object, no DB access code here.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    universities: Tuple[str, ...] = ()

    def to_public_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "university": list(self.universities),
        }
