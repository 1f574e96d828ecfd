from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

from ..common.validators import (
    IssueCollector,
    reject_unknown_fields,
    require_email,
    require_list,
    require_min_length,
    require_non_empty,
    require_university,
)
from ..core.constants import MIN_PASSWORD_LENGTH


def _university_codes(issues: IssueCollector, value: Any, field_name: str = "university") -> Tuple[str, ...]:
    codes = issues.check(require_list, value, field_name, min_items=1, message="At least one university is required")
    if codes is None:
        return ()
    out: list[str] = []
    for i, code in enumerate(codes):
        if issues.check(require_university, code, f"{field_name}.{i}") is not None and code not in out:
            out.append(code)
    return tuple(out)


@dataclass(frozen=True)
class RegisterPayload:
    name: str
    email: str
    password: str
    universities: Tuple[str, ...]

    def __post_init__(self):
        issues = IssueCollector()
        name = issues.check(require_non_empty, self.name, "name")
        email = issues.check(require_email, self.email, "email")
        issues.check(require_min_length, self.password, "password", MIN_PASSWORD_LENGTH)
        universities = _university_codes(issues, self.universities)
        issues.raise_if_any()

        object.__setattr__(self, "name", name)
        object.__setattr__(self, "email", email)
        object.__setattr__(self, "universities", universities)

    @classmethod
    def from_json(cls, data: Any) -> "RegisterPayload":
        reject_unknown_fields(data, {"name", "email", "password", "university"})
        return cls(
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
            universities=data.get("university"),
        )


@dataclass(frozen=True)
class LoginPayload:
    email: str
    password: str

    def __post_init__(self):
        issues = IssueCollector()
        email = issues.check(require_email, self.email, "email")
        issues.check(require_non_empty, self.password, "password")
        issues.raise_if_any()
        object.__setattr__(self, "email", email)

    @classmethod
    def from_json(cls, data: Any) -> "LoginPayload":
        reject_unknown_fields(data, {"email", "password"})
        return cls(email=data.get("email"), password=data.get("password"))


@dataclass(frozen=True)
class UniversityAdd:
    university: str

    def __post_init__(self):
        require_university(self.university)

    @classmethod
    def from_json(cls, data: Any) -> "UniversityAdd":
        reject_unknown_fields(data, {"university"})
        return cls(university=data.get("university"))


@dataclass(frozen=True)
class UniversitiesReplace:
    universities: Tuple[str, ...]

    def __post_init__(self):
        issues = IssueCollector()
        universities = _university_codes(issues, self.universities)
        issues.raise_if_any()
        object.__setattr__(self, "universities", universities)

    @classmethod
    def from_json(cls, data: Any) -> "UniversitiesReplace":
        reject_unknown_fields(data, {"university"})
        return cls(universities=data.get("university"))
