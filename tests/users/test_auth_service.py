from __future__ import annotations

from datetime import timedelta

import pytest

from course_attendance.core.exceptions import AuthenticationError, ValidationError
from course_attendance.users.service import AuthService
from course_attendance.users.tokens import TokenSigner


def _register_json(**overrides):
    data = {"name": "Kata", "email": "kata@example.com", "password": "password123", "university": ["BME"]}
    data.update(overrides)
    return data


def test_register_then_login_issue_tokens_for_the_same_user(container, store, tokens):
    token = container.auth_service.register(_register_json())
    user = store.users.get_by_email("kata@example.com")

    assert tokens.verify(token) == user.user_id
    assert user.password_hash != "password123"
    assert user.universities == ("BME",)

    login_token = container.auth_service.login({"email": "kata@example.com", "password": "password123"})
    assert tokens.verify(login_token) == user.user_id


def test_register_normalizes_email_and_dedupes_universities(container, store):
    container.auth_service.register(_register_json(email="  Kata@Example.COM ", university=["BME", "ELTE", "BME"]))

    user = store.users.get_by_email("kata@example.com")
    assert user.universities == ("BME", "ELTE")


def test_register_duplicate_email(container):
    container.auth_service.register(_register_json())

    with pytest.raises(ValidationError, match="Email is already in use"):
        container.auth_service.register(_register_json(name="Other"))


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"name": ""}, "name"),
        ({"email": "not-an-email"}, "email"),
        ({"password": "short"}, "password"),
        ({"university": []}, "university"),
        ({"university": ["NOPE"]}, "university.0"),
        ({"role": "admin"}, "role"),
    ],
)
def test_register_rejects_invalid_payload(container, store, overrides, field):
    with pytest.raises(ValidationError) as exc:
        container.auth_service.register(_register_json(**overrides))

    assert field in [issue["field"] for issue in exc.value.issues]
    assert store.users.items == {}


def test_login_failures_are_indistinguishable(container):
    container.auth_service.register(_register_json())

    with pytest.raises(AuthenticationError) as wrong_password:
        container.auth_service.login({"email": "kata@example.com", "password": "wrong-password"})
    with pytest.raises(AuthenticationError) as unknown_email:
        container.auth_service.login({"email": "nobody@example.com", "password": "password123"})

    assert str(wrong_password.value) == str(unknown_email.value) == "Authentication failed"


def test_resolve_token(container, tokens, make_user):
    user_id = make_user()

    assert container.auth_service.resolve_token(f"Bearer {tokens.issue(user_id)}").user_id == user_id


@pytest.mark.parametrize(
    "header, message",
    [
        (None, "Access denied, no token given"),
        ("", "Access denied, no token given"),
        ("Basic abc", "Invalid token"),
        ("Bearer ", "Invalid token"),
        ("Bearer not-a-token", "Invalid token"),
    ],
)
def test_resolve_token_rejects(container, header, message):
    with pytest.raises(AuthenticationError, match=message):
        container.auth_service.resolve_token(header)


def test_token_signed_with_another_secret_is_invalid(container, make_user):
    forged = TokenSigner("other-secret").issue(make_user())

    with pytest.raises(AuthenticationError, match="Invalid token"):
        container.auth_service.resolve_token(f"Bearer {forged}")


def test_expired_token_is_invalid(store, make_user):
    user_id = make_user()
    expired = TokenSigner("test-secret", validity=timedelta(seconds=-1))
    service = AuthService(store.users, expired)

    with pytest.raises(AuthenticationError, match="Invalid token"):
        service.resolve_token(f"Bearer {expired.issue(user_id)}")


def test_token_of_deleted_user_fails_authentication(container, store, tokens, make_user):
    user_id = make_user()
    token = tokens.issue(user_id)
    del store.users.items[user_id]

    with pytest.raises(AuthenticationError, match="Authentication failed"):
        container.auth_service.resolve_token(f"Bearer {token}")
