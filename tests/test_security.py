# tests/test_security.py
"""Tests for password hashing and session tokens."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from blog_platform.config import settings
from blog_platform.utils.exceptions import InvalidToken, ValidationError
from blog_platform.utils.security import (
    create_access_token,
    decode_token,
    hash_password,
    validate_password_strength,
    verify_access_token,
    verify_password,
)


def test_hash_password_is_salted_and_verifiable() -> None:
    first = hash_password("secret123")
    second = hash_password("secret123")

    assert first != second
    assert first != "secret123"
    assert verify_password("secret123", first)
    assert not verify_password("wrong-password", first)


def test_token_roundtrip_returns_user_id() -> None:
    token = create_access_token(42)
    assert verify_access_token(token) == 42


def test_token_expires_after_thirty_days() -> None:
    payload = decode_token(create_access_token(7))
    assert payload is not None
    lifetime = datetime.fromtimestamp(payload["exp"], tz=timezone.utc) - datetime.now(timezone.utc)
    assert timedelta(days=29, hours=23) < lifetime <= timedelta(days=30)


def test_expired_token_is_rejected() -> None:
    token = create_access_token(1, expires_delta=timedelta(seconds=-5))
    with pytest.raises(InvalidToken):
        verify_access_token(token)


def test_token_signed_with_other_secret_is_rejected() -> None:
    token = jwt.encode({"sub": "1"}, "another-secret", algorithm=settings.ALGORITHM)
    with pytest.raises(InvalidToken):
        verify_access_token(token)


def test_garbage_token_is_rejected() -> None:
    with pytest.raises(InvalidToken):
        verify_access_token("not-a-jwt")


def test_token_with_non_numeric_subject_is_rejected() -> None:
    token = jwt.encode({"sub": "abc"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    with pytest.raises(InvalidToken):
        verify_access_token(token)


def test_short_password_is_rejected() -> None:
    with pytest.raises(ValidationError):
        validate_password_strength("12345")
    validate_password_strength("123456")
