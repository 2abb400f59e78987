from datetime import timedelta

import jwt
import pytest

from assessmenttasks.core.auth import (
    TokenError,
    TokenExpiredError,
    create_access_token,
    decode_access_token,
)
from assessmenttasks.core.config import get_settings


def test_create_and_decode_token_roundtrip() -> None:
    token = create_access_token("user-123", email="user@example.com")

    payload = decode_access_token(token)

    assert payload["sub"] == "user-123"
    assert payload["email"] == "user@example.com"
    assert payload["exp"] - payload["iat"] == get_settings().access_token_ttl_seconds


def test_expired_token_is_rejected_as_expired() -> None:
    token = create_access_token(
        "user-123", email="user@example.com", expires_delta=timedelta(seconds=-30)
    )

    with pytest.raises(TokenExpiredError):
        decode_access_token(token)


def test_token_signed_with_other_secret_is_invalid() -> None:
    token = create_access_token("user-123", email="user@example.com", secret="another-secret")

    with pytest.raises(TokenError) as exc_info:
        decode_access_token(token)

    assert not isinstance(exc_info.value, TokenExpiredError)


def test_explicit_secret_roundtrip() -> None:
    token = create_access_token("user-123", email="user@example.com", secret="s3cret")

    assert decode_access_token(token, secret="s3cret")["sub"] == "user-123"


def test_garbage_token_is_invalid() -> None:
    with pytest.raises(TokenError):
        decode_access_token("not-a-jwt")


def test_token_without_subject_is_invalid() -> None:
    settings = get_settings()
    token = jwt.encode(
        {"email": "user@example.com", "exp": 4102444800},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )

    with pytest.raises(TokenError):
        decode_access_token(token)
