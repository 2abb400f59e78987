from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from assessmenttasks.core.config import get_settings


class TokenError(Exception):
    """Raised when a token cannot be decoded or validated."""


class TokenExpiredError(TokenError):
    """Raised when a token carries a valid signature but is past its expiry."""


def create_access_token(
    user_id: str,
    *,
    email: str,
    secret: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Generate a signed JWT carrying the caller's identity claims."""
    settings = get_settings()

    now = datetime.now(UTC)
    ttl = expires_delta if expires_delta is not None else timedelta(
        seconds=settings.access_token_ttl_seconds
    )
    payload = {
        "sub": user_id,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
        "iss": settings.app_name,
    }

    return jwt.encode(payload, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, *, secret: str | None = None) -> dict[str, Any]:
    """Decode and validate a JWT access token.

    Raises ``TokenExpiredError`` when the signature checks out but ``exp`` has
    passed, and ``TokenError`` for every other failure.
    """
    settings = get_settings()

    try:
        payload = jwt.decode(
            token,
            secret or settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpiredError("Token expired") from exc
    except jwt.PyJWTError as exc:  # pragma: no cover - third-party raises numerous subclasses
        raise TokenError("Invalid token") from exc

    return payload
