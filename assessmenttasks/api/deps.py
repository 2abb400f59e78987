from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from assessmenttasks.api.errors import ApiError
from assessmenttasks.api.policies import RouteAccess, policy_for
from assessmenttasks.core.auth import TokenError, TokenExpiredError, decode_access_token
from assessmenttasks.domain import User
from assessmenttasks.infrastructure.db import AppContext

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(slots=True)
class Caller:
    """The resolved identity of a request together with the route's access policy."""

    user: User | None
    access: RouteAccess

    @property
    def owner_scope(self) -> str | None:
        """User id that stored records must be owned by, if the route checks ownership."""
        if self.access.requires_ownership and self.user is not None:
            return self.user.user_id
        return None


def get_app_context(request: Request) -> AppContext:
    return request.app.state.context


async def get_db_session(
    context: AppContext = Depends(get_app_context),  # noqa: B008
) -> AsyncIterator[AsyncSession]:
    """Provide an async SQLAlchemy session for API handlers."""
    async for session in context.session():
        yield session


def _credential_from_header(request: Request) -> tuple[str, str] | None:
    """Split ``Authorization`` into ``(scheme, credential)``.

    Returns ``None`` when the header is missing or carries no credential part.
    """
    header = request.headers.get("authorization", "")
    parts = header.split()
    if len(parts) < 2:
        return None
    return parts[0], parts[1]


async def get_current_user(
    request: Request,
    _: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
) -> User:
    """Resolve the authenticated user from a bearer token.

    No credential is a 401. A credential that fails verification, including
    one sent under a scheme other than Bearer, is a 403.
    """
    credential = _credential_from_header(request)
    if credential is None:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Missing bearer token", code="auth_absent")

    scheme, token = credential
    if scheme.lower() != "bearer":
        raise ApiError(
            status.HTTP_403_FORBIDDEN, "Unsupported authorization scheme", code="auth_invalid"
        )

    try:
        payload = decode_access_token(token)
    except TokenExpiredError as exc:
        raise ApiError(status.HTTP_403_FORBIDDEN, str(exc), code="auth_expired") from exc
    except TokenError as exc:
        raise ApiError(status.HTTP_403_FORBIDDEN, str(exc), code="auth_invalid") from exc

    return User(user_id=payload["sub"], email=payload.get("email", ""))


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
) -> User | None:
    """Resolve the caller when a valid token is sent, without ever rejecting."""
    if credentials is None:
        return None
    try:
        payload = decode_access_token(credentials.credentials)
    except TokenError:
        return None
    return User(user_id=payload["sub"], email=payload.get("email", ""))


def require_access(method: str, path: str) -> Callable[..., object]:
    """Dependency factory applying the access policy declared for a route."""
    access = policy_for(method, path)

    if access.requires_auth:

        async def gated(user: User = Depends(get_current_user)) -> Caller:  # noqa: B008
            return Caller(user=user, access=access)

        return gated

    async def open_route(user: User | None = Depends(get_optional_user)) -> Caller:  # noqa: B008
        return Caller(user=user, access=access)

    return open_route
