from __future__ import annotations

from datetime import timedelta

from httpx import AsyncClient
from sqlalchemy import text

from assessmenttasks.core.auth import create_access_token
from assessmenttasks.infrastructure.db import AppContext


def auth_headers(
    user_id: str = "user-1",
    email: str = "user@example.com",
    expires_delta: timedelta | None = None,
) -> dict[str, str]:
    token = create_access_token(user_id, email=email, expires_delta=expires_delta)
    return {"Authorization": f"Bearer {token}"}


async def register_and_login(
    client: AsyncClient,
    *,
    email: str = "ada@example.com",
    password: str = "correct horse",
    username: str = "ada",
) -> tuple[str, str]:
    """Register a user and log in, returning ``(user_id, token)``."""
    registered = await client.post(
        "/register", json={"username": username, "password": password, "email": email}
    )
    assert registered.status_code == 201, registered.text
    login = await client.post("/login", json={"email": email, "password": password})
    assert login.status_code == 200, login.text
    return registered.json()["userId"], login.json()["token"]


async def drop_table(context: AppContext, name: str) -> None:
    """Drop a table underneath the app so later statements fail in the store."""
    async with context.engine.begin() as conn:
        await conn.execute(text(f"DROP TABLE {name}"))
