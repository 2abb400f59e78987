from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from assessmenttasks.api.main import create_app
from assessmenttasks.core.config import Settings, get_settings
from assessmenttasks.infrastructure.db import AppContext


@pytest.fixture()
def settings() -> Settings:
    return get_settings().model_copy(update={"record_assessment_owner": False})


@pytest.fixture()
async def app_context(tmp_path: Path) -> AsyncIterator[AppContext]:
    """A fresh SQLite database per test, with the schema already created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    context = AppContext.from_engine(engine)
    await context.create_schema()
    yield context
    await context.dispose()


@pytest.fixture()
def app(app_context: AppContext, settings: Settings) -> Iterator[FastAPI]:
    application = create_app(settings=settings, context=app_context)
    application.dependency_overrides[get_settings] = lambda: settings
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client bound to the app, sharing the test's event loop."""
    transport = ASGITransport(app=app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture()
async def db(app_context: AppContext) -> AsyncIterator[AsyncSession]:
    """Provide a database session for tests that need direct DB access."""
    async with app_context.session_factory() as session:
        yield session


@pytest.fixture()
def offline_client(settings: Settings) -> Iterator[TestClient]:
    """Synchronous client for routes that never touch the database."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    application = create_app(settings=settings, context=AppContext.from_engine(engine))
    with TestClient(application) as client:
        yield client
