from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass

import structlog
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from assessmenttasks.core.config import Settings

from .base import Base

logger = structlog.get_logger()


@dataclass(slots=True)
class AppContext:
    """Store handles shared by every request for the lifetime of the process."""

    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> AppContext:
        return cls(
            engine=engine,
            session_factory=async_sessionmaker(engine, expire_on_commit=False),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> AppContext:
        engine = create_async_engine(
            settings.async_database_url,
            echo=False,
            pool_pre_ping=True,
        )
        return cls.from_engine(engine)

    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    async def create_schema(self) -> None:
        """Create missing tables directly from the ORM metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        await logger.ainfo("schema_created", tables=sorted(Base.metadata.tables))

    async def dispose(self) -> None:
        await self.engine.dispose()
