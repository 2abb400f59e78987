from __future__ import annotations

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from assessmenttasks.api.deps import Caller, get_app_context, require_access
from assessmenttasks.core.config import Settings, get_settings
from assessmenttasks.infrastructure.db import AppContext

router = APIRouter(tags=["Observability"])
logger = structlog.get_logger()


async def check_database(context: AppContext) -> dict:
    """Run a trivial query against the configured database."""
    try:
        async with context.session_factory() as session:
            await session.execute(text("SELECT 1"))
            return {"status": "ok"}
    except (SQLAlchemyError, OSError) as exc:
        await logger.awarning("database_check_failed", error=type(exc).__name__)
        return {"status": "error", "message": type(exc).__name__}


@router.get("/", summary="Greeting")
async def root(_: Caller = Depends(require_access("GET", "/"))) -> dict:
    return {"success": "Hello World"}


@router.get("/health", summary="Service health check")
async def health_check(
    context: AppContext = Depends(get_app_context),
    settings: Settings = Depends(get_settings),
    _: Caller = Depends(require_access("GET", "/health")),
) -> dict:
    """Return basic service and datastore status information."""
    database_status = await check_database(context)

    payload = {
        "service": settings.app_name,
        "version": settings.version,
        "status": "ok" if database_status["status"] == "ok" else "degraded",
        "timestamp": datetime.now(UTC).isoformat(),
        "datastores": {"database": database_status},
    }
    await logger.ainfo("health_check", **payload)
    return payload
