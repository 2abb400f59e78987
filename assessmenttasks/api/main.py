from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import Response
from structlog.contextvars import bind_contextvars, clear_contextvars

from assessmenttasks.api.errors import register_error_handlers
from assessmenttasks.api.routes import register_routes
from assessmenttasks.core.config import Settings, get_settings
from assessmenttasks.core.logging import setup_logging
from assessmenttasks.infrastructure.db import AppContext

logger = structlog.get_logger()


def create_app(settings: Settings | None = None, context: AppContext | None = None) -> FastAPI:
    """Application factory for the public API.

    When ``context`` is given it is used as-is and left open on shutdown;
    otherwise one is built from settings at startup and disposed at shutdown.
    """
    settings = settings or get_settings()
    setup_logging(
        settings.log_level, service=settings.app_name, environment=settings.environment
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = getattr(app.state, "context", None) is None
        if owned:
            app.state.context = AppContext.from_settings(settings)
        if settings.db_auto_create:
            await app.state.context.create_schema()

        await logger.ainfo(
            "service_startup",
            service=settings.app_name,
            environment=settings.environment,
            version=settings.version,
        )
        try:
            yield
        finally:
            if owned:
                await app.state.context.dispose()
                app.state.context = None
            await logger.ainfo("service_shutdown", service=settings.app_name)

    app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    register_routes(app)

    @app.middleware("http")
    async def correlation_id_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get("x-request-id", str(uuid4()))
        bind_contextvars(
            request_id=request_id,
            path=str(request.url.path),
            method=request.method,
        )
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_contextvars()

    return app


app = create_app()
