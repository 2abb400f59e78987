"""Structured JSON error bodies for the public API."""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger()


class ApiError(Exception):
    """An error that is rendered as ``{"message": ..., "error": {...}}``.

    ``error`` is only included when a ``code`` is given. Internal exception
    details never reach the body.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        code: str | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code
        self.detail = detail

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.message}
        if self.code is not None:
            body["error"] = {"code": self.code, "message": self.detail or self.message}
        return body


def persistence_failure(message: str) -> ApiError:
    return ApiError(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        message,
        code="persistence_error",
        detail="The data store could not complete the operation",
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        await logger.ainfo("request_validation_failed", errors=len(exc.errors()))
        return JSONResponse(
            status_code=422,
            content={
                "message": "Invalid request body",
                "error": {
                    "code": "validation_error",
                    "message": "Request body did not match the expected structure",
                    "details": jsonable_encoder(exc.errors()),
                },
            },
        )
