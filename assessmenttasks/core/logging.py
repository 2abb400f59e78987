from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.typing import EventDict, Processor

_CONFIGURED = False


def service_identity(service: str, environment: str) -> Processor:
    """Return a processor stamping every event with the emitting service."""

    def add_identity(_: Any, __: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service)
        event_dict.setdefault("environment", environment)
        return event_dict

    return add_identity


def setup_logging(
    level: int | str = logging.INFO,
    *,
    service: str = "assessmenttasks",
    environment: str = "local",
) -> None:
    """Configure structlog to emit one JSON object per line on stdout.

    Request-scoped values bound through ``structlog.contextvars`` (request id,
    path, method) are merged into each line. Safe to call more than once.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logging.basicConfig(level=level, format="%(message)s", stream=sys.stdout)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            service_identity(service, environment),
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )

    _CONFIGURED = True
