"""Structlog setup for the storefront: one pipeline shared by structlog and stdlib loggers."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from storefront.infrastructure.configuration import AppSettings
from storefront.infrastructure.observability.logging.schema_processor import (
    storefront_schema_processor,
)

_JSON_ENVS = frozenset({"qa", "staging", "prod", "production"})

# Request lines come from CorrelationMiddleware.
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def configure_logging(app: AppSettings) -> None:
    """Install the pipeline; calling it again replaces the previous handlers."""
    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        storefront_schema_processor,
    ]
    renderer = _renderer(app)

    structlog.configure(
        processors=[*shared, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *shared, renderer],
        )
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(app.log_level.upper())
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger().bind(context_component=component)


def _renderer(app: AppSettings) -> Any:
    fmt = app.log_format or ("json" if app.env.lower() in _JSON_ENVS else "console")
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
