"""structlog configuration for the MCP server.

setup_logging() runs once in the gateway lifespan. Every event carries the
service name; request handlers bind request_id (and path) into contextvars
via bind_request_context() so dispatch events can be correlated per call.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

SERVICE_NAME = "arc-mcp-server"

# uvicorn logs through the stdlib; these follow LOG_LEVEL too.
_STDLIB_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _add_service(
    logger: Any, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def setup_logging(*, json_output: bool = True, log_level: str = "INFO") -> None:
    """Configure structlog for the server.

    Args:
        json_output: Render JSON lines when True, otherwise the console renderer.
        log_level: Minimum level to emit (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    level = logging.getLevelNamesMapping()[log_level.upper()]

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        _add_service,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in _STDLIB_LOGGERS:
        logging.getLogger(name).setLevel(level)


def bind_request_context(request_id: str, **fields: Any) -> None:
    """Replace the per-request log context with request_id and extra fields."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, **fields)
