"""Structured logging for the WMR server.

``configure_logging()`` is called once by the entry point; library code
only calls ``get_logger()``. Until configuration happens structlog falls
back to its defaults, which is what the tests rely on.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.typing import EventDict

SERVICE_NAME = "wmr-server"

_configured: bool = False


def add_service_info(
    logger: logging.Logger,  # noqa: ARG001 - Required by structlog interface
    method_name: str,  # noqa: ARG001 - Required by structlog interface
    event_dict: EventDict,
) -> EventDict:
    """Add the service name to every log entry."""
    event_dict["service"] = SERVICE_NAME
    return event_dict


def configure_logging(log_level: str = "INFO", json_output: bool = True) -> None:
    """Configure structlog for the process.

    Idempotent: later calls are ignored until ``reset_logging()``.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: JSON lines when True, human readable console otherwise
    """
    global _configured

    if _configured:
        return

    level = getattr(logging, log_level.upper(), logging.INFO)

    renderer: Any
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_service_info,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    _configured = True


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name)


def reset_logging() -> None:
    """Drop the structlog configuration (tests only)."""
    global _configured
    _configured = False
    structlog.reset_defaults()
