"""Structured logging configuration.

This module initializes structlog with a stable JSON event format.
Every module obtains its logger here instead of configuring its own.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

_CONFIGURED = False


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger emitting JSON lines.
    """
    configure_logging()
    return structlog.get_logger(name)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure structlog processors once per process.

    Args:
        level: Minimum level for emitted events.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
    _CONFIGURED = True
