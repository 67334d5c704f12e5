"""Structured logging configuration.

Loggers render JSON lines with an ISO timestamp and level so ingestion events
can be shipped as-is.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Install the structlog processor chain.

    Args:
        level: Minimum level name, e.g. ``"INFO"`` or ``"DEBUG"``.
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level.upper())),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.
    """
    return structlog.get_logger(name)
