"""Structured logging setup for repocache.

Contains:
- configure_logging: One-time structlog configuration
- get_logger: Logger factory with bound context
"""

import logging
from typing import Any

import structlog


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Configure structlog for the process.

    Args:
        level: Standard logging level name (DEBUG, INFO, ...).
        fmt: "console" for human-readable output, "json" for JSON lines.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    if fmt == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str, **context: Any) -> Any:
    """Return a structlog logger bound with the given context.

    Args:
        name: Logger name, usually the module's __name__.
        **context: Key/value pairs attached to every event.
    """
    logger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger
