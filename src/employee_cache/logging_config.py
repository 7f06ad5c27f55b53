"""Structured logging setup.

Modules log through structlog with event-style messages and key/value
context::

    logger = get_logger(__name__)
    logger.warning("cache_get_failed", key="employee:1", error="timeout")

``setup_logging`` is called once by the hosting process. Until then
structlog's defaults apply, which is what the test-suite relies on.
"""

import logging
import sys

import structlog

from employee_cache.config import settings


def setup_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """Configure stdlib logging and structlog.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to settings.
        log_format: 'json' or 'console'. Defaults to settings.
    """
    log_level = log_level or settings.log_level
    log_format = log_format or settings.log_format

    logging.basicConfig(
        format="%(message)s", stream=sys.stdout, level=getattr(logging, log_level.upper())
    )

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)
