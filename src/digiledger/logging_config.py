"""Structured logging configuration using structlog.

Console output is rendered for humans; JSON output is meant for log
shipping. Log records go to stderr so command output on stdout stays
clean.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

LOG_FORMATS = ("console", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_handler: logging.Handler | None = None


def get_console_processors() -> list[Processor]:
    """Get processors for console (development) output."""
    return [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.ConsoleRenderer(colors=False),
    ]


def get_json_processors() -> list[Processor]:
    """Get processors for JSON (production) output."""
    return [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(level: str = "WARNING", log_format: str = "console") -> None:
    """Configure structured logging for the digiledger package.

    Args:
        level: Standard logging level name
        log_format: "console" or "json"

    Safe to call more than once; the previous handler is replaced.
    """
    global _handler

    log_level = getattr(logging, level.upper(), logging.WARNING)
    processors = get_json_processors() if log_format == "json" else get_console_processors()

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    package_logger = logging.getLogger("digiledger")
    if _handler is not None:
        package_logger.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(_handler)
    package_logger.setLevel(log_level)
    package_logger.propagate = False

    # SQLAlchemy echoing is only useful when debugging queries
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if log_level <= logging.DEBUG else logging.WARNING
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Example:
        logger = get_logger(__name__)
        logger.info("transaction_created", transaction_id=txn_id)
    """
    return structlog.stdlib.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables (e.g. the acting user) for subsequent log calls."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context variables from the logging context."""
    structlog.contextvars.clear_contextvars()
