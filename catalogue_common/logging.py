"""
Structured logging setup for the catalogue services.

Both services log through the standard library; this module only decides
where records go and what they look like.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "exc_info",
        "exc_text",
        "stack_info",
        "message",
        "taskName",
    }
)

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Output format:
    {"timestamp": "...", "level": "INFO", "logger": "...", "message": "...", ...}
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.levelno >= logging.ERROR:
            log_data["location"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class ContextLogger(logging.LoggerAdapter[logging.Logger]):
    """
    Logger adapter that merges fixed context into every record.

    Usage:
        logger = get_logger("catalogue_web.client", base_url="http://localhost:8080")
        logger.info("Listing books")
    """

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        """Add context to log message."""
        extra = kwargs.get("extra", {})
        extra.update(self.extra or {})
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging(
    logger_names: Iterable[str],
    level: str = "INFO",
    log_format: str = "text",
) -> None:
    """
    Configure handlers for the given package loggers.

    Args:
        logger_names: Top-level logger names to configure (usually package names)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "structured" for JSON lines, anything else for plain text
    """
    formatter: logging.Formatter
    if log_format == "structured":
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    for name in logger_names:
        package_logger = logging.getLogger(name)
        package_logger.setLevel(getattr(logging, level.upper()))
        package_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        package_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


def get_logger(name: str, **context: Any) -> ContextLogger:
    """
    Get a logger with optional context.

    Args:
        name: Logger name
        **context: Key-value pairs to include in all log messages

    Returns:
        ContextLogger instance
    """
    return ContextLogger(logging.getLogger(name), context)
