"""Structured logging configuration for the intelligence layer."""

import logging
import sys
from typing import Optional

from config import settings


class StructuredFormatter(logging.Formatter):
    """key=value structured log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "module": record.module,
            "message": record.getMessage(),
        }

        # Extra fields passed as extra={"extra_data": {...}}
        extra_data = getattr(record, "extra_data", None)
        if isinstance(extra_data, dict):
            log_data.update(extra_data)

        line = " ".join(f"{k}={v}" for k, v in log_data.items())
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


ROOT_LOGGER_NAMES = ("orchestrator", "librarian", "context")


def configure_logging(
    level: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach one handler to the package loggers.

    Args:
        level: Log level name; defaults to settings.log_level
        handler: Handler to install; defaults to a stdout handler with StructuredFormatter
    """
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())

    resolved = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    for name in ROOT_LOGGER_NAMES:
        logger = logging.getLogger(name)
        for existing in list(logger.handlers):
            logger.removeHandler(existing)
        logger.addHandler(handler)
        logger.setLevel(resolved)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance (typically called with __name__)."""
    return logging.getLogger(name)
