"""Logging configuration for AutoApply.

Modules log through ``logging.getLogger(__name__)``; since every module
lives under the ``autoapply`` package, their loggers are children of the
application logger configured here.
"""

import logging
import sys
from typing import TextIO

LOGGER_NAME = "autoapply"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def configure_logging(
    level: str | None = None,
    format_string: str = LOG_FORMAT,
    date_format: str = DATE_FORMAT,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure and return the application logger.

    Args:
        level: Log level name. Defaults to INFO.
        format_string: Format string for log messages.
        date_format: Format string for timestamps.
        stream: Stream for the console handler. Defaults to stderr.

    Returns:
        The configured ``autoapply`` logger.
    """
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    logger.setLevel(log_level)

    if _configured:
        for handler in logger.handlers:
            handler.setLevel(log_level)
        return logger

    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(format_string, datefmt=date_format))
    logger.addHandler(handler)

    # Keep CLI output clean when a host application configures the root logger.
    logger.propagate = False

    _configured = True
    return logger


def reset_logging() -> None:
    """Reset logging configuration (useful for testing)."""
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True

    _configured = False
