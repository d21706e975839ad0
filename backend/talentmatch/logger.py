"""
Logging setup for the marketplace API.

Configures the ``talentmatch`` logger hierarchy once with a console handler
and, when a log directory is configured, a daily file handler. Modules get
their own child logger through :func:`get_logger`.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from pathlib import Path

ROOT_LOGGER_NAME = "talentmatch"

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def configure_logging(
    level: str = "INFO",
    log_dir: str | Path | None = None,
    enable_console: bool = True,
) -> logging.Logger:
    """
    Attach handlers to the package logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for daily log files; no file output when None
        enable_console: Output logs to stdout

    Returns:
        The configured package logger
    """
    global _configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()
    logger.propagate = False

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(fmt=_CONSOLE_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(console_handler)

    if log_dir:
        directory = Path(log_dir).expanduser()
        directory.mkdir(parents=True, exist_ok=True)
        log_file = directory / f"talentmatch_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        # Files always get everything.
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(fmt=_FILE_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            if handler is not file_handler:
                handler.setLevel(getattr(logging, level.upper(), logging.INFO))

    _configured = True
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger for ``name`` (usually ``__name__``)."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def with_context(message: str, **context) -> str:
    """Append keyword context to a log message as JSON."""
    if not context:
        return message
    return f"{message} | Context: {json.dumps(context, default=str, sort_keys=True)}"


def reset_logging() -> None:
    """Drop handlers from the package logger (used by tests)."""
    global _configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    _configured = False


def is_configured() -> bool:
    return _configured
