"""Logging for element-cleanup.

TIER 1: May import from core only.

Loggers are named cleanup.<module>. Callers prefix repo-specific messages
with the repo name, e.g. "paper-button: No typings changed."
"""

import logging
import os
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"
ENV_VAR = "CLEANUP_LOG_LEVEL"

_loggers: dict[str, logging.Logger] = {}


def _initial_level(level: LogLevel | None) -> int:
    name = level or os.environ.get(ENV_VAR, "INFO").upper()
    return getattr(logging, name, logging.INFO)


def get_logger(name: str, level: LogLevel | None = None) -> logging.Logger:
    """Get the cleanup.<name> logger, configuring it on first use.

    The level comes from `level`, then CLEANUP_LOG_LEVEL, then INFO.
    """
    full_name = f"cleanup.{name}"
    if full_name in _loggers:
        return _loggers[full_name]

    logger = logging.getLogger(full_name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(_initial_level(level))
        logger.propagate = False

    _loggers[full_name] = logger
    return logger


def set_log_level(level: LogLevel) -> None:
    """Apply a level to every cleanup logger created so far (used by --log-level)."""
    log_level = getattr(logging, level, logging.INFO)
    for logger in _loggers.values():
        logger.setLevel(log_level)
