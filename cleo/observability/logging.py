"""
Logging setup for the cleo package.

All module loggers live under the "cleo" namespace. One stream handler is
attached to the "cleo" logger, not to the root logger, so an application
embedding the detector keeps control of its own logging. The level comes from
CLEO_LOG_LEVEL (default INFO).
"""

from __future__ import annotations

import functools
import logging
import os

PACKAGE_LOGGER = "cleo"
LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> logging.Logger:
    """
    Apply the log level to the package logger and attach its handler once.

    Args:
        level: Level name; falls back to CLEO_LOG_LEVEL, then INFO.
               Unknown names fall back to INFO.
    """
    level_name = (level or os.getenv("CLEO_LOG_LEVEL") or "INFO").upper()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.getLevelNamesMapping().get(level_name, logging.INFO))

    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)

    return package_logger


@functools.cache
def _configure_from_env() -> None:
    configure_logging()


def get_logger(name: str) -> logging.Logger:
    """Logger for a cleo module. Names outside the package are nested under it."""
    _configure_from_env()
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
