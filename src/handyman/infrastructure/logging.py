"""
Centralized logging configuration.

Usage:
    from handyman.infrastructure.logging import configure_logging, get_logger
    configure_logging()
    logger = get_logger(__name__)
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _get_log_level() -> int:
    """Get log level from environment or default to WARNING."""
    level_name = os.environ.get("LOG_LEVEL", "WARNING").upper()
    return getattr(logging, level_name, logging.WARNING)


def configure_logging(level: str | None = None) -> None:
    """Attach a stderr handler to the ``handyman`` logger.

    Runs once; later calls only adjust the level. ``level`` wins over
    the LOG_LEVEL environment variable.
    """
    logger = logging.getLogger("handyman")
    if level is None:
        logger.setLevel(_get_log_level())
    else:
        logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if logger.handlers:
        return

    # stderr keeps log lines out of the CLI's stdout output
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)


@cache
def get_logger(name: str) -> logging.Logger:
    """Get or create a logger with the given name."""
    return logging.getLogger(name)


__all__ = ["LOG_FORMAT", "configure_logging", "get_logger"]
