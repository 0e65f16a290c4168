"""Logging utilities for the jsonhttp package.

Provides a centralized logging function with timestamp prefix, backed by
the "jsonhttp" logger.
"""

import logging
import sys

LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Configure logging
logger = logging.getLogger("jsonhttp")
logger.setLevel(logging.INFO)
logger.propagate = False
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter("[%(asctime)s] %(message)s", "%Y-%m-%d %H:%M:%S")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def set_logging_level(level: str) -> None:
    """Set the minimum level that gets printed.

    Args:
        level: One of DEBUG, INFO, WARNING, ERROR (case-insensitive).

    Raises:
        ValueError: If the level name is unknown.
    """
    name = str(level).upper()
    if name not in LOGGING_LEVELS:
        raise ValueError(f"unknown logging level: {level!r}")
    logger.setLevel(name)


def get_current_logging_level() -> str:
    """Return the name of the active logging level."""
    return logging.getLevelName(logger.level)


def log(message: str, level: str = "INFO") -> None:
    """Log message with timestamp prefix.

    Args:
        message: The message to log.
        level: Level of this message (default: INFO). Unknown names log at INFO.
    """
    name = str(level).upper()
    if name not in LOGGING_LEVELS:
        name = "INFO"
    logger.log(getattr(logging, name), message)
