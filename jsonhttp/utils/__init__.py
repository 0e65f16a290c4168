"""Utility modules."""

from jsonhttp.utils.logging import log, set_logging_level, get_current_logging_level

__all__ = ["log", "set_logging_level", "get_current_logging_level"]
