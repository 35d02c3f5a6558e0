"""Common utilities for the link registry."""

from .validators import is_valid_url, is_valid_short_code, is_valid_validity
from .url_builder import build_short_url, remaining_minutes
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "is_valid_short_code",
    "is_valid_validity",
    "build_short_url",
    "remaining_minutes",
    "setup_logging",
    "get_logger",
]
