"""Core business logic for the short-link registry."""

from .clock import Clock, SystemClock, FixedClock
from .shortcode import ShortCodeGenerator
from .schemas import LinkRequest
from .store import LinkStore
from .registry import LinkRegistry

__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "ShortCodeGenerator",
    "LinkRequest",
    "LinkStore",
    "LinkRegistry",
]
