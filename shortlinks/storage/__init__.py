"""Persistence layer for the link registry."""

from .base import KeyValueBackend
from .memory import MemoryBackend
from .jsonfile import JsonFileBackend
from .redis_backend import RedisBackend
from .models import LinkRecord

__all__ = ["KeyValueBackend", "MemoryBackend", "JsonFileBackend", "RedisBackend", "LinkRecord"]
