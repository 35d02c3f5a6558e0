"""Structured event sinks for registry activity."""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from .storage.base import KeyValueBackend

DEFAULT_EVENTS_KEY = "__logs__"


class EventLevel(str, Enum):
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


_LOGGING_LEVELS = {
    EventLevel.INFO: logging.INFO,
    EventLevel.WARN: logging.WARNING,
    EventLevel.ERROR: logging.ERROR,
}


class EventSink(ABC):
    """Append-only receiver of registry events.

    Emitting is fire-and-forget: callers ignore whatever a sink does with the
    event.
    """

    @abstractmethod
    async def emit(self, level: EventLevel, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
        """Record one event.

        Args:
            level: Event severity
            message: Short event name (e.g. ``create_short``)
            data: Event payload
        """
        pass


class LoggingEventSink(EventSink):
    """Forwards events to a standard logger."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("shortlinks.events")

    async def emit(self, level: EventLevel, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
        level = EventLevel(level)
        self.logger.log(_LOGGING_LEVELS[level], f"{message} {json.dumps(dict(data or {}), sort_keys=True)}")


class StoredEventSink(EventSink):
    """Appends events to a JSON list kept in a key-value backend."""

    def __init__(
        self,
        backend: KeyValueBackend,
        key: str = DEFAULT_EVENTS_KEY,
        logger: Optional[logging.Logger] = None,
    ):
        self.backend = backend
        self.key = key
        self.logger = logger or logging.getLogger(__name__)

    async def _load(self) -> List[Dict[str, Any]]:
        raw = await self.backend.get(self.key)
        if not raw:
            return []
        try:
            entries = json.loads(raw)
        except ValueError as e:
            self.logger.warning(f"Discarding unreadable event log under {self.key}: {e}")
            return []
        if not isinstance(entries, list):
            self.logger.warning(f"Discarding event log under {self.key}: not a list")
            return []
        return entries

    async def emit(self, level: EventLevel, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
        entries = await self._load()
        entries.append({
            "t": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": EventLevel(level).value,
            "msg": message,
            "data": dict(data or {}),
        })
        await self.backend.set(self.key, json.dumps(entries))

    async def recent(self, limit: int = 50) -> List[Dict[str, Any]]:
        """Most recent events, oldest first.

        Args:
            limit: Maximum number of events to return
        """
        entries = await self._load()
        return entries[-limit:] if limit > 0 else []


class CompositeEventSink(EventSink):
    """Fans every event out to several sinks."""

    def __init__(self, *sinks: EventSink):
        self.sinks = list(sinks)

    async def emit(self, level: EventLevel, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
        for sink in self.sinks:
            await sink.emit(level, message, data)
