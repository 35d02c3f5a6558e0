"""Pytest configuration and fixtures."""

import random
from typing import Any, Dict, List, Mapping, Optional

import pytest

from shortlinks.clock import FixedClock
from shortlinks.common.logging_config import setup_logging
from shortlinks.events import EventLevel, EventSink
from shortlinks.registry import LinkRegistry
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.storage import MemoryBackend
from shortlinks.store import LinkStore

# 2023-11-14T22:13:20Z
START_MS = 1_700_000_000_000


class RecordingEventSink(EventSink):
    """Keeps emitted events in memory for assertions."""

    def __init__(self):
        self.events: List[Dict[str, Any]] = []

    async def emit(self, level: EventLevel, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
        self.events.append({"level": EventLevel(level).value, "msg": message, "data": dict(data or {})})

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [e["msg"] for e in self.events if level is None or e["level"] == level]


class ScriptedGenerator(ShortCodeGenerator):
    """Generator whose random codes come from a fixed, repeating list."""

    def __init__(self, codes: List[str]):
        super().__init__()
        self.codes = codes
        self.calls = 0

    def random_code(self) -> str:
        code = self.codes[self.calls % len(self.codes)]
        self.calls += 1
        return code


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    return FixedClock(START_MS)


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend, logger):
    return LinkStore(backend, logger=logger)


@pytest.fixture
def short_code_generator():
    """Create a seeded short code generator."""
    return ShortCodeGenerator(default_length=6, rng=random.Random(1234))


@pytest.fixture
def events():
    return RecordingEventSink()


@pytest.fixture
def registry(store, short_code_generator, clock, events, logger) -> LinkRegistry:
    """Create registry instance."""
    return LinkRegistry(
        store=store,
        short_code_generator=short_code_generator,
        clock=clock,
        events=events,
        logger=logger,
    )


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
