"""Tests for event sinks."""

import json
import logging

import pytest

from shortlinks.events import (
    CompositeEventSink,
    EventLevel,
    EventSink,
    LoggingEventSink,
    StoredEventSink,
)
from shortlinks.registry import LinkRegistry
from shortlinks.storage import MemoryBackend
from shortlinks.store import LinkStore

from conftest import RecordingEventSink


class BrokenEventSink(EventSink):
    async def emit(self, level, message, data=None):
        raise RuntimeError("sink unavailable")


@pytest.mark.asyncio
class TestStoredEventSink:
    """Test the persisted event log."""
    
    async def test_appends_entries(self):
        backend = MemoryBackend()
        sink = StoredEventSink(backend)
        
        await sink.emit(EventLevel.INFO, "create_short", {"code": "abc123"})
        await sink.emit("warn", "expired", {"code": "abc123"})
        
        entries = json.loads(await backend.get("__logs__"))
        assert [(e["level"], e["msg"]) for e in entries] == [("info", "create_short"), ("warn", "expired")]
        assert entries[0]["data"] == {"code": "abc123"}
        assert entries[0]["t"].endswith("Z")
    
    async def test_recent_limit(self):
        sink = StoredEventSink(MemoryBackend(), key="events")
        for i in range(5):
            await sink.emit(EventLevel.INFO, f"event_{i}")
        
        assert [e["msg"] for e in await sink.recent(2)] == ["event_3", "event_4"]
        assert await sink.recent(0) == []
    
    @pytest.mark.parametrize("raw", ["garbage", '{"not": "a list"}'])
    async def test_unreadable_log_starts_over(self, raw, caplog):
        backend = MemoryBackend({"__logs__": raw})
        sink = StoredEventSink(backend, logger=logging.getLogger("test.events"))
        
        with caplog.at_level(logging.WARNING, logger="test.events"):
            await sink.emit(EventLevel.ERROR, "not_found", {"code": "x"})
        
        assert len(await sink.recent()) == 1
        assert "Discarding" in caplog.records[0].getMessage()
    
    async def test_rejects_unknown_level(self):
        with pytest.raises(ValueError):
            await StoredEventSink(MemoryBackend()).emit("debug", "nope")


@pytest.mark.asyncio
class TestLoggingEventSink:
    """Test forwarding events to logging."""
    
    async def test_levels_map_to_logging(self, caplog):
        logger = logging.getLogger("test.events")
        sink = LoggingEventSink(logger)
        
        with caplog.at_level(logging.INFO, logger="test.events"):
            await sink.emit(EventLevel.INFO, "create_short", {"code": "a"})
            await sink.emit(EventLevel.WARN, "expired", {"code": "b"})
            await sink.emit(EventLevel.ERROR, "not_found", {"code": "c"})
        
        assert [r.levelno for r in caplog.records] == [logging.INFO, logging.WARNING, logging.ERROR]
        assert caplog.records[0].getMessage() == 'create_short {"code": "a"}'


@pytest.mark.asyncio
class TestRegistryEvents:
    """Test how the registry talks to its sinks."""
    
    async def test_composite_fans_out(self, store, clock):
        first, second = RecordingEventSink(), RecordingEventSink()
        registry = LinkRegistry(store, clock=clock, events=CompositeEventSink(first, second))
        
        await registry.create_batch([{"url": "https://example.com"}])
        
        assert first.messages() == second.messages() == ["create_short"]
    
    async def test_broken_sink_does_not_fail_calls(self, store, clock, caplog):
        registry = LinkRegistry(store, clock=clock, events=BrokenEventSink())
        
        records = await registry.create_batch([{"url": "https://example.com", "custom_code": "works"}])
        
        assert records[0].code == "works"
        assert await registry.resolve("works") == "https://example.com"
        assert "Event sink failed for create_short" in caplog.text
    
    async def test_events_stored_beside_links(self, clock):
        backend = MemoryBackend()
        sink = StoredEventSink(backend)
        registry = LinkRegistry(LinkStore(backend), clock=clock, events=sink)
        
        await registry.create_batch([{"url": "https://example.com", "custom_code": "both"}])
        
        assert set(backend.data) == {"__short_links__", "__logs__"}
        assert [e["msg"] for e in await sink.recent()] == ["create_short"]
