"""Tests for the link store."""

import json

import pytest

from shortlinks.errors import StoreIntegrityError
from shortlinks.storage import LinkRecord, MemoryBackend
from shortlinks.store import DEFAULT_LINKS_KEY, LinkStore

from conftest import START_MS


def make_record(code: str, minutes: int = 30, now: int = START_MS) -> LinkRecord:
    return LinkRecord.create(code, f"https://example.com/{code}", now, minutes)


class TestLinkRecord:
    """Test the record model."""
    
    def test_create_sets_expiry(self):
        record = make_record("abc123", minutes=45)
        
        assert record.created_at == START_MS
        assert record.expires_at == START_MS + 45 * 60_000
        assert record.visit_count == 0
        assert record.validity_minutes == 45
    
    def test_expiry_boundary(self):
        record = make_record("abc123", minutes=1)
        
        assert not record.is_expired(record.expires_at - 1)
        assert record.is_expired(record.expires_at)
    
    def test_serialized_field_names(self):
        """Persisted form uses the browser storage field names."""
        data = make_record("abc123").to_dict()
        
        assert data == {
            "code": "abc123",
            "url": "https://example.com/abc123",
            "created": START_MS,
            "expires": START_MS + 30 * 60_000,
            "visits": 0,
        }
    
    def test_missing_visits_reads_as_zero(self):
        record = LinkRecord.from_dict({"code": "old", "url": "https://a.com", "created": 1, "expires": 2})
        assert record.visit_count == 0


@pytest.mark.asyncio
class TestLinkStore:
    """Test store operations."""
    
    async def test_insert_and_find(self, store):
        await store.insert(make_record("abc123"))
        
        found = await store.find_by_code("abc123")
        assert found.original_url == "https://example.com/abc123"
        assert await store.exists("abc123")
        assert not await store.exists("zzz999")
        assert await store.find_by_code("zzz999") is None
    
    async def test_list_all_newest_first(self, store):
        for code in ("first", "second", "third"):
            await store.insert(make_record(code))
        
        assert [r.code for r in await store.list_all()] == ["third", "second", "first"]
    
    async def test_insert_duplicate_is_programming_error(self, store):
        await store.insert(make_record("abc123"))
        
        with pytest.raises(StoreIntegrityError):
            await store.insert(make_record("abc123"))
        
        assert len(await store.list_all()) == 1
    
    async def test_prune_removes_expired_at_or_before_now(self, store):
        await store.insert(make_record("short", minutes=1))
        await store.insert(make_record("long", minutes=60))
        
        boundary = START_MS + 60_000
        assert await store.prune(boundary - 1) == 0
        assert await store.prune(boundary) == 1
        assert [r.code for r in await store.list_all()] == ["long"]
    
    async def test_prune_is_idempotent(self, store):
        await store.insert(make_record("short", minutes=1))
        
        later = START_MS + 120_000
        assert await store.prune(later) == 1
        assert await store.prune(later) == 0
        assert await store.list_all() == []
    
    async def test_record_visit_increments_and_persists(self, backend, store):
        await store.insert(make_record("abc123"))
        
        updated = await store.record_visit("abc123")
        await store.record_visit("abc123")
        
        assert updated.visit_count == 1
        assert (await store.find_by_code("abc123")).visit_count == 2
        
        persisted = json.loads(await backend.get(DEFAULT_LINKS_KEY))
        assert persisted[0]["visits"] == 2
    
    async def test_record_visit_absent(self, store):
        assert await store.record_visit("missing") is None
    
    async def test_reads_existing_collection(self):
        backend = MemoryBackend({
            "links": json.dumps([
                {"code": "newer", "url": "https://b.com", "created": 2, "expires": 9_999_999_999_999, "visits": 3},
                {"code": "older", "url": "https://a.com", "created": 1, "expires": 9_999_999_999_999},
            ])
        })
        store = LinkStore(backend, key="links")
        
        records = await store.list_all()
        assert [r.code for r in records] == ["newer", "older"]
        assert [r.visit_count for r in records] == [3, 0]
    
    @pytest.mark.parametrize("raw", ["{not json", '{"code": "x"}', '[{"code": "x"}]', "42"])
    async def test_unreadable_collection_reads_as_empty(self, raw):
        store = LinkStore(MemoryBackend({DEFAULT_LINKS_KEY: raw}))
        
        assert await store.list_all() == []
        
        await store.insert(make_record("fresh"))
        assert [r.code for r in await store.list_all()] == ["fresh"]
