"""Persisted collection of link records."""

import json
import logging
from typing import List, Optional

from .storage.base import KeyValueBackend
from .storage.models import LinkRecord
from .errors import StoreIntegrityError

DEFAULT_LINKS_KEY = "__short_links__"


class LinkStore:
    """Link records kept as one newest-first JSON array under a namespace key.

    Every operation is a full read-modify-write of the array; the store does
    no locking of its own. Callers that mutate concurrently (the registry)
    serialize access themselves.
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        key: str = DEFAULT_LINKS_KEY,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize link store.

        Args:
            backend: Key-value backend holding the collection
            key: Namespace key the collection is stored under
            logger: Optional logger
        """
        self.backend = backend
        self.key = key
        self.logger = logger or logging.getLogger(__name__)

    async def _load(self) -> List[LinkRecord]:
        raw = await self.backend.get(self.key)
        if not raw:
            return []

        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise TypeError(f"expected a list, got {type(items).__name__}")
            return [LinkRecord.from_dict(item) for item in items]
        except (ValueError, KeyError, TypeError) as e:
            self.logger.warning(f"Discarding unreadable link collection under {self.key!r}: {e}")
            return []

    async def _save(self, records: List[LinkRecord]) -> None:
        await self.backend.set(self.key, json.dumps([r.to_dict() for r in records]))

    async def prune(self, now: int) -> int:
        """Remove every record whose expiry is at or before ``now``.

        Args:
            now: Current instant in epoch milliseconds

        Returns:
            Number of records removed
        """
        records = await self._load()
        fresh = [r for r in records if not r.is_expired(now)]
        removed = len(records) - len(fresh)

        if removed:
            await self._save(fresh)
            self.logger.debug(f"Pruned {removed} expired link(s)")

        return removed

    async def exists(self, code: str) -> bool:
        return await self.find_by_code(code) is not None

    async def insert(self, record: LinkRecord) -> None:
        """Add a record in front of the collection.

        Raises:
            StoreIntegrityError: If a record with the same code is present
        """
        records = await self._load()
        if any(r.code == record.code for r in records):
            raise StoreIntegrityError(f"Short code '{record.code}' is already stored")

        records.insert(0, record)
        await self._save(records)

    async def find_by_code(self, code: str) -> Optional[LinkRecord]:
        for record in await self._load():
            if record.code == code:
                return record
        return None

    async def record_visit(self, code: str) -> Optional[LinkRecord]:
        """Increment the visit counter of a record.

        Args:
            code: Short code of the visited link

        Returns:
            The updated record, or None if no record has that code
        """
        records = await self._load()
        for record in records:
            if record.code == code:
                record.visit_count += 1
                await self._save(records)
                return record
        return None

    async def list_all(self) -> List[LinkRecord]:
        """All stored records, newest first."""
        return await self._load()
