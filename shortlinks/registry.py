"""Link registry: batch creation and resolution of short links."""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Union

from pydantic import ValidationError as RequestValidationError

from .clock import Clock, SystemClock
from .errors import (
    CodeExhausted,
    DuplicateCode,
    Expired,
    InvalidCodeFormat,
    InvalidUrl,
    InvalidValidity,
    NotFound,
    RegistryError,
    ValidationError,
)
from .events import EventLevel, EventSink, LoggingEventSink
from .schemas import LinkRequest
from .shortcode import ShortCodeGenerator
from .store import LinkStore
from .storage.models import LinkRecord

DEFAULT_MAX_COLLISION_RETRIES = 10

# Request field -> error raised when pydantic rejects it
_FIELD_ERRORS = {
    "url": InvalidUrl,
    "validity_minutes": InvalidValidity,
    "custom_code": InvalidCodeFormat,
}


class LinkRegistry:
    """Allocates short codes, stores links and resolves visits.

    The registry is the only writer of its store. An asyncio lock serializes
    the prune/check/insert and prune/lookup/increment sequences so concurrent
    callers cannot admit duplicate codes or lose visits.
    """

    def __init__(
        self,
        store: LinkStore,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        clock: Optional[Clock] = None,
        events: Optional[EventSink] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = DEFAULT_MAX_COLLISION_RETRIES,
    ):
        """Initialize link registry.

        Args:
            store: Link store to persist into
            short_code_generator: Optional short code generator
            clock: Optional clock (wall time if not given)
            events: Optional event sink (logs events if not given)
            logger: Optional logger
            max_collision_retries: Random codes drawn per row before giving up
        """
        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator()
        self.clock = clock or SystemClock()
        self.logger = logger or logging.getLogger(__name__)
        self.events = events or LoggingEventSink(self.logger)
        self.max_collision_retries = max_collision_retries
        self._lock = asyncio.Lock()

    async def create_batch(
        self,
        requests: Iterable[Union[LinkRequest, Mapping[str, Any]]],
    ) -> List[LinkRecord]:
        """Create short links for a batch of requests, all or nothing.

        Callers are expected to cap batches at five rows; the registry itself
        accepts any size.

        Args:
            requests: Ordered link requests (LinkRequest or plain mappings)

        Returns:
            Created records, in request order

        Raises:
            RegistryError: The first failing row's error, tagged with its
                1-based row number. Nothing is stored in that case.
        """
        rows = list(requests)

        async with self._lock:
            await self.store.prune(self.clock.now())

            staged: List[LinkRecord] = []
            staged_codes: Set[str] = set()

            for index, row in enumerate(rows, start=1):
                try:
                    request = self._coerce_request(row)
                    url = self.generator.validate_url(request.url)
                    minutes = self.generator.validate_validity(request.validity_minutes)

                    if request.custom_code:
                        code = await self._claim_custom_code(request.custom_code, staged_codes)
                    else:
                        code = await self._generate_unique_code(staged_codes, index)
                except RegistryError as e:
                    e.at_row(index)
                    self.logger.info(f"Batch rejected: {e}")
                    raise

                staged.append(LinkRecord.create(code, url, self.clock.now(), minutes))
                staged_codes.add(code)

            for record in staged:
                await self.store.insert(record)

            for record in staged:
                self.logger.info(f"Created short link: {record.code} -> {record.original_url}")
                await self._emit(EventLevel.INFO, "create_short", {
                    "code": record.code,
                    "url": record.original_url,
                    "validity": record.validity_minutes,
                })

        return staged

    async def resolve(self, code: str) -> str:
        """Resolve a short code for a redirect and count the visit.

        Args:
            code: The short code being visited

        Returns:
            The original URL

        Raises:
            NotFound: No live record has this code
            Expired: The record exists but its expiry has passed
        """
        async with self._lock:
            now = self.clock.now()
            await self.store.prune(now)

            record = await self.store.find_by_code(code)
            if record is not None:
                # Unreachable after a prune at the same instant unless the read was stale
                if record.is_expired(now):
                    self.logger.warning(f"Short code expired: {code}")
                    await self._emit(EventLevel.WARN, "expired", {"code": code})
                    raise Expired(code)
                record = await self.store.record_visit(code)

            if record is None:
                self.logger.warning(f"Short code not found: {code}")
                await self._emit(EventLevel.ERROR, "not_found", {"code": code})
                raise NotFound(code)

        self.logger.debug(f"Resolved {code} -> {record.original_url} (visits={record.visit_count})")
        return record.original_url

    async def list_all(self) -> List[LinkRecord]:
        """Live records, newest first."""
        async with self._lock:
            await self.store.prune(self.clock.now())
            return await self.store.list_all()

    async def get_statistics(self) -> Dict[str, Any]:
        """Get registry statistics.

        Returns:
            Dictionary with total_links, total_visits, backend and health
        """
        records = await self.list_all()

        return {
            "total_links": len(records),
            "total_visits": sum(r.visit_count for r in records),
            "backend": self.store.backend.name,
            "healthy": await self.store.backend.health_check(),
        }

    async def close(self) -> None:
        """Close backend connections."""
        await self.store.backend.close()

    @staticmethod
    def _coerce_request(row: Union[LinkRequest, Mapping[str, Any]]) -> LinkRequest:
        """Turn a batch row into a LinkRequest.

        Raises:
            ValidationError: The typed error for the first rejected field
        """
        if isinstance(row, LinkRequest):
            return row
        try:
            return LinkRequest.model_validate(row)
        except RequestValidationError as e:
            first = e.errors()[0]
            field = first["loc"][0] if first["loc"] else None
            error_class = _FIELD_ERRORS.get(field, ValidationError)
            raise error_class(f"{field or 'request'}: {first['msg']}") from e

    async def _claim_custom_code(self, code: str, staged_codes: Set[str]) -> str:
        code = self.generator.validate_custom_code(code)
        if code in staged_codes or await self.store.exists(code):
            raise DuplicateCode(f"shortcode '{code}' is already in use")
        return code

    async def _generate_unique_code(self, staged_codes: Set[str], row: int) -> str:
        """Draw random codes until one is free in the store and the batch.

        Raises:
            CodeExhausted: If every attempt collided
        """
        code = ""
        for attempt in range(1, self.max_collision_retries + 1):
            code = self.generator.random_code()
            if code not in staged_codes and not await self.store.exists(code):
                if attempt > 1:
                    self.logger.debug(f"Generated code after {attempt} attempts: {code}")
                return code

        self.logger.error(f"No free short code after {self.max_collision_retries} attempts")
        await self._emit(EventLevel.ERROR, "shortcode_collision", {"code": code, "row": row})
        raise CodeExhausted(
            f"Failed to generate unique shortcode after {self.max_collision_retries} attempts"
        )

    async def _emit(self, level: EventLevel, message: str, data: Dict[str, Any]) -> None:
        try:
            await self.events.emit(level, message, data)
        except Exception as e:
            self.logger.error(f"Event sink failed for {message}: {e}")
