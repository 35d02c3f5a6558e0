"""Pydantic views rendered by the command-line interface."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from shortlinks.common.url_builder import build_short_url, remaining_minutes
from shortlinks.storage.models import LinkRecord, ms_to_datetime


class LinkView(BaseModel):
    """A link as shown in listings and after creation."""
    
    code: str = Field(..., description="The short code")
    short_url: str = Field(..., description="The complete short URL")
    original_url: str = Field(..., description="The original long URL")
    created_at: datetime = Field(..., description="Creation timestamp")
    expires_at: datetime = Field(..., description="Expiry timestamp")
    remaining_minutes: int = Field(..., description="Whole minutes until expiry")
    visits: int = Field(..., description="Successful redirects so far")
    
    @classmethod
    def from_record(cls, record: LinkRecord, base_url: str, now: int) -> "LinkView":
        return cls(
            code=record.code,
            short_url=build_short_url(record.code, base_url),
            original_url=record.original_url,
            created_at=ms_to_datetime(record.created_at),
            expires_at=ms_to_datetime(record.expires_at),
            remaining_minutes=remaining_minutes(record.expires_at, now),
            visits=record.visit_count,
        )


class StatisticsView(BaseModel):
    """Registry-wide statistics."""
    
    total_links: int
    total_visits: int
    backend: str
    healthy: bool


class EventView(BaseModel):
    """One stored registry event."""
    
    t: str
    level: str
    msg: str
    data: Optional[Dict[str, Any]] = None
