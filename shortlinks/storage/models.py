"""Data models for the link registry."""

from dataclasses import dataclass
from datetime import datetime, timezone

from ..clock import MS_PER_MINUTE


def ms_to_datetime(ms: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


@dataclass
class LinkRecord:
    """Represents a short link in the store.
    
    Timestamps are epoch milliseconds. Serialized with the short field names of the
    browser storage format (``url``, ``created``, ``expires``, ``visits``).
    """
    
    code: str
    original_url: str
    created_at: int
    expires_at: int
    visit_count: int = 0
    
    @classmethod
    def create(cls, code: str, original_url: str, now: int, validity_minutes: int) -> "LinkRecord":
        """Build a fresh record expiring ``validity_minutes`` after ``now``."""
        return cls(
            code=code,
            original_url=original_url,
            created_at=now,
            expires_at=now + validity_minutes * MS_PER_MINUTE,
            visit_count=0,
        )
    
    def is_expired(self, now: int) -> bool:
        return self.expires_at <= now
    
    @property
    def validity_minutes(self) -> int:
        return (self.expires_at - self.created_at) // MS_PER_MINUTE
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "code": self.code,
            "url": self.original_url,
            "created": self.created_at,
            "expires": self.expires_at,
            "visits": self.visit_count,
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> "LinkRecord":
        """Create from dictionary."""
        return cls(
            code=data["code"],
            original_url=data["url"],
            created_at=int(data["created"]),
            expires_at=int(data["expires"]),
            visit_count=int(data.get("visits") or 0),
        )
