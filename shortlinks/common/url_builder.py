"""URL building utilities for short links."""

import math


def build_short_url(
    short_code: str,
    base_url: str,
    path_prefix: str = "",
) -> str:
    """Build complete short URL.
    
    Args:
        short_code: The short code
        base_url: Base URL (e.g., http://localhost:3000)
        path_prefix: Optional path prefix (e.g., /s)
        
    Returns:
        Complete short URL
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")
    
    if prefix:
        return f"{base}/{prefix}/{short_code}"
    return f"{base}/{short_code}"


def remaining_minutes(expires_at: int, now: int) -> int:
    """Whole minutes left before expiry, rounded up and never negative."""
    return max(0, math.ceil((expires_at - now) / 60000))
