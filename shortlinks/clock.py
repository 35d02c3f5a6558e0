"""Time sources for the link registry."""

import time
from abc import ABC, abstractmethod
from typing import Optional

MS_PER_MINUTE = 60 * 1000


class Clock(ABC):
    """Supplies the current time in milliseconds since the epoch."""

    @abstractmethod
    def now(self) -> int:
        pass


class SystemClock(Clock):
    """Wall-clock time."""

    def now(self) -> int:
        return int(time.time() * 1000)


class FixedClock(Clock):
    """Clock that only moves when told to.
    
    Used by tests to make expiry deterministic.
    """

    def __init__(self, start: Optional[int] = None):
        """Initialize fixed clock.
        
        Args:
            start: Initial instant in epoch milliseconds (defaults to wall time)
        """
        self.current = start if start is not None else SystemClock().now()

    def now(self) -> int:
        return self.current

    def set(self, instant: int) -> None:
        self.current = instant

    def advance(self, ms: int = 0, minutes: int = 0) -> int:
        """Move the clock forward.
        
        Args:
            ms: Milliseconds to add
            minutes: Minutes to add
            
        Returns:
            The new current instant
        """
        self.current += ms + minutes * MS_PER_MINUTE
        return self.current
