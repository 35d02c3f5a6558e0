"""Abstract base class for key-value persistence backends."""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueBackend(ABC):
    """Abstract base class for the key-value store the registry persists into.
    
    Values are opaque strings (the store writes JSON). Read-modify-write is
    the caller's responsibility; no transactions are assumed.
    """
    
    name = "abstract"
    
    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Read a value.
        
        Args:
            key: Namespace key
            
        Returns:
            The stored value, or None if the key is unset
        """
        pass
    
    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Write a value, replacing any previous one.
        
        Args:
            key: Namespace key
            value: Value to store
        """
        pass
    
    async def connect(self) -> None:
        """Open connections (no-op for local backends)."""
    
    @abstractmethod
    async def close(self) -> None:
        """Close backend connections."""
        pass
    
    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the backend is healthy.
        
        Returns:
            True if healthy, False otherwise
        """
        pass
