"""In-process backend."""

from typing import Dict, Optional

from .base import KeyValueBackend


class MemoryBackend(KeyValueBackend):
    """Keeps values in a dict; contents live as long as the process."""
    
    name = "memory"
    
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})
    
    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)
    
    async def set(self, key: str, value: str) -> None:
        self.data[key] = value
    
    async def close(self) -> None:
        pass
    
    async def health_check(self) -> bool:
        return True
