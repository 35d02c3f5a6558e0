"""Redis backend for the link registry."""

import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from .base import KeyValueBackend
from ..errors import StorageError


class RedisBackend(KeyValueBackend):
    """Stores each namespace key as a plain Redis string."""
    
    name = "redis"
    
    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        key_prefix: str = "shortlinks:",
        logger: Optional[logging.Logger] = None,
        client: Optional["redis.Redis"] = None,
    ):
        """Initialize Redis backend.
        
        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            key_prefix: Prefix added to every namespace key
            logger: Optional logger instance
            client: Already constructed client (skips from_url in connect)
        """
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self.logger = logger or logging.getLogger(__name__)
        self.client: Optional[redis.Redis] = client
    
    def get_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"
    
    async def connect(self) -> None:
        """Connect to Redis."""
        if self.client is None:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        try:
            await self.client.ping()
        except RedisError as e:
            self.logger.error(f"Failed to connect to Redis: {e}")
            raise StorageError(f"Failed to connect to Redis at {self.redis_url}: {e}") from e
        self.logger.info("Connected to Redis")
    
    async def get(self, key: str) -> Optional[str]:
        if self.client is None:
            await self.connect()
        try:
            return await self.client.get(self.get_key(key))
        except RedisError as e:
            self.logger.error(f"Redis get error: {e}")
            raise StorageError(f"Redis get failed for {key}: {e}") from e
    
    async def set(self, key: str, value: str) -> None:
        if self.client is None:
            await self.connect()
        try:
            await self.client.set(self.get_key(key), value)
        except RedisError as e:
            self.logger.error(f"Redis set error: {e}")
            raise StorageError(f"Redis set failed for {key}: {e}") from e
    
    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis connection closed")
    
    async def health_check(self) -> bool:
        if self.client is None:
            return False
        try:
            return bool(await self.client.ping())
        except RedisError:
            return False
