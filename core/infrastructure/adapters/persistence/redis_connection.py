"""
Shared Redis connection handling for the Redis-backed stores.
"""
import asyncio
import logging
from typing import Optional

import redis.asyncio as aioredis


logger = logging.getLogger(__name__)


class RedisConnection:
    """
    Lazily connected ``redis.asyncio`` client.

    The first caller connects; concurrent first callers wait on a lock
    and share the same client.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        client: Optional[aioredis.Redis] = None,
    ):
        self.redis_url = redis_url
        self._redis_client: Optional[aioredis.Redis] = client
        self._connect_lock = asyncio.Lock()

    async def connect(self) -> None:
        """Establish Redis connection."""
        async with self._connect_lock:
            if self._redis_client is not None:
                return
            client = aioredis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            try:
                await client.ping()
            except Exception as e:
                logger.error(f"Failed to connect to Redis: {e}")
                await client.aclose()
                raise
            self._redis_client = client
            logger.info(f"Connected to Redis: {self.redis_url}")

    async def disconnect(self) -> None:
        """Close Redis connection."""
        if self._redis_client is not None:
            await self._redis_client.aclose()
            self._redis_client = None
            logger.info("Disconnected from Redis")

    async def _client(self) -> aioredis.Redis:
        if self._redis_client is None:
            await self.connect()
        return self._redis_client

    async def __aenter__(self):
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.disconnect()
