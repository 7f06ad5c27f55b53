"""Redis implementation of KeyValueStore.

Uses the asyncio Redis client so no call blocks the event loop. Every
client-side failure surfaces as StoreUnavailableError.
"""

import redis
from redis import asyncio as aioredis

from employee_cache.config import get_redis_client
from employee_cache.errors import StoreUnavailableError


class RedisKeyValueStore:
    """Redis-backed cache store.

    This class satisfies the KeyValueStore protocol through structural
    typing - no explicit inheritance needed.

    Values are stored as plain strings with an optional expiry
    (``SET key value EX ttl``).
    """

    def __init__(self, redis_client: aioredis.Redis | None = None) -> None:
        """Initialize the Redis key-value store.

        Args:
            redis_client: asyncio Redis client. If None, creates default.
        """
        self._client = redis_client or get_redis_client()

    @classmethod
    def create(cls, redis_client: aioredis.Redis | None = None) -> "RedisKeyValueStore":
        """Factory method to create RedisKeyValueStore with defaults.

        Args:
            redis_client: asyncio Redis client. If None, uses settings.

        Returns:
            Configured RedisKeyValueStore
        """
        return cls(redis_client=redis_client)

    async def get(self, key: str) -> bytes | None:
        """Fetch the value stored under ``key``.

        Raises:
            StoreUnavailableError: If Redis cannot be reached
        """
        try:
            value = await self._client.get(key)
        except redis.RedisError as e:
            raise StoreUnavailableError(f"GET {key} failed: {e}") from e
        if isinstance(value, str):
            return value.encode("utf-8")
        return value

    async def set(self, key: str, value: bytes, ttl: int | None = None) -> None:
        """Store ``value`` under ``key`` with an optional TTL in seconds.

        Raises:
            StoreUnavailableError: If Redis cannot be reached
        """
        try:
            await self._client.set(key, value, ex=ttl or None)
        except redis.RedisError as e:
            raise StoreUnavailableError(f"SET {key} failed: {e}") from e

    async def delete(self, key: str) -> bool:
        """Delete ``key``.

        Returns:
            True if deleted, False otherwise

        Raises:
            StoreUnavailableError: If Redis cannot be reached
        """
        try:
            result: int = await self._client.delete(key)
        except redis.RedisError as e:
            raise StoreUnavailableError(f"DEL {key} failed: {e}") from e
        return result > 0

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except redis.RedisError:
            return False

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    @property
    def client(self) -> aioredis.Redis:
        """Get the Redis client."""
        return self._client
