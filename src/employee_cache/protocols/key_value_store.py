"""Key-value store protocol.

Defines the interface of the fast store that fronts the system of
record. Implementations may fail transiently; callers are expected to
treat any failure as a cache miss.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for cache storage backends.

    Any type that implements these coroutines satisfies the protocol,
    no explicit inheritance needed.
    """

    async def get(self, key: str) -> bytes | None:
        """Fetch the value stored under ``key``.

        Args:
            key: The cache key

        Returns:
            The stored bytes, or None if absent or expired
        """
        ...

    async def set(self, key: str, value: bytes, ttl: int | None = None) -> None:
        """Store ``value`` under ``key``.

        Args:
            key: The cache key
            value: Serialized snapshot
            ttl: Time-to-live in seconds, None for no expiry
        """
        ...

    async def delete(self, key: str) -> bool:
        """Delete the entry stored under ``key``.

        Args:
            key: The cache key

        Returns:
            True if an entry was removed, False otherwise
        """
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
