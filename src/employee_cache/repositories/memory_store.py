"""In-process KeyValueStore.

Used by the demo script and the test-suite. Supports TTL expiry through
an injectable monotonic clock and can simulate an outage.
"""

import time
from collections.abc import Callable

from employee_cache.errors import StoreUnavailableError


class InMemoryKeyValueStore:
    """Dict-backed cache store with lazy TTL expiry.

    This class satisfies the KeyValueStore protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        store = InMemoryKeyValueStore()
        await store.set("employee:1", b"...", ttl=60)

        store.fail = True  # every call now raises StoreUnavailableError
        ```
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[str, tuple[bytes, float | None]] = {}
        self._clock = clock
        self.fail = False

    def _check_available(self) -> None:
        if self.fail:
            raise StoreUnavailableError("In-memory store is marked as failing")

    async def get(self, key: str) -> bytes | None:
        self._check_available()
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set(self, key: str, value: bytes, ttl: int | None = None) -> None:
        self._check_available()
        expires_at = self._clock() + ttl if ttl else None
        self._entries[key] = (value, expires_at)

    async def delete(self, key: str) -> bool:
        self._check_available()
        return self._entries.pop(key, None) is not None

    async def health_check(self) -> bool:
        return not self.fail

    def keys(self) -> list[str]:
        """Return the keys currently held, expired ones included."""
        return list(self._entries)

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        if entry is None:
            return False
        expires_at = entry[1]
        return expires_at is None or self._clock() < expires_at
