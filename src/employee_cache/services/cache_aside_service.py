"""Cache-aside service for core business logic.

This service fronts an authoritative record store with a fast key-value
store. Reads prefer the key-value store and fall back to the record
store on a miss; writes and deletes go to the record store first and
then invalidate the cached snapshot.

The key-value store is never allowed to fail a call: its errors and
timeouts are logged and degrade to the slower path. Record store errors
and timeouts are raised as RecordUnavailableError.
"""

import asyncio
from collections.abc import Awaitable
from typing import Any, Generic, TypeVar

from employee_cache.config import settings
from employee_cache.errors import RecordUnavailableError, SerializationError
from employee_cache.logging_config import get_logger
from employee_cache.protocols import EntityCodec, Identifier, KeyValueStore, RecordStore

logger = get_logger(__name__)

EntityT = TypeVar("EntityT")
T = TypeVar("T")


class _InFlightLoad(Generic[EntityT]):
    """A shared record store read for one identifier."""

    __slots__ = ("task", "invalidated", "waiters")

    def __init__(self) -> None:
        self.task: asyncio.Task[EntityT | None] | None = None
        self.invalidated = False
        self.waiters = 0


class CacheAsideService(Generic[EntityT]):
    """Fronting cache accessor.

    This service depends on PROTOCOLS, not concrete implementations:
    - KeyValueStore: Redis, in-memory, ...
    - RecordStore: the system of record
    - EntityCodec: snapshot encode/decode pair

    Concurrent misses for the same identifier are coalesced: the first
    caller claims the identifier in the in-flight map and starts a single
    record store read, later callers await that same read.

    Example:
        ```python
        from employee_cache.codec import EmployeeCodec
        from employee_cache.repositories import InMemoryEmployeeRepository, RedisKeyValueStore
        from employee_cache.services import CacheAsideService

        service = CacheAsideService.create(
            store=RedisKeyValueStore.create(),
            record_store=InMemoryEmployeeRepository(),
            codec=EmployeeCodec(),
        )

        employee = await service.read(1)  # None if it does not exist
        ```
    """

    def __init__(
        self,
        store: KeyValueStore,
        record_store: RecordStore[EntityT],
        codec: EntityCodec[EntityT],
        ttl: int | None = None,
        key_prefix: str | None = None,
        cache_timeout: float | None = None,
        record_timeout: float | None = None,
    ) -> None:
        """Initialize the cache-aside service.

        Args:
            store: Key-value store holding cached snapshots (required).
            record_store: Authoritative store (required).
            codec: Snapshot serializer for the entity type (required).
            ttl: Snapshot time-to-live in seconds, 0 for no expiry. Defaults to settings.
            key_prefix: Prefix prepended to rendered identifiers. Defaults to settings.
            cache_timeout: Bound on each key-value store call in seconds. Defaults to settings.
            record_timeout: Bound on each record store call in seconds. Defaults to settings.
        """
        self._store = store
        self._records = record_store
        self._codec = codec
        self._ttl = settings.cache_ttl if ttl is None else ttl
        self._key_prefix = settings.cache_key_prefix if key_prefix is None else key_prefix
        self._cache_timeout = settings.cache_timeout if cache_timeout is None else cache_timeout
        self._record_timeout = settings.record_timeout if record_timeout is None else record_timeout
        if self._cache_timeout <= 0 or self._record_timeout <= 0:
            raise ValueError("Timeouts must be positive")

        self._in_flight: dict[Identifier, _InFlightLoad[EntityT]] = {}
        self._backfilling: dict[Identifier, list[_InFlightLoad[EntityT]]] = {}
        self._background: set[asyncio.Task[None]] = set()
        self._stats = {
            "hits": 0,
            "misses": 0,
            "store_errors": 0,
            "serialization_errors": 0,
            "backfills": 0,
            "backfill_failures": 0,
            "coalesced_reads": 0,
            "invalidation_failures": 0,
        }

    @classmethod
    def create(
        cls,
        store: KeyValueStore,
        record_store: RecordStore[EntityT],
        codec: EntityCodec[EntityT],
        ttl: int | None = None,
        key_prefix: str | None = None,
        cache_timeout: float | None = None,
        record_timeout: float | None = None,
    ) -> "CacheAsideService[EntityT]":
        """Factory method to create CacheAsideService with settings defaults.

        Args:
            store: Key-value store (required).
            record_store: System of record (required).
            codec: Snapshot serializer (required).
            ttl: Snapshot TTL in seconds. If None, uses settings.
            key_prefix: Cache key prefix. If None, uses settings.
            cache_timeout: Key-value store call bound. If None, uses settings.
            record_timeout: Record store call bound. If None, uses settings.

        Returns:
            Configured CacheAsideService instance
        """
        return cls(
            store=store,
            record_store=record_store,
            codec=codec,
            ttl=ttl,
            key_prefix=key_prefix,
            cache_timeout=cache_timeout,
            record_timeout=record_timeout,
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def read(self, entity_id: Identifier) -> EntityT | None:
        """Return the entity for ``entity_id``, or None if it does not exist.

        Business logic:
        1. Look up the cached snapshot; a hit returns without touching
           the record store
        2. On a miss, a store failure or an undecodable snapshot, read the
           record store (shared with concurrent readers of the same id)
        3. Backfill the cache in the background if the entity exists

        Args:
            entity_id: Identifier of the entity

        Returns:
            The entity, or None if the record store does not have it

        Raises:
            ValueError: If ``entity_id`` is None or empty
            RecordUnavailableError: If the record store fails or times out
        """
        self._validate_id(entity_id)
        key = self._key(entity_id)

        cached = await self._cache_get(key)
        if cached is not None:
            self._stats["hits"] += 1
            logger.debug("cache_hit", key=key)
            return cached

        self._stats["misses"] += 1
        logger.debug("cache_miss", key=key)
        return await self._load_coalesced(entity_id, key)

    async def write(self, entity: EntityT) -> EntityT:
        """Save ``entity`` to the record store, then invalidate its snapshot.

        An entity without an identifier is created and the store-assigned
        identifier is returned with it. The cached snapshot is deleted,
        never updated in place.

        Args:
            entity: The entity to save

        Returns:
            The stored entity

        Raises:
            RecordUnavailableError: If the save fails; the cache is untouched
        """
        saved = await self._call_record_store(self._records.save(entity), "save")
        entity_id = self._codec.identify(saved)
        if entity_id is not None:
            await self._invalidate(entity_id)
        return saved

    async def delete(self, entity_id: Identifier) -> None:
        """Delete ``entity_id`` from the record store, then invalidate its snapshot.

        Raises:
            ValueError: If ``entity_id`` is None or empty
            RecordUnavailableError: If the delete fails; the cache is untouched
        """
        self._validate_id(entity_id)
        await self._call_record_store(self._records.delete_by_id(entity_id), "delete_by_id")
        await self._invalidate(entity_id)

    async def list_all(self) -> list[EntityT]:
        """Return every entity straight from the record store (not cached).

        Raises:
            RecordUnavailableError: If the record store fails or times out
        """
        return await self._call_record_store(self._records.find_all(), "find_all")

    async def drain(self) -> None:
        """Wait for outstanding background backfills to finish."""
        while self._background:
            await asyncio.gather(*self._background, return_exceptions=True)

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with counters and configuration
        """
        stats: dict[str, Any] = dict(self._stats)
        stats["in_flight"] = len(self._in_flight)
        stats["ttl"] = self._ttl
        stats["key_prefix"] = self._key_prefix
        return stats

    async def is_healthy(self) -> bool:
        """Check if the key-value store is reachable."""
        try:
            return await asyncio.wait_for(self._store.health_check(), self._cache_timeout)
        except Exception as e:
            logger.warning("cache_health_check_failed", error=repr(e))
            return False

    @property
    def ttl(self) -> int:
        """Get the snapshot time-to-live in seconds."""
        return self._ttl

    @property
    def store(self) -> KeyValueStore:
        """Get the underlying key-value store (for testing)."""
        return self._store

    @property
    def record_store(self) -> RecordStore[EntityT]:
        """Get the underlying record store (for testing)."""
        return self._records

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_id(entity_id: Identifier) -> None:
        if entity_id is None or entity_id == "":
            raise ValueError("Identifier must not be None or empty")

    def _key(self, entity_id: Identifier) -> str:
        # Integer ids render as plain decimals; string ids are tagged so
        # that "1" and 1 never share a key
        if isinstance(entity_id, str):
            return f"{self._key_prefix}str:{entity_id}"
        return f"{self._key_prefix}{entity_id}"

    async def _cache_get(self, key: str) -> EntityT | None:
        try:
            data = await asyncio.wait_for(self._store.get(key), self._cache_timeout)
        except Exception as e:
            self._stats["store_errors"] += 1
            logger.warning("cache_get_failed", key=key, error=repr(e))
            return None

        if data is None:
            return None

        try:
            return self._codec.decode(data)
        except SerializationError as e:
            self._stats["serialization_errors"] += 1
            logger.warning("cache_entry_corrupt", key=key, error=e.message)
            await self._cache_delete(key)
            return None

    async def _cache_delete(self, key: str) -> bool:
        """Best-effort delete. Returns False if the store call failed."""
        try:
            await asyncio.wait_for(self._store.delete(key), self._cache_timeout)
        except Exception as e:
            self._stats["store_errors"] += 1
            logger.warning("cache_delete_failed", key=key, error=repr(e))
            return False
        return True

    async def _call_record_store(self, call: Awaitable[T], operation: str) -> T:
        try:
            return await asyncio.wait_for(call, self._record_timeout)
        except RecordUnavailableError:
            raise
        except asyncio.TimeoutError as e:
            logger.error("record_store_timeout", operation=operation, timeout=self._record_timeout)
            raise RecordUnavailableError(
                f"{operation} timed out after {self._record_timeout}s",
                details={"operation": operation},
            ) from e
        except Exception as e:
            logger.error("record_store_failed", operation=operation, error=repr(e))
            raise RecordUnavailableError(
                f"{operation} failed: {e}",
                details={"operation": operation},
            ) from e

    async def _load_coalesced(self, entity_id: Identifier, key: str) -> EntityT | None:
        candidate: _InFlightLoad[EntityT] = _InFlightLoad()
        load = self._in_flight.setdefault(entity_id, candidate)

        if load is candidate:
            load.task = asyncio.ensure_future(self._load(entity_id, key, load))
            load.task.add_done_callback(lambda _: self._release(entity_id, load))
        else:
            self._stats["coalesced_reads"] += 1
            logger.debug("cache_miss_coalesced", key=key)

        # A cancelled caller stops waiting without cancelling the read for
        # the others; the read itself is cancelled once nobody waits on it
        load.waiters += 1
        try:
            return await asyncio.shield(load.task)
        except asyncio.CancelledError:
            if load.waiters == 1 and not load.task.done():
                if self._in_flight.get(entity_id) is load:
                    del self._in_flight[entity_id]
                load.task.cancel()
            raise
        finally:
            load.waiters -= 1

    def _release(self, entity_id: Identifier, load: _InFlightLoad[EntityT]) -> None:
        if self._in_flight.get(entity_id) is load:
            del self._in_flight[entity_id]
        # Consume the outcome so an unawaited failure is not reported twice
        if load.task is not None and not load.task.cancelled():
            load.task.exception()

    async def _load(self, entity_id: Identifier, key: str, load: _InFlightLoad[EntityT]) -> EntityT | None:
        entity = await self._call_record_store(self._records.find_by_id(entity_id), "find_by_id")
        if entity is None:
            # Negative results are not cached
            return None

        if not load.invalidated:
            self._backfilling.setdefault(entity_id, []).append(load)
            self._spawn(self._backfill(entity_id, key, entity, load))
        return entity

    def _spawn(self, coro: Awaitable[None]) -> None:
        task = asyncio.ensure_future(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _backfill(
        self, entity_id: Identifier, key: str, entity: EntityT, load: _InFlightLoad[EntityT]
    ) -> None:
        try:
            data = self._codec.encode(entity)
            if load.invalidated:
                return
            await asyncio.wait_for(self._store.set(key, data, self._ttl or None), self._cache_timeout)
        except Exception as e:
            self._stats["backfill_failures"] += 1
            logger.warning("cache_backfill_failed", key=key, error=repr(e))
            return
        finally:
            pending = self._backfilling.get(entity_id)
            if pending is not None and load in pending:
                pending.remove(load)
                if not pending:
                    del self._backfilling[entity_id]

        if load.invalidated:
            # A write or delete landed while the snapshot was being stored
            logger.debug("cache_backfill_revoked", key=key)
            await self._cache_delete(key)
            return
        self._stats["backfills"] += 1

    async def _invalidate(self, entity_id: Identifier) -> None:
        key = self._key(entity_id)

        # Readers arriving from now on must not join a read that started
        # before the record store mutation
        load = self._in_flight.pop(entity_id, None)
        if load is not None:
            load.invalidated = True
        for load in self._backfilling.pop(entity_id, []):
            load.invalidated = True

        if not await self._cache_delete(key):
            self._stats["invalidation_failures"] += 1
            logger.warning("cache_invalidation_failed", key=key, risk="stale_entry")
