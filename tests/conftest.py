"""
Shared fixtures and fakes for the cache-aside tests.
"""

import asyncio

import pytest

from employee_cache.codec import EmployeeCodec
from employee_cache.entities import EmployeeEntity
from employee_cache.repositories import InMemoryEmployeeRepository, InMemoryKeyValueStore
from employee_cache.services import CacheAsideService


class CountingRepository(InMemoryEmployeeRepository):
    """System of record that counts and optionally fails or stalls lookups."""

    def __init__(self, employees=None, latency=0.0):
        super().__init__(employees, latency=latency)
        self.find_calls = 0
        self.active_finds = 0
        self.max_active_finds = 0
        self.fail_with: Exception | None = None
        self.stall = False
        self.gate: asyncio.Event | None = None

    async def find_by_id(self, entity_id):
        self.find_calls += 1
        self.active_finds += 1
        self.max_active_finds = max(self.max_active_finds, self.active_finds)
        try:
            if self.stall:
                await asyncio.Event().wait()
            employee = await super().find_by_id(entity_id)
            if self.fail_with is not None:
                raise self.fail_with
            if self.gate is not None:
                # Hold the already fetched value back
                await self.gate.wait()
            return employee
        finally:
            self.active_finds -= 1

    async def save(self, entity):
        if self.fail_with is not None:
            raise self.fail_with
        return await super().save(entity)

    async def delete_by_id(self, entity_id):
        if self.fail_with is not None:
            raise self.fail_with
        await super().delete_by_id(entity_id)


class HangingStore(InMemoryKeyValueStore):
    """Key-value store whose calls never complete."""

    async def get(self, key):
        await asyncio.Event().wait()

    async def set(self, key, value, ttl=None):
        await asyncio.Event().wait()

    async def delete(self, key):
        await asyncio.Event().wait()


class GatedStore(InMemoryKeyValueStore):
    """Key-value store whose writes wait until the gate is opened."""

    def __init__(self):
        super().__init__()
        self.set_gate = asyncio.Event()

    async def set(self, key, value, ttl=None):
        await self.set_gate.wait()
        await super().set(key, value, ttl)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return InMemoryKeyValueStore(clock=clock)


@pytest.fixture
def repository():
    return CountingRepository([EmployeeEntity(id=1, name="John Doe")])


@pytest.fixture
def service(store, repository):
    """Cache-aside service over in-memory collaborators."""
    return CacheAsideService(
        store=store,
        record_store=repository,
        codec=EmployeeCodec(),
        ttl=60,
        key_prefix="employee:",
        cache_timeout=0.05,
        record_timeout=0.5,
    )
