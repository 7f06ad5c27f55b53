"""
Tests for the Redis key-value store adapter.
"""

from unittest.mock import AsyncMock

import pytest
import redis

from employee_cache.errors import StoreUnavailableError
from employee_cache.repositories import RedisKeyValueStore


@pytest.fixture
def client():
    return AsyncMock()


@pytest.fixture
def redis_store(client):
    return RedisKeyValueStore.create(redis_client=client)


@pytest.mark.asyncio
async def test_get_returns_bytes(redis_store, client):
    client.get.return_value = b'{"id":1,"name":"John Doe"}'

    assert await redis_store.get("employee:1") == b'{"id":1,"name":"John Doe"}'
    client.get.assert_awaited_once_with("employee:1")


@pytest.mark.asyncio
async def test_get_missing_key_returns_none(redis_store, client):
    client.get.return_value = None

    assert await redis_store.get("employee:1") is None


@pytest.mark.asyncio
async def test_set_passes_ttl_as_expiry(redis_store, client):
    await redis_store.set("employee:1", b"value", ttl=60)

    client.set.assert_awaited_once_with("employee:1", b"value", ex=60)


@pytest.mark.asyncio
@pytest.mark.parametrize("ttl", [None, 0])
async def test_set_without_ttl_has_no_expiry(redis_store, client, ttl):
    await redis_store.set("employee:1", b"value", ttl=ttl)

    client.set.assert_awaited_once_with("employee:1", b"value", ex=None)


@pytest.mark.asyncio
async def test_delete_reports_removal(redis_store, client):
    client.delete.return_value = 1
    assert await redis_store.delete("employee:1") is True

    client.delete.return_value = 0
    assert await redis_store.delete("employee:1") is False


@pytest.mark.asyncio
async def test_redis_errors_become_store_unavailable(redis_store, client):
    client.get.side_effect = redis.ConnectionError("connection refused")
    client.set.side_effect = redis.TimeoutError("timed out")
    client.delete.side_effect = redis.RedisError("boom")

    with pytest.raises(StoreUnavailableError) as excinfo:
        await redis_store.get("employee:1")
    assert isinstance(excinfo.value.__cause__, redis.ConnectionError)

    with pytest.raises(StoreUnavailableError):
        await redis_store.set("employee:1", b"value", ttl=60)
    with pytest.raises(StoreUnavailableError):
        await redis_store.delete("employee:1")


@pytest.mark.asyncio
async def test_health_check(redis_store, client):
    client.ping.return_value = True
    assert await redis_store.health_check() is True

    client.ping.side_effect = redis.ConnectionError("connection refused")
    assert await redis_store.health_check() is False


@pytest.mark.asyncio
async def test_close_closes_client(redis_store, client):
    await redis_store.close()

    client.aclose.assert_awaited_once()
