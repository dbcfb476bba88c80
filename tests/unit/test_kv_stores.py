"""Unit tests for the tutorial key-value stores (in-process and Redis)."""

from unittest.mock import AsyncMock

import redis.asyncio as redis

from app.core.config import get_settings
from app.infrastructure.cache import CacheService, InMemoryKeyValueStore


class SecondsClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


async def test_memory_store_set_get_delete() -> None:
    store = InMemoryKeyValueStore()
    assert await store.set("k", {"a": [1]}) is True
    assert await store.get("k") == {"a": [1]}
    assert await store.delete("k") is True
    assert await store.delete("k") is False
    assert await store.get("k") is None


async def test_memory_store_expires_entries() -> None:
    clock = SecondsClock()
    store = InMemoryKeyValueStore(clock=clock)
    await store.set("k", 1, ttl=10)
    clock.now = 9.9
    assert await store.get("k") == 1
    clock.now = 10
    assert await store.get("k") is None
    assert len(store) == 0


async def test_memory_store_returns_copies() -> None:
    store = InMemoryKeyValueStore()
    value = {"state": {"isActive": True}}
    await store.set("k", value)
    value["state"]["isActive"] = False
    loaded = await store.get("k")
    loaded["state"]["isActive"] = None
    assert await store.get("k") == {"state": {"isActive": True}}


def _redis_cache(client: AsyncMock) -> CacheService:
    return CacheService(redis_client=client, settings=get_settings())


async def test_redis_get_decodes_json() -> None:
    client = AsyncMock()
    client.get.return_value = '{"version": 0}'
    assert await _redis_cache(client).get("k") == {"version": 0}
    client.get.assert_awaited_once_with("k")


async def test_redis_get_discards_non_json() -> None:
    client = AsyncMock()
    client.get.return_value = "not-json"
    assert await _redis_cache(client).get("k") is None


async def test_redis_set_uses_ttl() -> None:
    client = AsyncMock()
    assert await _redis_cache(client).set("k", {"a": 1}, ttl=30) is True
    client.setex.assert_awaited_once_with("k", 30, '{"a": 1}')


async def test_redis_errors_degrade_to_miss() -> None:
    client = AsyncMock()
    client.get.side_effect = redis.RedisError("boom")
    client.setex.side_effect = redis.RedisError("boom")
    cache = _redis_cache(client)
    assert await cache.get("k") is None
    assert await cache.set("k", 1) is False


async def test_redis_unavailable_without_client() -> None:
    cache = CacheService(settings=get_settings())
    assert cache.is_available() is False
    assert await cache.get("k") is None
    assert await cache.set("k", 1) is False
    assert await cache.delete("k") is False
