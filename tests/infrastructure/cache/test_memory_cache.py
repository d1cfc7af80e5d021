"""
🧪 test_memory_cache.py - unit-тести для InMemoryCacheStore

Перевіряє:
- Базові get/set/delete/clear
- Спливання TTL за керованим годинником
- TTL ≤ 0 → запис без терміну дії
- prune_expired()
"""

from datetime import timedelta

import pytest

from rate_service.infrastructure.cache.memory_cache import InMemoryCacheStore


@pytest.mark.asyncio
async def test_set_get_delete_clear(clock):
    cache = InMemoryCacheStore(clock=clock)

    await cache.set("a", {"x": 1}, 10)
    await cache.set("b", [1, 2], 10)
    assert await cache.get("a") == {"x": 1}
    assert await cache.get("missing") is None

    await cache.delete("a")
    assert await cache.get("a") is None

    await cache.clear()
    assert await cache.get("b") is None
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_entry_expires_after_ttl(clock):
    cache = InMemoryCacheStore(clock=clock)
    await cache.set("rates", [1], 300)

    clock.advance(299.9)
    assert await cache.get("rates") == [1]

    clock.advance(0.1)
    assert await cache.get("rates") is None
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_timedelta_ttl(clock):
    cache = InMemoryCacheStore(clock=clock)
    await cache.set("k", "v", timedelta(seconds=5))
    clock.advance(6)
    assert await cache.get("k") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("ttl", [0, -1, None])
async def test_non_positive_ttl_never_expires(clock, ttl):
    cache = InMemoryCacheStore(clock=clock)
    await cache.set("k", "v", ttl)
    clock.advance(10_000)
    assert await cache.get("k") == "v"


@pytest.mark.asyncio
async def test_prune_expired(clock):
    cache = InMemoryCacheStore(clock=clock)
    await cache.set("short", 1, 1)
    await cache.set("long", 2, 100)

    clock.advance(2)

    assert cache.prune_expired() == 1
    assert len(cache) == 1
    assert await cache.get("long") == 2
