"""
🧪 test_redis_cache.py - unit-тести для RedisCacheStore

Перевіряє:
- JSON-серіалізацію значень і префікс ключів
- Передачу TTL у мілісекундах (`px`)
- Видалення зіпсованих значень на читанні
- clear() зачіпає лише ключі свого префікса
"""

import json
from typing import Any, Dict, List, Optional, Tuple

import pytest

from rate_service.infrastructure.cache.redis_cache import RedisCacheStore


class _FakeRedis:
    """Мінімальний асинхронний двійник `redis.asyncio.Redis` на dict."""

    def __init__(self) -> None:
        self.data: Dict[str, str] = {}
        self.set_calls: List[Tuple[str, Optional[int]]] = []
        self.closed = False

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str, px: Optional[int] = None) -> bool:
        self.data[key] = value
        self.set_calls.append((key, px))
        return True

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
        return removed

    async def scan_iter(self, match: str, count: int = 10):
        prefix = match.rstrip("*")
        for key in list(self.data):
            if key.startswith(prefix):
                yield key

    async def aclose(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_set_and_get_use_prefix_and_json():
    client = _FakeRedis()
    store = RedisCacheStore(client, prefix="svc:")

    value: Any = [{"currencyCodeA": 840, "rateBuy": 37.5}]
    await store.set("monobank_rates", value, 300)

    assert json.loads(client.data["svc:monobank_rates"]) == value
    assert client.set_calls == [("svc:monobank_rates", 300_000)]
    assert await store.get("monobank_rates") == value
    assert await store.get("missing") is None


@pytest.mark.asyncio
async def test_set_without_ttl_has_no_expiry():
    client = _FakeRedis()
    store = RedisCacheStore(client)
    await store.set("k", 1, 0)
    assert client.set_calls == [("rate_service:k", None)]


@pytest.mark.asyncio
async def test_corrupt_value_is_dropped():
    client = _FakeRedis()
    client.data["rate_service:k"] = "{not json"
    store = RedisCacheStore(client)

    assert await store.get("k") is None
    assert "rate_service:k" not in client.data


@pytest.mark.asyncio
async def test_clear_only_touches_own_prefix():
    client = _FakeRedis()
    client.data["other:key"] = "1"
    store = RedisCacheStore(client)
    await store.set("conversion:USD:UAH:100.0", {"result": 1}, 10)
    await store.set("monobank_rates", [], 10)

    await store.clear()

    assert client.data == {"other:key": "1"}


@pytest.mark.asyncio
async def test_delete_and_close():
    client = _FakeRedis()
    store = RedisCacheStore(client)
    await store.set("k", 1, 10)
    await store.delete("k")
    assert client.data == {}

    await store.close()
    assert client.closed
