# 🧱 rate_service/infrastructure/cache/redis_cache.py
"""
🧱 Мережеве кеш-сховище поверх Redis (`redis.asyncio`).

🔹 Значення серіалізуються в JSON, TTL передається Redis у мілісекундах (`px`).
🔹 Усі ключі живуть під префіксом; `clear()` видаляє лише свої ключі (SCAN + DEL), не FLUSHDB.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from redis import asyncio as aioredis                               # 🧱 Асинхронний клієнт Redis

# 🔠 Системні імпорти
import json                                                         # 📄 Серіалізація значень
import logging                                                      # 🧾 Логи сховища
from typing import Any, List, Optional                              # 📐 Типи

logger = logging.getLogger("rate_service.infrastructure.cache.redis")


class RedisCacheStore:
    """🧱 Реалізація `ICacheStore` для Redis."""

    def __init__(self, client: "aioredis.Redis", *, prefix: str = "rate_service") -> None:
        self._client = client
        self._prefix = prefix.rstrip(":")

    @classmethod
    def from_url(cls, url: str, *, prefix: str = "rate_service") -> "RedisCacheStore":
        """🔌 Створює сховище з URL (`redis://host:port/db`)."""
        client = aioredis.from_url(url, decode_responses=True)
        logger.info("🔌 RedisCacheStore → %s (prefix=%s)", url, prefix)
        return cls(client, prefix=prefix)

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    async def get(self, key: str) -> Optional[Any]:
        raw = await self._client.get(self._key(key))
        if raw is None:
            logger.debug("🔍 redis miss: %s", key)
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("⚠️ Зіпсоване значення в Redis для %s - видаляю", key)
            await self._client.delete(self._key(key))
            return None

    async def set(self, key: str, value: Any, ttl_sec: Optional[float] = None) -> None:
        payload = json.dumps(value, ensure_ascii=False)
        ttl_ms = int(float(ttl_sec) * 1000) if ttl_sec else 0
        if ttl_ms > 0:
            await self._client.set(self._key(key), payload, px=ttl_ms)
        else:
            await self._client.set(self._key(key), payload)
        logger.debug("💾 redis set: %s ttl_ms=%s", key, ttl_ms)

    async def delete(self, key: str) -> None:
        await self._client.delete(self._key(key))

    async def clear(self) -> None:
        batch: List[str] = []
        removed = 0
        async for key in self._client.scan_iter(match=f"{self._prefix}:*", count=500):
            batch.append(key)
            if len(batch) >= 500:
                removed += await self._client.delete(*batch)
                batch.clear()
        if batch:
            removed += await self._client.delete(*batch)
        logger.info("🧨 Redis cache cleared (prefix=%s, keys=%d)", self._prefix, removed)

    async def close(self) -> None:
        await self._client.aclose()


__all__ = ["RedisCacheStore"]
