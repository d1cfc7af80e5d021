# 💾 rate_service/infrastructure/cache/memory_cache.py
"""
💾 Thread-safe in-memory кеш з TTL, що реалізує `ICacheStore`.

🔹 Монотонний годинник (інʼєктується для тестів) і RLock.
🔹 TTL фіксується на записі; прострочені записи прибираються на читанні або через `prune_expired()`.
🔹 Використовується за замовчуванням і в тестах; мережевий аналог - `RedisCacheStore`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логи роботи кешу
import time                                                         # ⏱️ Монотонний годинник
from dataclasses import dataclass                                   # 📦 Внутрішні структури
from datetime import timedelta                                      # 🕒 TTL у timedelta
from threading import RLock                                         # 🔒 Потокобезпечний доступ
from typing import Any, Callable, Dict, Optional, Union             # 📐 Типи API

logger = logging.getLogger("rate_service.infrastructure.cache.memory")


def _normalize_ttl(ttl: Optional[Union[int, float, timedelta]]) -> float:
    """Приводить TTL до секунд (float ≥ 0)."""
    if ttl is None:
        return 0.0
    if isinstance(ttl, timedelta):
        return max(0.0, ttl.total_seconds())
    try:
        return max(0.0, float(ttl))
    except (TypeError, ValueError):
        logger.warning("⚠️ Некоректний TTL: %r", ttl)
        return 0.0


@dataclass(slots=True)
class _CacheItem:
    data: Any                                                        # 📄 Збережені дані
    expires_at: float                                                # ⏳ 0.0 → без терміну дії


class InMemoryCacheStore:
    """💾 Процесний кеш з TTL на записі."""

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._cache: Dict[str, _CacheItem] = {}
        self._lock = RLock()
        self._clock = clock
        logger.debug("⚙️ InMemoryCacheStore init")

    async def get(self, key: str) -> Optional[Any]:
        with self._lock:
            item = self._cache.get(key)
            if item is None:
                logger.debug("🔍 cache miss: %s", key)
                return None
            if item.expires_at and self._clock() >= item.expires_at:
                logger.debug("⌛ cache expired: %s", key)
                self._cache.pop(key, None)
                return None
            logger.debug("✅ cache hit: %s", key)
            return item.data

    async def set(self, key: str, value: Any, ttl_sec: Union[int, float, timedelta, None] = None) -> None:
        """Записує значення; TTL ≤ 0 означає «без терміну дії»."""
        ttl = _normalize_ttl(ttl_sec)
        with self._lock:
            expires = (self._clock() + ttl) if ttl > 0 else 0.0
            self._cache[key] = _CacheItem(data=value, expires_at=expires)
            logger.debug("💾 set: %s ttl=%s", key, ttl)

    async def delete(self, key: str) -> None:
        with self._lock:
            removed = self._cache.pop(key, None)
            logger.debug("🧹 delete %s removed=%s", key, removed is not None)

    async def clear(self) -> None:
        with self._lock:
            size = len(self._cache)
            self._cache.clear()
            logger.debug("🧨 clear: removed=%d", size)

    def prune_expired(self) -> int:
        """🧯 Прибирає прострочені записи; повертає їх кількість."""
        with self._lock:
            now = self._clock()
            expired = [k for k, item in self._cache.items() if item.expires_at and now >= item.expires_at]
            for key in expired:
                self._cache.pop(key, None)
            if expired:
                logger.debug("🧯 prune_expired: %d", len(expired))
            return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)


__all__ = ["InMemoryCacheStore"]
