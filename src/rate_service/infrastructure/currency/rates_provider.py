# 📈 rate_service/infrastructure/currency/rates_provider.py
"""
📈 Провайдер знімків курсів: кеш → circuit breaker → ретраєр → Monobank.

🔹 Знімок кешується одним записом під ключем `monobank_rates` на `ttl_sec` секунд.
🔹 У кеш потрапляє лише результат успішного ланцюжка; помилки не кешуються.
🔹 Паралельні промахи кешу можуть обидва піти до провайдера - останній запис перемагає.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логи кешу/отримання
from typing import Awaitable, Callable                              # 📐 Типи

# 🧩 Внутрішні модулі проєкту
from rate_service.domain.currency.interfaces import (
    ICacheStore,
    RateSnapshot,
    parse_snapshot,
    snapshot_to_api,
)
from rate_service.infrastructure.resilience.circuit_breaker import CircuitBreaker
from rate_service.shared.metrics import CACHE_HITS, CACHE_MISSES

logger = logging.getLogger("rate_service.infrastructure.currency.rates_provider")

RATES_CACHE_KEY = "monobank_rates"


class CurrencyRatesProvider:
    """📈 Реалізація `IRatesProvider` з TTL-кешем і захистом від збоїв провайдера."""

    def __init__(
        self,
        fetch: Callable[[], Awaitable[RateSnapshot]],
        breaker: CircuitBreaker,
        cache: ICacheStore,
        *,
        ttl_sec: float = 300,
    ) -> None:
        self._fetch = fetch
        self._breaker = breaker
        self._cache = cache
        self._ttl_sec = ttl_sec

    async def get_exchange_rates(self) -> RateSnapshot:
        cached = await self._cache.get(RATES_CACHE_KEY)
        if cached is not None:
            CACHE_HITS.labels(namespace="rates").inc()
            logger.debug("♻️ Cache HIT - returning cached exchange rates")
            return parse_snapshot(cached)

        CACHE_MISSES.labels(namespace="rates").inc()
        logger.debug("🌐 Cache MISS - fetching from Monobank API")

        snapshot = await self._breaker.call(self._fetch)

        await self._cache.set(RATES_CACHE_KEY, snapshot_to_api(snapshot), self._ttl_sec)
        logger.debug("💾 Cached exchange rates for %s seconds", self._ttl_sec)
        return snapshot

    async def invalidate_cache(self) -> None:
        await self._cache.delete(RATES_CACHE_KEY)
        logger.info("🧹 Rates cache invalidated")


__all__ = ["RATES_CACHE_KEY", "CurrencyRatesProvider"]
