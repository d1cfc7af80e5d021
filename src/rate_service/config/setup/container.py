# 📦 rate_service/config/setup/container.py
"""
📦 Контейнер залежностей сервісу конвертації.

🔹 Створює сервіси в правильному порядку DI: кеш → транспорт → ретраєр → breaker → провайдер → сервіс.
🔹 Володіє єдиним на процес екземпляром `CircuitBreaker`.
🔹 Закриває мережеві ресурси у `aclose()`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                           # 🧾 Базові засоби логування
from typing import Optional                                              # 🧮 Допоміжні типи

# 🧩 Внутрішні модулі проєкту
from rate_service.config.config_service import ConfigService             # 🗂️ Джерело конфігурації
from rate_service.config.settings import ConverterSettings               # 🧾 Іммутабельні налаштування
from rate_service.domain.currency.codes import CurrencyCodeTable         # 📖 Довідник ISO-кодів
from rate_service.domain.currency.interfaces import ICacheStore          # 🗄️ Контракт кешу
from rate_service.infrastructure.cache import InMemoryCacheStore, RedisCacheStore
from rate_service.infrastructure.currency import CurrencyRatesProvider, MonobankClient
from rate_service.infrastructure.resilience import BackoffRetrier, CircuitBreaker
from rate_service.services.conversion_service import ConversionService   # 💱 Оркестратор
from rate_service.shared.metrics import maybe_start_prometheus           # 📈 Bootstrap метрик
from rate_service.shared.utils.logger import LOG_NAME, init_logging_from_config

logger = logging.getLogger(f"{LOG_NAME}.container")


def bootstrap_logging(config: Optional[ConfigService] = None) -> logging.Logger:
    """Зчитує конфіг логування і запускає кореневий логер."""
    cfg = config or ConfigService()
    node = cfg.get("logging", {}) or {}
    return init_logging_from_config(node)


# ================================
# 🏛️ КОНТЕЙНЕР ЗАЛЕЖНОСТЕЙ
# ================================
class Container:
    """Координує ініціалізацію інфраструктурних та прикладних сервісів."""

    def __init__(
        self,
        settings: ConverterSettings,
        *,
        cache: Optional[ICacheStore] = None,
        monobank_client: Optional[MonobankClient] = None,
        retrier: Optional[BackoffRetrier] = None,
    ) -> None:
        self.settings = settings
        logger.info("🚀 Стартуємо побудову контейнера залежностей")
        self._setup_cache(cache)
        self._setup_transport(monobank_client)
        self._setup_resilience(retrier)
        self._setup_services()
        logger.info("✅ Контейнер готовий")

    @classmethod
    def from_config(cls, config: Optional[ConfigService] = None) -> "Container":
        """🌱 Повний bootstrap: налаштування з конфігів + можливий експорт метрик."""
        settings = ConverterSettings.from_config(config)
        maybe_start_prometheus(settings.metrics_port)
        return cls(settings)

    # ================================
    # 🧱 ЕТАПИ ПОБУДОВИ
    # ================================
    def _setup_cache(self, cache: Optional[ICacheStore]) -> None:
        if cache is not None:
            self.cache = cache
        elif self.settings.cache_backend == "redis":
            self.cache = RedisCacheStore.from_url(self.settings.redis_url, prefix=self.settings.redis_prefix)
        else:
            self.cache = InMemoryCacheStore()
        logger.debug("🗄️ Cache store: %s", type(self.cache).__name__)

    def _setup_transport(self, client: Optional[MonobankClient]) -> None:
        self.monobank_client = client or MonobankClient(
            self.settings.api_url,
            timeout_sec=self.settings.request_timeout_sec,
        )

    def _setup_resilience(self, retrier: Optional[BackoffRetrier]) -> None:
        self.retrier = retrier or BackoffRetrier(
            max_attempts=self.settings.retry_max_attempts,
            base_delay=self.settings.retry_base_delay_sec,
        )
        self.circuit_breaker = CircuitBreaker(
            self.retrier,
            failure_threshold=self.settings.breaker_threshold,
            reset_timeout=self.settings.breaker_timeout_sec,
        )

    def _setup_services(self) -> None:
        self.code_table = CurrencyCodeTable(self.settings.currency_codes or None)
        self.rates_provider = CurrencyRatesProvider(
            self.monobank_client.fetch_rates,
            self.circuit_breaker,
            self.cache,
            ttl_sec=self.settings.cache_ttl_sec,
        )
        self.conversion_service = ConversionService(
            self.rates_provider,
            self.code_table,
            self.cache,
            ttl_sec=self.settings.cache_ttl_sec,
            base_code=self.settings.base_code,
        )

    # ================================
    # 🧹 ЗАВЕРШЕННЯ РОБОТИ
    # ================================
    async def aclose(self) -> None:
        await self.monobank_client.close()
        if isinstance(self.cache, RedisCacheStore):
            await self.cache.close()
        logger.info("🧹 Контейнер закрито")


__all__ = ["Container", "bootstrap_logging"]
