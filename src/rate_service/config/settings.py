# 🧾 rate_service/config/settings.py
"""
🧾 Іммутабельні налаштування сервісу конвертації.

🔹 Збираються з `ConfigService` (YAML + ENV) з толерантним приведенням типів.
🔹 Інваріанти перевіряються одразу в `__post_init__`.
🔹 Таймаути circuit breaker та ретраїв задаються в мілісекундах (як у змінних середовища),
    решта - у секундах.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Optional

# 🧩 Внутрішні модулі проєкту
from rate_service.domain.currency.codes import UAH_CODE
from rate_service.infrastructure.currency.monobank_client import DEFAULT_API_URL

from .config_service import ConfigService

logger = logging.getLogger("rate_service.config.settings")


# ================================
# 🛠️ ХЕЛПЕРИ КОНВЕРСІЙ
# ================================
def _to_int(val: Any, default_val: int) -> int:
    """🔢 Конвертує значення у int із fallback."""
    if val is None:
        return default_val
    try:
        return int(val)
    except (TypeError, ValueError):
        logger.warning("⚠️ Неможливо перетворити '%s' у int → fallback=%s.", val, default_val)
        return default_val


def _to_float(val: Any, default_val: float) -> float:
    """🔢 Конвертує значення у float із fallback."""
    if val is None:
        return default_val
    try:
        return float(val)
    except (TypeError, ValueError):
        logger.warning("⚠️ Неможливо перетворити '%s' у float → fallback=%s.", val, default_val)
        return default_val


# ================================
# 🧱 МОДЕЛЬ НАЛАШТУВАНЬ
# ================================
@dataclass(frozen=True, slots=True)
class ConverterSettings:
    """🧱 Параметри ланцюжка отримання курсів і кешу."""

    api_url: str = DEFAULT_API_URL
    request_timeout_sec: float = 5.0
    base_code: int = UAH_CODE
    cache_backend: Literal["memory", "redis"] = "memory"
    cache_ttl_sec: float = 300
    redis_url: str = "redis://localhost:6379/0"
    redis_prefix: str = "rate_service"
    retry_max_attempts: int = 3
    retry_base_delay_ms: int = 1000
    breaker_threshold: int = 5
    breaker_timeout_ms: int = 30_000
    metrics_port: int = 0
    currency_codes: Dict[str, int] = field(default_factory=dict)   # ⚪ порожньо → вбудований довідник

    def __post_init__(self) -> None:
        if not self.api_url:
            raise ValueError("api_url is required")
        if self.request_timeout_sec <= 0:
            raise ValueError("request_timeout_sec must be > 0")
        if self.cache_backend not in ("memory", "redis"):
            raise ValueError(f"cache_backend must be 'memory' or 'redis', got: {self.cache_backend!r}")
        if self.cache_ttl_sec <= 0:
            raise ValueError("cache_ttl_sec must be > 0")
        if self.retry_max_attempts < 1:
            raise ValueError("retry_max_attempts must be >= 1")
        if self.retry_base_delay_ms < 0:
            raise ValueError("retry_base_delay_ms must be >= 0")
        if self.breaker_threshold < 1:
            raise ValueError("breaker_threshold must be >= 1")
        if self.breaker_timeout_ms < 0:
            raise ValueError("breaker_timeout_ms must be >= 0")

    @property
    def retry_base_delay_sec(self) -> float:
        return self.retry_base_delay_ms / 1000

    @property
    def breaker_timeout_sec(self) -> float:
        return self.breaker_timeout_ms / 1000

    @classmethod
    def from_config(cls, config: Optional[ConfigService] = None) -> "ConverterSettings":
        """🌱 Будує налаштування з `ConfigService` (невалідні значення → дефолти)."""
        cfg = config or ConfigService()
        defaults = cls()

        host = cfg.get("redis.host", "localhost")
        port = _to_int(cfg.get("redis.port"), 6379)
        db = _to_int(cfg.get("redis.db"), 0)
        codes_node = cfg.get("currency_api.codes") or {}
        codes: Dict[str, int] = {}
        if isinstance(codes_node, Mapping):
            codes = {str(k): _to_int(v, 0) for k, v in codes_node.items() if _to_int(v, 0) > 0}

        settings = cls(
            api_url=str(cfg.get("currency_api.url", defaults.api_url)),
            request_timeout_sec=_to_float(cfg.get("currency_api.timeout_sec"), defaults.request_timeout_sec),
            base_code=_to_int(cfg.get("currency_api.base_code"), defaults.base_code),
            cache_backend=str(cfg.get("cache.backend", defaults.cache_backend)).lower(),  # type: ignore[arg-type]
            cache_ttl_sec=_to_float(cfg.get("cache.ttl_sec"), defaults.cache_ttl_sec),
            redis_url=str(cfg.get("redis.url") or f"redis://{host}:{port}/{db}"),
            redis_prefix=str(cfg.get("redis.prefix", defaults.redis_prefix)),
            retry_max_attempts=_to_int(cfg.get("retry.max_attempts"), defaults.retry_max_attempts),
            retry_base_delay_ms=_to_int(cfg.get("retry.base_delay_ms"), defaults.retry_base_delay_ms),
            breaker_threshold=_to_int(cfg.get("circuit_breaker.threshold"), defaults.breaker_threshold),
            breaker_timeout_ms=_to_int(cfg.get("circuit_breaker.timeout_ms"), defaults.breaker_timeout_ms),
            metrics_port=_to_int(cfg.get("metrics.port"), defaults.metrics_port),
            currency_codes=codes,
        )
        logger.info(
            "🌱 ConverterSettings: backend=%s ttl=%ss breaker=%s/%sms retries=%s",
            settings.cache_backend,
            settings.cache_ttl_sec,
            settings.breaker_threshold,
            settings.breaker_timeout_ms,
            settings.retry_max_attempts,
        )
        return settings


__all__ = ["ConverterSettings"]
