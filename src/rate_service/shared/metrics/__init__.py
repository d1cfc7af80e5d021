# 📊 rate_service/shared/metrics/__init__.py
"""
📊 Prometheus-метрики сервісу конвертації.

🔹 Кеш: хіти/промахи окремо для знімків курсів і для результатів конвертації.
🔹 Провайдер: спроби HTTP-запитів з розбивкою за результатом.
🔹 Circuit breaker: відхилені виклики та поточна фаза (0=closed, 1=open, 2=half_open).
🔹 `maybe_start_prometheus()` піднімає експортер `/metrics`, якщо задано порт.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import Counter, Gauge, start_http_server     # 📊 Prometheus-метрики

# 🔠 Системні імпорти
import logging
from typing import Optional

logger = logging.getLogger("rate_service.shared.metrics")

# ================================
# 📊 ЛІЧИЛЬНИКИ КЕША
# ================================
CACHE_HITS = Counter(
    "rate_service_cache_hits_total",
    "Cache hits by namespace",
    ["namespace"],                                                  # 🏷️ rates | conversion
)

CACHE_MISSES = Counter(
    "rate_service_cache_misses_total",
    "Cache misses by namespace",
    ["namespace"],
)

# ================================
# 🌐 ПРОВАЙДЕР
# ================================
UPSTREAM_ATTEMPTS = Counter(
    "rate_service_upstream_attempts_total",
    "Upstream fetch attempts by outcome",
    ["outcome"],                                                    # 🏷️ success | client_error | transient_error
)

# ================================
# 🔌 CIRCUIT BREAKER
# ================================
BREAKER_REJECTIONS = Counter(
    "rate_service_breaker_rejections_total",
    "Calls rejected while the circuit was open",
)

BREAKER_STATE = Gauge(
    "rate_service_breaker_state",
    "Circuit breaker phase (0=closed, 1=open, 2=half_open)",
)


def maybe_start_prometheus(port: Optional[int]) -> bool:
    """🚀 Запускає HTTP-експортер метрик, якщо порт заданий (> 0)."""
    if not port or int(port) <= 0:
        logger.debug("📊 Prometheus exporter вимкнено")
        return False
    start_http_server(int(port))
    logger.info("📊 Prometheus exporter слухає порт %s", port)
    return True


__all__ = [
    "CACHE_HITS",
    "CACHE_MISSES",
    "UPSTREAM_ATTEMPTS",
    "BREAKER_REJECTIONS",
    "BREAKER_STATE",
    "maybe_start_prometheus",
]
