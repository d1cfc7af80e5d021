# 📜 rate_service/errors/strategies.py
"""
📜 Стратегії конвертації сторонніх винятків у доменні `AppError`.

🔹 `HttpxErrorStrategy` відокремлює клієнтські відповіді (4xx) від транзитних збоїв
    (мережа, таймаут, 5xx), щоб ретраєр міг вирішити, чи повторювати спробу.
🔹 Нові стратегії додаються без змін у клієнтах.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx                                                        # 🌐 HTTP-клієнт (винятки)

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування стратегій
from typing import Optional, Protocol                               # 📐 Типи

# 🧩 Внутрішні модулі проєкту
from .custom_errors import AppError, UpstreamClientError, UpstreamTransientError


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger("rate_service.errors.strategies")


def _url_of(error: Exception) -> str:
    """🔗 Дістає URL запиту з httpx-винятку (якщо він є)."""
    try:
        return str(error.request.url)  # type: ignore[attr-defined]
    except (AttributeError, RuntimeError):                          # 🕳️ httpx кидає RuntimeError без request
        return "N/A"


# ================================
# 🧠 КОНТРАКТ СТРАТЕГІЙ
# ================================
class IErrorHandlingStrategy(Protocol):
    """🧠 Контракт, що визначає єдиний метод `handle`."""

    def handle(self, error: Exception) -> Optional[AppError]:
        """Вертає `AppError`, якщо виняток розпізнано, або None."""


# ================================
# 🌐 HTTPX-СТРАТЕГІЯ
# ================================
class HttpxErrorStrategy(IErrorHandlingStrategy):
    """🌐 Перетворює httpx-помилки на `UpstreamClientError` / `UpstreamTransientError`."""

    def handle(self, error: Exception) -> Optional[AppError]:
        if isinstance(error, httpx.HTTPStatusError):                # 🔢 Неочікуваний статус
            url = _url_of(error)
            status = error.response.status_code
            logger.debug("🔢 httpx status error", extra={"url": url, "status": status})
            if 400 <= status < 500:
                return UpstreamClientError(status, error.response.reason_phrase, url=url)
            return UpstreamTransientError(
                f"Monobank API responded with HTTP {status}",
                url=url,
                upstream_status=status,
                details=str(error),
            )

        if isinstance(error, httpx.TimeoutException):               # ⏱️ Таймаути запиту
            url = _url_of(error)
            logger.debug("⏱️ httpx timeout", extra={"url": url})
            return UpstreamTransientError("Monobank API request timed out", url=url, details=str(error))

        if isinstance(error, httpx.TransportError):                 # 🌐 Немає відповіді взагалі
            url = _url_of(error)
            logger.debug("🌐 httpx transport error", extra={"url": url})
            return UpstreamTransientError("Monobank API is unreachable", url=url, details=str(error))

        return None


__all__ = [
    "IErrorHandlingStrategy",
    "HttpxErrorStrategy",
]
