# 🚨 rate_service/errors/custom_errors.py
"""
🚨 Ієрархія доменних помилок сервісу конвертації.

🔹 `AppError` → `UserVisibleError` - база з повідомленням, деталями та HTTP-статусом.
🔹 Кожен тип відповідає одному виду збою: некоректний ввід, відсутній курс, неповні дані,
    клієнтська / транзитна помилка провайдера, недоступність сервісу, відкритий circuit.
🔹 `to_log_extra()` формує словник для `logger.extra`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування створення помилок
from typing import Dict, Optional                                   # 📐 Типізація

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger("rate_service.errors.custom_errors")


# ================================
# ⚠️ КОДИ ПОМИЛОК
# ================================
class ErrorCode:
    """⚠️ Стабільні коди для логів і метрик."""

    INVALID_INPUT = "invalid_input"
    RATE_NOT_FOUND = "rate_not_found"
    INCOMPLETE_RATE_DATA = "incomplete_rate_data"
    UPSTREAM_CLIENT = "upstream_client_error"
    UPSTREAM_TRANSIENT = "upstream_transient_error"
    SERVICE_UNAVAILABLE = "service_unavailable"
    CIRCUIT_OPEN = "circuit_open"
    UNKNOWN = "unknown_error"


# ================================
# 🧠 БАЗОВІ КЛАСИ
# ================================
class AppError(Exception):
    """🧠 Корінь усіх помилок застосунку."""

    code: str = ErrorCode.UNKNOWN
    status_code: int = 500

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_log_extra(self) -> Dict[str, object]:
        """📦 Формує словник для логів."""
        extra: Dict[str, object] = {"error_code": self.code, "status_code": self.status_code}
        if self.details:
            extra["details"] = self.details
        return extra


class UserVisibleError(AppError):
    """👀 Помилка, повідомлення якої можна показати клієнту як є."""


# ================================
# 🧾 ПОМИЛКИ ВВОДУ ТА РОЗРАХУНКУ
# ================================
class InvalidInputError(UserVisibleError):
    """🧾 Некоректна сума або невідомий символ валюти. Ніколи не ретраїться."""

    code = ErrorCode.INVALID_INPUT
    status_code = 400


class RateNotFoundError(UserVisibleError):
    """🔍 Для пари немає ні прямого, ні синтетичного курсу."""

    code = ErrorCode.RATE_NOT_FOUND
    status_code = 404

    def __init__(self, source: str, target: str) -> None:
        super().__init__(f"Exchange rate not found for {source} to {target}")
        self.source = source
        self.target = target


class IncompleteRateDataError(UserVisibleError):
    """🧩 Пара знайдена, але потрібного поля курсу немає або воно ≤ 0."""

    code = ErrorCode.INCOMPLETE_RATE_DATA
    status_code = 503

    def __init__(self, rate_kind: str) -> None:
        super().__init__("Incomplete exchange rate data.", details=f"missing {rate_kind} rate")
        self.rate_kind = rate_kind


# ================================
# 🌐 ПОМИЛКИ ПРОВАЙДЕРА
# ================================
class UpstreamError(UserVisibleError):
    """🌐 Спільна база для збоїв при зверненні до провайдера курсів."""

    def __init__(
        self,
        message: str,
        *,
        details: Optional[str] = None,
        url: Optional[str] = None,
        upstream_status: Optional[int] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.url = url
        self.upstream_status = upstream_status

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.url:
            extra["url"] = self.url
        if self.upstream_status is not None:
            extra["upstream_status"] = self.upstream_status
        return extra


class UpstreamClientError(UpstreamError):
    """🚫 Провайдер відповів 4xx. Ретраї марні - статус прокидаємо далі."""

    code = ErrorCode.UPSTREAM_CLIENT

    def __init__(self, status: int, reason: str = "", *, url: Optional[str] = None) -> None:
        super().__init__(
            f"Monobank API error: {reason or status}",
            url=url,
            upstream_status=status,
        )
        self.status_code = status                                   # 🔢 Статус провайдера = статус відповіді


class UpstreamTransientError(UpstreamError):
    """⏳ Мережа, таймаут, 5xx або зіпсоване тіло відповіді - можна повторити."""

    code = ErrorCode.UPSTREAM_TRANSIENT
    status_code = 503


class ServiceUnavailableError(UserVisibleError):
    """🛑 Провайдер недоступний: вичерпано спроби або спрацював circuit breaker."""

    code = ErrorCode.SERVICE_UNAVAILABLE
    status_code = 503


class CircuitOpenError(ServiceUnavailableError):
    """🔌 Circuit breaker відкритий - запит відхилено без мережевого виклику."""

    code = ErrorCode.CIRCUIT_OPEN

    def __init__(self, retry_after_s: Optional[float] = None) -> None:
        super().__init__("Service temporarily unavailable. Please try again later.")
        self.retry_after_s = retry_after_s
        logger.debug("🔌 CircuitOpenError created", extra={"retry_after_s": retry_after_s})

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.retry_after_s is not None:
            extra["retry_after_s"] = round(self.retry_after_s, 3)
        return extra


# ================================
# 📤 ПУБЛІЧНИЙ API
# ================================
__all__ = [
    "ErrorCode",
    "AppError",
    "UserVisibleError",
    "InvalidInputError",
    "RateNotFoundError",
    "IncompleteRateDataError",
    "UpstreamError",
    "UpstreamClientError",
    "UpstreamTransientError",
    "ServiceUnavailableError",
    "CircuitOpenError",
]
