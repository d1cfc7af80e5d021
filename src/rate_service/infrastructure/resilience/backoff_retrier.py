# 🔁 rate_service/infrastructure/resilience/backoff_retrier.py
"""
🔁 Повтор асинхронної операції з експоненційним backoff.

🔹 Спроба 1 - одразу; після транзитної помилки чекаємо `base_delay * 2 ** (attempt - 1)`.
🔹 `UpstreamClientError` (4xx) перериває цикл одразу й прокидається як є.
🔹 Після `max_attempts` невдач - `ServiceUnavailableError`, окремий від помилок спроб.
🔹 Функція очікування інʼєктується, тож тести не чекають реального часу.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio                                                      # 💤 Очікування між спробами
import logging                                                      # 🧾 Логи спроб
from typing import Awaitable, Callable, Optional, TypeVar           # 📐 Типи

# 🧩 Внутрішні модулі проєкту
from rate_service.errors.custom_errors import (
    ServiceUnavailableError,
    UpstreamClientError,
    UpstreamTransientError,
)
from rate_service.shared.metrics import UPSTREAM_ATTEMPTS

logger = logging.getLogger("rate_service.infrastructure.resilience.retrier")

T = TypeVar("T")

SleepFn = Callable[[float], Awaitable[None]]


class BackoffRetrier:
    """🔁 Виконує операцію до `max_attempts` разів з експоненційною паузою."""

    def __init__(
        self,
        *,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        sleep: Optional[SleepFn] = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if base_delay < 0:
            raise ValueError("base_delay must be >= 0")
        self.max_attempts = int(max_attempts)
        self.base_delay = float(base_delay)
        self._sleep: SleepFn = sleep or asyncio.sleep

    def delay_for(self, attempt: int) -> float:
        """⏱️ Пауза після невдалої спроби `attempt` (нумерація з 1)."""
        return self.base_delay * (2 ** (attempt - 1))

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        last_error: Optional[UpstreamTransientError] = None
        for attempt in range(1, self.max_attempts + 1):
            logger.debug("🌐 Спроба %s/%s отримати курси", attempt, self.max_attempts)
            try:
                result = await operation()
            except UpstreamClientError as exc:
                UPSTREAM_ATTEMPTS.labels(outcome="client_error").inc()
                logger.warning(
                    "🚫 Спроба %s: провайдер відповів %s - без повторів",
                    attempt,
                    exc.upstream_status,
                    extra=exc.to_log_extra(),
                )
                raise
            except UpstreamTransientError as exc:
                UPSTREAM_ATTEMPTS.labels(outcome="transient_error").inc()
                last_error = exc
                logger.warning("⚠️ Спроба %s/%s невдала: %s", attempt, self.max_attempts, exc.message)
                if attempt < self.max_attempts:
                    delay = self.delay_for(attempt)
                    logger.debug("💤 Очікування %.3fs перед повтором", delay)
                    await self._sleep(delay)
                continue

            UPSTREAM_ATTEMPTS.labels(outcome="success").inc()
            return result

        logger.error("❌ Усі %s спроби отримати курси невдалі", self.max_attempts)
        raise ServiceUnavailableError(
            "Failed to fetch exchange rates after multiple attempts",
            details=last_error.message if last_error else None,
        ) from last_error


__all__ = ["BackoffRetrier", "SleepFn"]
