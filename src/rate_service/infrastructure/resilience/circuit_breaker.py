# 🔌 rate_service/infrastructure/resilience/circuit_breaker.py
"""
🔌 Circuit breaker навколо `BackoffRetrier` для захисту провайдера курсів.

🔹 CLOSED → OPEN, коли `consecutive_failures >= failure_threshold`.
🔹 OPEN: виклики відхиляються одразу (`CircuitOpenError`) до спливу `reset_timeout`.
🔹 Після `reset_timeout` рівно один виклик проходить як пробний (HALF_OPEN);
    успіх закриває circuit, невдача знову відкриває його й перезапускає таймер.
    Скасований пробний виклик (`CancelledError`) звільняє слот і повертає OPEN без обліку невдачі.
🔹 Облік невдач - один раз на зовнішній виклик, незалежно від кількості внутрішніх спроб.
🔹 Стан змінюється лише під `asyncio.Lock`; мережевий виклик виконується поза локом.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio                                                      # 🔐 Синхронізація стану
import logging                                                      # 🧾 Логи переходів
import time                                                         # ⏱️ Монотонний годинник
from dataclasses import dataclass                                   # 🧱 Знімок стану
from enum import Enum                                               # 🏷️ Фази
from typing import Awaitable, Callable, Optional, TypeVar           # 📐 Типи

# 🧩 Внутрішні модулі проєкту
from rate_service.errors.custom_errors import CircuitOpenError
from rate_service.shared.metrics import BREAKER_REJECTIONS, BREAKER_STATE

from .backoff_retrier import BackoffRetrier

logger = logging.getLogger("rate_service.infrastructure.resilience.breaker")

T = TypeVar("T")


class CircuitState(str, Enum):
    """🏷️ Фази circuit breaker."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


_STATE_GAUGE = {CircuitState.CLOSED: 0, CircuitState.OPEN: 1, CircuitState.HALF_OPEN: 2}


@dataclass(frozen=True, slots=True)
class BreakerSnapshot:
    """📸 Знімок стану для діагностики та тестів."""

    state: CircuitState
    consecutive_failures: int
    last_failure_at: Optional[float]
    failure_threshold: int
    reset_timeout: float


class CircuitBreaker:
    """🔌 Процесний circuit breaker; один екземпляр на застосунок."""

    def __init__(
        self,
        retrier: BackoffRetrier,
        *,
        failure_threshold: int = 5,
        reset_timeout: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be >= 1")
        if reset_timeout < 0:
            raise ValueError("reset_timeout must be >= 0")
        self._retrier = retrier
        self.failure_threshold = int(failure_threshold)
        self.reset_timeout = float(reset_timeout)
        self._clock = clock

        self._lock = asyncio.Lock()
        self._state = CircuitState.CLOSED
        self._consecutive_failures = 0
        self._last_failure_at: Optional[float] = None
        self._trial_in_flight = False
        BREAKER_STATE.set(_STATE_GAUGE[self._state])

    # ================================
    # 🔓 ПУБЛІЧНИЙ ІНТЕРФЕЙС
    # ================================
    @property
    def state(self) -> CircuitState:
        return self._state

    def snapshot(self) -> BreakerSnapshot:
        return BreakerSnapshot(
            state=self._state,
            consecutive_failures=self._consecutive_failures,
            last_failure_at=self._last_failure_at,
            failure_threshold=self.failure_threshold,
            reset_timeout=self.reset_timeout,
        )

    async def call(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Виконує `operation` через ретраєр, якщо circuit дозволяє.

        Raises:
            CircuitOpenError: circuit відкритий або пробний виклик уже виконується.
            AppError: помилка, що вийшла з ретраєра (після обліку невдачі).
        """
        await self._acquire_permission()
        try:
            result = await self._retrier.run(operation)
        except Exception:
            await self._record_failure()
            raise
        except BaseException:
            self._abandon_trial()
            raise
        await self._record_success()
        return result

    async def reset(self) -> None:
        """🔄 Примусово закриває circuit (адмін-операції, тести)."""
        async with self._lock:
            self._close_locked()
            logger.info("🔄 Circuit скинуто вручну")

    # ================================
    # 🔒 ВНУТРІШНЯ ЛОГІКА
    # ================================
    def _set_state_locked(self, state: CircuitState) -> None:
        self._state = state
        BREAKER_STATE.set(_STATE_GAUGE[state])

    def _close_locked(self) -> None:
        self._consecutive_failures = 0
        self._last_failure_at = None
        self._trial_in_flight = False
        self._set_state_locked(CircuitState.CLOSED)

    def _reject_locked(self, retry_after: Optional[float]) -> CircuitOpenError:
        BREAKER_REJECTIONS.inc()
        logger.warning("🔌 Circuit is OPEN - rejecting request")
        return CircuitOpenError(retry_after_s=retry_after)

    async def _acquire_permission(self) -> None:
        async with self._lock:
            if self._state is CircuitState.CLOSED:
                return

            if self._state is CircuitState.HALF_OPEN:
                if self._trial_in_flight:
                    raise self._reject_locked(None)
                self._trial_in_flight = True
                return

            elapsed = self._clock() - (self._last_failure_at or 0.0)
            if elapsed < self.reset_timeout:
                raise self._reject_locked(self.reset_timeout - elapsed)

            self._set_state_locked(CircuitState.HALF_OPEN)
            self._trial_in_flight = True
            logger.info("🟡 Circuit is HALF-OPEN - attempting recovery")

    def _abandon_trial(self) -> None:
        """🚫 Скасований пробний виклик: знову OPEN, таймер перезапускається, невдача не рахується."""
        if self._state is not CircuitState.HALF_OPEN:
            return
        self._trial_in_flight = False
        self._last_failure_at = self._clock()
        self._set_state_locked(CircuitState.OPEN)
        logger.warning("🚫 Пробний виклик скасовано, circuit знову OPEN")

    async def _record_success(self) -> None:
        async with self._lock:
            if self._state is not CircuitState.CLOSED:
                logger.info("🟢 Circuit CLOSED після успішного пробного виклику")
            self._close_locked()

    async def _record_failure(self) -> None:
        async with self._lock:
            self._consecutive_failures += 1
            self._last_failure_at = self._clock()
            was_trial = self._state is CircuitState.HALF_OPEN
            self._trial_in_flight = False
            if was_trial or self._consecutive_failures >= self.failure_threshold:
                if self._state is not CircuitState.OPEN:
                    logger.error(
                        "🔴 Circuit OPENED after %s consecutive failures",
                        self._consecutive_failures,
                    )
                self._set_state_locked(CircuitState.OPEN)
            else:
                logger.debug(
                    "⚠️ Невдача %s/%s (circuit ще закритий)",
                    self._consecutive_failures,
                    self.failure_threshold,
                )


__all__ = ["CircuitState", "BreakerSnapshot", "CircuitBreaker"]
