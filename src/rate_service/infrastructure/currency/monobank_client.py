# 🏦 rate_service/infrastructure/currency/monobank_client.py
"""
🏦 HTTP-транспорт до публічного API курсів Monobank.

🔹 Один виклик `fetch_rates()` = один GET-запит; повтори робить `BackoffRetrier`.
🔹 httpx-винятки класифікуються через `HttpxErrorStrategy`:
    4xx → `UpstreamClientError`, мережа / таймаут / 5xx → `UpstreamTransientError`.
🔹 Тіло, що не є JSON-списком, теж вважається транзитним збоєм.
🔹 `timeout_sec` обмежує і кожну фазу httpx, і весь запит загалом (`asyncio.wait_for`).
🔹 `httpx.AsyncClient` створюється ліниво під локом і закривається через `close()`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx                                                        # 🌐 HTTP-клієнт для Monobank

# 🔠 Системні імпорти
import asyncio                                                      # 🔐 Лок ініціалізації, ⏱️ загальний таймаут
import logging                                                      # 🧾 Логи транспорту
from typing import Optional                                         # 📐 Типи

# 🧩 Внутрішні модулі проєкту
from rate_service.domain.currency.interfaces import RateSnapshot, parse_snapshot
from rate_service.errors.custom_errors import UpstreamTransientError
from rate_service.errors.strategies import HttpxErrorStrategy

logger = logging.getLogger("rate_service.infrastructure.currency.monobank")

DEFAULT_API_URL = "https://api.monobank.ua/bank/currency"


class MonobankClient:
    """🏦 Асинхронний клієнт ендпойнта `/bank/currency`."""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        *,
        timeout_sec: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_url = api_url
        self._timeout = float(timeout_sec)
        self._transport = transport                                 # 🧪 MockTransport у тестах
        self._client: Optional[httpx.AsyncClient] = None
        self._init_lock = asyncio.Lock()
        self._errors = HttpxErrorStrategy()

    @property
    def api_url(self) -> str:
        return self._api_url

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is not None and not self._client.is_closed:
            return self._client
        async with self._init_lock:
            if self._client is None or self._client.is_closed:
                self._client = httpx.AsyncClient(
                    timeout=self._timeout,
                    headers={"Accept": "application/json"},
                    transport=self._transport,
                )
                logger.info("🔧 MonobankClient ініціалізовано (timeout=%ss)", self._timeout)
        return self._client

    async def fetch_rates(self) -> RateSnapshot:
        """
        Отримує повний знімок курсів одним запитом.

        Raises:
            UpstreamClientError: провайдер відповів 4xx.
            UpstreamTransientError: мережа, таймаут, 5xx або невалідне тіло.
        """
        client = await self._ensure_client()
        try:
            response = await asyncio.wait_for(client.get(self._api_url), timeout=self._timeout)
            response.raise_for_status()
        except asyncio.TimeoutError as exc:
            raise UpstreamTransientError(
                "Monobank API request timed out", url=self._api_url, details=f"> {self._timeout}s total"
            ) from exc
        except httpx.HTTPError as exc:
            mapped = self._errors.handle(exc)
            if mapped is None:
                raise UpstreamTransientError(
                    "Unexpected Monobank API failure", url=self._api_url, details=str(exc)
                ) from exc
            raise mapped from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamTransientError(
                "Monobank API returned invalid JSON", url=self._api_url, details=str(exc)
            ) from exc

        if not isinstance(payload, list):
            logger.warning("⚠️ API валют повернуло не список, а %s", type(payload).__name__)
            raise UpstreamTransientError(
                "Monobank API returned an unexpected payload",
                url=self._api_url,
                details=type(payload).__name__,
            )

        snapshot = parse_snapshot(payload)
        logger.info("✅ Отримано %d курсів від Monobank", len(snapshot))
        return snapshot

    async def close(self) -> None:
        """🔌 Закриває HTTP-клієнт (graceful shutdown)."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.info("🔌 HTTP-клієнт Monobank закрито.")


__all__ = ["DEFAULT_API_URL", "MonobankClient"]
