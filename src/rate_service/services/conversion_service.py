# 💱 rate_service/services/conversion_service.py
"""
💱 ConversionService - зовнішня точка конвертації валют.

🎯 Призначення:
    • валідує суму та символи валют (через довідник кодів);
    • повертає закешований результат, якщо така сама конвертація вже рахувалася;
    • інакше бере знімок курсів у провайдера, розвʼязує курс і рахує суму;
    • кешує результат на `ttl_sec` секунд.

⚙️ Нотатки:
    • ключ кешу - нормалізована трійка (ДЖЕРЕЛО, ЦІЛЬ, сума); інша сума → промах;
    • однакові валюти не мають окремої гілки: базова валюта сама до себе → курсу немає,
      інша валюта сама до себе → крос через базову (buy / sell, зі спредом).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логи сервісу
import math                                                         # 🔢 Перевірка скінченності
from numbers import Real                                            # 🔢 Будь-яке дійсне число
from typing import List, Tuple                                      # 📐 Типи

# 🧩 Внутрішні модулі проєкту
from rate_service.domain.currency.codes import UAH_CODE
from rate_service.domain.currency.conversion_engine import convert_amount
from rate_service.domain.currency.interfaces import (
    ConversionResult,
    ICacheStore,
    ICurrencyCodeTable,
    IRatesProvider,
)
from rate_service.domain.currency.rate_resolver import resolve_rate
from rate_service.errors.custom_errors import InvalidInputError, RateNotFoundError
from rate_service.shared.metrics import CACHE_HITS, CACHE_MISSES

logger = logging.getLogger("rate_service.services.conversion")

CONVERSION_CACHE_PREFIX = "conversion"


def conversion_cache_key(source: str, target: str, amount: float) -> str:
    """🔑 `conversion:USD:UAH:100.0` - сума нормалізується через float, тож 100 і 100.0 збігаються."""
    return f"{CONVERSION_CACHE_PREFIX}:{source.upper()}:{target.upper()}:{float(amount)!r}"


class ConversionService:
    """💱 Оркестратор: кеш результатів → провайдер курсів → резолвер → двигун конвертації."""

    def __init__(
        self,
        rates_provider: IRatesProvider,
        code_table: ICurrencyCodeTable,
        cache: ICacheStore,
        *,
        ttl_sec: float = 300,
        base_code: int = UAH_CODE,
    ) -> None:
        self._rates = rates_provider
        self._codes = code_table
        self._cache = cache
        self._ttl_sec = ttl_sec
        self._base_code = base_code

    # ================================
    # 🔓 ПУБЛІЧНИЙ ІНТЕРФЕЙС
    # ================================
    async def convert(self, source: str, target: str, amount: float) -> ConversionResult:
        """
        Конвертує `amount` із `source` у `target`.

        Raises:
            InvalidInputError: сума не є додатним числом або символ невідомий.
            RateNotFoundError: курс для пари неможливо знайти чи синтезувати.
            IncompleteRateDataError: бракує потрібного поля курсу.
            UpstreamClientError / ServiceUnavailableError: провайдер недоступний.
        """
        self._validate_amount(amount)
        source_code, target_code = self._resolve_codes(source, target)
        source_symbol = source.strip().upper()
        target_symbol = target.strip().upper()

        cache_key = conversion_cache_key(source_symbol, target_symbol, amount)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            CACHE_HITS.labels(namespace="conversion").inc()
            logger.debug("♻️ Conversion cache HIT for %s %s -> %s", amount, source_symbol, target_symbol)
            return ConversionResult.from_dict(cached)

        CACHE_MISSES.labels(namespace="conversion").inc()
        logger.debug("🌐 Conversion cache MISS for %s %s -> %s", amount, source_symbol, target_symbol)

        snapshot = await self._rates.get_exchange_rates()
        rate = resolve_rate(snapshot, source_code, target_code, self._base_code)
        if rate is None:
            logger.info("🔍 Курс не знайдено: %s -> %s", source_symbol, target_symbol)
            raise RateNotFoundError(source_symbol, target_symbol)

        converted = convert_amount(amount, rate, source_code, target_code, self._base_code)
        result = ConversionResult(source_symbol, target_symbol, amount, converted)
        logger.info("💱 Converted %s %s to %.4f %s", amount, source_symbol, converted, target_symbol)

        await self._cache.set(cache_key, result.to_dict(), self._ttl_sec)
        return result

    def list_supported_symbols(self) -> List[str]:
        return self._codes.list_supported_symbols()

    async def invalidate_rate_cache(self) -> None:
        """🧹 Очищує обидва простори кешу: результати конвертацій і знімок курсів."""
        await self._cache.clear()
        logger.info("🧹 Conversion cache invalidated")
        await self._rates.invalidate_cache()

    # ================================
    # 🔒 ВАЛІДАЦІЯ
    # ================================
    @staticmethod
    def _validate_amount(amount: object) -> None:
        if isinstance(amount, bool) or not isinstance(amount, Real):
            raise InvalidInputError(f"Invalid amount: {amount!r}. Amount must be a positive number.")
        if not math.isfinite(float(amount)) or amount <= 0:
            raise InvalidInputError(f"Invalid amount: {amount}. Amount must be a positive number.")

    def _resolve_codes(self, source: str, target: str) -> Tuple[int, int]:
        codes = []
        for symbol in (source, target):
            code = self._codes.code_for(symbol) if isinstance(symbol, str) else None
            if code is None:
                raise InvalidInputError(f"Unsupported currency: {symbol}.")
            codes.append(code)
        return codes[0], codes[1]


__all__ = ["CONVERSION_CACHE_PREFIX", "conversion_cache_key", "ConversionService"]
