# 💱 rate_service/infrastructure/currency/__init__.py
"""
💱 Інфраструктурні сервіси для роботи з курсами.

🔹 `MonobankClient` - HTTP-транспорт до API Monobank.
🔹 `CurrencyRatesProvider` - кешований і захищений circuit breaker-ом доступ до знімків курсів.
"""

from __future__ import annotations

from .monobank_client import DEFAULT_API_URL, MonobankClient
from .rates_provider import RATES_CACHE_KEY, CurrencyRatesProvider

__all__ = ["DEFAULT_API_URL", "MonobankClient", "RATES_CACHE_KEY", "CurrencyRatesProvider"]
