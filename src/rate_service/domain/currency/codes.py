# 📖 rate_service/domain/currency/codes.py
"""
📖 Довідник символів валют → числові коди ISO 4217.

🔹 Пошук нечутливий до регістру: символ нормалізується до верхнього регістру.
🔹 Порядок `list_supported_symbols()` збігається з порядком оголошення.
🔹 Таблицю можна перевизначити з конфігів (`currency_api.codes`).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import Dict, List, Mapping, Optional

logger = logging.getLogger("rate_service.domain.currency.codes")

UAH_CODE = 980                                                      # 🇺🇦 Базова валюта Monobank

DEFAULT_CURRENCY_CODES: Dict[str, int] = {
    "UAH": 980,
    "USD": 840,
    "EUR": 978,
    "GBP": 826,
    "PLN": 985,
    "CHF": 756,
    "CZK": 203,
    "JPY": 392,
    "CNY": 156,
    "CAD": 124,
    "AUD": 36,
    "SEK": 752,
    "NOK": 578,
    "DKK": 208,
    "HUF": 348,
    "TRY": 949,
    "ILS": 376,
    "GEL": 981,
    "KZT": 398,
    "MDL": 498,
    "RON": 946,
    "BGN": 975,
    "AED": 784,
    "INR": 356,
    "SGD": 702,
    "HKD": 344,
    "NZD": 554,
    "KRW": 410,
}


class CurrencyCodeTable:
    """📖 Статичний довідник символ → ISO-код."""

    def __init__(self, codes: Optional[Mapping[str, int]] = None) -> None:
        source = codes if codes else DEFAULT_CURRENCY_CODES
        self._codes: Dict[str, int] = {}
        for symbol, code in source.items():
            normalized = (symbol or "").strip().upper()
            if not normalized:
                continue
            self._codes[normalized] = int(code)
        logger.debug("📖 CurrencyCodeTable: %d символів", len(self._codes))

    def code_for(self, symbol: str) -> Optional[int]:
        """🔎 Повертає ISO-код символу або None."""
        return self._codes.get((symbol or "").strip().upper())

    def list_supported_symbols(self) -> List[str]:
        return list(self._codes)


__all__ = ["UAH_CODE", "DEFAULT_CURRENCY_CODES", "CurrencyCodeTable"]
