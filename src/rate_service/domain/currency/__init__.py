# 💱 rate_service/domain/currency/__init__.py
"""
💱 Пакет `domain.currency` публікує контракти, DTO та чисті алгоритми для валютних операцій.

🔹 `interfaces.py` - `RateRecord`, `RateSnapshot`, `ConversionResult`, протоколи інʼєкції.
🔹 `rate_resolver.py` - пошук прямого курсу або синтез крос-курсу.
🔹 `conversion_engine.py` - напрямковий вибір поля курсу та округлення результату.
🔹 `codes.py` - довідник символ → ISO-код.
"""

from .codes import UAH_CODE, CurrencyCodeTable
from .conversion_engine import convert_amount, required_rate, round_result
from .interfaces import (
    ConversionResult,
    ICacheStore,
    ICurrencyCodeTable,
    IRatesProvider,
    RateKind,
    RateRecord,
    RateSnapshot,
    parse_snapshot,
    snapshot_to_api,
)
from .rate_resolver import resolve_rate

# ================================
# 📤 ПУБЛІЧНИЙ API ПАКЕТА
# ================================
__all__ = [
    "UAH_CODE",
    "CurrencyCodeTable",
    "ConversionResult",
    "ICacheStore",
    "ICurrencyCodeTable",
    "IRatesProvider",
    "RateKind",
    "RateRecord",
    "RateSnapshot",
    "convert_amount",
    "parse_snapshot",
    "required_rate",
    "resolve_rate",
    "round_result",
    "snapshot_to_api",
]
