# 💱 rate_service/domain/currency/interfaces.py
"""
💱 Доменні контракти та DTO для валютних операцій.

🔹 `RateRecord` - один опублікований провайдером курс пари (A → B) з опційними buy/sell/cross.
🔹 `RateSnapshot` - незмінний впорядкований набір записів з одного запиту до провайдера.
🔹 `ConversionResult` - відповідь конвертації, придатна для кешування (dict round-trip).
🔹 Протоколи `ICacheStore`, `IRatesProvider`, `ICurrencyCodeTable` - точки інʼєкції.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування відкинутих записів
import math                                                         # 🔢 Перевірка скінченності чисел
from dataclasses import dataclass                                   # 🧱 Іммутабельні DTO
from enum import Enum                                               # 🏷️ Вид курсу
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

logger = logging.getLogger("rate_service.domain.currency")


# ================================
# 🏷️ ВИД КУРСУ
# ================================
class RateKind(str, Enum):
    """🏷️ Яке поле курсу потрібне для конкретного напрямку конвертації."""

    BUY = "buy"
    SELL = "sell"
    CROSS = "cross"


def _optional_rate(value: Any) -> Optional[float]:
    """🔢 Приводить поле курсу до float або None (bool та нечислові значення відкидаються)."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"rate must be a number, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"rate must be finite, got {value!r}")
    return number


# ================================
# 📄 ЗАПИС КУРСУ
# ================================
@dataclass(frozen=True, slots=True)
class RateRecord:
    """📄 Курс пари валют у форматі Monobank (`currencyCodeA` → `currencyCodeB`)."""

    base_currency_code: int
    quote_currency_code: int
    timestamp: int
    buy_rate: Optional[float] = None
    sell_rate: Optional[float] = None
    cross_rate: Optional[float] = None

    @property
    def is_usable(self) -> bool:
        """✅ True, якщо заповнене хоча б одне поле курсу."""
        return any(rate is not None for rate in (self.buy_rate, self.sell_rate, self.cross_rate))

    @classmethod
    def from_api(cls, entry: Mapping[str, Any]) -> "RateRecord":
        """🧩 Будує запис із сирого JSON-обʼєкта провайдера; кидає ValueError на зіпсованих даних."""
        try:
            base = entry["currencyCodeA"]
            quote = entry["currencyCodeB"]
        except KeyError as missing:
            raise ValueError(f"rate entry misses {missing}") from missing
        if isinstance(base, bool) or isinstance(quote, bool):
            raise ValueError("currency codes must be integers")
        return cls(
            base_currency_code=int(base),
            quote_currency_code=int(quote),
            timestamp=int(entry.get("date") or 0),
            buy_rate=_optional_rate(entry.get("rateBuy")),
            sell_rate=_optional_rate(entry.get("rateSell")),
            cross_rate=_optional_rate(entry.get("rateCross")),
        )

    def to_api(self) -> Dict[str, Any]:
        """📤 Серіалізує запис у форму провайдера (лише заповнені поля курсу)."""
        payload: Dict[str, Any] = {
            "currencyCodeA": self.base_currency_code,
            "currencyCodeB": self.quote_currency_code,
            "date": self.timestamp,
        }
        if self.buy_rate is not None:
            payload["rateBuy"] = self.buy_rate
        if self.sell_rate is not None:
            payload["rateSell"] = self.sell_rate
        if self.cross_rate is not None:
            payload["rateCross"] = self.cross_rate
        return payload


RateSnapshot = Tuple[RateRecord, ...]


def parse_snapshot(entries: Iterable[Mapping[str, Any]]) -> RateSnapshot:
    """
    🧾 Перетворює сирий список провайдера на знімок.

    Записи, які не вдається розібрати, та записи без жодного курсу відкидаються з попередженням;
    порядок решти зберігається.
    """
    records: List[RateRecord] = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            logger.warning("⚠️ Пропущено запис курсу неочікуваного типу: %s", type(entry).__name__)
            continue
        try:
            record = RateRecord.from_api(entry)
        except (TypeError, ValueError) as exc:
            logger.warning("⚠️ Пропущено некоректний запис курсу %r: %s", entry, exc)
            continue
        if not record.is_usable:
            logger.warning(
                "⚠️ Пропущено запис без курсів: %s → %s",
                record.base_currency_code,
                record.quote_currency_code,
            )
            continue
        records.append(record)
    return tuple(records)


def snapshot_to_api(snapshot: RateSnapshot) -> List[Dict[str, Any]]:
    """📤 Знімок → JSON-сумісний список (для кеш-сховища)."""
    return [record.to_api() for record in snapshot]


# ================================
# 💵 РЕЗУЛЬТАТ КОНВЕРТАЦІЇ
# ================================
@dataclass(frozen=True, slots=True)
class ConversionResult:
    """💵 Результат конвертації: символи у верхньому регістрі, результат з 4 знаками."""

    source: str
    target: str
    amount: float
    result: float

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source, "target": self.target, "amount": self.amount, "result": self.result}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ConversionResult":
        return cls(
            source=str(payload["source"]),
            target=str(payload["target"]),
            amount=payload["amount"],
            result=float(payload["result"]),
        )


# ================================
# 🔗 КОНТРАКТИ
# ================================
class ICacheStore(Protocol):
    """🗄️ Асинхронне key/value сховище з TTL (in-memory або мережеве)."""

    async def get(self, key: str) -> Optional[Any]: ...

    async def set(self, key: str, value: Any, ttl_sec: float) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def clear(self) -> None: ...


class IRatesProvider(Protocol):
    """📈 Джерело знімків курсів (з кешем і захистом від збоїв)."""

    async def get_exchange_rates(self) -> RateSnapshot: ...

    async def invalidate_cache(self) -> None: ...


class ICurrencyCodeTable(Protocol):
    """📖 Довідник символ → числовий ISO-код."""

    def code_for(self, symbol: str) -> Optional[int]: ...

    def list_supported_symbols(self) -> List[str]: ...


__all__ = [
    "RateKind",
    "RateRecord",
    "RateSnapshot",
    "parse_snapshot",
    "snapshot_to_api",
    "ConversionResult",
    "ICacheStore",
    "IRatesProvider",
    "ICurrencyCodeTable",
]
