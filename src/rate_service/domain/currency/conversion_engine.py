# 🧮 rate_service/domain/currency/conversion_engine.py
"""
🧮 Розрахунок суми конвертації з напрямковим вибором поля курсу.

🔹 Ціль - базова валюта: множимо на курс купівлі (`buy`, fallback → `cross`).
🔹 Джерело - базова валюта: ділимо на курс продажу (`sell`, fallback → `cross`).
🔹 Крос-пара: множимо на `cross`.
🔹 Обчислення у Decimal, результат квантується до 4 знаків (ROUND_HALF_UP).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

# 🧩 Внутрішні модулі проєкту
from rate_service.errors.custom_errors import IncompleteRateDataError

from .interfaces import RateKind, RateRecord

logger = logging.getLogger("rate_service.domain.currency.conversion_engine")

RESULT_QUANTUM = Decimal("0.0001")                                  # 📏 Контракт точності: 4 знаки


def _to_decimal(value: Union[int, float, Decimal]) -> Decimal:
    """🧮 Приводить число до Decimal через рядок, щоб уникнути артефактів float."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Невалідне числове значення: {value!r}") from exc


def round_result(value: Union[int, float, Decimal]) -> float:
    """📐 Округлює до 4 знаків після коми."""
    return float(_to_decimal(value).quantize(RESULT_QUANTUM, rounding=ROUND_HALF_UP))


def required_rate(rate: RateRecord, kind: RateKind) -> Decimal:
    """
    Повертає поле курсу для заданого напрямку.

    Raises:
        IncompleteRateDataError: поле відсутнє або не додатне.
    """
    value: Optional[float]
    if kind is RateKind.BUY:
        value = rate.buy_rate if rate.buy_rate is not None else rate.cross_rate
    elif kind is RateKind.SELL:
        value = rate.sell_rate if rate.sell_rate is not None else rate.cross_rate
    else:
        value = rate.cross_rate

    if value is None or value <= 0:
        logger.warning(
            "🧩 Неповні дані курсу %s → %s: немає %s",
            rate.base_currency_code,
            rate.quote_currency_code,
            kind.value,
        )
        raise IncompleteRateDataError(kind.value)
    return _to_decimal(value)


def convert_amount(
    amount: Union[int, float, Decimal],
    rate: RateRecord,
    source_code: int,
    target_code: int,
    base_code: int,
) -> float:
    """💱 Конвертує суму за вже розвʼязаним курсом і повертає результат з 4 знаками."""
    value = _to_decimal(amount)
    if target_code == base_code:
        converted = value * required_rate(rate, RateKind.BUY)
    elif source_code == base_code:
        converted = value / required_rate(rate, RateKind.SELL)
    else:
        converted = value * required_rate(rate, RateKind.CROSS)
    return round_result(converted)


__all__ = ["RESULT_QUANTUM", "round_result", "required_rate", "convert_amount"]
