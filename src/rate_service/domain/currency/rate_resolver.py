# 🔍 rate_service/domain/currency/rate_resolver.py
"""
🔍 Пошук або синтез курсу для пари валют у знімку провайдера.

🔹 Пара з базовою валютою: шукаємо запис `<ІНОЗЕМНА> → <БАЗОВА>`.
🔹 Крос-пара: беремо обидва «плечі» до базової валюти та синтезуємо `cross_rate`
    як `buy(джерело) / sell(ціль)` (зі спредом провайдера).
🔹 Перший відповідний запис у порядку знімка перемагає; дублікати не порівнюються.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import Optional

# 🧩 Внутрішні модулі проєкту
from .interfaces import RateRecord, RateSnapshot

logger = logging.getLogger("rate_service.domain.currency.rate_resolver")


def find_base_leg(snapshot: RateSnapshot, foreign_code: int, base_code: int) -> Optional[RateRecord]:
    """Повертає перший придатний запис `foreign_code → base_code`."""
    for record in snapshot:
        if (
            record.base_currency_code == foreign_code
            and record.quote_currency_code == base_code
            and record.is_usable
        ):
            return record
    return None


def _leg_value(primary: Optional[float], cross: Optional[float]) -> float:
    # 0 і None трактуються однаково: беремо наступне поле
    return primary or cross or 1.0


def synthesize_cross_rate(source_leg: RateRecord, target_leg: RateRecord) -> RateRecord:
    """
    🧮 Синтезує крос-курс джерело → ціль через базову валюту.

    `cross_rate = (source.buy ?? source.cross ?? 1) / (target.sell ?? target.cross ?? 1)`,
    мітка часу - новіша з двох. Синтетичний запис несе лише `cross_rate`.
    """
    cross_rate = _leg_value(source_leg.buy_rate, source_leg.cross_rate) / _leg_value(
        target_leg.sell_rate, target_leg.cross_rate
    )
    return RateRecord(
        base_currency_code=source_leg.base_currency_code,
        quote_currency_code=target_leg.base_currency_code,
        timestamp=max(source_leg.timestamp, target_leg.timestamp),
        cross_rate=cross_rate,
    )


def resolve_rate(
    snapshot: RateSnapshot,
    source_code: int,
    target_code: int,
    base_code: int,
) -> Optional[RateRecord]:
    """
    Знаходить курс для пари `source_code → target_code`.

    Returns:
        RateRecord | None: прямий запис відносно базової валюти, синтетичний крос-курс
        або None, якщо потрібних записів у знімку немає.
    """
    if source_code == base_code or target_code == base_code:
        foreign_code = target_code if source_code == base_code else source_code
        record = find_base_leg(snapshot, foreign_code, base_code)
        logger.debug("🔍 Пряма пара %s ↔ %s: %s", foreign_code, base_code, "знайдено" if record else "немає")
        return record

    source_leg = find_base_leg(snapshot, source_code, base_code)
    if source_leg is None:
        logger.debug("🔍 Немає плеча %s → %s для крос-курсу", source_code, base_code)
        return None
    target_leg = find_base_leg(snapshot, target_code, base_code)
    if target_leg is None:
        logger.debug("🔍 Немає плеча %s → %s для крос-курсу", target_code, base_code)
        return None

    synthesized = synthesize_cross_rate(source_leg, target_leg)
    logger.debug(
        "🧮 Крос-курс %s → %s = %s (ts=%s)",
        source_code,
        target_code,
        synthesized.cross_rate,
        synthesized.timestamp,
    )
    return synthesized


__all__ = ["find_base_leg", "synthesize_cross_rate", "resolve_rate"]
