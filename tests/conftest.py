# tests/conftest.py
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Додаємо src у sys.path, щоб працював імпорт "rate_service.…" без встановлення пакета
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from rate_service.domain.currency.interfaces import RateRecord, RateSnapshot  # noqa: E402

UAH = 980
USD = 840
EUR = 978
PLN = 985


class FakeClock:
    """⏱️ Керований монотонний годинник."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SleepRecorder:
    """💤 Замість asyncio.sleep - лише запамʼятовує паузи."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def make_record(
    base: int,
    quote: int = UAH,
    *,
    buy: Optional[float] = None,
    sell: Optional[float] = None,
    cross: Optional[float] = None,
    ts: int = 1_700_000_000,
) -> RateRecord:
    return RateRecord(base, quote, ts, buy_rate=buy, sell_rate=sell, cross_rate=cross)


def api_entry(base: int, quote: int = UAH, ts: int = 1_700_000_000, **rates: float) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"currencyCodeA": base, "currencyCodeB": quote, "date": ts}
    entry.update(rates)
    return entry


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def monobank_payload() -> List[Dict[str, Any]]:
    """Типова відповідь Monobank: USD/EUR з buy/sell, PLN лише з cross, EUR→USD крос-запис."""
    return [
        api_entry(USD, UAH, ts=1_700_000_100, rateBuy=37.5, rateSell=38.0),
        api_entry(EUR, UAH, ts=1_700_000_200, rateBuy=41.0, rateSell=41.5),
        api_entry(EUR, USD, ts=1_700_000_300, rateBuy=1.08, rateSell=1.09),
        api_entry(PLN, UAH, ts=1_700_000_050, rateCross=9.5),
    ]


@pytest.fixture
def snapshot() -> RateSnapshot:
    return (
        make_record(USD, buy=37.5, sell=38.0, ts=1_700_000_100),
        make_record(EUR, buy=41.0, sell=41.5, ts=1_700_000_200),
        make_record(PLN, cross=9.5, ts=1_700_000_050),
    )
