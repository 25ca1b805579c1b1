from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Bar:
    """One daily OHLCV observation, oldest-first in every sequence."""

    symbol: str
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float


def closes(bars: list[Bar]) -> list[float]:
    return [b.close for b in bars]


def volumes(bars: list[Bar]) -> list[float]:
    return [b.volume for b in bars]
