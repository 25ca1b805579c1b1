from __future__ import annotations

from typing import Sequence

from swingscreener.core.types import Bar, closes
from swingscreener.indicators.base import Indicator
from swingscreener.indicators.series import ema, sma


class SMA(Indicator):
    def __init__(self, period: int) -> None:
        self.name = "SMA"
        self.warmup_period = period
        self.period = period

    def calculate(self, bars: Sequence[Bar]) -> float | None:
        if not self.is_ready(bars):
            return None
        return sma(closes(bars[-self.period :]), self.period)[-1]


class EMA(Indicator):
    def __init__(self, period: int) -> None:
        self.name = "EMA"
        self.warmup_period = period
        self.period = period

    def calculate(self, bars: Sequence[Bar]) -> float | None:
        if not self.is_ready(bars):
            return None
        return ema(closes(bars), self.period)[-1]
