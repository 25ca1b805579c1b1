from __future__ import annotations

from typing import Sequence

from swingscreener.core.types import Bar, closes
from swingscreener.indicators.base import Indicator
from swingscreener.indicators.series import macd, rsi


class RSI(Indicator):
    def __init__(self, period: int = 14) -> None:
        self.name = "RSI"
        self.warmup_period = period + 1
        self.period = period

    def calculate(self, bars: Sequence[Bar]) -> float | None:
        if not self.is_ready(bars):
            return None
        return rsi(closes(bars), self.period)[-1]


class MACD(Indicator):
    def __init__(self, fast: int = 12, slow: int = 26, signal: int = 9) -> None:
        self.name = "MACD"
        self.fast = fast
        self.slow = slow
        self.signal = signal
        self.warmup_period = slow + signal - 1

    def calculate(self, bars: Sequence[Bar]) -> dict | None:
        if not self.is_ready(bars):
            return None
        result = macd(closes(bars), self.fast, self.slow, self.signal)
        return {
            "macd": result.macd[-1],
            "signal": result.signal[-1],
            "histogram": result.histogram[-1],
        }
