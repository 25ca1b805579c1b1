from __future__ import annotations

from typing import Sequence

from swingscreener.core.types import Bar, closes
from swingscreener.indicators.base import Indicator
from swingscreener.indicators.series import bollinger_bands


class BollingerBands(Indicator):
    def __init__(self, period: int = 20, num_std: float = 2.0) -> None:
        self.name = "BBANDS"
        self.period = period
        self.num_std = num_std
        self.warmup_period = period

    def calculate(self, bars: Sequence[Bar]) -> dict | None:
        if not self.is_ready(bars):
            return None

        window = closes(bars[-self.period :])
        bands = bollinger_bands(window, self.period, self.num_std)
        upper = bands.upper[-1]
        middle = bands.middle[-1]
        lower = bands.lower[-1]

        band_range = upper - lower
        if band_range == 0:
            pct_b = 0.5
        else:
            pct_b = (window[-1] - lower) / band_range

        return {
            "upper": upper,
            "middle": middle,
            "lower": lower,
            "pct_b": pct_b,
        }
