from __future__ import annotations

from typing import Iterable, Sequence

from swingscreener.core.types import Bar
from swingscreener.indicators.base import Indicator, IndicatorSpec
from swingscreener.indicators.builtin.momentum import MACD, RSI
from swingscreener.indicators.builtin.moving_average import EMA, SMA
from swingscreener.indicators.builtin.volatility import BollingerBands
from swingscreener.indicators.builtin.volume import VolumeRatio

_INDICATOR_REGISTRY: dict[str, type[Indicator]] = {
    "SMA": SMA,
    "EMA": EMA,
    "RSI": RSI,
    "MACD": MACD,
    "BBANDS": BollingerBands,
    "VOLUME": VolumeRatio,
}


class IndicatorEngine:
    """Computes a set of registered indicators over one bar history."""

    def __init__(self, specs: Iterable[IndicatorSpec] = ()) -> None:
        self._indicators: dict[str, Indicator] = {}
        for spec in specs:
            self.register(spec)

    @staticmethod
    def available() -> list[str]:
        return sorted(_INDICATOR_REGISTRY)

    def register(self, spec: IndicatorSpec) -> str:
        """Add an indicator and return the key its value is reported under.

        Raises:
            ValueError: If ``spec.name`` is not a known indicator.
        """
        cls = _INDICATOR_REGISTRY.get(spec.name)
        if cls is None:
            raise ValueError(
                f"Unknown indicator: {spec.name} (known: {', '.join(self.available())})"
            )
        self._indicators[spec.key] = cls(**spec.params)
        return spec.key

    @property
    def keys(self) -> list[str]:
        return list(self._indicators)

    def compute(self, bars: Sequence[Bar]) -> dict[str, float | dict | None]:
        """Latest value per key; None where the history is shorter than the warm-up."""
        return {key: ind.calculate(bars) for key, ind in self._indicators.items()}

    @property
    def max_warmup(self) -> int:
        return max((ind.warmup_period for ind in self._indicators.values()), default=0)
