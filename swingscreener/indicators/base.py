from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence

from swingscreener.core.types import Bar


class Indicator(ABC):
    """Reduces an oldest-first bar window to the indicator's latest value.

    ``calculate`` returns None while fewer than ``warmup_period`` bars are
    available; callers decide what a missing value means.
    """

    name: str
    warmup_period: int

    def is_ready(self, bars: Sequence[Bar]) -> bool:
        return len(bars) >= self.warmup_period

    @abstractmethod
    def calculate(self, bars: Sequence[Bar]) -> float | dict | None: ...


@dataclass(frozen=True)
class IndicatorSpec:
    """Indicator name plus constructor params; ``key`` names its output.

    The key uses the first param, so ``IndicatorSpec("SMA", {"period": 20})``
    is reported as ``SMA_20`` and MACD(12, 26, 9) as ``MACD_12``.
    """

    name: str
    params: dict[str, Any]

    @property
    def key(self) -> str:
        if not self.params:
            return self.name
        return f"{self.name}_{next(iter(self.params.values()))}"
