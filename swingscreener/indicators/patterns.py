"""Heuristic chart-pattern detection on daily bars."""
from __future__ import annotations

from dataclasses import dataclass

from swingscreener.core.types import Bar, closes as close_series, volumes as volume_series

_MIN_BARS = 10
_FLAG_WINDOW = 10
_FLAG_MAX_RANGE_PCT = 0.05
_BREAKOUT_LOOKBACK = 20
_BREAKOUT_MULTIPLE = 2.0
_CUP_BARS = 30
_HANDLE_BARS = 10


@dataclass(frozen=True)
class Pattern:
    name: str
    confidence: float
    description: str


def _bullish_flag(closes: list[float]) -> Pattern | None:
    recent = closes[-_FLAG_WINDOW:]
    if recent[0] >= recent[-1]:
        return None
    tail = recent[-5:]
    consolidation = max(tail) - min(tail)
    avg_price = sum(recent) / len(recent)
    if consolidation < avg_price * _FLAG_MAX_RANGE_PCT:
        return Pattern(
            name="Bullish Flag",
            confidence=0.75,
            description="Price consolidating after uptrend, potential breakout",
        )
    return None


def _volume_breakout(volumes: list[float]) -> Pattern | None:
    # Average excludes the current bar
    prior = volumes[-_BREAKOUT_LOOKBACK:-1]
    if not prior:
        return None
    avg_volume = sum(prior) / len(prior)
    if avg_volume > 0 and volumes[-1] > avg_volume * _BREAKOUT_MULTIPLE:
        return Pattern(
            name="Volume Breakout",
            confidence=0.8,
            description="Significant volume spike indicating strong interest",
        )
    return None


def _cup_and_handle(closes: list[float]) -> Pattern | None:
    if len(closes) < _CUP_BARS:
        return None
    cup = closes[-_CUP_BARS:-_HANDLE_BARS]
    # The breakout bar is excluded so it can close above the handle
    handle = closes[-_HANDLE_BARS:-1]
    rim = max(cup[:5] + cup[-5:])
    handle_high = max(handle)
    if handle_high < rim * 0.95 and closes[-1] > handle_high:
        return Pattern(
            name="Cup and Handle",
            confidence=0.7,
            description="Classic bullish continuation pattern",
        )
    return None


def detect_patterns(bars: list[Bar]) -> list[Pattern]:
    """Run every pattern check against the bar history.

    Returns an empty list when fewer than 10 bars are available.
    """
    if len(bars) < _MIN_BARS:
        return []
    closes = close_series(bars)
    volumes = volume_series(bars)

    patterns: list[Pattern] = []
    for found in (_bullish_flag(closes), _volume_breakout(volumes), _cup_and_handle(closes)):
        if found is not None:
            patterns.append(found)
    return patterns
