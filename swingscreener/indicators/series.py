"""Pure series functions behind every technical indicator.

Each function takes an oldest-first sequence and returns the full indicator
series (one value per bar once the lookback is satisfied). A lookback longer
than the input yields an empty result rather than an error.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class MacdSeries:
    macd: list[float]
    signal: list[float]
    histogram: list[float]


@dataclass(frozen=True)
class BollingerSeries:
    upper: list[float]
    middle: list[float]
    lower: list[float]


@dataclass(frozen=True)
class VolumeAnalysis:
    avg_volume: float
    volume_ratio: float
    is_spike: bool


@dataclass(frozen=True)
class SupportResistance:
    support: list[float]
    resistance: list[float]


def sma(series: Sequence[float], period: int) -> list[float]:
    """Trailing simple moving average, ``len(series) - period + 1`` values."""
    if period <= 0 or period > len(series):
        return []
    return [sum(series[i - period + 1 : i + 1]) / period for i in range(period - 1, len(series))]


def ema(series: Sequence[float], period: int) -> list[float]:
    """Exponential moving average seeded with the SMA of the first ``period`` values."""
    if period <= 0 or period > len(series):
        return []
    multiplier = 2 / (period + 1)
    value = sum(series[:period]) / period
    result = [value]
    for x in series[period:]:
        value = (x - value) * multiplier + value
        result.append(value)
    return result


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        # No losses in the window: saturate instead of dividing by zero
        return 50.0 if avg_gain == 0 else 100.0
    rs = avg_gain / avg_loss
    return 100.0 - (100.0 / (1.0 + rs))


def rsi(series: Sequence[float], period: int = 14) -> list[float]:
    """Wilder RSI; one value per bar from index ``period`` onward.

    Initial average gain/loss are simple means over the first ``period``
    deltas, then smoothed as ``avg = (avg * (period - 1) + x) / period``.
    """
    if period <= 0 or len(series) <= period:
        return []
    deltas = [series[i] - series[i - 1] for i in range(1, len(series))]
    gains = [d if d > 0 else 0.0 for d in deltas]
    losses = [-d if d < 0 else 0.0 for d in deltas]

    avg_gain = sum(gains[:period]) / period
    avg_loss = sum(losses[:period]) / period
    result = [_rsi_value(avg_gain, avg_loss)]

    for i in range(period, len(deltas)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        result.append(_rsi_value(avg_gain, avg_loss))
    return result


def macd(
    series: Sequence[float],
    fast: int = 12,
    slow: int = 26,
    signal_period: int = 9,
) -> MacdSeries:
    """MACD line, signal line and histogram, all aligned to the same last bar.

    The fast EMA is trimmed by ``slow - fast`` leading values so both EMAs
    line up by bar; the MACD line is then trimmed by ``signal_period - 1``
    so it lines up with its signal EMA.
    """
    if fast >= slow:
        raise ValueError(f"fast period ({fast}) must be shorter than slow period ({slow})")

    slow_ema = ema(series, slow)
    if not slow_ema:
        return MacdSeries([], [], [])
    fast_ema = ema(series, fast)[slow - fast :]
    line = [f - s for f, s in zip(fast_ema, slow_ema)]

    signal = ema(line, signal_period)
    if not signal:
        return MacdSeries([], [], [])
    aligned = line[signal_period - 1 :]
    histogram = [m - s for m, s in zip(aligned, signal)]
    return MacdSeries(macd=aligned, signal=signal, histogram=histogram)


def bollinger_bands(
    series: Sequence[float],
    period: int = 20,
    num_std: float = 2.0,
) -> BollingerSeries:
    """SMA middle band with bands at ``num_std`` population standard deviations."""
    middle = sma(series, period)
    upper: list[float] = []
    lower: list[float] = []
    for i, mean in enumerate(middle):
        window = series[i : i + period]
        variance = sum((x - mean) ** 2 for x in window) / period
        stdev = math.sqrt(variance)
        upper.append(mean + num_std * stdev)
        lower.append(mean - num_std * stdev)
    return BollingerSeries(upper=upper, middle=middle, lower=lower)


def analyze_volume(
    volumes: Sequence[float],
    period: int = 20,
    spike_threshold: float = 1.5,
) -> VolumeAnalysis:
    """Ratio of the latest volume to the mean of the last ``period`` volumes."""
    if period <= 0 or len(volumes) < period:
        return VolumeAnalysis(avg_volume=0.0, volume_ratio=0.0, is_spike=False)
    avg_volume = sum(volumes[-period:]) / period
    if avg_volume <= 0:
        return VolumeAnalysis(avg_volume=0.0, volume_ratio=0.0, is_spike=False)
    ratio = volumes[-1] / avg_volume
    return VolumeAnalysis(
        avg_volume=avg_volume,
        volume_ratio=ratio,
        is_spike=ratio >= spike_threshold,
    )


def support_resistance(
    highs: Sequence[float],
    lows: Sequence[float],
    lookback: int = 20,
) -> SupportResistance:
    """Local extremes over a symmetric ``2 * lookback + 1`` window.

    A high that no other high in its window exceeds is resistance; a low
    that no other low in its window undercuts is support.
    """
    if len(highs) != len(lows):
        raise ValueError("highs and lows must have the same length")
    support: list[float] = []
    resistance: list[float] = []
    for i in range(lookback, len(highs) - lookback):
        window_highs = highs[i - lookback : i + lookback + 1]
        window_lows = lows[i - lookback : i + lookback + 1]
        if all(h <= highs[i] for h in window_highs):
            resistance.append(highs[i])
        if all(low >= lows[i] for low in window_lows):
            support.append(lows[i])
    return SupportResistance(support=support, resistance=resistance)
