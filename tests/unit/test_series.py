"""Unit tests for the pure indicator series functions (swingscreener/indicators/series.py).

Tests cover:
- Output length for each indicator relative to its lookback
- Empty output when the lookback exceeds the input
- RSI bounds and the zero-loss clamp
- MACD line/signal/histogram alignment
- Determinism: same input, same output
"""
from __future__ import annotations

import math

import pytest

from swingscreener.indicators.series import (
    analyze_volume,
    bollinger_bands,
    ema,
    macd,
    rsi,
    sma,
    support_resistance,
)


def _ramp(n: int = 60, start: float = 101.0) -> list[float]:
    """Closes rising by exactly 1.0 per bar."""
    return [start + i for i in range(n)]


def _zigzag(n: int = 80, up: float = 2.0, down: float = 1.0) -> list[float]:
    closes = [100.0]
    for i in range(1, n):
        closes.append(closes[-1] + (up if i % 2 == 1 else -down))
    return closes


# ---------------------------------------------------------------------------
# SMA / EMA
# ---------------------------------------------------------------------------

class TestSMA:
    def test_basic_values(self):
        assert sma([1.0, 2.0, 3.0, 4.0, 5.0], 3) == pytest.approx([2.0, 3.0, 4.0])

    def test_length_is_n_minus_period_plus_one(self):
        assert len(sma(_ramp(60), 20)) == 41

    def test_period_longer_than_series_is_empty(self):
        assert sma([1.0, 2.0], 5) == []

    def test_non_positive_period_is_empty(self):
        assert sma([1.0, 2.0], 0) == []

    def test_last_value_of_ramp_is_mean_of_last_twenty(self):
        """Closes 141..160 average to 150.5."""
        closes = _ramp(60)
        assert closes[-1] == 160.0
        assert sma(closes, 20)[-1] == pytest.approx(150.5)


class TestEMA:
    def test_seeded_with_sma(self):
        result = ema([1.0, 2.0, 3.0, 4.0, 5.0], 3)
        # seed = mean(1,2,3) = 2; k = 0.5 -> 3.0, 4.0
        assert result == pytest.approx([2.0, 3.0, 4.0])

    def test_length(self):
        assert len(ema(_ramp(50), 12)) == 39

    def test_too_short_is_empty(self):
        assert ema([1.0, 2.0], 3) == []

    def test_weights_recent_values_more(self):
        closes = [10.0] * 10 + [20.0] * 3
        # SMA of the last five is 16.0; the EMA has moved further toward 20
        assert ema(closes, 5)[-1] > sma(closes, 5)[-1]


# ---------------------------------------------------------------------------
# RSI
# ---------------------------------------------------------------------------

class TestRSI:
    def test_length_is_n_minus_period(self):
        assert len(rsi(_ramp(60), 14)) == 46

    def test_too_short_is_empty(self):
        assert rsi([1.0] * 14, 14) == []

    def test_pure_uptrend_clamps_to_100(self):
        result = rsi(_ramp(60), 14)
        assert result[-1] == 100.0
        assert result[-1] >= 70.0

    def test_pure_downtrend_is_zero(self):
        closes = [200.0 - i for i in range(40)]
        assert rsi(closes, 14)[-1] == pytest.approx(0.0)

    def test_flat_series_is_neutral(self):
        assert rsi([50.0] * 30, 14) == [50.0] * 16

    def test_values_bounded(self):
        closes = _zigzag(120, up=3.0, down=2.5)
        for value in rsi(closes, 14):
            assert 0.0 <= value <= 100.0
            assert math.isfinite(value)

    def test_two_to_one_zigzag_sits_in_momentum_zone(self):
        value = rsi(_zigzag(80), 14)[-1]
        assert 55.0 <= value <= 70.0


# ---------------------------------------------------------------------------
# MACD
# ---------------------------------------------------------------------------

class TestMACD:
    def test_all_three_series_aligned(self):
        result = macd(_zigzag(80))
        assert len(result.macd) == len(result.signal) == len(result.histogram)
        # n - (slow + signal - 1) + 1
        assert len(result.macd) == 80 - 34 + 1

    def test_histogram_is_macd_minus_signal(self):
        result = macd(_zigzag(80))
        for m, s, h in zip(result.macd, result.signal, result.histogram):
            assert h == pytest.approx(m - s)

    def test_macd_matches_ema_difference_at_last_bar(self):
        closes = _zigzag(80)
        result = macd(closes)
        assert result.macd[-1] == pytest.approx(ema(closes, 12)[-1] - ema(closes, 26)[-1])

    def test_too_short_is_empty(self):
        result = macd(_ramp(33))
        assert result.macd == [] and result.signal == [] and result.histogram == []

    def test_minimum_length_gives_one_value(self):
        assert len(macd(_ramp(34)).signal) == 1

    def test_fast_not_shorter_than_slow_raises(self):
        with pytest.raises(ValueError):
            macd(_ramp(60), fast=26, slow=12)

    def test_uptrend_macd_positive(self):
        assert macd(_ramp(60)).macd[-1] > 0


# ---------------------------------------------------------------------------
# Bollinger Bands
# ---------------------------------------------------------------------------

class TestBollingerBands:
    def test_constant_series_collapses_bands(self):
        bands = bollinger_bands([10.0] * 25, 20)
        assert bands.upper[-1] == pytest.approx(10.0)
        assert bands.lower[-1] == pytest.approx(10.0)

    def test_population_stdev(self):
        window = [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]
        bands = bollinger_bands(window, period=8, num_std=2.0)
        # population stdev of the window is 2.0
        assert bands.middle == pytest.approx([5.0])
        assert bands.upper == pytest.approx([9.0])
        assert bands.lower == pytest.approx([1.0])

    def test_lengths_match_sma(self):
        bands = bollinger_bands(_ramp(60), 20)
        assert len(bands.upper) == len(bands.middle) == len(bands.lower) == 41


# ---------------------------------------------------------------------------
# Volume analysis
# ---------------------------------------------------------------------------

class TestAnalyzeVolume:
    def test_spike_detected(self):
        analysis = analyze_volume([100.0] * 19 + [300.0])
        assert analysis.avg_volume == pytest.approx(110.0)
        assert analysis.volume_ratio == pytest.approx(300.0 / 110.0)
        assert analysis.is_spike is True

    def test_flat_volume_is_not_spike(self):
        analysis = analyze_volume([500.0] * 30)
        assert analysis.volume_ratio == pytest.approx(1.0)
        assert analysis.is_spike is False

    def test_too_short_returns_zeros(self):
        analysis = analyze_volume([100.0] * 5)
        assert (analysis.avg_volume, analysis.volume_ratio, analysis.is_spike) == (0.0, 0.0, False)

    def test_zero_average_returns_zeros(self):
        analysis = analyze_volume([0.0] * 20)
        assert analysis.volume_ratio == 0.0


# ---------------------------------------------------------------------------
# Support / resistance
# ---------------------------------------------------------------------------

class TestSupportResistance:
    def test_single_peak_and_trough(self):
        highs = [10.0, 11.0, 15.0, 11.0, 10.0, 10.5, 10.0]
        lows = [9.0, 8.0, 9.5, 9.0, 5.0, 9.0, 9.5]
        levels = support_resistance(highs, lows, lookback=2)
        assert levels.resistance == [15.0]
        assert levels.support == [5.0]

    def test_mismatched_lengths_raise(self):
        with pytest.raises(ValueError):
            support_resistance([1.0, 2.0], [1.0], lookback=1)

    def test_too_short_for_window_is_empty(self):
        levels = support_resistance([1.0] * 10, [1.0] * 10, lookback=20)
        assert levels.support == [] and levels.resistance == []


# ---------------------------------------------------------------------------
# Determinism
# ---------------------------------------------------------------------------

def test_series_functions_are_deterministic():
    closes = _zigzag(90, up=2.5, down=1.5)
    assert sma(closes, 20) == sma(list(closes), 20)
    assert ema(closes, 12) == ema(list(closes), 12)
    assert rsi(closes) == rsi(list(closes))
    assert macd(closes) == macd(list(closes))
    assert bollinger_bands(closes) == bollinger_bands(list(closes))
