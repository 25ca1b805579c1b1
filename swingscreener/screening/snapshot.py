"""Technical snapshot builder.

Runs the indicator engine over a symbol's daily bars and keeps only the
latest value of each indicator. Indicators whose lookback exceeds the
available history (SMA200 on a 120-bar series, for instance) fall back to
0.0 instead of failing the screen.
"""
from __future__ import annotations

import logging
import math

from swingscreener.core.exceptions import ComputationError, InsufficientHistory
from swingscreener.core.types import Bar
from swingscreener.indicators.base import IndicatorSpec
from swingscreener.indicators.engine import IndicatorEngine
from swingscreener.screening import BollingerValue, MacdValue, TechnicalSnapshot

logger = logging.getLogger(__name__)

MIN_BARS = 50

SNAPSHOT_SPECS: list[IndicatorSpec] = [
    IndicatorSpec("RSI", {"period": 14}),
    IndicatorSpec("MACD", {"fast": 12, "slow": 26, "signal": 9}),
    IndicatorSpec("SMA", {"period": 20}),
    IndicatorSpec("SMA", {"period": 50}),
    IndicatorSpec("SMA", {"period": 200}),
    IndicatorSpec("BBANDS", {"period": 20, "num_std": 2.0}),
    IndicatorSpec("VOLUME", {"period": 20}),
]


def _scalar(value: float | dict | None) -> float:
    return float(value) if isinstance(value, (int, float)) else 0.0


def _field(value: float | dict | None, name: str) -> float:
    if isinstance(value, dict):
        return float(value.get(name, 0.0))
    return 0.0


def build_technical_snapshot(
    bars: list[Bar],
    min_bars: int = MIN_BARS,
    symbol: str | None = None,
) -> TechnicalSnapshot:
    """Reduce a bar history to a TechnicalSnapshot.

    Args:
        bars: Daily bars ordered oldest-first.
        min_bars: Minimum history length required.
        symbol: Symbol for error messages; defaults to the bars' symbol.

    Returns:
        TechnicalSnapshot built from the last value of each indicator.

    Raises:
        InsufficientHistory: If fewer than ``min_bars`` bars are supplied.
        ComputationError: If any indicator produced a non-finite value.
    """
    symbol = symbol or (bars[0].symbol if bars else "?")
    if len(bars) < min_bars:
        raise InsufficientHistory(symbol, len(bars), min_bars)

    values = IndicatorEngine(SNAPSHOT_SPECS).compute(bars)

    macd_value = values["MACD_12"]
    bbands = values["BBANDS_20"]
    volume = values["VOLUME_20"]

    snapshot = TechnicalSnapshot(
        price=bars[-1].close,
        rsi=_scalar(values["RSI_14"]),
        macd=MacdValue(
            macd=_field(macd_value, "macd"),
            signal=_field(macd_value, "signal"),
            histogram=_field(macd_value, "histogram"),
        ),
        sma20=_scalar(values["SMA_20"]),
        sma50=_scalar(values["SMA_50"]),
        sma200=_scalar(values["SMA_200"]),
        volume_avg20=_field(volume, "avg_volume"),
        bollinger=BollingerValue(
            upper=_field(bbands, "upper"),
            middle=_field(bbands, "middle"),
            lower=_field(bbands, "lower"),
        ),
        volume_ratio=_field(volume, "volume_ratio"),
    )

    numbers = [
        snapshot.price, snapshot.rsi, snapshot.sma20, snapshot.sma50, snapshot.sma200,
        snapshot.volume_avg20, snapshot.volume_ratio,
        snapshot.macd.macd, snapshot.macd.signal, snapshot.macd.histogram,
        snapshot.bollinger.upper, snapshot.bollinger.middle, snapshot.bollinger.lower,
    ]
    if not all(math.isfinite(n) for n in numbers):
        raise ComputationError(symbol, "non-finite indicator value")

    logger.debug(
        "%s snapshot: price=%.2f rsi=%.1f sma20=%.2f sma50=%.2f sma200=%.2f vol_ratio=%.2f",
        symbol, snapshot.price, snapshot.rsi, snapshot.sma20, snapshot.sma50,
        snapshot.sma200, snapshot.volume_ratio,
    )
    return snapshot
