"""Daily bar history providers.

Three implementations share the ``HistoryProvider`` interface:

- SyntheticHistoryProvider: deterministic random walk seeded by symbol, so
  repeated runs over the same universe produce identical screens.
- YFinanceHistoryProvider: Yahoo Finance daily bars for NSE listings. The
  yfinance client is synchronous, so calls run in the default executor.
- StaticHistoryProvider: fixed in-memory bars, for tests and replays.

All providers return bars ordered oldest-first and drop bars whose close is
not positive. Failures surface as ``DataUnavailable``.
"""
from __future__ import annotations

import asyncio
import logging
import zlib
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import numpy as np
import pandas as pd
import yfinance

from swingscreener.core.exceptions import DataUnavailable
from swingscreener.core.types import Bar

logger = logging.getLogger(__name__)

# Maximum retry attempts per symbol before giving up
_MAX_RETRIES = 3
# Base delay for exponential backoff in seconds
_BACKOFF_BASE = 1.0
# Seconds yfinance waits on one HTTP request
_REQUEST_TIMEOUT = 10.0
_MAX_WORKERS = 5


class HistoryProvider(ABC):
    """Source of daily OHLCV bars for one symbol."""

    @abstractmethod
    async def fetch_history(self, symbol: str) -> list[Bar]:
        """Fetch daily bars ordered oldest-first.

        Raises:
            DataUnavailable: If no usable bars could be obtained.
        """

    def close(self, wait: bool = True) -> None:
        """Release provider resources; ``wait=False`` abandons in-flight calls."""


def _symbol_seed(symbol: str, seed: int) -> list[int]:
    return [seed, zlib.crc32(symbol.encode("utf-8"))]


def _trading_days(end: datetime, count: int) -> list[datetime]:
    """``count`` weekday timestamps ending at ``end``, oldest first."""
    days: list[datetime] = []
    current = end
    while len(days) < count:
        if current.weekday() < 5:
            days.append(current)
        current -= timedelta(days=1)
    days.reverse()
    return days


class SyntheticHistoryProvider(HistoryProvider):
    """Seeded geometric random walk with log-normal volumes.

    Each symbol gets its own base price, drift and volatility drawn from a
    generator seeded by ``(seed, crc32(symbol))``; the same symbol and seed
    always yield the same bars.
    """

    def __init__(
        self,
        bars: int = 250,
        seed: int = 42,
        end: datetime | None = None,
    ) -> None:
        self._bars = bars
        self._seed = seed
        self._end = end or datetime.now(tz=timezone.utc).replace(
            hour=0, minute=0, second=0, microsecond=0
        )

    async def fetch_history(self, symbol: str) -> list[Bar]:
        return self.generate(symbol)

    def generate(self, symbol: str) -> list[Bar]:
        rng = np.random.default_rng(_symbol_seed(symbol, self._seed))

        base_price = rng.uniform(100.0, 3000.0)
        drift = rng.uniform(-0.0005, 0.0015)
        volatility = rng.uniform(0.01, 0.025)
        base_volume = rng.uniform(1e6, 2e7)

        returns = rng.normal(drift, volatility, self._bars)
        closes = base_price * np.exp(np.cumsum(returns))
        opens = np.concatenate(([base_price], closes[:-1]))
        wick_up = np.abs(rng.normal(0.0, 0.005, self._bars))
        wick_down = np.abs(rng.normal(0.0, 0.005, self._bars))
        highs = np.maximum(opens, closes) * (1 + wick_up)
        lows = np.minimum(opens, closes) * (1 - wick_down)
        volumes = base_volume * rng.lognormal(0.0, 0.35, self._bars)

        return [
            Bar(
                symbol=symbol,
                timestamp=ts,
                open=float(o),
                high=float(h),
                low=float(lo),
                close=float(c),
                volume=float(v),
            )
            for ts, o, h, lo, c, v in zip(
                _trading_days(self._end, self._bars), opens, highs, lows, closes, volumes
            )
        ]


class StaticHistoryProvider(HistoryProvider):
    def __init__(self, bars_by_symbol: dict[str, list[Bar]]) -> None:
        self._bars = bars_by_symbol

    async def fetch_history(self, symbol: str) -> list[Bar]:
        bars = self._bars.get(symbol)
        if bars is None:
            raise DataUnavailable(symbol, "no bars loaded")
        return [b for b in bars if b.close > 0]


def frame_to_bars(symbol: str, frame: pd.DataFrame) -> list[Bar]:
    """Convert a yfinance history DataFrame into bars, skipping unusable rows."""
    frame = frame.dropna(subset=["Close"])
    bars: list[Bar] = []
    for ts, row in frame.iterrows():
        close = float(row["Close"])
        if close <= 0:
            continue
        timestamp = ts.to_pydatetime()
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        bars.append(
            Bar(
                symbol=symbol,
                timestamp=timestamp,
                open=float(row["Open"]),
                high=float(row["High"]),
                low=float(row["Low"]),
                close=close,
                volume=float(row["Volume"]) if pd.notna(row["Volume"]) else 0.0,
            )
        )
    return bars


class YFinanceHistoryProvider(HistoryProvider):
    """Yahoo Finance daily bars.

    Usage::

        provider = YFinanceHistoryProvider(period="1y", suffix=".NS")
        bars = await provider.fetch_history("RELIANCE")
    """

    def __init__(
        self,
        period: str = "1y",
        suffix: str = ".NS",
        max_retries: int = _MAX_RETRIES,
        backoff_base: float = _BACKOFF_BASE,
        request_timeout: float = _REQUEST_TIMEOUT,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self._period = period
        self._suffix = suffix
        self._max_retries = max_retries
        self._backoff_base = backoff_base
        self._request_timeout = request_timeout
        self._executor = executor or ThreadPoolExecutor(
            max_workers=_MAX_WORKERS, thread_name_prefix="yf-history"
        )

    async def fetch_history(self, symbol: str) -> list[Bar]:
        loop = asyncio.get_running_loop()
        last_error: Exception | None = None
        for attempt in range(self._max_retries):
            try:
                frame = await loop.run_in_executor(self._executor, self._sync_fetch, symbol)
                break
            except Exception as exc:
                last_error = exc
                if attempt < self._max_retries - 1:
                    delay = self._backoff_base * (2 ** attempt)
                    logger.warning(
                        "%s history attempt %d/%d failed (%s), retrying in %.1fs",
                        symbol,
                        attempt + 1,
                        self._max_retries,
                        exc,
                        delay,
                    )
                    await asyncio.sleep(delay)
        else:
            raise DataUnavailable(symbol, f"history fetch failed: {last_error}")

        if frame is None or frame.empty:
            raise DataUnavailable(symbol, "empty price history")

        bars = frame_to_bars(symbol, frame)
        if not bars:
            raise DataUnavailable(symbol, "no bars with a positive close")
        return bars

    def _sync_fetch(self, symbol: str) -> pd.DataFrame:
        """Synchronous yfinance call run inside an executor thread."""
        ticker = yfinance.Ticker(f"{symbol}{self._suffix}")
        return ticker.history(
            period=self._period,
            interval="1d",
            auto_adjust=False,
            timeout=self._request_timeout,
        )

    def close(self, wait: bool = True) -> None:
        # Queued fetches are dropped; a call already blocked in yfinance
        # ends at its request timeout
        self._executor.shutdown(wait=wait, cancel_futures=True)
