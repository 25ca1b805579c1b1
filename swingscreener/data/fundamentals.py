"""Fundamental snapshot providers.

``SectorRangeFundamentals`` draws each ratio uniformly from a sector-specific
range using a generator seeded by symbol, so values are stable run to run.
``YFinanceFundamentalsProvider`` maps Yahoo Finance ``Ticker.info`` fields
onto the snapshot, converting fractions to percent and rupees to crores.
"""
from __future__ import annotations

import asyncio
import logging
import zlib
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

import numpy as np
import yfinance

from swingscreener.core.exceptions import DataUnavailable
from swingscreener.data.universe import stock_info
from swingscreener.screening import FundamentalSnapshot

logger = logging.getLogger(__name__)

# One crore is 10 million rupees
_RUPEES_PER_CRORE = 1e7


class FundamentalsProvider(ABC):
    """Source of fundamental ratios for one symbol."""

    @abstractmethod
    async def fetch_fundamentals(self, symbol: str) -> FundamentalSnapshot:
        """Fetch the fundamental snapshot.

        Raises:
            DataUnavailable: If the fundamentals cannot be obtained.
        """

    def close(self, wait: bool = True) -> None:
        """Release provider resources; ``wait=False`` abandons in-flight calls."""


@dataclass(frozen=True)
class SectorRanges:
    """Inclusive (low, high) ranges per ratio."""

    roe: tuple[float, float]
    debt_to_equity: tuple[float, float]
    earnings_growth: tuple[float, float]
    promoter_holding: tuple[float, float]
    market_cap: tuple[float, float] = (50_000.0, 1_500_000.0)
    pe: tuple[float, float] = (12.0, 45.0)


SECTOR_RANGES: dict[str, SectorRanges] = {
    "IT Services": SectorRanges((25, 45), (0.05, 0.3), (10, 30), (60, 80), pe=(20.0, 35.0)),
    "Banking": SectorRanges((12, 20), (8, 15), (5, 25), (0, 10), pe=(10.0, 22.0)),
    "FMCG": SectorRanges((18, 35), (0.2, 0.8), (8, 20), (50, 75), pe=(40.0, 70.0)),
    "Pharma": SectorRanges((15, 30), (0.1, 0.6), (12, 35), (45, 70), pe=(25.0, 40.0)),
    "Auto": SectorRanges((10, 25), (0.5, 1.5), (-5, 25), (40, 65), pe=(15.0, 30.0)),
    "Oil & Gas": SectorRanges((8, 18), (0.3, 1.0), (-10, 20), (55, 85), pe=(8.0, 20.0)),
}

DEFAULT_RANGES = SectorRanges((12, 25), (0.3, 1.0), (5, 20), (45, 65))


class SectorRangeFundamentals(FundamentalsProvider):
    def __init__(self, seed: int = 42) -> None:
        self._seed = seed

    async def fetch_fundamentals(self, symbol: str) -> FundamentalSnapshot:
        return self.generate(symbol)

    def generate(self, symbol: str) -> FundamentalSnapshot:
        sector = stock_info(symbol).sector
        ranges = SECTOR_RANGES.get(sector, DEFAULT_RANGES)
        # Separate stream from the price history generator for the same symbol
        rng = np.random.default_rng([self._seed, zlib.crc32(symbol.encode("utf-8")), 1])

        def draw(bounds: tuple[float, float]) -> float:
            low, high = bounds
            return float(rng.uniform(low, high))

        return FundamentalSnapshot(
            roe=draw(ranges.roe),
            debt_to_equity=draw(ranges.debt_to_equity),
            earnings_growth=draw(ranges.earnings_growth),
            promoter_holding=draw(ranges.promoter_holding),
            market_cap=draw(ranges.market_cap),
            pe=draw(ranges.pe),
            sector=sector,
        )


class StaticFundamentalsProvider(FundamentalsProvider):
    def __init__(self, snapshots: dict[str, FundamentalSnapshot]) -> None:
        self._snapshots = snapshots

    async def fetch_fundamentals(self, symbol: str) -> FundamentalSnapshot:
        try:
            return self._snapshots[symbol]
        except KeyError:
            raise DataUnavailable(symbol, "no fundamentals loaded") from None


def _number(info: dict[str, Any], key: str, scale: float = 1.0) -> float:
    value = info.get(key)
    if value is None:
        return 0.0
    try:
        return float(value) * scale
    except (TypeError, ValueError):
        return 0.0


def info_to_snapshot(symbol: str, info: dict[str, Any]) -> FundamentalSnapshot:
    """Map a yfinance ``info`` dict onto a FundamentalSnapshot.

    yfinance reports ROE, earnings growth and insider holding as fractions
    and debt/equity as a percentage; market cap is in rupees.

    Raises:
        DataUnavailable: If the info carries no market capitalisation.
    """
    if not info or info.get("marketCap") is None:
        raise DataUnavailable(symbol, "no fundamentals in quote info")

    return FundamentalSnapshot(
        roe=_number(info, "returnOnEquity", 100.0),
        debt_to_equity=_number(info, "debtToEquity", 0.01),
        earnings_growth=_number(info, "earningsGrowth", 100.0),
        promoter_holding=_number(info, "heldPercentInsiders", 100.0),
        market_cap=_number(info, "marketCap", 1 / _RUPEES_PER_CRORE),
        pe=_number(info, "trailingPE"),
        sector=stock_info(symbol).sector,
    )


class YFinanceFundamentalsProvider(FundamentalsProvider):
    def __init__(self, suffix: str = ".NS", executor: ThreadPoolExecutor | None = None) -> None:
        self._suffix = suffix
        self._executor = executor or ThreadPoolExecutor(
            max_workers=5, thread_name_prefix="yf-fundamentals"
        )

    async def fetch_fundamentals(self, symbol: str) -> FundamentalSnapshot:
        loop = asyncio.get_running_loop()
        try:
            info = await loop.run_in_executor(self._executor, self._sync_fetch, symbol)
        except Exception as exc:
            raise DataUnavailable(symbol, f"fundamentals fetch failed: {exc}") from exc
        return info_to_snapshot(symbol, info)

    def _sync_fetch(self, symbol: str) -> dict[str, Any]:
        """Synchronous yfinance call run inside an executor thread."""
        return yfinance.Ticker(f"{symbol}{self._suffix}").info

    def close(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait, cancel_futures=True)
