"""Screener: fetches, scores and ranks a symbol universe in throttled batches.

Pipeline per symbol:
    1. Fetch daily bars and fundamentals (through the TTL cache when enabled)
    2. Build the technical snapshot
    3. Score against the run's criteria
    4. Price a recommendation for passing symbols

Design decisions:
- Symbols are processed in batches of ``batch.batch_size``; a batch runs
  concurrently and ``batch.batch_delay_secs`` is slept between batches to
  stay polite with the upstream data source.
- Per-symbol failures are isolated with ``gather(return_exceptions=True)``,
  logged, and recorded in ``BatchResult.errors``.
- The whole run is bounded by ``batch.timeout_secs``; on timeout the results
  collected so far are kept and ``timed_out`` is set.
"""
from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any

from swingscreener.batch.ranking import RecommendationRanker, sector_breakdown
from swingscreener.batch.types import BatchResult, SymbolError
from swingscreener.core.config import ScreeningCriteria, Settings, merge_criteria
from swingscreener.core.exceptions import InsufficientHistory
from swingscreener.core.types import Bar
from swingscreener.data.cache import TTLCache
from swingscreener.data.fundamentals import (
    FundamentalsProvider,
    SectorRangeFundamentals,
    YFinanceFundamentalsProvider,
)
from swingscreener.data.history import (
    HistoryProvider,
    SyntheticHistoryProvider,
    YFinanceHistoryProvider,
)
from swingscreener.data.universe import nifty50_symbols, stock_info
from swingscreener.indicators.patterns import detect_patterns
from swingscreener.screening import FundamentalSnapshot, Recommendation, ScreeningResult
from swingscreener.screening.recommendation import build_recommendation
from swingscreener.screening.scorer import ScoringEngine, insufficient_history_result
from swingscreener.screening.snapshot import build_technical_snapshot

logger = logging.getLogger(__name__)


def _chunk(items: list, size: int) -> list[list]:
    """Split a list into sub-lists of at most ``size`` items."""
    return [items[i : i + size] for i in range(0, len(items), size)]


class Screener:
    """Screens symbols and produces ranked swing-trade recommendations.

    Usage::

        screener = Screener(history, fundamentals, settings)
        result = await screener.screen_universe()
        for rec in result.recommendations:
            print(rec.symbol, rec.confidence_score)
    """

    def __init__(
        self,
        history: HistoryProvider,
        fundamentals: FundamentalsProvider,
        settings: Settings | None = None,
        cache: TTLCache | None = None,
    ) -> None:
        self._history = history
        self._fundamentals = fundamentals
        self._settings = settings or Settings()
        if cache is None and self._settings.cache.enabled:
            cache = TTLCache(ttl_seconds=self._settings.cache.ttl_seconds)
        self._cache = cache
        self._scorer = ScoringEngine(self._settings.scoring)
        self._ranker = RecommendationRanker(top_n=self._settings.batch.top_n)

    @property
    def settings(self) -> Settings:
        return self._settings

    def resolve_criteria(
        self, criteria: ScreeningCriteria | dict[str, Any] | None = None
    ) -> ScreeningCriteria:
        """Merge per-run overrides onto the configured criteria.

        Raises:
            ConfigError: If the merged criteria are invalid.
        """
        return merge_criteria(criteria, base=self._settings.criteria)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    async def screen_symbol(
        self,
        symbol: str,
        criteria: ScreeningCriteria | dict[str, Any] | None = None,
    ) -> ScreeningResult:
        """Fetch, snapshot and score one symbol.

        Short histories yield a non-passing result rather than an error.

        Raises:
            ConfigError: If ``criteria`` overrides are invalid.
            DataUnavailable: If bars or fundamentals cannot be fetched.
            ComputationError: If an indicator produced a non-finite value.
        """
        result, _ = await self._screen(symbol, self.resolve_criteria(criteria))
        return result

    async def screen_universe(
        self,
        symbols: list[str] | None = None,
        criteria: ScreeningCriteria | dict[str, Any] | None = None,
    ) -> BatchResult:
        """Screen every symbol and return the top recommendations.

        Args:
            symbols: Symbols to screen; None means the configured symbols,
                or the NIFTY 50 universe when none are configured. An empty
                list screens nothing.
            criteria: Partial overrides merged onto the configured criteria.

        Returns:
            BatchResult with at most ``batch.top_n`` recommendations.

        Raises:
            ConfigError: If ``criteria`` overrides are invalid.
        """
        resolved = self.resolve_criteria(criteria)
        if symbols is None:
            symbols = self._settings.symbols or nifty50_symbols()
        universe = list(symbols)
        batch_cfg = self._settings.batch

        run_at = datetime.now(tz=timezone.utc)
        t0 = time.monotonic()
        logger.info(
            "Screening %d symbols in %d batches of %d",
            len(universe),
            len(_chunk(universe, batch_cfg.batch_size)),
            batch_cfg.batch_size,
        )

        screened: list[tuple[ScreeningResult, list[Bar]]] = []
        errors: list[SymbolError] = []
        timed_out = False
        try:
            await asyncio.wait_for(
                self._run_batches(universe, resolved, screened, errors),
                timeout=batch_cfg.timeout_secs,
            )
        except asyncio.TimeoutError:
            timed_out = True
            logger.warning(
                "Screening timed out after %.0fs with %d/%d symbols screened",
                batch_cfg.timeout_secs,
                len(screened),
                len(universe),
            )

        recommendations = self._recommend(screened)
        ranked = self._ranker.rank(recommendations)
        passed = sum(1 for result, _ in screened if result.passed)

        elapsed = time.monotonic() - t0
        logger.info(
            "Screening complete: %d/%d screened, %d passed, %d recommended, %d errors, %.1fs",
            len(screened),
            len(universe),
            passed,
            len(ranked),
            len(errors),
            elapsed,
        )
        return BatchResult(
            success=bool(screened) or not errors,
            run_at=run_at,
            duration_secs=elapsed,
            symbols_attempted=len(universe),
            symbols_screened=len(screened),
            symbols_passed=passed,
            recommendations=ranked,
            errors=errors,
            timed_out=timed_out,
            sectors=sector_breakdown([result for result, _ in screened]),
        )

    def close(self, wait: bool = True) -> None:
        """Shut down the providers' worker threads.

        Pass ``wait=False`` after a timed-out run so fetches still blocked
        upstream are abandoned instead of joined.
        """
        self._history.close(wait=wait)
        self._fundamentals.close(wait=wait)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _run_batches(
        self,
        symbols: list[str],
        criteria: ScreeningCriteria,
        screened: list[tuple[ScreeningResult, list[Bar]]],
        errors: list[SymbolError],
    ) -> None:
        """Screen batches in order, appending into the caller's lists.

        Results are appended as each batch finishes so a timeout keeps
        everything from completed batches.
        """
        batches = _chunk(symbols, self._settings.batch.batch_size)
        for index, batch in enumerate(batches):
            if index > 0 and self._settings.batch.batch_delay_secs > 0:
                await asyncio.sleep(self._settings.batch.batch_delay_secs)

            outcomes = await asyncio.gather(
                *(self._screen(symbol, criteria) for symbol in batch),
                return_exceptions=True,
            )
            for symbol, outcome in zip(batch, outcomes):
                if isinstance(outcome, Exception):
                    logger.warning("Skipping %s: %s", symbol, outcome)
                    errors.append(SymbolError(symbol=symbol, error=str(outcome)))
                    continue
                if isinstance(outcome, BaseException):
                    raise outcome
                screened.append(outcome)

            logger.debug("Batch %d/%d done", index + 1, len(batches))

    async def _screen(
        self, symbol: str, criteria: ScreeningCriteria
    ) -> tuple[ScreeningResult, list[Bar]]:
        bars = await self._fetch_history(symbol)
        min_bars = self._settings.batch.min_bars
        try:
            technical = build_technical_snapshot(bars, min_bars=min_bars, symbol=symbol)
        except InsufficientHistory as exc:
            logger.info("%s", exc)
            return insufficient_history_result(symbol, exc.have, exc.need), bars

        fundamental = await self._fetch_fundamentals(symbol)
        return self._scorer.evaluate(symbol, technical, fundamental, criteria), bars

    async def _fetch_history(self, symbol: str) -> list[Bar]:
        if self._cache is None:
            return await self._history.fetch_history(symbol)
        return await self._cache.get_or_fetch(
            "history", symbol, lambda: self._history.fetch_history(symbol)
        )

    async def _fetch_fundamentals(self, symbol: str) -> FundamentalSnapshot:
        if self._cache is None:
            return await self._fundamentals.fetch_fundamentals(symbol)
        return await self._cache.get_or_fetch(
            "fundamentals", symbol, lambda: self._fundamentals.fetch_fundamentals(symbol)
        )

    def _recommend(
        self, screened: list[tuple[ScreeningResult, list[Bar]]]
    ) -> list[Recommendation]:
        recommendations: list[Recommendation] = []
        for result, bars in screened:
            if not result.passed:
                continue
            patterns = tuple(p.name for p in detect_patterns(bars))
            rec = build_recommendation(
                result,
                self._settings.scoring,
                company_name=stock_info(result.symbol).name,
                patterns=patterns,
            )
            if rec is not None:
                recommendations.append(rec)
        return recommendations


def build_screener(settings: Settings) -> Screener:
    """Construct a Screener with the providers named by ``data.provider``."""
    data = settings.data
    if data.provider == "yfinance":
        history: HistoryProvider = YFinanceHistoryProvider(
            period=data.history_period, suffix=data.exchange_suffix
        )
        fundamentals: FundamentalsProvider = YFinanceFundamentalsProvider(
            suffix=data.exchange_suffix
        )
    else:
        history = SyntheticHistoryProvider(bars=data.synthetic_bars, seed=data.seed)
        fundamentals = SectorRangeFundamentals(seed=data.seed)
    logger.info("Using %s data provider", data.provider)
    return Screener(history, fundamentals, settings)
