from __future__ import annotations

import logging

from swingscreener.core.config import ScoringConfig, ScreeningCriteria
from swingscreener.screening import FundamentalSnapshot, ScreeningResult, TechnicalSnapshot

logger = logging.getLogger(__name__)

MAX_SCORE = 100.0


class ScoringEngine:
    """Multi-factor rubric over technical and fundamental snapshots.

    Factors (points):
        RSI_BAND (20): rsi_min <= rsi <= rsi_max
        MACD_BULLISH (15): macd > signal and histogram > 0, when required
        ABOVE_SMA20 / SMA50 / SMA200 (5 each): price above the average, when required
        VOLUME_SURGE (10): volume_ratio >= min_volume_ratio
        ROE (15): roe >= min_roe
        LOW_LEVERAGE (10): debt_to_equity <= max_debt_to_equity (or the sector override)
        EARNINGS_GROWTH (15): earnings_growth >= min_earnings_growth
        PROMOTER_HOLDING (5): promoter_holding >= min_promoter_holding, or a promoter-exempt sector
        MARKET_CAP (5): market_cap >= min_market_cap

    The sum can exceed 100 and is capped; reasons keep evaluation order.
    """

    P_RSI_BAND = 20
    P_MACD_BULLISH = 15
    P_ABOVE_SMA = 5
    P_VOLUME_SURGE = 10
    P_ROE = 15
    P_LOW_LEVERAGE = 10
    P_EARNINGS_GROWTH = 15
    P_PROMOTER_HOLDING = 5
    P_MARKET_CAP = 5

    def __init__(self, scoring: ScoringConfig | None = None) -> None:
        self._scoring = scoring or ScoringConfig()

    @property
    def scoring(self) -> ScoringConfig:
        return self._scoring

    def evaluate(
        self,
        symbol: str,
        technical: TechnicalSnapshot,
        fundamental: FundamentalSnapshot,
        criteria: ScreeningCriteria,
    ) -> ScreeningResult:
        """Score one symbol and decide pass/fail.

        Args:
            symbol: Trading symbol.
            technical: Latest indicator values.
            fundamental: Fundamental ratios for the symbol.
            criteria: Thresholds for this screening run.

        Returns:
            ScreeningResult with the capped score, pass flag and reasons.
        """
        tech_points, tech_reasons = self._technical_points(technical, criteria)
        fund_points, fund_reasons = self._fundamental_points(fundamental, criteria)

        raw = float(tech_points + fund_points)
        score = max(0.0, min(raw, MAX_SCORE))
        passed = score >= self._scoring.pass_threshold
        reasons = (tech_reasons + fund_reasons)[: self._scoring.max_reasons]

        logger.debug(
            "%s scored %.0f (raw %.0f, technical %d, fundamental %d) passed=%s",
            symbol, score, raw, tech_points, fund_points, passed,
        )
        return ScreeningResult(
            symbol=symbol,
            passed=passed,
            score=score,
            reasons=reasons,
            technical=technical,
            fundamental=fundamental,
            raw_score=raw,
        )

    def _technical_points(
        self,
        t: TechnicalSnapshot,
        criteria: ScreeningCriteria,
    ) -> tuple[int, list[str]]:
        c = criteria.technical
        points = 0
        reasons: list[str] = []

        if c.rsi_min <= t.rsi <= c.rsi_max:
            points += self.P_RSI_BAND
            reasons.append(f"RSI in momentum zone ({t.rsi:.1f})")
        elif t.rsi > c.rsi_max:
            reasons.append(f"RSI overbought ({t.rsi:.1f})")
        else:
            reasons.append(f"RSI below momentum zone ({t.rsi:.1f})")

        if c.require_macd_bullish:
            if t.macd.is_bullish:
                points += self.P_MACD_BULLISH
                reasons.append("MACD bullish crossover")
            else:
                reasons.append("MACD not bullish")

        if c.require_price_above_sma:
            sma_points = 0
            for label, average in (("20", t.sma20), ("50", t.sma50), ("200", t.sma200)):
                if t.price > average:
                    sma_points += self.P_ABOVE_SMA
                    reasons.append(f"Price above {label}-SMA")
            if sma_points == 0:
                reasons.append("Price below key moving averages")
            points += sma_points

        if t.volume_ratio >= c.min_volume_ratio:
            points += self.P_VOLUME_SURGE
            reasons.append(f"Volume surge ({t.volume_ratio:.1f}x avg)")
        else:
            reasons.append(f"Low volume ({t.volume_ratio:.1f}x avg)")

        return points, reasons

    def _fundamental_points(
        self,
        f: FundamentalSnapshot,
        criteria: ScreeningCriteria,
    ) -> tuple[int, list[str]]:
        c = criteria.fundamental
        override = c.override_for(f.sector)
        points = 0
        reasons: list[str] = []

        if f.roe >= c.min_roe:
            points += self.P_ROE
            reasons.append(f"Strong ROE ({f.roe:.1f}%)")
        else:
            reasons.append(f"Low ROE ({f.roe:.1f}%)")

        if override is not None and override.max_debt_to_equity is not None:
            if f.debt_to_equity <= override.max_debt_to_equity:
                points += self.P_LOW_LEVERAGE
                reasons.append(f"Healthy {f.sector.lower()} leverage (D/E: {f.debt_to_equity:.2f})")
            else:
                reasons.append(f"High debt (D/E: {f.debt_to_equity:.2f})")
        elif f.debt_to_equity <= c.max_debt_to_equity:
            points += self.P_LOW_LEVERAGE
            reasons.append(f"Low debt (D/E: {f.debt_to_equity:.2f})")
        else:
            reasons.append(f"High debt (D/E: {f.debt_to_equity:.2f})")

        if f.earnings_growth >= c.min_earnings_growth:
            points += self.P_EARNINGS_GROWTH
            reasons.append(f"Strong earnings growth ({f.earnings_growth:.1f}%)")
        else:
            reasons.append(f"Weak earnings growth ({f.earnings_growth:.1f}%)")

        if f.promoter_holding >= c.min_promoter_holding:
            points += self.P_PROMOTER_HOLDING
            reasons.append(f"High promoter holding ({f.promoter_holding:.1f}%)")
        elif override is not None and override.promoter_exempt:
            points += self.P_PROMOTER_HOLDING
            reasons.append("Public sector/Professional management")

        if f.market_cap >= c.min_market_cap:
            points += self.P_MARKET_CAP
            reasons.append("Adequate market cap")

        return points, reasons


def insufficient_history_result(symbol: str, have: int, need: int) -> ScreeningResult:
    """Non-passing result for a symbol whose history is too short to score."""
    return ScreeningResult(
        symbol=symbol,
        passed=False,
        score=0.0,
        reasons=[f"InsufficientHistory: {have} bars, need {need}"],
    )
