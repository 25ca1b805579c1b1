"""Turn passing screening results into trade recommendations.

Pricing:
    entry range  = price * (1 -/+ entry_band_pct)
    target       = price * tier multiplier (first tier whose floor the score meets)
    stop loss    = price * (1 - stop_loss_pct)
    risk/reward  = (target - price) / (price - stop loss)

A recommendation whose risk/reward falls below ``min_risk_reward`` is
dropped, so a 5% stop needs at least a 7.5% target.
"""
from __future__ import annotations

import logging

from swingscreener.core.config import ScoringConfig
from swingscreener.screening import (
    EntryRange,
    FundamentalSnapshot,
    Recommendation,
    ScreeningResult,
    TechnicalSnapshot,
)

logger = logging.getLogger(__name__)

# Debt/equity here reflects deposits, so "Low debt" is never claimed
DEPOSIT_FUNDED_SECTORS = frozenset({"Banking"})


def technical_setup(t: TechnicalSnapshot) -> str:
    setups: list[str] = []
    if 55 <= t.rsi <= 70:
        setups.append("RSI momentum zone")
    if t.macd.macd > t.macd.signal:
        setups.append("MACD bullish")

    above = [label for label, avg in (("20", t.sma20), ("50", t.sma50), ("200", t.sma200)) if t.price > avg]
    if above:
        setups.append(f"Above {'/'.join(above)}-SMA")

    if t.volume_ratio > 1.5:
        setups.append("Volume breakout")
    return ", ".join(setups) or "Technical alignment"


def fundamental_summary(f: FundamentalSnapshot) -> str:
    points: list[str] = []
    if f.roe > 20:
        points.append("High ROE")
    elif f.roe > 15:
        points.append("Good ROE")

    if f.earnings_growth > 20:
        points.append("Strong growth")
    elif f.earnings_growth > 15:
        points.append("Steady growth")

    if f.sector not in DEPOSIT_FUNDED_SECTORS and f.debt_to_equity < 0.5:
        points.append("Low debt")
    if f.promoter_holding > 50:
        points.append("High promoter stake")
    return ", ".join(points) or f"Solid {f.sector} fundamentals"


def build_recommendation(
    result: ScreeningResult,
    scoring: ScoringConfig,
    company_name: str | None = None,
    patterns: tuple[str, ...] = (),
) -> Recommendation | None:
    """Price a passing result.

    Args:
        result: Screening result; must have passed and carry both snapshots.
        scoring: Tier table and risk parameters.
        company_name: Display name; defaults to "<SYMBOL> Ltd.".
        patterns: Names of chart patterns detected for the symbol.

    Returns:
        Recommendation, or None if the result did not pass or the
        risk/reward ratio is below ``scoring.min_risk_reward``.
    """
    if not result.passed or result.technical is None or result.fundamental is None:
        return None

    price = result.technical.price
    multiplier = scoring.target_multiplier(result.score)
    target = price * multiplier
    stop_loss = price * (1 - scoring.stop_loss_pct)
    risk_reward = (target - price) / (price - stop_loss)

    if risk_reward < scoring.min_risk_reward:
        logger.debug(
            "%s dropped: risk/reward %.2f below %.2f",
            result.symbol, risk_reward, scoring.min_risk_reward,
        )
        return None

    return Recommendation(
        symbol=result.symbol,
        company_name=company_name or f"{result.symbol} Ltd.",
        sector=result.fundamental.sector,
        current_price=price,
        entry_range=EntryRange(
            min=price * (1 - scoring.entry_band_pct),
            max=price * (1 + scoring.entry_band_pct),
        ),
        target=target,
        stop_loss=stop_loss,
        risk_reward_ratio=risk_reward,
        confidence_score=min(result.score, 100.0),
        reasoning=", ".join(result.reasons[: scoring.reasoning_reasons]),
        technical_setup=technical_setup(result.technical),
        fundamental_summary=fundamental_summary(result.fundamental),
        patterns=patterns,
    )
