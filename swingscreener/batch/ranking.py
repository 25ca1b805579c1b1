"""Recommendation ranking and sector summaries.

Ranking sorts by confidence score, highest first. The sort is stable, so
recommendations with equal scores keep the order in which their symbols
were screened, then the list is cut to ``top_n``.
"""
from __future__ import annotations

import logging

from swingscreener.batch.types import SectorSummary
from swingscreener.screening import Recommendation, ScreeningResult

logger = logging.getLogger(__name__)

_DEFAULT_TOP_N = 5
# Average score above which a sector is labelled bullish
_BULLISH_ABOVE = 75.0
# Average score below which a sector is labelled bearish
_BEARISH_BELOW = 50.0


class RecommendationRanker:
    """Orders recommendations and keeps the best ``top_n``.

    Usage::

        ranker = RecommendationRanker(top_n=5)
        best = ranker.rank(recommendations)
    """

    def __init__(self, top_n: int = _DEFAULT_TOP_N) -> None:
        self._top_n = top_n

    @property
    def top_n(self) -> int:
        return self._top_n

    def rank(self, recommendations: list[Recommendation]) -> list[Recommendation]:
        ranked = sorted(recommendations, key=lambda r: r.confidence_score, reverse=True)
        if len(ranked) > self._top_n:
            logger.debug(
                "Keeping top %d of %d recommendations", self._top_n, len(ranked)
            )
        return ranked[: self._top_n]


def _sentiment(average_score: float) -> str:
    if average_score > _BULLISH_ABOVE:
        return "bullish"
    if average_score < _BEARISH_BELOW:
        return "bearish"
    return "neutral"


def sector_breakdown(results: list[ScreeningResult]) -> dict[str, SectorSummary]:
    """Group scored results by sector.

    Results without a fundamental snapshot carry no sector and are skipped.
    The top symbol is the first result with the highest score.
    """
    grouped: dict[str, list[ScreeningResult]] = {}
    for result in results:
        if result.fundamental is None:
            continue
        grouped.setdefault(result.fundamental.sector, []).append(result)

    summaries: dict[str, SectorSummary] = {}
    for sector, members in grouped.items():
        average = sum(r.score for r in members) / len(members)
        top = max(members, key=lambda r: r.score)
        summaries[sector] = SectorSummary(
            sector=sector,
            count=len(members),
            average_score=average,
            top_symbol=top.symbol,
            sentiment=_sentiment(average),
        )
    return summaries
