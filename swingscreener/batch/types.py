"""Batch run result types."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from swingscreener.screening import Recommendation


@dataclass
class SymbolError:
    """A symbol excluded from the run and why."""

    symbol: str
    error: str

    def to_dict(self) -> dict[str, str]:
        return {"symbol": self.symbol, "error": self.error}


@dataclass(frozen=True)
class SectorSummary:
    """Aggregate screening scores for one sector."""

    sector: str
    count: int
    average_score: float
    top_symbol: str
    sentiment: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "average_score": round(self.average_score, 1),
            "top_symbol": self.top_symbol,
            "sentiment": self.sentiment,
        }


@dataclass
class BatchResult:
    """Outcome of one universe screening run.

    ``success`` is False only when the run produced nothing usable: every
    attempted symbol failed. A run that screened symbols but found no
    recommendation is still a success with an empty list.
    """

    success: bool
    run_at: datetime
    duration_secs: float
    symbols_attempted: int
    symbols_screened: int
    symbols_passed: int
    recommendations: list[Recommendation] = field(default_factory=list)
    errors: list[SymbolError] = field(default_factory=list)
    timed_out: bool = False
    sectors: dict[str, SectorSummary] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "run_at": self.run_at.isoformat(),
            "duration_secs": round(self.duration_secs, 3),
            "symbols_attempted": self.symbols_attempted,
            "symbols_screened": self.symbols_screened,
            "symbols_passed": self.symbols_passed,
            "recommendations": [r.to_dict() for r in self.recommendations],
            "errors": [e.to_dict() for e in self.errors],
            "timed_out": self.timed_out,
            "sectors": {name: s.to_dict() for name, s in sorted(self.sectors.items())},
        }
