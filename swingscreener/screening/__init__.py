from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class MacdValue:
    macd: float
    signal: float
    histogram: float

    @property
    def is_bullish(self) -> bool:
        return self.macd > self.signal and self.histogram > 0


@dataclass(frozen=True)
class BollingerValue:
    upper: float
    middle: float
    lower: float


@dataclass(frozen=True)
class TechnicalSnapshot:
    """Latest value of every indicator for one symbol at screening time."""

    price: float
    rsi: float
    macd: MacdValue
    sma20: float
    sma50: float
    sma200: float
    volume_avg20: float
    bollinger: BollingerValue
    volume_ratio: float


@dataclass(frozen=True)
class FundamentalSnapshot:
    roe: float
    debt_to_equity: float
    earnings_growth: float
    promoter_holding: float
    market_cap: float
    pe: float
    sector: str


@dataclass
class ScreeningResult:
    symbol: str
    passed: bool
    score: float
    reasons: list[str] = field(default_factory=list)
    technical: TechnicalSnapshot | None = None
    fundamental: FundamentalSnapshot | None = None
    raw_score: float = 0.0


@dataclass(frozen=True)
class EntryRange:
    min: float
    max: float


@dataclass(frozen=True)
class Recommendation:
    symbol: str
    company_name: str
    sector: str
    current_price: float
    entry_range: EntryRange
    target: float
    stop_loss: float
    risk_reward_ratio: float
    confidence_score: float
    reasoning: str
    technical_setup: str = ""
    fundamental_summary: str = ""
    patterns: tuple[str, ...] = ()
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "company_name": self.company_name,
            "sector": self.sector,
            "current_price": round(self.current_price, 2),
            "entry_range": {
                "min": round(self.entry_range.min, 2),
                "max": round(self.entry_range.max, 2),
            },
            "target": round(self.target, 2),
            "stop_loss": round(self.stop_loss, 2),
            "risk_reward_ratio": round(self.risk_reward_ratio, 2),
            "confidence_score": self.confidence_score,
            "reasoning": self.reasoning,
            "technical_setup": self.technical_setup,
            "fundamental_summary": self.fundamental_summary,
            "patterns": list(self.patterns),
            "created_at": self.created_at.isoformat(),
        }
