"""Unit tests for recommendation pricing (swingscreener/screening/recommendation.py)."""
from __future__ import annotations

from dataclasses import replace

import pytest

from swingscreener.core.config import ScoringConfig, get_preset
from swingscreener.screening import ScreeningResult
from swingscreener.screening.recommendation import (
    build_recommendation,
    fundamental_summary,
    technical_setup,
)


def _result(technical, fundamental, score: float, passed: bool = True) -> ScreeningResult:
    return ScreeningResult(
        symbol="TCS",
        passed=passed,
        score=score,
        reasons=["RSI in momentum zone (62.0)", "MACD bullish crossover", "Price above 20-SMA", "Strong ROE"],
        technical=technical,
        fundamental=fundamental,
        raw_score=score,
    )


class TestPricing:
    def test_top_tier(self, strong_technical, strong_fundamental):
        rec = build_recommendation(_result(strong_technical, strong_fundamental, 100.0), ScoringConfig())

        assert rec is not None
        assert rec.current_price == 200.0
        assert rec.target == pytest.approx(224.0)
        assert rec.stop_loss == pytest.approx(190.0)
        assert rec.entry_range.min == pytest.approx(196.0)
        assert rec.entry_range.max == pytest.approx(204.0)
        assert rec.risk_reward_ratio == pytest.approx(2.4)
        assert rec.confidence_score == 100.0

    def test_second_tier(self, strong_technical, strong_fundamental):
        rec = build_recommendation(_result(strong_technical, strong_fundamental, 75.0), ScoringConfig())
        assert rec.target == pytest.approx(218.0)
        assert rec.risk_reward_ratio == pytest.approx(1.8)

    @pytest.mark.parametrize("score", [60.0, 65.0, 74.9])
    def test_low_tiers_fail_risk_reward(self, strong_technical, strong_fundamental, score):
        """1.07 and 1.06 targets against a 5% stop give 1.4 and 1.2 risk/reward."""
        assert build_recommendation(_result(strong_technical, strong_fundamental, score), ScoringConfig()) is None

    def test_classic_flat_target_clears_filter(self, strong_technical, strong_fundamental):
        rec = build_recommendation(
            _result(strong_technical, strong_fundamental, 55.0), get_preset("classic").scoring
        )
        assert rec.target == pytest.approx(216.0)
        assert rec.risk_reward_ratio == pytest.approx(1.6)

    def test_risk_reward_never_below_minimum(self, strong_technical, strong_fundamental):
        config = ScoringConfig()
        for score in range(60, 101):
            rec = build_recommendation(_result(strong_technical, strong_fundamental, float(score)), config)
            if rec is not None:
                assert rec.risk_reward_ratio >= config.min_risk_reward


class TestRejections:
    def test_failed_result(self, strong_technical, strong_fundamental):
        result = _result(strong_technical, strong_fundamental, 100.0, passed=False)
        assert build_recommendation(result, ScoringConfig()) is None

    def test_missing_snapshots(self):
        result = ScreeningResult(symbol="NEWCO", passed=True, score=90.0)
        assert build_recommendation(result, ScoringConfig()) is None


class TestText:
    def test_reasoning_is_top_three(self, strong_technical, strong_fundamental):
        rec = build_recommendation(_result(strong_technical, strong_fundamental, 90.0), ScoringConfig())
        assert rec.reasoning == "RSI in momentum zone (62.0), MACD bullish crossover, Price above 20-SMA"

    def test_defaults(self, strong_technical, strong_fundamental):
        rec = build_recommendation(_result(strong_technical, strong_fundamental, 90.0), ScoringConfig())
        assert rec.company_name == "TCS Ltd."
        assert rec.sector == "IT Services"
        assert rec.patterns == ()

    def test_company_name_and_patterns(self, strong_technical, strong_fundamental):
        rec = build_recommendation(
            _result(strong_technical, strong_fundamental, 90.0),
            ScoringConfig(),
            company_name="Tata Consultancy Services Ltd.",
            patterns=("Bullish Flag",),
        )
        assert rec.company_name == "Tata Consultancy Services Ltd."
        assert rec.to_dict()["patterns"] == ["Bullish Flag"]

    def test_technical_setup(self, strong_technical):
        assert technical_setup(strong_technical) == (
            "RSI momentum zone, MACD bullish, Above 20/50/200-SMA, Volume breakout"
        )

    def test_technical_setup_fallback(self, strong_technical):
        quiet = replace(strong_technical, rsi=40.0, price=100.0, volume_ratio=1.0,
                        macd=replace(strong_technical.macd, macd=1.0, signal=2.0))
        assert technical_setup(quiet) == "Technical alignment"

    def test_fundamental_summary(self, strong_fundamental, weak_fundamental):
        assert fundamental_summary(strong_fundamental) == "Good ROE, Steady growth, Low debt, High promoter stake"
        assert fundamental_summary(weak_fundamental) == "Solid Auto fundamentals"

    def test_bank_summary_never_claims_low_debt(self, strong_fundamental):
        bank = replace(strong_fundamental, sector="Banking", debt_to_equity=0.3)
        assert "Low debt" not in fundamental_summary(bank)
        assert fundamental_summary(bank) == "Good ROE, Steady growth, High promoter stake"


def test_to_dict_rounds_prices(strong_technical, strong_fundamental):
    rec = build_recommendation(_result(strong_technical, strong_fundamental, 100.0), ScoringConfig())
    data = rec.to_dict()
    assert data["target"] == 224.0
    assert data["entry_range"] == {"min": 196.0, "max": 204.0}
    assert data["created_at"].endswith("+00:00")
