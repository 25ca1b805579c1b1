"""Shared fixtures for unit and integration tests."""
from __future__ import annotations

import pytest

from swingscreener.core.config import BatchConfig, CacheConfig, Settings
from swingscreener.screening import (
    BollingerValue,
    FundamentalSnapshot,
    MacdValue,
    TechnicalSnapshot,
)


@pytest.fixture
def strong_technical() -> TechnicalSnapshot:
    """Every technical factor satisfied under default criteria."""
    return TechnicalSnapshot(
        price=200.0,
        rsi=62.0,
        macd=MacdValue(macd=5.0, signal=3.0, histogram=2.0),
        sma20=190.0,
        sma50=180.0,
        sma200=170.0,
        volume_avg20=1_000_000.0,
        bollinger=BollingerValue(upper=210.0, middle=190.0, lower=170.0),
        volume_ratio=2.0,
    )


@pytest.fixture
def strong_fundamental() -> FundamentalSnapshot:
    """Every fundamental factor satisfied under default criteria."""
    return FundamentalSnapshot(
        roe=20.0,
        debt_to_equity=0.4,
        earnings_growth=18.0,
        promoter_holding=55.0,
        market_cap=50_000.0,
        pe=25.0,
        sector="IT Services",
    )


@pytest.fixture
def weak_fundamental() -> FundamentalSnapshot:
    """No fundamental factor satisfied under default criteria."""
    return FundamentalSnapshot(
        roe=5.0,
        debt_to_equity=3.0,
        earnings_growth=2.0,
        promoter_holding=10.0,
        market_cap=500.0,
        pe=80.0,
        sector="Auto",
    )


@pytest.fixture
def fast_settings() -> Settings:
    """Settings with no inter-batch delay so batch tests run instantly."""
    return Settings(
        batch=BatchConfig(batch_size=5, batch_delay_secs=0.0, top_n=5, timeout_secs=30.0),
        cache=CacheConfig(enabled=True, ttl_seconds=300.0),
    )
