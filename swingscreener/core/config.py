"""Core configuration management module."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from swingscreener.core.exceptions import ConfigError


class SystemConfig(BaseModel):
    """System-level configuration."""

    model_config = ConfigDict(use_enum_values=True)

    name: str = "Swing Screener"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_dir: str | None = None


class DataConfig(BaseModel):
    """Historical bar and fundamentals provider configuration."""

    model_config = ConfigDict(use_enum_values=True)

    provider: Literal["synthetic", "yfinance"] = "synthetic"
    history_period: str = "1y"
    exchange_suffix: str = ".NS"
    synthetic_bars: int = 250
    seed: int = 42

    @field_validator("synthetic_bars")
    @classmethod
    def validate_synthetic_bars(cls, v: int) -> int:
        """Validate that synthetic_bars is positive."""
        if v <= 0:
            raise ValueError("synthetic_bars must be positive")
        return v


class CacheConfig(BaseModel):
    """Read-through cache configuration."""

    model_config = ConfigDict(use_enum_values=True)

    enabled: bool = True
    ttl_seconds: float = 300.0

    @field_validator("ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: float) -> float:
        """Validate that ttl_seconds is positive."""
        if v <= 0:
            raise ValueError("ttl_seconds must be positive")
        return v


class BatchConfig(BaseModel):
    """Batch orchestration configuration."""

    model_config = ConfigDict(use_enum_values=True)

    batch_size: int = 5
    batch_delay_secs: float = 2.0
    top_n: int = 5
    timeout_secs: float | None = 300.0
    min_bars: int = 50

    @field_validator("batch_size", "top_n", "min_bars")
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        """Validate that counts are positive."""
        if v <= 0:
            raise ValueError("batch_size, top_n and min_bars must be positive")
        return v

    @field_validator("batch_delay_secs")
    @classmethod
    def validate_delay(cls, v: float) -> float:
        """Validate that batch_delay_secs is not negative."""
        if v < 0:
            raise ValueError("batch_delay_secs must not be negative")
        return v

    @field_validator("timeout_secs")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        """Validate that timeout_secs is positive when set."""
        if v is not None and v <= 0:
            raise ValueError("timeout_secs must be positive")
        return v


class TechnicalCriteria(BaseModel):
    """Technical thresholds applied by the scoring rubric."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    rsi_min: float = 55.0
    rsi_max: float = 70.0
    require_macd_bullish: bool = True
    require_price_above_sma: bool = True
    min_volume_ratio: float = 1.5

    @field_validator("rsi_min", "rsi_max")
    @classmethod
    def validate_rsi_bounds(cls, v: float) -> float:
        """Validate that RSI bounds are between 0 and 100."""
        if not 0 <= v <= 100:
            raise ValueError("RSI bounds must be between 0 and 100")
        return v

    @model_validator(mode="after")
    def validate_rsi_band(self) -> TechnicalCriteria:
        if self.rsi_min > self.rsi_max:
            raise ValueError("rsi_min must not exceed rsi_max")
        return self


class SectorOverride(BaseModel):
    """Sector-specific replacements for the fundamental thresholds.

    ``max_debt_to_equity`` replaces the leverage ceiling when set;
    ``promoter_exempt`` awards the promoter points regardless of holding.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_debt_to_equity: float | None = None
    promoter_exempt: bool = False

    @field_validator("max_debt_to_equity")
    @classmethod
    def validate_leverage(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("max_debt_to_equity must be positive")
        return v


class FundamentalCriteria(BaseModel):
    """Fundamental thresholds applied by the scoring rubric.

    ``min_market_cap`` shares its unit with ``FundamentalSnapshot.market_cap``
    (crores for the NIFTY universe). ``sector_overrides`` is keyed by
    ``FundamentalSnapshot.sector``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    min_roe: float = 15.0
    max_debt_to_equity: float = 1.0
    min_earnings_growth: float = 15.0
    min_promoter_holding: float = 50.0
    min_market_cap: float = 10_000.0
    sector_overrides: dict[str, SectorOverride] = {}

    def override_for(self, sector: str) -> SectorOverride | None:
        return self.sector_overrides.get(sector)


class ScreeningCriteria(BaseModel):
    """Immutable per-run screening thresholds."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    technical: TechnicalCriteria = TechnicalCriteria()
    fundamental: FundamentalCriteria = FundamentalCriteria()


class TargetTier(BaseModel):
    """Score floor at which ``multiplier`` becomes the price target."""

    model_config = ConfigDict(frozen=True)

    min_score: float
    multiplier: float

    @field_validator("multiplier")
    @classmethod
    def validate_multiplier(cls, v: float) -> float:
        if v <= 1.0:
            raise ValueError("target multiplier must be greater than 1.0")
        return v


_CANONICAL_TIERS = [
    TargetTier(min_score=85, multiplier=1.12),
    TargetTier(min_score=75, multiplier=1.09),
    TargetTier(min_score=65, multiplier=1.07),
]


class ScoringConfig(BaseModel):
    """Pass threshold, target tiers and risk parameters for recommendations."""

    model_config = ConfigDict(frozen=True)

    pass_threshold: float = 60.0
    target_tiers: list[TargetTier] = _CANONICAL_TIERS
    base_target_multiplier: float = 1.06
    stop_loss_pct: float = 0.05
    entry_band_pct: float = 0.02
    min_risk_reward: float = 1.5
    max_reasons: int = 6
    reasoning_reasons: int = 3

    @field_validator("pass_threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        """Validate that the pass threshold lies on the 0-100 score scale."""
        if not 0 <= v <= 100:
            raise ValueError("pass_threshold must be between 0 and 100")
        return v

    @field_validator("stop_loss_pct", "entry_band_pct")
    @classmethod
    def validate_percentages(cls, v: float) -> float:
        """Validate that percentages are between 0 and 1."""
        if not 0 < v < 1:
            raise ValueError("Percentage values must be between 0 and 1")
        return v

    @field_validator("target_tiers")
    @classmethod
    def sort_tiers(cls, v: list[TargetTier]) -> list[TargetTier]:
        """Order tiers highest floor first so the first match wins."""
        return sorted(v, key=lambda t: t.min_score, reverse=True)

    @field_validator("max_reasons", "reasoning_reasons")
    @classmethod
    def validate_reason_counts(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("reason counts must be positive")
        return v

    def target_multiplier(self, score: float) -> float:
        for tier in self.target_tiers:
            if score >= tier.min_score:
                return tier.multiplier
        return self.base_target_multiplier


class Preset(BaseModel):
    """A named criteria + scoring combination."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    criteria: ScreeningCriteria = ScreeningCriteria()
    scoring: ScoringConfig = ScoringConfig()


PRESETS: dict[str, Preset] = {
    "default": Preset(
        name="default",
        description="Canonical swing rubric: pass at 60, 12/9/7/6% target tiers",
    ),
    "classic": Preset(
        name="classic",
        description="Early screener: pass at 50, flat 8% target, top 3 reasons",
        scoring=ScoringConfig(
            pass_threshold=50,
            target_tiers=[],
            base_target_multiplier=1.08,
            max_reasons=3,
        ),
    ),
    "realtime": Preset(
        name="realtime",
        description="Live-data screener: pass at 60, 10/8/6% target tiers, top 5 reasons",
        scoring=ScoringConfig(
            pass_threshold=60,
            target_tiers=[
                TargetTier(min_score=81, multiplier=1.10),
                TargetTier(min_score=71, multiplier=1.08),
            ],
            base_target_multiplier=1.06,
            max_reasons=5,
        ),
    ),
    "institutional": Preset(
        name="institutional",
        description=(
            "Institutional grade: pass at 65, promoter holding floor lowered to 25%, "
            "banks scored on D/E up to 10 and exempt from the promoter floor"
        ),
        criteria=ScreeningCriteria(
            fundamental=FundamentalCriteria(
                min_promoter_holding=25.0,
                sector_overrides={
                    "Banking": SectorOverride(max_debt_to_equity=10.0, promoter_exempt=True),
                },
            ),
        ),
        scoring=ScoringConfig(pass_threshold=65),
    ),
}


def get_preset(name: str) -> Preset:
    """Look up a named preset.

    Raises:
        ConfigError: If no preset has that name.
    """
    try:
        return PRESETS[name]
    except KeyError:
        raise ConfigError(
            f"Unknown preset '{name}' (available: {', '.join(sorted(PRESETS))})"
        ) from None


def _deep_merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_criteria(
    overrides: ScreeningCriteria | dict[str, Any] | None = None,
    base: ScreeningCriteria | None = None,
) -> ScreeningCriteria:
    """Merge caller-supplied partial criteria over a base, field by field.

    Args:
        overrides: Partial nested dict (e.g. ``{"technical": {"rsi_min": 50}}``),
            a complete ScreeningCriteria, or None for the base unchanged.
        base: Criteria to merge onto; defaults to ScreeningCriteria().

    Returns:
        A new validated ScreeningCriteria.

    Raises:
        ConfigError: If the merged criteria are structurally invalid.
    """
    base = base or ScreeningCriteria()
    if overrides is None:
        return base
    if isinstance(overrides, ScreeningCriteria):
        return overrides
    if not isinstance(overrides, dict):
        raise ConfigError(f"criteria overrides must be a mapping, got {type(overrides).__name__}")

    try:
        return ScreeningCriteria.model_validate(_deep_merge(base.model_dump(), overrides))
    except ValidationError as exc:
        raise ConfigError(f"Invalid screening criteria: {exc}") from exc


class Settings(BaseModel):
    """Root settings configuration."""

    model_config = ConfigDict(use_enum_values=True)

    system: SystemConfig = SystemConfig()
    data: DataConfig = DataConfig()
    cache: CacheConfig = CacheConfig()
    batch: BatchConfig = BatchConfig()
    scoring: ScoringConfig = ScoringConfig()
    criteria: ScreeningCriteria = ScreeningCriteria()
    symbols: list[str] = []

    @field_validator("symbols")
    @classmethod
    def validate_symbols(cls, v: list[str]) -> list[str]:
        """Validate symbols list."""
        if not isinstance(v, list):
            raise ValueError("symbols must be a list")
        # Each symbol should be a non-empty string
        for symbol in v:
            if not isinstance(symbol, str) or not symbol.strip():
                raise ValueError("Each symbol must be a non-empty string")
        return [s.strip().upper() for s in v]

    def with_preset(self, name: str) -> Settings:
        """Return a copy whose criteria and scoring come from a named preset."""
        preset = get_preset(name)
        return self.model_copy(update={"criteria": preset.criteria, "scoring": preset.scoring})


def load_settings(path: Path | str) -> Settings:
    """Load settings from a YAML configuration file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Settings instance with loaded configuration.

    Raises:
        FileNotFoundError: If configuration file does not exist.
        yaml.YAMLError: If YAML is invalid.
        ConfigError: If configuration is invalid.
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        raw_config = {}

    try:
        return Settings.model_validate(raw_config)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {config_path}: {exc}") from exc
