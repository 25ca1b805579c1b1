"""Unit tests for core configuration module."""
import pytest
from pathlib import Path

from pydantic import ValidationError

from swingscreener.core.config import (
    PRESETS,
    BatchConfig,
    ScoringConfig,
    ScreeningCriteria,
    SectorOverride,
    Settings,
    TargetTier,
    TechnicalCriteria,
    get_preset,
    load_settings,
    merge_criteria,
)
from swingscreener.core.exceptions import ConfigError


def test_load_config(tmp_path):
    """Test loading configuration from YAML file."""
    yaml_content = """
system:
  name: "TestScreener"
  log_level: "DEBUG"
data:
  provider: "synthetic"
  synthetic_bars: 120
batch:
  batch_size: 10
  batch_delay_secs: 0.5
  top_n: 3
criteria:
  technical:
    rsi_min: 50
scoring:
  pass_threshold: 55
symbols:
  - " tcs "
  - "infy"
"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml_content)

    settings = load_settings(config_file)
    assert settings.system.name == "TestScreener"
    assert settings.data.synthetic_bars == 120
    assert settings.batch.batch_size == 10
    assert settings.batch.top_n == 3
    assert settings.criteria.technical.rsi_min == 50
    assert settings.criteria.technical.rsi_max == 70
    assert settings.scoring.pass_threshold == 55
    assert settings.symbols == ["TCS", "INFY"]


def test_shipped_default_config_loads():
    """The repository's config/default.yaml matches the model defaults."""
    path = Path(__file__).resolve().parents[2] / "config" / "default.yaml"
    settings = load_settings(path)
    assert settings.criteria == ScreeningCriteria()
    assert settings.scoring == ScoringConfig()
    assert settings.batch == BatchConfig()


def test_settings_defaults():
    """Test default Settings configuration."""
    settings = Settings()
    assert settings.system.log_level == "INFO"
    assert settings.data.provider == "synthetic"
    assert settings.batch.batch_size == 5
    assert settings.batch.batch_delay_secs == 2.0
    assert settings.batch.top_n == 5
    assert settings.cache.ttl_seconds == 300.0
    assert settings.symbols == []


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.yaml")


def test_load_empty_file_gives_defaults(tmp_path):
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("")
    assert load_settings(config_file) == Settings()


def test_load_invalid_values_raises_config_error(tmp_path):
    config_file = tmp_path / "bad.yaml"
    config_file.write_text("batch:\n  batch_size: 0\n")
    with pytest.raises(ConfigError):
        load_settings(config_file)


class TestValidators:
    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            BatchConfig(batch_delay_secs=-1)

    def test_timeout_may_be_disabled(self):
        assert BatchConfig(timeout_secs=None).timeout_secs is None

    def test_rsi_bounds(self):
        with pytest.raises(ValueError):
            TechnicalCriteria(rsi_max=120)

    def test_rsi_band_order(self):
        with pytest.raises(ValueError):
            TechnicalCriteria(rsi_min=75, rsi_max=70)

    def test_blank_symbol_rejected(self):
        with pytest.raises(ValueError):
            Settings(symbols=["TCS", "  "])

    def test_target_multiplier_must_exceed_one(self):
        with pytest.raises(ValueError):
            TargetTier(min_score=80, multiplier=0.98)


class TestScoringConfig:
    def test_canonical_tiers(self):
        config = ScoringConfig()
        assert config.target_multiplier(100) == 1.12
        assert config.target_multiplier(85) == 1.12
        assert config.target_multiplier(84.9) == 1.09
        assert config.target_multiplier(75) == 1.09
        assert config.target_multiplier(65) == 1.07
        assert config.target_multiplier(64) == 1.06

    def test_tiers_sorted_highest_first(self):
        config = ScoringConfig(target_tiers=[
            TargetTier(min_score=60, multiplier=1.05),
            TargetTier(min_score=90, multiplier=1.2),
        ])
        assert [t.min_score for t in config.target_tiers] == [90, 60]
        assert config.target_multiplier(95) == 1.2

    def test_stop_loss_range(self):
        with pytest.raises(ValueError):
            ScoringConfig(stop_loss_pct=1.5)


class TestPresets:
    def test_all_presets_present(self):
        assert set(PRESETS) == {"default", "classic", "realtime", "institutional"}

    def test_default_preset_is_canonical(self):
        preset = get_preset("default")
        assert preset.scoring == ScoringConfig()
        assert preset.criteria == ScreeningCriteria()

    def test_classic(self):
        scoring = get_preset("classic").scoring
        assert scoring.pass_threshold == 50
        assert scoring.target_multiplier(99) == 1.08

    def test_realtime(self):
        scoring = get_preset("realtime").scoring
        assert scoring.target_multiplier(81) == 1.10
        assert scoring.target_multiplier(71) == 1.08
        assert scoring.target_multiplier(70) == 1.06

    def test_institutional(self):
        preset = get_preset("institutional")
        assert preset.scoring.pass_threshold == 65
        assert preset.criteria.fundamental.min_promoter_holding == 25

    def test_institutional_bank_overrides(self):
        banking = get_preset("institutional").criteria.fundamental.override_for("Banking")
        assert banking == SectorOverride(max_debt_to_equity=10.0, promoter_exempt=True)
        assert get_preset("institutional").criteria.fundamental.override_for("Auto") is None

    def test_other_presets_have_no_sector_overrides(self):
        for name in ("default", "classic", "realtime"):
            assert get_preset(name).criteria.fundamental.sector_overrides == {}

    def test_unknown_preset(self):
        with pytest.raises(ConfigError, match="Unknown preset"):
            get_preset("aggressive")

    def test_with_preset_replaces_criteria_and_scoring(self):
        settings = Settings(symbols=["TCS"]).with_preset("institutional")
        assert settings.scoring.pass_threshold == 65
        assert settings.symbols == ["TCS"]


class TestMergeCriteria:
    def test_none_returns_base(self):
        assert merge_criteria(None) == ScreeningCriteria()

    def test_partial_override_keeps_other_fields(self):
        merged = merge_criteria({"technical": {"rsi_min": 50}})
        assert merged.technical.rsi_min == 50
        assert merged.technical.rsi_max == 70
        assert merged.fundamental.min_roe == 15

    def test_merge_onto_custom_base(self):
        base = merge_criteria({"fundamental": {"min_roe": 25}})
        merged = merge_criteria({"technical": {"min_volume_ratio": 2.0}}, base=base)
        assert merged.fundamental.min_roe == 25
        assert merged.technical.min_volume_ratio == 2.0

    def test_full_criteria_passthrough(self):
        criteria = ScreeningCriteria()
        assert merge_criteria(criteria) is criteria

    def test_inverted_band_raises(self):
        with pytest.raises(ConfigError):
            merge_criteria({"technical": {"rsi_min": 80}})

    def test_unknown_field_raises(self):
        with pytest.raises(ConfigError):
            merge_criteria({"technical": {"rsi_floor": 40}})

    def test_wrong_type_raises(self):
        with pytest.raises(ConfigError):
            merge_criteria({"fundamental": {"min_roe": "high"}})

    def test_non_mapping_raises(self):
        with pytest.raises(ConfigError):
            merge_criteria(["rsi_min", 50])

    def test_criteria_immutable(self):
        criteria = ScreeningCriteria()
        with pytest.raises(ValidationError):
            criteria.technical.rsi_min = 10


class TestSectorOverrides:
    def test_merge_adds_override(self):
        merged = merge_criteria({"fundamental": {"sector_overrides": {"Banking": {"max_debt_to_equity": 10}}}})
        override = merged.fundamental.override_for("Banking")
        assert override.max_debt_to_equity == 10
        assert override.promoter_exempt is False

    def test_merge_keeps_preset_overrides(self):
        base = get_preset("institutional").criteria
        merged = merge_criteria({"fundamental": {"min_roe": 20}}, base=base)
        assert merged.fundamental.override_for("Banking").promoter_exempt is True

    def test_non_positive_ceiling_raises(self):
        with pytest.raises(ConfigError):
            merge_criteria({"fundamental": {"sector_overrides": {"Banking": {"max_debt_to_equity": -1}}}})

    def test_unknown_override_key_raises(self):
        with pytest.raises(ConfigError):
            merge_criteria({"fundamental": {"sector_overrides": {"Banking": {"exempt": True}}}})

    def test_loaded_from_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            """
criteria:
  fundamental:
    sector_overrides:
      Banking:
        max_debt_to_equity: 12
        promoter_exempt: true
"""
        )
        settings = load_settings(config_file)
        override = settings.criteria.fundamental.override_for("Banking")
        assert override == SectorOverride(max_debt_to_equity=12.0, promoter_exempt=True)
