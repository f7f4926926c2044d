"""Tests for environment-driven engine configuration."""

from __future__ import annotations

import pytest

from marathon_engine.config import EngineConfig, load_config
from marathon_engine.exceptions import ConfigurationError, MarathonEngineError


class TestLoadConfig:
    def test_empty_environment_gives_defaults(self) -> None:
        assert load_config({}) == EngineConfig()

    def test_float_and_int_overrides(self) -> None:
        config = load_config(
            {
                "MARATHON_ENGINE_MAX_HEART_RATE": "182",
                "MARATHON_ENGINE_MIN_DRIFT_SAMPLES": "45",
                "MARATHON_ENGINE_FUEL_WARNING_FRACTION": "0.4",
            }
        )
        assert config.max_heart_rate == 182.0
        assert config.min_drift_samples == 45
        assert isinstance(config.min_drift_samples, int)
        assert config.fuel_warning_fraction == pytest.approx(0.4)

    def test_blank_values_are_ignored(self) -> None:
        assert load_config({"MARATHON_ENGINE_MAX_HEART_RATE": "  "}) == EngineConfig()

    def test_unrelated_variables_are_ignored(self) -> None:
        assert load_config({"MAX_HEART_RATE": "150", "HOME": "/root"}) == EngineConfig()

    def test_reads_process_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("MARATHON_ENGINE_PROMPT_COOLDOWN_SECONDS", "40")
        assert load_config().prompt_cooldown_seconds == 40.0

    def test_unparsable_float(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_config({"MARATHON_ENGINE_GLYCOGEN_GRAMS_PER_KG": "lots"})
        assert exc_info.value.variable == "MARATHON_ENGINE_GLYCOGEN_GRAMS_PER_KG"
        assert "lots" in str(exc_info.value)

    def test_int_field_rejects_fraction(self) -> None:
        with pytest.raises(ConfigurationError):
            load_config({"MARATHON_ENGINE_PACE_WINDOW_SAMPLES": "4.5"})

    def test_error_is_engine_error(self) -> None:
        assert issubclass(ConfigurationError, MarathonEngineError)
