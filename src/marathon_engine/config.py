"""Engine tunables and environment-variable configuration.

Defaults come from models.enums; any field can be overridden with a
MARATHON_ENGINE_<FIELD> environment variable (upper-cased field name).
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Mapping

from marathon_engine.exceptions import ConfigurationError
from marathon_engine.models.enums import (
    DEFAULT_GEL_CARBS_GRAMS,
    DEFAULT_MAX_HEART_RATE,
    DRIFT_ALERT_BPM_PER_MIN,
    DRIFT_MAX_SAMPLES,
    DRIFT_WINDOW_SECONDS,
    FUEL_CRITICAL_FLOOR_GRAMS,
    FUEL_CRITICAL_FRACTION,
    FUEL_WARNING_FRACTION,
    GEL_MAX_CARBS_GRAMS,
    GEL_MIN_CARBS_GRAMS,
    GLYCOGEN_GRAMS_PER_KG,
    MIN_DRIFT_SAMPLES,
    MIN_PACE_SAMPLES,
    PACE_VARIANCE_CV_THRESHOLD,
    PACE_WINDOW_SAMPLES,
    PROMPT_COOLDOWN_SECONDS,
)

ENV_PREFIX = "MARATHON_ENGINE_"


@dataclass(frozen=True)
class EngineConfig:
    """All per-session tunables in one immutable bundle."""

    # Fueling
    glycogen_grams_per_kg: float = GLYCOGEN_GRAMS_PER_KG
    fuel_warning_fraction: float = FUEL_WARNING_FRACTION
    fuel_critical_fraction: float = FUEL_CRITICAL_FRACTION
    fuel_critical_floor_grams: float = FUEL_CRITICAL_FLOOR_GRAMS
    default_gel_carbs_grams: float = DEFAULT_GEL_CARBS_GRAMS
    gel_min_carbs_grams: float = GEL_MIN_CARBS_GRAMS
    gel_max_carbs_grams: float = GEL_MAX_CARBS_GRAMS

    # Cardiac drift
    drift_window_seconds: float = DRIFT_WINDOW_SECONDS
    drift_max_samples: int = DRIFT_MAX_SAMPLES
    min_drift_samples: int = MIN_DRIFT_SAMPLES
    drift_alert_bpm_per_min: float = DRIFT_ALERT_BPM_PER_MIN

    # Heart rate / pace alerts
    max_heart_rate: float = DEFAULT_MAX_HEART_RATE
    pace_window_samples: int = PACE_WINDOW_SAMPLES
    min_pace_samples: int = MIN_PACE_SAMPLES
    pace_variance_cv_threshold: float = PACE_VARIANCE_CV_THRESHOLD

    # Coaching
    prompt_cooldown_seconds: float = PROMPT_COOLDOWN_SECONDS


def load_config(environ: Mapping[str, str] | None = None) -> EngineConfig:
    """Build an EngineConfig from MARATHON_ENGINE_* environment variables.

    Args:
        environ: Mapping to read from; defaults to os.environ.

    Raises:
        ConfigurationError: If an override cannot be parsed as the field's type.
    """
    env = os.environ if environ is None else environ
    overrides: dict[str, float | int] = {}

    for config_field in dataclasses.fields(EngineConfig):
        variable = ENV_PREFIX + config_field.name.upper()
        raw = env.get(variable)
        if raw is None or raw.strip() == "":
            continue
        parse = int if config_field.type in (int, "int") else float
        try:
            overrides[config_field.name] = parse(raw)
        except ValueError:
            raise ConfigurationError(variable, raw) from None

    return EngineConfig(**overrides)
