"""Engine outputs: fuel status, decisions, prompts, gait metrics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from marathon_engine.models.enums import (
    BALANCE_NEUTRAL_PCT,
    EngineAlert,
    FuelingLevel,
    Urgency,
)


@dataclass(frozen=True)
class FuelingStatus:
    """Current fuel state of a run."""

    remaining_glycogen_grams: float
    level: FuelingLevel


@dataclass(frozen=True)
class EngineDecision:
    """Immutable snapshot produced by one AdaptiveMarathonEngine.ingest() call.

    alerts keeps derivation order and may contain duplicates; the coach
    deduplicates before arbitration.
    """

    timestamp: datetime
    fatigue_coefficient: float
    pace_adjustment_pct: float
    fueling_status: FuelingStatus
    drift_slope_per_minute: float
    alerts: tuple[EngineAlert, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CoachingPrompt:
    """A single arbitrated coaching message (at most 10 words)."""

    message: str
    urgency: Urgency
    source: EngineAlert


@dataclass(frozen=True)
class BiomechanicalMetrics:
    """Gait metrics derived from one batch of motion samples."""

    vertical_oscillation_cm: float = 0.0
    ground_contact_balance_pct: float = BALANCE_NEUTRAL_PCT
    ground_contact_time_ms: float = 0.0  # typical 160-300 ms
    running_power_watts: float = 0.0  # simplified model, 0-600 W
