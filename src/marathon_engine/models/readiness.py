"""Readiness snapshot in, readiness verdict out."""

from __future__ import annotations

from dataclasses import dataclass

from marathon_engine.models.enums import ACWR_NEUTRAL, ReadinessTier


@dataclass(frozen=True)
class ReadinessInput:
    """Point-in-time training-load and wellness snapshot.

    Supplied by the external load-tracking collaborator, once per session
    or periodically during a run.
    """

    acute_load: float
    chronic_load: float
    resting_hr_delta: float = 0.0  # bpm above (+) / below (-) baseline
    hrv_delta_pct: float = 0.0  # % change vs baseline; negative = suppressed


@dataclass(frozen=True)
class ReadinessOutput:
    """Readiness verdict derived purely from a ReadinessInput."""

    fatigue_coefficient: float  # 1.0 = neutral
    pace_adjustment_pct: float  # signed; negative = slow down
    acwr: float = ACWR_NEUTRAL
    tier: ReadinessTier = ReadinessTier.BALANCED
