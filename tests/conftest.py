"""Shared test fixtures: readiness baselines, telemetry streams, motion batches."""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Callable

import pytest

from marathon_engine.models.decision import EngineDecision, FuelingStatus
from marathon_engine.models.enums import EngineAlert, FuelingLevel
from marathon_engine.models.readiness import ReadinessInput
from marathon_engine.models.telemetry import LiveRunMetrics, MotionSample

RUN_START = datetime(2026, 10, 18, 7, 30, 0)


@pytest.fixture
def run_start() -> datetime:
    return RUN_START


@pytest.fixture
def neutral_baseline() -> ReadinessInput:
    """ACWR 1.0, no wellness deviation."""
    return ReadinessInput(acute_load=100, chronic_load=100, resting_hr_delta=0, hrv_delta_pct=0)


@pytest.fixture
def overreached_baseline() -> ReadinessInput:
    """ACWR ~1.44 with elevated resting HR and suppressed HRV."""
    return ReadinessInput(acute_load=130, chronic_load=90, resting_hr_delta=7, hrv_delta_pct=-12)


@pytest.fixture
def fresh_baseline() -> ReadinessInput:
    """ACWR 0.70 with favourable markers."""
    return ReadinessInput(acute_load=70, chronic_load=100, resting_hr_delta=-3, hrv_delta_pct=8)


@pytest.fixture
def metrics_factory() -> Callable[..., LiveRunMetrics]:
    """Factory for 1 Hz LiveRunMetrics ticks.

    Usage:
        tick = metrics_factory(second=12, heart_rate_bpm=150)
    """

    def factory(second: int = 0, **overrides) -> LiveRunMetrics:
        fields = dict(
            timestamp=RUN_START + timedelta(seconds=second),
            distance_miles=second / 600.0,
            heart_rate_bpm=150.0,
            pace_seconds_per_mile=600.0,
            cadence_spm=172.0,
            grade_percent=0.0,
            calories_per_minute=11.0,
            heart_rate_zone=3,
        )
        fields.update(overrides)
        return LiveRunMetrics(**fields)

    return factory


@pytest.fixture
def drifting_run(metrics_factory) -> list[LiveRunMetrics]:
    """300 one-second ticks, HR rising 0.2 bpm/s at constant 10:00/mile pace."""
    return [
        metrics_factory(second=s, heart_rate_bpm=138 + 0.2 * s, distance_miles=s / 360.0)
        for s in range(300)
    ]


@pytest.fixture
def decision_factory() -> Callable[..., EngineDecision]:
    def factory(*alerts: EngineAlert, timestamp: datetime = RUN_START) -> EngineDecision:
        return EngineDecision(
            timestamp=timestamp,
            fatigue_coefficient=1.2,
            pace_adjustment_pct=-2.0,
            fueling_status=FuelingStatus(remaining_glycogen_grams=15.0, level=FuelingLevel.CRITICAL),
            drift_slope_per_minute=0.02,
            alerts=tuple(alerts),
        )

    return factory


@pytest.fixture
def sine_motion_batch() -> list[MotionSample]:
    """1 s of a 3 Hz, 1 g vertical oscillation sampled at 100 Hz, symmetric balance."""
    return [
        MotionSample(
            vertical_acceleration=math.sin(2 * math.pi * 3 * i / 100),
            lateral_balance=0.0,
            timestamp=i / 100,
        )
        for i in range(100)
    ]
