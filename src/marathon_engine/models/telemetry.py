"""Sensor-side inputs: live telemetry ticks and motion samples."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LiveRunMetrics:
    """One ~1 Hz telemetry tick from the sensor-fusion collaborator.

    Physiological fields are optional: no GPS fix or no optical HR lock
    simply leaves them as None.
    """

    timestamp: datetime
    distance_miles: float
    heart_rate_bpm: float | None = None
    pace_seconds_per_mile: float | None = None
    cadence_spm: float | None = None
    grade_percent: float | None = None
    calories_per_minute: float | None = None
    heart_rate_zone: int | None = None
    split_marked: bool = False  # Set by the lap-marking collaborator


@dataclass(frozen=True)
class MotionSample:
    """One motion-sensor tick (~100 Hz).

    vertical_acceleration is in g with gravity removed; lateral_balance runs
    from -1 (left loaded) to +1 (right loaded); timestamp is in seconds.
    """

    vertical_acceleration: float
    lateral_balance: float = 0.0
    timestamp: float = 0.0
