"""Stride-level gait metrics from a batch of motion samples.

The vertical-acceleration channel is segmented by zero crossings:
positive→negative marks stance onset, negative→positive marks toe-off.
Crossing instants are linearly interpolated between samples, so
ground-contact time is not quantised to the sampling interval.

Sampling is assumed uniform (~100 Hz); the interval is the median spacing
of the sample timestamps.

Reference:
    Moore (2016). Is there an economical running technique? A review of
    modifiable biomechanical factors affecting running economy.
    Sports Med 46(6):793-807.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from marathon_engine.models.decision import BiomechanicalMetrics
from marathon_engine.models.enums import (
    BALANCE_NEUTRAL_PCT,
    BALANCE_SCALE_PCT,
    DEFAULT_SAMPLE_RATE_HZ,
    EFFECTIVE_VERTICAL_SPEED_M_PER_S,
    GCT_MAX_MS,
    GCT_MIN_MS,
    REFERENCE_BODY_MASS_KG,
    RUNNING_POWER_MAX_W,
    STANDARD_GRAVITY,
)
from marathon_engine.models.telemetry import MotionSample

# Fewer samples than this in a stride cycle cannot be double-integrated
_MIN_CYCLE_SAMPLES = 3


def sample_interval(timestamps: np.ndarray) -> float:
    """Median positive spacing of timestamps, or the default 100 Hz interval."""
    if len(timestamps) >= 2:
        diffs = np.diff(timestamps)
        positive = diffs[diffs > 0]
        if positive.size:
            return float(np.median(positive))
    return 1.0 / DEFAULT_SAMPLE_RATE_HZ


def find_crossings(signal: np.ndarray, dt: float) -> tuple[list[int], list[float], list[float]]:
    """Locate stance onsets and toe-offs in a vertical-acceleration signal.

    Returns:
        (onset_indices, onset_times, toe_off_times). onset_indices is the
        first sample at or after each stance onset; times are interpolated
        and expressed in seconds from the first sample.
    """
    positive = signal > 0
    onset_indices: list[int] = []
    onset_times: list[float] = []
    toe_off_times: list[float] = []

    for i in range(1, len(signal)):
        if positive[i - 1] == positive[i]:
            continue
        prev, cur = signal[i - 1], signal[i]
        fraction = prev / (prev - cur) if prev != cur else 0.0
        crossing = (i - 1 + fraction) * dt
        if positive[i - 1]:
            onset_indices.append(i)
            onset_times.append(crossing)
        else:
            toe_off_times.append(crossing)

    return onset_indices, onset_times, toe_off_times


def stance_durations(onset_times: list[float], toe_off_times: list[float]) -> list[float]:
    """Pair each stance onset with the next toe-off; unpaired onsets are dropped."""
    toe_offs = np.asarray(toe_off_times, dtype=np.float64)
    durations: list[float] = []
    for onset in onset_times:
        idx = int(np.searchsorted(toe_offs, onset, side="right"))
        if idx < len(toe_offs):
            durations.append(float(toe_offs[idx] - onset))
    return durations


def cycle_oscillation_m(accel_ms2: np.ndarray, dt: float) -> float:
    """Peak-to-peak vertical displacement over one stride cycle.

    Double integration with the mean velocity removed (a closed cycle has
    no net vertical speed), then the end-point drift ramp removed so the
    cycle starts and ends at the same height.
    """
    velocity = np.cumsum(accel_ms2) * dt
    velocity -= np.mean(velocity)
    displacement = np.cumsum(velocity) * dt
    displacement -= np.linspace(displacement[0], displacement[-1], len(displacement))
    return float(np.max(displacement) - np.min(displacement))


def running_power_watts(accel_ms2: np.ndarray) -> float:
    """Simplified running power from time-integrated acceleration magnitude.

    P = m * mean(|a|) * v_eff, clamped to 0-600 W.
    """
    mean_abs_accel = float(np.mean(np.abs(accel_ms2)))
    power = REFERENCE_BODY_MASS_KG * mean_abs_accel * EFFECTIVE_VERTICAL_SPEED_M_PER_S
    return min(RUNNING_POWER_MAX_W, max(0.0, power))


def contact_balance_pct(
    balance: np.ndarray, stance_mask: np.ndarray, timestamps: np.ndarray, dt: float
) -> float:
    """Time-weighted left/right balance over stance samples (50 = symmetric)."""
    diffs = np.diff(timestamps)
    if diffs.size and np.all(diffs > 0):
        weights = np.append(diffs, dt)
    else:
        weights = np.full(len(balance), dt)

    mask = stance_mask if stance_mask.any() else np.ones(len(balance), dtype=bool)
    mean_balance = float(np.average(balance[mask], weights=weights[mask]))
    pct = BALANCE_NEUTRAL_PCT + mean_balance * BALANCE_SCALE_PCT
    return min(100.0, max(0.0, pct))


class BiomechanicalAnalyzer:
    """Stateless gait analyser; safe to share across runs and threads."""

    def calculate_metrics(self, samples: Sequence[MotionSample]) -> BiomechanicalMetrics:
        """Derive gait metrics for one batch of motion samples.

        Fewer than two samples carry no stride information and yield the
        neutral sentinel: all zeros with a 50% contact balance.
        """
        if len(samples) < 2:
            return BiomechanicalMetrics()

        accel_g = np.array([s.vertical_acceleration for s in samples], dtype=np.float64)
        balance = np.array([s.lateral_balance for s in samples], dtype=np.float64)
        timestamps = np.array([s.timestamp for s in samples], dtype=np.float64)
        accel_ms2 = accel_g * STANDARD_GRAVITY
        dt = sample_interval(timestamps)

        onset_indices, onset_times, toe_off_times = find_crossings(accel_g, dt)

        durations = stance_durations(onset_times, toe_off_times)
        if durations:
            gct_ms = float(np.mean(durations)) * 1000.0
            gct_ms = min(GCT_MAX_MS, max(GCT_MIN_MS, gct_ms))
        else:
            gct_ms = 0.0

        oscillations = [
            cycle_oscillation_m(accel_ms2[start:end], dt)
            for start, end in zip(onset_indices, onset_indices[1:])
            if end - start >= _MIN_CYCLE_SAMPLES
        ]
        oscillation_cm = float(np.mean(oscillations)) * 100.0 if oscillations else 0.0

        return BiomechanicalMetrics(
            vertical_oscillation_cm=oscillation_cm,
            ground_contact_balance_pct=contact_balance_pct(
                balance, accel_g <= 0, timestamps, dt
            ),
            ground_contact_time_ms=gct_ms,
            running_power_watts=running_power_watts(accel_ms2),
        )
