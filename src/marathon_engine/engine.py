"""AdaptiveMarathonEngine: per-run orchestrator turning telemetry into decisions.

One instance per run session. Every ingest() call:
    1. burns glycogen in the owned FuelingEngine,
    2. feeds the heart-rate sample into the cardiac-drift window,
    3. derives the alert set,
    4. tightens the cached readiness baseline with live fuel/drift severity.

Live adverse signals may only tighten the baseline pace adjustment, never
loosen it.
"""

from __future__ import annotations

import logging
import math
import threading
from collections import deque
from datetime import datetime

import numpy as np

from marathon_engine.config import EngineConfig
from marathon_engine.fueling import FuelingEngine
from marathon_engine.math.drift import CardiacDriftDetector
from marathon_engine.math.readiness import ReadinessEstimator
from marathon_engine.models.decision import EngineDecision, FuelingStatus
from marathon_engine.models.enums import (
    DEFAULT_INTENSITY_ZONE,
    DEFAULT_MAX_HEART_RATE,
    DRIFT_FATIGUE_WEIGHT,
    DRIFT_PACE_PENALTY_PCT,
    FATIGUE_COEFFICIENT_MAX,
    FUEL_FATIGUE_WEIGHT,
    FUEL_PACE_PENALTY_PCT,
    FUEL_SEVERITY,
    HR_CEILING_PCT_MAX_NO_ZONE,
    HR_ZONE_CEILING_PCT_MAX,
    MAX_TICK_GAP_MINUTES,
    MIN_PACE_ADJUSTMENT_PCT,
    NOMINAL_TICK_SECONDS,
    EngineAlert,
    FuelingLevel,
)
from marathon_engine.models.readiness import ReadinessInput, ReadinessOutput
from marathon_engine.models.telemetry import LiveRunMetrics

logger = logging.getLogger(__name__)


def drift_severity(slope_per_minute: float, threshold: float, guard_satisfied: bool) -> float:
    """0 below the alert threshold, rising linearly to 1 at twice the threshold."""
    if not guard_satisfied or slope_per_minute <= threshold:
        return 0.0
    if threshold <= 0:
        return 1.0
    return min(1.0, (slope_per_minute - threshold) / threshold)


def combine_with_baseline(
    baseline: ReadinessOutput, fuel_level: FuelingLevel, drift: float
) -> tuple[float, float]:
    """Tighten the readiness baseline with live fuel and drift severity.

    Returns:
        (fatigue_coefficient, pace_adjustment_pct). The pace adjustment is
        never above the baseline value and never below -10%.
    """
    fuel = FUEL_SEVERITY[fuel_level]
    fatigue = baseline.fatigue_coefficient + FUEL_FATIGUE_WEIGHT * fuel + DRIFT_FATIGUE_WEIGHT * drift
    penalty = FUEL_PACE_PENALTY_PCT * fuel + DRIFT_PACE_PENALTY_PCT * drift
    pace = max(MIN_PACE_ADJUSTMENT_PCT, baseline.pace_adjustment_pct - penalty)
    return min(FATIGUE_COEFFICIENT_MAX, fatigue), min(baseline.pace_adjustment_pct, pace)


def heart_rate_ceiling(max_heart_rate: float, zone: int | None) -> float:
    """Highest acceptable HR for the reported zone (zone top plus tolerance)."""
    if zone is None:
        return max_heart_rate * HR_CEILING_PCT_MAX_NO_ZONE
    return max_heart_rate * HR_ZONE_CEILING_PCT_MAX[min(5, max(1, int(zone)))]


class AdaptiveMarathonEngine:
    """Orchestrates fueling, drift and readiness for a single run.

    Usage:
        engine = AdaptiveMarathonEngine(weight_kg=70, baseline=readiness_input)
        decision = engine.ingest(metrics)

    ingest() and update_baseline() are serialised by an internal lock; the
    owned FuelingEngine has its own lock, always taken after this one.
    """

    def __init__(
        self,
        weight_kg: float,
        baseline: ReadinessInput,
        config: EngineConfig | None = None,
        estimator: ReadinessEstimator | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.estimator = estimator or ReadinessEstimator()
        self.fueling = FuelingEngine(weight_kg, self.config)

        self.max_heart_rate = self.config.max_heart_rate
        if self.max_heart_rate <= 0:
            logger.warning(
                "Non-positive max heart rate %.0f, using default %.0f",
                self.max_heart_rate,
                DEFAULT_MAX_HEART_RATE,
            )
            self.max_heart_rate = DEFAULT_MAX_HEART_RATE

        self._lock = threading.Lock()
        self._baseline = self.estimator.evaluate(baseline)
        self._drift = CardiacDriftDetector(
            window_seconds=self.config.drift_window_seconds,
            min_samples=self.config.min_drift_samples,
            max_samples=self.config.drift_max_samples,
        )
        self._paces: deque[float] = deque(maxlen=max(1, self.config.pace_window_samples))
        self._last_timestamp: datetime | None = None
        self._last_split_mile = 0

    @property
    def baseline(self) -> ReadinessOutput:
        with self._lock:
            return self._baseline

    def update_baseline(self, readiness: ReadinessInput) -> ReadinessOutput:
        """Re-evaluate the cached readiness baseline (e.g. a mid-run refresh)."""
        output = self.estimator.evaluate(readiness)
        with self._lock:
            self._baseline = output
        logger.info(
            "Readiness baseline updated: ACWR=%.2f fatigue=%.2f pace=%+.1f%%",
            output.acwr,
            output.fatigue_coefficient,
            output.pace_adjustment_pct,
        )
        return output

    def log_gel(self, carbs_grams: float | None = None) -> FuelingStatus:
        return self.fueling.log_gel(carbs_grams)

    def fueling_status(self) -> FuelingStatus:
        return self.fueling.status()

    def ingest(self, metrics: LiveRunMetrics) -> EngineDecision:
        """Fold one telemetry tick into the run state and emit a decision."""
        with self._lock:
            minutes = self._elapsed_minutes(metrics.timestamp)
            if metrics.calories_per_minute is not None:
                fueling_status = self.fueling.ingest(
                    metrics.calories_per_minute,
                    DEFAULT_INTENSITY_ZONE
                    if metrics.heart_rate_zone is None
                    else metrics.heart_rate_zone,
                    duration_minutes=minutes,
                )
            else:
                fueling_status = self.fueling.status()

            if metrics.heart_rate_bpm is not None:
                self._drift.add(metrics.timestamp, metrics.heart_rate_bpm)
            self._drift.prune(metrics.timestamp)
            slope = self._drift.slope_per_minute()
            guard_satisfied = self._drift.has_minimum_samples

            if metrics.pace_seconds_per_mile is not None and metrics.pace_seconds_per_mile > 0:
                self._paces.append(metrics.pace_seconds_per_mile)

            alerts: list[EngineAlert] = []
            if fueling_status.level == FuelingLevel.CRITICAL:
                alerts.append(EngineAlert.FUEL_CRITICAL)
            elif fueling_status.level == FuelingLevel.WARNING:
                alerts.append(EngineAlert.FUEL_WARNING)

            if metrics.heart_rate_bpm is not None and metrics.heart_rate_bpm > heart_rate_ceiling(
                self.max_heart_rate, metrics.heart_rate_zone
            ):
                alerts.append(EngineAlert.HIGH_HEART_RATE)

            if guard_satisfied and slope > self.config.drift_alert_bpm_per_min:
                alerts.append(EngineAlert.CARDIAC_DRIFT)

            if self._pace_is_variable():
                alerts.append(EngineAlert.PACE_VARIANCE)

            alerts.extend(self._split_alerts(metrics))

            fatigue, pace_adjustment = combine_with_baseline(
                self._baseline,
                fueling_status.level,
                drift_severity(slope, self.config.drift_alert_bpm_per_min, guard_satisfied),
            )

        decision = EngineDecision(
            timestamp=metrics.timestamp,
            fatigue_coefficient=fatigue,
            pace_adjustment_pct=pace_adjustment,
            fueling_status=fueling_status,
            drift_slope_per_minute=slope,
            alerts=tuple(alerts),
        )
        logger.debug(
            "Decision at %s: fatigue=%.2f pace=%+.1f%% drift=%.3f alerts=%s",
            metrics.timestamp.isoformat(),
            fatigue,
            pace_adjustment,
            slope,
            [a.value for a in alerts],
        )
        return decision

    # ------------------------------------------------------------------
    # Internal helpers (caller holds self._lock)
    # ------------------------------------------------------------------

    def _elapsed_minutes(self, timestamp: datetime) -> float:
        """Minutes since the previous tick; the first tick counts as one nominal tick."""
        previous, self._last_timestamp = self._last_timestamp, timestamp
        if previous is None:
            return NOMINAL_TICK_SECONDS / 60.0
        minutes = (timestamp - previous).total_seconds() / 60.0
        return min(MAX_TICK_GAP_MINUTES, max(0.0, minutes))

    def _pace_is_variable(self) -> bool:
        """Coefficient of variation of recent pace above the variance threshold."""
        if len(self._paces) < self.config.min_pace_samples:
            return False
        paces = np.array(self._paces, dtype=np.float64)
        mean = float(np.mean(paces))
        if mean <= 0:
            return False
        return float(np.std(paces)) / mean >= self.config.pace_variance_cv_threshold

    def _split_alerts(self, metrics: LiveRunMetrics) -> list[EngineAlert]:
        alerts: list[EngineAlert] = []
        if metrics.split_marked:
            alerts.append(EngineAlert.SPLIT)
        if metrics.distance_miles > 0 and math.isfinite(metrics.distance_miles):
            mile = int(math.floor(metrics.distance_miles))
            if mile > self._last_split_mile:
                self._last_split_mile = mile
                alerts.append(EngineAlert.SPLIT)
        return alerts
