"""Cardiac drift: least-squares HR slope over a sliding time window.

Drift is the progressive rise of heart rate at constant external effort.
The detector keeps the most recent window of (timestamp, HR) samples and
regresses HR against elapsed minutes; the slope is reported in bpm per
minute. Below the minimum sample count the slope is exactly 0.

Reference:
    Coyle & Gonzalez-Alonso (2001). Cardiovascular drift during prolonged
    exercise: new perspectives. Exerc Sport Sci Rev 29(2):88-92.
"""

from __future__ import annotations

from collections import deque
from datetime import datetime

import numpy as np

from marathon_engine.models.enums import (
    DRIFT_MAX_SAMPLES,
    DRIFT_WINDOW_SECONDS,
    MIN_DRIFT_SAMPLES,
)


def linear_slope(xs: np.ndarray, ys: np.ndarray) -> float:
    """Least-squares slope of ys against xs; 0.0 when xs has no spread."""
    if len(xs) < 2:
        return 0.0
    ss_x = float(np.sum((xs - np.mean(xs)) ** 2))
    if ss_x <= 0:
        return 0.0
    # numpy.polyfit(x, y, 1) returns [slope, intercept]
    return float(np.polyfit(xs, ys, 1)[0])


class CardiacDriftDetector:
    """Bounded sliding window of heart-rate samples.

    Not synchronised on its own: the owning AdaptiveMarathonEngine
    serialises every add()/prune()/slope_per_minute() call under its lock.
    """

    def __init__(
        self,
        window_seconds: float = DRIFT_WINDOW_SECONDS,
        min_samples: int = MIN_DRIFT_SAMPLES,
        max_samples: int = DRIFT_MAX_SAMPLES,
    ) -> None:
        self.window_seconds = window_seconds
        self.min_samples = max(2, min_samples)
        self._samples: deque[tuple[datetime, float]] = deque(maxlen=max(1, max_samples))

    def add(self, timestamp: datetime, heart_rate_bpm: float) -> None:
        """Append a sample and evict anything older than the window."""
        self._samples.append((timestamp, heart_rate_bpm))
        newest = self._samples[-1][0]
        while (newest - self._samples[0][0]).total_seconds() > self.window_seconds:
            self._samples.popleft()

    def prune(self, now: datetime) -> None:
        """Evict samples older than the window relative to now.

        Lets the window age out during a heart-rate dropout, when add() is
        not being called.
        """
        while self._samples and (now - self._samples[0][0]).total_seconds() > self.window_seconds:
            self._samples.popleft()

    @property
    def sample_count(self) -> int:
        return len(self._samples)

    @property
    def has_minimum_samples(self) -> bool:
        return len(self._samples) >= self.min_samples

    def slope_per_minute(self) -> float:
        """HR drift in bpm per elapsed minute, or 0.0 below the sample guard."""
        if not self.has_minimum_samples:
            return 0.0

        origin = self._samples[0][0]
        minutes = np.array(
            [(ts - origin).total_seconds() / 60.0 for ts, _ in self._samples],
            dtype=np.float64,
        )
        heart_rates = np.array([hr for _, hr in self._samples], dtype=np.float64)
        return linear_slope(minutes, heart_rates)
