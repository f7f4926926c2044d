"""RunSession: the per-run coaching loop around the engine.

Owns one AdaptiveMarathonEngine and one CoachPromptEngine for the lifetime
of a run, persists the last prompt time for rate limiting, and keeps the
latest decision, prompt and gait metrics for read-only consumers (UI,
snapshot builders). Delivery of prompts (voice, haptics) is left to the
caller.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from marathon_engine.coaching import CoachPromptEngine
from marathon_engine.config import EngineConfig
from marathon_engine.engine import AdaptiveMarathonEngine
from marathon_engine.math.biomechanics import BiomechanicalAnalyzer
from marathon_engine.models.decision import (
    BiomechanicalMetrics,
    CoachingPrompt,
    EngineDecision,
    FuelingStatus,
)
from marathon_engine.models.enums import EngineAlert
from marathon_engine.models.readiness import ReadinessInput, ReadinessOutput
from marathon_engine.models.telemetry import LiveRunMetrics, MotionSample

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionTick:
    """Result of one coaching-loop tick."""

    decision: EngineDecision
    prompt: CoachingPrompt | None = None
    alert_changed: bool = False  # True when the leading alert differs from last tick


class RunSession:
    """Coaching loop for a single run.

    Usage:
        session = RunSession(weight_kg=70, baseline=readiness_input)
        tick = session.tick(metrics)
        if tick.prompt:
            deliver(tick.prompt)
    """

    def __init__(
        self,
        weight_kg: float,
        baseline: ReadinessInput,
        config: EngineConfig | None = None,
        analyzer: BiomechanicalAnalyzer | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.engine = AdaptiveMarathonEngine(weight_kg, baseline, self.config)
        self.coach = CoachPromptEngine(cooldown_seconds=self.config.prompt_cooldown_seconds)
        self.analyzer = analyzer or BiomechanicalAnalyzer()

        self._lock = threading.Lock()
        self.last_prompt_at: datetime | None = None
        self.active_alert: EngineAlert | None = None
        self.latest_decision: EngineDecision | None = None
        self.latest_prompt: CoachingPrompt | None = None
        self.latest_biomechanics = BiomechanicalMetrics()

    def tick(self, metrics: LiveRunMetrics, now: datetime | None = None) -> SessionTick:
        """Run one metrics tick through the engine and the prompt arbiter.

        Args:
            metrics: The latest telemetry tick.
            now: Wall-clock time for cooldown evaluation; defaults to the
                metrics timestamp so replays are deterministic.
        """
        now = now or metrics.timestamp
        decision = self.engine.ingest(metrics)

        with self._lock:
            self.latest_decision = decision
            leading = decision.alerts[0] if decision.alerts else None
            alert_changed = leading != self.active_alert
            self.active_alert = leading

            prompt = self.coach.prompt(decision, now=now, last_prompt_at=self.last_prompt_at)
            if prompt is not None:
                self.last_prompt_at = now
                self.latest_prompt = prompt

        if prompt is not None:
            logger.info(
                "Prompt [%s/%s]: %s", prompt.source.value, prompt.urgency.value, prompt.message
            )
        return SessionTick(decision=decision, prompt=prompt, alert_changed=alert_changed)

    def log_nutrition(self, carbs_grams: float | None = None) -> FuelingStatus:
        """Log a gel, clamped to the plausible single-serving range."""
        grams = self.config.default_gel_carbs_grams if carbs_grams is None else carbs_grams
        grams = min(self.config.gel_max_carbs_grams, max(self.config.gel_min_carbs_grams, grams))
        status = self.engine.log_gel(grams)
        with self._lock:
            self.active_alert = None
        return status

    def analyze_motion(self, samples: Sequence[MotionSample]) -> BiomechanicalMetrics:
        """Derive gait metrics for a motion batch and keep them as the latest."""
        metrics = self.analyzer.calculate_metrics(samples)
        with self._lock:
            self.latest_biomechanics = metrics
        return metrics

    def update_readiness(self, readiness: ReadinessInput) -> ReadinessOutput:
        return self.engine.update_baseline(readiness)
