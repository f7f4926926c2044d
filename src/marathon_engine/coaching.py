"""Coach prompt arbitration: at most one short message per decision.

Rate limiting comes first: inside the cooldown nothing is surfaced, whatever
the alerts. Otherwise the decision's alerts are deduplicated and the
highest-priority one is mapped to a fixed cue of at most 10 words.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from marathon_engine.models.decision import CoachingPrompt, EngineDecision
from marathon_engine.models.enums import (
    PROMPT_COOLDOWN_SECONDS,
    PROMPT_MAX_WORDS,
    EngineAlert,
    Urgency,
)

# Fixed total order, index 0 wins
ALERT_PRIORITY: tuple[EngineAlert, ...] = (
    EngineAlert.FUEL_CRITICAL,
    EngineAlert.HIGH_HEART_RATE,
    EngineAlert.FUEL_WARNING,
    EngineAlert.CARDIAC_DRIFT,
    EngineAlert.PACE_VARIANCE,
    EngineAlert.SPLIT,
)

# ---------------------------------------------------------------------------
# Cue lookup: alert -> (message, urgency)
# ---------------------------------------------------------------------------

_CUES: dict[EngineAlert, tuple[str, Urgency]] = {
    EngineAlert.FUEL_CRITICAL: ("Fuel now, ease pace.", Urgency.HIGH),
    EngineAlert.HIGH_HEART_RATE: ("Heart rate high. Back off.", Urgency.HIGH),
    EngineAlert.FUEL_WARNING: ("Fuel soon. Stay smooth.", Urgency.MEDIUM),
    EngineAlert.CARDIAC_DRIFT: ("Cardiac drift rising. Slow slightly.", Urgency.MEDIUM),
    EngineAlert.PACE_VARIANCE: ("Pace drifting. Re-center rhythm.", Urgency.LOW),
    EngineAlert.SPLIT: ("Strong split. Hold form.", Urgency.LOW),
}


def truncate_words(message: str, max_words: int = PROMPT_MAX_WORDS) -> str:
    """Keep at most max_words whitespace-separated words, single-spaced."""
    return " ".join(message.split()[:max_words])


def select_alert(alerts: tuple[EngineAlert, ...] | list[EngineAlert]) -> EngineAlert | None:
    """Highest-priority alert after deduplication, or None when there are none."""
    present = set(alerts)
    for alert in ALERT_PRIORITY:
        if alert in present:
            return alert
    return None


class CoachPromptEngine:
    """Pure arbitration; the caller owns persistence of last_prompt_at."""

    def __init__(self, cooldown_seconds: float = PROMPT_COOLDOWN_SECONDS) -> None:
        self.cooldown = timedelta(seconds=cooldown_seconds)

    def prompt(
        self,
        decision: EngineDecision,
        now: datetime,
        last_prompt_at: datetime | None = None,
    ) -> CoachingPrompt | None:
        """Select the coaching prompt to surface for a decision, if any."""
        if last_prompt_at is not None and now - last_prompt_at < self.cooldown:
            return None

        alert = select_alert(decision.alerts)
        if alert is None:
            return None

        message, urgency = _CUES[alert]
        return CoachingPrompt(message=truncate_words(message), urgency=urgency, source=alert)
