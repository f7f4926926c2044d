"""JSON-compatible payloads for engine outputs.

Converts decisions, prompts and gait metrics into plain dicts keyed with
stable camelCase names, using the enums' string values as identifiers.
Transport consumers encode these however they like.

All functions are pure (no I/O).
"""

from __future__ import annotations

import json

from marathon_engine.models.decision import (
    BiomechanicalMetrics,
    CoachingPrompt,
    EngineDecision,
    FuelingStatus,
)

# Float precision kept in payloads; beyond this is sensor noise.
_DECIMALS = 3


def fueling_status_to_dict(status: FuelingStatus) -> dict:
    return {
        "remainingGlycogenGrams": round(status.remaining_glycogen_grams, _DECIMALS),
        "level": status.level.value,
    }


def decision_to_dict(decision: EngineDecision) -> dict:
    """Convert an EngineDecision to a JSON-compatible dict."""
    return {
        "timestamp": decision.timestamp.isoformat(),
        "fatigueCoefficient": round(decision.fatigue_coefficient, _DECIMALS),
        "paceAdjustmentPercent": round(decision.pace_adjustment_pct, _DECIMALS),
        "fuelingStatus": fueling_status_to_dict(decision.fueling_status),
        "driftSlopePerMinute": round(decision.drift_slope_per_minute, _DECIMALS),
        "alerts": [alert.value for alert in decision.alerts],
    }


def prompt_to_dict(prompt: CoachingPrompt) -> dict:
    return {
        "message": prompt.message,
        "urgency": prompt.urgency.value,
        "source": prompt.source.value,
    }


def biomechanics_to_dict(metrics: BiomechanicalMetrics) -> dict:
    return {
        "verticalOscillationCm": round(metrics.vertical_oscillation_cm, _DECIMALS),
        "groundContactBalancePercent": round(metrics.ground_contact_balance_pct, _DECIMALS),
        "groundContactTimeMs": round(metrics.ground_contact_time_ms, _DECIMALS),
        "runningPowerWatts": round(metrics.running_power_watts, _DECIMALS),
    }


def decision_to_json_string(decision: EngineDecision, indent: int | None = None) -> str:
    """Convert an EngineDecision to a JSON string."""
    return json.dumps(decision_to_dict(decision), indent=indent)
