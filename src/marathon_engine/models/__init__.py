"""Data models for the marathon engine."""

from marathon_engine.models.decision import (
    BiomechanicalMetrics,
    CoachingPrompt,
    EngineDecision,
    FuelingStatus,
)
from marathon_engine.models.enums import (
    EngineAlert,
    FuelingLevel,
    ReadinessTier,
    Urgency,
)
from marathon_engine.models.readiness import ReadinessInput, ReadinessOutput
from marathon_engine.models.telemetry import LiveRunMetrics, MotionSample

__all__ = [
    "BiomechanicalMetrics",
    "CoachingPrompt",
    "EngineAlert",
    "EngineDecision",
    "FuelingLevel",
    "FuelingStatus",
    "LiveRunMetrics",
    "MotionSample",
    "ReadinessInput",
    "ReadinessOutput",
    "ReadinessTier",
    "Urgency",
]
