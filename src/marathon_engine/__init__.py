"""Adaptive marathon engine: real-time fueling, drift and coaching decisions."""

from marathon_engine.coaching import CoachPromptEngine
from marathon_engine.config import EngineConfig, load_config
from marathon_engine.engine import AdaptiveMarathonEngine
from marathon_engine.exceptions import (
    ConfigurationError,
    MarathonEngineError,
    TelemetryFormatError,
)
from marathon_engine.fueling import FuelingEngine
from marathon_engine.math.biomechanics import BiomechanicalAnalyzer
from marathon_engine.math.readiness import ReadinessEstimator
from marathon_engine.session import RunSession, SessionTick

__all__ = [
    "AdaptiveMarathonEngine",
    "BiomechanicalAnalyzer",
    "CoachPromptEngine",
    "ConfigurationError",
    "EngineConfig",
    "FuelingEngine",
    "MarathonEngineError",
    "ReadinessEstimator",
    "RunSession",
    "SessionTick",
    "TelemetryFormatError",
    "load_config",
]
