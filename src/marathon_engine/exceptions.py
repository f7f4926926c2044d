"""Exception hierarchy for the marathon engine boundaries.

The decision core itself is total and never raises; these cover the
configuration and telemetry-replay edges only.
"""

from __future__ import annotations


class MarathonEngineError(Exception):
    """Base exception for all marathon_engine errors."""


class ConfigurationError(MarathonEngineError):
    """An environment override could not be parsed."""

    def __init__(self, variable: str, value: str) -> None:
        super().__init__(f"Invalid value for {variable}: {value!r}")
        self.variable = variable
        self.value = value


class TelemetryFormatError(MarathonEngineError):
    """A telemetry replay table is missing columns or has bad timestamps."""
