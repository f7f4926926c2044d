"""Replay a run through a RunSession and summarise the decisions.

Usage:
    marathon-engine-simulate --minutes 30 --drift 0.8      # synthetic run
    marathon-engine-simulate --csv run.csv --weight 62      # recorded telemetry

The CSV needs at least ``timestamp`` and ``distance_miles`` columns; any of
heart_rate_bpm, pace_seconds_per_mile, cadence_spm, grade_percent,
calories_per_minute, heart_rate_zone and split_marked are used when present.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Iterable
from datetime import datetime, timedelta
from pathlib import Path

import pandas as pd

from marathon_engine.config import load_config
from marathon_engine.exceptions import MarathonEngineError, TelemetryFormatError
from marathon_engine.models.readiness import ReadinessInput
from marathon_engine.models.telemetry import LiveRunMetrics
from marathon_engine.serialization import decision_to_dict, prompt_to_dict
from marathon_engine.session import RunSession

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("timestamp", "distance_miles")
_FLOAT_COLUMNS = (
    "heart_rate_bpm",
    "pace_seconds_per_mile",
    "cadence_spm",
    "grade_percent",
    "calories_per_minute",
)


def _optional_float(row: pd.Series, column: str) -> float | None:
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    return float(value)


def load_telemetry_csv(path: Path) -> list[LiveRunMetrics]:
    """Read a telemetry CSV into LiveRunMetrics ticks (blank cells = absent signal).

    Raises:
        TelemetryFormatError: If required columns are missing or a timestamp
            cannot be parsed.
    """
    frame = pd.read_csv(path)
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
        raise TelemetryFormatError(f"{path}: missing required columns {missing}")

    try:
        frame["timestamp"] = pd.to_datetime(frame["timestamp"])
    except (ValueError, TypeError) as exc:
        raise TelemetryFormatError(f"{path}: unparsable timestamp ({exc})") from exc

    ticks: list[LiveRunMetrics] = []
    for _, row in frame.iterrows():
        zone = _optional_float(row, "heart_rate_zone")
        split = row.get("split_marked")
        ticks.append(
            LiveRunMetrics(
                timestamp=row["timestamp"].to_pydatetime(),
                distance_miles=float(row["distance_miles"]),
                heart_rate_zone=None if zone is None else int(zone),
                split_marked=bool(split) if split is not None and not pd.isna(split) else False,
                **{column: _optional_float(row, column) for column in _FLOAT_COLUMNS},
            )
        )
    logger.info("Loaded %d telemetry ticks from %s", len(ticks), path)
    return ticks


def synthetic_run(
    start: datetime,
    minutes: float,
    start_hr: float = 138.0,
    drift_bpm_per_min: float = 0.0,
    pace_seconds_per_mile: float = 600.0,
    kcal_per_minute: float = 11.0,
    zone: int = 3,
) -> list[LiveRunMetrics]:
    """Generate a steady-pace 1 Hz run whose HR rises linearly."""
    ticks: list[LiveRunMetrics] = []
    for second in range(int(minutes * 60)):
        ticks.append(
            LiveRunMetrics(
                timestamp=start + timedelta(seconds=second),
                distance_miles=second / pace_seconds_per_mile,
                heart_rate_bpm=start_hr + drift_bpm_per_min * second / 60.0,
                pace_seconds_per_mile=pace_seconds_per_mile,
                cadence_spm=172.0,
                grade_percent=0.0,
                calories_per_minute=kcal_per_minute,
                heart_rate_zone=zone,
            )
        )
    return ticks


def replay(session: RunSession, ticks: Iterable[LiveRunMetrics]) -> pd.DataFrame:
    """Feed ticks through the session; one summary row per decision."""
    rows = []
    for metrics in ticks:
        result = session.tick(metrics)
        row = decision_to_dict(result.decision)
        rows.append(
            {
                "timestamp": row["timestamp"],
                "fatigue": row["fatigueCoefficient"],
                "pace_adjustment_pct": row["paceAdjustmentPercent"],
                "glycogen_g": row["fuelingStatus"]["remainingGlycogenGrams"],
                "fuel_level": row["fuelingStatus"]["level"],
                "drift_bpm_per_min": row["driftSlopePerMinute"],
                "alerts": ",".join(row["alerts"]),
                "prompt": result.prompt.message if result.prompt else "",
            }
        )
        if result.prompt is not None:
            print(json.dumps({"at": row["timestamp"], **prompt_to_dict(result.prompt)}))
    return pd.DataFrame(rows)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Replay a run through the marathon engine.")
    parser.add_argument("--csv", type=Path, help="Telemetry CSV to replay")
    parser.add_argument("--minutes", type=float, default=30.0, help="Synthetic run length")
    parser.add_argument("--drift", type=float, default=0.0, help="Synthetic HR drift, bpm/min")
    parser.add_argument("--weight", type=float, default=70.0, help="Athlete weight in kg")
    parser.add_argument("--acute-load", type=float, default=100.0)
    parser.add_argument("--chronic-load", type=float, default=100.0)
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every decision")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = load_config()
        ticks = (
            load_telemetry_csv(args.csv)
            if args.csv
            else synthetic_run(datetime.now(), args.minutes, drift_bpm_per_min=args.drift)
        )
    except (MarathonEngineError, OSError) as exc:
        logger.error("Cannot start simulation: %s", exc)
        return 1

    session = RunSession(
        weight_kg=args.weight,
        baseline=ReadinessInput(acute_load=args.acute_load, chronic_load=args.chronic_load),
        config=config,
    )
    summary = replay(session, ticks)
    if summary.empty:
        logger.warning("No telemetry ticks to replay")
        return 0

    prompts = summary[summary["prompt"] != ""]
    logger.info(
        "Replayed %d ticks, %d prompts, final glycogen %.0f g (%s), peak drift %.2f bpm/min",
        len(summary),
        len(prompts),
        summary["glycogen_g"].iloc[-1],
        summary["fuel_level"].iloc[-1],
        summary["drift_bpm_per_min"].max(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
