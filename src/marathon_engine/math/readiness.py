"""Pre-run readiness: ACWR tiering modulated by wellness markers.

The acute:chronic workload ratio is the primary signal; resting-HR and HRV
deltas only modulate within a tier (they can deepen a high-load slowdown or
unlock the fresh-athlete bonus, never move the athlete between tiers).

References:
    Gabbett (2016). The training-injury prevention paradox: should athletes
        be training smarter and harder? Br J Sports Med 50(5):273-280.
    Plews et al. (2013). Training adaptation and heart rate variability in
        elite endurance athletes. Sports Med 43(9):773-781.
"""

from __future__ import annotations

from marathon_engine.models.enums import (
    ACWR_BALANCED_LOW,
    ACWR_HIGH_LOAD,
    ACWR_MODERATE_LOAD,
    ACWR_NEUTRAL,
    FATIGUE_ACWR_WEIGHT,
    FATIGUE_COEFFICIENT_MAX,
    FATIGUE_HRV_WEIGHT_PER_PCT,
    FATIGUE_RESTING_HR_WEIGHT_PER_BPM,
    HIGH_LOAD_ACWR_SPAN,
    HIGH_LOAD_PACE_ADJUSTMENT_MAX_PCT,
    HIGH_LOAD_PACE_ADJUSTMENT_MIN_PCT,
    HRV_STRAIN_REF_PCT,
    MODERATE_LOAD_PACE_ADJUSTMENT_PCT,
    RESTING_HR_STRAIN_REF_BPM,
    UNDERLOADED_PACE_ADJUSTMENT_PCT,
    ReadinessTier,
)
from marathon_engine.models.readiness import ReadinessInput, ReadinessOutput


def calculate_acwr(acute_load: float, chronic_load: float) -> float:
    """Acute:chronic workload ratio; a non-positive chronic load is neutral."""
    if chronic_load <= 0:
        return ACWR_NEUTRAL
    return max(0.0, acute_load / chronic_load)


def classify_tier(acwr: float) -> ReadinessTier:
    """Map an ACWR value onto its load tier."""
    if acwr >= ACWR_HIGH_LOAD:
        return ReadinessTier.HIGH_LOAD
    if acwr >= ACWR_MODERATE_LOAD:
        return ReadinessTier.MODERATE_LOAD
    if acwr >= ACWR_BALANCED_LOW:
        return ReadinessTier.BALANCED
    return ReadinessTier.UNDERLOADED


def recovery_strain(resting_hr_delta: float, hrv_delta_pct: float) -> float:
    """Poor-recovery strain in [0, inf): elevated resting HR plus suppressed HRV.

    Each marker contributes 0.5 at its reference deviation (+5 bpm, -10%).
    Favourable markers contribute nothing.
    """
    hr_strain = max(0.0, resting_hr_delta) / RESTING_HR_STRAIN_REF_BPM * 0.5
    hrv_strain = max(0.0, -hrv_delta_pct) / HRV_STRAIN_REF_PCT * 0.5
    return hr_strain + hrv_strain


def calculate_fatigue_coefficient(
    acwr: float, resting_hr_delta: float, hrv_delta_pct: float
) -> float:
    """Monotone composite: 1.0 plus load excess, resting-HR rise and HRV drop."""
    coefficient = (
        1.0
        + FATIGUE_ACWR_WEIGHT * max(0.0, acwr - 1.0)
        + FATIGUE_RESTING_HR_WEIGHT_PER_BPM * max(0.0, resting_hr_delta)
        + FATIGUE_HRV_WEIGHT_PER_PCT * max(0.0, -hrv_delta_pct)
    )
    return min(FATIGUE_COEFFICIENT_MAX, coefficient)


def calculate_pace_adjustment(
    tier: ReadinessTier, acwr: float, resting_hr_delta: float, hrv_delta_pct: float
) -> float:
    """Baseline pace adjustment in percent for a load tier.

    High load lands in [-5, -3]: -3 at the tier edge with clean markers,
    sliding to -5 as load excess and recovery strain accumulate.
    """
    if tier == ReadinessTier.HIGH_LOAD:
        load_strain = (acwr - ACWR_HIGH_LOAD) / HIGH_LOAD_ACWR_SPAN
        strain = min(1.0, max(0.0, load_strain + recovery_strain(resting_hr_delta, hrv_delta_pct)))
        band = HIGH_LOAD_PACE_ADJUSTMENT_MAX_PCT - HIGH_LOAD_PACE_ADJUSTMENT_MIN_PCT
        return HIGH_LOAD_PACE_ADJUSTMENT_MAX_PCT - band * strain

    if tier == ReadinessTier.MODERATE_LOAD:
        return MODERATE_LOAD_PACE_ADJUSTMENT_PCT

    if tier == ReadinessTier.UNDERLOADED and resting_hr_delta <= 0 and hrv_delta_pct >= 0:
        return UNDERLOADED_PACE_ADJUSTMENT_PCT

    return 0.0


class ReadinessEstimator:
    """Stateless readiness evaluator; safe to share across runs and threads."""

    def evaluate(self, readiness: ReadinessInput) -> ReadinessOutput:
        acwr = calculate_acwr(readiness.acute_load, readiness.chronic_load)
        tier = classify_tier(acwr)
        return ReadinessOutput(
            fatigue_coefficient=calculate_fatigue_coefficient(
                acwr, readiness.resting_hr_delta, readiness.hrv_delta_pct
            ),
            pace_adjustment_pct=calculate_pace_adjustment(
                tier, acwr, readiness.resting_hr_delta, readiness.hrv_delta_pct
            ),
            acwr=acwr,
            tier=tier,
        )
