"""Enumerations and physiological constants for the marathon engine.

Closed categories carry stable string values so they survive any
cross-boundary serialization unchanged. Thresholds cite their research
source where one exists; the rest are tuned against the engine's
reference scenarios and are exposed through EngineConfig.
"""

from enum import Enum


class EngineAlert(str, Enum):
    """Conditions the engine can flag on a single tick."""

    FUEL_WARNING = "fuelWarning"
    FUEL_CRITICAL = "fuelCritical"
    HIGH_HEART_RATE = "highHeartRate"
    CARDIAC_DRIFT = "cardiacDrift"
    PACE_VARIANCE = "paceVariance"
    SPLIT = "split"


class FuelingLevel(str, Enum):
    """Fuel state, ordered nominal > warning > critical."""

    NOMINAL = "nominal"
    WARNING = "warning"
    CRITICAL = "critical"


class Urgency(str, Enum):
    """Delivery urgency of a coaching prompt."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ReadinessTier(str, Enum):
    """Training-load tier derived from the acute:chronic workload ratio."""

    HIGH_LOAD = "high_load"
    MODERATE_LOAD = "moderate_load"
    BALANCED = "balanced"
    UNDERLOADED = "underloaded"


# ---------------------------------------------------------------------------
# Readiness: Gabbett (2016), Br J Sports Med 50(5):273-280
# ---------------------------------------------------------------------------
ACWR_HIGH_LOAD = 1.3       # Overreaching zone
ACWR_MODERATE_LOAD = 1.1   # Upper edge of the sweet spot
ACWR_BALANCED_LOW = 0.85   # Below this the athlete is underloaded
ACWR_NEUTRAL = 1.0         # Used when chronic load is missing or zero

HIGH_LOAD_PACE_ADJUSTMENT_MIN_PCT = -5.0
HIGH_LOAD_PACE_ADJUSTMENT_MAX_PCT = -3.0
MODERATE_LOAD_PACE_ADJUSTMENT_PCT = -2.0
UNDERLOADED_PACE_ADJUSTMENT_PCT = 1.0

# Spread of the high-load band: ACWR this far above 1.3 alone saturates -5%
HIGH_LOAD_ACWR_SPAN = 0.2

# Wellness markers: Plews et al. (2013), Buchheit (2014)
RESTING_HR_STRAIN_REF_BPM = 5.0     # +5 bpm resting HR = half of the band
HRV_STRAIN_REF_PCT = 10.0           # -10% HRV = half of the band

# Fatigue coefficient composite weights (1.0 = neutral)
FATIGUE_ACWR_WEIGHT = 1.0
FATIGUE_RESTING_HR_WEIGHT_PER_BPM = 0.02
FATIGUE_HRV_WEIGHT_PER_PCT = 0.01
FATIGUE_COEFFICIENT_MAX = 3.0

# ---------------------------------------------------------------------------
# Fueling: Jeukendrup (2011), J Sports Sci 29(sup1):S91-S99
# ---------------------------------------------------------------------------
GLYCOGEN_GRAMS_PER_KG = 6.0         # Whole-body (muscle + liver) store
DEFAULT_WEIGHT_KG = 70.0            # Stand-in for a non-positive weight
KCAL_PER_GRAM_CARBOHYDRATE = 4.0
FUEL_WARNING_FRACTION = 0.35
FUEL_CRITICAL_FRACTION = 0.05
FUEL_CRITICAL_FLOOR_GRAMS = 20.0
DEFAULT_GEL_CARBS_GRAMS = 25.0
GEL_MIN_CARBS_GRAMS = 15.0
GEL_MAX_CARBS_GRAMS = 40.0
DEFAULT_INTENSITY_ZONE = 2

# Carbohydrate share of energy by HR zone: Romijn et al. (1993),
# Am J Physiol 265(3):E380-E391: fat dominates low, CHO dominates high.
CARB_FRACTION_BY_ZONE = {
    1: 0.40,
    2: 0.50,
    3: 0.60,
    4: 0.75,
    5: 0.85,
}

# ---------------------------------------------------------------------------
# Cardiac drift: Coyle & Gonzalez-Alonso (2001), Exerc Sport Sci Rev 29(2):88-92
# ---------------------------------------------------------------------------
DRIFT_WINDOW_SECONDS = 300.0        # Regress over the last 5 minutes
DRIFT_MAX_SAMPLES = 900             # Hard cap on window length
MIN_DRIFT_SAMPLES = 30              # 30 s at 1 Hz before a slope is trusted
DRIFT_ALERT_BPM_PER_MIN = 0.5

# ---------------------------------------------------------------------------
# Live alert thresholds
# ---------------------------------------------------------------------------
DEFAULT_MAX_HEART_RATE = 190.0
NOMINAL_TICK_SECONDS = 1.0
MAX_TICK_GAP_MINUTES = 5.0          # Longer gaps (paused watch) are capped

# HR ceiling per reported zone as a fraction of max HR (zone upper bound
# plus a tolerance band, never above 95% HRmax).
HR_ZONE_CEILING_PCT_MAX = {
    1: 0.65,
    2: 0.75,
    3: 0.85,
    4: 0.95,
    5: 0.95,
}
HR_CEILING_PCT_MAX_NO_ZONE = 0.95

PACE_WINDOW_SAMPLES = 30
MIN_PACE_SAMPLES = 5
PACE_VARIANCE_CV_THRESHOLD = 0.05   # 5% coefficient of variation

# Live severity → decision adjustments (tighten-only)
FUEL_SEVERITY = {
    FuelingLevel.NOMINAL: 0.0,
    FuelingLevel.WARNING: 0.5,
    FuelingLevel.CRITICAL: 1.0,
}
FUEL_PACE_PENALTY_PCT = 3.0
DRIFT_PACE_PENALTY_PCT = 2.0
FUEL_FATIGUE_WEIGHT = 0.2
DRIFT_FATIGUE_WEIGHT = 0.15
MIN_PACE_ADJUSTMENT_PCT = -10.0

# ---------------------------------------------------------------------------
# Coaching prompts
# ---------------------------------------------------------------------------
PROMPT_COOLDOWN_SECONDS = 25.0
PROMPT_MAX_WORDS = 10

# ---------------------------------------------------------------------------
# Biomechanics: Moore (2016), Sports Med 46(6):793-807
# ---------------------------------------------------------------------------
STANDARD_GRAVITY = 9.80665          # m/s^2 per g
DEFAULT_SAMPLE_RATE_HZ = 100.0
GCT_MIN_MS = 160.0
GCT_MAX_MS = 300.0
RUNNING_POWER_MAX_W = 600.0
REFERENCE_BODY_MASS_KG = 70.0
EFFECTIVE_VERTICAL_SPEED_M_PER_S = 0.6
BALANCE_NEUTRAL_PCT = 50.0
BALANCE_SCALE_PCT = 10.0            # lateral_balance of +/-1 → 40/60%
