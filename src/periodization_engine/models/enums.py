"""Enumerations and tuning constants for the periodization engine.

Thresholds are grouped by the component that consumes them. Each group cites
the training-science source it is calibrated against.
"""

from enum import Enum


class FatigueCategory(str, Enum):
    """Accumulated-fatigue classification of a 0-100 fatigue score."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    SEVERE = "severe"


class FatigueTrend(str, Enum):
    """Direction of the fatigue score over the trailing window."""

    IMPROVING = "improving"
    STABLE = "stable"
    WORSENING = "worsening"


class RiskLevel(str, Enum):
    """Overreaching risk derived from a fatigue history."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class PhaseType(str, Enum):
    """Mesocycle phase types of a block-periodized strength plan."""

    ANATOMICAL_ADAPTATION = "anatomical_adaptation"
    HYPERTROPHY = "hypertrophy"
    STRENGTH = "strength"
    POWER = "power"
    PEAKING = "peaking"
    DELOAD = "deload"
    TRANSITION = "transition"


class DeloadType(str, Enum):
    """How a deload reduces training stress."""

    VOLUME = "volume"
    INTENSITY = "intensity"
    FREQUENCY = "frequency"
    COMPLETE = "complete"
    ACTIVE_RECOVERY = "active_recovery"


class DeloadUrgency(str, Enum):
    """How soon a recommended deload should start."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class TransitionTrigger(str, Enum):
    """Why a plan moved from one phase to the next."""

    TIME = "time"
    FATIGUE = "fatigue"
    PROGRESS = "progress"
    ADHERENCE = "adherence"
    MANUAL = "manual"


class ProgressionType(str, Enum):
    """Kind of change recommended for the next session of an exercise."""

    INCREASE_WEIGHT = "increase_weight"
    INCREASE_REPS = "increase_reps"
    INCREASE_SETS = "increase_sets"
    DECREASE_REST = "decrease_rest"
    MAINTAIN = "maintain"
    DELOAD = "deload"


class ExperienceLevel(str, Enum):
    """Trainee experience, scales load increments."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class TrainingGoal(str, Enum):
    """Primary goal a plan is built for."""

    STRENGTH = "strength"
    HYPERTROPHY = "hypertrophy"
    POWER = "power"
    GENERAL_FITNESS = "general_fitness"


class OneRepMaxFormula(str, Enum):
    """Submaximal-to-1RM estimation formulas."""

    EPLEY = "epley"
    BRZYCKI = "brzycki"
    LANDER = "lander"


class PerformanceTrend(str, Enum):
    """Label for the normalized load trend of an exercise."""

    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"
    INSUFFICIENT_DATA = "insufficient_data"


class FatigueIndicator(str, Enum):
    """Within-exercise signals of accumulating fatigue."""

    INCREASING_RIR = "increasing_rir"
    INCOMPLETE_SETS = "incomplete_sets"
    DECLINING_REPS = "declining_reps"


class MassUnit(str, Enum):
    """Unit all weights and increments are expressed in."""

    KG = "kg"
    LB = "lb"


# ---------------------------------------------------------------------------
# Fatigue scoring: Hooper & Mackinnon (1995) wellness questionnaire weighting,
# Halson (2014) Sports Med 44(Suppl 2):S139-147 for monitoring thresholds
# ---------------------------------------------------------------------------
FATIGUE_AXIS_WEIGHTS = {
    "perceived_fatigue": 0.25,
    "sleep_quality": 0.20,
    "energy_level": 0.15,
    "mood": 0.10,
    "motivation": 0.10,
    "soreness": 0.10,
    "stress_level": 0.10,
}

# Positive axes are flipped so that 10 always means "most fatigued"
INVERTED_FATIGUE_AXES = frozenset({"sleep_quality", "energy_level", "mood", "motivation"})
SUBJECTIVE_INVERSION_BASE = 11
SUBJECTIVE_SCALE_MIN = 1
SUBJECTIVE_SCALE_MAX = 10
FATIGUE_SCORE_SCALE = 10.0

# Neutral base score when no subjective axis is present (5 on the 1-10 scale)
DEFAULT_FATIGUE_SCORE = 50.0
DEFAULT_FATIGUE_CONFIDENCE = 0.3

PERFORMANCE_DECLINE_PENALTY_PCT = 10.0
PERFORMANCE_DECLINE_PENALTY = 10.0
LOW_COMPLETION_RATE = 0.8
LOW_COMPLETION_PENALTY = 5.0
SHORT_SLEEP_MINUTES = 420.0  # 7 h
SHORT_SLEEP_PENALTY = 10.0

# Upper bound (inclusive) of each category; anything above the last is SEVERE
FATIGUE_CATEGORY_CEILINGS = (
    (25.0, FatigueCategory.LOW),
    (50.0, FatigueCategory.MODERATE),
    (75.0, FatigueCategory.HIGH),
)

FATIGUE_WINDOW_DAYS = 30
FATIGUE_TREND_WINDOW = 7
FATIGUE_TREND_DELTA = 10.0
PENALTY_WINDOW_DAYS = 7

FATIGUE_RECOMMENDATIONS = {
    FatigueCategory.LOW: (
        "Continue with your normal training plan. Keep good sleep and nutrition habits."
    ),
    FatigueCategory.MODERATE: (
        "Consider reducing training intensity. Prioritise sleep and hydration."
    ),
    FatigueCategory.HIGH: (
        "Reduce volume and intensity significantly. Focus on active recovery."
    ),
    FatigueCategory.SEVERE: (
        "Take a full rest day. Review stress factors and consider consulting a professional."
    ),
}

# Trend report (overreaching risk): Meeusen et al. (2013) ECSS/ACSM consensus
RECOVERY_PEAK_SCORE = 70.0
RECOVERED_SCORE = 50.0
DEFAULT_RECOVERY_DAYS = 3.0
RISK_CRITICAL_PEAK = 85.0
RISK_CRITICAL_AVERAGE = 70.0
RISK_HIGH_AVERAGE = 60.0
RISK_MODERATE_AVERAGE = 40.0
RISK_MODERATE_PEAK = 70.0

# Rest-day advice
REST_DAY_LATEST_SCORE = 80.0
REST_DAY_AVERAGE_SCORE = 70.0
REST_DAY_POOR_SLEEP = 5
REST_DAY_CONFIDENCE_SEVERE = 0.95
REST_DAY_CONFIDENCE_SLEEP = 0.85
REST_DAY_CONFIDENCE_NONE = 0.7
REST_DAY_CONFIDENCE_NO_DATA = 0.3

# ---------------------------------------------------------------------------
# Performance estimation: Epley (1985), Brzycki (1993), LeSuer et al. (1997)
# J Strength Cond Res 11(4):211-213 for formula comparison
# ---------------------------------------------------------------------------
EPLEY_DIVISOR = 30.0
BRZYCKI_NUMERATOR = 36.0
BRZYCKI_REP_LIMIT = 37.0
LANDER_NUMERATOR = 100.0
LANDER_INTERCEPT = 101.3
LANDER_SLOPE = 2.67123

PERFORMANCE_WINDOW = 5  # Most recent logs used for trend/consistency/readiness
TREND_IMPROVING_THRESHOLD = 0.2
TREND_DECLINING_THRESHOLD = -0.2
STRENGTH_CURVE_CONFIDENCE_FACTOR = 0.9

# Readiness: Helms et al. (2016) RIR-based RPE scale, Strength Cond J 38(4):42-49
BASE_READINESS = 0.7
HIGH_RIR_THRESHOLD = 3.0
HIGH_RIR_BONUS = 0.2
LOW_RIR_THRESHOLD = 1.0
LOW_RIR_PENALTY = 0.3
COMPLETION_PIVOT = 0.8
COMPLETION_FACTOR = 0.5
FATIGUE_INDICATOR_PENALTY = 0.1
DEFAULT_READINESS = 0.5
DEFAULT_CONSISTENCY = 0.5

RISING_RIR_SLOPE = 0.5
INCOMPLETE_SET_RATE = 0.9
DECLINING_REPS_SLOPE = -0.3

# RPE derived from RIR when not logged: RPE = 10 - RIR (Zourdos et al. 2016)
RPE_SCALE_MAX = 10.0

# ---------------------------------------------------------------------------
# Deload decision: Bell et al. (2023) Sports Med Open 9:48 deload survey,
# Pritchard et al. (2015) tapering practices
# ---------------------------------------------------------------------------
DELOAD_WINDOW_DAYS = 7
DELOAD_NECESSITY_POINTS = 4

NECESSITY_FATIGUE = 70.0
NECESSITY_DECLINE_PCT = 5.0
NECESSITY_WEEKS_SINCE_DELOAD = 6
NECESSITY_READINESS = 60.0
NECESSITY_SORENESS = 70.0

# Urgency points: low < 4, moderate 4-6, high 7-9, critical >= 10
URGENCY_MODERATE_POINTS = 4
URGENCY_HIGH_POINTS = 7
URGENCY_CRITICAL_POINTS = 10

# Urgency bands as (threshold, points), one band per criterion fires.
# Fatigue, decline and weeks score when above a threshold (highest first);
# readiness scores when below one (lowest first).
URGENCY_FATIGUE_BANDS = ((90.0, 4), (80.0, 3), (70.0, 2), (60.0, 1))
URGENCY_DECLINE_BANDS = ((15.0, 4), (10.0, 3), (5.0, 2), (2.0, 1))
URGENCY_WEEKS_BANDS = ((12, 3), (8, 2), (6, 1))
URGENCY_READINESS_BANDS = ((40.0, 3), (50.0, 2), (60.0, 1))

# Defaults when the wellness window is empty (0-100 scale)
DEFAULT_READINESS_PCT = 70.0
DEFAULT_SORENESS_PCT = 50.0
DEFAULT_STRESS_PCT = 50.0
DEFAULT_SLEEP_QUALITY_PCT = 70.0
DEFAULT_RPE = 7.0

VOLUME_TOLERANCE_WEIGHTS = {"fatigue": 0.5, "soreness": 0.3, "stress": 0.2}
INTENSITY_TOLERANCE_WEIGHTS = {"fatigue": 0.4, "sleep_quality": 0.3, "readiness": 0.3}

TOLERANCE_LOW = 40.0
TOLERANCE_HIGH = 60.0
TOLERANCE_MODERATE = 60.0
TOLERANCE_EXHAUSTED = 30.0
EXHAUSTED_RPE = 8.5
ACTIVE_RECOVERY_DECLINE_PCT = 10.0
ACTIVE_RECOVERY_TOLERANCE = 40.0

DELOAD_BASE_DAYS = {
    DeloadType.VOLUME: 7,
    DeloadType.INTENSITY: 7,
    DeloadType.FREQUENCY: 7,
    DeloadType.COMPLETE: 7,
    DeloadType.ACTIVE_RECOVERY: 5,
}
DELOAD_URGENCY_MULTIPLIER = {
    DeloadUrgency.LOW: 1.0,
    DeloadUrgency.MODERATE: 1.0,
    DeloadUrgency.HIGH: 1.5,
    DeloadUrgency.CRITICAL: 2.0,
}
# Extra days added when overall fatigue exceeds each threshold
DELOAD_FATIGUE_EXTENSION = ((90.0, 3), (80.0, 2), (70.0, 1))

# (volume, intensity, frequency) reduction percentages
DELOAD_REDUCTIONS = {
    DeloadType.VOLUME: (50.0, 0.0, 0.0),
    DeloadType.INTENSITY: (0.0, 30.0, 0.0),
    DeloadType.FREQUENCY: (0.0, 0.0, 30.0),
    DeloadType.COMPLETE: (70.0, 50.0, 30.0),
    DeloadType.ACTIVE_RECOVERY: (50.0, 30.0, 0.0),
}

DELOAD_SUGGESTED_ACTIVITIES = {
    DeloadType.VOLUME: (
        "Reduce the number of sets per exercise",
        "Keep working weights similar",
        "Drop isolation sets",
    ),
    DeloadType.INTENSITY: (
        "Reduce the load on every exercise",
        "Focus on perfect technique",
        "Increase time under tension",
    ),
    DeloadType.FREQUENCY: (
        "Reduce the number of weekly sessions",
        "Add rest days between sessions",
        "Combine muscle groups to train less often",
    ),
    DeloadType.COMPLETE: (
        "Take 2-3 days of complete rest",
        "Keep any remaining sessions very light",
        "Prioritise sleep and nutrition",
    ),
    DeloadType.ACTIVE_RECOVERY: (
        "Replace sessions with walking, swimming or easy cycling",
        "Do mobility and flexibility sessions",
        "Practise relaxation and recovery techniques",
    ),
}

MUSCLE_GROUP_FATIGUE_THRESHOLD = 70.0
# Muscle-group fatigue: volume 40 pts (saturates at 5000), frequency 30 pts
# (saturates at 12 sessions), RPE 30 pts
MUSCLE_VOLUME_SATURATION = 5000.0
MUSCLE_FREQUENCY_SATURATION = 12.0
MUSCLE_VOLUME_POINTS = 40.0
MUSCLE_FREQUENCY_POINTS = 30.0
MUSCLE_RPE_POINTS = 30.0

DECLINE_LOOKBACK_WEEKS = 4
RECOVERY_DAYS_PER_FATIGUE = 20.0
BASE_IMPROVEMENT_PCT = 5.0

# Deload microcycle prescriptions
DELOAD_REP_CAP = 15
INTENSITY_DELOAD_EXTRA_REPS = 2
FREQUENCY_COMPOUND_WEIGHT_FACTOR = 0.9
FREQUENCY_ISOLATION_SET_FACTOR = 0.5
COMPLETE_DELOAD_SET_FACTOR = 0.3
COMPLETE_DELOAD_WEIGHT_FACTOR = 0.7
COMPLETE_DELOAD_EXTRA_REPS = 3
ACTIVE_RECOVERY_SETS = 2
ACTIVE_RECOVERY_REPS = 12
ACTIVE_RECOVERY_WEIGHT_FACTOR = 0.6
ACTIVE_RECOVERY_RIR = 4
ACTIVE_RECOVERY_TEMPO = "2-1-2-0"

# ---------------------------------------------------------------------------
# Phase templates: Bompa & Haff (2009) Periodization: Theory and Methodology;
# Zatsiorsky & Kraemer (2006) for intensity/rep ranges
# ---------------------------------------------------------------------------
DEFAULT_FATIGUE_THRESHOLD = 75.0
DEFAULT_PROGRESS_THRESHOLD = 0.8
DEFAULT_ADHERENCE_THRESHOLD = 0.8

TIME_TRIGGER_CONFIDENCE = 0.9
FATIGUE_TRIGGER_CONFIDENCE = 0.85
PROGRESS_TRIGGER_CONFIDENCE = 0.75
ADHERENCE_TRIGGER_CONFIDENCE = 0.7
FATIGUE_TRIGGER_MIN_COMPLETION = 0.75
PROGRESS_TRIGGER_MIN_COMPLETION = 0.5
ADHERENCE_TRIGGER_MIN_COMPLETION = 0.5
PROGRESS_TRIGGER_WINDOW = 3
ADHERENCE_TRIGGER_WINDOW = 2

# Intensity ceiling (%1RM) bands for target RIR when adapting routines
RIR_BY_INTENSITY_CEILING = ((85.0, 1), (75.0, 2))
DEFAULT_PHASE_RIR = 3

# ---------------------------------------------------------------------------
# Progression: Kraemer & Ratamess (2004) Med Sci Sports Exerc 36(4):674-688
# ---------------------------------------------------------------------------
DEFAULT_BASE_INCREMENT = 2.5
EXPERIENCE_INCREMENT_MULTIPLIER = {
    ExperienceLevel.BEGINNER: 1.2,
    ExperienceLevel.INTERMEDIATE: 1.0,
    ExperienceLevel.ADVANCED: 0.8,
    ExperienceLevel.EXPERT: 0.6,
}
# Conservative increment used when there is not enough history to estimate
DEFAULT_PROGRESSION_INCREMENT = {
    ExperienceLevel.BEGINNER: 2.5,
    ExperienceLevel.INTERMEDIATE: 2.5,
    ExperienceLevel.ADVANCED: 1.25,
    ExperienceLevel.EXPERT: 1.25,
}
MAINTAIN_READINESS = 0.4
DELOAD_READINESS = 0.3
INCREASE_READINESS = 0.7
MAINTAIN_INDICATOR_COUNT = 2
PROGRESSION_DELOAD_FRACTION = -0.1
REP_INCREMENT = 1

MAINTAIN_CONFIDENCE = 0.8
DELOAD_CONFIDENCE = 0.9
INCREASE_WEIGHT_CONFIDENCE_CAP = 0.9
INCREASE_WEIGHT_CONFIDENCE_BONUS = 0.1
INCREASE_REPS_CONFIDENCE = 0.6
ALTERNATIVE_REPS_CONFIDENCE = 0.7
DEFAULT_PROGRESSION_CONFIDENCE = 0.5

MIN_REST_SECONDS = 30
DEFAULT_REST_SECONDS = 120
