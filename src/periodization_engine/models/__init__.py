"""Data models for the periodization engine."""

from periodization_engine.models.cycle import CycleResult
from periodization_engine.models.decision_trace import DecisionTrace, RuleResult, RuleStatus
from periodization_engine.models.deload import DeloadEvent, DeloadMetrics, DeloadRecommendation
from periodization_engine.models.enums import (
    DeloadType,
    DeloadUrgency,
    ExperienceLevel,
    FatigueCategory,
    FatigueIndicator,
    FatigueTrend,
    MassUnit,
    OneRepMaxFormula,
    PerformanceTrend,
    PhaseType,
    ProgressionType,
    RiskLevel,
    TrainingGoal,
    TransitionTrigger,
)
from periodization_engine.models.fatigue import FatigueAssessment, FatigueTrendReport, RestDayAdvice
from periodization_engine.models.performance import PerformanceEstimate, StrengthCurvePoint
from periodization_engine.models.plan import (
    AdaptiveSettings,
    PeriodizationPhase,
    PeriodizationPlan,
    PhaseRecord,
    WeeklyProgress,
)
from periodization_engine.models.progression import (
    ExerciseState,
    ProgressionAlternative,
    ProgressionRecommendation,
    ProgressionSettings,
)
from periodization_engine.models.routine import ExerciseSet, RoutineExercise, WorkoutDay
from periodization_engine.models.transition import (
    PhaseTransition,
    TransitionEvaluation,
    TransitionOutcome,
)
from periodization_engine.models.wellness import PerformanceLog, WellnessSnapshot

__all__ = [
    "AdaptiveSettings",
    "CycleResult",
    "DecisionTrace",
    "DeloadEvent",
    "DeloadMetrics",
    "DeloadRecommendation",
    "DeloadType",
    "DeloadUrgency",
    "ExerciseSet",
    "ExerciseState",
    "ExperienceLevel",
    "FatigueAssessment",
    "FatigueCategory",
    "FatigueIndicator",
    "FatigueTrend",
    "FatigueTrendReport",
    "MassUnit",
    "OneRepMaxFormula",
    "PerformanceEstimate",
    "PerformanceLog",
    "PerformanceTrend",
    "PeriodizationPhase",
    "PeriodizationPlan",
    "PhaseRecord",
    "PhaseTransition",
    "PhaseType",
    "ProgressionAlternative",
    "ProgressionRecommendation",
    "ProgressionSettings",
    "ProgressionType",
    "RestDayAdvice",
    "RiskLevel",
    "RoutineExercise",
    "RuleResult",
    "RuleStatus",
    "StrengthCurvePoint",
    "TrainingGoal",
    "TransitionEvaluation",
    "TransitionOutcome",
    "TransitionTrigger",
    "WeeklyProgress",
    "WellnessSnapshot",
    "WorkoutDay",
]
