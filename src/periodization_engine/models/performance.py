"""Per-exercise performance estimates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from periodization_engine.models.enums import (
    FatigueIndicator,
    OneRepMaxFormula,
    PerformanceTrend,
)


@dataclass(frozen=True)
class StrengthCurvePoint:
    """Estimated 1RM from a single logged session."""

    date: date
    estimated_one_rep_max: float
    confidence: float


@dataclass(frozen=True)
class PerformanceEstimate:
    """Current strength and readiness estimate for one exercise.

    ``trend`` is the least-squares slope of recent working weights divided
    by their mean, so 0.05 means loads rising about 5% of the mean per session.
    """

    exercise_id: str
    one_rep_max: float
    trend: float
    consistency: float  # 0-1
    readiness: float  # 0-1
    formula: OneRepMaxFormula = OneRepMaxFormula.EPLEY
    trend_label: PerformanceTrend = PerformanceTrend.STABLE
    fatigue_indicators: tuple[FatigueIndicator, ...] = field(default_factory=tuple)
    strength_curve: tuple[StrengthCurvePoint, ...] = field(default_factory=tuple)
    sample_size: int = 0
    average_rir: float | None = None
    average_completion: float | None = None
    latest_weight: float | None = None
    latest_reps: float | None = None

    @property
    def has_sufficient_data(self) -> bool:
        return self.sample_size >= 2
