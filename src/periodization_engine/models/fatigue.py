"""Derived fatigue results. Always recomputed from wellness and performance data."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from periodization_engine.models.enums import FatigueCategory, FatigueTrend, RiskLevel


@dataclass(frozen=True)
class FatigueAssessment:
    """Accumulated-fatigue score for one trainee on one day."""

    user_id: str
    date: date
    overall_score: float  # 0-100
    category: FatigueCategory
    recommendation_text: str
    trend: FatigueTrend = FatigueTrend.STABLE
    confidence: float = 1.0
    subjective_score: float | None = None
    penalty_points: float = 0.0
    reasoning: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class FatigueTrendReport:
    """Summary of a fatigue history used for overreaching risk."""

    trend: FatigueTrend
    average_fatigue: float
    peak_fatigue: float
    recovery_rate_days: float
    risk_level: RiskLevel


@dataclass(frozen=True)
class RestDayAdvice:
    """Whether today should be a rest day."""

    should_rest: bool
    reason: str
    confidence: float
