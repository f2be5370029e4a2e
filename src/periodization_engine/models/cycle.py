"""Everything one engine pass decides for a plan on a given day."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from periodization_engine.models.deload import DeloadRecommendation
from periodization_engine.models.fatigue import FatigueAssessment
from periodization_engine.models.performance import PerformanceEstimate
from periodization_engine.models.progression import ProgressionRecommendation
from periodization_engine.models.transition import TransitionEvaluation


@dataclass(frozen=True)
class CycleResult:
    """Decisions only; nothing here has been persisted or applied."""

    plan_id: str
    as_of: date
    fatigue: FatigueAssessment
    fatigue_history: tuple[FatigueAssessment, ...]
    deload: DeloadRecommendation | None
    transition: TransitionEvaluation
    estimates: dict[str, PerformanceEstimate] = field(default_factory=dict)
    recommendations: tuple[ProgressionRecommendation, ...] = field(default_factory=tuple)
