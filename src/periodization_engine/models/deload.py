"""Deload inputs, decisions and the append-only event record."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from periodization_engine.models.decision_trace import DecisionTrace
from periodization_engine.models.enums import DeloadType, DeloadUrgency


@dataclass(frozen=True)
class DeloadMetrics:
    """Aggregated 7-day signals the deload policies evaluate.

    Percent-style fields are all on a 0-100 scale. Tolerances express how
    much more volume/intensity the trainee can absorb (higher is better).
    """

    overall_fatigue: float
    performance_decline_pct: float
    weeks_since_last_deload: int
    readiness: float
    soreness: float
    stress: float
    sleep_quality: float
    average_rpe: float
    volume_tolerance: float
    intensity_tolerance: float
    muscle_group_fatigue: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class DeloadRecommendation:
    """Outcome of a deload evaluation.

    ``reason_codes`` are the ids of the necessity rules that fired.
    """

    is_recommended: bool
    type: DeloadType
    urgency: DeloadUrgency
    duration_days: int
    necessity_points: float
    urgency_points: float
    reason_codes: tuple[str, ...] = field(default_factory=tuple)
    volume_reduction_pct: float = 0.0
    intensity_reduction_pct: float = 0.0
    frequency_reduction_pct: float = 0.0
    target_muscle_groups: tuple[str, ...] = field(default_factory=tuple)
    reasoning: tuple[str, ...] = field(default_factory=tuple)
    suggested_activities: tuple[str, ...] = field(default_factory=tuple)
    expected_recovery_days: int = 0
    expected_improvement_pct: float = 0.0
    confidence: float = 1.0
    metrics: DeloadMetrics | None = None
    trace: DecisionTrace | None = None


@dataclass(frozen=True)
class DeloadEvent:
    """A deload that was actually scheduled into a plan."""

    id: str
    plan_id: str
    date: date
    type: DeloadType
    duration_days: int
    reason_codes: tuple[str, ...]
    fatigue_score_at_trigger: float
    urgency: DeloadUrgency | None = None
