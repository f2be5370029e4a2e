"""Phase transition decisions and their execution results."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from periodization_engine.models.decision_trace import DecisionTrace
from periodization_engine.models.deload import DeloadEvent, DeloadRecommendation
from periodization_engine.models.enums import PhaseType, TransitionTrigger
from periodization_engine.models.plan import PeriodizationPlan


@dataclass(frozen=True)
class PhaseTransition:
    """A decided, not yet executed, move out of the current phase.

    ``transition_id`` is derived from the plan and its history length, so
    the same transition evaluated twice on the same plan gets the same id.
    When ``insert_deload`` is set, executing the transition inserts a deload
    phase at ``to_phase_index`` ahead of the scheduled next phase.
    """

    transition_id: str
    plan_id: str
    trigger: TransitionTrigger
    confidence: float
    reason: str
    from_phase_index: int
    from_phase_id: str
    to_phase_index: int | None
    to_phase_type: PhaseType | None
    evaluated_on: date
    completes_plan: bool = False
    insert_deload: DeloadRecommendation | None = None
    fatigue_score: float | None = None


@dataclass(frozen=True)
class TransitionEvaluation:
    """Result of checking the transition criteria for the current phase."""

    transition: PhaseTransition | None
    trace: DecisionTrace
    weeks_in_phase: int
    phase_completion: float

    @property
    def should_transition(self) -> bool:
        return self.transition is not None


@dataclass(frozen=True)
class TransitionOutcome:
    """Plan state after executing a transition.

    ``applied`` is False when the plan already reflected the transition.
    """

    plan: PeriodizationPlan
    deload_event: DeloadEvent | None
    applied: bool
