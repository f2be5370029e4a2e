"""Periodization State Machine: phase transitions, deload insertion, manual override.

Phases only move forward, one at a time, plus manual overrides. Moving past
the last phase completes the plan; no successor plan is created here.
Evaluation is pure. Execution returns a new plan and never rewrites the
weeks already spent in earlier phases.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime, timedelta
from typing import Sequence

import numpy as np

from periodization_engine.exceptions import ConcurrentModificationError, InvalidInputError
from periodization_engine.models.decision_trace import DecisionTrace
from periodization_engine.models.deload import DeloadEvent, DeloadRecommendation
from periodization_engine.models.enums import (
    ADHERENCE_TRIGGER_WINDOW,
    DELOAD_WINDOW_DAYS,
    PROGRESS_TRIGGER_WINDOW,
    PhaseType,
    TransitionTrigger,
)
from periodization_engine.models.fatigue import FatigueAssessment
from periodization_engine.models.plan import PeriodizationPlan, PhaseRecord, WeeklyProgress
from periodization_engine.models.transition import (
    PhaseTransition,
    TransitionEvaluation,
    TransitionOutcome,
)
from periodization_engine.plan_builder import deload_phase
from periodization_engine.rules.base import RulePolicy
from periodization_engine.rules.transition.phase_transition import (
    PHASE_TRANSITION_POLICY,
    TransitionContext,
)

logger = logging.getLogger(__name__)


def phase_progress(plan: PeriodizationPlan, progress: Sequence[WeeklyProgress]) -> list[WeeklyProgress]:
    """Weekly entries recorded against the current phase, in week order."""
    phase_id = plan.current_phase.id
    return sorted((p for p in progress if p.phase_id == phase_id), key=lambda p: p.week)


def _average_fatigue(
    fatigue_history: Sequence[FatigueAssessment], as_of: date | None
) -> float | None:
    if not fatigue_history:
        return None
    anchor = as_of or max(a.date for a in fatigue_history)
    start = anchor - timedelta(days=DELOAD_WINDOW_DAYS)
    recent = [a.overall_score for a in fatigue_history if start < a.date <= anchor]
    return float(np.mean(recent)) if recent else None


def _trailing_mean(values: list[float], window: int) -> float | None:
    if len(values) < window:
        return None
    return float(np.mean(values[-window:]))


def transition_id_for(plan: PeriodizationPlan) -> str:
    """Deterministic id for the next transition out of the plan's current state."""
    return f"{plan.id}:h{len(plan.phase_history)}:p{plan.current_phase_index}"


def evaluate_phase_transition(
    plan: PeriodizationPlan,
    progress: Sequence[WeeklyProgress],
    fatigue_history: Sequence[FatigueAssessment] = (),
    deload: DeloadRecommendation | None = None,
    as_of: date | None = None,
    policy: RulePolicy = PHASE_TRANSITION_POLICY,
) -> TransitionEvaluation:
    """Check the transition criteria for the plan's current phase.

    Criteria are evaluated in order and the first that fires wins: time
    (0.9), fatigue (0.85), progress (0.75), adherence (0.7). Elapsed weeks
    are the number of weekly progress entries for the current phase.

    Args:
        plan: The plan to evaluate.
        progress: Weekly progress entries (any phase; filtered by phase id).
        fatigue_history: Assessments; the 7 days up to ``as_of`` are averaged.
        deload: Independent deload recommendation. When recommended and the
            destination is not already a deload, the transition inserts one.
        as_of: Evaluation date; defaults to the newest fatigue date or the
            last plan adjustment.
        policy: Transition criteria table.

    Returns:
        A TransitionEvaluation. Identical inputs give identical results.

    Raises:
        InvalidPlanStateError: the plan has no phases or a bad phase index.
    """
    plan.validate()
    phase = plan.current_phase
    entries = phase_progress(plan, progress)
    weeks = len(entries)
    completion = weeks / phase.duration_weeks
    average_fatigue = _average_fatigue(fatigue_history, as_of)

    if plan.is_complete:
        return TransitionEvaluation(
            transition=None,
            trace=DecisionTrace(policy_id=policy.policy_id, notes="plan complete"),
            weeks_in_phase=weeks,
            phase_completion=completion,
        )

    settings = plan.adaptive_settings
    context = TransitionContext(
        weeks_in_phase=weeks,
        phase_duration_weeks=phase.duration_weeks,
        phase_completion=completion,
        fatigue_threshold=settings.fatigue_threshold,
        progress_threshold=settings.progress_threshold,
        adherence_threshold=settings.adherence_threshold,
        average_fatigue=average_fatigue,
        recent_performance_gain=_trailing_mean(
            [e.performance_gain for e in entries], PROGRESS_TRIGGER_WINDOW
        ),
        recent_adherence=_trailing_mean(
            [e.adherence_rate for e in entries], ADHERENCE_TRIGGER_WINDOW
        ),
    )
    rule, trace = policy.first_match(context)
    if rule is None:
        return TransitionEvaluation(
            transition=None, trace=trace, weeks_in_phase=weeks, phase_completion=completion
        )

    index = plan.current_phase_index
    completes = plan.is_last_phase
    insert = None
    if (
        deload is not None
        and deload.is_recommended
        and not completes
        and plan.phases[index + 1].type != PhaseType.DELOAD
    ):
        insert = deload

    reason = rule.describe(context)
    if completes:
        to_type = None
        reason += " Final phase finished; plan complete."
    elif insert is not None:
        to_type = PhaseType.DELOAD
        reason += (
            f" Inserting a {insert.type.value} deload ({insert.duration_days} days) "
            f"before {plan.phases[index + 1].type.value}."
        )
    else:
        to_type = plan.phases[index + 1].type

    evaluated_on = as_of or (
        max(a.date for a in fatigue_history) if fatigue_history else plan.last_adjusted_at.date()
    )
    transition = PhaseTransition(
        transition_id=transition_id_for(plan),
        plan_id=plan.id,
        trigger=rule.outcome,
        confidence=rule.confidence if rule.confidence is not None else 0.0,
        reason=reason,
        from_phase_index=index,
        from_phase_id=phase.id,
        to_phase_index=None if completes else index + 1,
        to_phase_type=to_type,
        evaluated_on=evaluated_on,
        completes_plan=completes,
        insert_deload=insert,
        fatigue_score=None if average_fatigue is None else round(average_fatigue, 1),
    )
    return TransitionEvaluation(
        transition=transition, trace=trace, weeks_in_phase=weeks, phase_completion=completion
    )


def deload_event_for(transition: PhaseTransition) -> DeloadEvent | None:
    """The DeloadEvent a transition records; its id is derived from the transition."""
    recommendation = transition.insert_deload
    if recommendation is None:
        return None
    fatigue = transition.fatigue_score
    if fatigue is None and recommendation.metrics is not None:
        fatigue = recommendation.metrics.overall_fatigue
    return DeloadEvent(
        id=f"{transition.transition_id}:deload",
        plan_id=transition.plan_id,
        date=transition.evaluated_on,
        type=recommendation.type,
        duration_days=recommendation.duration_days,
        reason_codes=recommendation.reason_codes,
        fatigue_score_at_trigger=fatigue if fatigue is not None else 0.0,
        urgency=recommendation.urgency,
    )


def _already_applied(plan: PeriodizationPlan, transition: PhaseTransition) -> bool:
    if transition.completes_plan and plan.is_complete:
        return plan.current_phase_index == transition.from_phase_index
    return bool(plan.phase_history) and plan.phase_history[-1].transition_id == transition.transition_id


def _close_current(history: tuple[PhaseRecord, ...], now: datetime) -> list[PhaseRecord]:
    records = list(history)
    if records and records[-1].ended_at is None:
        records[-1] = dataclasses.replace(records[-1], ended_at=now)
    return records


def apply_transition(
    plan: PeriodizationPlan,
    transition: PhaseTransition,
    now: datetime,
) -> TransitionOutcome:
    """Execute a transition and return the updated plan.

    Re-applying a transition the plan already reflects returns the plan
    unchanged (``applied=False``) together with the same deterministic
    DeloadEvent, so a retried write is harmless.

    Raises:
        InvalidPlanStateError: the plan itself is invalid.
        ConcurrentModificationError: the plan moved on since the transition
            was evaluated.
    """
    plan.validate()
    event = deload_event_for(transition)
    if transition.plan_id != plan.id:
        raise InvalidInputError(
            f"transition for plan {transition.plan_id} applied to plan {plan.id}", field="plan_id"
        )
    if _already_applied(plan, transition):
        logger.debug("Transition %s already applied to plan %s", transition.transition_id, plan.id)
        return TransitionOutcome(plan=plan, deload_event=event, applied=False)
    if (
        plan.is_complete
        or plan.current_phase_index != transition.from_phase_index
        or plan.current_phase.id != transition.from_phase_id
        or transition_id_for(plan) != transition.transition_id
    ):
        raise ConcurrentModificationError(
            f"plan {plan.id} changed since transition {transition.transition_id} was evaluated",
            plan_id=plan.id,
        )

    history = _close_current(plan.phase_history, now)

    if transition.completes_plan:
        logger.info("Plan %s complete (trigger=%s)", plan.id, transition.trigger.value)
        updated = dataclasses.replace(
            plan,
            phase_history=tuple(history),
            completed_at=now,
            last_adjusted_at=now,
        )
        return TransitionOutcome(plan=updated, deload_event=None, applied=True)

    phases = list(plan.phases)
    next_index = plan.current_phase_index + 1
    if transition.insert_deload is not None:
        inserted = deload_phase(f"deload-{len(phases)}", transition.insert_deload.duration_days)
        phases.insert(next_index, inserted)
        logger.info(
            "Inserted %s deload phase %s into plan %s",
            transition.insert_deload.type.value,
            inserted.id,
            plan.id,
        )

    entered = phases[next_index]
    history.append(
        PhaseRecord(
            phase_index=next_index,
            phase_id=entered.id,
            phase_type=entered.type,
            started_at=now,
            trigger=transition.trigger,
            transition_id=transition.transition_id,
        )
    )
    logger.info(
        "Plan %s advanced to phase %d (%s), trigger=%s",
        plan.id,
        next_index,
        entered.type.value,
        transition.trigger.value,
    )
    updated = dataclasses.replace(
        plan,
        phases=tuple(phases),
        current_phase_index=next_index,
        phase_history=tuple(history),
        last_adjusted_at=now,
    )
    return TransitionOutcome(plan=updated, deload_event=event, applied=True)


def override_phase(
    plan: PeriodizationPlan,
    phase_index: int,
    now: datetime,
) -> PeriodizationPlan:
    """Manually move the plan to ``phase_index`` (trigger ``manual``).

    Re-opens a completed plan. Selecting the phase the plan is already in
    returns it unchanged.

    Raises:
        InvalidPlanStateError: the plan itself is invalid.
        InvalidInputError: ``phase_index`` does not name a phase.
    """
    plan.validate()
    if not 0 <= phase_index < len(plan.phases):
        raise InvalidInputError(
            f"phase_index {phase_index} out of range for {len(plan.phases)} phases",
            field="phase_index",
        )
    if phase_index == plan.current_phase_index and not plan.is_complete:
        return plan

    target = plan.phases[phase_index]
    history = _close_current(plan.phase_history, now)
    history.append(
        PhaseRecord(
            phase_index=phase_index,
            phase_id=target.id,
            phase_type=target.type,
            started_at=now,
            trigger=TransitionTrigger.MANUAL,
            transition_id=f"{transition_id_for(plan)}:manual",
        )
    )
    logger.info("Plan %s manually moved to phase %d (%s)", plan.id, phase_index, target.type.value)
    return dataclasses.replace(
        plan,
        current_phase_index=phase_index,
        phase_history=tuple(history),
        completed_at=None,
        last_adjusted_at=now,
    )
