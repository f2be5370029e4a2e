"""Phase transition criteria, evaluated in order; the first that fires wins.

Reference:
    Bompa & Haff (2009). Periodization: Theory and Methodology of Training.
    Kiely (2012) Int J Sports Physiol Perform 7(3):242-250 on adaptive
    (flexible) periodization.
"""

from __future__ import annotations

from dataclasses import dataclass

from periodization_engine.models.enums import (
    ADHERENCE_TRIGGER_CONFIDENCE,
    ADHERENCE_TRIGGER_MIN_COMPLETION,
    FATIGUE_TRIGGER_CONFIDENCE,
    FATIGUE_TRIGGER_MIN_COMPLETION,
    PROGRESS_TRIGGER_CONFIDENCE,
    PROGRESS_TRIGGER_MIN_COMPLETION,
    TIME_TRIGGER_CONFIDENCE,
    TransitionTrigger,
)
from periodization_engine.rules.base import PolicyRule, RulePolicy


@dataclass(frozen=True)
class TransitionContext:
    """Inputs to the transition criteria for the current phase.

    Trailing means are None when there are not enough weekly entries.
    """

    weeks_in_phase: int
    phase_duration_weeks: int
    phase_completion: float
    fatigue_threshold: float
    progress_threshold: float
    adherence_threshold: float
    average_fatigue: float | None = None
    recent_performance_gain: float | None = None
    recent_adherence: float | None = None


PHASE_TRANSITION_POLICY = RulePolicy(
    policy_id="phase_transition",
    version="1.0.0",
    description="Ordered transition triggers: time, fatigue, progress, adherence.",
    rules=(
        PolicyRule(
            rule_id="time",
            predicate=lambda c: c.weeks_in_phase >= c.phase_duration_weeks,
            explanation="Phase duration of {phase_duration_weeks} weeks completed.",
            outcome=TransitionTrigger.TIME,
            confidence=TIME_TRIGGER_CONFIDENCE,
        ),
        PolicyRule(
            rule_id="fatigue",
            predicate=lambda c: (
                c.average_fatigue is not None
                and c.average_fatigue > c.fatigue_threshold
                and c.phase_completion >= FATIGUE_TRIGGER_MIN_COMPLETION
            ),
            explanation=(
                "Average fatigue {average_fatigue:.1f} exceeds threshold "
                "{fatigue_threshold:.0f} with {phase_completion:.0%} of the phase done."
            ),
            outcome=TransitionTrigger.FATIGUE,
            confidence=FATIGUE_TRIGGER_CONFIDENCE,
        ),
        PolicyRule(
            rule_id="progress",
            predicate=lambda c: (
                c.recent_performance_gain is not None
                and c.recent_performance_gain < c.progress_threshold
                and c.phase_completion >= PROGRESS_TRIGGER_MIN_COMPLETION
            ),
            explanation=(
                "Progress stalled: recent gain {recent_performance_gain:.2f} below "
                "{progress_threshold:.2f}."
            ),
            outcome=TransitionTrigger.PROGRESS,
            confidence=PROGRESS_TRIGGER_CONFIDENCE,
        ),
        PolicyRule(
            rule_id="adherence",
            predicate=lambda c: (
                c.recent_adherence is not None
                and c.recent_adherence < c.adherence_threshold
                and c.phase_completion >= ADHERENCE_TRIGGER_MIN_COMPLETION
            ),
            explanation=(
                "Adherence {recent_adherence:.0%} below {adherence_threshold:.0%}; "
                "moving on to a fresh stimulus."
            ),
            outcome=TransitionTrigger.ADHERENCE,
            confidence=ADHERENCE_TRIGGER_CONFIDENCE,
        ),
    ),
)
