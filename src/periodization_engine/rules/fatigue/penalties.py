"""Objective penalties added on top of the subjective fatigue score.

Reference:
    Halson (2014). Monitoring training load to understand fatigue in
    athletes. Sports Med 44(Suppl 2):S139-S147.
"""

from __future__ import annotations

from dataclasses import dataclass

from periodization_engine.models.enums import (
    LOW_COMPLETION_PENALTY,
    LOW_COMPLETION_RATE,
    PERFORMANCE_DECLINE_PENALTY,
    PERFORMANCE_DECLINE_PENALTY_PCT,
    SHORT_SLEEP_MINUTES,
    SHORT_SLEEP_PENALTY,
)
from periodization_engine.rules.base import PolicyRule, RulePolicy


@dataclass(frozen=True)
class FatiguePenaltyContext:
    """Trailing-week objective signals for one scoring day."""

    performance_decline_pct: float = 0.0
    average_completion_rate: float | None = None
    average_sleep_minutes: float | None = None


FATIGUE_PENALTY_POLICY = RulePolicy(
    policy_id="fatigue_penalties",
    version="1.0.0",
    description="Points added to the subjective fatigue score.",
    rules=(
        PolicyRule(
            rule_id="performance_decline",
            predicate=lambda c: c.performance_decline_pct > PERFORMANCE_DECLINE_PENALTY_PCT,
            value=PERFORMANCE_DECLINE_PENALTY,
            explanation="Training volume fell {performance_decline_pct:.1f}% over the trailing week.",
        ),
        PolicyRule(
            rule_id="low_completion",
            predicate=lambda c: (
                c.average_completion_rate is not None
                and c.average_completion_rate < LOW_COMPLETION_RATE
            ),
            value=LOW_COMPLETION_PENALTY,
            explanation="Average set completion {average_completion_rate:.0%} is below 80%.",
        ),
        PolicyRule(
            rule_id="short_sleep",
            predicate=lambda c: (
                c.average_sleep_minutes is not None
                and c.average_sleep_minutes < SHORT_SLEEP_MINUTES
            ),
            value=SHORT_SLEEP_PENALTY,
            explanation="Average sleep {average_sleep_minutes:.0f} min is under 7 h.",
        ),
    ),
)
