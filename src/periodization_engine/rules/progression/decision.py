"""Progression decision table: maintain, deload, increase weight, else add a rep.

With the default thresholds the deload row (readiness < 0.3) is shadowed by
the maintain row (readiness < 0.4). It becomes reachable once
ProgressionSettings lowers maintain_readiness below deload_readiness.

Reference:
    Kraemer & Ratamess (2004). Fundamentals of resistance training:
    progression and exercise prescription. Med Sci Sports Exerc 36(4):674-688.
"""

from __future__ import annotations

from dataclasses import dataclass

from periodization_engine.models.enums import (
    DELOAD_CONFIDENCE,
    INCREASE_REPS_CONFIDENCE,
    MAINTAIN_CONFIDENCE,
    REP_INCREMENT,
    PerformanceTrend,
    ProgressionType,
)
from periodization_engine.rules.base import PolicyRule, RulePolicy


@dataclass(frozen=True)
class ProgressionContext:
    readiness: float
    indicator_count: int
    trend_label: PerformanceTrend
    weight_increment: float
    maintain_readiness: float
    deload_readiness: float
    increase_readiness: float
    maintain_indicator_count: int
    deload_fraction: float


PROGRESSION_DECISION_POLICY = RulePolicy(
    policy_id="progression_decision",
    version="1.0.0",
    description="First-match progression choice for the next session.",
    rules=(
        PolicyRule(
            rule_id="maintain",
            predicate=lambda c: (
                c.readiness < c.maintain_readiness
                or c.indicator_count >= c.maintain_indicator_count
            ),
            value=0.0,
            explanation=(
                "Readiness {readiness:.2f} with {indicator_count} fatigue indicator(s): "
                "hold current load."
            ),
            outcome=ProgressionType.MAINTAIN,
            confidence=MAINTAIN_CONFIDENCE,
        ),
        PolicyRule(
            rule_id="deload",
            predicate=lambda c: c.readiness < c.deload_readiness,
            value=lambda c: c.deload_fraction,
            explanation="Readiness {readiness:.2f} is very low: reduce load.",
            outcome=ProgressionType.DELOAD,
            confidence=DELOAD_CONFIDENCE,
        ),
        PolicyRule(
            rule_id="increase_weight",
            predicate=lambda c: (
                c.readiness >= c.increase_readiness
                and c.trend_label != PerformanceTrend.DECLINING
            ),
            value=lambda c: c.weight_increment,
            explanation="Readiness {readiness:.2f} is high and the load trend is not declining.",
            outcome=ProgressionType.INCREASE_WEIGHT,
        ),
        PolicyRule(
            rule_id="increase_reps",
            predicate=lambda c: True,
            value=REP_INCREMENT,
            explanation="Moderate readiness {readiness:.2f}: add a rep before adding load.",
            outcome=ProgressionType.INCREASE_REPS,
            confidence=INCREASE_REPS_CONFIDENCE,
        ),
    ),
)
