"""Adjustments applied to the 0.7 base readiness of an exercise.

Reference:
    Helms et al. (2016). Application of the repetitions in reserve-based
    rating of perceived exertion scale. Strength Cond J 38(4):42-49.
"""

from __future__ import annotations

from dataclasses import dataclass

from periodization_engine.models.enums import (
    COMPLETION_FACTOR,
    COMPLETION_PIVOT,
    FATIGUE_INDICATOR_PENALTY,
    HIGH_RIR_BONUS,
    HIGH_RIR_THRESHOLD,
    LOW_RIR_PENALTY,
    LOW_RIR_THRESHOLD,
)
from periodization_engine.rules.base import PolicyRule, RulePolicy


@dataclass(frozen=True)
class ReadinessContext:
    average_rir: float | None
    average_completion: float | None
    indicator_count: int


READINESS_ADJUSTMENT_POLICY = RulePolicy(
    policy_id="readiness_adjustments",
    version="1.0.0",
    description="Additive readiness adjustments; result is clamped to [0, 1].",
    rules=(
        PolicyRule(
            rule_id="high_rir",
            predicate=lambda c: c.average_rir is not None and c.average_rir >= HIGH_RIR_THRESHOLD,
            value=HIGH_RIR_BONUS,
            explanation="Average RIR {average_rir:.1f} leaves room in reserve.",
        ),
        PolicyRule(
            rule_id="low_rir",
            predicate=lambda c: c.average_rir is not None and c.average_rir <= LOW_RIR_THRESHOLD,
            value=-LOW_RIR_PENALTY,
            explanation="Average RIR {average_rir:.1f} means sets are near failure.",
        ),
        PolicyRule(
            rule_id="completion",
            predicate=lambda c: c.average_completion is not None,
            value=lambda c: (c.average_completion - COMPLETION_PIVOT) * COMPLETION_FACTOR,
            explanation="Average completion {average_completion:.0%} against an 80% pivot.",
        ),
        PolicyRule(
            rule_id="fatigue_indicators",
            predicate=lambda c: c.indicator_count > 0,
            value=lambda c: -FATIGUE_INDICATOR_PENALTY * c.indicator_count,
            explanation="{indicator_count} fatigue indicator(s) present.",
        ),
    ),
)
