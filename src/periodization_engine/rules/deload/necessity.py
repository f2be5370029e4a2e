"""Deload necessity: five independent criteria, recommended at 4 points or more.

Reference:
    Bell et al. (2023). Practitioner perspectives on deloading. Sports Med
    Open 9:48.
"""

from __future__ import annotations

from periodization_engine.models.enums import (
    NECESSITY_DECLINE_PCT,
    NECESSITY_FATIGUE,
    NECESSITY_READINESS,
    NECESSITY_SORENESS,
    NECESSITY_WEEKS_SINCE_DELOAD,
)
from periodization_engine.rules.base import PolicyRule, RulePolicy

DELOAD_NECESSITY_POLICY = RulePolicy(
    policy_id="deload_necessity",
    version="1.0.0",
    description="Additive necessity points over DeloadMetrics.",
    rules=(
        PolicyRule(
            rule_id="high_fatigue",
            predicate=lambda m: m.overall_fatigue > NECESSITY_FATIGUE,
            value=2,
            explanation="Fatigue score {overall_fatigue:.1f} is above 70.",
        ),
        PolicyRule(
            rule_id="performance_decline",
            predicate=lambda m: m.performance_decline_pct > NECESSITY_DECLINE_PCT,
            value=3,
            explanation="Training volume is down {performance_decline_pct:.1f}% against prior weeks.",
        ),
        PolicyRule(
            rule_id="deload_overdue",
            predicate=lambda m: m.weeks_since_last_deload > NECESSITY_WEEKS_SINCE_DELOAD,
            value=1,
            explanation="{weeks_since_last_deload} weeks since the last deload.",
        ),
        PolicyRule(
            rule_id="low_readiness",
            predicate=lambda m: m.readiness < NECESSITY_READINESS,
            value=1,
            explanation="Readiness {readiness:.0f}/100 is below 60.",
        ),
        PolicyRule(
            rule_id="high_soreness",
            predicate=lambda m: m.soreness > NECESSITY_SORENESS,
            value=1,
            explanation="Soreness {soreness:.0f}/100 is above 70.",
        ),
    ),
)
