"""Deload type selection from volume and intensity tolerance.

First match wins. Complete rest is checked before a frequency deload so that
exhausted trainees (both tolerances under 30, or RPE above 8.5) get it.
"""

from __future__ import annotations

from periodization_engine.models.enums import (
    ACTIVE_RECOVERY_DECLINE_PCT,
    ACTIVE_RECOVERY_TOLERANCE,
    EXHAUSTED_RPE,
    TOLERANCE_EXHAUSTED,
    TOLERANCE_HIGH,
    TOLERANCE_LOW,
    TOLERANCE_MODERATE,
    DeloadType,
)
from periodization_engine.rules.base import PolicyRule, RulePolicy

DELOAD_TYPE_POLICY = RulePolicy(
    policy_id="deload_type",
    version="1.0.0",
    description="First-match selection of DeloadType.",
    rules=(
        PolicyRule(
            rule_id="volume_limited",
            predicate=lambda m: (
                m.volume_tolerance < TOLERANCE_LOW and m.intensity_tolerance > TOLERANCE_HIGH
            ),
            explanation=(
                "Volume tolerance {volume_tolerance:.0f} is low while intensity "
                "tolerance {intensity_tolerance:.0f} holds: cut volume."
            ),
            outcome=DeloadType.VOLUME,
        ),
        PolicyRule(
            rule_id="intensity_limited",
            predicate=lambda m: (
                m.intensity_tolerance < TOLERANCE_LOW and m.volume_tolerance > TOLERANCE_HIGH
            ),
            explanation=(
                "Intensity tolerance {intensity_tolerance:.0f} is low while volume "
                "tolerance {volume_tolerance:.0f} holds: cut intensity."
            ),
            outcome=DeloadType.INTENSITY,
        ),
        PolicyRule(
            rule_id="exhausted",
            predicate=lambda m: (
                (m.volume_tolerance < TOLERANCE_EXHAUSTED and m.intensity_tolerance < TOLERANCE_EXHAUSTED)
                or m.average_rpe > EXHAUSTED_RPE
            ),
            explanation=(
                "Both tolerances are exhausted or average RPE {average_rpe:.1f} "
                "is above 8.5: complete rest."
            ),
            outcome=DeloadType.COMPLETE,
        ),
        PolicyRule(
            rule_id="both_limited",
            predicate=lambda m: (
                m.volume_tolerance < TOLERANCE_MODERATE and m.intensity_tolerance < TOLERANCE_MODERATE
            ),
            explanation="Both tolerances are below 60: train less often.",
            outcome=DeloadType.FREQUENCY,
        ),
        PolicyRule(
            rule_id="performance_stalled",
            predicate=lambda m: (
                m.performance_decline_pct > ACTIVE_RECOVERY_DECLINE_PCT
                and m.volume_tolerance > ACTIVE_RECOVERY_TOLERANCE
                and m.intensity_tolerance > ACTIVE_RECOVERY_TOLERANCE
            ),
            explanation=(
                "Performance fell {performance_decline_pct:.1f}% with tolerances "
                "intact: active recovery."
            ),
            outcome=DeloadType.ACTIVE_RECOVERY,
        ),
        PolicyRule(
            rule_id="default_volume",
            predicate=lambda m: True,
            explanation="No specific limiter: default volume deload.",
            outcome=DeloadType.VOLUME,
        ),
    ),
)
