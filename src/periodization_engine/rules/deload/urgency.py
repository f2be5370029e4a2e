"""Deload urgency points. Bands within a criterion are mutually exclusive.

Reference:
    Bell et al. (2023). Practitioner perspectives on deloading. Sports Med
    Open 9:48.
"""

from __future__ import annotations

import math

from periodization_engine.models.enums import (
    URGENCY_DECLINE_BANDS,
    URGENCY_FATIGUE_BANDS,
    URGENCY_READINESS_BANDS,
    URGENCY_WEEKS_BANDS,
)
from periodization_engine.rules.base import PolicyRule, RulePolicy


def _bands_above(
    name: str, field: str, bands: tuple[tuple[float, int], ...], explanation: str
) -> tuple[PolicyRule, ...]:
    """One row per band, firing when ``threshold < value <= next higher threshold``."""
    rules = []
    upper = math.inf
    for threshold, points in bands:
        rules.append(
            PolicyRule(
                f"{name}_above_{threshold:g}",
                lambda m, lo=threshold, hi=upper: lo < getattr(m, field) <= hi,
                points,
                explanation.replace("{threshold}", f"{threshold:g}"),
            )
        )
        upper = threshold
    return tuple(rules)


def _bands_below(
    name: str, field: str, bands: tuple[tuple[float, int], ...], explanation: str
) -> tuple[PolicyRule, ...]:
    """One row per band, firing when ``next lower threshold <= value < threshold``."""
    rules = []
    lower = -math.inf
    for threshold, points in bands:
        rules.append(
            PolicyRule(
                f"{name}_below_{threshold:g}",
                lambda m, lo=lower, hi=threshold: lo <= getattr(m, field) < hi,
                points,
                explanation.replace("{threshold}", f"{threshold:g}"),
            )
        )
        lower = threshold
    return tuple(rules)


DELOAD_URGENCY_POLICY = RulePolicy(
    policy_id="deload_urgency",
    version="1.0.0",
    description="Additive urgency points; low < 4, moderate 4-6, high 7-9, critical >= 10.",
    rules=(
        _bands_above(
            "fatigue", "overall_fatigue", URGENCY_FATIGUE_BANDS,
            "Fatigue {overall_fatigue:.1f} above {threshold}.",
        )
        + _bands_above(
            "decline", "performance_decline_pct", URGENCY_DECLINE_BANDS,
            "Volume decline {performance_decline_pct:.1f}% above {threshold}%.",
        )
        + _bands_above(
            "weeks", "weeks_since_last_deload", URGENCY_WEEKS_BANDS,
            "{weeks_since_last_deload} weeks without a deload.",
        )
        + _bands_below(
            "readiness", "readiness", URGENCY_READINESS_BANDS,
            "Readiness {readiness:.0f} below {threshold}.",
        )
    ),
)
