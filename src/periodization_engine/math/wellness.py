"""Wellness questionnaire scoring.

References:
    - Hooper & Mackinnon (1995) Sports Med 20(5):321-327
    - McLean et al. (2010) Int J Sports Physiol Perform 5(3):367-383
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from periodization_engine.models.enums import (
    FATIGUE_AXIS_WEIGHTS,
    FATIGUE_SCORE_SCALE,
    INVERTED_FATIGUE_AXES,
    SUBJECTIVE_INVERSION_BASE,
)
from periodization_engine.models.wellness import WellnessSnapshot


def subjective_fatigue_score(snapshot: WellnessSnapshot) -> tuple[float | None, float]:
    """Weighted 0-100 fatigue score from the subjective axes of one check-in.

    Positive axes (sleep quality, energy, mood, motivation) are inverted as
    ``11 - v`` so 10 always means most fatigued. Absent axes are dropped and
    the remaining weights renormalised.

    Returns:
        (score, covered_weight). ``score`` is None when no axis is present;
        ``covered_weight`` is the fraction of total weight that was present.
    """
    values = snapshot.axis_values()
    weighted = 0.0
    covered = 0.0
    for axis, weight in FATIGUE_AXIS_WEIGHTS.items():
        if axis not in values:
            continue
        value = values[axis]
        if axis in INVERTED_FATIGUE_AXES:
            value = SUBJECTIVE_INVERSION_BASE - value
        weighted += value * weight
        covered += weight
    if covered == 0:
        return None, 0.0
    total_weight = sum(FATIGUE_AXIS_WEIGHTS.values())
    return weighted / covered * FATIGUE_SCORE_SCALE, covered / total_weight


def mean_axis(snapshots: Sequence[WellnessSnapshot], axis: str) -> float | None:
    """Mean of one snapshot field over the snapshots that carry it."""
    values = [getattr(s, axis) for s in snapshots if getattr(s, axis) is not None]
    if not values:
        return None
    return float(np.mean(values))


def axis_percent(snapshots: Sequence[WellnessSnapshot], axis: str) -> float | None:
    """Mean of a 1-10 axis rescaled to 0-100."""
    mean = mean_axis(snapshots, axis)
    return None if mean is None else mean * FATIGUE_SCORE_SCALE
