"""One-repetition-maximum estimation from a submaximal set.

References:
    - Epley (1985). Poundage Chart. Boyd Epley Workout.
    - Brzycki (1993). JOPERD 64(1):88-90.
    - Lander (1985). NSCA Journal 6(6):60-61.
    - LeSuer et al. (1997). J Strength Cond Res 11(4):211-213.
"""

from __future__ import annotations

from periodization_engine.exceptions import InvalidInputError
from periodization_engine.models.enums import (
    BRZYCKI_NUMERATOR,
    BRZYCKI_REP_LIMIT,
    EPLEY_DIVISOR,
    LANDER_INTERCEPT,
    LANDER_NUMERATOR,
    LANDER_SLOPE,
    OneRepMaxFormula,
)


def _validate(weight: float, reps: float) -> None:
    if weight < 0:
        raise InvalidInputError(f"weight={weight} must be non-negative", field="weight")
    if reps < 0:
        raise InvalidInputError(f"reps={reps} must be non-negative", field="reps")


def epley(weight: float, reps: float) -> float:
    """1RM = w x (1 + r / 30). Monotonic in both weight and reps."""
    _validate(weight, reps)
    return weight * (1.0 + reps / EPLEY_DIVISOR)


def brzycki(weight: float, reps: float) -> float:
    """1RM = w x 36 / (37 - r). Only defined for r < 37."""
    _validate(weight, reps)
    if reps >= BRZYCKI_REP_LIMIT:
        raise InvalidInputError(
            f"Brzycki is undefined for reps={reps} (must be < {BRZYCKI_REP_LIMIT:g})",
            field="reps",
        )
    return weight * BRZYCKI_NUMERATOR / (BRZYCKI_REP_LIMIT - reps)


def lander(weight: float, reps: float) -> float:
    """1RM = 100 w / (101.3 - 2.67123 r). Only defined while the denominator is positive."""
    _validate(weight, reps)
    denominator = LANDER_INTERCEPT - LANDER_SLOPE * reps
    if denominator <= 0:
        raise InvalidInputError(f"Lander is undefined for reps={reps}", field="reps")
    return weight * LANDER_NUMERATOR / denominator


_FORMULAS = {
    OneRepMaxFormula.EPLEY: epley,
    OneRepMaxFormula.BRZYCKI: brzycki,
    OneRepMaxFormula.LANDER: lander,
}


def estimate_one_rep_max(
    weight: float,
    reps: float,
    formula: OneRepMaxFormula = OneRepMaxFormula.EPLEY,
) -> float:
    """Estimate 1RM with the selected formula, rounded to 2 decimals.

    Args:
        weight: Load lifted, in the configured mass unit.
        reps: Repetitions completed with that load.
        formula: Which estimation formula to use.

    Returns:
        Estimated 1RM in the same unit as ``weight``.
    """
    return round(_FORMULAS[OneRepMaxFormula(formula)](weight, reps), 2)
