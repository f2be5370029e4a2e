"""Progression inputs and recommendations for a single exercise."""

from __future__ import annotations

from dataclasses import dataclass, field

from periodization_engine.exceptions import InvalidInputError
from periodization_engine.models.enums import (
    DEFAULT_BASE_INCREMENT,
    DEFAULT_REST_SECONDS,
    DELOAD_READINESS,
    INCREASE_READINESS,
    MAINTAIN_INDICATOR_COUNT,
    MAINTAIN_READINESS,
    PROGRESSION_DELOAD_FRACTION,
    MassUnit,
    ProgressionType,
)


@dataclass(frozen=True)
class ExerciseState:
    """Current prescription of one exercise in the trainee's routine."""

    exercise_id: str
    current_weight: float
    current_reps: int
    current_sets: int
    current_rir: float | None = None
    rest_seconds: int = DEFAULT_REST_SECONDS

    def __post_init__(self) -> None:
        if self.current_weight < 0:
            raise InvalidInputError("current_weight must be non-negative", field="current_weight")


@dataclass(frozen=True)
class ProgressionSettings:
    """User-tunable progression constants.

    The increment is expressed in ``mass_unit``; the engine never converts units.
    """

    base_increment: float = DEFAULT_BASE_INCREMENT
    mass_unit: MassUnit = MassUnit.KG
    maintain_readiness: float = MAINTAIN_READINESS
    deload_readiness: float = DELOAD_READINESS
    increase_readiness: float = INCREASE_READINESS
    maintain_indicator_count: int = MAINTAIN_INDICATOR_COUNT
    deload_fraction: float = PROGRESSION_DELOAD_FRACTION

    def __post_init__(self) -> None:
        if self.base_increment <= 0:
            raise InvalidInputError("base_increment must be positive", field="base_increment")


@dataclass(frozen=True)
class ProgressionAlternative:
    type: ProgressionType
    delta: float
    confidence: float
    reasoning: str = ""


@dataclass(frozen=True)
class ProgressionRecommendation:
    """What to change for the next session of one exercise.

    ``delta`` units depend on ``type``: mass units for increase_weight, reps
    for increase_reps, sets for increase_sets, seconds for decrease_rest, and
    a signed fraction of current weight for deload (-0.1 = 10% lighter).
    """

    exercise_id: str
    type: ProgressionType
    delta: float
    confidence: float
    reasoning: tuple[str, ...]
    alternatives: tuple[ProgressionAlternative, ...] = field(default_factory=tuple)
    rule_id: str = ""
    mass_unit: MassUnit = MassUnit.KG
