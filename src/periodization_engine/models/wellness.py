"""Raw trainee signals: daily wellness check-ins and logged exercise performance."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from periodization_engine.exceptions import InvalidInputError
from periodization_engine.models.enums import SUBJECTIVE_SCALE_MAX, SUBJECTIVE_SCALE_MIN

SUBJECTIVE_AXES = (
    "perceived_fatigue",
    "sleep_quality",
    "mood",
    "motivation",
    "energy_level",
    "soreness",
    "stress_level",
)


@dataclass(frozen=True)
class WellnessSnapshot:
    """One trainee check-in for a single day.

    Subjective axes use a 1-10 scale where any axis may be absent (None).
    Objective fields usually come from a wearable.
    """

    user_id: str
    date: date

    perceived_fatigue: float | None = None
    sleep_quality: float | None = None
    mood: float | None = None
    motivation: float | None = None
    energy_level: float | None = None
    soreness: float | None = None
    stress_level: float | None = None

    resting_heart_rate: float | None = None
    hrv: float | None = None
    sleep_duration_minutes: float | None = None

    def __post_init__(self) -> None:
        for axis in SUBJECTIVE_AXES:
            value = getattr(self, axis)
            if value is not None and not SUBJECTIVE_SCALE_MIN <= value <= SUBJECTIVE_SCALE_MAX:
                raise InvalidInputError(
                    f"{axis}={value} outside {SUBJECTIVE_SCALE_MIN}-{SUBJECTIVE_SCALE_MAX}",
                    field=axis,
                )
        if self.sleep_duration_minutes is not None and self.sleep_duration_minutes < 0:
            raise InvalidInputError(
                "sleep_duration_minutes must be non-negative", field="sleep_duration_minutes"
            )

    def axis_values(self) -> dict[str, float]:
        """Return the subjective axes that are present."""
        return {
            axis: float(getattr(self, axis))
            for axis in SUBJECTIVE_AXES
            if getattr(self, axis) is not None
        }


@dataclass(frozen=True)
class PerformanceLog:
    """One exercise as performed in one session.

    ``weight`` and ``reps`` are per-set averages; ``completion_rate`` is the
    fraction of target reps actually completed.
    """

    user_id: str
    exercise_id: str
    date: date
    weight: float
    reps: float
    sets_count: int = 1
    rir: float | None = None
    rpe: float | None = None
    completion_rate: float = 1.0
    muscle_groups: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.weight < 0:
            raise InvalidInputError(f"weight={self.weight} must be non-negative", field="weight")
        if self.reps < 0:
            raise InvalidInputError(f"reps={self.reps} must be non-negative", field="reps")
        if self.sets_count < 0:
            raise InvalidInputError("sets_count must be non-negative", field="sets_count")
        if not 0.0 <= self.completion_rate <= 1.0:
            raise InvalidInputError(
                f"completion_rate={self.completion_rate} outside [0, 1]", field="completion_rate"
            )

    @property
    def volume(self) -> float:
        """Session tonnage for this exercise: weight x reps x sets."""
        return self.weight * self.reps * self.sets_count
