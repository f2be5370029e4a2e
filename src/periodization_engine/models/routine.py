"""Routine structures the progression and deload output is applied to."""

from __future__ import annotations

from dataclasses import dataclass, field

from periodization_engine.models.enums import DEFAULT_REST_SECONDS


@dataclass(frozen=True)
class ExerciseSet:
    """A single prescribed set, optionally with what was actually done."""

    target_weight: float
    target_reps: int
    rest_time: int | None = DEFAULT_REST_SECONDS
    target_rir: int | None = None
    actual_weight: float | None = None
    actual_reps: int | None = None
    tempo: str | None = None


@dataclass(frozen=True)
class RoutineExercise:
    exercise_id: str
    sets: tuple[ExerciseSet, ...]
    muscle_groups: tuple[str, ...] = field(default_factory=tuple)
    is_compound: bool = False
    notes: str = ""


@dataclass(frozen=True)
class WorkoutDay:
    """One day of a training week. A rest day carries no exercises."""

    day_id: str
    name: str
    exercises: tuple[RoutineExercise, ...] = field(default_factory=tuple)
    is_rest_day: bool = False

    @property
    def muscle_groups(self) -> frozenset[str]:
        return frozenset(g for ex in self.exercises for g in ex.muscle_groups)
