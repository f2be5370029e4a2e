"""Fit a workout day to the active phase's rep, rest, RIR and set prescriptions."""

from __future__ import annotations

import dataclasses

from periodization_engine.math.rounding import round_half_up
from periodization_engine.models.enums import DEFAULT_PHASE_RIR, RIR_BY_INTENSITY_CEILING
from periodization_engine.models.plan import PeriodizationPhase
from periodization_engine.models.routine import ExerciseSet, RoutineExercise, WorkoutDay


def target_rir_for_phase(phase: PeriodizationPhase) -> int:
    """Target RIR from the phase's intensity ceiling: >85% -> 1, >75% -> 2, else 3."""
    ceiling = phase.intensity_range[1]
    for threshold, rir in RIR_BY_INTENSITY_CEILING:
        if ceiling > threshold:
            return rir
    return DEFAULT_PHASE_RIR


def _midpoint(bounds: tuple[float, float]) -> int:
    return round_half_up((bounds[0] + bounds[1]) / 2)


def _resize(sets: tuple[ExerciseSet, ...], count: int) -> tuple[ExerciseSet, ...]:
    if not sets or count == len(sets):
        return sets
    if count < len(sets):
        return sets[:count]
    return sets + (sets[-1],) * (count - len(sets))


def adapt_exercise_to_phase(exercise: RoutineExercise, phase: PeriodizationPhase) -> RoutineExercise:
    reps = _midpoint(phase.reps_range)
    rest = _midpoint(phase.rest_range_seconds)
    rir = target_rir_for_phase(phase)
    adapted = tuple(
        dataclasses.replace(
            s,
            target_reps=reps if s.target_reps else s.target_reps,
            rest_time=rest,
            target_rir=rir,
        )
        for s in exercise.sets
    )
    return dataclasses.replace(exercise, sets=_resize(adapted, _midpoint(phase.sets_range)))


def adapt_day_to_phase(day: WorkoutDay, phase: PeriodizationPhase) -> WorkoutDay:
    """Rewrite every exercise of ``day`` for ``phase``.

    Target reps and rest move to the midpoints of the phase ranges, target
    RIR follows the intensity ceiling, and each exercise is resized to the
    midpoint of the sets range by duplicating its last set or truncating.
    Sets with no target reps keep them unset. Rest days pass through.
    """
    if day.is_rest_day:
        return day
    return dataclasses.replace(
        day, exercises=tuple(adapt_exercise_to_phase(ex, phase) for ex in day.exercises)
    )
