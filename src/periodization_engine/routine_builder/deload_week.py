"""Turn a training week into a deload microcycle for a DeloadRecommendation."""

from __future__ import annotations

import dataclasses
import math
from typing import Sequence

from periodization_engine.models.deload import DeloadRecommendation
from periodization_engine.models.enums import (
    ACTIVE_RECOVERY_REPS,
    ACTIVE_RECOVERY_RIR,
    ACTIVE_RECOVERY_SETS,
    ACTIVE_RECOVERY_TEMPO,
    ACTIVE_RECOVERY_WEIGHT_FACTOR,
    COMPLETE_DELOAD_EXTRA_REPS,
    COMPLETE_DELOAD_SET_FACTOR,
    COMPLETE_DELOAD_WEIGHT_FACTOR,
    DELOAD_REP_CAP,
    FREQUENCY_COMPOUND_WEIGHT_FACTOR,
    FREQUENCY_ISOLATION_SET_FACTOR,
    INTENSITY_DELOAD_EXTRA_REPS,
    DeloadType,
)
from periodization_engine.models.routine import ExerciseSet, RoutineExercise, WorkoutDay


def _with_count(sets: tuple[ExerciseSet, ...], count: int) -> tuple[ExerciseSet, ...]:
    if not sets:
        return sets
    count = max(1, count)
    if count <= len(sets):
        return sets[:count]
    return sets + (sets[-1],) * (count - len(sets))


def _scale_weight(s: ExerciseSet, factor: float) -> ExerciseSet:
    return dataclasses.replace(s, target_weight=round(s.target_weight * factor, 2))


def _deload_exercise(exercise: RoutineExercise, recommendation: DeloadRecommendation) -> RoutineExercise:
    sets = exercise.sets
    n = len(sets)
    kind = recommendation.type

    if kind == DeloadType.VOLUME:
        sets = _with_count(sets, math.floor(n * (1 - recommendation.volume_reduction_pct / 100)))
    elif kind == DeloadType.INTENSITY:
        factor = 1 - recommendation.intensity_reduction_pct / 100
        sets = tuple(
            dataclasses.replace(
                _scale_weight(s, factor),
                target_reps=min(DELOAD_REP_CAP, s.target_reps + INTENSITY_DELOAD_EXTRA_REPS),
            )
            for s in sets
        )
    elif kind == DeloadType.FREQUENCY:
        if exercise.is_compound:
            sets = tuple(
                _scale_weight(s, FREQUENCY_COMPOUND_WEIGHT_FACTOR) for s in _with_count(sets, n - 1)
            )
        else:
            sets = _with_count(sets, math.floor(n * FREQUENCY_ISOLATION_SET_FACTOR))
    elif kind == DeloadType.COMPLETE:
        sets = tuple(
            dataclasses.replace(
                _scale_weight(s, COMPLETE_DELOAD_WEIGHT_FACTOR),
                target_reps=min(DELOAD_REP_CAP, s.target_reps + COMPLETE_DELOAD_EXTRA_REPS),
            )
            for s in _with_count(sets, math.floor(n * COMPLETE_DELOAD_SET_FACTOR))
        )
    elif kind == DeloadType.ACTIVE_RECOVERY:
        sets = tuple(
            dataclasses.replace(
                _scale_weight(s, ACTIVE_RECOVERY_WEIGHT_FACTOR),
                target_reps=ACTIVE_RECOVERY_REPS,
                target_rir=ACTIVE_RECOVERY_RIR,
                tempo=ACTIVE_RECOVERY_TEMPO,
            )
            for s in _with_count(sets, ACTIVE_RECOVERY_SETS)
        )
    return dataclasses.replace(exercise, sets=sets)


def build_deload_microcycle(
    days: Sequence[WorkoutDay], recommendation: DeloadRecommendation
) -> tuple[WorkoutDay, ...]:
    """Apply a deload type to one week of workout days.

    Per exercise:
        - volume: sets x (1 - volume reduction), at least one
        - intensity: weight x (1 - intensity reduction), reps +2 capped at 15
        - frequency: compounds lose a set at 90% weight, isolation sets halved
        - complete: sets x 0.3, weight x 0.7, reps +3 capped at 15
        - active_recovery: 2 sets of 12 at 60% weight, RIR 4, controlled tempo

    For a frequency deload with a positive frequency reduction, any day that
    trains at least one target muscle group becomes a rest day.

    Args:
        days: The regular training week.
        recommendation: The deload to apply; its type and reduction
            percentages drive the changes.

    Returns:
        The deload week, one day per input day, in the same order.
    """
    targets = set(recommendation.target_muscle_groups)
    week = []
    for day in days:
        if day.is_rest_day:
            week.append(day)
            continue
        if (
            recommendation.type == DeloadType.FREQUENCY
            and recommendation.frequency_reduction_pct > 0
            and targets & day.muscle_groups
        ):
            week.append(
                WorkoutDay(day_id=f"{day.day_id}-deload", name="Rest (deload)", is_rest_day=True)
            )
            continue
        week.append(
            dataclasses.replace(
                day,
                day_id=f"{day.day_id}-deload",
                name=f"Deload - {day.name}",
                exercises=tuple(_deload_exercise(ex, recommendation) for ex in day.exercises),
            )
        )
    return tuple(week)
