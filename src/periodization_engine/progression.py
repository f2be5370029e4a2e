"""Progression Recommendation Engine: next-session change for one exercise.

Reference:
    Kraemer & Ratamess (2004). Fundamentals of resistance training:
    progression and exercise prescription. Med Sci Sports Exerc 36(4):674-688.
    Helms et al. (2016). Application of the repetitions in reserve-based RPE
    scale for resistance training. Strength Cond J 38(4):42-49.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Sequence

from periodization_engine.models.enums import (
    ALTERNATIVE_REPS_CONFIDENCE,
    DEFAULT_BASE_INCREMENT,
    DEFAULT_PROGRESSION_CONFIDENCE,
    DEFAULT_PROGRESSION_INCREMENT,
    DEFAULT_REST_SECONDS,
    EXPERIENCE_INCREMENT_MULTIPLIER,
    INCREASE_WEIGHT_CONFIDENCE_BONUS,
    INCREASE_WEIGHT_CONFIDENCE_CAP,
    MIN_REST_SECONDS,
    REP_INCREMENT,
    ExperienceLevel,
    ProgressionType,
)
from periodization_engine.models.fatigue import FatigueAssessment
from periodization_engine.models.performance import PerformanceEstimate
from periodization_engine.models.plan import PeriodizationPhase
from periodization_engine.models.progression import (
    ExerciseState,
    ProgressionAlternative,
    ProgressionRecommendation,
    ProgressionSettings,
)
from periodization_engine.models.routine import ExerciseSet
from periodization_engine.rules.base import RulePolicy
from periodization_engine.rules.progression.decision import (
    PROGRESSION_DECISION_POLICY,
    ProgressionContext,
)

logger = logging.getLogger(__name__)


def weight_increment(
    experience: ExperienceLevel,
    settings: ProgressionSettings = ProgressionSettings(),
) -> float:
    """Base increment scaled by experience (beginner 1.2x ... expert 0.6x)."""
    multiplier = EXPERIENCE_INCREMENT_MULTIPLIER.get(ExperienceLevel(experience), 1.0)
    return round(settings.base_increment * multiplier, 2)


def _context_lines(
    estimate: PerformanceEstimate,
    fatigue: FatigueAssessment | None,
    phase: PeriodizationPhase | None,
) -> list[str]:
    lines = []
    if estimate.fatigue_indicators:
        lines.append(
            "Fatigue indicators: " + ", ".join(i.value for i in estimate.fatigue_indicators)
        )
    if estimate.average_rir is not None:
        lines.append(f"Average RIR {estimate.average_rir:.1f} over recent sessions")
    if fatigue is not None:
        lines.append(f"Overall fatigue {fatigue.overall_score:.1f} ({fatigue.category.value})")
    if phase is not None:
        low, high = phase.reps_range
        lines.append(
            f"{phase.type.value} phase: {low}-{high} reps at "
            f"{phase.intensity_range[0]:.0f}-{phase.intensity_range[1]:.0f}% 1RM"
        )
    return lines


def _default_progression(
    exercise: ExerciseState,
    experience: ExperienceLevel,
    settings: ProgressionSettings,
) -> ProgressionRecommendation:
    # Standard increment rescaled to a user-configured base
    delta = DEFAULT_PROGRESSION_INCREMENT[ExperienceLevel(experience)]
    delta = round(delta * settings.base_increment / DEFAULT_BASE_INCREMENT, 2)
    logger.debug("Default progression for %s: not enough history", exercise.exercise_id)
    return ProgressionRecommendation(
        exercise_id=exercise.exercise_id,
        type=ProgressionType.INCREASE_WEIGHT,
        delta=delta,
        confidence=DEFAULT_PROGRESSION_CONFIDENCE,
        reasoning=(
            f"Standard progression for a {ExperienceLevel(experience).value} trainee",
            "Not enough history for a personalised recommendation",
        ),
        rule_id="insufficient_data",
        mass_unit=settings.mass_unit,
    )


def recommend_progression(
    exercise: ExerciseState,
    estimate: PerformanceEstimate,
    fatigue: FatigueAssessment | None = None,
    phase: PeriodizationPhase | None = None,
    experience: ExperienceLevel = ExperienceLevel.INTERMEDIATE,
    settings: ProgressionSettings = ProgressionSettings(),
    policy: RulePolicy = PROGRESSION_DECISION_POLICY,
) -> ProgressionRecommendation:
    """Recommend the change for the next session of one exercise.

    Decision order (first match wins):
        1. readiness < 0.4 or >= 2 fatigue indicators -> maintain (0.8)
        2. readiness < 0.3 -> deload, -10% load (0.9)
        3. readiness >= 0.7 and trend not declining -> increase_weight by
           the experience-scaled increment, confidence min(0.9, readiness + 0.1),
           with increase_reps +1 as the conservative alternative
        4. otherwise increase_reps +1 (0.6)

    Fatigue and phase inform the reasoning only; the decision is driven by
    the estimate. Without at least two logged sessions a standard weight
    increment is returned at confidence 0.5.

    Args:
        exercise: Current prescription of the exercise.
        estimate: Output of estimate_performance for the exercise.
        fatigue: Latest fatigue assessment, if any.
        phase: Active periodization phase, if any.
        experience: Trainee experience level.
        settings: Increment, mass unit and readiness thresholds.
        policy: Decision table.

    Returns:
        A ProgressionRecommendation in ``settings.mass_unit``.
    """
    if not estimate.has_sufficient_data:
        return _default_progression(exercise, experience, settings)

    increment = weight_increment(experience, settings)
    context = ProgressionContext(
        readiness=estimate.readiness,
        indicator_count=len(estimate.fatigue_indicators),
        trend_label=estimate.trend_label,
        weight_increment=increment,
        maintain_readiness=settings.maintain_readiness,
        deload_readiness=settings.deload_readiness,
        increase_readiness=settings.increase_readiness,
        maintain_indicator_count=settings.maintain_indicator_count,
        deload_fraction=settings.deload_fraction,
    )
    rule, trace = policy.first_match(context)
    if rule is None:
        # A custom table without a catch-all row
        return dataclasses.replace(
            _default_progression(exercise, experience, settings), rule_id="no_rule_matched"
        )

    progression_type = ProgressionType(rule.outcome)
    if rule.confidence is not None:
        confidence = rule.confidence
    else:
        confidence = round(
            min(INCREASE_WEIGHT_CONFIDENCE_CAP, estimate.readiness + INCREASE_WEIGHT_CONFIDENCE_BONUS),
            3,
        )

    alternatives: tuple[ProgressionAlternative, ...] = ()
    if progression_type == ProgressionType.INCREASE_WEIGHT:
        alternatives = (
            ProgressionAlternative(
                type=ProgressionType.INCREASE_REPS,
                delta=REP_INCREMENT,
                confidence=ALTERNATIVE_REPS_CONFIDENCE,
                reasoning="More conservative: build rep capacity before adding load.",
            ),
        )

    recommendation = ProgressionRecommendation(
        exercise_id=exercise.exercise_id,
        type=progression_type,
        delta=trace.total,
        confidence=confidence,
        reasoning=tuple([rule.describe(context)] + _context_lines(estimate, fatigue, phase)),
        alternatives=alternatives,
        rule_id=rule.rule_id,
        mass_unit=settings.mass_unit,
    )
    logger.debug(
        "%s: %s %+.2f (confidence %.2f)",
        exercise.exercise_id,
        recommendation.type.value,
        recommendation.delta,
        recommendation.confidence,
    )
    return recommendation


def apply_progression(
    exercise_set: ExerciseSet, recommendation: ProgressionRecommendation
) -> ExerciseSet:
    """Return a copy of the set with only the targeted field changed.

    increase_sets and maintain leave a single set untouched; sets are added
    at the collection level by apply_progression_to_sets.
    """
    kind = recommendation.type
    if kind == ProgressionType.INCREASE_WEIGHT:
        return dataclasses.replace(
            exercise_set, target_weight=round(exercise_set.target_weight + recommendation.delta, 2)
        )
    if kind == ProgressionType.INCREASE_REPS:
        return dataclasses.replace(
            exercise_set, target_reps=exercise_set.target_reps + int(recommendation.delta)
        )
    if kind == ProgressionType.DECREASE_REST:
        rest = exercise_set.rest_time if exercise_set.rest_time is not None else DEFAULT_REST_SECONDS
        return dataclasses.replace(
            exercise_set, rest_time=max(MIN_REST_SECONDS, int(rest - recommendation.delta))
        )
    if kind == ProgressionType.DELOAD:
        weight = max(0.0, exercise_set.target_weight * (1 + recommendation.delta))
        return dataclasses.replace(exercise_set, target_weight=round(weight, 2))
    return exercise_set


def apply_progression_to_sets(
    sets: Sequence[ExerciseSet], recommendation: ProgressionRecommendation
) -> tuple[ExerciseSet, ...]:
    """Apply a recommendation to every set of an exercise.

    increase_sets appends copies of the last set.
    """
    if recommendation.type == ProgressionType.INCREASE_SETS:
        if not sets:
            return ()
        extra = max(0, int(recommendation.delta))
        return tuple(sets) + (sets[-1],) * extra
    return tuple(apply_progression(s, recommendation) for s in sets)


def training_volume(sets: Sequence[ExerciseSet]) -> float:
    """Sum of weight x reps, preferring actual over target values."""
    total = 0.0
    for s in sets:
        weight = s.actual_weight if s.actual_weight is not None else s.target_weight
        reps = s.actual_reps if s.actual_reps is not None else s.target_reps
        total += weight * reps
    return total
