"""Phase templates and plan construction.

Reference:
    Bompa & Haff (2009). Periodization: Theory and Methodology of Training,
    5th ed. Phase ordering (anatomical adaptation -> hypertrophy -> maximal
    strength -> conversion to power) and intensity/rep ranges.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from datetime import datetime

from periodization_engine.exceptions import InvalidInputError
from periodization_engine.math.rounding import round_half_up
from periodization_engine.models.enums import ExperienceLevel, PhaseType, TrainingGoal
from periodization_engine.models.plan import (
    AdaptiveSettings,
    PeriodizationPhase,
    PeriodizationPlan,
    PhaseRecord,
)

logger = logging.getLogger(__name__)

PHASE_TEMPLATES: dict[PhaseType, PeriodizationPhase] = {
    PhaseType.ANATOMICAL_ADAPTATION: PeriodizationPhase(
        id="anatomical_adaptation",
        name="Anatomical Adaptation",
        type=PhaseType.ANATOMICAL_ADAPTATION,
        duration_weeks=4,
        volume_multiplier=0.8,
        intensity_range=(50.0, 70.0),
        sets_range=(2, 3),
        reps_range=(12, 20),
        rest_range_seconds=(60, 90),
    ),
    PhaseType.HYPERTROPHY: PeriodizationPhase(
        id="hypertrophy",
        name="Hypertrophy",
        type=PhaseType.HYPERTROPHY,
        duration_weeks=6,
        volume_multiplier=1.3,
        intensity_range=(65.0, 80.0),
        sets_range=(3, 5),
        reps_range=(8, 15),
        rest_range_seconds=(90, 120),
    ),
    PhaseType.STRENGTH: PeriodizationPhase(
        id="strength",
        name="Maximal Strength",
        type=PhaseType.STRENGTH,
        duration_weeks=4,
        volume_multiplier=0.9,
        intensity_range=(80.0, 95.0),
        sets_range=(3, 6),
        reps_range=(1, 6),
        rest_range_seconds=(180, 300),
    ),
    PhaseType.POWER: PeriodizationPhase(
        id="power",
        name="Power Conversion",
        type=PhaseType.POWER,
        duration_weeks=3,
        volume_multiplier=0.7,
        intensity_range=(70.0, 90.0),
        sets_range=(3, 5),
        reps_range=(2, 5),
        rest_range_seconds=(180, 300),
    ),
    PhaseType.PEAKING: PeriodizationPhase(
        id="peaking",
        name="Peaking",
        type=PhaseType.PEAKING,
        duration_weeks=2,
        volume_multiplier=0.6,
        intensity_range=(90.0, 100.0),
        sets_range=(2, 4),
        reps_range=(1, 3),
        rest_range_seconds=(240, 360),
    ),
    PhaseType.DELOAD: PeriodizationPhase(
        id="deload",
        name="Deload",
        type=PhaseType.DELOAD,
        duration_weeks=1,
        volume_multiplier=0.6,
        intensity_range=(60.0, 75.0),
        sets_range=(2, 3),
        reps_range=(8, 12),
        rest_range_seconds=(90, 120),
    ),
    PhaseType.TRANSITION: PeriodizationPhase(
        id="transition",
        name="Active Transition",
        type=PhaseType.TRANSITION,
        duration_weeks=2,
        volume_multiplier=0.5,
        intensity_range=(40.0, 60.0),
        sets_range=(1, 2),
        reps_range=(10, 15),
        rest_range_seconds=(60, 90),
    ),
}

# Beginners chasing strength get a longer adaptation block and a shorter strength block
_BEGINNER_STRENGTH_LAYOUT = (
    (PhaseType.ANATOMICAL_ADAPTATION, 6),
    (PhaseType.HYPERTROPHY, 6),
    (PhaseType.STRENGTH, 3),
    (PhaseType.DELOAD, 1),
)

# (phase type, weeks) per goal
_GOAL_LAYOUTS: dict[TrainingGoal, tuple[tuple[PhaseType, int], ...]] = {
    TrainingGoal.STRENGTH: (
        (PhaseType.ANATOMICAL_ADAPTATION, 2),
        (PhaseType.HYPERTROPHY, 4),
        (PhaseType.STRENGTH, 6),
        (PhaseType.DELOAD, 1),
    ),
    TrainingGoal.HYPERTROPHY: (
        (PhaseType.ANATOMICAL_ADAPTATION, 3),
        (PhaseType.HYPERTROPHY, 8),
        (PhaseType.STRENGTH, 3),
        (PhaseType.DELOAD, 1),
    ),
    TrainingGoal.GENERAL_FITNESS: (
        (PhaseType.ANATOMICAL_ADAPTATION, 4),
        (PhaseType.HYPERTROPHY, 6),
        (PhaseType.STRENGTH, 4),
        (PhaseType.DELOAD, 1),
    ),
    TrainingGoal.POWER: (
        (PhaseType.ANATOMICAL_ADAPTATION, 2),
        (PhaseType.HYPERTROPHY, 3),
        (PhaseType.STRENGTH, 4),
        (PhaseType.POWER, 3),
        (PhaseType.PEAKING, 2),
        (PhaseType.DELOAD, 1),
    ),
}


def _layout_for(goal: TrainingGoal, experience: ExperienceLevel) -> tuple[tuple[PhaseType, int], ...]:
    if goal == TrainingGoal.STRENGTH and experience == ExperienceLevel.BEGINNER:
        return _BEGINNER_STRENGTH_LAYOUT
    return _GOAL_LAYOUTS[goal]


def scale_durations(durations: list[int], total_weeks: int) -> list[int]:
    """Scale phase durations proportionally to ``total_weeks``, each at least 1.

    The scaled sum can still differ from the target by rounding.
    """
    current = sum(durations)
    if current == total_weeks or current == 0:
        return list(durations)
    factor = total_weeks / current
    return [max(1, round_half_up(d * factor)) for d in durations]


def select_phases(
    goal: TrainingGoal,
    experience_level: ExperienceLevel,
    total_weeks: int,
) -> tuple[PeriodizationPhase, ...]:
    """Phase sequence for a goal and experience level, scaled to the plan length."""
    layout = _layout_for(TrainingGoal(goal), ExperienceLevel(experience_level))
    durations = scale_durations([weeks for _, weeks in layout], total_weeks)
    return tuple(
        dataclasses.replace(
            PHASE_TEMPLATES[phase_type],
            id=f"{phase_type.value}-{index}",
            duration_weeks=weeks,
        )
        for index, ((phase_type, _), weeks) in enumerate(zip(layout, durations))
    )


def create_plan(
    user_id: str,
    goal: TrainingGoal,
    experience_level: ExperienceLevel,
    total_weeks: int,
    now: datetime,
    plan_id: str | None = None,
    adaptive_settings: AdaptiveSettings | None = None,
) -> PeriodizationPlan:
    """Build a new plan positioned at its first phase.

    Args:
        user_id: Owner of the plan.
        goal: Primary training goal.
        experience_level: Trainee experience; beginners get a longer
            adaptation block on strength plans.
        total_weeks: Requested plan length in weeks (>= 1).
        now: Creation timestamp.
        plan_id: Explicit id; defaults to one derived from user and time.
        adaptive_settings: Transition thresholds; defaults 75 / 0.8 / 0.8.
    """
    if total_weeks < 1:
        raise InvalidInputError("total_weeks must be >= 1", field="total_weeks")
    phases = select_phases(goal, experience_level, total_weeks)
    plan_id = plan_id or f"plan-{user_id}-{now:%Y%m%d%H%M%S}"
    first = phases[0]
    logger.info(
        "Created plan %s for %s: %s over %d weeks",
        plan_id,
        user_id,
        " -> ".join(p.type.value for p in phases),
        sum(p.duration_weeks for p in phases),
    )
    return PeriodizationPlan(
        id=plan_id,
        user_id=user_id,
        total_duration_weeks=total_weeks,
        current_phase_index=0,
        phases=phases,
        created_at=now,
        last_adjusted_at=now,
        adaptive_settings=adaptive_settings or AdaptiveSettings(),
        phase_history=(
            PhaseRecord(
                phase_index=0,
                phase_id=first.id,
                phase_type=first.type,
                started_at=now,
            ),
        ),
    )


def deload_phase(phase_id: str, duration_days: int) -> PeriodizationPhase:
    """Deload phase lasting ``ceil(duration_days / 7)`` weeks (minimum 1)."""
    weeks = max(1, math.ceil(duration_days / 7))
    return dataclasses.replace(PHASE_TEMPLATES[PhaseType.DELOAD], id=phase_id, duration_weeks=weeks)
