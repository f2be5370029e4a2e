"""Shared test fixtures: trainees' check-ins, logged sessions, plans and a store."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Callable

import pytest

from periodization_engine.models.enums import ExperienceLevel, TrainingGoal
from periodization_engine.models.plan import PeriodizationPlan, WeeklyProgress
from periodization_engine.models.wellness import PerformanceLog, WellnessSnapshot
from periodization_engine.plan_builder import create_plan
from plan_store import JsonPlanStore

USER_ID = "user-1"


@pytest.fixture
def today() -> date:
    return date(2026, 3, 16)  # Monday


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 3, 16, 3, 0)


@pytest.fixture
def snapshot_factory() -> Callable[..., WellnessSnapshot]:
    """Factory for check-ins; every subjective axis defaults to a neutral 5.

    Usage:
        snap = snapshot_factory(date(2026, 3, 1), perceived_fatigue=8)
    """

    def factory(day: date, **axes: float | None) -> WellnessSnapshot:
        values: dict[str, float | None] = {
            "perceived_fatigue": 5,
            "sleep_quality": 5,
            "mood": 5,
            "motivation": 5,
            "energy_level": 5,
            "soreness": 5,
            "stress_level": 5,
        }
        values.update(axes)
        return WellnessSnapshot(user_id=USER_ID, date=day, **values)

    return factory


@pytest.fixture
def log_factory() -> Callable[..., PerformanceLog]:
    """Factory for one logged exercise; 3 x 5 at 100 kg, RIR 2 by default."""

    def factory(
        day: date,
        exercise_id: str = "squat",
        weight: float = 100.0,
        reps: float = 5,
        **overrides,
    ) -> PerformanceLog:
        fields = {"sets_count": 3, "rir": 2.0, "rpe": 8.0, "completion_rate": 1.0}
        fields.update(overrides)
        return PerformanceLog(
            user_id=USER_ID,
            exercise_id=exercise_id,
            date=day,
            weight=weight,
            reps=reps,
            **fields,
        )

    return factory


@pytest.fixture
def rested_week(today: date, snapshot_factory) -> list[WellnessSnapshot]:
    """Seven well-recovered check-ins ending today."""
    return [
        snapshot_factory(
            today - timedelta(days=offset),
            perceived_fatigue=2,
            sleep_quality=9,
            mood=8,
            motivation=8,
            energy_level=9,
            soreness=2,
            stress_level=2,
            sleep_duration_minutes=480,
        )
        for offset in range(6, -1, -1)
    ]


@pytest.fixture
def exhausted_week(today: date, snapshot_factory) -> list[WellnessSnapshot]:
    """Seven check-ins of a trainee who is run down, ending today."""
    return [
        snapshot_factory(
            today - timedelta(days=offset),
            perceived_fatigue=9,
            sleep_quality=2,
            mood=3,
            motivation=3,
            energy_level=2,
            soreness=9,
            stress_level=8,
            sleep_duration_minutes=360,
        )
        for offset in range(6, -1, -1)
    ]


@pytest.fixture
def progressing_logs(today: date, log_factory) -> list[PerformanceLog]:
    """Five squat sessions adding 2.5 kg each time, the last one today."""
    return [
        log_factory(today - timedelta(days=3 * (4 - i)), weight=100.0 + 2.5 * i, rir=3.0)
        for i in range(5)
    ]


@pytest.fixture
def strength_plan(now: datetime) -> PeriodizationPlan:
    """Intermediate strength plan: AA 2w, hypertrophy 4w, strength 6w, deload 1w."""
    return create_plan(
        USER_ID,
        TrainingGoal.STRENGTH,
        ExperienceLevel.INTERMEDIATE,
        13,
        now - timedelta(weeks=3),
        plan_id="plan-1",
    )


@pytest.fixture
def progress_factory() -> Callable[..., list[WeeklyProgress]]:
    """Factory for ``weeks`` weekly entries against one phase.

    Usage:
        entries = progress_factory("hypertrophy-1", 3, adherence=0.9, gain=1.0)
    """

    def factory(
        phase_id: str, weeks: int, adherence: float = 0.9, gain: float = 1.0
    ) -> list[WeeklyProgress]:
        return [
            WeeklyProgress(
                phase_id=phase_id,
                week=week,
                adherence_rate=adherence,
                performance_gain=gain,
            )
            for week in range(1, weeks + 1)
        ]

    return factory


@pytest.fixture
def store(tmp_path) -> JsonPlanStore:
    return JsonPlanStore(tmp_path / "store")
