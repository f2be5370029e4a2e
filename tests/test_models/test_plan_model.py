"""Tests for PeriodizationPlan, PeriodizationPhase and WeeklyProgress validation."""

from __future__ import annotations

import dataclasses
from datetime import datetime

import pytest

from periodization_engine.exceptions import InvalidInputError, InvalidPlanStateError
from periodization_engine.models.enums import PhaseType
from periodization_engine.models.plan import (
    AdaptiveSettings,
    PeriodizationPhase,
    PeriodizationPlan,
    WeeklyProgress,
)

CREATED = datetime(2026, 1, 5, 8, 0)


class TestPeriodizationPhase:
    def _make_phase(self, **overrides) -> PeriodizationPhase:
        fields = {
            "id": "hyp",
            "type": PhaseType.HYPERTROPHY,
            "duration_weeks": 4,
            "volume_multiplier": 1.2,
            "intensity_range": (65.0, 80.0),
            "sets_range": (3, 5),
            "reps_range": (8, 12),
            "rest_range_seconds": (60, 90),
        }
        fields.update(overrides)
        return PeriodizationPhase(**fields)

    def test_valid_phase(self) -> None:
        phase = self._make_phase()
        assert phase.duration_weeks == 4

    def test_inverted_range_rejected(self) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            self._make_phase(reps_range=(12, 8))
        assert exc_info.value.field == "reps_range"

    def test_zero_duration_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            self._make_phase(duration_weeks=0)

    def test_non_positive_volume_multiplier_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            self._make_phase(volume_multiplier=0.0)

    def test_frozen(self) -> None:
        phase = self._make_phase()
        with pytest.raises(dataclasses.FrozenInstanceError):
            phase.duration_weeks = 5  # type: ignore[misc]


class TestPeriodizationPlan:
    def setup_method(self) -> None:
        self.phases = (
            PeriodizationPhase(
                id="aa", type=PhaseType.ANATOMICAL_ADAPTATION, duration_weeks=2,
                volume_multiplier=0.8, intensity_range=(50.0, 70.0), sets_range=(2, 3),
                reps_range=(12, 20), rest_range_seconds=(60, 90),
            ),
            PeriodizationPhase(
                id="str", type=PhaseType.STRENGTH, duration_weeks=3,
                volume_multiplier=0.9, intensity_range=(80.0, 95.0), sets_range=(3, 6),
                reps_range=(1, 6), rest_range_seconds=(180, 300),
            ),
        )

    def _make_plan(self, index: int = 0, phases=None) -> PeriodizationPlan:
        return PeriodizationPlan(
            id="p",
            user_id="u",
            total_duration_weeks=6,
            current_phase_index=index,
            phases=self.phases if phases is None else phases,
            created_at=CREATED,
            last_adjusted_at=CREATED,
        )

    def test_current_phase(self) -> None:
        plan = self._make_plan(index=1)
        assert plan.current_phase.id == "str"
        assert plan.is_last_phase

    def test_index_out_of_range(self) -> None:
        with pytest.raises(InvalidPlanStateError) as exc_info:
            self._make_plan(index=2).validate()
        assert exc_info.value.plan_id == "p"

    def test_negative_index(self) -> None:
        with pytest.raises(InvalidPlanStateError):
            _ = self._make_plan(index=-1).current_phase

    def test_empty_phases(self) -> None:
        with pytest.raises(InvalidPlanStateError):
            self._make_plan(phases=()).validate()

    def test_scheduled_weeks_may_drift_from_total(self) -> None:
        plan = self._make_plan()
        assert plan.scheduled_weeks == 5
        assert plan.total_duration_weeks == 6

    def test_not_complete_by_default(self) -> None:
        assert not self._make_plan().is_complete

    def test_default_adaptive_settings(self) -> None:
        assert self._make_plan().adaptive_settings == AdaptiveSettings(75.0, 0.8, 0.8)


class TestWeeklyProgress:
    def test_adherence_must_be_fraction(self) -> None:
        with pytest.raises(InvalidInputError):
            WeeklyProgress(phase_id="aa", week=1, adherence_rate=1.2, performance_gain=1.0)
