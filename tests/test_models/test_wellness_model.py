"""Tests for WellnessSnapshot and PerformanceLog validation."""

from __future__ import annotations

from datetime import date

import pytest

from periodization_engine.exceptions import InvalidInputError
from periodization_engine.models.wellness import PerformanceLog, WellnessSnapshot

DAY = date(2026, 3, 16)


class TestWellnessSnapshot:
    def test_axes_optional(self) -> None:
        snapshot = WellnessSnapshot(user_id="u", date=DAY, mood=7)
        assert snapshot.axis_values() == {"mood": 7.0}

    @pytest.mark.parametrize("value", [0, 11, -3])
    def test_axis_out_of_scale_rejected(self, value: float) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            WellnessSnapshot(user_id="u", date=DAY, soreness=value)
        assert exc_info.value.field == "soreness"

    def test_scale_bounds_accepted(self) -> None:
        WellnessSnapshot(user_id="u", date=DAY, mood=1, motivation=10)

    def test_negative_sleep_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            WellnessSnapshot(user_id="u", date=DAY, sleep_duration_minutes=-5)


class TestPerformanceLog:
    def _make_log(self, **overrides) -> PerformanceLog:
        fields = {
            "user_id": "u",
            "exercise_id": "bench",
            "date": DAY,
            "weight": 80.0,
            "reps": 8,
            "sets_count": 3,
        }
        fields.update(overrides)
        return PerformanceLog(**fields)

    def test_volume(self) -> None:
        assert self._make_log().volume == pytest.approx(1920.0)

    def test_completion_outside_unit_interval(self) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            self._make_log(completion_rate=1.5)
        assert exc_info.value.field == "completion_rate"

    def test_negative_weight(self) -> None:
        with pytest.raises(InvalidInputError):
            self._make_log(weight=-10.0)

    def test_invalid_input_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            self._make_log(reps=-1)
