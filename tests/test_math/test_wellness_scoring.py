"""Tests for the weighted subjective wellness score."""

from __future__ import annotations

from datetime import date

import pytest

from periodization_engine.math.wellness import axis_percent, mean_axis, subjective_fatigue_score
from periodization_engine.models.wellness import WellnessSnapshot

DAY = date(2026, 3, 16)


class TestSubjectiveFatigueScore:
    def _make_snapshot(self, **axes) -> WellnessSnapshot:
        return WellnessSnapshot(user_id="u", date=DAY, **axes)

    def test_full_check_in(self) -> None:
        # 8x.25 + (11-3)x.20 + (11-3)x.15 + (11-5)x.10 + (11-5)x.10 + 8x.10 + 7x.10 = 7.5
        score, covered = subjective_fatigue_score(
            self._make_snapshot(
                perceived_fatigue=8,
                sleep_quality=3,
                energy_level=3,
                mood=5,
                motivation=5,
                soreness=8,
                stress_level=7,
            )
        )
        assert score == pytest.approx(75.0)
        assert covered == pytest.approx(1.0)

    def test_missing_axes_renormalised(self) -> None:
        score, covered = subjective_fatigue_score(self._make_snapshot(perceived_fatigue=8))
        assert score == pytest.approx(80.0)
        assert covered == pytest.approx(0.25)

    def test_positive_axis_inverted(self) -> None:
        score, _ = subjective_fatigue_score(self._make_snapshot(sleep_quality=10))
        assert score == pytest.approx(10.0)

    def test_no_axes(self) -> None:
        assert subjective_fatigue_score(self._make_snapshot()) == (None, 0.0)

    def test_bounds(self) -> None:
        best, _ = subjective_fatigue_score(
            self._make_snapshot(
                perceived_fatigue=1, sleep_quality=10, energy_level=10, mood=10,
                motivation=10, soreness=1, stress_level=1,
            )
        )
        worst, _ = subjective_fatigue_score(
            self._make_snapshot(
                perceived_fatigue=10, sleep_quality=1, energy_level=1, mood=1,
                motivation=1, soreness=10, stress_level=10,
            )
        )
        assert best == pytest.approx(10.0)
        assert worst == pytest.approx(100.0)


class TestAxisMeans:
    def test_mean_axis_skips_absent(self) -> None:
        snapshots = [
            WellnessSnapshot(user_id="u", date=DAY, soreness=6),
            WellnessSnapshot(user_id="u", date=DAY, soreness=None),
            WellnessSnapshot(user_id="u", date=DAY, soreness=8),
        ]
        assert mean_axis(snapshots, "soreness") == pytest.approx(7.0)
        assert axis_percent(snapshots, "soreness") == pytest.approx(70.0)

    def test_absent_everywhere(self) -> None:
        assert mean_axis([WellnessSnapshot(user_id="u", date=DAY)], "mood") is None
        assert axis_percent([], "mood") is None
