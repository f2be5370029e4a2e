"""Tests for the Performance Estimator."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from periodization_engine.models.enums import (
    FatigueIndicator,
    OneRepMaxFormula,
    PerformanceTrend,
)
from periodization_engine.models.wellness import PerformanceLog
from periodization_engine.performance import (
    compute_readiness,
    detect_fatigue_indicators,
    estimate_performance,
    label_trend,
    strength_curve,
)

DAY = date(2026, 3, 16)


class TestEstimatePerformance:
    def _make_logs(
        self,
        weights: list[float],
        reps: list[float] | None = None,
        rirs: list[float | None] | None = None,
        completion: list[float] | None = None,
        exercise_id: str = "squat",
    ) -> list[PerformanceLog]:
        n = len(weights)
        reps = reps or [5] * n
        rirs = rirs or [2.0] * n
        completion = completion or [1.0] * n
        return [
            PerformanceLog(
                user_id="u",
                exercise_id=exercise_id,
                date=DAY - timedelta(days=2 * (n - 1 - i)),
                weight=weights[i],
                reps=reps[i],
                sets_count=3,
                rir=rirs[i],
                completion_rate=completion[i],
            )
            for i in range(n)
        ]

    def test_steady_progress(self) -> None:
        estimate = estimate_performance("squat", self._make_logs([100.0, 102.5, 105.0, 107.5, 110.0]))
        # 110 x (1 + 5/30)
        assert estimate.one_rep_max == pytest.approx(128.33)
        # slope 2.5 over mean 105
        assert estimate.trend == pytest.approx(0.0238, abs=1e-4)
        assert estimate.trend_label == PerformanceTrend.STABLE
        assert estimate.consistency == pytest.approx(0.9663, abs=1e-4)
        # 0.7 + (1.0 - 0.8) x 0.5
        assert estimate.readiness == pytest.approx(0.8)
        assert estimate.fatigue_indicators == ()
        assert estimate.sample_size == 5
        assert estimate.has_sufficient_data

    def test_uses_last_five_logs_only(self) -> None:
        logs = self._make_logs([10.0, 100.0, 100.0, 100.0, 100.0, 100.0])
        estimate = estimate_performance("squat", logs)
        assert estimate.trend == 0.0
        assert estimate.consistency == 1.0
        assert estimate.sample_size == 6

    def test_single_log_is_insufficient(self) -> None:
        estimate = estimate_performance("squat", self._make_logs([100.0]))
        assert estimate.trend_label == PerformanceTrend.INSUFFICIENT_DATA
        assert estimate.readiness == 0.5
        assert estimate.consistency == 0.5
        assert estimate.trend == 0.0
        assert estimate.one_rep_max == pytest.approx(116.67)
        assert not estimate.has_sufficient_data

    def test_no_logs(self) -> None:
        estimate = estimate_performance("squat", [])
        assert estimate.one_rep_max == 0.0
        assert estimate.sample_size == 0

    def test_other_exercises_ignored(self) -> None:
        logs = self._make_logs([100.0, 105.0]) + self._make_logs([50.0, 40.0], exercise_id="bench")
        estimate = estimate_performance("squat", logs)
        assert estimate.sample_size == 2
        assert estimate.latest_weight == 105.0

    def test_input_order_irrelevant(self) -> None:
        logs = self._make_logs([100.0, 102.5, 105.0])
        assert estimate_performance("squat", logs) == estimate_performance("squat", logs[::-1])

    def test_high_rir_readiness_clamped(self) -> None:
        logs = self._make_logs([100.0, 100.0, 100.0], rirs=[4.0, 4.0, 4.0])
        assert estimate_performance("squat", logs).readiness == 1.0

    def test_low_rir_and_poor_completion(self) -> None:
        logs = self._make_logs([100.0, 100.0], rirs=[1.0, 1.0], completion=[0.95, 0.95])
        # 0.7 - 0.3 + 0.075
        assert estimate_performance("squat", logs).readiness == pytest.approx(0.475)

    def test_declining_label(self) -> None:
        estimate = estimate_performance("squat", self._make_logs([100.0, 60.0, 30.0]))
        assert estimate.trend_label == PerformanceTrend.DECLINING

    def test_formula_selection(self) -> None:
        logs = self._make_logs([100.0, 100.0])
        estimate = estimate_performance("squat", logs, formula=OneRepMaxFormula.BRZYCKI)
        assert estimate.one_rep_max == 112.5
        assert estimate.formula == OneRepMaxFormula.BRZYCKI


class TestFatigueIndicators:
    def _make_log(self, offset: int, reps: float = 5, rir: float | None = 2.0, completion: float = 1.0):
        return PerformanceLog(
            user_id="u",
            exercise_id="squat",
            date=DAY - timedelta(days=offset),
            weight=100.0,
            reps=reps,
            rir=rir,
            completion_rate=completion,
        )

    def test_rising_rir(self) -> None:
        # RIR 0, 0, 0, 1, 3: slope 0.7 over mean 0.8
        logs = [self._make_log(4 - i, rir=r) for i, r in enumerate([0.0, 0.0, 0.0, 1.0, 3.0])]
        assert FatigueIndicator.INCREASING_RIR in detect_fatigue_indicators(logs)

    def test_incomplete_latest_session(self) -> None:
        logs = [self._make_log(1), self._make_log(0, completion=0.8)]
        assert detect_fatigue_indicators(logs) == (FatigueIndicator.INCOMPLETE_SETS,)

    def test_declining_reps(self) -> None:
        # Reps 10, 8, 6, 4, 2: slope -2 over mean 6
        logs = [self._make_log(4 - i, reps=r) for i, r in enumerate([10, 8, 6, 4, 2])]
        assert FatigueIndicator.DECLINING_REPS in detect_fatigue_indicators(logs)

    def test_single_log_has_no_slope_indicators(self) -> None:
        assert detect_fatigue_indicators([self._make_log(0)]) == ()

    def test_indicators_reduce_readiness(self) -> None:
        logs = [self._make_log(1), self._make_log(0, completion=0.8)]
        indicators = detect_fatigue_indicators(logs)
        readiness, trace = compute_readiness(logs, indicators)
        # 0.7 + (0.9 - 0.8) x 0.5 - 0.1
        assert readiness == pytest.approx(0.65)
        assert "fatigue_indicators" in trace.fired_rule_ids


class TestHelpers:
    @pytest.mark.parametrize(
        "trend, label",
        [
            (0.25, PerformanceTrend.IMPROVING),
            (0.2, PerformanceTrend.STABLE),
            (-0.2, PerformanceTrend.STABLE),
            (-0.25, PerformanceTrend.DECLINING),
        ],
    )
    def test_label_trend(self, trend: float, label: PerformanceTrend) -> None:
        assert label_trend(trend) == label

    def test_strength_curve_confidence(self) -> None:
        log = PerformanceLog(
            user_id="u", exercise_id="squat", date=DAY, weight=100.0, reps=5, completion_rate=0.5
        )
        (point,) = strength_curve([log])
        assert point.estimated_one_rep_max == pytest.approx(116.67)
        assert point.confidence == 0.45
