"""Tests for the deload urgency bands."""

from __future__ import annotations

import pytest

from periodization_engine.deload import urgency_level
from periodization_engine.models.deload import DeloadMetrics
from periodization_engine.models.enums import (
    URGENCY_FATIGUE_BANDS,
    URGENCY_READINESS_BANDS,
    DeloadUrgency,
)
from periodization_engine.rules.deload.urgency import DELOAD_URGENCY_POLICY


def _make_metrics(**overrides) -> DeloadMetrics:
    fields = {
        "overall_fatigue": 40.0,
        "performance_decline_pct": 0.0,
        "weeks_since_last_deload": 2,
        "readiness": 75.0,
        "soreness": 40.0,
        "stress": 40.0,
        "sleep_quality": 70.0,
        "average_rpe": 7.0,
        "volume_tolerance": 70.0,
        "intensity_tolerance": 70.0,
    }
    fields.update(overrides)
    return DeloadMetrics(**fields)


class TestUrgencyPoints:
    @pytest.mark.parametrize(
        "fatigue, points",
        [(60.0, 0), (65.0, 1), (75.0, 2), (85.0, 3), (95.0, 4)],
    )
    def test_fatigue_bands(self, fatigue: float, points: int) -> None:
        trace = DELOAD_URGENCY_POLICY.evaluate(_make_metrics(overall_fatigue=fatigue))
        assert trace.total == points

    @pytest.mark.parametrize(
        "decline, points",
        [(2.0, 0), (3.0, 1), (7.0, 2), (12.0, 3), (20.0, 4)],
    )
    def test_decline_bands(self, decline: float, points: int) -> None:
        trace = DELOAD_URGENCY_POLICY.evaluate(_make_metrics(performance_decline_pct=decline))
        assert trace.total == points

    @pytest.mark.parametrize("weeks, points", [(6, 0), (7, 1), (10, 2), (13, 3)])
    def test_weeks_bands(self, weeks: int, points: int) -> None:
        trace = DELOAD_URGENCY_POLICY.evaluate(_make_metrics(weeks_since_last_deload=weeks))
        assert trace.total == points

    @pytest.mark.parametrize("readiness, points", [(60.0, 0), (55.0, 1), (45.0, 2), (30.0, 3)])
    def test_readiness_bands(self, readiness: float, points: int) -> None:
        trace = DELOAD_URGENCY_POLICY.evaluate(_make_metrics(readiness=readiness))
        assert trace.total == points

    def test_rows_follow_configured_bands(self) -> None:
        assert DELOAD_URGENCY_POLICY.rule_ids == (
            "fatigue_above_90", "fatigue_above_80", "fatigue_above_70", "fatigue_above_60",
            "decline_above_15", "decline_above_10", "decline_above_5", "decline_above_2",
            "weeks_above_12", "weeks_above_8", "weeks_above_6",
            "readiness_below_40", "readiness_below_50", "readiness_below_60",
        )
        for threshold, points in URGENCY_FATIGUE_BANDS:
            trace = DELOAD_URGENCY_POLICY.evaluate(_make_metrics(overall_fatigue=threshold + 0.5))
            assert trace.total == points
        for threshold, points in URGENCY_READINESS_BANDS:
            trace = DELOAD_URGENCY_POLICY.evaluate(_make_metrics(readiness=threshold - 0.5))
            assert trace.total == points

    def test_explanation_names_threshold(self) -> None:
        trace = DELOAD_URGENCY_POLICY.evaluate(_make_metrics(readiness=45.0))
        assert trace.fired[0].explanation == "Readiness 45 below 50."

    def test_only_one_band_per_criterion_fires(self) -> None:
        trace = DELOAD_URGENCY_POLICY.evaluate(_make_metrics(overall_fatigue=99.0))
        assert trace.fired_rule_ids == ("fatigue_above_90",)

    def test_combined_critical(self) -> None:
        metrics = _make_metrics(
            overall_fatigue=85.0,
            performance_decline_pct=12.0,
            weeks_since_last_deload=10,
            readiness=45.0,
        )
        trace = DELOAD_URGENCY_POLICY.evaluate(metrics)
        assert trace.total == 10
        assert urgency_level(trace.total) == DeloadUrgency.CRITICAL


class TestUrgencyLevel:
    @pytest.mark.parametrize(
        "points, level",
        [
            (0, DeloadUrgency.LOW),
            (3, DeloadUrgency.LOW),
            (4, DeloadUrgency.MODERATE),
            (6, DeloadUrgency.MODERATE),
            (7, DeloadUrgency.HIGH),
            (9, DeloadUrgency.HIGH),
            (10, DeloadUrgency.CRITICAL),
        ],
    )
    def test_levels(self, points: int, level: DeloadUrgency) -> None:
        assert urgency_level(points) == level
