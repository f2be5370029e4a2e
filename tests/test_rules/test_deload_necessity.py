"""Tests for the deload necessity points table."""

from __future__ import annotations

import dataclasses
import itertools

from periodization_engine.models.deload import DeloadMetrics
from periodization_engine.rules.base import RulePolicy
from periodization_engine.rules.deload.necessity import DELOAD_NECESSITY_POLICY


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


class TestDeloadNecessity:
    def test_fresh_trainee_scores_zero(self) -> None:
        assert DELOAD_NECESSITY_POLICY.evaluate(_make_metrics()).total == 0

    def test_point_values(self) -> None:
        cases = {
            "high_fatigue": ({"overall_fatigue": 71.0}, 2),
            "performance_decline": ({"performance_decline_pct": 6.0}, 3),
            "deload_overdue": ({"weeks_since_last_deload": 7}, 1),
            "low_readiness": ({"readiness": 59.0}, 1),
            "high_soreness": ({"soreness": 71.0}, 1),
        }
        for rule_id, (overrides, points) in cases.items():
            trace = DELOAD_NECESSITY_POLICY.evaluate(_make_metrics(**overrides))
            assert trace.fired_rule_ids == (rule_id,)
            assert trace.total == points

    def test_boundaries_are_strict(self) -> None:
        metrics = _make_metrics(
            overall_fatigue=70.0,
            performance_decline_pct=5.0,
            weeks_since_last_deload=6,
            readiness=60.0,
            soreness=70.0,
        )
        assert DELOAD_NECESSITY_POLICY.evaluate(metrics).total == 0

    def test_all_criteria(self) -> None:
        metrics = _make_metrics(
            overall_fatigue=80.0,
            performance_decline_pct=12.0,
            weeks_since_last_deload=8,
            readiness=50.0,
            soreness=80.0,
        )
        assert DELOAD_NECESSITY_POLICY.evaluate(metrics).total == 8

    def test_total_independent_of_row_order(self) -> None:
        metrics = _make_metrics(overall_fatigue=75.0, readiness=55.0, soreness=75.0)
        expected = DELOAD_NECESSITY_POLICY.evaluate(metrics).total
        for rows in itertools.permutations(DELOAD_NECESSITY_POLICY.rules):
            policy = dataclasses.replace(DELOAD_NECESSITY_POLICY, rules=rows)
            assert isinstance(policy, RulePolicy)
            assert policy.evaluate(metrics).total == expected
        assert expected == 4
