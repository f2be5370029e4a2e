"""Tests for the progression decision table."""

from __future__ import annotations

import dataclasses

from periodization_engine.models.enums import PerformanceTrend, ProgressionType
from periodization_engine.rules.progression.decision import (
    PROGRESSION_DECISION_POLICY,
    ProgressionContext,
)


class TestProgressionDecisionPolicy:
    def setup_method(self) -> None:
        self.base = ProgressionContext(
            readiness=0.75,
            indicator_count=0,
            trend_label=PerformanceTrend.STABLE,
            weight_increment=2.5,
            maintain_readiness=0.4,
            deload_readiness=0.3,
            increase_readiness=0.7,
            maintain_indicator_count=2,
            deload_fraction=-0.1,
        )

    def _decide(self, **overrides):
        return PROGRESSION_DECISION_POLICY.first_match(dataclasses.replace(self.base, **overrides))

    def test_high_readiness_increases_weight(self) -> None:
        rule, trace = self._decide()
        assert rule.outcome == ProgressionType.INCREASE_WEIGHT
        assert trace.total == 2.5

    def test_declining_trend_blocks_weight_increase(self) -> None:
        rule, trace = self._decide(trend_label=PerformanceTrend.DECLINING)
        assert rule.outcome == ProgressionType.INCREASE_REPS
        assert trace.total == 1

    def test_moderate_readiness_adds_rep(self) -> None:
        rule, _ = self._decide(readiness=0.55)
        assert rule.outcome == ProgressionType.INCREASE_REPS
        assert rule.confidence == 0.6

    def test_low_readiness_maintains(self) -> None:
        rule, trace = self._decide(readiness=0.35)
        assert rule.outcome == ProgressionType.MAINTAIN
        assert rule.confidence == 0.8
        assert trace.total == 0.0

    def test_two_indicators_maintain_despite_readiness(self) -> None:
        rule, _ = self._decide(indicator_count=2)
        assert rule.outcome == ProgressionType.MAINTAIN

    def test_deload_row_shadowed_by_default_thresholds(self) -> None:
        rule, _ = self._decide(readiness=0.1)
        assert rule.outcome == ProgressionType.MAINTAIN

    def test_deload_reachable_with_lower_maintain_threshold(self) -> None:
        rule, trace = self._decide(readiness=0.2, maintain_readiness=0.1)
        assert rule.outcome == ProgressionType.DELOAD
        assert rule.confidence == 0.9
        assert trace.total == -0.1
