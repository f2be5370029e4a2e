"""Tests for the objective fatigue penalty table."""

from __future__ import annotations

from periodization_engine.rules.fatigue.penalties import (
    FATIGUE_PENALTY_POLICY,
    FatiguePenaltyContext,
)


class TestFatiguePenaltyPolicy:
    def test_no_signals_no_penalty(self) -> None:
        assert FATIGUE_PENALTY_POLICY.evaluate(FatiguePenaltyContext()).total == 0.0

    def test_performance_decline_above_10(self) -> None:
        trace = FATIGUE_PENALTY_POLICY.evaluate(FatiguePenaltyContext(performance_decline_pct=12.0))
        assert trace.total == 10.0
        assert trace.fired_rule_ids == ("performance_decline",)

    def test_decline_of_exactly_10_not_penalised(self) -> None:
        trace = FATIGUE_PENALTY_POLICY.evaluate(FatiguePenaltyContext(performance_decline_pct=10.0))
        assert trace.total == 0.0

    def test_low_completion(self) -> None:
        trace = FATIGUE_PENALTY_POLICY.evaluate(FatiguePenaltyContext(average_completion_rate=0.7))
        assert trace.total == 5.0

    def test_short_sleep(self) -> None:
        trace = FATIGUE_PENALTY_POLICY.evaluate(FatiguePenaltyContext(average_sleep_minutes=400))
        assert trace.total == 10.0
        assert "400 min" in trace.fired[0].explanation

    def test_all_penalties_stack(self) -> None:
        context = FatiguePenaltyContext(
            performance_decline_pct=20.0,
            average_completion_rate=0.5,
            average_sleep_minutes=300,
        )
        assert FATIGUE_PENALTY_POLICY.evaluate(context).total == 25.0
