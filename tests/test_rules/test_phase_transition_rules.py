"""Tests for the ordered phase transition criteria."""

from __future__ import annotations

from periodization_engine.models.enums import TransitionTrigger
from periodization_engine.rules.transition.phase_transition import (
    PHASE_TRANSITION_POLICY,
    TransitionContext,
)


class TestPhaseTransitionPolicy:
    def _make_context(self, weeks: int = 2, duration: int = 4, **overrides) -> TransitionContext:
        fields = {
            "weeks_in_phase": weeks,
            "phase_duration_weeks": duration,
            "phase_completion": weeks / duration,
            "fatigue_threshold": 75.0,
            "progress_threshold": 0.8,
            "adherence_threshold": 0.8,
        }
        fields.update(overrides)
        return TransitionContext(**fields)

    def test_time_trigger(self) -> None:
        rule, trace = PHASE_TRANSITION_POLICY.first_match(self._make_context(weeks=4))
        assert rule.outcome == TransitionTrigger.TIME
        assert rule.confidence == 0.9
        assert rule.describe(self._make_context(weeks=4)) == "Phase duration of 4 weeks completed."

    def test_no_trigger_mid_phase(self) -> None:
        rule, trace = PHASE_TRANSITION_POLICY.first_match(self._make_context(weeks=1))
        assert rule is None
        assert trace.fired == ()

    def test_fatigue_needs_three_quarters_of_phase(self) -> None:
        early = self._make_context(weeks=2, average_fatigue=80.0)
        late = self._make_context(weeks=3, average_fatigue=80.0)
        assert PHASE_TRANSITION_POLICY.first_match(early)[0] is None
        rule, _ = PHASE_TRANSITION_POLICY.first_match(late)
        assert rule.outcome == TransitionTrigger.FATIGUE
        assert rule.confidence == 0.85

    def test_fatigue_at_threshold_does_not_fire(self) -> None:
        context = self._make_context(weeks=3, average_fatigue=75.0)
        assert PHASE_TRANSITION_POLICY.first_match(context)[0] is None

    def test_progress_stall(self) -> None:
        context = self._make_context(weeks=3, recent_performance_gain=0.5)
        rule, _ = PHASE_TRANSITION_POLICY.first_match(context)
        assert rule.outcome == TransitionTrigger.PROGRESS
        assert rule.confidence == 0.75

    def test_progress_needs_half_of_phase(self) -> None:
        context = self._make_context(weeks=3, duration=8, recent_performance_gain=0.5)
        assert PHASE_TRANSITION_POLICY.first_match(context)[0] is None

    def test_low_adherence(self) -> None:
        context = self._make_context(weeks=2, recent_adherence=0.6)
        rule, _ = PHASE_TRANSITION_POLICY.first_match(context)
        assert rule.outcome == TransitionTrigger.ADHERENCE
        assert rule.confidence == 0.7

    def test_time_wins_over_everything(self) -> None:
        context = self._make_context(
            weeks=4, average_fatigue=90.0, recent_performance_gain=0.1, recent_adherence=0.2
        )
        rule, trace = PHASE_TRANSITION_POLICY.first_match(context)
        assert rule.rule_id == "time"
        assert trace.fired_rule_ids == ("time",)

    def test_fatigue_wins_over_progress(self) -> None:
        context = self._make_context(weeks=3, average_fatigue=90.0, recent_performance_gain=0.1)
        rule, _ = PHASE_TRANSITION_POLICY.first_match(context)
        assert rule.rule_id == "fatigue"
