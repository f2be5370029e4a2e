"""Tests for the Progression Recommendation Engine."""

from __future__ import annotations

import pytest

from periodization_engine.fatigue import score_fatigue
from periodization_engine.models.enums import (
    ExperienceLevel,
    FatigueIndicator,
    MassUnit,
    PerformanceTrend,
    PhaseType,
    ProgressionType,
)
from periodization_engine.models.performance import PerformanceEstimate
from periodization_engine.models.progression import (
    ExerciseState,
    ProgressionRecommendation,
    ProgressionSettings,
)
from periodization_engine.models.routine import ExerciseSet
from periodization_engine.plan_builder import PHASE_TEMPLATES
from periodization_engine.progression import (
    apply_progression,
    apply_progression_to_sets,
    recommend_progression,
    training_volume,
    weight_increment,
)


def _make_estimate(
    readiness: float = 0.8,
    trend_label: PerformanceTrend = PerformanceTrend.STABLE,
    indicators: tuple[FatigueIndicator, ...] = (),
    sample_size: int = 5,
) -> PerformanceEstimate:
    return PerformanceEstimate(
        exercise_id="squat",
        one_rep_max=120.0,
        trend=0.0,
        consistency=0.9,
        readiness=readiness,
        trend_label=trend_label,
        fatigue_indicators=indicators,
        sample_size=sample_size,
        average_rir=2.0,
    )


def _make_recommendation(kind: ProgressionType, delta: float) -> ProgressionRecommendation:
    return ProgressionRecommendation(
        exercise_id="squat", type=kind, delta=delta, confidence=0.8, reasoning=()
    )


class TestWeightIncrement:
    @pytest.mark.parametrize(
        "experience, expected",
        [
            (ExperienceLevel.BEGINNER, 3.0),
            (ExperienceLevel.INTERMEDIATE, 2.5),
            (ExperienceLevel.ADVANCED, 2.0),
            (ExperienceLevel.EXPERT, 1.5),
        ],
    )
    def test_scaled_by_experience(self, experience: ExperienceLevel, expected: float) -> None:
        assert weight_increment(experience) == pytest.approx(expected)

    def test_custom_base(self) -> None:
        settings = ProgressionSettings(base_increment=5.0, mass_unit=MassUnit.LB)
        assert weight_increment(ExperienceLevel.ADVANCED, settings) == pytest.approx(4.0)


class TestRecommendProgression:
    def setup_method(self) -> None:
        self.exercise = ExerciseState(
            exercise_id="squat", current_weight=100.0, current_reps=5, current_sets=3, current_rir=2.0
        )

    def test_ready_trainee_adds_weight(self) -> None:
        rec = recommend_progression(self.exercise, _make_estimate(readiness=0.8))
        assert rec.type == ProgressionType.INCREASE_WEIGHT
        assert rec.delta == pytest.approx(2.5)
        assert rec.confidence == pytest.approx(0.9)
        assert rec.rule_id == "increase_weight"
        assert rec.mass_unit == MassUnit.KG
        assert rec.alternatives[0].type == ProgressionType.INCREASE_REPS
        assert rec.alternatives[0].delta == 1

    def test_weight_confidence_tracks_readiness(self) -> None:
        rec = recommend_progression(self.exercise, _make_estimate(readiness=0.75))
        assert rec.confidence == pytest.approx(0.85)

    def test_declining_trend_adds_reps(self) -> None:
        rec = recommend_progression(
            self.exercise, _make_estimate(readiness=0.8, trend_label=PerformanceTrend.DECLINING)
        )
        assert rec.type == ProgressionType.INCREASE_REPS
        assert rec.delta == 1
        assert rec.confidence == pytest.approx(0.6)
        assert rec.alternatives == ()

    def test_low_readiness_maintains(self) -> None:
        rec = recommend_progression(self.exercise, _make_estimate(readiness=0.35))
        assert rec.type == ProgressionType.MAINTAIN
        assert rec.delta == 0.0
        assert rec.confidence == pytest.approx(0.8)

    def test_two_indicators_maintain(self) -> None:
        estimate = _make_estimate(
            readiness=0.9,
            indicators=(FatigueIndicator.INCREASING_RIR, FatigueIndicator.DECLINING_REPS),
        )
        assert recommend_progression(self.exercise, estimate).type == ProgressionType.MAINTAIN

    def test_very_low_readiness_still_maintains_by_default(self) -> None:
        rec = recommend_progression(self.exercise, _make_estimate(readiness=0.2))
        assert rec.type == ProgressionType.MAINTAIN

    def test_deload_reachable_with_lower_maintain_threshold(self) -> None:
        settings = ProgressionSettings(maintain_readiness=0.1)
        rec = recommend_progression(self.exercise, _make_estimate(readiness=0.2), settings=settings)
        assert rec.type == ProgressionType.DELOAD
        assert rec.delta == pytest.approx(-0.1)
        assert rec.confidence == pytest.approx(0.9)

    def test_insufficient_history_gives_standard_increment(self) -> None:
        rec = recommend_progression(self.exercise, _make_estimate(sample_size=1))
        assert rec.type == ProgressionType.INCREASE_WEIGHT
        assert rec.delta == pytest.approx(2.5)
        assert rec.confidence == pytest.approx(0.5)
        assert rec.rule_id == "insufficient_data"

    def test_insufficient_history_advanced(self) -> None:
        rec = recommend_progression(
            self.exercise, _make_estimate(sample_size=0), experience=ExperienceLevel.ADVANCED
        )
        assert rec.delta == pytest.approx(1.25)

    def test_unit_follows_settings(self) -> None:
        settings = ProgressionSettings(base_increment=5.0, mass_unit=MassUnit.LB)
        rec = recommend_progression(self.exercise, _make_estimate(), settings=settings)
        assert rec.delta == pytest.approx(5.0)
        assert rec.mass_unit == MassUnit.LB

    def test_fatigue_and_phase_in_reasoning(self, rested_week) -> None:
        fatigue = score_fatigue(rested_week)
        phase = PHASE_TEMPLATES[PhaseType.HYPERTROPHY]
        rec = recommend_progression(self.exercise, _make_estimate(), fatigue=fatigue, phase=phase)
        assert rec.type == ProgressionType.INCREASE_WEIGHT
        assert "Overall fatigue 22.0 (low)" in rec.reasoning
        assert "hypertrophy phase: 8-15 reps at 65-80% 1RM" in rec.reasoning


class TestApplyProgression:
    def setup_method(self) -> None:
        self.exercise_set = ExerciseSet(target_weight=100.0, target_reps=5, rest_time=120)

    def test_increase_weight(self) -> None:
        updated = apply_progression(
            self.exercise_set, _make_recommendation(ProgressionType.INCREASE_WEIGHT, 2.5)
        )
        assert updated.target_weight == 102.5
        assert updated.target_reps == 5

    def test_increase_reps(self) -> None:
        updated = apply_progression(
            self.exercise_set, _make_recommendation(ProgressionType.INCREASE_REPS, 1)
        )
        assert updated.target_reps == 6
        assert updated.target_weight == 100.0

    def test_decrease_rest_floors_at_thirty_seconds(self) -> None:
        short = ExerciseSet(target_weight=100.0, target_reps=5, rest_time=40)
        updated = apply_progression(short, _make_recommendation(ProgressionType.DECREASE_REST, 60))
        assert updated.rest_time == 30

    def test_decrease_rest_from_default(self) -> None:
        no_rest = ExerciseSet(target_weight=100.0, target_reps=5, rest_time=None)
        updated = apply_progression(no_rest, _make_recommendation(ProgressionType.DECREASE_REST, 30))
        assert updated.rest_time == 90

    def test_deload_fraction(self) -> None:
        updated = apply_progression(
            self.exercise_set, _make_recommendation(ProgressionType.DELOAD, -0.1)
        )
        assert updated.target_weight == pytest.approx(90.0)

    def test_maintain_unchanged(self) -> None:
        rec = _make_recommendation(ProgressionType.MAINTAIN, 0.0)
        assert apply_progression(self.exercise_set, rec) == self.exercise_set

    def test_increase_sets_appends_copies(self) -> None:
        sets = (self.exercise_set, ExerciseSet(target_weight=90.0, target_reps=8))
        updated = apply_progression_to_sets(sets, _make_recommendation(ProgressionType.INCREASE_SETS, 2))
        assert len(updated) == 4
        assert updated[-1].target_weight == 90.0

    def test_sets_applied_individually(self) -> None:
        sets = (self.exercise_set, self.exercise_set)
        updated = apply_progression_to_sets(sets, _make_recommendation(ProgressionType.INCREASE_WEIGHT, 5))
        assert [s.target_weight for s in updated] == [105.0, 105.0]

    def test_training_volume_prefers_actuals(self) -> None:
        sets = [
            ExerciseSet(target_weight=100.0, target_reps=5),
            ExerciseSet(target_weight=100.0, target_reps=5, actual_weight=95.0, actual_reps=4),
        ]
        assert training_volume(sets) == pytest.approx(880.0)
