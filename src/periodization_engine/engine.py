"""PeriodizationEngine, the facade over the five decision components."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Sequence

from periodization_engine.deload import evaluate_deload
from periodization_engine.fatigue import score_fatigue, score_fatigue_history
from periodization_engine.ingestion.records import sort_logs
from periodization_engine.math.rounding import round_half_up
from periodization_engine.models.cycle import CycleResult
from periodization_engine.models.deload import DeloadEvent, DeloadRecommendation
from periodization_engine.models.enums import (
    FATIGUE_WINDOW_DAYS,
    ExperienceLevel,
    OneRepMaxFormula,
)
from periodization_engine.models.fatigue import FatigueAssessment
from periodization_engine.models.performance import PerformanceEstimate
from periodization_engine.models.plan import PeriodizationPhase, PeriodizationPlan, WeeklyProgress
from periodization_engine.models.progression import (
    ExerciseState,
    ProgressionRecommendation,
    ProgressionSettings,
)
from periodization_engine.models.transition import (
    PhaseTransition,
    TransitionEvaluation,
    TransitionOutcome,
)
from periodization_engine.models.wellness import PerformanceLog, WellnessSnapshot
from periodization_engine.performance import estimate_performance
from periodization_engine.progression import recommend_progression
from periodization_engine.registry import PolicyRegistry
from periodization_engine.state_machine import (
    apply_transition,
    evaluate_phase_transition,
    override_phase,
)

logger = logging.getLogger(__name__)


def exercise_states_from_logs(logs: Sequence[PerformanceLog]) -> list[ExerciseState]:
    """Current prescription per exercise, taken from its most recent log."""
    latest: dict[str, PerformanceLog] = {}
    for log in sort_logs(logs):
        latest[log.exercise_id] = log
    return [
        ExerciseState(
            exercise_id=log.exercise_id,
            current_weight=log.weight,
            current_reps=round_half_up(log.reps),
            current_sets=log.sets_count,
            current_rir=log.rir,
        )
        for log in sorted(latest.values(), key=lambda log: log.exercise_id)
    ]


class PeriodizationEngine:
    """Runs every decision with the policy tables held by a PolicyRegistry.

    All methods are pure: inputs are already-fetched windows, outputs are new
    immutable values. Persisting them is the caller's job.

    Usage::

        engine = PeriodizationEngine()
        result = engine.plan_cycle(plan, snapshots, logs, progress, as_of=today)
        if result.transition.should_transition:
            outcome = engine.apply_transition(plan, result.transition.transition, now)
    """

    def __init__(
        self,
        registry: PolicyRegistry | None = None,
        formula: OneRepMaxFormula = OneRepMaxFormula.EPLEY,
        progression_settings: ProgressionSettings | None = None,
    ) -> None:
        self.registry = registry or PolicyRegistry()
        self.formula = formula
        self.progression_settings = progression_settings or ProgressionSettings()

        # Auto-discover policies if using the default registry
        if registry is None:
            self.registry.discover_policies()

    # -- individual operations ------------------------------------------------

    def score_fatigue(
        self,
        snapshots: Sequence[WellnessSnapshot],
        logs: Sequence[PerformanceLog] = (),
        as_of: date | None = None,
        user_id: str | None = None,
    ) -> FatigueAssessment:
        return score_fatigue(
            snapshots, logs, as_of=as_of, user_id=user_id,
            policy=self.registry.require("fatigue_penalties"),
        )

    def score_fatigue_history(
        self,
        snapshots: Sequence[WellnessSnapshot],
        logs: Sequence[PerformanceLog] = (),
        start: date | None = None,
        end: date | None = None,
    ) -> list[FatigueAssessment]:
        return score_fatigue_history(
            snapshots, logs, start=start, end=end,
            policy=self.registry.require("fatigue_penalties"),
        )

    def estimate_performance(
        self, exercise_id: str, logs: Sequence[PerformanceLog]
    ) -> PerformanceEstimate:
        return estimate_performance(
            exercise_id, logs, formula=self.formula,
            readiness_policy=self.registry.require("readiness_adjustments"),
        )

    def evaluate_deload(
        self,
        assessments: Sequence[FatigueAssessment],
        plan: PeriodizationPlan | None = None,
        snapshots: Sequence[WellnessSnapshot] = (),
        logs: Sequence[PerformanceLog] = (),
        deload_history: Sequence[DeloadEvent] = (),
        as_of: date | None = None,
    ) -> DeloadRecommendation | None:
        return evaluate_deload(
            assessments,
            plan=plan,
            snapshots=snapshots,
            logs=logs,
            deload_history=deload_history,
            as_of=as_of,
            necessity_policy=self.registry.require("deload_necessity"),
            urgency_policy=self.registry.require("deload_urgency"),
            type_policy=self.registry.require("deload_type"),
        )

    def evaluate_phase_transition(
        self,
        plan: PeriodizationPlan,
        progress: Sequence[WeeklyProgress],
        fatigue_history: Sequence[FatigueAssessment] = (),
        deload: DeloadRecommendation | None = None,
        as_of: date | None = None,
    ) -> TransitionEvaluation:
        return evaluate_phase_transition(
            plan, progress, fatigue_history, deload=deload, as_of=as_of,
            policy=self.registry.require("phase_transition"),
        )

    def apply_transition(
        self, plan: PeriodizationPlan, transition: PhaseTransition, now: datetime
    ) -> TransitionOutcome:
        return apply_transition(plan, transition, now)

    def override_phase(
        self, plan: PeriodizationPlan, phase_index: int, now: datetime
    ) -> PeriodizationPlan:
        return override_phase(plan, phase_index, now)

    def recommend_progression(
        self,
        exercise: ExerciseState,
        estimate: PerformanceEstimate,
        fatigue: FatigueAssessment | None = None,
        phase: PeriodizationPhase | None = None,
        experience: ExperienceLevel = ExperienceLevel.INTERMEDIATE,
    ) -> ProgressionRecommendation:
        return recommend_progression(
            exercise, estimate, fatigue=fatigue, phase=phase, experience=experience,
            settings=self.progression_settings,
            policy=self.registry.require("progression_decision"),
        )

    # -- composite --------------------------------------------------------------

    def recommend_exercises(
        self,
        logs: Sequence[PerformanceLog],
        fatigue: FatigueAssessment | None = None,
        phase: PeriodizationPhase | None = None,
        experience: ExperienceLevel = ExperienceLevel.INTERMEDIATE,
        exercises: Sequence[ExerciseState] | None = None,
    ) -> tuple[dict[str, PerformanceEstimate], tuple[ProgressionRecommendation, ...]]:
        """Estimate and recommend for every exercise (default: every logged one)."""
        if exercises is None:
            exercises = exercise_states_from_logs(logs)
        estimates: dict[str, PerformanceEstimate] = {}
        recommendations = []
        for exercise in exercises:
            estimate = self.estimate_performance(exercise.exercise_id, logs)
            estimates[exercise.exercise_id] = estimate
            recommendations.append(
                self.recommend_progression(exercise, estimate, fatigue, phase, experience)
            )
        return estimates, tuple(recommendations)

    def plan_cycle(
        self,
        plan: PeriodizationPlan,
        snapshots: Sequence[WellnessSnapshot],
        logs: Sequence[PerformanceLog],
        progress: Sequence[WeeklyProgress],
        deload_history: Sequence[DeloadEvent] = (),
        as_of: date | None = None,
        experience: ExperienceLevel = ExperienceLevel.INTERMEDIATE,
        exercises: Sequence[ExerciseState] | None = None,
    ) -> CycleResult:
        """Run the full data flow for one plan without persisting anything.

        fatigue -> performance -> deload -> phase transition -> progression.

        Args:
            plan: The plan being evaluated.
            snapshots: The user's check-ins (at least the last 30 days).
            logs: The user's performance logs (same window).
            progress: Weekly progress entries for the plan.
            deload_history: Previously recorded deload events for the plan.
            as_of: Evaluation date; defaults to today.
            experience: Trainee experience level for load increments.
            exercises: Exercises to recommend for; defaults to every logged one.

        Returns:
            A CycleResult. Progression targets the plan's current phase.
        """
        as_of = as_of or date.today()
        start = as_of - timedelta(days=FATIGUE_WINDOW_DAYS)
        fatigue = self.score_fatigue(snapshots, logs, as_of=as_of, user_id=plan.user_id)
        history = self.score_fatigue_history(snapshots, logs, start=start, end=as_of) or [fatigue]
        deload = self.evaluate_deload(
            history,
            plan=plan,
            snapshots=snapshots,
            logs=logs,
            deload_history=deload_history,
            as_of=as_of,
        )
        evaluation = self.evaluate_phase_transition(
            plan, progress, history, deload=deload, as_of=as_of
        )
        phase = None if plan.is_complete else plan.current_phase
        estimates, recommendations = self.recommend_exercises(
            logs, fatigue, phase, experience, exercises
        )
        logger.debug(
            "Cycle for plan %s on %s: fatigue %.1f, deload=%s, transition=%s",
            plan.id,
            as_of,
            fatigue.overall_score,
            deload.is_recommended if deload else None,
            evaluation.transition.trigger.value if evaluation.transition else None,
        )
        return CycleResult(
            plan_id=plan.id,
            as_of=as_of,
            fatigue=fatigue,
            fatigue_history=tuple(history),
            deload=deload,
            transition=evaluation,
            estimates=estimates,
            recommendations=recommendations,
        )
