"""Deload Decision Engine: whether, how urgently, what kind and how long to deload.

References:
    - Bell et al. (2023) Sports Med Open 9:48: deloading practices
    - Pritchard et al. (2015) Strength Cond J 37(1):72-83: tapering and
      reduced-load periods in strength training
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Sequence

import numpy as np

from periodization_engine.ingestion.records import sort_logs, upsert_snapshots
from periodization_engine.math.rounding import round_half_up
from periodization_engine.math.training_volume import muscle_group_fatigue, performance_decline_pct
from periodization_engine.math.wellness import axis_percent
from periodization_engine.models.decision_trace import DecisionTrace
from periodization_engine.models.deload import DeloadEvent, DeloadMetrics, DeloadRecommendation
from periodization_engine.models.enums import (
    BASE_IMPROVEMENT_PCT,
    DEFAULT_FATIGUE_SCORE,
    DEFAULT_READINESS_PCT,
    DEFAULT_RPE,
    DEFAULT_SLEEP_QUALITY_PCT,
    DEFAULT_SORENESS_PCT,
    DEFAULT_STRESS_PCT,
    DELOAD_BASE_DAYS,
    DELOAD_FATIGUE_EXTENSION,
    DELOAD_NECESSITY_POINTS,
    DELOAD_REDUCTIONS,
    DELOAD_SUGGESTED_ACTIVITIES,
    DELOAD_URGENCY_MULTIPLIER,
    DELOAD_WINDOW_DAYS,
    FATIGUE_SCORE_SCALE,
    INTENSITY_TOLERANCE_WEIGHTS,
    MUSCLE_GROUP_FATIGUE_THRESHOLD,
    RECOVERY_DAYS_PER_FATIGUE,
    URGENCY_CRITICAL_POINTS,
    URGENCY_HIGH_POINTS,
    URGENCY_MODERATE_POINTS,
    VOLUME_TOLERANCE_WEIGHTS,
    DeloadType,
    DeloadUrgency,
)
from periodization_engine.models.fatigue import FatigueAssessment
from periodization_engine.models.plan import PeriodizationPlan
from periodization_engine.models.wellness import PerformanceLog, WellnessSnapshot
from periodization_engine.rules.base import RulePolicy
from periodization_engine.rules.deload.deload_type import DELOAD_TYPE_POLICY
from periodization_engine.rules.deload.necessity import DELOAD_NECESSITY_POLICY
from periodization_engine.rules.deload.urgency import DELOAD_URGENCY_POLICY

logger = logging.getLogger(__name__)

_POSITIVE_AXES = ("energy_level", "motivation", "mood", "sleep_quality")
_FULL_CONFIDENCE = 0.9
_MIN_CONFIDENCE = 0.3


def _clamp_pct(value: float) -> float:
    return round(min(100.0, max(0.0, value)), 1)


def volume_tolerance(fatigue: float, soreness: float, stress: float) -> float:
    """100 minus weighted fatigue, soreness and stress (all 0-100)."""
    w = VOLUME_TOLERANCE_WEIGHTS
    return _clamp_pct(
        100.0 - fatigue * w["fatigue"] - soreness * w["soreness"] - stress * w["stress"]
    )


def intensity_tolerance(fatigue: float, sleep_quality: float, readiness: float) -> float:
    """100 minus weighted fatigue, sleep quality and readiness (all 0-100)."""
    w = INTENSITY_TOLERANCE_WEIGHTS
    return _clamp_pct(
        100.0
        - fatigue * w["fatigue"]
        - sleep_quality * w["sleep_quality"]
        - readiness * w["readiness"]
    )


def _readiness_pct(
    snapshots: Sequence[WellnessSnapshot], overall_fatigue: float | None
) -> float:
    """Readiness from the positive wellness axes (x10), else the inverse of fatigue."""
    per_day = []
    for snapshot in snapshots:
        present = [getattr(snapshot, a) for a in _POSITIVE_AXES if getattr(snapshot, a) is not None]
        if present:
            per_day.append(float(np.mean(present)))
    if per_day:
        return float(np.mean(per_day)) * FATIGUE_SCORE_SCALE
    if overall_fatigue is not None:
        return 100.0 - overall_fatigue
    return DEFAULT_READINESS_PCT


def weeks_since_last_deload(
    deload_history: Sequence[DeloadEvent],
    plan: PeriodizationPlan | None,
    as_of: date,
) -> int:
    """Whole weeks since the last recorded deload, else since the plan started."""
    past = [event.date for event in deload_history if event.date <= as_of]
    if past:
        reference = max(past)
    elif plan is not None:
        reference = plan.created_at.date()
    else:
        return 0
    return max(0, (as_of - reference).days // 7)


def build_deload_metrics(
    assessments: Sequence[FatigueAssessment],
    snapshots: Sequence[WellnessSnapshot] = (),
    logs: Sequence[PerformanceLog] = (),
    deload_history: Sequence[DeloadEvent] = (),
    plan: PeriodizationPlan | None = None,
    as_of: date | None = None,
) -> DeloadMetrics:
    """Aggregate the 7-day window into the signals the deload policies read.

    Args:
        assessments: Fatigue assessments; only the last 7 days are used.
        snapshots: Wellness check-ins for readiness, soreness, stress, sleep.
        logs: Performance logs; up to four weeks feed the decline, the last
            week feeds RPE and muscle-group fatigue.
        deload_history: Past DeloadEvents of the plan.
        plan: Used for weeks since plan start when no deload happened yet.
        as_of: End of the window; defaults to the newest input date.

    Returns:
        DeloadMetrics with documented defaults for absent signals.
    """
    daily = upsert_snapshots(snapshots)
    ordered_logs = sort_logs(logs)
    if as_of is None:
        candidates = (
            [a.date for a in assessments] + [s.date for s in daily] + [log.date for log in ordered_logs]
        )
        as_of = max(candidates) if candidates else date.today()
    start = as_of - timedelta(days=DELOAD_WINDOW_DAYS)

    recent_assessments = [a for a in assessments if start < a.date <= as_of]
    recent_snapshots = [s for s in daily if start < s.date <= as_of]
    recent_logs = [log for log in ordered_logs if start < log.date <= as_of]

    fatigue = (
        float(np.mean([a.overall_score for a in recent_assessments]))
        if recent_assessments
        else None
    )
    overall = DEFAULT_FATIGUE_SCORE if fatigue is None else fatigue
    readiness = _readiness_pct(recent_snapshots, fatigue)
    soreness = axis_percent(recent_snapshots, "soreness")
    stress = axis_percent(recent_snapshots, "stress_level")
    sleep = axis_percent(recent_snapshots, "sleep_quality")
    soreness = DEFAULT_SORENESS_PCT if soreness is None else soreness
    stress = DEFAULT_STRESS_PCT if stress is None else stress
    sleep = DEFAULT_SLEEP_QUALITY_PCT if sleep is None else sleep
    rpes = [log.rpe for log in recent_logs if log.rpe is not None]

    return DeloadMetrics(
        overall_fatigue=round(overall, 1),
        performance_decline_pct=performance_decline_pct(
            [log for log in ordered_logs if log.date <= as_of], as_of=as_of
        ),
        weeks_since_last_deload=weeks_since_last_deload(deload_history, plan, as_of),
        readiness=round(readiness, 1),
        soreness=round(soreness, 1),
        stress=round(stress, 1),
        sleep_quality=round(sleep, 1),
        average_rpe=round(float(np.mean(rpes)), 2) if rpes else DEFAULT_RPE,
        volume_tolerance=volume_tolerance(overall, soreness, stress),
        intensity_tolerance=intensity_tolerance(overall, sleep, readiness),
        muscle_group_fatigue=muscle_group_fatigue(recent_logs),
    )


def urgency_level(points: float) -> DeloadUrgency:
    if points >= URGENCY_CRITICAL_POINTS:
        return DeloadUrgency.CRITICAL
    if points >= URGENCY_HIGH_POINTS:
        return DeloadUrgency.HIGH
    if points >= URGENCY_MODERATE_POINTS:
        return DeloadUrgency.MODERATE
    return DeloadUrgency.LOW


def deload_duration_days(
    deload_type: DeloadType, urgency: DeloadUrgency, overall_fatigue: float
) -> int:
    """base(type) x urgency multiplier + fatigue extension, rounded half up."""
    extension = 0
    for threshold, days in DELOAD_FATIGUE_EXTENSION:
        if overall_fatigue > threshold:
            extension = days
            break
    return round_half_up(
        DELOAD_BASE_DAYS[deload_type] * DELOAD_URGENCY_MULTIPLIER[urgency] + extension
    )


def recommend_deload(
    metrics: DeloadMetrics,
    necessity_policy: RulePolicy = DELOAD_NECESSITY_POLICY,
    urgency_policy: RulePolicy = DELOAD_URGENCY_POLICY,
    type_policy: RulePolicy = DELOAD_TYPE_POLICY,
    confidence: float = _FULL_CONFIDENCE,
) -> DeloadRecommendation:
    """Apply the necessity, urgency and type policies to aggregated metrics.

    Recommended iff necessity points reach 4. The result is an
    order-independent function of the five necessity criteria.
    """
    necessity = necessity_policy.evaluate(metrics)
    urgency_trace = urgency_policy.evaluate(metrics)
    type_rule, type_trace = type_policy.first_match(metrics)
    deload_type = type_rule.outcome if type_rule is not None else DeloadType.VOLUME
    urgency = urgency_level(urgency_trace.total)
    duration = deload_duration_days(deload_type, urgency, metrics.overall_fatigue)
    volume_cut, intensity_cut, frequency_cut = DELOAD_REDUCTIONS[deload_type]
    targets = tuple(
        sorted(
            group
            for group, score in metrics.muscle_group_fatigue.items()
            if score > MUSCLE_GROUP_FATIGUE_THRESHOLD
        )
    )

    reasoning = [r.explanation for r in necessity.fired]
    reasoning.extend(r.explanation for r in type_trace.fired)
    if targets:
        reasoning.append(f"Most fatigued muscle groups: {', '.join(targets)}.")

    is_recommended = necessity.total >= DELOAD_NECESSITY_POINTS
    combined = DecisionTrace(
        policy_id="deload",
        rule_results=necessity.rule_results + urgency_trace.rule_results + type_trace.rule_results,
        total=necessity.total,
        notes=(
            f"necessity={necessity.total:g} urgency={urgency_trace.total:g} "
            f"type={deload_type.value}"
        ),
    )
    if is_recommended:
        logger.debug(
            "Deload recommended: %s/%s for %d days (%s)",
            deload_type.value,
            urgency.value,
            duration,
            ", ".join(necessity.fired_rule_ids),
        )

    return DeloadRecommendation(
        is_recommended=is_recommended,
        type=deload_type,
        urgency=urgency,
        duration_days=duration,
        necessity_points=necessity.total,
        urgency_points=urgency_trace.total,
        reason_codes=necessity.fired_rule_ids,
        volume_reduction_pct=volume_cut,
        intensity_reduction_pct=intensity_cut,
        frequency_reduction_pct=frequency_cut,
        target_muscle_groups=targets,
        reasoning=tuple(reasoning),
        suggested_activities=DELOAD_SUGGESTED_ACTIVITIES[deload_type],
        expected_recovery_days=duration + round_half_up(
            metrics.overall_fatigue / RECOVERY_DAYS_PER_FATIGUE
        ),
        expected_improvement_pct=float(
            round_half_up(BASE_IMPROVEMENT_PCT + metrics.performance_decline_pct / 2)
        ),
        confidence=confidence,
        metrics=metrics,
        trace=combined,
    )


def evaluate_deload(
    assessments: Sequence[FatigueAssessment],
    plan: PeriodizationPlan | None = None,
    snapshots: Sequence[WellnessSnapshot] = (),
    logs: Sequence[PerformanceLog] = (),
    deload_history: Sequence[DeloadEvent] = (),
    as_of: date | None = None,
    necessity_policy: RulePolicy = DELOAD_NECESSITY_POLICY,
    urgency_policy: RulePolicy = DELOAD_URGENCY_POLICY,
    type_policy: RulePolicy = DELOAD_TYPE_POLICY,
) -> DeloadRecommendation | None:
    """Decide whether the trainee needs a deload.

    Args:
        assessments: Fatigue history (the last 7 days are used).
        plan: The trainee's plan, for weeks since plan start.
        snapshots: Wellness check-ins for readiness/soreness/stress/sleep.
        logs: Performance logs for decline, RPE and muscle-group fatigue.
        deload_history: Past deload events of the plan.
        as_of: Evaluation date.

    Returns:
        A DeloadRecommendation (``is_recommended`` may be False), or None when
        there is no fatigue, wellness or performance data at all.
    """
    if not assessments and not snapshots and not logs:
        logger.debug("No data to evaluate a deload")
        return None
    metrics = build_deload_metrics(assessments, snapshots, logs, deload_history, plan, as_of)
    sources = sum(1 for signal in (assessments, snapshots, logs) if signal)
    confidence = round(max(_MIN_CONFIDENCE, _FULL_CONFIDENCE * sources / 3), 2)
    return recommend_deload(
        metrics,
        necessity_policy=necessity_policy,
        urgency_policy=urgency_policy,
        type_policy=type_policy,
        confidence=confidence,
    )
