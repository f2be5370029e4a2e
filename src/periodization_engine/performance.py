"""Performance Estimator: 1RM, load trend, consistency and readiness per exercise."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from periodization_engine.exceptions import InsufficientDataError
from periodization_engine.ingestion.records import sort_logs
from periodization_engine.math.one_rep_max import estimate_one_rep_max
from periodization_engine.math.trends import consistency, normalized_slope
from periodization_engine.models.decision_trace import DecisionTrace
from periodization_engine.models.enums import (
    BASE_READINESS,
    DECLINING_REPS_SLOPE,
    DEFAULT_CONSISTENCY,
    DEFAULT_READINESS,
    INCOMPLETE_SET_RATE,
    PERFORMANCE_WINDOW,
    RISING_RIR_SLOPE,
    STRENGTH_CURVE_CONFIDENCE_FACTOR,
    TREND_DECLINING_THRESHOLD,
    TREND_IMPROVING_THRESHOLD,
    FatigueIndicator,
    OneRepMaxFormula,
    PerformanceTrend,
)
from periodization_engine.models.performance import PerformanceEstimate, StrengthCurvePoint
from periodization_engine.models.wellness import PerformanceLog
from periodization_engine.rules.base import RulePolicy
from periodization_engine.rules.progression.readiness import (
    READINESS_ADJUSTMENT_POLICY,
    ReadinessContext,
)

logger = logging.getLogger(__name__)


def label_trend(trend: float) -> PerformanceTrend:
    if trend > TREND_IMPROVING_THRESHOLD:
        return PerformanceTrend.IMPROVING
    if trend < TREND_DECLINING_THRESHOLD:
        return PerformanceTrend.DECLINING
    return PerformanceTrend.STABLE


def strength_curve(
    logs: Sequence[PerformanceLog],
    formula: OneRepMaxFormula = OneRepMaxFormula.EPLEY,
) -> tuple[StrengthCurvePoint, ...]:
    """Estimated 1RM per logged session; confidence scales with completion."""
    return tuple(
        StrengthCurvePoint(
            date=log.date,
            estimated_one_rep_max=estimate_one_rep_max(log.weight, log.reps, formula),
            confidence=round(log.completion_rate * STRENGTH_CURVE_CONFIDENCE_FACTOR, 2),
        )
        for log in sort_logs(logs)
    )


def detect_fatigue_indicators(logs: Sequence[PerformanceLog]) -> tuple[FatigueIndicator, ...]:
    """Within-exercise fatigue signals over chronologically ordered logs.

    - increasing_rir: normalized RIR slope above 0.5
    - incomplete_sets: latest completion rate under 0.9
    - declining_reps: normalized reps slope below -0.3
    """
    if not logs:
        return ()
    indicators: list[FatigueIndicator] = []
    rirs = [log.rir for log in logs if log.rir is not None]
    try:
        if normalized_slope(rirs) > RISING_RIR_SLOPE:
            indicators.append(FatigueIndicator.INCREASING_RIR)
    except InsufficientDataError:
        pass
    if logs[-1].completion_rate < INCOMPLETE_SET_RATE:
        indicators.append(FatigueIndicator.INCOMPLETE_SETS)
    try:
        if normalized_slope([log.reps for log in logs]) < DECLINING_REPS_SLOPE:
            indicators.append(FatigueIndicator.DECLINING_REPS)
    except InsufficientDataError:
        pass
    return tuple(indicators)


def compute_readiness(
    logs: Sequence[PerformanceLog],
    indicators: Sequence[FatigueIndicator],
    policy: RulePolicy = READINESS_ADJUSTMENT_POLICY,
) -> tuple[float, DecisionTrace]:
    """0.7 base readiness adjusted by RIR, completion and fatigue indicators, clamped to [0, 1]."""
    rirs = [log.rir for log in logs if log.rir is not None]
    context = ReadinessContext(
        average_rir=float(np.mean(rirs)) if rirs else None,
        average_completion=float(np.mean([log.completion_rate for log in logs])) if logs else None,
        indicator_count=len(indicators),
    )
    trace = policy.evaluate(context)
    readiness = min(1.0, max(0.0, BASE_READINESS + trace.total))
    return round(readiness, 3), trace


def estimate_performance(
    exercise_id: str,
    logs: Sequence[PerformanceLog],
    formula: OneRepMaxFormula = OneRepMaxFormula.EPLEY,
    readiness_policy: RulePolicy = READINESS_ADJUSTMENT_POLICY,
) -> PerformanceEstimate:
    """Estimate strength and readiness for one exercise.

    The most recent five logs drive trend, consistency, fatigue indicators and
    readiness. The 1RM comes from the latest log using a single formula.

    Args:
        exercise_id: Exercise to estimate; logs for other exercises are ignored.
        logs: Performance logs, any order.
        formula: 1RM formula, never mixed within one estimate.
        readiness_policy: Readiness adjustment table.

    Returns:
        A PerformanceEstimate. With fewer than two logs, trend is 0 and
        consistency/readiness are 0.5 with label ``insufficient_data``.
    """
    history = sort_logs(log for log in logs if log.exercise_id == exercise_id)
    curve = strength_curve(history, formula)
    latest = history[-1] if history else None
    one_rep_max = curve[-1].estimated_one_rep_max if curve else 0.0

    if len(history) < 2:
        logger.debug("Insufficient history for %s (%d logs)", exercise_id, len(history))
        return PerformanceEstimate(
            exercise_id=exercise_id,
            one_rep_max=one_rep_max,
            trend=0.0,
            consistency=DEFAULT_CONSISTENCY,
            readiness=DEFAULT_READINESS,
            formula=formula,
            trend_label=PerformanceTrend.INSUFFICIENT_DATA,
            strength_curve=curve,
            sample_size=len(history),
            average_rir=latest.rir if latest else None,
            average_completion=latest.completion_rate if latest else None,
            latest_weight=latest.weight if latest else None,
            latest_reps=latest.reps if latest else None,
        )

    recent = history[-PERFORMANCE_WINDOW:]
    weights = [log.weight for log in recent]
    trend = round(normalized_slope(weights), 4)
    indicators = detect_fatigue_indicators(recent)
    readiness, _ = compute_readiness(recent, indicators, readiness_policy)
    rirs = [log.rir for log in recent if log.rir is not None]

    return PerformanceEstimate(
        exercise_id=exercise_id,
        one_rep_max=one_rep_max,
        trend=trend,
        consistency=round(consistency(weights), 4),
        readiness=readiness,
        formula=formula,
        trend_label=label_trend(trend),
        fatigue_indicators=indicators,
        strength_curve=curve,
        sample_size=len(history),
        average_rir=float(np.mean(rirs)) if rirs else None,
        average_completion=float(np.mean([log.completion_rate for log in recent])),
        latest_weight=latest.weight,
        latest_reps=latest.reps,
    )
