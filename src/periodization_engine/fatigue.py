"""Fatigue Scoring Engine: subjective wellness plus objective penalties -> 0-100 score.

References:
    - Hooper & Mackinnon (1995): wellness questionnaire monitoring
    - Halson (2014): objective markers of training fatigue
    - Meeusen et al. (2013): overreaching and overtraining consensus
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Sequence

import numpy as np

from periodization_engine.exceptions import InsufficientDataError
from periodization_engine.ingestion.records import sort_logs, upsert_snapshots
from periodization_engine.math.training_volume import performance_decline_pct
from periodization_engine.math.trends import recent_vs_prior_difference
from periodization_engine.math.wellness import mean_axis, subjective_fatigue_score
from periodization_engine.models.decision_trace import DecisionTrace
from periodization_engine.models.enums import (
    DEFAULT_FATIGUE_CONFIDENCE,
    DEFAULT_FATIGUE_SCORE,
    DEFAULT_RECOVERY_DAYS,
    FATIGUE_CATEGORY_CEILINGS,
    FATIGUE_RECOMMENDATIONS,
    FATIGUE_TREND_DELTA,
    FATIGUE_TREND_WINDOW,
    FATIGUE_WINDOW_DAYS,
    PENALTY_WINDOW_DAYS,
    RECOVERED_SCORE,
    RECOVERY_PEAK_SCORE,
    REST_DAY_AVERAGE_SCORE,
    REST_DAY_CONFIDENCE_NO_DATA,
    REST_DAY_CONFIDENCE_NONE,
    REST_DAY_CONFIDENCE_SEVERE,
    REST_DAY_CONFIDENCE_SLEEP,
    REST_DAY_LATEST_SCORE,
    REST_DAY_POOR_SLEEP,
    RISK_CRITICAL_AVERAGE,
    RISK_CRITICAL_PEAK,
    RISK_HIGH_AVERAGE,
    RISK_MODERATE_AVERAGE,
    RISK_MODERATE_PEAK,
    FatigueCategory,
    FatigueTrend,
    RiskLevel,
)
from periodization_engine.models.fatigue import FatigueAssessment, FatigueTrendReport, RestDayAdvice
from periodization_engine.models.wellness import PerformanceLog, WellnessSnapshot
from periodization_engine.rules.base import RulePolicy
from periodization_engine.rules.fatigue.penalties import (
    FATIGUE_PENALTY_POLICY,
    FatiguePenaltyContext,
)

logger = logging.getLogger(__name__)


def categorize_fatigue(score: float) -> FatigueCategory:
    """Map a 0-100 score to its category (monotonic; boundaries inclusive)."""
    for ceiling, category in FATIGUE_CATEGORY_CEILINGS:
        if score <= ceiling:
            return category
    return FatigueCategory.SEVERE


def _clamp_score(score: float) -> float:
    return round(min(100.0, max(0.0, score)), 1)


def _penalty_context(
    day: date,
    snapshots: Sequence[WellnessSnapshot],
    logs: Sequence[PerformanceLog],
) -> FatiguePenaltyContext:
    """Trailing-week objective signals as of ``day`` (inclusive)."""
    week_start = day - timedelta(days=PENALTY_WINDOW_DAYS)
    week_logs = [log for log in logs if week_start < log.date <= day]
    week_snapshots = [s for s in snapshots if week_start < s.date <= day]
    history = [log for log in logs if log.date <= day]
    completion = (
        float(np.mean([log.completion_rate for log in week_logs])) if week_logs else None
    )
    return FatiguePenaltyContext(
        performance_decline_pct=performance_decline_pct(history, as_of=day),
        average_completion_rate=completion,
        average_sleep_minutes=mean_axis(week_snapshots, "sleep_duration_minutes"),
    )


def _score_day(
    snapshot: WellnessSnapshot,
    snapshots: Sequence[WellnessSnapshot],
    logs: Sequence[PerformanceLog],
    policy: RulePolicy,
) -> tuple[float, float | None, float, DecisionTrace]:
    """Score one check-in. Returns (score, subjective, covered_weight, penalty trace)."""
    subjective, covered = subjective_fatigue_score(snapshot)
    base = DEFAULT_FATIGUE_SCORE if subjective is None else subjective
    trace = policy.evaluate(_penalty_context(snapshot.date, snapshots, logs))
    return _clamp_score(base + trace.total), subjective, covered, trace


def classify_trend(scores: Sequence[float]) -> FatigueTrend:
    """Compare the mean of the last 7 scores with the 7 before them."""
    try:
        difference = recent_vs_prior_difference(scores, FATIGUE_TREND_WINDOW)
    except InsufficientDataError:
        return FatigueTrend.STABLE
    if difference > FATIGUE_TREND_DELTA:
        return FatigueTrend.WORSENING
    if difference < -FATIGUE_TREND_DELTA:
        return FatigueTrend.IMPROVING
    return FatigueTrend.STABLE


def score_fatigue(
    snapshots: Sequence[WellnessSnapshot],
    logs: Sequence[PerformanceLog] = (),
    as_of: date | None = None,
    user_id: str | None = None,
    policy: RulePolicy = FATIGUE_PENALTY_POLICY,
) -> FatigueAssessment:
    """Score accumulated fatigue for the most recent check-in.

    Each check-in in the 30-day window is scored (subjective weighted mean
    x10 plus objective penalties, clamped to 0-100). The latest day's score
    is the overall score; the series of daily scores gives the trend.

    Args:
        snapshots: Wellness check-ins (any order; one per day is kept).
        logs: Performance logs used for the objective penalties.
        as_of: Assessment date. Defaults to the newest snapshot or log date.
        user_id: Used when neither snapshots nor logs carry one.
        policy: Penalty table; defaults to FATIGUE_PENALTY_POLICY.

    Returns:
        A FatigueAssessment. Without any check-in in the window the score is
        a neutral 50 (plus penalties) with low confidence.
    """
    daily = upsert_snapshots(snapshots)
    ordered_logs = sort_logs(logs)
    if as_of is None:
        candidates = [s.date for s in daily] + [log.date for log in ordered_logs]
        as_of = max(candidates) if candidates else date.today()
    window_start = as_of - timedelta(days=FATIGUE_WINDOW_DAYS)
    window = [s for s in daily if window_start < s.date <= as_of]
    window_logs = [log for log in ordered_logs if window_start < log.date <= as_of]
    owner = user_id or next(
        (r.user_id for r in [*window, *window_logs]), ""
    )

    if not window:
        logger.debug("No wellness check-ins for %s in window ending %s; using default", owner, as_of)
        trace = policy.evaluate(_penalty_context(as_of, window, window_logs))
        score = _clamp_score(DEFAULT_FATIGUE_SCORE + trace.total)
        category = categorize_fatigue(score)
        return FatigueAssessment(
            user_id=owner,
            date=as_of,
            overall_score=score,
            category=category,
            recommendation_text=FATIGUE_RECOMMENDATIONS[category],
            trend=FatigueTrend.STABLE,
            confidence=DEFAULT_FATIGUE_CONFIDENCE,
            subjective_score=None,
            penalty_points=trace.total,
            reasoning=("No wellness check-in in the last 30 days; neutral score used.",)
            + tuple(r.explanation for r in trace.fired),
        )

    scored = [_score_day(s, window, window_logs, policy) for s in window]
    score, subjective, covered, trace = scored[-1]
    trend = classify_trend([entry[0] for entry in scored])
    category = categorize_fatigue(score)
    confidence = round(covered * min(1.0, 0.5 + len(window) / (2 * FATIGUE_TREND_WINDOW)), 2)

    reasoning: list[str] = []
    if subjective is None:
        reasoning.append("No subjective axes reported; neutral base score used.")
        confidence = DEFAULT_FATIGUE_CONFIDENCE
    else:
        reasoning.append(f"Subjective wellness score {subjective:.1f}/100.")
    reasoning.extend(r.explanation for r in trace.fired)
    reasoning.append(f"Fatigue trend over {len(scored)} check-ins: {trend.value}.")

    return FatigueAssessment(
        user_id=owner,
        date=window[-1].date,
        overall_score=score,
        category=category,
        recommendation_text=FATIGUE_RECOMMENDATIONS[category],
        trend=trend,
        confidence=confidence,
        subjective_score=None if subjective is None else round(subjective, 1),
        penalty_points=trace.total,
        reasoning=tuple(reasoning),
    )


def score_fatigue_history(
    snapshots: Sequence[WellnessSnapshot],
    logs: Sequence[PerformanceLog] = (),
    start: date | None = None,
    end: date | None = None,
    policy: RulePolicy = FATIGUE_PENALTY_POLICY,
) -> list[FatigueAssessment]:
    """One assessment per check-in day in [start, end], oldest first."""
    daily = upsert_snapshots(snapshots)
    days = [
        s.date
        for s in daily
        if (start is None or s.date >= start) and (end is None or s.date <= end)
    ]
    return [score_fatigue(daily, logs, as_of=day, policy=policy) for day in days]


def _recovery_rate_days(assessments: Sequence[FatigueAssessment]) -> float:
    """Mean days from a peak (>70) to the first later score under 50."""
    durations: list[int] = []
    peak_date: date | None = None
    for assessment in assessments:
        if peak_date is None and assessment.overall_score > RECOVERY_PEAK_SCORE:
            peak_date = assessment.date
        elif peak_date is not None and assessment.overall_score < RECOVERED_SCORE:
            durations.append((assessment.date - peak_date).days)
            peak_date = None
    if not durations:
        return DEFAULT_RECOVERY_DAYS
    return float(np.mean(durations))


def analyze_fatigue_trend(assessments: Sequence[FatigueAssessment]) -> FatigueTrendReport:
    """Summarise a fatigue history into trend, average/peak and overreaching risk.

    Reference:
        Meeusen et al. (2013). Prevention, diagnosis and treatment of the
        overtraining syndrome. Med Sci Sports Exerc 45(1):186-205.
    """
    if not assessments:
        return FatigueTrendReport(
            trend=FatigueTrend.STABLE,
            average_fatigue=DEFAULT_FATIGUE_SCORE,
            peak_fatigue=DEFAULT_FATIGUE_SCORE,
            recovery_rate_days=DEFAULT_RECOVERY_DAYS,
            risk_level=RiskLevel.LOW,
        )
    ordered = sorted(assessments, key=lambda a: a.date)
    scores = [a.overall_score for a in ordered]
    trend = classify_trend(scores)
    average = float(np.mean(scores))
    peak = float(np.max(scores))
    worsening = trend == FatigueTrend.WORSENING

    if peak > RISK_CRITICAL_PEAK or (average > RISK_CRITICAL_AVERAGE and worsening):
        risk = RiskLevel.CRITICAL
    elif average > RISK_HIGH_AVERAGE or worsening:
        risk = RiskLevel.HIGH
    elif average > RISK_MODERATE_AVERAGE or peak > RISK_MODERATE_PEAK:
        risk = RiskLevel.MODERATE
    else:
        risk = RiskLevel.LOW

    return FatigueTrendReport(
        trend=trend,
        average_fatigue=round(average, 1),
        peak_fatigue=round(peak, 1),
        recovery_rate_days=round(_recovery_rate_days(ordered), 1),
        risk_level=risk,
    )


def should_take_rest_day(
    assessments: Sequence[FatigueAssessment],
    snapshots: Sequence[WellnessSnapshot] = (),
) -> RestDayAdvice:
    """Advise whether today should be a rest day.

    Uses the latest assessment and the mean of the last 7; sleep quality comes
    from the latest check-in.
    """
    if not assessments:
        return RestDayAdvice(
            should_rest=False,
            reason="Not enough fatigue data to advise a rest day.",
            confidence=REST_DAY_CONFIDENCE_NO_DATA,
        )
    ordered = sorted(assessments, key=lambda a: a.date)
    latest = ordered[-1]
    average = float(np.mean([a.overall_score for a in ordered[-FATIGUE_TREND_WINDOW:]]))

    if latest.overall_score > REST_DAY_LATEST_SCORE:
        return RestDayAdvice(
            should_rest=True,
            reason=f"Fatigue score {latest.overall_score:.1f} is critically high.",
            confidence=REST_DAY_CONFIDENCE_SEVERE,
        )

    daily = upsert_snapshots(snapshots)
    latest_sleep = daily[-1].sleep_quality if daily else None
    if (
        average > REST_DAY_AVERAGE_SCORE
        and latest_sleep is not None
        and latest_sleep < REST_DAY_POOR_SLEEP
    ):
        return RestDayAdvice(
            should_rest=True,
            reason=(
                f"Sustained fatigue (average {average:.1f}) combined with poor sleep "
                f"quality ({latest_sleep:g}/10)."
            ),
            confidence=REST_DAY_CONFIDENCE_SLEEP,
        )

    return RestDayAdvice(
        should_rest=False,
        reason="Fatigue is within a manageable range.",
        confidence=REST_DAY_CONFIDENCE_NONE,
    )
