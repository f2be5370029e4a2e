"""Plain-dict serialization for engine models.

Dates and datetimes are ISO-8601 strings, enums are written by value
(decision-trace rule status by lowercase name), tuples become lists. Only
the persisted models (plans, weekly progress, deload events, fatigue
assessments) have readers; results are write-only.

All functions are pure (no I/O).
"""

from __future__ import annotations

import dataclasses
import json
from datetime import date, datetime
from enum import Enum, IntEnum
from typing import Any, Mapping

from periodization_engine.models.deload import DeloadEvent
from periodization_engine.models.enums import (
    DeloadType,
    DeloadUrgency,
    FatigueCategory,
    FatigueTrend,
    PhaseType,
    TransitionTrigger,
)
from periodization_engine.models.fatigue import FatigueAssessment
from periodization_engine.models.plan import (
    AdaptiveSettings,
    PeriodizationPhase,
    PeriodizationPlan,
    PhaseRecord,
    WeeklyProgress,
)


def to_dict(obj: Any) -> Any:
    """Convert a model (or any nesting of models, tuples and dicts) to JSON-ready data."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_dict(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, IntEnum):
        return obj.name.lower()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Mapping):
        return {str(to_dict(k)): to_dict(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_dict(v) for v in obj]
    return obj


def to_json_string(obj: Any, indent: int | None = 2) -> str:
    return json.dumps(to_dict(obj), indent=indent)


def _datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _pair(values: Any) -> tuple:
    low, high = values
    return (low, high)


def phase_from_dict(data: Mapping[str, Any]) -> PeriodizationPhase:
    return PeriodizationPhase(
        id=data["id"],
        type=PhaseType(data["type"]),
        duration_weeks=int(data["duration_weeks"]),
        volume_multiplier=float(data["volume_multiplier"]),
        intensity_range=_pair(data["intensity_range"]),
        sets_range=_pair(data["sets_range"]),
        reps_range=_pair(data["reps_range"]),
        rest_range_seconds=_pair(data["rest_range_seconds"]),
        name=data.get("name", ""),
    )


def _record_from_dict(data: Mapping[str, Any]) -> PhaseRecord:
    trigger = data.get("trigger")
    return PhaseRecord(
        phase_index=int(data["phase_index"]),
        phase_id=data["phase_id"],
        phase_type=PhaseType(data["phase_type"]),
        started_at=datetime.fromisoformat(data["started_at"]),
        ended_at=_datetime(data.get("ended_at")),
        trigger=TransitionTrigger(trigger) if trigger else None,
        transition_id=data.get("transition_id"),
    )


def plan_from_dict(data: Mapping[str, Any]) -> PeriodizationPlan:
    """Rebuild a PeriodizationPlan written by to_dict."""
    settings = data.get("adaptive_settings") or {}
    return PeriodizationPlan(
        id=data["id"],
        user_id=data["user_id"],
        total_duration_weeks=int(data["total_duration_weeks"]),
        current_phase_index=int(data["current_phase_index"]),
        phases=tuple(phase_from_dict(p) for p in data["phases"]),
        created_at=datetime.fromisoformat(data["created_at"]),
        last_adjusted_at=datetime.fromisoformat(data["last_adjusted_at"]),
        adaptive_settings=AdaptiveSettings(**settings),
        phase_history=tuple(_record_from_dict(r) for r in data.get("phase_history", ())),
        completed_at=_datetime(data.get("completed_at")),
    )


def progress_from_dict(data: Mapping[str, Any]) -> WeeklyProgress:
    return WeeklyProgress(
        phase_id=data["phase_id"],
        week=int(data["week"]),
        adherence_rate=float(data["adherence_rate"]),
        performance_gain=float(data["performance_gain"]),
        volume_completed=float(data.get("volume_completed", 0.0)),
        fatigue_level=data.get("fatigue_level"),
    )


def deload_event_from_dict(data: Mapping[str, Any]) -> DeloadEvent:
    urgency = data.get("urgency")
    return DeloadEvent(
        id=data["id"],
        plan_id=data["plan_id"],
        date=date.fromisoformat(data["date"]),
        type=DeloadType(data["type"]),
        duration_days=int(data["duration_days"]),
        reason_codes=tuple(data.get("reason_codes", ())),
        fatigue_score_at_trigger=float(data["fatigue_score_at_trigger"]),
        urgency=DeloadUrgency(urgency) if urgency else None,
    )


def assessment_from_dict(data: Mapping[str, Any]) -> FatigueAssessment:
    return FatigueAssessment(
        user_id=data["user_id"],
        date=date.fromisoformat(data["date"]),
        overall_score=float(data["overall_score"]),
        category=FatigueCategory(data["category"]),
        recommendation_text=data.get("recommendation_text", ""),
        trend=FatigueTrend(data.get("trend", FatigueTrend.STABLE.value)),
        confidence=float(data.get("confidence", 1.0)),
        subjective_score=data.get("subjective_score"),
        penalty_points=float(data.get("penalty_points", 0.0)),
        reasoning=tuple(data.get("reasoning", ())),
    )
