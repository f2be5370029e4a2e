"""Normalise stored wellness and workout records into engine models.

Records arrive as plain dicts from the persistence collaborator, in either
snake_case or camelCase. Blank values are treated as absent. Values outside
their valid range raise InvalidInputError rather than being clipped.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Sequence

import numpy as np
import pandas as pd

from periodization_engine.exceptions import InvalidInputError
from periodization_engine.models.enums import RPE_SCALE_MAX
from periodization_engine.models.wellness import PerformanceLog, WellnessSnapshot

logger = logging.getLogger(__name__)

_SNAPSHOT_FIELDS: dict[str, tuple[str, ...]] = {
    "perceived_fatigue": ("perceived_fatigue", "perceivedFatigue"),
    "sleep_quality": ("sleep_quality", "sleepQuality"),
    "mood": ("mood",),
    "motivation": ("motivation",),
    "energy_level": ("energy_level", "energyLevel"),
    "soreness": ("soreness", "muscle_soreness", "muscleSoreness", "muscles_soreness", "musclesSoreness"),
    "stress_level": ("stress_level", "stressLevel"),
    "resting_heart_rate": ("resting_heart_rate", "restingHeartRate"),
    "hrv": ("hrv", "heart_rate_variability", "heartRateVariability"),
    "sleep_duration_minutes": ("sleep_duration_minutes", "sleepDurationMinutes"),
}
# Legacy records store sleep duration in hours
_SLEEP_HOURS_KEYS = ("sleep_duration", "sleepDuration", "sleep_hours", "sleepHours")

_USER_KEYS = ("user_id", "userId")
_DATE_KEYS = ("date", "performed_at", "performedAt", "recorded_at", "recordedAt")
_EXERCISE_KEYS = ("exercise_id", "exerciseId")
_WEIGHT_KEYS = ("weight", "actual_weight", "actualWeight", "target_weight", "targetWeight")
_REPS_KEYS = ("reps", "actual_reps", "actualReps", "target_reps", "targetReps")
_SETS_KEYS = ("sets_count", "setsCount", "sets")
_RIR_KEYS = ("rir", "actual_rir", "actualRir")
_RPE_KEYS = ("rpe", "actual_rpe", "actualRpe")
_COMPLETION_KEYS = ("completion_rate", "completionRate")
_MUSCLE_KEYS = ("muscle_groups", "muscleGroups")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return isinstance(value, float) and math.isnan(value)


def _first(record: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = record.get(key)
        if not _is_blank(value):
            return value
    return None


def _to_float(value: Any, field: str) -> float | None:
    if _is_blank(value):
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{field}={value!r} is not a number", field=field) from exc


def to_date(value: Any, field: str = "date") -> date:
    """Parse an ISO string, datetime or date into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if _is_blank(value):
        raise InvalidInputError(f"{field} is required", field=field)
    try:
        return pd.Timestamp(value).date()
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{field}={value!r} is not a date", field=field) from exc


def _required_str(record: Mapping[str, Any], keys: Sequence[str], field: str) -> str:
    value = _first(record, keys)
    if value is None:
        raise InvalidInputError(f"{field} is required", field=field)
    return str(value)


def _muscle_groups(value: Any) -> tuple[str, ...]:
    if _is_blank(value):
        return ()
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    return tuple(str(v) for v in value)


def snapshot_from_record(record: Mapping[str, Any]) -> WellnessSnapshot:
    """Build a WellnessSnapshot from a stored check-in record.

    Args:
        record: Dict with snake_case or camelCase keys.

    Returns:
        The validated snapshot.

    Raises:
        InvalidInputError: missing user/date, unparsable numbers, or a
            subjective axis outside 1-10.
    """
    values: dict[str, float | None] = {
        name: _to_float(_first(record, keys), name) for name, keys in _SNAPSHOT_FIELDS.items()
    }
    if values["sleep_duration_minutes"] is None:
        hours = _to_float(_first(record, _SLEEP_HOURS_KEYS), "sleep_duration")
        if hours is not None:
            values["sleep_duration_minutes"] = hours * 60.0
    return WellnessSnapshot(
        user_id=_required_str(record, _USER_KEYS, "user_id"),
        date=to_date(_first(record, _DATE_KEYS)),
        **values,
    )


def _completion_rate(value: Any) -> float:
    rate = _to_float(value, "completion_rate")
    if rate is None:
        return 1.0
    # Percent-style records (0-100)
    if 1.0 < rate <= 100.0:
        rate = rate / 100.0
    return rate


def log_from_record(record: Mapping[str, Any]) -> PerformanceLog:
    """Build a PerformanceLog from a stored exercise-performance record.

    RPE is derived as ``10 - RIR`` when only RIR was logged.
    """
    sets_value = _first(record, _SETS_KEYS)
    if isinstance(sets_value, (list, tuple)):
        sets_value = len(sets_value)
    sets_count = _to_float(sets_value, "sets_count")
    rir = _to_float(_first(record, _RIR_KEYS), "rir")
    rpe = _to_float(_first(record, _RPE_KEYS), "rpe")
    if rpe is None and rir is not None:
        rpe = max(0.0, RPE_SCALE_MAX - rir)
    weight = _to_float(_first(record, _WEIGHT_KEYS), "weight")
    reps = _to_float(_first(record, _REPS_KEYS), "reps")
    if weight is None or reps is None:
        raise InvalidInputError("weight and reps are required", field="weight" if weight is None else "reps")
    return PerformanceLog(
        user_id=_required_str(record, _USER_KEYS, "user_id"),
        exercise_id=_required_str(record, _EXERCISE_KEYS, "exercise_id"),
        date=to_date(_first(record, _DATE_KEYS)),
        weight=weight,
        reps=reps,
        sets_count=int(sets_count) if sets_count is not None else 1,
        rir=rir,
        rpe=rpe,
        completion_rate=_completion_rate(_first(record, _COMPLETION_KEYS)),
        muscle_groups=_muscle_groups(_first(record, _MUSCLE_KEYS)),
    )


def upsert_snapshots(snapshots: Iterable[WellnessSnapshot]) -> list[WellnessSnapshot]:
    """Keep one snapshot per user per day (the later one wins), sorted by date."""
    by_key: dict[tuple[str, date], WellnessSnapshot] = {}
    for snapshot in snapshots:
        key = (snapshot.user_id, snapshot.date)
        if key in by_key:
            logger.debug("Replacing wellness snapshot for %s on %s", *key)
        by_key[key] = snapshot
    return sorted(by_key.values(), key=lambda s: (s.date, s.user_id))


def sort_logs(logs: Iterable[PerformanceLog]) -> list[PerformanceLog]:
    """Order logs chronologically; logs on the same date keep their input order."""
    return sorted(logs, key=lambda log: log.date)


def sessions_to_logs(session: Mapping[str, Any]) -> list[PerformanceLog]:
    """Flatten a workout session with per-set data into one log per exercise.

    Expected shape::

        {"user_id": ..., "date": ..., "exercises": [
            {"exercise_id": ..., "muscle_groups": [...], "sets": [
                {"target_reps": 8, "actual_reps": 8, "actual_weight": 100, "actual_rir": 2},
            ]},
        ]}

    Weight, reps and RIR are averaged over sets that report them; completion
    rate is completed reps over target reps, capped at 1.
    """
    user_id = _required_str(session, _USER_KEYS, "user_id")
    session_date = to_date(_first(session, _DATE_KEYS))
    logs: list[PerformanceLog] = []
    for exercise in session.get("exercises") or ():
        sets = list(exercise.get("sets") or ())
        if not sets:
            continue
        weights = [_to_float(_first(s, _WEIGHT_KEYS), "weight") for s in sets]
        reps = [_to_float(_first(s, ("actual_reps", "actualReps", "reps")), "reps") for s in sets]
        targets = [_to_float(_first(s, ("target_reps", "targetReps")), "target_reps") for s in sets]
        rirs = [_to_float(_first(s, _RIR_KEYS), "rir") for s in sets]

        done = [r for r in reps if r is not None]
        present_weights = [w for w in weights if w is not None]
        if not done or not present_weights:
            logger.debug("Skipping unperformed exercise in session %s", session_date)
            continue

        target_total = sum(t for t in targets if t is not None)
        completed_total = sum(done)
        completion = min(1.0, completed_total / target_total) if target_total > 0 else 1.0
        present_rirs = [r for r in rirs if r is not None]
        rir = float(np.mean(present_rirs)) if present_rirs else None

        logs.append(
            PerformanceLog(
                user_id=user_id,
                exercise_id=_required_str(exercise, _EXERCISE_KEYS, "exercise_id"),
                date=session_date,
                weight=float(np.mean(present_weights)),
                reps=float(np.mean(done)),
                sets_count=len(sets),
                rir=rir,
                rpe=None if rir is None else max(0.0, RPE_SCALE_MAX - rir),
                completion_rate=completion,
                muscle_groups=_muscle_groups(_first(exercise, _MUSCLE_KEYS)),
            )
        )
    return logs
