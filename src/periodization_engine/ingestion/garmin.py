"""Pure functions mapping a Garmin-style daily payload to snapshot objective fields.

No I/O: the caller fetches the raw dicts (``hrv``, ``sleep``, ``stats``) and
this module only extracts values. Each extractor tolerates missing or
malformed sections and returns None for them.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Mapping, Optional

from periodization_engine.models.wellness import WellnessSnapshot

OBJECTIVE_FIELDS = ("resting_heart_rate", "hrv", "sleep_duration_minutes")


def objective_fields_from_garmin(raw: Mapping[str, Any]) -> dict[str, Optional[float]]:
    """Map a daily-metrics payload to WellnessSnapshot objective fields.

    Returns a dict with keys resting_heart_rate, hrv, sleep_duration_minutes.
    Values are None when the data is unavailable.
    """
    return {
        "resting_heart_rate": _extract_resting_hr(raw.get("stats")),
        "hrv": _extract_hrv(raw.get("hrv")),
        "sleep_duration_minutes": _extract_sleep_minutes(raw.get("sleep")),
    }


def merge_objective_fields(
    snapshot: WellnessSnapshot, fields: Mapping[str, Optional[float]]
) -> WellnessSnapshot:
    """Fill absent objective fields of a snapshot; values already present win."""
    updates = {
        name: fields[name]
        for name in OBJECTIVE_FIELDS
        if fields.get(name) is not None and getattr(snapshot, name) is None
    }
    if not updates:
        return snapshot
    return dataclasses.replace(snapshot, **updates)


# ---------------------------------------------------------------------------
# Internal extractors
# ---------------------------------------------------------------------------


def _as_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _extract_hrv(data: Any) -> Optional[float]:
    """Last-night RMSSD average from hrvSummary."""
    if not isinstance(data, dict):
        return None
    summary = data.get("hrvSummary")
    if not isinstance(summary, dict):
        return None
    return _as_float(summary.get("lastNightAvg"))


def _extract_sleep_minutes(data: Any) -> Optional[float]:
    """Total sleep time from dailySleepDTO.sleepTimeSeconds, in minutes."""
    if not isinstance(data, dict):
        return None
    dto = data.get("dailySleepDTO")
    if not isinstance(dto, dict):
        return None
    seconds = _as_float(dto.get("sleepTimeSeconds"))
    return None if seconds is None else seconds / 60.0


def _extract_resting_hr(data: Any) -> Optional[float]:
    if not isinstance(data, dict):
        return None
    return _as_float(data.get("restingHeartRate"))
