"""Training volume aggregation: weekly tonnage, performance decline, muscle-group load.

References:
    - Schoenfeld et al. (2017) J Sports Sci 35(11):1073-1082: weekly set volume
    - Haff (2010): volume-load (sets x reps x load) as a workload measure
"""

from __future__ import annotations

from datetime import date
from typing import Sequence

import numpy as np
import pandas as pd

from periodization_engine.models.enums import (
    DECLINE_LOOKBACK_WEEKS,
    MUSCLE_FREQUENCY_POINTS,
    MUSCLE_FREQUENCY_SATURATION,
    MUSCLE_RPE_POINTS,
    MUSCLE_VOLUME_POINTS,
    MUSCLE_VOLUME_SATURATION,
    RPE_SCALE_MAX,
)
from periodization_engine.models.wellness import PerformanceLog


def weekly_volume(
    logs: Sequence[PerformanceLog],
    as_of: date | None = None,
    lookback_weeks: int = DECLINE_LOOKBACK_WEEKS,
) -> pd.Series:
    """Sum volume into 7-day buckets counted back from ``as_of``.

    Bucket 0 holds the 7 days ending on ``as_of`` (inclusive), bucket 1 the
    7 days before, and so on. Logs after ``as_of`` or older than
    ``lookback_weeks`` buckets are ignored.

    Returns:
        Series of volume indexed by weeks-ago ``0..lookback_weeks-1``; weeks
        without logs hold 0.0. Empty if no logs fall in range.
    """
    if not logs:
        return pd.Series(dtype=np.float64)
    anchor = as_of or max(log.date for log in logs)
    frame = pd.DataFrame(
        {
            "weeks_ago": [(anchor - log.date).days // 7 for log in logs],
            "volume": [log.volume for log in logs],
        }
    )
    in_range = frame[(frame["weeks_ago"] >= 0) & (frame["weeks_ago"] < lookback_weeks)]
    if in_range.empty:
        return pd.Series(dtype=np.float64)
    weekly = in_range.groupby("weeks_ago")["volume"].sum()
    return weekly.reindex(range(lookback_weeks), fill_value=0.0).astype(np.float64)


def performance_decline_pct(
    logs: Sequence[PerformanceLog],
    as_of: date | None = None,
    lookback_weeks: int = DECLINE_LOOKBACK_WEEKS,
) -> float:
    """Drop of the trailing week's volume against the mean of the prior weeks.

    The trailing week is bucket 0. The prior weeks run from bucket 1 back to
    the oldest bucket with volume; empty weeks in between count as zero,
    weeks before the first log do not count.

    Args:
        logs: Performance logs across all exercises.
        as_of: End of the trailing week; defaults to the newest log date.
        lookback_weeks: Number of 7-day buckets considered.

    Returns:
        Decline as a positive 0-100 percentage. 0.0 when volume held or grew,
        when the trailing week has no volume yet, or when fewer than two
        weeks carry volume.
    """
    weekly = weekly_volume(logs, as_of=as_of, lookback_weeks=lookback_weeks)
    if weekly.empty:
        return 0.0
    loaded = weekly[weekly > 0]
    if len(loaded) < 2 or weekly.loc[0] <= 0:
        return 0.0
    current = float(weekly.loc[0])
    previous = float(weekly.loc[1 : int(loaded.index.max())].mean())
    decline = (previous - current) / previous * 100.0
    return round(min(100.0, max(0.0, decline)), 2)


def muscle_group_fatigue(logs: Sequence[PerformanceLog]) -> dict[str, float]:
    """Score per-muscle-group load on a 0-100 scale.

    Volume contributes up to 40 points, session frequency up to 30 and
    average RPE up to 30. Logs without muscle groups are ignored.
    """
    rows = [
        {
            "group": group,
            "volume": float(log.volume),
            "rpe": np.nan if log.rpe is None else float(log.rpe),
        }
        for log in logs
        for group in log.muscle_groups
    ]
    if not rows:
        return {}
    frame = pd.DataFrame(rows)
    grouped = frame.groupby("group").agg(
        volume=("volume", "mean"),
        frequency=("volume", "size"),
        rpe=("rpe", "mean"),
    )
    scores: dict[str, float] = {}
    for group, row in grouped.iterrows():
        rpe = 0.0 if pd.isna(row["rpe"]) else float(row["rpe"])
        score = (
            min(float(row["volume"]) / MUSCLE_VOLUME_SATURATION, 1.0) * MUSCLE_VOLUME_POINTS
            + min(float(row["frequency"]) / MUSCLE_FREQUENCY_SATURATION, 1.0) * MUSCLE_FREQUENCY_POINTS
            + min(rpe / RPE_SCALE_MAX, 1.0) * MUSCLE_RPE_POINTS
        )
        scores[str(group)] = float(round(min(100.0, score)))
    return scores
