"""Series statistics: normalized OLS trend, coefficient of variation, window means.

References:
    - LeSuer et al. (1997): load trends as a proxy for strength gain
    - Hopkins (2000) Sports Med 30(1):1-15: CV as a reliability measure
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from periodization_engine.exceptions import InsufficientDataError

_EPSILON = 1e-9


def normalized_slope(values: Sequence[float]) -> float:
    """Least-squares slope of a series divided by the series mean.

    Args:
        values: Observations in chronological order (oldest first).

    Returns:
        Slope per observation as a fraction of the mean. 0.0 when the mean
        is zero.

    Raises:
        InsufficientDataError: fewer than two observations.
    """
    if len(values) < 2:
        raise InsufficientDataError(f"slope needs 2 points, got {len(values)}")
    y = np.asarray(values, dtype=np.float64)
    mean = float(y.mean())
    if abs(mean) < _EPSILON:
        return 0.0
    x = np.arange(len(y), dtype=np.float64)
    slope = float(np.polyfit(x, y, 1)[0])
    if abs(slope) < _EPSILON:
        return 0.0
    return slope / mean


def coefficient_of_variation(values: Sequence[float]) -> float:
    """Population standard deviation divided by the mean.

    Returns 1.0 (maximally inconsistent) when the mean is zero.

    Raises:
        InsufficientDataError: empty series.
    """
    if len(values) == 0:
        raise InsufficientDataError("coefficient of variation needs at least 1 value")
    arr = np.asarray(values, dtype=np.float64)
    mean = float(arr.mean())
    if abs(mean) < _EPSILON:
        return 1.0
    return float(np.std(arr)) / mean


def consistency(values: Sequence[float]) -> float:
    """1 - CV, floored at 0."""
    return max(0.0, 1.0 - coefficient_of_variation(values))


def trailing_mean(values: Sequence[float], window: int) -> float:
    """Mean of the last ``window`` observations.

    Raises:
        InsufficientDataError: empty series.
    """
    if len(values) == 0:
        raise InsufficientDataError("trailing mean of an empty series")
    series = pd.Series(values, dtype=np.float64)
    return float(series.tail(window).mean())


def recent_vs_prior_difference(values: Sequence[float], window: int) -> float:
    """Mean of the last ``window`` values minus the mean of the ``window`` before.

    Args:
        values: Chronological series.
        window: Size of each comparison window.

    Raises:
        InsufficientDataError: the prior window would be empty.
    """
    if len(values) <= window:
        raise InsufficientDataError(
            f"need more than {window} values to compare windows, got {len(values)}"
        )
    series = pd.Series(values, dtype=np.float64)
    recent = series.iloc[-window:]
    prior = series.iloc[-2 * window:-window]
    return float(recent.mean() - prior.mean())
