"""Guarded arithmetic and statistical helpers for campaign metrics.

The safe_* helpers never raise and never return NaN or infinity.
"""

import math
from typing import Any, Literal

import numpy as np
from scipy import stats


def safe_div(numerator: Any, denominator: Any, default: float = 0.0) -> float:
    """Divide, returning ``default`` on a zero/falsy denominator or non-finite result.

    Negative values pass through unchanged; only division by zero and
    non-finite propagation are guarded.
    """
    if not denominator:
        return default
    try:
        result = numerator / denominator
    except (TypeError, ZeroDivisionError, OverflowError):
        return default
    try:
        return result if math.isfinite(result) else default
    except TypeError:
        return default


def safe_percentage(numerator: Any, denominator: Any, default: float = 0.0) -> float:
    """safe_div(numerator, denominator, default) scaled to a percentage."""
    return safe_div(numerator, denominator, default) * 100


def safe_number(value: Any, default: float = 0.0) -> float:
    """Return ``value`` unless it is None or not a finite number."""
    if value is None:
        return default
    try:
        return value if math.isfinite(value) else default
    except TypeError:
        return default


def detect_trend(
    values: list[float] | np.ndarray,
    p_threshold: float = 0.05,
    r_threshold: float = 0.3,
) -> Literal["increasing", "decreasing", "stable"]:
    """Detect trend direction using linear regression.

    Args:
        values: Ordered metric values (e.g., daily spend)
        p_threshold: P-value threshold for significance
        r_threshold: Minimum R-value for meaningful trend

    Returns:
        Trend direction based on slope significance.
    """
    if len(values) < 3:
        return "stable"

    arr = np.array(values, dtype=float)
    if np.std(arr) == 0:
        return "stable"

    x = np.arange(len(arr))
    slope, _, r_value, p_value, _ = stats.linregress(x, arr)

    if p_value < p_threshold and abs(r_value) > r_threshold:
        return "increasing" if slope > 0 else "decreasing"
    return "stable"


def mean_absolute_change(values: list[float] | np.ndarray) -> float:
    """Mean absolute difference between consecutive values (0 below two values)."""
    arr = np.array(values, dtype=float)
    if len(arr) < 2:
        return 0.0
    return float(np.mean(np.abs(np.diff(arr))))


def coefficient_of_variation(values: list[float] | np.ndarray) -> float | None:
    """Population standard deviation over mean.

    Returns:
        The ratio, or None if there are no values or the mean is 0.
    """
    arr = np.array(values, dtype=float)
    if len(arr) == 0:
        return None

    mean = np.mean(arr)
    if mean == 0:
        return None

    return float(np.std(arr) / mean)
