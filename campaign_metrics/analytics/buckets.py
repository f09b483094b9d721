"""Time-bucket analysis of hourly and day-of-week performance."""

from collections.abc import Mapping, Sequence
from typing import Any

from ..ingestion.cleaner import safe_parse_float
from .models import AverageMetrics, TimeBucketAnalysis
from .stats import coefficient_of_variation, mean_absolute_change

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
TOP_N = 3


def _value(bucket: Any, name: str) -> Any:
    """Read a field from a pydantic row or a plain mapping."""
    if isinstance(bucket, Mapping):
        return bucket.get(name)
    return getattr(bucket, name, None)


def _number(bucket: Any, name: str) -> float:
    return safe_parse_float(_value(bucket, name))


def _ranked(buckets: Sequence[Any], descending: bool) -> list[Any]:
    """Stable sort by CTR on a copy; ties keep their input order."""
    return sorted(buckets, key=lambda b: _number(b, "ctr"), reverse=descending)


def analyze_buckets(
    buckets: Sequence[Any] | None, key: str = "hour"
) -> TimeBucketAnalysis | None:
    """Rank time buckets by CTR and average their counters.

    Args:
        buckets: Hourly or daily rows with impressions, clicks, conversions, ctr
        key: Bucket key field ("hour" or "day_of_week")

    Returns:
        TimeBucketAnalysis, or None for empty input. The input is not mutated.
    """
    if not buckets:
        return None

    count = len(buckets)
    best = _ranked(buckets, descending=True)[:TOP_N]
    worst = _ranked(buckets, descending=False)[:TOP_N]

    averages = {
        name: sum(_number(b, name) / count for b in buckets)
        for name in ("impressions", "clicks", "conversions", "ctr")
    }

    return TimeBucketAnalysis(
        best_buckets=tuple(int(_number(b, key)) for b in best),
        worst_buckets=tuple(int(_number(b, key)) for b in worst),
        average_metrics=AverageMetrics(**averages),
    )


def analyze_hourly_performance(
    hourly: Sequence[Any] | None,
) -> TimeBucketAnalysis | None:
    """Best/worst hours of the day (0-23)."""
    return analyze_buckets(hourly, key="hour")


def analyze_daily_performance(
    daily: Sequence[Any] | None,
) -> TimeBucketAnalysis | None:
    """Best/worst days of the week (0 = Sunday)."""
    return analyze_buckets(daily, key="day_of_week")


def peak_hours_label(hourly: Sequence[Any] | None) -> str:
    """Top three hours by CTR, e.g. "9:00, 14:00, 20:00"."""
    if not hourly:
        return "No data"
    top = _ranked(hourly, descending=True)[:TOP_N]
    return ", ".join(f"{int(_number(h, 'hour'))}:00" for h in top)


def best_days_label(daily: Sequence[Any] | None) -> str:
    """Top three days by CTR, e.g. "Tue, Sat, Mon"."""
    if not daily:
        return "No data"
    top = _ranked(daily, descending=True)[:TOP_N]
    return ", ".join(
        DAY_NAMES[int(_number(d, "day_of_week")) % len(DAY_NAMES)] for d in top
    )


def calculate_hourly_volatility(hourly: Sequence[Any] | None) -> float:
    """Mean absolute CTR change between consecutive hours."""
    if not hourly:
        return 0.0
    return mean_absolute_change([_number(h, "ctr") for h in hourly])


def calculate_daily_stability(daily: Sequence[Any] | None) -> float:
    """Stability score 0-100: 100 minus the CTR coefficient of variation (%)."""
    if not daily:
        return 0.0

    cv = coefficient_of_variation([_number(d, "ctr") for d in daily])
    if cv is None:
        return 0.0
    return max(0.0, 100 - cv * 100)
