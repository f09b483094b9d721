"""Period-over-period trend calculations."""

from typing import Literal

from ..models.normalized_metrics import NormalizedMetrics
from .models import MetricTrend, TrendDirection
from .stats import safe_percentage

TRACKED_FIELDS: tuple[str, ...] = (
    "spend",
    "impressions",
    "clicks",
    "conversions",
    "revenue",
    "ctr",
    "cpc",
    "roas",
)


def calculate_trend(current: float, previous: float) -> MetricTrend:
    """Delta, percentage change and direction for one metric.

    change_percentage is 0 when previous is 0, even if current is not.
    """
    change = current - previous
    direction: TrendDirection = "up" if change > 0 else "down" if change < 0 else "stable"
    return MetricTrend(
        current=current,
        previous=previous,
        change=change,
        change_percentage=safe_percentage(change, previous),
        trend=direction,
    )


def compare_trends(
    current: NormalizedMetrics,
    previous: NormalizedMetrics,
    fields: tuple[str, ...] = TRACKED_FIELDS,
) -> dict[str, MetricTrend]:
    """Compare two snapshots field by field.

    Returns:
        Mapping of field name to a freshly built MetricTrend.
    """
    return {
        name: calculate_trend(getattr(current, name), getattr(previous, name))
        for name in fields
    }


def calculate_growth_rate(current: float, previous: float) -> float:
    """Percentage growth from previous to current (0 when previous is 0)."""
    return safe_percentage(current - previous, previous)


def trend_indicator(current: float, previous: float, inverse: bool = False) -> str:
    """Arrow for dashboards: ↑ is an improvement, ↓ a decline, → no change.

    Set ``inverse`` for metrics where lower is better (CPC, cost per lead).
    """
    change = calculate_growth_rate(current, previous)
    if change == 0:
        return "→"
    improved = change < 0 if inverse else change > 0
    return "↑" if improved else "↓"


def calculate_trend_strength(
    current: float, previous: float
) -> Literal["strong", "moderate", "weak"]:
    """Classify the magnitude of growth: >20% strong, >10% moderate."""
    change = abs(calculate_growth_rate(current, previous))
    if change > 20:
        return "strong"
    if change > 10:
        return "moderate"
    return "weak"
