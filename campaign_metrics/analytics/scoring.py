"""Composite performance scoring and funnel segment analysis."""

from collections.abc import Sequence
from typing import Literal

from ..models.normalized_metrics import NormalizedMetrics
from .models import MetricBenchmark, SegmentAnalysis, SegmentScore
from .stats import safe_div, safe_number, safe_percentage

# Weights sum to 1.0
PERFORMANCE_WEIGHTS: dict[str, float] = {
    "ctr": 0.20,
    "conversion_rate": 0.25,
    "roas": 0.25,
    "engagement_rate": 0.15,
    "quality_score": 0.15,
}

DEFAULT_QUALITY_SCORE = 5.0

MetricStatus = Literal["success", "warning", "error"]


def _quality_points(metrics: NormalizedMetrics) -> float:
    # Vendor quality scores are on a 0-10 scale; absent scores count as 5
    return safe_number(metrics.quality_score, DEFAULT_QUALITY_SCORE) * 10


def performance_components(metrics: NormalizedMetrics) -> dict[str, float]:
    """Normalized 0-100 sub-scores feeding the composite score.

    The quality term is not capped.
    """
    return {
        "ctr": min(metrics.ctr * 5, 100),
        "conversion_rate": min(
            safe_percentage(metrics.conversions, metrics.clicks) * 5, 100
        ),
        "roas": min(metrics.roas * 10, 100),
        "engagement_rate": min(metrics.engagement_rate * 2, 100),
        "quality_score": _quality_points(metrics),
    }


def calculate_performance_score(metrics: NormalizedMetrics) -> float:
    """Weighted composite of CTR, conversion rate, ROAS, engagement and quality.

    Args:
        metrics: Normalized snapshot

    Returns:
        Score nominally in [0, 100]. A quality score above 10 can push it higher.
    """
    components = performance_components(metrics)
    return sum(components[name] * weight for name, weight in PERFORMANCE_WEIGHTS.items())


def analyze_segment_performance(metrics: NormalizedMetrics) -> SegmentAnalysis:
    """Split a snapshot into acquisition, engagement, conversion and quality segments.

    Segment scores are diagnostic ratios and are not clamped; engagement can
    exceed 100 when users engage more than once per click.
    """
    m = metrics
    conversion_rate = safe_percentage(m.conversions, m.clicks)

    segments = {
        "acquisition": SegmentScore(
            score=safe_percentage(m.clicks, m.impressions),
            metrics={"ctr": m.ctr, "cpc": m.cpc, "reach": m.reach},
        ),
        "engagement": SegmentScore(
            score=safe_percentage(m.page_engagement, m.clicks),
            metrics={
                "engagement_rate": m.engagement_rate,
                "frequency": m.frequency,
                "unique_click_rate": safe_percentage(m.unique_clicks, m.clicks),
            },
        ),
        "conversion": SegmentScore(
            score=conversion_rate,
            metrics={
                "conversion_rate": conversion_rate,
                "cost_per_conversion": safe_div(m.spend, m.conversions),
                "roas": m.roas,
            },
        ),
        "quality": SegmentScore(
            score=_quality_points(m),
            metrics={
                "quality_score": m.quality_score,
                "ad_relevance_score": m.ad_relevance_score,
                "landing_page_score": m.landing_page_score,
            },
        ),
    }

    overall = sum(segment.score for segment in segments.values()) / len(segments)
    return SegmentAnalysis(segments=segments, overall_score=overall)


def calculate_engagement_score(metrics: NormalizedMetrics) -> float:
    """Mean of CTR, conversion rate, frequency score and unique-click rate."""
    m = metrics
    scores = (
        safe_percentage(m.clicks, m.impressions),
        safe_percentage(m.conversions, m.clicks),
        min(m.frequency * 10, 100),
        safe_percentage(m.unique_clicks, m.clicks),
    )
    return sum(scores) / len(scores)


def get_metric_benchmark(
    value: float, industry_avg: float, percentiles: Sequence[float]
) -> MetricBenchmark:
    """Place a value against ascending percentile cut-offs and an industry average.

    The percentile is the index of the first cut-off the value does not
    exceed, times ten. Values above every cut-off land past the last decile.
    """
    index = next(
        (i for i, cutoff in enumerate(percentiles) if value <= cutoff),
        len(percentiles),
    )

    if value > industry_avg * 1.1:
        rating = "above"
    elif value < industry_avg * 0.9:
        rating = "below"
    else:
        rating = "average"

    return MetricBenchmark(
        value=value,
        industry_avg=industry_avg,
        percentile=index * 10,
        rating=rating,
    )


def get_metric_status(
    current: float, target: float, tolerance: float = 0.1
) -> MetricStatus:
    """Traffic-light status of a metric against its target."""
    if target <= 0:
        return "success" if current >= target else "error"

    ratio = current / target
    if ratio >= 1:
        return "success"
    if ratio >= 1 - tolerance:
        return "warning"
    return "error"
