"""Analytics module for campaign metrics analysis."""

from .buckets import (
    analyze_buckets,
    analyze_daily_performance,
    analyze_hourly_performance,
    best_days_label,
    calculate_daily_stability,
    calculate_hourly_volatility,
    peak_hours_label,
)
from .calculator import PortfolioEngine
from .formatting import format_metric_value
from .insights import Insight, InsightEngine, InsightThresholds, Severity
from .models import (
    AverageMetrics,
    CampaignRanking,
    ConfidenceLevel,
    DailyTotals,
    MetricBenchmark,
    MetricTrend,
    PortfolioTotals,
    ReliabilityReport,
    SegmentAnalysis,
    SegmentScore,
    TimeBucketAnalysis,
)
from .scoring import (
    analyze_segment_performance,
    calculate_engagement_score,
    calculate_performance_score,
    get_metric_benchmark,
    get_metric_status,
)
from .stats import safe_div, safe_number, safe_percentage
from .trends import (
    calculate_growth_rate,
    calculate_trend,
    calculate_trend_strength,
    compare_trends,
    trend_indicator,
)
from .validation import (
    ConfidenceThresholds,
    ReliabilityThresholds,
    assess_data_reliability,
    assess_trend_reliability,
    calculate_data_reliability,
    calculate_trend_reliability,
    confidence_level,
    validate,
    validate_metrics,
)

__all__ = [
    "AverageMetrics",
    "CampaignRanking",
    "ConfidenceLevel",
    "ConfidenceThresholds",
    "DailyTotals",
    "Insight",
    "InsightEngine",
    "InsightThresholds",
    "MetricBenchmark",
    "MetricTrend",
    "PortfolioEngine",
    "PortfolioTotals",
    "ReliabilityReport",
    "ReliabilityThresholds",
    "SegmentAnalysis",
    "SegmentScore",
    "Severity",
    "TimeBucketAnalysis",
    "analyze_buckets",
    "analyze_daily_performance",
    "analyze_hourly_performance",
    "analyze_segment_performance",
    "assess_data_reliability",
    "assess_trend_reliability",
    "best_days_label",
    "calculate_daily_stability",
    "calculate_data_reliability",
    "calculate_engagement_score",
    "calculate_growth_rate",
    "calculate_hourly_volatility",
    "calculate_performance_score",
    "calculate_trend",
    "calculate_trend_reliability",
    "calculate_trend_strength",
    "compare_trends",
    "confidence_level",
    "format_metric_value",
    "get_metric_benchmark",
    "get_metric_status",
    "peak_hours_label",
    "safe_div",
    "safe_number",
    "safe_percentage",
    "trend_indicator",
    "validate",
    "validate_metrics",
]
