"""Campaign metrics: normalization, validation and scoring of ad-performance data."""

from .analytics import (
    analyze_buckets,
    analyze_segment_performance,
    calculate_data_reliability,
    calculate_performance_score,
    calculate_trend_reliability,
    compare_trends,
    validate,
    validate_metrics,
)
from .exceptions import (
    MetricsError,
    MetricsValidationError,
    PayloadLoadError,
    SchemaLoadError,
    ValidationError,
)
from .ingestion import CampaignPayloadLoader, transform
from .models import CampaignRecord, NormalizedMetrics

__version__ = "0.1.0"

__all__ = [
    "CampaignPayloadLoader",
    "CampaignRecord",
    "MetricsError",
    "MetricsValidationError",
    "NormalizedMetrics",
    "PayloadLoadError",
    "SchemaLoadError",
    "ValidationError",
    "analyze_buckets",
    "analyze_segment_performance",
    "calculate_data_reliability",
    "calculate_performance_score",
    "calculate_trend_reliability",
    "compare_trends",
    "transform",
    "validate",
    "validate_metrics",
]
