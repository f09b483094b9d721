"""Output models for analytics calculations."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Literal

TrendDirection = Literal["up", "down", "stable"]


class ConfidenceLevel(str, Enum):
    """Advisory confidence badge for a reliability score."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass(frozen=True)
class MetricTrend:
    """Current vs previous period for a single metric."""

    current: float
    previous: float
    change: float  # current - previous
    change_percentage: float  # 0 when previous is 0
    trend: TrendDirection


@dataclass(frozen=True)
class AverageMetrics:
    """Per-bucket mean of the bucket counters."""

    impressions: float
    clicks: float
    conversions: float
    ctr: float


@dataclass(frozen=True)
class TimeBucketAnalysis:
    """Best/worst time buckets by CTR with per-bucket averages."""

    best_buckets: tuple[int, ...]  # Top 3 by descending CTR
    worst_buckets: tuple[int, ...]  # Top 3 by ascending CTR
    average_metrics: AverageMetrics


@dataclass(frozen=True)
class ReliabilityReport:
    """Outcome of a reliability checklist."""

    score: float  # 0-100, share of passed checks
    level: ConfidenceLevel
    passed_checks: tuple[str, ...]
    failed_checks: tuple[str, ...]


@dataclass(frozen=True)
class SegmentScore:
    """Diagnostic score for one funnel segment (not capped at 100)."""

    score: float
    metrics: dict[str, float | None]


@dataclass(frozen=True)
class SegmentAnalysis:
    """Acquisition / engagement / conversion / quality breakdown."""

    segments: dict[str, SegmentScore]
    overall_score: float  # Unweighted mean of segment scores


@dataclass(frozen=True)
class MetricBenchmark:
    """Metric value placed against an industry average."""

    value: float
    industry_avg: float
    percentile: int
    rating: Literal["above", "average", "below"]


@dataclass(frozen=True)
class PortfolioTotals:
    """Account-level KPIs (recomputed from campaign counters)."""

    campaign_count: int
    total_spend: float
    total_impressions: float
    total_clicks: float
    total_conversions: float
    total_revenue: float
    ctr: float  # clicks / impressions * 100
    cpc: float  # spend / clicks
    roas: float  # revenue / spend
    conversion_rate: float  # conversions / clicks * 100


@dataclass(frozen=True)
class DailyTotals:
    """Aggregated daily stats across campaigns."""

    date: date
    spend: float
    impressions: float
    clicks: float
    conversions: float
    revenue: float
    ctr: float
    roas: float


@dataclass(frozen=True)
class CampaignRanking:
    """Campaign position by composite performance score."""

    rank: int  # 1 = best
    campaign_id: str
    name: str
    performance_score: float
    spend: float
    roas: float
