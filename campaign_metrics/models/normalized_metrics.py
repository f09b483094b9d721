"""Pydantic models for normalized campaign metrics."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class BreakdownRow(BaseModel):
    """Counters for a single breakdown bucket.

    CTR is recomputed from the row's own clicks and impressions and stored
    as a percentage (5.0 = 5%).
    """

    model_config = ConfigDict(frozen=True)

    impressions: float = 0.0
    clicks: float = 0.0
    spend: float = 0.0
    conversions: float = 0.0
    revenue: float = 0.0
    ctr: float = 0.0


class AgeBreakdown(BreakdownRow):
    age: str = "unknown"


class GenderBreakdown(BreakdownRow):
    gender: str = "unknown"


class PlacementBreakdown(BreakdownRow):
    placement: str = "unknown"


class HourlyPerformance(BreakdownRow):
    hour: int = 0  # 0-23


class DailyPerformance(BreakdownRow):
    day_of_week: int = 0  # 0 = Sunday


class DailyStat(BreakdownRow):
    date_start: str = "unknown"  # ISO date from the vendor


class NormalizedMetrics(BaseModel):
    """Canonical per-campaign metrics snapshot.

    Counters default to 0, quality/targeting fields default to None,
    rankings default to "UNKNOWN" and breakdowns to empty tuples. All ratio
    fields are computed with guarded division, so they are never NaN or
    infinite. Percentages are stored as 0-100 values.
    """

    model_config = ConfigDict(frozen=True)

    # Base counters
    impressions: float = 0.0
    clicks: float = 0.0
    spend: float = 0.0
    conversions: float = 0.0
    revenue: float = 0.0

    # Optional counters
    reach: float = 0.0
    frequency: float = 0.0
    unique_clicks: float = 0.0
    outbound_clicks: float = 0.0
    link_clicks: float = 0.0
    page_engagement: float = 0.0
    leads: float = 0.0
    purchases: float = 0.0

    # Derived ratios
    ctr: float = 0.0
    cpc: float = 0.0
    roas: float = 0.0
    conversion_rate: float = 0.0
    unique_ctr: float = 0.0
    cost_per_unique_click: float = 0.0
    outbound_clicks_ctr: float = 0.0
    engagement_rate: float = 0.0
    cost_per_lead: float = 0.0
    cost_per_purchase: float = 0.0

    # Quality scores (vendor 0-10 scale)
    quality_score: Optional[float] = None
    ad_relevance_score: Optional[float] = None
    landing_page_score: Optional[float] = None

    # Targeting
    audience_size: Optional[float] = None
    audience_overlap: Optional[float] = None
    reach_estimate: Optional[float] = None
    impression_share: Optional[float] = None
    search_impression_share: Optional[float] = None
    search_rank_lost_impression_share: Optional[float] = None

    # Vendor rankings
    quality_ranking: str = "UNKNOWN"
    engagement_rate_ranking: str = "UNKNOWN"
    conversion_rate_ranking: str = "UNKNOWN"

    # Breakdowns
    age_targeting_performance: tuple[AgeBreakdown, ...] = ()
    gender_targeting_performance: tuple[GenderBreakdown, ...] = ()
    placement_performance: tuple[PlacementBreakdown, ...] = ()
    hourly_performance: tuple[HourlyPerformance, ...] = ()
    daily_performance: tuple[DailyPerformance, ...] = ()
    daily_stats: tuple[DailyStat, ...] = ()
