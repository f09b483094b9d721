"""CampaignScorecard - consolidated per-campaign analytics output."""

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from ..analytics.insights import Insight, InsightEngine
from ..analytics.models import (
    MetricTrend,
    ReliabilityReport,
    SegmentAnalysis,
    TimeBucketAnalysis,
)
from .campaign import CampaignRecord


def _bucket_dict(analysis: TimeBucketAnalysis | None) -> dict[str, Any] | None:
    if analysis is None:
        return None
    return {
        "best": list(analysis.best_buckets),
        "worst": list(analysis.worst_buckets),
        "average": asdict(analysis.average_metrics),
    }


@dataclass
class CampaignScorecard:
    """Everything computed for one campaign in a report run.

    All data is pre-computed and JSON-serializable via to_dict().
    """

    # Metadata
    generated_at: datetime
    campaign: CampaignRecord

    # Scoring
    reliability: ReliabilityReport
    performance_score: float
    segments: SegmentAnalysis
    engagement_score: float

    # Time buckets
    hourly: TimeBucketAnalysis | None
    daily: TimeBucketAnalysis | None
    peak_hours: str
    best_days: str
    hourly_volatility: float
    daily_stability: float

    insights: list[Insight] = field(default_factory=list)

    # Period comparison, only when a prior snapshot was cached
    trends: dict[str, MetricTrend] | None = None
    trend_reliability: float | None = None

    # Invariant violations found by validate_metrics (empty when valid)
    validation_errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.validation_errors

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        m = self.campaign.metrics
        return {
            "meta": {
                "generated_at": self.generated_at.isoformat(),
                "campaign_id": self.campaign.id,
                "name": self.campaign.name,
                "status": self.campaign.status,
                "objective": self.campaign.objective,
                "budget": round(self.campaign.budget, 2),
            },
            "metrics": m.model_dump(mode="json"),
            "reliability": {
                "score": round(self.reliability.score, 1),
                "level": self.reliability.level.value,
                "failed_checks": list(self.reliability.failed_checks),
            },
            "performance": {
                "score": round(self.performance_score, 2),
                "engagement_score": round(self.engagement_score, 2),
                "overall_segment_score": round(self.segments.overall_score, 2),
                "segments": {
                    name: {"score": round(seg.score, 2), "metrics": seg.metrics}
                    for name, seg in self.segments.segments.items()
                },
            },
            "time_buckets": {
                "hourly": _bucket_dict(self.hourly),
                "daily": _bucket_dict(self.daily),
                "peak_hours": self.peak_hours,
                "best_days": self.best_days,
                "hourly_volatility": round(self.hourly_volatility, 4),
                "daily_stability": round(self.daily_stability, 2),
            },
            "trends": (
                {name: asdict(trend) for name, trend in self.trends.items()}
                if self.trends is not None
                else None
            ),
            "trend_reliability": self.trend_reliability,
            "insights": InsightEngine.to_dict(self.insights),
            "validation_errors": list(self.validation_errors),
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def get_executive_summary(self) -> dict[str, Any]:
        """Get condensed summary for executive overview.

        Returns key metrics only, suitable for table rows.
        """
        m = self.campaign.metrics
        return {
            "campaign_id": self.campaign.id,
            "name": self.campaign.name,
            "spend": round(m.spend, 2),
            "ctr_pct": round(m.ctr, 2),
            "roas": round(m.roas, 2),
            "performance_score": round(self.performance_score, 1),
            "confidence": self.reliability.level.value,
            "insight_count": len(self.insights),
            "is_valid": self.is_valid,
        }
