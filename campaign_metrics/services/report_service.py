"""Report service - orchestrates payload ingestion, analytics and caching."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Literal

from ..analytics.buckets import (
    analyze_daily_performance,
    analyze_hourly_performance,
    best_days_label,
    calculate_daily_stability,
    calculate_hourly_volatility,
    peak_hours_label,
)
from ..analytics.calculator import PortfolioEngine
from ..analytics.insights import InsightEngine
from ..analytics.models import CampaignRanking, DailyTotals, PortfolioTotals
from ..analytics.scoring import (
    analyze_segment_performance,
    calculate_engagement_score,
    calculate_performance_score,
)
from ..analytics.trends import compare_trends
from ..analytics.validation import (
    assess_data_reliability,
    calculate_trend_reliability,
    validate_metrics,
)
from ..config import MetricsConfig, load_metrics_config
from ..exceptions import MetricsValidationError
from ..ingestion.loader import CampaignPayloadLoader
from ..ingestion.transformer import MetricTransformer, load_field_registry
from ..logging import get_logger
from ..models.campaign import CampaignRecord
from ..models.scorecard import CampaignScorecard
from ..settings import Settings, get_settings
from .cache import MetricsCache

logger = get_logger(__name__)


@dataclass
class ReportOutput:
    """Consolidated output from report generation."""

    generated_at: datetime
    scorecards: list[CampaignScorecard]
    totals: PortfolioTotals
    daily_timeline: list[DailyTotals]
    spend_trend: Literal["increasing", "decreasing", "stable"]
    rankings: list[CampaignRanking] = field(default_factory=list)


class CampaignReportService:
    """Service for generating campaign scorecards from vendor payloads.

    Orchestrates:
    1. Loading and normalizing the campaigns payload
    2. Validating each snapshot (violations are recorded, never raised)
    3. Reliability, scoring, time-bucket analysis and insights
    4. Trends against the previous snapshot held in the cache
    5. Portfolio totals, daily timeline and ranking

    Usage:
        service = CampaignReportService()
        output = service.generate_report(Path("exports/campaigns.json"))
        summary = service.generate_summary_dict(output)
    """

    def __init__(
        self,
        settings: Settings | None = None,
        config: MetricsConfig | None = None,
        cache: MetricsCache | None = None,
        loader: CampaignPayloadLoader | None = None,
    ):
        """Initialize service from settings.

        Args:
            settings: Runtime settings. Defaults to get_settings().
            config: Thresholds. Defaults to the YAML at settings.config_path.
            cache: Snapshot cache. Defaults to a MetricsCache built from settings.
            loader: Payload loader. Defaults to one using settings.schema_path.
        """
        self.settings = settings if settings is not None else get_settings()
        if config is None:
            config = load_metrics_config(self.settings.config_path)
        self.config = config
        if cache is None:
            cache = MetricsCache(
                ttl=self.settings.cache_ttl_seconds,
                max_entries=self.settings.cache_max_entries,
            )
        self.cache = cache
        if loader is None:
            registry = (
                load_field_registry(self.settings.schema_path)
                if self.settings.schema_path
                else None
            )
            loader = CampaignPayloadLoader(MetricTransformer(registry))
        self.loader = loader

    @property
    def cache_key(self) -> str:
        return self.settings.cache_key

    @property
    def snapshots_key(self) -> str:
        return f"{self.cache_key}:snapshots"

    def get_cached_snapshots(self) -> dict[str, CampaignRecord]:
        """Prior snapshots by campaign id, empty if missing or expired."""
        return self.cache.get(self.snapshots_key) or {}

    def load_campaigns(self, source: Path | str | Mapping | Sequence) -> list[CampaignRecord]:
        """Load campaigns from a payload file path or an already-decoded payload."""
        if isinstance(source, (str, Path)):
            return self.loader.load(Path(source))
        return self.loader.from_payload(source)

    def get_cached_campaigns(self) -> list[CampaignRecord] | None:
        """Campaign list from the last report, or None if missing or expired."""
        return self.cache.get(self.cache_key)

    def generate_report(self, source: Path | str | Mapping | Sequence) -> ReportOutput:
        """Generate scorecards for every campaign in a payload.

        Args:
            source: Path to a campaigns JSON file, or the decoded payload

        Returns:
            ReportOutput with per-campaign scorecards and portfolio aggregates

        Raises:
            PayloadLoadError: If a payload file cannot be read
        """
        campaigns = self.load_campaigns(source)
        previous = self.get_cached_snapshots()
        scorecards = [self.score_campaign(c, previous.get(c.id)) for c in campaigns]

        # Snapshots share one cache entry regardless of campaign count
        self.cache.set(self.snapshots_key, {**previous, **{c.id: c for c in campaigns}})
        self.cache.set(self.cache_key, campaigns)

        engine = PortfolioEngine(campaigns)
        output = ReportOutput(
            generated_at=datetime.now(timezone.utc),
            scorecards=scorecards,
            totals=engine.get_totals(),
            daily_timeline=engine.get_daily_timeline(),
            spend_trend=engine.get_spend_trend(),
            rankings=engine.rank_campaigns(),
        )

        logger.info(
            "report_generated",
            campaigns=len(scorecards),
            invalid=sum(1 for s in scorecards if not s.is_valid),
            total_spend=round(output.totals.total_spend, 2),
        )
        return output

    def score_campaign(
        self, campaign: CampaignRecord, previous: CampaignRecord | None = None
    ) -> CampaignScorecard:
        """Run every analyzer over one campaign.

        Trends are computed only when a previous snapshot of the campaign is given.
        """
        metrics = campaign.metrics

        validation_errors: list[str] = []
        try:
            validate_metrics(metrics)
        except MetricsValidationError as e:
            validation_errors = e.violations
            logger.warning(
                "campaign_metrics_invalid",
                campaign_id=campaign.id,
                violations=e.violations,
            )

        trends = None
        trend_reliability = None
        if previous is not None:
            trends = compare_trends(metrics, previous.metrics)
            trend_reliability = calculate_trend_reliability(
                metrics, previous.metrics, self.config.reliability
            )

        insights = InsightEngine(
            campaign,
            thresholds=self.config.insights,
            reliability=self.config.reliability,
        ).generate_all_insights()

        return CampaignScorecard(
            generated_at=datetime.now(timezone.utc),
            campaign=campaign,
            reliability=assess_data_reliability(
                metrics, self.config.reliability, self.config.confidence
            ),
            performance_score=calculate_performance_score(metrics),
            segments=analyze_segment_performance(metrics),
            engagement_score=calculate_engagement_score(metrics),
            hourly=analyze_hourly_performance(metrics.hourly_performance),
            daily=analyze_daily_performance(metrics.daily_performance),
            peak_hours=peak_hours_label(metrics.hourly_performance),
            best_days=best_days_label(metrics.daily_performance),
            hourly_volatility=calculate_hourly_volatility(metrics.hourly_performance),
            daily_stability=calculate_daily_stability(metrics.daily_performance),
            insights=insights,
            trends=trends,
            trend_reliability=trend_reliability,
            validation_errors=validation_errors,
        )

    def generate_summary_dict(self, output: ReportOutput) -> dict[str, Any]:
        """Convert ReportOutput to JSON-serializable dictionary.

        Args:
            output: ReportOutput from generate_report()

        Returns:
            Dictionary suitable for JSON serialization
        """
        t = output.totals
        return {
            "generated_at": output.generated_at.isoformat(),
            "totals": {
                "campaign_count": t.campaign_count,
                "total_spend": round(t.total_spend, 2),
                "total_impressions": t.total_impressions,
                "total_clicks": t.total_clicks,
                "total_conversions": t.total_conversions,
                "total_revenue": round(t.total_revenue, 2),
                "ctr_pct": round(t.ctr, 4),
                "cpc": round(t.cpc, 2),
                "roas": round(t.roas, 2),
                "conversion_rate_pct": round(t.conversion_rate, 2),
            },
            "spend_trend": output.spend_trend,
            "daily_timeline": [
                {
                    "date": d.date.isoformat(),
                    "spend": round(d.spend, 2),
                    "impressions": d.impressions,
                    "clicks": d.clicks,
                    "conversions": d.conversions,
                    "revenue": round(d.revenue, 2),
                    "ctr_pct": round(d.ctr, 4),
                    "roas": round(d.roas, 2),
                }
                for d in output.daily_timeline
            ],
            "rankings": [
                {
                    "rank": r.rank,
                    "campaign_id": r.campaign_id,
                    "name": r.name,
                    "performance_score": round(r.performance_score, 2),
                    "spend": round(r.spend, 2),
                    "roas": round(r.roas, 2),
                }
                for r in output.rankings
            ],
            "campaigns": [s.get_executive_summary() for s in output.scorecards],
        }
