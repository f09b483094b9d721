"""Portfolio Engine - account-level aggregation across campaigns."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

import polars as pl

from ..models.campaign import CampaignRecord
from .expressions import (
    COUNTER_COLUMNS,
    counter_totals_expr,
    derived_rates_expr,
    parsed_date_expr,
)
from .models import CampaignRanking, DailyTotals, PortfolioTotals
from .scoring import calculate_performance_score
from .stats import detect_trend

CAMPAIGN_SCHEMA = {
    "campaign_id": pl.Utf8,
    "name": pl.Utf8,
    "performance_score": pl.Float64,
    "roas": pl.Float64,
    **{name: pl.Float64 for name in COUNTER_COLUMNS},
}

DAILY_SCHEMA = {
    "date_start": pl.Utf8,
    **{name: pl.Float64 for name in COUNTER_COLUMNS},
}


@dataclass
class PortfolioEngine:
    """Aggregates normalized campaigns into account-level KPIs.

    All methods are pure - they do not mutate the input campaigns. Rates
    are recomputed from summed counters, never averaged.

    Attributes:
        campaigns: Normalized campaigns from the payload loader

    Usage:
        engine = PortfolioEngine(campaigns)
        totals = engine.get_totals()
        timeline = engine.get_daily_timeline()
    """

    campaigns: Sequence[CampaignRecord]
    campaign_df: pl.DataFrame = field(init=False, repr=False)
    daily_df: pl.DataFrame = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Build the campaign and daily frames once."""
        self.campaign_df = pl.DataFrame(
            [self._campaign_row(c) for c in self.campaigns],
            schema=CAMPAIGN_SCHEMA,
        )
        self.daily_df = pl.DataFrame(
            [
                {"date_start": day.date_start, **{n: getattr(day, n) for n in COUNTER_COLUMNS}}
                for c in self.campaigns
                for day in c.metrics.daily_stats
            ],
            schema=DAILY_SCHEMA,
        )

    @staticmethod
    def _campaign_row(campaign: CampaignRecord) -> dict:
        m = campaign.metrics
        return {
            "campaign_id": campaign.id,
            "name": campaign.name,
            "performance_score": calculate_performance_score(m),
            "roas": m.roas,
            **{name: getattr(m, name) for name in COUNTER_COLUMNS},
        }

    # =========================================================================
    # TOTALS
    # =========================================================================

    def get_totals(self) -> PortfolioTotals:
        """Summed counters and recomputed rates across all campaigns."""
        row = (
            self.campaign_df.select(counter_totals_expr())
            .with_columns(derived_rates_expr())
            .to_dicts()[0]
        )

        return PortfolioTotals(
            campaign_count=len(self.campaign_df),
            total_spend=row["spend"] or 0.0,
            total_impressions=row["impressions"] or 0.0,
            total_clicks=row["clicks"] or 0.0,
            total_conversions=row["conversions"] or 0.0,
            total_revenue=row["revenue"] or 0.0,
            ctr=row["ctr"] or 0.0,
            cpc=row["cpc"] or 0.0,
            roas=row["roas"] or 0.0,
            conversion_rate=row["conversion_rate"] or 0.0,
        )

    # =========================================================================
    # TEMPORAL ANALYSIS
    # =========================================================================

    def get_daily_timeline(self) -> list[DailyTotals]:
        """Daily stats from every campaign, grouped by date and sorted ascending.

        Rows whose date label cannot be parsed are dropped.
        """
        daily = (
            self.daily_df.with_columns(parsed_date_expr())
            .drop_nulls("date")
            .group_by("date")
            .agg(counter_totals_expr())
            .with_columns(derived_rates_expr())
            .sort("date")
        )

        return [
            DailyTotals(
                date=row["date"],
                spend=row["spend"],
                impressions=row["impressions"],
                clicks=row["clicks"],
                conversions=row["conversions"],
                revenue=row["revenue"],
                ctr=row["ctr"],
                roas=row["roas"],
            )
            for row in daily.to_dicts()
        ]

    def get_spend_trend(self) -> Literal["increasing", "decreasing", "stable"]:
        """Direction of daily spend over the timeline (linear regression)."""
        return detect_trend([day.spend for day in self.get_daily_timeline()])

    # =========================================================================
    # RANKING
    # =========================================================================

    def rank_campaigns(self) -> list[CampaignRanking]:
        """Campaigns by composite performance score, best first.

        Ties keep the input order.
        """
        ranked = self.campaign_df.sort(
            "performance_score", descending=True, maintain_order=True
        ).with_row_index("rank", offset=1)

        return [
            CampaignRanking(
                rank=int(row["rank"]),
                campaign_id=row["campaign_id"],
                name=row["name"],
                performance_score=row["performance_score"],
                spend=row["spend"],
                roas=row["roas"],
            )
            for row in ranked.to_dicts()
        ]
