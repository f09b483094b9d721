from .campaign import CampaignRecord
from .normalized_metrics import (
    AgeBreakdown,
    BreakdownRow,
    DailyPerformance,
    DailyStat,
    GenderBreakdown,
    HourlyPerformance,
    NormalizedMetrics,
    PlacementBreakdown,
)

__all__ = [
    "AgeBreakdown",
    "BreakdownRow",
    "CampaignRecord",
    "DailyPerformance",
    "DailyStat",
    "GenderBreakdown",
    "HourlyPerformance",
    "NormalizedMetrics",
    "PlacementBreakdown",
]
