"""Rule-based insight generation for a single campaign."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from ..models.campaign import CampaignRecord
from .stats import safe_div, safe_percentage
from .validation import ReliabilityThresholds, calculate_data_reliability

Impact = Literal["high", "medium", "low"]


class Severity(str, Enum):
    """Insight severity levels."""

    GREEN = "green"  # Good / On track
    AMBER = "amber"  # Warning / Needs attention
    RED = "red"  # Critical / Action required


@dataclass(frozen=True)
class Insight:
    """Single insight with description, severity, and recommendation."""

    rule_id: str
    description: str
    severity: Severity
    recommendation: str
    impact: Impact
    metrics: dict[str, Any] | None = None


@dataclass
class InsightThresholds:
    """Configurable thresholds for insight rules.

    Percentages are expressed on the 0-100 scale (1.0 = 1%).
    """

    # Low ROAS: revenue / spend below target
    roas_target: float = 2.0

    # Low CTR: CTR below X%
    ctr_floor_pct: float = 1.0

    # Budget Utilization: spend above X% of budget
    budget_utilization_pct: float = 90.0

    # Conversion Trend: number of most recent daily stats compared
    recent_days: int = 7

    # Data Reliability: score below X
    min_reliability: float = 50.0


class InsightEngine:
    """Rule-based insight generator.

    Applies business rules to one campaign's normalized metrics and returns
    actionable insights.

    Usage:
        engine = InsightEngine(record, thresholds=InsightThresholds())
        insights = engine.generate_all_insights()
    """

    def __init__(
        self,
        record: CampaignRecord,
        thresholds: InsightThresholds | None = None,
        reliability: ReliabilityThresholds | None = None,
    ):
        self.record = record
        self.metrics = record.metrics
        self.thresholds = thresholds or InsightThresholds()
        self.reliability = reliability or ReliabilityThresholds()

    def generate_all_insights(self) -> list[Insight]:
        """Run all insight rules and return detected insights."""
        insights: list[Insight] = []

        insights.extend(self._check_low_roas())
        insights.extend(self._check_low_ctr())
        insights.extend(self._check_budget_utilization())
        insights.extend(self._check_conversion_trend())
        insights.extend(self._check_reliability())

        return insights

    def _check_low_roas(self) -> list[Insight]:
        """Check for ROAS below the target multiple."""
        roas = self.metrics.roas
        if roas >= self.thresholds.roas_target:
            return []

        return [
            Insight(
                rule_id="low_roas",
                description=(
                    f"ROAS of {roas:.2f}x is below the "
                    f"{self.thresholds.roas_target:.1f}x target"
                ),
                severity=Severity.AMBER,
                recommendation=(
                    "Consider adjusting bid strategy or reviewing targeting options."
                ),
                impact="high",
                metrics={"roas": round(roas, 2), "target": self.thresholds.roas_target},
            )
        ]

    def _check_low_ctr(self) -> list[Insight]:
        """Check for CTR below the floor."""
        ctr = self.metrics.ctr
        if ctr >= self.thresholds.ctr_floor_pct:
            return []

        return [
            Insight(
                rule_id="low_ctr",
                description=f"Click-through rate of {ctr:.2f}% is below industry average",
                severity=Severity.AMBER,
                recommendation=(
                    "Review ad creative and copy for improvement opportunities."
                ),
                impact="medium",
                metrics={
                    "ctr_pct": round(ctr, 2),
                    "floor_pct": self.thresholds.ctr_floor_pct,
                },
            )
        ]

    def _check_budget_utilization(self) -> list[Insight]:
        """Check for spend close to or above budget."""
        utilization = safe_percentage(self.metrics.spend, self.record.budget)
        if utilization <= self.thresholds.budget_utilization_pct:
            return []

        return [
            Insight(
                rule_id="high_budget_utilization",
                description=f"Budget utilization is high at {utilization:.1f}%",
                severity=Severity.AMBER,
                recommendation=(
                    "Consider increasing budget to maintain campaign performance."
                ),
                impact="medium",
                metrics={
                    "spend": round(self.metrics.spend, 2),
                    "budget": round(self.record.budget, 2),
                    "utilization_pct": round(utilization, 1),
                },
            )
        ]

    def _check_conversion_trend(self) -> list[Insight]:
        """Check whether recent daily conversion rates beat the overall rate."""
        recent = self.metrics.daily_stats[-self.thresholds.recent_days :]
        if not recent or self.thresholds.recent_days <= 0:
            return []

        recent_rate = sum(
            safe_percentage(day.conversions, day.clicks) for day in recent
        ) / len(recent)
        overall_rate = self.metrics.conversion_rate

        if recent_rate <= overall_rate:
            return []

        return [
            Insight(
                rule_id="conversion_rate_improving",
                description=(
                    f"Conversion rate is improving: {recent_rate:.2f}% over the last "
                    f"{len(recent)} days vs {overall_rate:.2f}% overall"
                ),
                severity=Severity.GREEN,
                recommendation=(
                    "Consider increasing budget to capitalize on good performance."
                ),
                impact="high",
                metrics={
                    "recent_conversion_rate": round(recent_rate, 2),
                    "overall_conversion_rate": round(overall_rate, 2),
                    "days": len(recent),
                    "lift_pct": round(
                        safe_div(recent_rate - overall_rate, overall_rate) * 100, 1
                    ),
                },
            )
        ]

    def _check_reliability(self) -> list[Insight]:
        """Check for data too thin to trust the other insights."""
        score = calculate_data_reliability(self.metrics, self.reliability)
        if score >= self.thresholds.min_reliability:
            return []

        return [
            Insight(
                rule_id="low_reliability",
                description=f"Data reliability is low ({score:.0f}/100)",
                severity=Severity.AMBER,
                recommendation=(
                    "Wait for more delivery volume or enable hourly and daily "
                    "breakdowns before acting on these metrics."
                ),
                impact="low",
                metrics={"reliability_score": round(score, 1)},
            )
        ]

    @staticmethod
    def to_dict(insights: list[Insight]) -> list[dict[str, Any]]:
        """Convert insights list to JSON-serializable format."""
        return [
            {
                "rule_id": i.rule_id,
                "description": i.description,
                "severity": i.severity.value,
                "recommendation": i.recommendation,
                "impact": i.impact,
                "metrics": i.metrics,
            }
            for i in insights
        ]
