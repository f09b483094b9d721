"""Strict invariant validation and advisory reliability scoring.

validate_metrics() is fail-closed: it raises on logically impossible data.
The reliability scorers are advisory only and never raise.
"""

from collections.abc import Callable
from dataclasses import dataclass

from ..exceptions import MetricsValidationError
from ..logging import get_logger
from ..models.normalized_metrics import NormalizedMetrics
from .models import ConfidenceLevel, ReliabilityReport
from .stats import safe_percentage

logger = get_logger(__name__)

Rule = tuple[str, Callable[[NormalizedMetrics], bool]]

# (message, predicate that holds for valid data)
INVARIANT_RULES: tuple[Rule, ...] = (
    ("Clicks cannot exceed impressions", lambda m: m.clicks <= m.impressions),
    ("Conversions cannot exceed clicks", lambda m: m.conversions <= m.clicks),
    ("Spend cannot be negative", lambda m: m.spend >= 0),
    ("Revenue cannot be negative", lambda m: m.revenue >= 0),
    ("CTR cannot exceed 100%", lambda m: m.ctr <= 100),
    ("Unique clicks cannot exceed total clicks", lambda m: m.unique_clicks <= m.clicks),
    ("Leads cannot exceed total conversions", lambda m: m.leads <= m.conversions),
    ("Purchases cannot exceed total conversions", lambda m: m.purchases <= m.conversions),
)


@dataclass(frozen=True)
class ReliabilityThresholds:
    """Data-volume thresholds for the reliability checklist."""

    min_impressions: float = 1000
    min_clicks: float = 100


@dataclass(frozen=True)
class ConfidenceThresholds:
    """Score cut-offs for the High/Medium/Low badge."""

    high: float = 80.0
    medium: float = 50.0


def validate_metrics(metrics: NormalizedMetrics | None) -> None:
    """Check every invariant and raise once with all violations.

    Raises:
        MetricsValidationError: Listing every violated rule.
    """
    if metrics is None:
        raise MetricsValidationError(["Metrics object is required"])

    violations = [message for message, holds in INVARIANT_RULES if not holds(metrics)]
    if violations:
        logger.info("metrics_invariants_violated", violations=violations)
        raise MetricsValidationError(violations)


validate = validate_metrics


def confidence_level(
    score: float, thresholds: ConfidenceThresholds | None = None
) -> ConfidenceLevel:
    """Map a 0-100 reliability score to a confidence badge."""
    thresholds = thresholds or ConfidenceThresholds()
    if score >= thresholds.high:
        return ConfidenceLevel.HIGH
    if score >= thresholds.medium:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def _report(
    checks: list[tuple[str, bool]], confidence: ConfidenceThresholds | None
) -> ReliabilityReport:
    passed = tuple(name for name, ok in checks if ok)
    failed = tuple(name for name, ok in checks if not ok)
    score = len(passed) / len(checks) * 100
    return ReliabilityReport(
        score=score,
        level=confidence_level(score, confidence),
        passed_checks=passed,
        failed_checks=failed,
    )


def _volume_checks(
    m: NormalizedMetrics, t: ReliabilityThresholds, prefix: str = ""
) -> list[tuple[str, bool]]:
    return [
        (f"{prefix}impressions_volume", m.impressions > t.min_impressions),
        (f"{prefix}clicks_volume", m.clicks > t.min_clicks),
    ]


def assess_data_reliability(
    metrics: NormalizedMetrics,
    thresholds: ReliabilityThresholds | None = None,
    confidence: ConfidenceThresholds | None = None,
) -> ReliabilityReport:
    """Run the single-snapshot reliability checklist."""
    t = thresholds or ReliabilityThresholds()
    m = metrics
    checks = [
        *_volume_checks(m, t),
        ("has_spend", m.spend > 0),
        ("ctr_below_100", m.ctr < 100),
        ("conversion_rate_below_100", safe_percentage(m.conversions, m.clicks) < 100),
        ("unique_clicks_consistent", m.unique_clicks <= m.clicks),
        ("conversions_consistent", m.conversions <= m.clicks),
        ("has_hourly_breakdown", bool(m.hourly_performance)),
        ("has_daily_breakdown", bool(m.daily_performance)),
        ("has_quality_score", m.quality_score is not None),
        ("has_ad_relevance_score", m.ad_relevance_score is not None),
    ]
    return _report(checks, confidence)


def calculate_data_reliability(
    metrics: NormalizedMetrics,
    thresholds: ReliabilityThresholds | None = None,
) -> float:
    """Share of passed reliability checks, 0-100."""
    return assess_data_reliability(metrics, thresholds).score


def assess_trend_reliability(
    current: NormalizedMetrics,
    previous: NormalizedMetrics,
    thresholds: ReliabilityThresholds | None = None,
    confidence: ConfidenceThresholds | None = None,
) -> ReliabilityReport:
    """Run the checklist against both snapshots of a period comparison."""
    t = thresholds or ReliabilityThresholds()
    checks: list[tuple[str, bool]] = []
    for prefix, m in (("current_", current), ("previous_", previous)):
        checks.extend(_volume_checks(m, t, prefix))
    for prefix, m in (("current_", current), ("previous_", previous)):
        checks.append((f"{prefix}ctr_below_100", m.ctr < 100))
    for prefix, m in (("current_", current), ("previous_", previous)):
        checks.append((f"{prefix}conversions_consistent", m.conversions <= m.clicks))
    for prefix, m in (("current_", current), ("previous_", previous)):
        checks.append((f"{prefix}has_hourly_breakdown", bool(m.hourly_performance)))
    for prefix, m in (("current_", current), ("previous_", previous)):
        checks.append((f"{prefix}has_daily_breakdown", bool(m.daily_performance)))
    return _report(checks, confidence)


def calculate_trend_reliability(
    current: NormalizedMetrics,
    previous: NormalizedMetrics,
    thresholds: ReliabilityThresholds | None = None,
) -> float:
    """Combined share of passed checks over both snapshots, 0-100."""
    return assess_trend_reliability(current, previous, thresholds).score
