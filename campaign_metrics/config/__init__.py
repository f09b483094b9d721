"""Threshold configuration loaded from metrics_config.yaml."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from ..analytics.insights import InsightThresholds
from ..analytics.validation import ConfidenceThresholds, ReliabilityThresholds
from ..exceptions import SchemaLoadError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "metrics_config.yaml"


@dataclass(frozen=True)
class MetricsConfig:
    """All tunable thresholds in one place."""

    reliability: ReliabilityThresholds = field(default_factory=ReliabilityThresholds)
    confidence: ConfidenceThresholds = field(default_factory=ConfidenceThresholds)
    insights: InsightThresholds = field(default_factory=InsightThresholds)


def load_metrics_config(path: Path | None = None) -> MetricsConfig:
    """Load thresholds from YAML; sections that are absent keep their defaults.

    Raises:
        SchemaLoadError: If the file is missing, not YAML, or has unknown keys.
    """
    path = path or DEFAULT_CONFIG_PATH
    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise SchemaLoadError(f"Failed to load metrics config from {path}: {e}") from e

    if not isinstance(raw, dict):
        raise SchemaLoadError(f"Metrics config {path} must be a mapping")

    try:
        return MetricsConfig(
            reliability=ReliabilityThresholds(**(raw.get("reliability") or {})),
            confidence=ConfidenceThresholds(**(raw.get("confidence") or {})),
            insights=InsightThresholds(**(raw.get("insights") or {})),
        )
    except TypeError as e:
        raise SchemaLoadError(f"Invalid metrics config {path}: {e}") from e
