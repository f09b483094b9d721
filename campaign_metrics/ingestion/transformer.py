"""Metric transformer: raw vendor insight record -> NormalizedMetrics."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from ..analytics.stats import safe_div, safe_percentage
from ..exceptions import SchemaLoadError
from ..logging import get_logger
from ..models.normalized_metrics import (
    AgeBreakdown,
    BreakdownRow,
    DailyPerformance,
    DailyStat,
    GenderBreakdown,
    HourlyPerformance,
    NormalizedMetrics,
    PlacementBreakdown,
)
from .cleaner import (
    clean_integer_key,
    clean_label,
    clean_ranking,
    safe_nullable_number,
    safe_parse_float,
)

logger = get_logger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).parent.parent / "config" / "insight_schema.yaml"

BREAKDOWN_MODELS: dict[str, type[BreakdownRow]] = {
    "age_targeting_performance": AgeBreakdown,
    "gender_targeting_performance": GenderBreakdown,
    "placement_performance": PlacementBreakdown,
    "hourly_performance": HourlyPerformance,
    "daily_performance": DailyPerformance,
    "daily_stats": DailyStat,
}


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


@dataclass(frozen=True)
class BreakdownSpec:
    """How to read one breakdown collection."""

    key: str
    key_type: str = "label"  # "label" or "integer"


@dataclass(frozen=True)
class FieldRegistry:
    """Per-field parsing rules for raw insight records."""

    count_columns: tuple[str, ...]
    nullable_columns: tuple[str, ...]
    ranking_columns: tuple[str, ...]
    breakdown_columns: dict[str, BreakdownSpec]
    breakdown_numeric_columns: tuple[str, ...]
    aliases: dict[str, tuple[str, ...]] = field(default_factory=dict)

    def raw_keys(self, name: str) -> tuple[str, ...]:
        """Raw keys accepted for an internal name, in lookup order."""
        keys = [name, _camel_case(name), *self.aliases.get(name, ())]
        return tuple(dict.fromkeys(keys))

    def lookup(self, raw: Mapping[str, Any], name: str) -> Any:
        """First non-null raw value for an internal name, else None."""
        for key in self.raw_keys(name):
            value = raw.get(key)
            if value is not None:
                return value
        return None


def load_field_registry(path: Path = DEFAULT_SCHEMA_PATH) -> FieldRegistry:
    """Load the field registry from YAML.

    Raises:
        SchemaLoadError: If the file is missing or malformed.
    """
    try:
        with open(path) as f:
            schema = yaml.safe_load(f)["insight_record"]
        breakdowns = {
            name: BreakdownSpec(key=spec["key"], key_type=spec.get("key_type", "label"))
            for name, spec in schema.get("breakdown_columns", {}).items()
        }
        return FieldRegistry(
            count_columns=tuple(schema.get("count_columns", [])),
            nullable_columns=tuple(schema.get("nullable_columns", [])),
            ranking_columns=tuple(schema.get("ranking_columns", [])),
            breakdown_columns=breakdowns,
            breakdown_numeric_columns=tuple(schema.get("breakdown_numeric_columns", [])),
            aliases={k: tuple(v) for k, v in (schema.get("aliases") or {}).items()},
        )
    except (OSError, yaml.YAMLError, KeyError, TypeError, AttributeError) as e:
        raise SchemaLoadError(f"Failed to load field registry from {path}: {e}") from e


class MetricTransformer:
    """Converts raw vendor insight records into NormalizedMetrics.

    Fail-open: missing or unparseable fields become 0, None, "UNKNOWN" or an
    empty tuple depending on the field type. transform() never raises.

    Usage:
        transformer = MetricTransformer()
        metrics = transformer.transform({"impressions": "1000", "clicks": 50})
    """

    def __init__(self, registry: FieldRegistry | None = None):
        self.registry = registry or load_field_registry()

    def transform(self, raw: Mapping[str, Any] | None) -> NormalizedMetrics:
        """Normalize one raw insight record (an empty mapping is valid)."""
        if not isinstance(raw, Mapping):
            if raw is not None:
                logger.debug("insight_record_not_a_mapping", type=type(raw).__name__)
            raw = {}

        counts = {
            name: self._parse_number(name, self.registry.lookup(raw, name)) or 0.0
            for name in self.registry.count_columns
        }
        nullables = {
            name: self._parse_number(name, self.registry.lookup(raw, name))
            for name in self.registry.nullable_columns
        }
        rankings = {
            name: clean_ranking(self.registry.lookup(raw, name))
            for name in self.registry.ranking_columns
        }
        breakdowns = {
            name: self._transform_breakdown(name, spec, self.registry.lookup(raw, name))
            for name, spec in self.registry.breakdown_columns.items()
            if name in BREAKDOWN_MODELS
        }

        return NormalizedMetrics(
            **counts,
            **self._derive_ratios(counts),
            **nullables,
            **rankings,
            **breakdowns,
        )

    def _parse_number(self, name: str, value: Any) -> float | None:
        """Parse one raw field; present but unparseable values are logged."""
        parsed = safe_nullable_number(value)
        if parsed is None and value is not None:
            logger.debug("unparseable_field", field=name, value_type=type(value).__name__)
        return parsed

    def _derive_ratios(self, counts: dict[str, float]) -> dict[str, float]:
        """Ratios computed from parsed counters with guarded division."""
        impressions = counts.get("impressions", 0.0)
        clicks = counts.get("clicks", 0.0)
        spend = counts.get("spend", 0.0)
        unique_clicks = counts.get("unique_clicks", 0.0)

        return {
            "ctr": safe_percentage(clicks, impressions),
            "cpc": safe_div(spend, clicks),
            "roas": safe_div(counts.get("revenue", 0.0), spend),
            "conversion_rate": safe_percentage(counts.get("conversions", 0.0), clicks),
            "unique_ctr": safe_percentage(unique_clicks, counts.get("reach", 0.0)),
            "cost_per_unique_click": safe_div(spend, unique_clicks),
            "outbound_clicks_ctr": safe_percentage(
                counts.get("outbound_clicks", 0.0), impressions
            ),
            "engagement_rate": safe_percentage(
                counts.get("page_engagement", 0.0), impressions
            ),
            "cost_per_lead": safe_div(spend, counts.get("leads", 0.0)),
            "cost_per_purchase": safe_div(spend, counts.get("purchases", 0.0)),
        }

    def _transform_breakdown(
        self, name: str, spec: BreakdownSpec, rows: Any
    ) -> tuple[BreakdownRow, ...]:
        """Parse a breakdown collection; anything but a list of mappings is empty."""
        if not isinstance(rows, (list, tuple)):
            if rows is not None:
                logger.debug("breakdown_not_a_list", breakdown=name)
            return ()

        model = BREAKDOWN_MODELS[name]
        parsed: list[BreakdownRow] = []
        for row in rows:
            if not isinstance(row, Mapping):
                logger.debug("breakdown_row_skipped", breakdown=name)
                continue

            values = {
                column: safe_parse_float(self.registry.lookup(row, column))
                for column in self.registry.breakdown_numeric_columns
            }
            raw_key = self.registry.lookup(row, spec.key)
            if spec.key_type == "integer":
                values[spec.key] = clean_integer_key(raw_key)
            else:
                values[spec.key] = clean_label(raw_key)
            values["ctr"] = safe_percentage(
                values.get("clicks", 0.0), values.get("impressions", 0.0)
            )
            parsed.append(model(**values))

        return tuple(parsed)


@lru_cache(maxsize=1)
def _default_transformer() -> MetricTransformer:
    return MetricTransformer()


def transform(raw: Mapping[str, Any] | None) -> NormalizedMetrics:
    """Normalize one raw insight record with the bundled field registry."""
    return _default_transformer().transform(raw)
