"""Tests for the metric transformer."""

from pathlib import Path

import pytest
from pydantic import ValidationError
from structlog.testing import capture_logs

from campaign_metrics.exceptions import SchemaLoadError
from campaign_metrics.ingestion.enricher import enrich
from campaign_metrics.ingestion.transformer import (
    MetricTransformer,
    load_field_registry,
    transform,
)
from campaign_metrics.models.normalized_metrics import (
    HourlyPerformance,
    NormalizedMetrics,
)


class TestDefaults:
    """Missing fields get their typed defaults."""

    def test_empty_record(self) -> None:
        """An empty record is valid and fully defaulted."""
        metrics = transform({})
        assert metrics == NormalizedMetrics()
        assert metrics.impressions == 0
        assert metrics.ctr == 0
        assert metrics.quality_score is None
        assert metrics.quality_ranking == "UNKNOWN"
        assert metrics.hourly_performance == ()

    def test_non_mapping_input(self) -> None:
        """None and non-mapping input are treated as empty."""
        assert transform(None) == NormalizedMetrics()
        assert transform(["impressions", 10]) == NormalizedMetrics()

    def test_garbage_values(self) -> None:
        """Unparseable values never raise and never produce NaN."""
        metrics = transform({"impressions": "lots", "clicks": None, "spend": "abc"})
        assert metrics.impressions == 0
        assert metrics.cpc == 0

    def test_unparseable_fields_logged(self) -> None:
        """Present but unparseable values are logged; absent ones are not."""
        with capture_logs() as logs:
            metrics = transform({"impressions": "1,5", "clicks": None, "quality_score": "7,5"})
        assert metrics.impressions == 0
        assert metrics.quality_score is None
        fields = [e["field"] for e in logs if e["event"] == "unparseable_field"]
        assert fields == ["impressions", "quality_score"]


class TestDerivedRatios:
    """Ratios are recomputed from parsed counters."""

    def test_round_trip_example(self) -> None:
        """String and numeric inputs produce the documented ratios."""
        metrics = transform(
            {
                "impressions": 1000,
                "clicks": 50,
                "spend": "100.00",
                "conversions": 5,
                "revenue": 500,
            }
        )
        assert metrics.ctr == pytest.approx(5.0)
        assert metrics.cpc == pytest.approx(2.0)
        assert metrics.roas == pytest.approx(5.0)
        assert metrics.conversion_rate == pytest.approx(10.0)

    def test_zero_denominators(self) -> None:
        """Clicks without impressions gives CTR 0, not infinity."""
        metrics = transform({"clicks": 10, "revenue": 100})
        assert metrics.ctr == 0
        assert metrics.roas == 0

    def test_vendor_ratios_ignored(self) -> None:
        """A vendor-supplied CTR is not trusted."""
        metrics = transform({"impressions": 100, "clicks": 1, "ctr": "99"})
        assert metrics.ctr == pytest.approx(1.0)

    def test_enriched_record(self, raw_insight) -> None:
        """Flattened actions feed the derived ratios."""
        metrics = transform(enrich(raw_insight))
        assert metrics.ctr == pytest.approx(4.0)
        assert metrics.roas == pytest.approx(4.5)
        assert metrics.conversion_rate == pytest.approx(5.0)
        assert metrics.unique_ctr == pytest.approx(3.75)
        assert metrics.outbound_clicks_ctr == pytest.approx(2.4)
        assert metrics.engagement_rate == pytest.approx(8.0)
        assert metrics.cost_per_purchase == pytest.approx(25.0)


class TestNullableFields:
    """Quality fields keep a value / zero / absent distinction."""

    def test_zero_score_kept(self) -> None:
        assert transform({"quality_score": 0}).quality_score == 0.0

    def test_missing_score_is_none(self) -> None:
        assert transform({"quality_score": None}).quality_score is None

    def test_alias_and_camel_case(self) -> None:
        """Raw keys may use aliases or camelCase."""
        metrics = transform({"relevance_score": "6", "landingPageScore": 8})
        assert metrics.ad_relevance_score == 6.0
        assert metrics.landing_page_score == 8.0


class TestBreakdowns:
    """Nested per-bucket rows."""

    def test_hourly_rows(self, raw_insight) -> None:
        """Rows are parsed in order with their own CTR."""
        hourly = transform(raw_insight).hourly_performance
        assert [h.hour for h in hourly] == [9, 14, 20]
        assert isinstance(hourly[0], HourlyPerformance)
        assert hourly[0].ctr == pytest.approx(5.0)
        assert hourly[1].ctr == pytest.approx(3.0)

    def test_date_alias(self, raw_insight) -> None:
        stats = transform(raw_insight).daily_stats
        assert [d.date_start for d in stats] == ["2024-03-01", "2024-03-02"]

    def test_malformed_breakdown(self) -> None:
        """A non-list breakdown is empty; non-mapping rows are skipped."""
        metrics = transform(
            {
                "hourly_performance": "not a list",
                "daily_performance": [None, {"day_of_week": "3", "clicks": 1}],
            }
        )
        assert metrics.hourly_performance == ()
        assert len(metrics.daily_performance) == 1
        assert metrics.daily_performance[0].day_of_week == 3


class TestIdempotence:
    """Pure function properties."""

    def test_same_input_same_output(self, raw_insight) -> None:
        assert transform(raw_insight) == transform(raw_insight)

    def test_input_not_mutated(self, raw_insight) -> None:
        before = repr(raw_insight)
        transform(raw_insight)
        assert repr(raw_insight) == before

    def test_snapshot_is_frozen(self) -> None:
        metrics = transform({"impressions": 10})
        with pytest.raises(ValidationError):
            metrics.impressions = 20  # type: ignore[misc]


class TestFieldRegistry:
    """Tests for load_field_registry()."""

    def test_bundled_registry(self) -> None:
        registry = load_field_registry()
        assert "impressions" in registry.count_columns
        assert "quality_score" in registry.nullable_columns
        assert registry.breakdown_columns["hourly_performance"].key_type == "integer"

    def test_raw_keys_order(self) -> None:
        registry = load_field_registry()
        assert registry.raw_keys("unique_clicks")[:2] == ("unique_clicks", "uniqueClicks")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SchemaLoadError):
            load_field_registry(tmp_path / "missing.yaml")

    def test_malformed_file(self, tmp_path: Path) -> None:
        path = tmp_path / "schema.yaml"
        path.write_text("other_key: []\n")
        with pytest.raises(SchemaLoadError):
            load_field_registry(path)

    def test_custom_registry(self, tmp_path: Path) -> None:
        """A custom registry controls which raw keys are read."""
        path = tmp_path / "schema.yaml"
        path.write_text(
            "insight_record:\n"
            "  count_columns: [impressions, clicks]\n"
            "  aliases:\n"
            "    impressions: [imps]\n"
        )
        metrics = MetricTransformer(load_field_registry(path)).transform(
            {"imps": 200, "clicks": 10, "spend": 5}
        )
        assert metrics.impressions == 200
        assert metrics.spend == 0
        assert metrics.ctr == pytest.approx(5.0)
