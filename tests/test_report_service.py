"""Tests for the report service, config loading and command line."""

import json
import logging
from pathlib import Path

import pytest
import structlog

from campaign_metrics import __main__ as cli
from campaign_metrics.analytics.insights import InsightEngine, InsightThresholds
from campaign_metrics.config import MetricsConfig, load_metrics_config
from campaign_metrics.exceptions import PayloadLoadError, SchemaLoadError
from campaign_metrics.models.scorecard import CampaignScorecard
from campaign_metrics.services.cache import MetricsCache
from campaign_metrics.services.report_service import CampaignReportService, ReportOutput
from campaign_metrics.settings import Settings


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(clock) -> CampaignReportService:
    settings = Settings(cache_ttl_seconds=3600, cache_key="meta_campaigns")
    return CampaignReportService(
        settings=settings,
        cache=MetricsCache(ttl=3600, clock=clock),
    )


@pytest.fixture
def payload_file(campaigns_payload, tmp_path: Path) -> Path:
    path = tmp_path / "campaigns.json"
    path.write_text(json.dumps(campaigns_payload))
    return path


class TestGenerateReport:
    """Tests for generate_report()."""

    def test_returns_report_output(self, service, campaigns_payload) -> None:
        output = service.generate_report(campaigns_payload)
        assert isinstance(output, ReportOutput)
        assert all(isinstance(s, CampaignScorecard) for s in output.scorecards)
        assert len(output.scorecards) == 2

    def test_from_file(self, service, payload_file) -> None:
        output = service.generate_report(payload_file)
        assert output.totals.campaign_count == 2
        assert output.totals.total_spend == pytest.approx(100.0)

    def test_missing_file(self, service, tmp_path: Path) -> None:
        with pytest.raises(PayloadLoadError):
            service.generate_report(tmp_path / "missing.json")

    def test_scorecard_contents(self, service, campaigns_payload) -> None:
        scorecard = service.generate_report(campaigns_payload).scorecards[0]
        assert scorecard.is_valid
        assert scorecard.reliability.score == pytest.approx(100.0)
        assert scorecard.hourly.best_buckets == (9, 20, 14)
        assert scorecard.peak_hours == "9:00, 20:00, 14:00"
        assert scorecard.best_days == "Mon, Sat"
        assert scorecard.trends is None

    def test_empty_campaign_scored(self, service, campaigns_payload) -> None:
        """A campaign with no insights still gets a scorecard."""
        scorecard = service.generate_report(campaigns_payload).scorecards[1]
        assert scorecard.performance_score == pytest.approx(7.5)
        assert scorecard.hourly is None
        assert scorecard.peak_hours == "No data"

    def test_validation_errors_recorded(self, service) -> None:
        """Impossible metrics are reported on the scorecard, not raised."""
        payload = {
            "data": [
                {"id": "9", "insights": {"data": [{"impressions": 10, "clicks": 20}]}}
            ]
        }
        scorecard = service.generate_report(payload).scorecards[0]
        assert not scorecard.is_valid
        assert scorecard.validation_errors == [
            "Clicks cannot exceed impressions",
            "CTR cannot exceed 100%",
        ]

    def test_portfolio_sections(self, service, campaigns_payload) -> None:
        output = service.generate_report(campaigns_payload)
        assert [r.campaign_id for r in output.rankings] == ["1203", "1204"]
        assert len(output.daily_timeline) == 2
        assert output.spend_trend == "stable"


class TestSnapshotCache:
    """Trends against the previously cached snapshot."""

    def test_campaign_list_cached(self, service, campaigns_payload) -> None:
        service.generate_report(campaigns_payload)
        cached = service.get_cached_campaigns()
        assert [c.id for c in cached] == ["1203", "1204"]

    def test_trends_on_second_run(self, service, campaigns_payload) -> None:
        service.generate_report(campaigns_payload)
        scorecard = service.generate_report(campaigns_payload).scorecards[0]
        assert scorecard.trends is not None
        assert all(t.trend == "stable" for t in scorecard.trends.values())
        assert scorecard.trend_reliability == pytest.approx(100.0)

    def test_trends_against_changed_snapshot(self, service, campaigns_payload) -> None:
        service.generate_report(campaigns_payload)
        insight = campaigns_payload["data"][0]["insights"]["data"][0]
        insight["spend"] = "150.00"
        scorecard = service.generate_report(campaigns_payload).scorecards[0]
        assert scorecard.trends["spend"].trend == "up"
        assert scorecard.trends["spend"].change_percentage == pytest.approx(50.0)

    def test_expired_snapshot_ignored(self, service, campaigns_payload, clock) -> None:
        service.generate_report(campaigns_payload)
        clock.now += 3601
        assert service.get_cached_campaigns() is None
        scorecard = service.generate_report(campaigns_payload).scorecards[0]
        assert scorecard.trends is None

    def test_injected_cache_used(self, clock) -> None:
        """An empty injected cache is kept along with its clock and TTL."""
        cache = MetricsCache(ttl=5, clock=clock)
        service = CampaignReportService(settings=Settings(), cache=cache)
        assert service.cache is cache

    def test_more_campaigns_than_cache_entries(self, clock) -> None:
        """Every campaign keeps its snapshot when the account outgrows the cache bound."""
        payload = {
            "data": [
                {
                    "id": str(i),
                    "insights": {"data": [{"impressions": 1000, "clicks": 10}]},
                }
                for i in range(12)
            ]
        }
        service = CampaignReportService(
            settings=Settings(),
            cache=MetricsCache(ttl=3600, max_entries=10, clock=clock),
        )
        service.generate_report(payload)
        output = service.generate_report(payload)
        assert sum(1 for s in output.scorecards if s.trends is not None) == 12
        assert len(service.get_cached_campaigns()) == 12

    def test_snapshots_of_absent_campaigns_kept(self, service, campaigns_payload) -> None:
        service.generate_report(campaigns_payload)
        service.generate_report({"data": [campaigns_payload["data"][1]]})
        assert set(service.get_cached_snapshots()) == {"1203", "1204"}


class TestSerialization:
    """Summary dict and scorecard JSON."""

    def test_summary_is_json_serializable(self, service, campaigns_payload) -> None:
        output = service.generate_report(campaigns_payload)
        summary = service.generate_summary_dict(output)
        decoded = json.loads(json.dumps(summary))
        assert decoded["totals"]["roas"] == pytest.approx(4.5)
        assert decoded["daily_timeline"][0]["date"] == "2024-03-01"
        assert decoded["campaigns"][0]["confidence"] == "High"

    def test_scorecard_to_json(self, service, campaigns_payload) -> None:
        service.generate_report(campaigns_payload)
        scorecard = service.generate_report(campaigns_payload).scorecards[0]
        decoded = json.loads(scorecard.to_json())
        assert decoded["meta"]["campaign_id"] == "1203"
        assert decoded["metrics"]["quality_score"] == 7.0
        assert decoded["reliability"]["level"] == "High"
        assert decoded["trends"]["spend"]["trend"] == "stable"
        assert decoded["validation_errors"] == []

    def test_insights_serialized_like_engine(self, campaigns_payload) -> None:
        config = MetricsConfig(insights=InsightThresholds(roas_target=10.0))
        service = CampaignReportService(settings=Settings(), config=config)
        scorecard = service.generate_report(campaigns_payload).scorecards[0]
        rows = scorecard.to_dict()["insights"]
        assert rows == InsightEngine.to_dict(scorecard.insights)
        assert rows[0]["rule_id"] == "low_roas"
        assert rows[0]["severity"] == "amber"

    def test_executive_summary(self, service, campaigns_payload) -> None:
        scorecard = service.generate_report(campaigns_payload).scorecards[0]
        summary = scorecard.get_executive_summary()
        assert summary["campaign_id"] == "1203"
        assert summary["ctr_pct"] == pytest.approx(4.0)
        assert summary["is_valid"] is True


class TestMetricsConfig:
    """Tests for load_metrics_config()."""

    def test_bundled_config(self) -> None:
        config = load_metrics_config()
        assert config == MetricsConfig()
        assert config.reliability.min_impressions == 1000
        assert config.insights.roas_target == 2.0

    def test_partial_config(self, tmp_path: Path) -> None:
        """Sections that are absent keep their defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("insights:\n  roas_target: 3.0\n")
        config = load_metrics_config(path)
        assert config.insights == InsightThresholds(roas_target=3.0)
        assert config.confidence.high == 80

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("insights:\n  roas_goal: 3.0\n")
        with pytest.raises(SchemaLoadError):
            load_metrics_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SchemaLoadError):
            load_metrics_config(tmp_path / "missing.yaml")

    def test_service_uses_config(self, campaigns_payload) -> None:
        config = MetricsConfig(insights=InsightThresholds(roas_target=10.0))
        service = CampaignReportService(settings=Settings(), config=config)
        scorecard = service.generate_report(campaigns_payload).scorecards[0]
        assert [i.rule_id for i in scorecard.insights] == [
            "low_roas",
            "high_budget_utilization",
        ]


class TestCommandLine:
    """Tests for python -m campaign_metrics."""

    @pytest.fixture(autouse=True)
    def quiet_logging(self, monkeypatch):
        """Keep log lines out of the captured JSON output."""
        monkeypatch.setattr(cli, "setup_logging", lambda level: None)
        structlog.configure(
            wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL)
        )
        yield
        structlog.reset_defaults()

    def test_summary(self, payload_file, capsys) -> None:
        assert cli.main([str(payload_file)]) == 0
        summary = json.loads(capsys.readouterr().out)
        assert summary["totals"]["campaign_count"] == 2

    def test_single_campaign(self, payload_file, capsys) -> None:
        assert cli.main([str(payload_file), "--campaign", "1204"]) == 0
        scorecard = json.loads(capsys.readouterr().out)
        assert scorecard["meta"]["name"] == "Brand Awareness"

    def test_unknown_campaign(self, payload_file) -> None:
        assert cli.main([str(payload_file), "--campaign", "nope"]) == 1

    def test_unreadable_payload(self, tmp_path: Path) -> None:
        assert cli.main([str(tmp_path / "missing.json")]) == 1
