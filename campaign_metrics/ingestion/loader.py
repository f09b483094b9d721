"""Campaign payload loader - vendor campaigns response -> CampaignRecord list."""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..exceptions import PayloadLoadError
from ..logging import get_logger
from ..models.campaign import CampaignRecord
from .cleaner import safe_parse_float
from .enricher import enrich
from .transformer import MetricTransformer

logger = get_logger(__name__)

# Vendor budgets are reported in minor currency units (cents)
BUDGET_MINOR_UNITS = 100


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


class CampaignPayloadLoader:
    """Pipeline for reading, enriching, and normalizing campaign insight data.

    Accepts the Graph API campaigns response (``{"data": [...]}``), the
    dashboard API envelope (``{"data": {"campaigns": [...]}}``) or a bare
    list of campaigns.

    Usage:
        loader = CampaignPayloadLoader()
        campaigns = loader.load(Path("exports/campaigns.json"))
    """

    def __init__(self, transformer: MetricTransformer | None = None):
        self.transformer = transformer or MetricTransformer()

    def load(self, path: Path) -> list[CampaignRecord]:
        """Full pipeline: Read -> Extract -> Enrich -> Transform.

        Raises:
            PayloadLoadError: If the file cannot be read or is not JSON.
        """
        try:
            with open(path) as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PayloadLoadError(path, str(e)) from e

        return self.from_payload(payload)

    def from_payload(self, payload: Any) -> list[CampaignRecord]:
        """Normalize every campaign in an already-decoded payload."""
        campaigns = self._extract_campaigns(payload)
        records = [
            self._to_record(campaign)
            for campaign in campaigns
            if isinstance(campaign, Mapping)
        ]
        logger.info("campaign_payload_loaded", campaigns=len(records))
        return records

    def _extract_campaigns(self, payload: Any) -> list[Any]:
        if isinstance(payload, list):
            return payload
        if not isinstance(payload, Mapping):
            return []

        data = payload.get("data")
        if isinstance(data, Mapping):
            data = data.get("campaigns")
        return data if isinstance(data, list) else []

    def _insight_row(self, campaign: Mapping[str, Any]) -> Mapping[str, Any]:
        """First insight row for the period, or {} for a campaign without one."""
        insights = campaign.get("insights")
        if not isinstance(insights, Mapping):
            return {}
        rows = insights.get("data")
        if isinstance(rows, list) and rows and isinstance(rows[0], Mapping):
            return rows[0]
        return {}

    def _to_record(self, campaign: Mapping[str, Any]) -> CampaignRecord:
        raw = enrich(self._insight_row(campaign))
        budget = safe_parse_float(
            campaign.get("daily_budget") or campaign.get("lifetime_budget")
        )

        return CampaignRecord(
            id=str(campaign.get("id", "")),
            name=str(campaign.get("name") or ""),
            status=str(campaign.get("status") or "UNKNOWN"),
            objective=_optional_str(campaign.get("objective")),
            budget=budget / BUDGET_MINOR_UNITS,
            start_time=_optional_str(campaign.get("start_time")),
            end_time=_optional_str(campaign.get("end_time")),
            ad_account_id=_optional_str(
                campaign.get("adAccountId") or campaign.get("account_id")
            ),
            ad_account_name=_optional_str(campaign.get("adAccountName")),
            metrics=self.transformer.transform(raw),
        )
