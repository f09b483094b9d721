"""Pydantic model for a campaign with its normalized metrics."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .normalized_metrics import NormalizedMetrics


class CampaignRecord(BaseModel):
    """Single ad campaign as read from a vendor campaigns payload.

    Budget is in major currency units (the vendor reports minor units).
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    status: str = "UNKNOWN"
    objective: Optional[str] = None
    budget: float = 0.0
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    ad_account_id: Optional[str] = None
    ad_account_name: Optional[str] = None

    metrics: NormalizedMetrics = NormalizedMetrics()
