"""Shared fixtures: raw Graph API insight rows and campaign payloads."""

from typing import Any

import pytest


@pytest.fixture
def raw_insight() -> dict[str, Any]:
    """A realistic insight row with string numbers, actions and breakdowns."""
    return {
        "impressions": "5000",
        "clicks": "200",
        "spend": "100.00",
        "reach": "4000",
        "frequency": "1.25",
        "unique_clicks": "150",
        "quality_score": "7",
        "relevance_score": 6,
        "quality_ranking": "ABOVE_AVERAGE",
        "actions": [
            {"action_type": "link_click", "value": "180"},
            {"action_type": "post_engagement", "value": "400"},
            {"action_type": "lead", "value": "6"},
            {"action_type": "purchase", "value": "4"},
        ],
        "action_values": [{"action_type": "purchase", "value": "450.00"}],
        "outbound_clicks": [{"action_type": "outbound_click", "value": "120"}],
        "hourly_stats": [
            {"hour": 9, "impressions": "1000", "clicks": "50"},
            {"hour": 14, "impressions": "2000", "clicks": "60"},
            {"hour": 20, "impressions": "2000", "clicks": "90"},
        ],
        "daily_performance": [
            {"day_of_week": 1, "impressions": 2500, "clicks": 100},
            {"day_of_week": 6, "impressions": 2500, "clicks": 100},
        ],
        "daily_stats": [
            {"date": "2024-03-01", "impressions": 2500, "clicks": 100, "spend": 40,
             "conversions": 2, "revenue": 150},
            {"date": "2024-03-02", "impressions": 2500, "clicks": 100, "spend": 60,
             "conversions": 3, "revenue": 300},
        ],
    }


@pytest.fixture
def campaigns_payload(raw_insight: dict[str, Any]) -> dict[str, Any]:
    """Graph API campaigns response with one populated and one empty campaign."""
    return {
        "data": [
            {
                "id": "1203",
                "name": "Spring Sale",
                "status": "ACTIVE",
                "objective": "OUTCOME_SALES",
                "daily_budget": "10000",
                "insights": {"data": [raw_insight]},
            },
            {
                "id": "1204",
                "name": "Brand Awareness",
                "status": "PAUSED",
                "lifetime_budget": "50000",
            },
        ]
    }
