"""Enrichment of raw insight records - flatten vendor action lists."""

from collections.abc import Mapping, Sequence
from typing import Any

from .cleaner import safe_parse_float

# Flat field -> action_type aliases, first match wins
ACTION_ALIASES: dict[str, tuple[str, ...]] = {
    "link_clicks": ("link_click", "omni_link_click"),
    "page_engagement": ("post_engagement", "page_engagement"),
    "leads": ("lead", "omni_lead", "offsite_conversion.fb_pixel_lead"),
    "purchases": ("purchase", "omni_purchase", "offsite_conversion.fb_pixel_purchase"),
}

VALUE_ALIASES: dict[str, tuple[str, ...]] = {
    "revenue": ("purchase", "omni_purchase", "offsite_conversion.fb_pixel_purchase"),
}


def action_value(actions: Any, candidates: Sequence[str]) -> float | None:
    """Value of the first matching action_type in a vendor action list.

    Returns None when the list is missing, malformed, or has no match.
    """
    if not isinstance(actions, (list, tuple)):
        return None

    by_type = {
        a.get("action_type"): a.get("value")
        for a in actions
        if isinstance(a, Mapping)
    }
    for candidate in candidates:
        if candidate in by_type:
            return safe_parse_float(by_type[candidate])
    return None


def _sum_actions(actions: Any) -> float | None:
    """Total of all values in an action list (e.g. outbound_clicks)."""
    if not isinstance(actions, (list, tuple)):
        return None
    return sum(
        safe_parse_float(a.get("value")) for a in actions if isinstance(a, Mapping)
    )


def enrich(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``raw`` with action lists flattened into counters.

    Flat keys already present in the record are never overwritten. The
    input mapping is not mutated.
    """
    enriched = dict(raw) if isinstance(raw, Mapping) else {}
    actions = enriched.get("actions")

    for flat_key, candidates in ACTION_ALIASES.items():
        if enriched.get(flat_key) is None:
            value = action_value(actions, candidates)
            if value is not None:
                enriched[flat_key] = value

    for flat_key, candidates in VALUE_ALIASES.items():
        if enriched.get(flat_key) is None:
            value = action_value(enriched.get("action_values"), candidates)
            if value is not None:
                enriched[flat_key] = value

    # The Graph API reports outbound_clicks as an action list
    outbound = _sum_actions(enriched.get("outbound_clicks"))
    if outbound is not None:
        enriched["outbound_clicks"] = outbound

    if enriched.get("conversions") is None and (
        "leads" in enriched or "purchases" in enriched
    ):
        enriched["conversions"] = safe_parse_float(
            enriched.get("leads")
        ) + safe_parse_float(enriched.get("purchases"))

    return enriched
