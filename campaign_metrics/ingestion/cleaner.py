"""Field-level cleaning for raw vendor insight values.

Vendor numbers arrive as strings, numbers, or nulls. Nothing here raises.
"""

import math
import re
from numbers import Number
from typing import Any

UNKNOWN_RANKING = "UNKNOWN"

# "1,234" and "-1,234,567.50"; any other comma makes the value unparseable
THOUSANDS_PATTERN = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$")


def _parse(value: Any) -> float | None:
    """Parse a raw value to a finite float, or None if that is impossible."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        if "," in text:
            if not THOUSANDS_PATTERN.match(text):
                return None
            text = text.replace(",", "")
        try:
            parsed = float(text)
        except ValueError:
            return None
    elif isinstance(value, Number):
        try:
            parsed = float(value)
        except (TypeError, ValueError, OverflowError):
            return None
    else:
        return None

    return parsed if math.isfinite(parsed) else None


def safe_parse_float(value: Any) -> float:
    """Parse a counter value; 0 when null, missing, or unparseable."""
    parsed = _parse(value)
    return 0.0 if parsed is None else parsed


def safe_nullable_number(value: Any) -> float | None:
    """Parse a quality/targeting value, keeping None when it is absent.

    A score of 0 and a missing score are different facts, so absence is
    never collapsed to 0.
    """
    return _parse(value)


def clean_ranking(value: Any) -> str:
    """Normalize a vendor ranking label, defaulting to UNKNOWN."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return UNKNOWN_RANKING


def clean_label(value: Any, default: str = "unknown") -> str:
    """Normalize a breakdown label (age range, gender, placement, date)."""
    if value is None or isinstance(value, (dict, list, tuple)):
        return default
    text = str(value).strip()
    return text or default


def clean_integer_key(value: Any) -> int:
    """Parse an hour or day-of-week bucket key, defaulting to 0."""
    return int(safe_parse_float(value))
