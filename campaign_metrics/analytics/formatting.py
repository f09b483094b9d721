"""Display formatting for metric values."""

import math
from numbers import Real
from typing import Any, Literal

ValueKind = Literal["percentage", "currency", "number"]


def format_metric_value(value: Any, kind: ValueKind = "number", decimals: int = 2) -> str:
    """Format a metric for display.

    Examples:
        format_metric_value(3.456, "percentage") -> "3.46%"
        format_metric_value(1234.5, "currency") -> "$1234.50"
        format_metric_value(1234.5) -> "1,234.50"

    Non-numeric or NaN values render as "0".
    """
    if isinstance(value, bool) or not isinstance(value, Real) or math.isnan(value):
        return "0"

    if kind == "percentage":
        return f"{value:.{decimals}f}%"
    if kind == "currency":
        return f"${value:.{decimals}f}"
    return f"{value:,.{decimals}f}"
