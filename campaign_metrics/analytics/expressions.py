"""Reusable Polars expressions for portfolio aggregation."""

import polars as pl

COUNTER_COLUMNS = ("spend", "impressions", "clicks", "conversions", "revenue")


# =============================================================================
# GUARDED RATIOS
# =============================================================================


def safe_ratio_expr(numerator: str, denominator: str, scale: float = 1.0) -> pl.Expr:
    """numerator / denominator * scale, or 0 when the denominator is not positive."""
    return (
        pl.when(pl.col(denominator) > 0)
        .then(pl.col(numerator) / pl.col(denominator) * scale)
        .otherwise(pl.lit(0.0))
    )


def derived_rates_expr() -> list[pl.Expr]:
    """Recomputed rates over already summed counters.

    CTR and conversion rate are percentages; CPC and ROAS are plain ratios.
    """
    return [
        # CTR = clicks / impressions * 100
        safe_ratio_expr("clicks", "impressions", 100).alias("ctr"),
        # CPC = spend / clicks
        safe_ratio_expr("spend", "clicks").alias("cpc"),
        # ROAS = revenue / spend
        safe_ratio_expr("revenue", "spend").alias("roas"),
        # Conversion rate = conversions / clicks * 100
        safe_ratio_expr("conversions", "clicks", 100).alias("conversion_rate"),
    ]


# =============================================================================
# AGGREGATIONS
# =============================================================================


def counter_totals_expr() -> list[pl.Expr]:
    """Sum of every counter column, keeping the column names."""
    return [pl.col(name).sum().alias(name) for name in COUNTER_COLUMNS]


def parsed_date_expr(column: str = "date_start") -> pl.Expr:
    """Parse ISO date labels; unparseable labels become null."""
    return pl.col(column).str.to_date("%Y-%m-%d", strict=False).alias("date")
