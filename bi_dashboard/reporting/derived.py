"""
Presentation Statistics

Display-only figures the dashboard derives from already-fetched records:
top-N rankings, percentages, stock and price buckets, group counts and
summary statistics. Records are the API's JSON objects (camelCase keys);
missing or non-numeric values count as zero.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

import polars as pl

# Stock level thresholds (units in stock)
LOW_STOCK_MAX = 50
MEDIUM_STOCK_MAX = 100

# Price range thresholds (MSRP)
BUDGET_PRICE_BELOW = 50
PREMIUM_PRICE_ABOVE = 100


def _as_number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _column(records: Sequence[Mapping[str, Any]], field: str) -> pl.Series:
    return pl.Series(field, [_as_number(r.get(field)) for r in records], dtype=pl.Float64)


def top_n(records: Sequence[Mapping[str, Any]], field: str, n: int = 5) -> List[Mapping[str, Any]]:
    """
    First ``n`` records by ``field``, largest first.

    The sort is stable: equal values keep their original order.
    """
    if not records or n <= 0:
        return []

    ranking = (
        _column(records, field)
        .to_frame("value")
        .with_row_index("position")
        .sort("value", descending=True, maintain_order=True)
        .head(n)
    )
    return [records[i] for i in ranking["position"].to_list()]


def percentage_of_total(count: float, total: float, digits: Optional[int] = None) -> float:
    """``count / total × 100``; 0 for an empty total. ``digits`` rounds for display."""
    if not total:
        return 0.0
    value = _as_number(count) / _as_number(total) * 100
    return round(value, digits) if digits is not None else value


def average_order_value(total_revenue: float, total_orders: int) -> float:
    """Revenue per order for the dashboard card; a zero order count divides by 1."""
    return _as_number(total_revenue) / (total_orders or 1)


def stock_level(quantity: Any) -> str:
    """Classify units in stock: low (≤50), medium (51-100) or high (>100)."""
    value = _as_number(quantity)
    if value <= LOW_STOCK_MAX:
        return "low"
    if value <= MEDIUM_STOCK_MAX:
        return "medium"
    return "high"


def price_range(msrp: Any) -> str:
    """Classify a price: budget (<50), mid (50-100) or premium (>100)."""
    value = _as_number(msrp)
    if value < BUDGET_PRICE_BELOW:
        return "budget"
    if value <= PREMIUM_PRICE_ABOVE:
        return "mid"
    return "premium"


def stock_distribution(
    products: Sequence[Mapping[str, Any]],
    field: str = "quantityInStock",
) -> Dict[str, int]:
    """Count of products per stock level."""
    qty = pl.col(field)
    counts = (
        _column(products, field)
        .to_frame()
        .select(
            (qty <= LOW_STOCK_MAX).sum().alias("low"),
            ((qty > LOW_STOCK_MAX) & (qty <= MEDIUM_STOCK_MAX)).sum().alias("medium"),
            (qty > MEDIUM_STOCK_MAX).sum().alias("high"),
        )
        .row(0, named=True)
    )
    return {level: int(count or 0) for level, count in counts.items()}


def price_distribution(
    products: Sequence[Mapping[str, Any]],
    field: str = "MSRP",
) -> Dict[str, int]:
    """Count of products per price range."""
    price = pl.col(field)
    counts = (
        _column(products, field)
        .to_frame()
        .select(
            (price < BUDGET_PRICE_BELOW).sum().alias("budget"),
            ((price >= BUDGET_PRICE_BELOW) & (price <= PREMIUM_PRICE_ABOVE)).sum().alias("mid"),
            (price > PREMIUM_PRICE_ABOVE).sum().alias("premium"),
        )
        .row(0, named=True)
    )
    return {bucket: int(count or 0) for bucket, count in counts.items()}


def group_count(records: Sequence[Mapping[str, Any]], field: str) -> Dict[Any, int]:
    """
    Number of records per distinct ``field`` value, most frequent first.

    Ties keep first-seen order.
    """
    if not records:
        return {}

    counts = (
        pl.DataFrame({"key": [r.get(field) for r in records]})
        .group_by("key", maintain_order=True)
        .agg(pl.len().alias("count"))
        .sort("count", descending=True, maintain_order=True)
    )
    return dict(zip(counts["key"].to_list(), counts["count"].to_list()))


def calculate_stats(records: Sequence[Mapping[str, Any]], field: str) -> Dict[str, float]:
    """Min, max, mean, total and count of a numeric field."""
    if not records:
        return {"min": 0, "max": 0, "avg": 0, "total": 0, "count": 0}

    values = _column(records, field)
    return {
        "min": values.min(),
        "max": values.max(),
        "avg": round(values.mean(), 2),
        "total": round(values.sum(), 2),
        "count": len(values),
    }
