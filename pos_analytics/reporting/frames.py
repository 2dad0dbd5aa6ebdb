"""
Tabular Views

Converts orders and report fragments into Polars DataFrames so that table,
chart and CSV/PDF export layers can consume them without knowing the
domain types.
"""

from dataclasses import asdict, is_dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Sequence

import polars as pl
import structlog

from pos_analytics.config import Settings, get_settings
from pos_analytics.domain.models import Order
from .formatting import format_currency, format_percentage

logger = structlog.get_logger(__name__)

CURRENCY_KEYWORDS = ("price", "revenue", "total", "amount", "sales")
PERCENTAGE_KEYWORDS = ("percentage",)
COUNT_KEYWORDS = ("quantity", "orders", "count", "stock")


def _plain(value: Any) -> Any:
    """Unwrap decimals and enums into frame-friendly scalars"""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    return value


def orders_to_frame(orders: Iterable[Order]) -> pl.DataFrame:
    """One row per order"""
    rows = [
        {
            "order_id": order.id,
            "created_at": order.created_at,
            "payment_method": order.payment_method.value,
            "status": order.status,
            "item_count": len(order.items),
            "subtotal": float(order.subtotal),
            "tax": float(order.tax),
            "total": float(order.total),
        }
        for order in orders
    ]
    return pl.DataFrame(
        rows,
        schema={
            "order_id": pl.Utf8,
            "created_at": pl.Datetime,
            "payment_method": pl.Utf8,
            "status": pl.Utf8,
            "item_count": pl.Int64,
            "subtotal": pl.Float64,
            "tax": pl.Float64,
            "total": pl.Float64,
        },
    )


def order_items_to_frame(orders: Iterable[Order]) -> pl.DataFrame:
    """One row per order item, with product and category denormalized"""
    rows = [
        {
            "order_id": order.id,
            "item_id": item.id,
            "created_at": order.created_at,
            "product_id": item.product_id,
            "product_name": item.product.name,
            "category_id": item.product.category_id,
            "category_name": item.product.category.name,
            "quantity": item.quantity,
            "price": float(item.price),
            "line_total": float(item.line_total),
        }
        for order in orders
        for item in order.items
    ]
    return pl.DataFrame(
        rows,
        schema={
            "order_id": pl.Utf8,
            "item_id": pl.Utf8,
            "created_at": pl.Datetime,
            "product_id": pl.Utf8,
            "product_name": pl.Utf8,
            "category_id": pl.Utf8,
            "category_name": pl.Utf8,
            "quantity": pl.Int64,
            "price": pl.Float64,
            "line_total": pl.Float64,
        },
    )


def fragments_to_frame(fragments: Sequence[Any]) -> pl.DataFrame:
    """
    One row per report fragment.

    Column names are the fragment's field names. Decimal amounts become
    floats and enums their values.
    """
    rows = []
    for fragment in fragments:
        if not is_dataclass(fragment):
            raise TypeError(f"Expected a report fragment, got {type(fragment).__name__}")
        rows.append({key: _plain(value) for key, value in asdict(fragment).items()})

    if not rows:
        return pl.DataFrame()
    return pl.DataFrame(rows)


def format_frame_for_export(
    df: pl.DataFrame,
    settings: Optional[Settings] = None,
) -> pl.DataFrame:
    """
    Render money and percentage columns as display strings.

    Float columns whose name mentions price, revenue, total, amount or
    sales are formatted as currency, unless the name marks them as a count
    (quantity, orders, count, stock). Percentage columns get one decimal
    place and a percent sign. Integer columns are left as numbers.
    """
    settings = settings or get_settings()
    formatters: Dict[str, Any] = {}

    for column, dtype in df.schema.items():
        if not dtype.is_numeric():
            continue
        name = column.lower()
        is_count = any(keyword in name for keyword in COUNT_KEYWORDS)
        if dtype.is_float() and not is_count and any(keyword in name for keyword in CURRENCY_KEYWORDS):
            formatters[column] = lambda x: format_currency(x, settings)
        elif any(keyword in name for keyword in PERCENTAGE_KEYWORDS):
            formatters[column] = format_percentage

    if formatters:
        df = df.with_columns([
            pl.col(column).map_elements(func, return_dtype=pl.Utf8).alias(column)
            for column, func in formatters.items()
        ])

    logger.debug("Frame formatted for export", columns=list(formatters))
    return df
