"""
Sales Metrics

Scalar summary statistics over an order set and period-over-period growth.
"""

from decimal import Decimal
from typing import List, Sequence, Union

import structlog

from pos_analytics.domain.models import MetricComparison, Order, SalesMetrics

logger = structlog.get_logger(__name__)

Number = Union[Decimal, int, float]

ZERO = Decimal("0")


def average(total: Decimal, count: int) -> Decimal:
    """Mean of a total over a count, zero when the count is zero"""
    return total / count if count > 0 else ZERO


def calculate_sales_metrics(orders: Sequence[Order]) -> SalesMetrics:
    """
    Calculate summary metrics for a set of orders.

    Totals are exact decimal sums of the per-order fields. The average
    order value is zero for an empty set.
    """
    total_sales = sum((order.total for order in orders), ZERO)
    total_tax = sum((order.tax for order in orders), ZERO)
    total_subtotal = sum((order.subtotal for order in orders), ZERO)
    total_orders = len(orders)

    logger.debug("Sales metrics calculated", orders=total_orders, total_sales=str(total_sales))

    return SalesMetrics(
        total_sales=total_sales,
        total_orders=total_orders,
        average_order_value=average(total_sales, total_orders),
        total_tax=total_tax,
        total_subtotal=total_subtotal,
    )


def calculate_growth(current: Number, previous: Number) -> float:
    """
    Percentage change from a previous value to a current one.

    Growth from a zero baseline is 100 when the current value is positive
    and 0 otherwise.
    """
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (float(current) - float(previous)) / float(previous) * 100


def compare_metrics(current: SalesMetrics, previous: SalesMetrics) -> List[MetricComparison]:
    """Pair headline metrics of two periods with their growth"""
    pairs = [
        ("total_sales", current.total_sales, previous.total_sales),
        ("total_orders", Decimal(current.total_orders), Decimal(previous.total_orders)),
        ("average_order_value", current.average_order_value, previous.average_order_value),
        ("total_tax", current.total_tax, previous.total_tax),
    ]

    return [
        MetricComparison(
            name=name,
            current=value,
            previous=prior,
            growth=calculate_growth(value, prior),
        )
        for name, value, prior in pairs
    ]
