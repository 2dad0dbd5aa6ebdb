"""
Dimensional Aggregation

Groups sales by product, by category and by payment method into ranked
performance breakdowns.

Product and category groupings work on order items and always use the
unit price captured on the item. Live catalog values (current stock,
current names) are read from an optional lookup keyed by id, falling
back to the product snapshot carried on the item.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set

import structlog

from pos_analytics.config import Settings, get_settings
from pos_analytics.domain.models import (
    Category,
    CategoryPerformance,
    Order,
    PaymentMethod,
    PaymentMethodAnalysis,
    Product,
    ProductPerformance,
    ProductTotals,
)
from .metrics import ZERO, average

logger = structlog.get_logger(__name__)


@dataclass
class _LineAccumulator:
    """Running totals over order items sharing a key"""
    quantity: int = 0
    revenue: Decimal = ZERO
    price_sum: Decimal = ZERO
    lines: int = 0
    product_ids: Set[str] = field(default_factory=set)

    def add(self, product_id: str, quantity: int, price: Decimal) -> None:
        self.quantity += quantity
        self.revenue += price * quantity
        self.price_sum += price
        self.lines += 1
        self.product_ids.add(product_id)

    @property
    def average_price(self) -> Decimal:
        # Mean of line unit prices, not revenue / quantity
        return average(self.price_sum, self.lines)


def calculate_product_performance(
    orders: Sequence[Order],
    products: Optional[Mapping[str, Product]] = None,
) -> List[ProductPerformance]:
    """
    Calculate per-product sales performance.

    Args:
        orders: Filtered orders
        products: Live catalog by product id, used for current stock and name

    Returns:
        Performance rows sorted by revenue, highest first. Ties keep the
        order in which products were first encountered.
    """
    products = products or {}
    totals: Dict[str, _LineAccumulator] = {}
    snapshots: Dict[str, Product] = {}

    for order in orders:
        for item in order.items:
            acc = totals.get(item.product_id)
            if acc is None:
                acc = totals[item.product_id] = _LineAccumulator()
                snapshots[item.product_id] = item.product
            acc.add(item.product_id, item.quantity, item.price)

    rows = []
    for product_id, acc in totals.items():
        product = products.get(product_id, snapshots[product_id])
        rows.append(
            ProductPerformance(
                product_id=product_id,
                product_name=product.name,
                category_name=product.category.name,
                quantity_sold=acc.quantity,
                revenue=acc.revenue,
                average_price=acc.average_price,
                stock=product.stock,
            )
        )

    logger.debug("Product performance calculated", products=len(rows))
    return sorted(rows, key=lambda row: row.revenue, reverse=True)


def calculate_category_performance(
    orders: Sequence[Order],
    categories: Optional[Mapping[str, Category]] = None,
) -> List[CategoryPerformance]:
    """
    Calculate per-category sales performance.

    Args:
        orders: Filtered orders
        categories: Category records by id, used for current names

    Returns:
        Performance rows sorted by revenue, highest first
    """
    categories = categories or {}
    totals: Dict[str, _LineAccumulator] = {}
    snapshots: Dict[str, Category] = {}

    for order in orders:
        for item in order.items:
            category = item.product.category
            acc = totals.get(category.id)
            if acc is None:
                acc = totals[category.id] = _LineAccumulator()
                snapshots[category.id] = category
            acc.add(item.product_id, item.quantity, item.price)

    rows = [
        CategoryPerformance(
            category_id=category_id,
            category_name=categories.get(category_id, snapshots[category_id]).name,
            total_revenue=acc.revenue,
            total_quantity=acc.quantity,
            product_count=len(acc.product_ids),
            average_price=acc.average_price,
        )
        for category_id, acc in totals.items()
    ]

    logger.debug("Category performance calculated", categories=len(rows))
    return sorted(rows, key=lambda row: row.total_revenue, reverse=True)


def analyze_payment_methods(orders: Sequence[Order]) -> List[PaymentMethodAnalysis]:
    """
    Break order totals down by payment method.

    Each method's percentage is its share of the grand total across all
    methods, zero when the grand total is zero. Sorted by amount, highest
    first.
    """
    amounts: Dict[PaymentMethod, Decimal] = {}
    counts: Dict[PaymentMethod, int] = {}

    for order in orders:
        method = order.payment_method
        amounts[method] = amounts.get(method, ZERO) + order.total
        counts[method] = counts.get(method, 0) + 1

    grand_total = sum(amounts.values(), ZERO)

    rows = [
        PaymentMethodAnalysis(
            payment_method=method,
            total_amount=amount,
            order_count=counts[method],
            percentage=float(amount / grand_total * 100) if grand_total > 0 else 0.0,
        )
        for method, amount in amounts.items()
    ]

    logger.debug("Payment methods analyzed", methods=len(rows), grand_total=str(grand_total))
    return sorted(rows, key=lambda row: row.total_amount, reverse=True)


def summarize_product_performance(performance: Sequence[ProductPerformance]) -> ProductTotals:
    """Items sold and revenue across a full product breakdown"""
    return ProductTotals(
        total_items_sold=sum(row.quantity_sold for row in performance),
        total_revenue=sum((row.revenue for row in performance), ZERO),
    )


def low_stock_products(
    products: Iterable[Product],
    threshold: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> List[Product]:
    """
    Catalog products whose stock is strictly below `threshold`.

    The threshold defaults to REPORT_LOW_STOCK_THRESHOLD. Catalog order is
    preserved.
    """
    if threshold is None:
        threshold = (settings or get_settings()).reporting.low_stock_threshold

    rows = [product for product in products if product.stock < threshold]
    logger.debug("Low stock products found", products=len(rows), threshold=threshold)
    return rows
