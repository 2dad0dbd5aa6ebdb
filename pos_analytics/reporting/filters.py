"""
Order Filtering

Selects the orders a report is computed over.
"""

from typing import Iterable, List

import structlog

from pos_analytics.domain.models import Order, ReportFilters

logger = structlog.get_logger(__name__)


def _matches(order: Order, filters: ReportFilters) -> bool:
    if not filters.date_range.contains(order.created_at):
        return False

    if filters.payment_method is not None and order.payment_method != filters.payment_method:
        return False

    if filters.category_id is not None:
        if not any(item.product.category_id == filters.category_id for item in order.items):
            return False

    if filters.product_id is not None:
        if not any(item.product_id == filters.product_id for item in order.items):
            return False

    return True


def filter_orders(orders: Iterable[Order], filters: ReportFilters) -> List[Order]:
    """
    Select orders inside the filter window that satisfy every optional predicate.

    The window is inclusive at both ends. A category or product predicate
    keeps an order when at least one of its items matches. Input order is
    preserved.
    """
    selected = [order for order in orders if _matches(order, filters)]

    logger.debug(
        "Orders filtered",
        selected=len(selected),
        start_date=filters.date_range.start_date.isoformat(),
        end_date=filters.date_range.end_date.isoformat(),
        payment_method=filters.payment_method.value if filters.payment_method else None,
        category_id=filters.category_id,
        product_id=filters.product_id,
    )
    return selected
