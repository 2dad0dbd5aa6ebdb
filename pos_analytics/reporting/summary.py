"""
Sales Report Builder

Assembles a complete report for one period by running the filter and every
aggregator over an in-memory order history, alongside the metrics of the
preceding period for comparison.
"""

from datetime import datetime
from decimal import Decimal
from typing import Mapping, Optional, Sequence, Union

import structlog

from pos_analytics.config import Settings, get_settings
from pos_analytics.config.logging import report_context
from pos_analytics.domain.models import (
    Category,
    DateRange,
    Order,
    PaymentMethod,
    Product,
    QuickStats,
    ReportFilters,
    ReportSummary,
)
from .dimensions import (
    analyze_payment_methods,
    calculate_category_performance,
    calculate_product_performance,
    low_stock_products,
    summarize_product_performance,
)
from .filters import filter_orders
from .metrics import calculate_sales_metrics, compare_metrics
from .patterns import analyze_daily_patterns, analyze_hourly_patterns, peak_day, peak_hour
from .periods import ReportPeriod, get_date_range, get_previous_period
from .timeseries import generate_daily_sales_data

logger = structlog.get_logger(__name__)


def calculate_quick_stats(
    orders: Sequence[Order],
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
) -> QuickStats:
    """Total sales for the current day, week and month over all orders"""
    def sales_for(period: ReportPeriod) -> Decimal:
        window = get_date_range(period, now=now, settings=settings)
        return calculate_sales_metrics(filter_orders(orders, ReportFilters(date_range=window))).total_sales

    return QuickStats(
        today_sales=sales_for(ReportPeriod.DAY),
        week_sales=sales_for(ReportPeriod.WEEK),
        month_sales=sales_for(ReportPeriod.MONTH),
    )


class SalesReportBuilder:
    """
    Builds sales reports over a read-only order history.

    The builder holds no state between calls; every report is computed
    fresh from the orders it was given.

    Example:
        builder = SalesReportBuilder(orders, products=catalog)
        summary = builder.build(ReportPeriod.MONTH)
    """

    def __init__(
        self,
        orders: Sequence[Order],
        products: Optional[Mapping[str, Product]] = None,
        categories: Optional[Mapping[str, Category]] = None,
        settings: Optional[Settings] = None,
    ):
        self.orders = orders
        self.products = products
        self.categories = categories
        self.settings = settings or get_settings()

    def resolve_range(
        self,
        period: Union[ReportPeriod, str],
        custom_range: Optional[DateRange] = None,
        now: Optional[datetime] = None,
    ) -> DateRange:
        """Window for a period, anchored to `now`"""
        return get_date_range(period, custom_range, now=now, settings=self.settings)

    def build(
        self,
        period: Union[ReportPeriod, str, None] = None,
        custom_range: Optional[DateRange] = None,
        payment_method: Union[PaymentMethod, str, None] = None,
        category_id: Optional[str] = None,
        product_id: Optional[str] = None,
        top_n: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> ReportSummary:
        """
        Build the full report for a period.

        Args:
            period: Reporting period, defaults to the configured period
            custom_range: Window for the custom period
            payment_method: Only include orders paid this way
            category_id: Only include orders with an item in this category
            product_id: Only include orders containing this product
            top_n: Length of the top products list
            now: Anchor moment for period resolution

        Returns:
            ReportSummary for the period
        """
        period = period or self.settings.reporting.default_period
        top_n = top_n if top_n is not None else self.settings.reporting.top_products
        tag = period.value if isinstance(period, ReportPeriod) else str(period)
        if payment_method is not None:
            payment_method = PaymentMethod(payment_method)

        date_range = self.resolve_range(period, custom_range, now=now)
        previous_range = get_previous_period(date_range)
        predicates = dict(
            payment_method=payment_method,
            category_id=category_id,
            product_id=product_id,
        )

        with report_context(
            period=tag,
            payment_method=payment_method.value if payment_method else None,
            category_id=category_id,
            product_id=product_id,
        ):
            logger.info(
                "Building sales report",
                start_date=date_range.start_date.isoformat(),
                end_date=date_range.end_date.isoformat(),
                orders=len(self.orders),
            )

            current = filter_orders(self.orders, ReportFilters(date_range=date_range, **predicates))
            previous = filter_orders(self.orders, ReportFilters(date_range=previous_range, **predicates))

            metrics = calculate_sales_metrics(current)
            previous_metrics = calculate_sales_metrics(previous)
            performance = calculate_product_performance(current, self.products)
            hourly = analyze_hourly_patterns(current)
            daily = analyze_daily_patterns(current)

            summary = ReportSummary(
                period=tag,
                date_range=date_range,
                previous_range=previous_range,
                metrics=metrics,
                previous_metrics=previous_metrics,
                comparisons=compare_metrics(metrics, previous_metrics),
                top_products=performance[:top_n],
                category_performance=calculate_category_performance(current, self.categories),
                payment_methods=analyze_payment_methods(current),
                peak_hours=hourly,
                daily_trends=daily,
                daily_sales=generate_daily_sales_data(current, date_range),
                product_totals=summarize_product_performance(performance),
                peak_hour=peak_hour(hourly),
                peak_day=peak_day(daily),
                low_stock=low_stock_products((self.products or {}).values(), settings=self.settings),
                quick_stats=calculate_quick_stats(self.orders, now=now, settings=self.settings),
            )

            logger.info(
                "Sales report built",
                orders=metrics.total_orders,
                previous_orders=previous_metrics.total_orders,
                total_sales=str(metrics.total_sales),
            )
        return summary
