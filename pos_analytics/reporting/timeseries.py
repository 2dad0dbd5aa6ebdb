"""
Sales Time Series

Buckets orders into per-day and per-hour series for charting and trend
analysis, and rolls daily series up into weeks.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, Iterator, List, Sequence

import structlog

from pos_analytics.domain.models import (
    DateRange,
    HourlySalesData,
    Order,
    SalesReportData,
    WeeklySalesData,
)
from .metrics import ZERO, average

logger = structlog.get_logger(__name__)

DAY_LABEL_FORMAT = "%b %d"
DAYS_PER_WEEK = 7


def day_label(day: date) -> str:
    """Short chart label for a calendar day, e.g. "Jan 05" """
    return day.strftime(DAY_LABEL_FORMAT)


def iter_days(date_range: DateRange) -> Iterator[date]:
    """Every calendar day touched by a range, inclusive"""
    day = date_range.start_date.date()
    last = date_range.end_date.date()
    while day <= last:
        yield day
        day += timedelta(days=1)


def generate_daily_sales_data(
    orders: Sequence[Order],
    date_range: DateRange,
) -> List[SalesReportData]:
    """
    Build one sales bucket per calendar day of a range.

    Days without orders are included with zero sales, orders and average.
    Orders are matched to buckets by calendar date only.
    """
    by_day: Dict[date, List[Order]] = defaultdict(list)
    for order in orders:
        by_day[order.created_at.date()].append(order)

    series = []
    for day in iter_days(date_range):
        day_orders = by_day.get(day, [])
        sales = sum((order.total for order in day_orders), ZERO)
        series.append(
            SalesReportData(
                date=day,
                label=day_label(day),
                sales=sales,
                orders=len(day_orders),
                average_order_value=average(sales, len(day_orders)),
            )
        )

    logger.debug("Daily sales series built", buckets=len(series), orders=len(orders))
    return series


def generate_hourly_sales_data(orders: Sequence[Order]) -> List[HourlySalesData]:
    """
    Build hour-of-day sales buckets for single-day analysis.

    Hours without orders are omitted; the rest are in ascending hour order.
    """
    sales_by_hour: Dict[int, Decimal] = defaultdict(lambda: ZERO)
    orders_by_hour: Dict[int, int] = defaultdict(int)

    for order in orders:
        hour = order.created_at.hour
        sales_by_hour[hour] += order.total
        orders_by_hour[hour] += 1

    return [
        HourlySalesData(
            hour=hour,
            label=f"{hour}:00",
            sales=sales_by_hour[hour],
            orders=orders_by_hour[hour],
            average_order_value=average(sales_by_hour[hour], orders_by_hour[hour]),
        )
        for hour in range(24)
        if orders_by_hour[hour] > 0
    ]


def generate_weekly_sales_data(daily: Sequence[SalesReportData]) -> List[WeeklySalesData]:
    """Roll consecutive seven-day chunks of a daily series into weeks"""
    weeks = []
    for index, offset in enumerate(range(0, len(daily), DAYS_PER_WEEK), start=1):
        chunk = daily[offset:offset + DAYS_PER_WEEK]
        sales = sum((day.sales for day in chunk), ZERO)
        order_count = sum(day.orders for day in chunk)
        weeks.append(
            WeeklySalesData(
                week=f"Week {index}",
                sales=sales,
                orders=order_count,
                average_order_value=average(sales, order_count),
            )
        )
    return weeks
