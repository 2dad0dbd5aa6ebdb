"""
Traffic Pattern Analysis

Surfaces peak trading hours and the day-by-day rhythm of sales.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

import structlog

from pos_analytics.domain.models import DailyAnalysis, HourlyAnalysis, Order
from .metrics import ZERO, average
from .timeseries import day_label

logger = structlog.get_logger(__name__)

DAYS_OF_WEEK = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def day_of_week(day: date) -> str:
    """Weekday name, Sunday through Saturday"""
    # isoweekday: Monday=1 .. Sunday=7
    return DAYS_OF_WEEK[day.isoweekday() % 7]


def analyze_hourly_patterns(orders: Sequence[Order]) -> List[HourlyAnalysis]:
    """
    Aggregate orders by hour of day.

    Hours without orders are dropped. The rest are ranked by order count,
    busiest first, with ties in ascending hour order.
    """
    counts = [0] * 24
    sales = [ZERO] * 24

    for order in orders:
        hour = order.created_at.hour
        counts[hour] += 1
        sales[hour] += order.total

    rows = [
        HourlyAnalysis(
            hour=hour,
            order_count=counts[hour],
            total_sales=sales[hour],
            average_order_value=average(sales[hour], counts[hour]),
        )
        for hour in range(24)
        if counts[hour] > 0
    ]

    logger.debug("Hourly patterns analyzed", active_hours=len(rows))
    return sorted(rows, key=lambda row: row.order_count, reverse=True)


def analyze_daily_patterns(orders: Sequence[Order]) -> List[DailyAnalysis]:
    """Aggregate orders by calendar date, earliest date first"""
    counts: Dict[date, int] = {}
    sales: Dict[date, Decimal] = {}

    for order in orders:
        day = order.created_at.date()
        counts[day] = counts.get(day, 0) + 1
        sales[day] = sales.get(day, ZERO) + order.total

    rows = [
        DailyAnalysis(
            date=day,
            label=day_label(day),
            day_of_week=day_of_week(day),
            order_count=counts[day],
            total_sales=sales[day],
            average_order_value=average(sales[day], counts[day]),
        )
        for day in sorted(counts)
    ]

    logger.debug("Daily patterns analyzed", days=len(rows))
    return rows


def peak_hour(patterns: Sequence[HourlyAnalysis]) -> Optional[HourlyAnalysis]:
    """Busiest hour by order count; the first one listed wins a tie"""
    return max(patterns, key=lambda row: row.order_count, default=None)


def peak_day(patterns: Sequence[DailyAnalysis]) -> Optional[DailyAnalysis]:
    """Busiest date by order count; the first one listed wins a tie"""
    return max(patterns, key=lambda row: row.order_count, default=None)
