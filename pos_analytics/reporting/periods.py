"""
Reporting Periods

Resolves named reporting periods into concrete date windows anchored to
the current moment, and derives the comparison window preceding a range.
"""

import math
from datetime import datetime, time, timedelta
from enum import Enum
from typing import Optional, Union

import structlog
from dateutil.relativedelta import relativedelta

from pos_analytics.config import Settings, get_settings
from pos_analytics.domain.models import DateRange

logger = structlog.get_logger(__name__)

END_OF_DAY = time(23, 59, 59, 999000)


class ReportPeriod(str, Enum):
    """Named reporting periods"""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    CUSTOM = "custom"


def start_of_day(moment: datetime) -> datetime:
    """Midnight at the start of the moment's calendar day"""
    return datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)


def end_of_day(moment: datetime) -> datetime:
    """Last millisecond of the moment's calendar day"""
    return datetime.combine(moment.date(), END_OF_DAY, tzinfo=moment.tzinfo)


def get_date_range(
    period: Union[ReportPeriod, str],
    custom_range: Optional[DateRange] = None,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
) -> DateRange:
    """
    Resolve a period tag into a reporting window ending today.

    Args:
        period: day, week, month, year or custom. Unknown tags behave as week.
        custom_range: Explicit window used by the custom period
        now: Anchor moment, defaults to the current local time
        settings: Configuration override

    Returns:
        DateRange from start-of-day to end-of-day of the computed range
    """
    settings = settings or get_settings()
    now = now or datetime.now()
    today_end = end_of_day(now)
    tag = period.value if isinstance(period, ReportPeriod) else str(period).lower()

    if tag == ReportPeriod.DAY.value:
        start = start_of_day(now)
    elif tag == ReportPeriod.MONTH.value:
        start = start_of_day(now - relativedelta(months=1))
    elif tag == ReportPeriod.YEAR.value:
        start = start_of_day(now - relativedelta(years=1))
    elif tag == ReportPeriod.CUSTOM.value:
        if custom_range is not None:
            return DateRange(
                start_date=custom_range.start_date,
                end_date=end_of_day(custom_range.end_date),
            )
        start = start_of_day(now - timedelta(days=settings.reporting.custom_fallback_days))
    else:
        if tag != ReportPeriod.WEEK.value:
            logger.debug("Unknown period, using week", period=tag)
        start = start_of_day(now - timedelta(days=7))

    return DateRange(start_date=start, end_date=today_end)


def get_previous_period(date_range: DateRange) -> DateRange:
    """
    Window of equal length immediately preceding a range.

    Both bounds are shifted back by the range length rounded up to whole
    days, the comparison used on the sales dashboard.
    """
    span_days = math.ceil(
        (date_range.end_date - date_range.start_date) / timedelta(days=1)
    )
    shift = timedelta(days=span_days)
    return DateRange(
        start_date=date_range.start_date - shift,
        end_date=date_range.end_date - shift,
    )
