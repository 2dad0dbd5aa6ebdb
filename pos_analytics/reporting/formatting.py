"""
Display Formatting

Currency and percentage strings for report consumers.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from pos_analytics.config import Settings, get_settings


def format_currency(
    amount: Union[Decimal, int, float],
    settings: Optional[Settings] = None,
) -> str:
    """
    Format an amount in the configured display currency.

    Example:
        format_currency(Decimal("1250000"))  # "Rp 1.250.000"
    """
    currency = (settings or get_settings()).currency
    value = Decimal(str(amount)).quantize(
        Decimal(1).scaleb(-currency.decimals), rounding=ROUND_HALF_UP
    )
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):.{currency.decimals}f}".partition(".")

    groups = []
    while len(whole) > 3:
        groups.insert(0, whole[-3:])
        whole = whole[:-3]
    groups.insert(0, whole)

    text = currency.thousands_separator.join(groups)
    if fraction:
        text = f"{text}{currency.decimal_separator}{fraction}"
    return f"{sign}{currency.symbol} {text}"


def format_percentage(value: float) -> str:
    """Percentage with one decimal place, e.g. "33.3%" """
    return f"{value:.1f}%"
