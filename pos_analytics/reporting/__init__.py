"""
Sales Reporting Module
"""
from .dimensions import (
    analyze_payment_methods,
    calculate_category_performance,
    calculate_product_performance,
    low_stock_products,
    summarize_product_performance,
)
from .filters import filter_orders
from .formatting import format_currency, format_percentage
from .metrics import calculate_growth, calculate_sales_metrics, compare_metrics
from .patterns import (
    DAYS_OF_WEEK,
    analyze_daily_patterns,
    analyze_hourly_patterns,
    peak_day,
    peak_hour,
)
from .periods import ReportPeriod, get_date_range, get_previous_period
from .summary import SalesReportBuilder, calculate_quick_stats
from .timeseries import (
    generate_daily_sales_data,
    generate_hourly_sales_data,
    generate_weekly_sales_data,
)

__all__ = [
    "DAYS_OF_WEEK",
    "ReportPeriod",
    "SalesReportBuilder",
    "analyze_daily_patterns",
    "analyze_hourly_patterns",
    "analyze_payment_methods",
    "calculate_category_performance",
    "calculate_growth",
    "calculate_product_performance",
    "calculate_quick_stats",
    "calculate_sales_metrics",
    "compare_metrics",
    "filter_orders",
    "format_currency",
    "format_percentage",
    "generate_daily_sales_data",
    "generate_hourly_sales_data",
    "generate_weekly_sales_data",
    "get_date_range",
    "get_previous_period",
    "low_stock_products",
    "peak_day",
    "peak_hour",
    "summarize_product_performance",
]
