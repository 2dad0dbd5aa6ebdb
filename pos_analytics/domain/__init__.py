"""
Domain Models Module
"""
from .models import (
    Category,
    CategoryPerformance,
    DailyAnalysis,
    DateRange,
    HourlyAnalysis,
    HourlySalesData,
    MetricComparison,
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentMethodAnalysis,
    Product,
    ProductPerformance,
    ProductTotals,
    QuickStats,
    ReportFilters,
    ReportSummary,
    SalesMetrics,
    SalesReportData,
    WeeklySalesData,
)

__all__ = [
    "Category",
    "CategoryPerformance",
    "DailyAnalysis",
    "DateRange",
    "HourlyAnalysis",
    "HourlySalesData",
    "MetricComparison",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PaymentMethod",
    "PaymentMethodAnalysis",
    "Product",
    "ProductPerformance",
    "ProductTotals",
    "QuickStats",
    "ReportFilters",
    "ReportSummary",
    "SalesMetrics",
    "SalesReportData",
    "WeeklySalesData",
]
