"""
Domain Models - Catalog, Orders and Report Fragments

This module defines the data the sales analytics engine reads and the
report fragments it produces:

Source Records (supplied by the order store, read-only):
- Category: Product grouping
- Product: Catalog entry with live price and stock
- OrderItem: Line item with the unit price captured at sale time
- Order: Completed sale with subtotal, tax, total and payment method

Report Fragments (derived, recomputed on every call):
- SalesMetrics, SalesReportData, HourlySalesData, WeeklySalesData
- ProductPerformance, CategoryPerformance, PaymentMethodAnalysis
- HourlyAnalysis, DailyAnalysis, MetricComparison, ReportSummary
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMERATIONS
# =============================================================================

class PaymentMethod(str, Enum):
    """Payment method enumeration"""
    CASH = "cash"
    CARD = "card"
    MOBILE = "mobile"


class OrderStatus(str, Enum):
    """Order status enumeration"""
    COMPLETED = "completed"
    PENDING = "pending"
    CANCELLED = "cancelled"


# =============================================================================
# SOURCE RECORDS
# =============================================================================

class Category(BaseModel):
    """Product category"""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    product_count: Optional[int] = Field(default=None, ge=0)


class Product(BaseModel):
    """Catalog product with its live price and stock"""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: Optional[str] = None
    price: Decimal = Field(ge=0)
    category: Category
    stock: int = Field(default=0, ge=0)
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def category_id(self) -> str:
        return self.category.id


class OrderItem(BaseModel):
    """
    Order line item.

    `price` is the unit price captured when the sale was made. Reports
    always use it, never the product's current price.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    order_id: Optional[str] = None
    product: Product
    quantity: int = Field(gt=0)
    price: Decimal = Field(ge=0)

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class Order(BaseModel):
    """Completed point-of-sale order"""

    model_config = ConfigDict(frozen=True)

    id: str
    items: List[OrderItem] = Field(default_factory=list)
    subtotal: Decimal = Field(ge=0)
    tax: Decimal = Field(ge=0)
    total: Decimal = Field(ge=0)
    payment_method: PaymentMethod
    status: str = OrderStatus.COMPLETED.value
    created_at: datetime
    updated_at: Optional[datetime] = None


# =============================================================================
# REPORT INPUTS
# =============================================================================

@dataclass(frozen=True)
class DateRange:
    """Inclusive reporting window"""
    start_date: datetime
    end_date: datetime

    def __post_init__(self) -> None:
        if self.start_date > self.end_date:
            raise ValueError(
                f"Date range start {self.start_date.isoformat()} is after end {self.end_date.isoformat()}"
            )

    def contains(self, moment: datetime) -> bool:
        return self.start_date <= moment <= self.end_date


@dataclass(frozen=True)
class ReportFilters:
    """Order selection criteria; all predicates are combined with AND"""
    date_range: DateRange
    payment_method: Optional[PaymentMethod] = None  # plain "cash"/"card"/"mobile" accepted
    category_id: Optional[str] = None
    product_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.payment_method is not None and not isinstance(self.payment_method, PaymentMethod):
            object.__setattr__(self, "payment_method", PaymentMethod(self.payment_method))


# =============================================================================
# REPORT FRAGMENTS
# =============================================================================

@dataclass(frozen=True)
class SalesMetrics:
    """Scalar summary of an order set"""
    total_sales: Decimal
    total_orders: int
    average_order_value: Decimal
    total_tax: Decimal
    total_subtotal: Decimal


@dataclass(frozen=True)
class SalesReportData:
    """One calendar-day bucket of a sales series"""
    date: date
    label: str  # "MMM dd"
    sales: Decimal
    orders: int
    average_order_value: Decimal


@dataclass(frozen=True)
class HourlySalesData:
    """One hour-of-day bucket of a sales series"""
    hour: int
    label: str  # "H:00"
    sales: Decimal
    orders: int
    average_order_value: Decimal


@dataclass(frozen=True)
class WeeklySalesData:
    """Seven consecutive daily buckets rolled together"""
    week: str  # "Week N"
    sales: Decimal
    orders: int
    average_order_value: Decimal


@dataclass(frozen=True)
class ProductPerformance:
    """Sales performance of a single product"""
    product_id: str
    product_name: str
    category_name: str
    quantity_sold: int
    revenue: Decimal
    average_price: Decimal  # mean of captured line unit prices
    stock: int


@dataclass(frozen=True)
class ProductTotals:
    """Totals across a product breakdown"""
    total_items_sold: int
    total_revenue: Decimal


@dataclass(frozen=True)
class CategoryPerformance:
    """Sales performance of a product category"""
    category_id: str
    category_name: str
    total_revenue: Decimal
    total_quantity: int
    product_count: int
    average_price: Decimal  # mean of captured line unit prices


@dataclass(frozen=True)
class PaymentMethodAnalysis:
    """Share of sales taken through one payment method"""
    payment_method: PaymentMethod
    total_amount: Decimal
    order_count: int
    percentage: float


@dataclass(frozen=True)
class HourlyAnalysis:
    """Traffic for one hour of the day"""
    hour: int
    order_count: int
    total_sales: Decimal
    average_order_value: Decimal


@dataclass(frozen=True)
class DailyAnalysis:
    """Traffic for one calendar date"""
    date: date
    label: str  # "MMM dd"
    day_of_week: str
    order_count: int
    total_sales: Decimal
    average_order_value: Decimal


@dataclass(frozen=True)
class MetricComparison:
    """A metric for the current period next to the previous one"""
    name: str
    current: Decimal
    previous: Decimal
    growth: float


@dataclass(frozen=True)
class QuickStats:
    """Sales for today, this week and this month, ignoring report filters"""
    today_sales: Decimal
    week_sales: Decimal
    month_sales: Decimal


@dataclass(frozen=True)
class ReportSummary:
    """Complete sales report for one period"""
    period: str
    date_range: DateRange
    previous_range: DateRange
    metrics: SalesMetrics
    previous_metrics: SalesMetrics
    comparisons: List[MetricComparison] = field(default_factory=list)
    top_products: List[ProductPerformance] = field(default_factory=list)
    category_performance: List[CategoryPerformance] = field(default_factory=list)
    payment_methods: List[PaymentMethodAnalysis] = field(default_factory=list)
    peak_hours: List[HourlyAnalysis] = field(default_factory=list)
    daily_trends: List[DailyAnalysis] = field(default_factory=list)
    daily_sales: List[SalesReportData] = field(default_factory=list)
    product_totals: Optional[ProductTotals] = None
    peak_hour: Optional[HourlyAnalysis] = None
    peak_day: Optional[DailyAnalysis] = None
    low_stock: List[Product] = field(default_factory=list)
    quick_stats: Optional[QuickStats] = None
