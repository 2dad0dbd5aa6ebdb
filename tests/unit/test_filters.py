"""
Unit Tests - Order Filtering
"""
from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from pos_analytics.domain.models import (
    DateRange,
    Order,
    OrderItem,
    PaymentMethod,
    Product,
    ReportFilters,
)
from pos_analytics.reporting.filters import filter_orders


JANUARY_13_TO_15 = DateRange(
    start_date=datetime(2025, 1, 13),
    end_date=datetime(2025, 1, 15, 23, 59, 59, 999000),
)


class TestFilterOrders:
    """Tests for filter_orders"""

    def test_date_window_only(self, sample_orders):
        """Test every order inside the window is kept in input order"""
        result = filter_orders(sample_orders, ReportFilters(date_range=JANUARY_13_TO_15))

        assert [o.id for o in result] == [o.id for o in sample_orders]

    def test_window_bounds_inclusive(self, make_order):
        """Test orders exactly on either bound are kept"""
        window = DateRange(start_date=datetime(2025, 1, 13), end_date=datetime(2025, 1, 14))
        orders = [
            make_order(datetime(2025, 1, 13)),
            make_order(datetime(2025, 1, 14)),
            make_order(datetime(2025, 1, 14, 0, 0, 1)),
            make_order(datetime(2025, 1, 12, 23, 59, 59)),
        ]

        result = filter_orders(orders, ReportFilters(date_range=window))

        assert [o.id for o in result] == [orders[0].id, orders[1].id]

    def test_payment_method(self, sample_orders):
        """Test payment method predicate"""
        result = filter_orders(
            sample_orders,
            ReportFilters(date_range=JANUARY_13_TO_15, payment_method=PaymentMethod.CARD),
        )

        assert len(result) == 2
        assert all(o.payment_method == PaymentMethod.CARD for o in result)

    def test_payment_method_as_plain_string(self, sample_orders):
        """Test a plain payment method tag is accepted and coerced"""
        filters = ReportFilters(date_range=JANUARY_13_TO_15, payment_method="card")

        result = filter_orders(sample_orders, filters)

        assert filters.payment_method is PaymentMethod.CARD
        assert [o.id for o in result] == [sample_orders[1].id, sample_orders[3].id]

    def test_unknown_payment_method_tag(self):
        """Test an unknown payment method tag is refused"""
        with pytest.raises(ValueError):
            ReportFilters(date_range=JANUARY_13_TO_15, payment_method="voucher")

    def test_category_excludes_orders_without_matching_item(self, sample_orders):
        """Test category predicate drops orders whose items are all elsewhere"""
        result = filter_orders(
            sample_orders,
            ReportFilters(date_range=JANUARY_13_TO_15, category_id="cat-snack"),
        )

        # Only the first order has a snack line
        assert [o.id for o in result] == [sample_orders[0].id]

    def test_category_matches_any_item(self, sample_orders):
        """Test one matching item is enough"""
        result = filter_orders(
            sample_orders,
            ReportFilters(date_range=JANUARY_13_TO_15, category_id="cat-bev"),
        )

        assert [o.id for o in result] == [sample_orders[0].id, sample_orders[1].id, sample_orders[3].id]

    def test_product(self, sample_orders):
        """Test product predicate"""
        result = filter_orders(
            sample_orders,
            ReportFilters(date_range=JANUARY_13_TO_15, product_id="prod-nasi"),
        )

        assert [o.id for o in result] == [sample_orders[1].id, sample_orders[2].id]

    def test_predicates_are_conjunctive(self, sample_orders):
        """Test all predicates must hold together"""
        result = filter_orders(
            sample_orders,
            ReportFilters(
                date_range=JANUARY_13_TO_15,
                payment_method=PaymentMethod.MOBILE,
                product_id="prod-coffee",
            ),
        )

        assert result == []

    def test_outside_window_excluded_despite_matching_predicates(self, sample_orders):
        """Test date window applies before other predicates"""
        window = DateRange(start_date=datetime(2025, 1, 14), end_date=datetime(2025, 1, 14, 23, 59))

        result = filter_orders(
            sample_orders,
            ReportFilters(date_range=window, payment_method=PaymentMethod.CASH),
        )

        assert result == []


class TestRecordValidation:
    """Tests for input record validation"""

    def test_rejects_negative_stock(self, categories):
        """Test a product with negative stock is refused"""
        with pytest.raises(ValidationError):
            Product(id="p", name="Tea", price=Decimal(1), category=categories["cat-bev"], stock=-1)

    def test_rejects_zero_quantity(self, products):
        """Test an order line needs a positive quantity"""
        coffee = products["prod-coffee"]
        with pytest.raises(ValidationError):
            OrderItem(id="i", product=coffee, quantity=0, price=coffee.price)

    def test_rejects_unknown_payment_method(self):
        """Test payment methods outside the enum are refused"""
        with pytest.raises(ValidationError):
            Order(
                id="o",
                subtotal=Decimal(0),
                tax=Decimal(0),
                total=Decimal(0),
                payment_method="voucher",
                created_at=datetime(2025, 1, 13),
            )
