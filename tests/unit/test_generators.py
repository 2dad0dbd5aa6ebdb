"""
Unit Tests - Sample Data
"""
from datetime import datetime, timedelta

import pytest

from pos_analytics.data.generators import CatalogGenerator, OrderGenerator, catalog_index
from pos_analytics.quality.validators import ValidationStatus, validate_orders


END = datetime(2025, 1, 15, 23, 0)


@pytest.fixture
def catalog():
    """Seed catalog"""
    return CatalogGenerator(seed=7).generate()


class TestCatalogGenerator:
    """Tests for CatalogGenerator"""

    def test_seed_catalog(self, catalog):
        """Test nine products across three categories"""
        assert len(catalog) == 9
        assert {p.category.name for p in catalog} == {"Beverages", "Food", "Snacks"}
        assert next(p for p in catalog if p.name == "Coffee").price == 25000

    def test_reproducible_ids(self):
        """Test the same seed gives the same ids"""
        first = [p.id for p in CatalogGenerator(seed=3).generate()]
        second = [p.id for p in CatalogGenerator(seed=3).generate()]

        assert first == second

    def test_catalog_index(self, catalog):
        """Test lookup keyed by product id"""
        index = catalog_index(catalog)

        assert len(index) == 9
        assert all(index[p.id] is p for p in catalog)


class TestOrderGenerator:
    """Tests for OrderGenerator"""

    def test_orders_inside_requested_days(self, catalog, test_settings):
        """Test every order falls on one of the requested days"""
        orders = OrderGenerator(catalog, seed=1, settings=test_settings).generate(days=7, end_date=END)

        first_day = (END - timedelta(days=6)).date()
        assert orders
        assert all(first_day <= o.created_at.date() <= END.date() for o in orders)
        assert orders == sorted(orders, key=lambda o: o.created_at)

    def test_daily_volume(self, catalog, test_settings):
        """Test per-day counts stay within bounds"""
        orders = OrderGenerator(catalog, seed=1, settings=test_settings).generate(
            days=5, end_date=END, min_per_day=2, max_per_day=4
        )

        assert 10 <= len(orders) <= 20

    def test_orders_are_valid(self, catalog, test_settings):
        """Test generated orders pass the quality checks"""
        orders = OrderGenerator(catalog, seed=11, settings=test_settings).generate(days=10, end_date=END)

        assert validate_orders(orders, test_settings).status == ValidationStatus.PASSED

    def test_captured_prices(self, catalog, test_settings):
        """Test items capture the catalog price at generation time"""
        orders = OrderGenerator(catalog, seed=5, settings=test_settings).generate(days=2, end_date=END)

        for order in orders:
            for item in order.items:
                assert item.price == item.product.price
                assert item.order_id == order.id

    def test_reproducible(self, catalog, test_settings):
        """Test the same seed gives the same history"""
        first = OrderGenerator(catalog, seed=9, settings=test_settings).generate(days=3, end_date=END)
        second = OrderGenerator(catalog, seed=9, settings=test_settings).generate(days=3, end_date=END)

        assert [(o.id, o.total, o.created_at) for o in first] == [(o.id, o.total, o.created_at) for o in second]

    def test_seasonal_hours(self, catalog, test_settings):
        """Test seasonal orders fall between breakfast and closing"""
        orders = OrderGenerator(catalog, seed=2, settings=test_settings).generate(
            days=14, end_date=END, seasonal=True
        )

        assert all(7 <= o.created_at.hour < 22 for o in orders)

    def test_requires_products(self):
        """Test an empty catalog is rejected"""
        with pytest.raises(ValueError):
            OrderGenerator([])
