"""
Test Suite Configuration
"""
from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, List, Sequence, Tuple

import pytest

from pos_analytics.config import Settings
from pos_analytics.domain.models import Category, Order, OrderItem, PaymentMethod, Product


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(app_env="testing")


@pytest.fixture
def now() -> datetime:
    """Fixed anchor moment: Wednesday 15 January 2025, 14:30"""
    return datetime(2025, 1, 15, 14, 30)


@pytest.fixture
def categories() -> Dict[str, Category]:
    """Seed categories by id"""
    return {
        "cat-bev": Category(id="cat-bev", name="Beverages"),
        "cat-food": Category(id="cat-food", name="Food"),
        "cat-snack": Category(id="cat-snack", name="Snacks"),
    }


@pytest.fixture
def products(categories) -> Dict[str, Product]:
    """Seed products by id"""
    rows = [
        ("prod-coffee", "Coffee", 25000, "cat-bev", 50),
        ("prod-tea", "Tea", 15000, "cat-bev", 40),
        ("prod-nasi", "Nasi Goreng", 35000, "cat-food", 25),
        ("prod-chips", "Keripik Singkong", 12000, "cat-snack", 60),
    ]
    return {
        product_id: Product(
            id=product_id,
            name=name,
            price=Decimal(price),
            category=categories[category_id],
            stock=stock,
        )
        for product_id, name, price, category_id, stock in rows
    }


@pytest.fixture
def make_order(products) -> Callable[..., Order]:
    """
    Factory for orders with a 10% tax.

    Lines are (product_id, quantity, unit_price) tuples; unit_price
    defaults to the product's catalog price when given as None.
    """
    counter = {"n": 0}

    def factory(
        created_at: datetime,
        lines: Sequence[Tuple[str, int, object]] = (("prod-coffee", 1, None),),
        payment_method: PaymentMethod = PaymentMethod.CASH,
    ) -> Order:
        counter["n"] += 1
        order_id = f"ord-{counter['n']}"
        items = []
        subtotal = Decimal(0)
        for index, (product_id, quantity, price) in enumerate(lines):
            product = products[product_id]
            unit_price = product.price if price is None else Decimal(price)
            items.append(
                OrderItem(
                    id=f"{order_id}-item-{index}",
                    order_id=order_id,
                    product=product,
                    quantity=quantity,
                    price=unit_price,
                )
            )
            subtotal += unit_price * quantity
        tax = subtotal / 10
        return Order(
            id=order_id,
            items=items,
            subtotal=subtotal,
            tax=tax,
            total=subtotal + tax,
            payment_method=payment_method,
            created_at=created_at,
        )

    return factory


@pytest.fixture
def sample_orders(make_order) -> List[Order]:
    """A small three-day order history"""
    return [
        make_order(
            datetime(2025, 1, 13, 9, 15),
            [("prod-coffee", 2, None), ("prod-chips", 1, None)],
            PaymentMethod.CASH,
        ),
        make_order(
            datetime(2025, 1, 13, 12, 40),
            [("prod-nasi", 1, None), ("prod-tea", 1, None)],
            PaymentMethod.CARD,
        ),
        make_order(
            datetime(2025, 1, 14, 12, 5),
            [("prod-nasi", 2, None)],
            PaymentMethod.MOBILE,
        ),
        make_order(
            datetime(2025, 1, 15, 9, 50),
            [("prod-coffee", 1, 20000)],
            PaymentMethod.CARD,
        ),
    ]


@pytest.fixture
def plain_order() -> Callable[..., Order]:
    """Factory for orders without items, for metric-only scenarios"""
    def factory(
        order_id: str,
        total: int,
        tax: int,
        subtotal: int,
        payment_method: PaymentMethod,
        created_at: datetime,
    ) -> Order:
        return Order(
            id=order_id,
            subtotal=Decimal(subtotal),
            tax=Decimal(tax),
            total=Decimal(total),
            payment_method=payment_method,
            created_at=created_at,
        )

    return factory
