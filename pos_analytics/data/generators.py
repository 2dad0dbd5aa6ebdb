"""
Synthetic Data Generator

Generates a point-of-sale catalog and order history for development,
demos and tests.
Includes:
- The store's seed catalog (beverages, food, snacks)
- Orders spread over business hours with captured line prices
- An optional seasonal mode with weekend uplift and meal-time peaks
"""

import random
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from faker import Faker
import structlog

from pos_analytics.config import Settings, get_settings
from pos_analytics.domain.models import Category, Order, OrderItem, PaymentMethod, Product

logger = structlog.get_logger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

SEED_CATALOG = [
    ("Beverages", [
        ("Coffee", "Fresh brewed coffee", 25000, 50),
        ("Tea", "Hot tea selection", 15000, 40),
        ("Orange Juice", "Fresh orange juice", 20000, 30),
    ]),
    ("Food", [
        ("Nasi Goreng", "Indonesian fried rice", 35000, 25),
        ("Mie Ayam", "Chicken noodle soup", 30000, 20),
        ("Gado-Gado", "Indonesian salad with peanut sauce", 28000, 15),
    ]),
    ("Snacks", [
        ("Keripik Singkong", "Cassava chips", 12000, 60),
        ("Kacang Goreng", "Fried peanuts", 10000, 80),
        ("Pisang Goreng", "Fried banana", 15000, 35),
    ]),
]

OPENING_HOUR = 8
CLOSING_HOUR = 22

# (first hour, hours in slot, share of orders) for seasonal mode
PEAK_SLOTS = [
    (7, 3, 0.30),  # breakfast
    (12, 3, 0.30),  # lunch
    (18, 3, 0.25),  # dinner
]


# =============================================================================
# GENERATORS
# =============================================================================

class CatalogGenerator:
    """Build the store's seed catalog"""

    def __init__(self, seed: int = 42):
        self.fake = Faker()
        self.fake.seed_instance(seed)

    def generate(self) -> List[Product]:
        """Products of every seed category"""
        created_at = self.fake.date_time_between(start_date="-1y", end_date="-30d")
        products = []

        for category_name, entries in SEED_CATALOG:
            category = Category(
                id=self.fake.uuid4(),
                name=category_name,
                product_count=len(entries),
            )
            for name, description, price, stock in entries:
                products.append(
                    Product(
                        id=self.fake.uuid4(),
                        name=name,
                        description=description,
                        price=Decimal(price),
                        category=category,
                        stock=stock,
                        created_at=created_at,
                        updated_at=created_at,
                    )
                )

        return products


class OrderGenerator:
    """Generate a reproducible order history over a catalog"""

    def __init__(
        self,
        products: Sequence[Product],
        seed: int = 42,
        settings: Optional[Settings] = None,
    ):
        if not products:
            raise ValueError("Order generation needs at least one product")
        self.products = list(products)
        self.settings = settings or get_settings()
        self.rng = random.Random(seed)
        self.fake = Faker()
        self.fake.seed_instance(seed)

    def _pick_hour(self, seasonal: bool) -> int:
        if seasonal:
            roll = self.rng.random()
            for first_hour, span, share in PEAK_SLOTS:
                if roll < share:
                    return first_hour + self.rng.randrange(span)
                roll -= share
        return self.rng.randrange(OPENING_HOUR, CLOSING_HOUR)

    def _pick_payment(self, hour: int, seasonal: bool) -> PaymentMethod:
        if not seasonal:
            return self.rng.choice(list(PaymentMethod))
        cash_share = 0.6 if hour <= 10 else 0.4
        if self.rng.random() < cash_share:
            return PaymentMethod.CASH
        return PaymentMethod.CARD if self.rng.random() < 0.5 else PaymentMethod.MOBILE

    def _build_order(self, created_at: datetime, seasonal: bool) -> Order:
        order_id = self.fake.uuid4()
        items = []
        subtotal = Decimal(0)

        for _ in range(self.rng.randint(1, 4)):
            product = self.rng.choice(self.products)
            quantity = self.rng.randint(1, 3)
            items.append(
                OrderItem(
                    id=self.fake.uuid4(),
                    order_id=order_id,
                    product=product,
                    quantity=quantity,
                    price=product.price,
                )
            )
            subtotal += product.price * quantity

        tax = subtotal * Decimal(str(self.settings.reporting.tax_rate))
        return Order(
            id=order_id,
            items=items,
            subtotal=subtotal,
            tax=tax,
            total=subtotal + tax,
            payment_method=self._pick_payment(created_at.hour, seasonal),
            created_at=created_at,
            updated_at=created_at,
        )

    def generate(
        self,
        days: int = 30,
        end_date: Optional[datetime] = None,
        min_per_day: int = 3,
        max_per_day: int = 15,
        seasonal: bool = False,
    ) -> List[Order]:
        """
        Generate orders for each of the last `days` days up to `end_date`.

        Args:
            days: Number of calendar days covered
            end_date: Last day covered, defaults to now
            min_per_day: Fewest orders on a day
            max_per_day: Most orders on a weekday
            seasonal: Weekend uplift and meal-time peaks

        Returns:
            Orders sorted by creation time
        """
        end_date = end_date or datetime.now()
        orders = []

        for offset in range(days):
            day = (end_date - timedelta(days=offset)).replace(
                hour=0, minute=0, second=0, microsecond=0
            )
            count = self.rng.randint(min_per_day, max_per_day)
            if seasonal and day.weekday() >= 5:
                count = int(count * 1.5)

            for _ in range(count):
                created_at = day.replace(
                    hour=self._pick_hour(seasonal),
                    minute=self.rng.randrange(60),
                )
                orders.append(self._build_order(created_at, seasonal))

        orders.sort(key=lambda order: order.created_at)
        logger.info("Sample orders generated", orders=len(orders), days=days, seasonal=seasonal)
        return orders


def catalog_index(products: Sequence[Product]) -> Dict[str, Product]:
    """Products keyed by id, the lookup the aggregators accept"""
    return {product.id: product for product in products}
