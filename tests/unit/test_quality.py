"""
Unit Tests - Data Quality
"""
from datetime import datetime, timezone
from decimal import Decimal

import polars as pl

from pos_analytics.domain.models import PaymentMethod
from pos_analytics.quality.validators import (
    DataValidator,
    ValidationSeverity,
    ValidationStatus,
    validate_orders,
)


class TestDataValidator:
    """Tests for DataValidator"""

    def test_not_null_check_fails(self):
        """Test not null check with null values"""
        df = pl.DataFrame({"order_id": ["a", None, "c"]})

        result = DataValidator().add_not_null_check("order_id").validate(df)

        assert result.status == ValidationStatus.FAILED
        assert result.failed_checks == 1

    def test_unique_check_fails(self):
        """Test unique check with duplicates"""
        df = pl.DataFrame({"order_id": ["a", "b", "a"]})

        result = DataValidator().add_unique_check("order_id").validate(df)

        assert result.status == ValidationStatus.FAILED
        assert result.checks[0].failed_rows == 1

    def test_range_check(self):
        """Test range check counts rows on both sides"""
        df = pl.DataFrame({"total": [10.0, 50.0, -5.0, 200.0]})

        result = DataValidator().add_range_check("total", min_value=0, max_value=100).validate(df)

        assert result.checks[0].failed_rows == 2

    def test_enum_check(self):
        """Test allowed values check"""
        df = pl.DataFrame({"payment_method": ["cash", "voucher"]})

        result = DataValidator().add_enum_check("payment_method", ["cash", "card"]).validate(df)

        assert result.status == ValidationStatus.FAILED

    def test_missing_column(self):
        """Test a missing column fails the check"""
        df = pl.DataFrame({"other": [1]})

        result = DataValidator().add_not_null_check("order_id").validate(df)

        assert result.checks[0].message == "Column 'order_id' not found"

    def test_row_rule_warning_is_partial(self):
        """Test a warning-level rule failure gives partial status"""
        df = pl.DataFrame({"tax": [1.0, 5.0]})

        result = DataValidator().add_row_rule(
            "small_tax",
            pl.col("tax") > 2,
            "Tax too large",
            severity=ValidationSeverity.WARNING,
        ).validate(df)

        assert result.status == ValidationStatus.PARTIAL
        assert result.warning_count == 1

    def test_strict_mode_fails_on_warning(self):
        """Test strict mode escalates warnings"""
        df = pl.DataFrame({"tax": [5.0]})

        result = DataValidator(strict_mode=True).add_row_rule(
            "small_tax",
            pl.col("tax") > 2,
            "Tax too large",
            severity=ValidationSeverity.WARNING,
        ).validate(df)

        assert result.status == ValidationStatus.FAILED

    def test_custom_check(self):
        """Test custom validation check"""
        df = pl.DataFrame({"total": [100, 200, 300]})

        result = DataValidator().add_custom_check(
            name="total_sum",
            check_func=lambda df: df["total"].sum() < 1000,
            message_on_fail="Sum exceeds 1000",
        ).validate(df)

        assert result.status == ValidationStatus.PASSED
        assert result.success_rate == 100.0

    def test_timestamps_are_utc_aware(self):
        """Test run timestamps carry the UTC timezone"""
        result = DataValidator().add_not_null_check("total").validate(pl.DataFrame({"total": [1]}))

        assert result.started_at.tzinfo == timezone.utc
        assert result.completed_at.tzinfo == timezone.utc
        assert result.started_at <= result.completed_at


class TestValidateOrders:
    """Tests for validate_orders"""

    def test_sample_history_passes(self, sample_orders, test_settings):
        """Test well-formed orders pass every check"""
        result = validate_orders(sample_orders, test_settings)

        assert result.status == ValidationStatus.PASSED
        assert result.failures() == []

    def test_total_mismatch_fails(self, sample_orders, test_settings):
        """Test a total that is not subtotal plus tax is an error"""
        broken = sample_orders[0].model_copy(update={"total": Decimal("1")})

        result = validate_orders([broken] + sample_orders[1:], test_settings)

        assert result.status == ValidationStatus.FAILED
        assert [c.name for c in result.failures()] == ["total_equals_subtotal_plus_tax"]

    def test_off_rate_tax_warns(self, plain_order, make_order, test_settings):
        """Test tax away from the configured rate is a warning"""
        odd = plain_order("o1", 105, 5, 100, PaymentMethod.CASH, datetime(2025, 1, 13, 10, 0))
        odd = odd.model_copy(update={"items": make_order(datetime(2025, 1, 13, 10, 0)).items})

        result = validate_orders([odd], test_settings)

        assert result.status == ValidationStatus.PARTIAL
        assert [c.name for c in result.failures()] == ["tax_matches_rate"]

    def test_duplicate_ids_fail(self, sample_orders, test_settings):
        """Test the same order twice is an error"""
        result = validate_orders([sample_orders[0], sample_orders[0]], test_settings)

        assert result.status == ValidationStatus.FAILED

    def test_order_without_items_warns(self, plain_order, test_settings):
        """Test an order with no items is a warning"""
        empty = plain_order("o1", 110, 10, 100, PaymentMethod.CARD, datetime(2025, 1, 13, 10, 0))

        result = validate_orders([empty], test_settings)

        assert result.status == ValidationStatus.PARTIAL
        assert [c.name for c in result.failures()] == ["range_item_count"]

    def test_empty_history_passes(self, test_settings):
        """Test an empty history has nothing to flag"""
        assert validate_orders([], test_settings).status == ValidationStatus.PASSED
