"""Tests for Value Objects: ProductName and Money."""

from decimal import Decimal

import pytest

from ims.domain.exceptions import InvalidOperationError, ValidationError
from ims.domain.model.value_objects import Money, ProductName


class TestProductName:

    def test_create_trims_whitespace(self):
        name = ProductName.create("  Lavender Mist  ")
        assert name.value == "Lavender Mist"
        assert str(name) == "Lavender Mist"

    def test_boundaries(self):
        assert ProductName.create("AB").value == "AB"
        assert len(ProductName.create("x" * 200).value) == 200

    def test_too_short_rejected(self):
        with pytest.raises(ValidationError, match="at least 2 characters"):
            ProductName.create("A")

    def test_too_long_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed 200 characters"):
            ProductName.create("x" * 201)

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_blank_rejected(self, raw):
        with pytest.raises(ValidationError, match="null, empty, or whitespace"):
            ProductName.create(raw)

    def test_length_is_checked_after_trimming(self):
        with pytest.raises(ValidationError, match="at least 2 characters"):
            ProductName.create("  A  ")

    def test_untrimmed_constructor_value_rejected(self):
        with pytest.raises(ValidationError, match="must be trimmed"):
            ProductName(" Lavender")

    def test_equality_is_case_sensitive(self):
        assert ProductName.create("Lavender") == ProductName.create(" Lavender ")
        assert ProductName.create("Lavender") != ProductName.create("lavender")

    def test_immutable(self):
        name = ProductName.create("Lavender")
        with pytest.raises(AttributeError):
            name.value = "Rose"


class TestMoneyCreation:

    def test_create_from_string(self):
        m = Money.create("1500.50")
        assert m.amount == Decimal("1500.50")
        assert m.currency == "ALL"

    def test_create_from_int_and_float(self):
        assert Money.create(10).amount == Decimal("10")
        assert Money.create(0.1).amount == Decimal("0.1")

    def test_currency_is_upper_cased(self):
        assert Money.create("5", "eur").currency == "EUR"
        assert Money(Decimal("5"), " usd ").currency == "USD"

    def test_zero_is_allowed(self):
        assert Money.create("0").amount == Decimal("0")

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money.create("-0.01")

    def test_non_numeric_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.create("abc")

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.create(True)

    def test_non_decimal_amount_rejected_by_constructor(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.0)

    @pytest.mark.parametrize("currency", ["", "   ", None])
    def test_blank_currency_rejected(self, currency):
        with pytest.raises(ValidationError, match="Currency cannot be null or empty"):
            Money(Decimal("1"), currency)

    def test_equality_by_amount_and_currency(self):
        assert Money.create("10.0") == Money.create("10.0")
        assert Money.create("10", "EUR") != Money.create("10", "USD")


class TestMoneyArithmetic:

    def test_add(self):
        assert Money.create("10.25") + Money.create("4.75") == Money.create("15.00")
        assert Money.create("1").add(Money.create("2")).amount == Decimal("3")

    def test_subtract(self):
        assert (Money.create("10") - Money.create("3.5")).amount == Decimal("6.5")

    def test_subtract_to_zero(self):
        assert Money.create("3").subtract(Money.create("3")).amount == Decimal("0")

    def test_add_then_subtract_round_trips(self):
        a, b = Money.create("1500.00"), Money.create("250.10")
        assert (a + b) - b == a

    def test_subtract_below_zero_rejected(self):
        with pytest.raises(InvalidOperationError, match="negative amount"):
            Money.create("1") - Money.create("2")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(InvalidOperationError, match="different currencies: ALL and EUR"):
            Money.create("1") + Money.create("1", "EUR")

    def test_non_money_operand_rejected(self):
        with pytest.raises(ValidationError, match="Cannot add Money and int"):
            Money.create("1") + 1

    def test_display(self):
        assert str(Money.create("1500")) == "1500.00 ALL"
        assert str(Money.create("9.999", "eur")) == "10.00 EUR"
