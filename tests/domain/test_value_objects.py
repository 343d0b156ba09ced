"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import (
    Category,
    ExternalAsset,
    Money,
    OwnedAsset,
    Quantity,
)


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_float(self):
        assert Money.of(128.00) == Money.of("128")

    def test_zero_is_allowed(self):
        assert Money.of("0").amount == Decimal("0")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            Money(Decimal("NaN"))

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("twelve")

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_multiply_by_int(self):
        assert Money.of("128.00") * 2 == Money.of("256.00")

    def test_multiply_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("1") * 1.5

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("1"), "USD") + Money(Decimal("1"), "EUR")

    def test_str_formats_two_decimals(self):
        assert str(Money.of("256")) == "$256.00"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_positive(self):
        assert Quantity(3).value == 3

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_rejected(self, value):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(value)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)


# ── Category & assets ────────────────────────────────────────────────────────


class TestCategory:

    def test_five_fixed_labels(self):
        assert {c.value for c in Category} == {
            "New Arrivals",
            "Wardrobe Staples",
            "Statement Pieces",
            "Streetwear",
            "Evening Luxe",
        }

    def test_unknown_label_rejected(self):
        with pytest.raises(ValueError):
            Category("Swimwear")


class TestAssetRefs:

    def test_owned_and_external_never_equal(self):
        assert OwnedAsset("a.jpg") != ExternalAsset("a.jpg")

    def test_empty_owned_path_rejected(self):
        with pytest.raises(ValidationError):
            OwnedAsset(" ")

    def test_empty_external_url_rejected(self):
        with pytest.raises(ValidationError):
            ExternalAsset("")
