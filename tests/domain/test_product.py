"""Unit tests for the Product aggregate."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import (
    Category,
    ExternalAsset,
    Money,
    OwnedAsset,
)


def _make_product(**overrides) -> Product:
    fields = dict(
        product_id="p1",
        name="Silk Wrap Dress",
        category=Category.EVENING_LUXE,
        price=Money.of("128.00"),
        description="Bias-cut silk.",
        images=[OwnedAsset("a.jpg")],
    )
    fields.update(overrides)
    return Product.create(**fields)


class TestProductCreation:

    def test_happy_path(self):
        product = _make_product()
        assert product.name == "Silk Wrap Dress"
        assert product.rating == Decimal("0")
        assert product.review_count == 0
        assert product.created_at == product.updated_at

    def test_empty_images_rejected(self):
        with pytest.raises(ValidationError, match="At least one image") as exc_info:
            _make_product(images=[])
        assert exc_info.value.field == "images"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _make_product(name="  ")
        assert exc_info.value.field == "name"

    def test_rating_above_five_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _make_product(rating=Decimal("5.5"))
        assert exc_info.value.field == "rating"


class TestProductChanges:

    def test_only_supplied_fields_change(self):
        product = _make_product()
        product.apply_changes({"price": Money.of("200.00")})
        assert product.price == Money.of("200.00")
        assert product.name == "Silk Wrap Dress"
        assert product.category == Category.EVENING_LUXE

    def test_unknown_field_rejected(self):
        product = _make_product()
        with pytest.raises(ValidationError, match="cannot be changed"):
            product.apply_changes({"id": "other"})

    def test_replace_images_returns_dropped_owned_assets(self):
        product = _make_product(
            images=[OwnedAsset("a.jpg"), OwnedAsset("b.jpg"), ExternalAsset("https://cdn/x.jpg")]
        )
        released = product.replace_images([OwnedAsset("b.jpg"), OwnedAsset("c.jpg")])
        assert released == [OwnedAsset("a.jpg")]
        assert product.images == [OwnedAsset("b.jpg"), OwnedAsset("c.jpg")]

    def test_replace_images_with_nothing_rejected(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.replace_images([])
        assert product.images == [OwnedAsset("a.jpg")]

    def test_owned_assets_skips_external(self):
        product = _make_product(images=[ExternalAsset("https://cdn/x.jpg"), OwnedAsset("a.jpg")])
        assert product.owned_assets() == [OwnedAsset("a.jpg")]
