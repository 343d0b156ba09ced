"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, images are replaced, products are removed from the catalog.
A product owns its uploaded images; external image URLs are only referenced.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import (
    AssetRef,
    Category,
    Money,
    OwnedAsset,
)

MAX_RATING = Decimal("5")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A product in the catalog.

    Use ``Product.create()`` for new products. The ``__init__`` stays
    simple so the repository can reconstitute stored records.
    """

    id: str
    name: str
    category: Category
    price: Money
    description: str
    images: list[AssetRef]
    rating: Decimal = Decimal("0")
    review_count: int = 0
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        product_id: str,
        name: str,
        category: Category,
        price: Money,
        description: str,
        images: list[AssetRef],
        rating: Decimal = Decimal("0"),
        review_count: int = 0,
    ) -> Product:
        """Create a new product, enforcing all invariants."""
        now = _utcnow()
        product = Product(
            id=product_id,
            name=name,
            category=category,
            price=price,
            description=description,
            images=list(images),
            rating=rating,
            review_count=review_count,
            created_at=now,
            updated_at=now,
        )
        product._check_invariants()
        return product

    # --- Mutations ------------------------------------------------------------

    def apply_changes(self, changes: dict) -> None:
        """Merge the supplied fields into the product.

        Keys absent from *changes* keep their current value.
        """
        unknown = set(changes) - _MUTABLE_FIELDS
        if unknown:
            raise ValidationError.for_field(sorted(unknown)[0], "Field cannot be changed")
        for name, value in changes.items():
            setattr(self, name, value)
        self._check_invariants()
        self.updated_at = _utcnow()

    def replace_images(self, images: list[AssetRef]) -> list[OwnedAsset]:
        """Swap the image set, returning owned assets that are no longer used.

        External URLs are never returned: we do not manage their storage.
        """
        if not images:
            raise ValidationError.for_field("images", "At least one image is required")
        kept = set(images)
        released = [ref for ref in self.owned_assets() if ref not in kept]
        self.images = list(images)
        self.updated_at = _utcnow()
        return released

    def owned_assets(self) -> list[OwnedAsset]:
        return [ref for ref in self.images if isinstance(ref, OwnedAsset)]

    # --- Invariants -----------------------------------------------------------

    def _check_invariants(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError.for_field("name", "Product name is required")
        if not isinstance(self.category, Category):
            raise ValidationError.for_field("category", f"Unknown category {self.category!r}")
        if not self.description or not self.description.strip():
            raise ValidationError.for_field("description", "Description is required")
        if not Decimal("0") <= self.rating <= MAX_RATING:
            raise ValidationError.for_field("rating", "Rating must be between 0 and 5")
        if self.review_count < 0:
            raise ValidationError.for_field("review_count", "Review count cannot be negative")
        if not self.images:
            raise ValidationError.for_field("images", "At least one image is required")


_MUTABLE_FIELDS = {"name", "category", "price", "description", "rating", "review_count"}
