"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import AssetRef, OwnedAsset

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class ProductDTO:
    """Output: a catalog entry as displayed to the user."""

    id: str
    name: str
    category: str
    price: str  # formatted, e.g. "$128.00"
    description: str
    rating: str
    review_count: int
    images: list[str]
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user.

    ``current_product_name`` is looked up at display time and is None
    when the product no longer exists.
    """

    product_id: str
    product_name: str
    current_product_name: str | None
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    customer_name: str
    phone: str
    address: str
    size: str
    status: str
    items: list[OrderLineItemDTO]
    total: str
    created_at: str
    updated_at: str


# --- Mapping ------------------------------------------------------------------


def image_url(ref: AssetRef, url_prefix: str) -> str:
    if isinstance(ref, OwnedAsset):
        return f"{url_prefix.rstrip('/')}/{ref.path}"
    return ref.url


def product_to_dto(product: Product, url_prefix: str) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        category=product.category.value,
        price=str(product.price),
        description=product.description,
        rating=f"{product.rating:.1f}",
        review_count=product.review_count,
        images=[image_url(ref, url_prefix) for ref in product.images],
        created_at=product.created_at.strftime(_TIMESTAMP_FORMAT),
        updated_at=product.updated_at.strftime(_TIMESTAMP_FORMAT),
    )


def order_to_dto(order: Order, current_names: dict[str, str | None] | None = None) -> OrderDTO:
    current_names = current_names or {}
    return OrderDTO(
        id=order.id,
        customer_name=order.customer.name,
        phone=order.customer.phone,
        address=order.customer.address,
        size=order.customer.size,
        status=order.status.value,
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                current_product_name=current_names.get(item.product_id),
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        total=str(order.total),
        created_at=order.created_at.strftime(_TIMESTAMP_FORMAT),
        updated_at=order.updated_at.strftime(_TIMESTAMP_FORMAT),
    )


def newest_first(records: list) -> list:
    """Sort by ``created_at`` descending; ties keep the later-saved record first."""
    return sorted(reversed(records), key=lambda r: r.created_at, reverse=True)
