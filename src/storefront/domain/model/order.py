"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items.
All business invariants are enforced here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import InvalidStatusError, ValidationError
from storefront.domain.model.value_objects import Customer, Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, raw: str) -> OrderStatus:
        try:
            return cls(raw)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise InvalidStatusError(
                f"Invalid status {raw!r} (expected one of: {allowed})"
            ) from None


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the price snapshot of a product at order-creation time.

    Immutable: the order never re-reads the product afterwards, so later
    price changes in the catalog cannot reach it.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules and fixes ``total``.  The ``__init__`` is intentionally
    simple so the repository can reconstitute persisted orders without
    re-validating.
    """

    id: str
    customer: Customer
    items: list[OrderLineItem]
    total: Money
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(order_id: str, customer: Customer, items: list[OrderLineItem]) -> Order:
        """Create a new pending order, enforcing all invariants."""
        if not items:
            raise ValidationError.for_field("items", "Order must contain at least one item")

        total = Money.zero()
        for item in items:
            total = total + item.line_total

        now = _utcnow()
        return Order(
            id=order_id,
            customer=customer,
            items=list(items),
            total=total,
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def change_status(self, new_status: OrderStatus) -> None:
        """Move to *new_status*.

        Every status is reachable from every other one; the storefront
        admin decides the workflow.
        """
        if not isinstance(new_status, OrderStatus):
            raise InvalidStatusError(f"Invalid status {new_status!r}")
        self.status = new_status
        self.updated_at = _utcnow()
