"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.order import Order, OrderLineItem, OrderStatus
from storefront.domain.model.value_objects import Customer, Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._file.load():
            if raw.get("id") == order_id:
                return self._file.decode(raw, self._to_domain)
        return None

    def list_all(self) -> list[Order]:
        return [self._file.decode(raw, self._to_domain) for raw in self._file.load()]

    def save(self, order: Order) -> None:
        orders = self._file.load()

        # Upsert: replace if exists, otherwise append
        for i, raw in enumerate(orders):
            if raw.get("id") == order.id:
                orders[i] = self._to_raw(order)
                break
        else:
            orders.append(self._to_raw(order))

        self._file.persist(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer": {
                "name": order.customer.name,
                "phone": order.customer.phone,
                "address": order.customer.address,
                "size": order.customer.size,
            },
            "status": order.status.value,
            "total": str(order.total.amount),
            "currency": order.total.currency,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            customer=Customer(**raw["customer"]),
            items=items,
            total=Money(Decimal(raw["total"]), raw.get("currency", "USD")),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
