"""Application service: Create Order use case (public).

Orchestrates the flow between repositories and the domain model.
This is the only place that coordinates multiple aggregates (Product
lookup + Order creation).
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import structlog

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.application.schemas import OrderRequest, parse_payload
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import Order, OrderLineItem
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger()


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        customer: Mapping[str, Any],
        lines: Sequence[Mapping[str, Any]],
    ) -> OrderDTO:
        """Create a new customer order.

        Steps:
        1. Validate the customer details and every requested line.
        2. Resolve every product ID (fail if any is unknown, before
           anything is written).
        3. Build OrderLineItems with *current* prices (snapshot).
        4. Persist and return a DTO.
        """
        request = parse_payload(
            OrderRequest, {"customer": dict(customer), "items": list(lines)}
        )

        line_items: list[OrderLineItem] = []
        missing: list[str] = []
        for line in request.items:
            product = self._product_repo.get_by_id(line.product_id)
            if product is None:
                missing.append(line.product_id)
                continue

            line_items.append(
                OrderLineItem(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=Quantity(line.quantity),
                    unit_price=product.price,  # <-- price snapshot
                )
            )

        if missing:
            raise EntityNotFoundError(
                "Product not found: " + ", ".join(f"'{pid}'" for pid in missing)
            )

        order = Order.create(
            order_id=self._order_repo.next_id(),
            customer=request.customer.to_domain(),
            items=line_items,
        )
        self._order_repo.save(order)

        logger.info(
            "Order created",
            order_id=order.id,
            lines=len(order.items),
            total=str(order.total.amount),
        )
        return order_to_dto(order)
