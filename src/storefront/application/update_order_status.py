"""Application service: Update Order Status use case (admin only).

Any of the five statuses may follow any other. Only the target value
itself is validated.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.application.list_orders import current_product_names
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.access_guard import AccessGuard

logger = structlog.get_logger()


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        access_guard: AccessGuard,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._access_guard = access_guard

    def handle(self, token: str | None, order_id: str, status: str) -> OrderDTO:
        admin = self._access_guard.validate(token)
        new_status = OrderStatus.parse(status)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        previous = order.status
        order.change_status(new_status)
        self._order_repo.save(order)

        logger.info(
            "Order status changed",
            order_id=order.id,
            old_status=previous.value,
            new_status=new_status.value,
            admin=admin.subject,
        )
        return order_to_dto(order, current_product_names(self._product_repo, [order]))
