"""Application service: Show Order use case (admin only, query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.application.list_orders import current_product_names
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.access_guard import AccessGuard


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        access_guard: AccessGuard,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._access_guard = access_guard

    def handle(self, token: str | None, order_id: str) -> OrderDTO:
        self._access_guard.validate(token)
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order_to_dto(order, current_product_names(self._product_repo, [order]))
