"""Application service: List Orders use case (admin only, query)."""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, newest_first, order_to_dto
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import Order
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.access_guard import AccessGuard

logger = structlog.get_logger()


def current_product_names(
    product_repo: ProductRepository, orders: list[Order]
) -> dict[str, str | None]:
    """Look up today's display name for every product in *orders*.

    Missing products map to None. A failed lookup is logged and also maps
    to None; it never fails the caller and never touches the orders.
    """
    names: dict[str, str | None] = {}
    for order in orders:
        for item in order.items:
            if item.product_id in names:
                continue
            try:
                product = product_repo.get_by_id(item.product_id)
            except DomainException:
                logger.warning(
                    "Product lookup failed during order enrichment",
                    product_id=item.product_id,
                    exc_info=True,
                )
                product = None
            names[item.product_id] = product.name if product is not None else None
    return names


class ListOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        access_guard: AccessGuard,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._access_guard = access_guard

    def handle(self, token: str | None) -> list[OrderDTO]:
        """Every order, most recent first, with current product names."""
        self._access_guard.validate(token)
        orders = newest_first(self._order_repo.list_all())
        names = current_product_names(self._product_repo, orders)
        return [order_to_dto(order, names) for order in orders]
