"""Application service: Delete Product use case (admin only)."""

from __future__ import annotations

import structlog

from storefront.application.asset_cleanup import release_assets
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.asset_store import AssetStore
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.access_guard import AccessGuard

logger = structlog.get_logger()


class DeleteProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        asset_store: AssetStore,
        access_guard: AccessGuard,
    ) -> None:
        self._product_repo = product_repo
        self._asset_store = asset_store
        self._access_guard = access_guard

    def handle(self, token: str | None, product_id: str) -> None:
        """Remove the product, then its owned images.

        The record goes first. Image removal is best-effort and a failure
        there does not bring the product back.
        """
        admin = self._access_guard.validate(token)

        product = self._product_repo.get_by_id(product_id)
        if product is None or not self._product_repo.delete(product_id):
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        failures = release_assets(
            self._asset_store, product.owned_assets(), reason="product deleted"
        )
        logger.info(
            "Product deleted",
            product_id=product_id,
            asset_cleanup_failures=failures,
            admin=admin.subject,
        )
