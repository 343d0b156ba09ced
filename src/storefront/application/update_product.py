"""Application service: Update Product use case (admin only).

Merges the supplied fields into the product. New images replace the
whole image set; owned images that drop out are deleted only after the
product was saved.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import structlog

from storefront.application.add_product import resolve_image_urls
from storefront.application.asset_cleanup import release_assets
from storefront.application.dto import ProductDTO, product_to_dto
from storefront.application.schemas import ProductPatch, parse_payload
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.value_objects import OwnedAsset
from storefront.domain.repository.asset_store import AssetStore, ImageUpload
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.access_guard import AccessGuard

logger = structlog.get_logger()


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        asset_store: AssetStore,
        access_guard: AccessGuard,
    ) -> None:
        self._product_repo = product_repo
        self._asset_store = asset_store
        self._access_guard = access_guard

    def handle(
        self,
        token: str | None,
        product_id: str,
        fields: Mapping[str, Any] | None = None,
        uploads: Sequence[ImageUpload] | None = None,
        image_urls: Sequence[str] | None = None,
    ) -> ProductDTO:
        """Update a product.

        Price changes do NOT affect existing orders — they captured a
        price snapshot at creation time.
        """
        admin = self._access_guard.validate(token)
        patch = parse_payload(ProductPatch, fields or {})
        uploads = list(uploads or [])

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        linked = resolve_image_urls(
            image_urls or [], self._asset_store.url_prefix, current=product.owned_assets()
        )

        for upload in uploads:
            self._asset_store.check(upload)

        stored: list[OwnedAsset] = []
        released: list[OwnedAsset] = []
        try:
            for upload in uploads:
                stored.append(self._asset_store.store(upload))
            product.apply_changes(patch.to_changes())
            if stored or linked:
                released = product.replace_images([*stored, *linked])
            self._product_repo.save(product)
        except Exception:
            release_assets(self._asset_store, stored, reason="product update failed")
            raise

        release_assets(self._asset_store, released, reason="image replaced")
        logger.info(
            "Product updated",
            product_id=product.id,
            fields=sorted(patch.model_fields_set),
            images_replaced=bool(stored or linked),
            admin=admin.subject,
        )
        return product_to_dto(product, self._asset_store.url_prefix)
