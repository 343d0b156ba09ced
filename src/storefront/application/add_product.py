"""Application service: Add Product use case (admin only)."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import structlog

from storefront.application.asset_cleanup import release_assets
from storefront.application.dto import ProductDTO, image_url, product_to_dto
from storefront.application.schemas import ProductDraft, parse_payload
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import AssetRef, ExternalAsset, Money, OwnedAsset
from storefront.domain.repository.asset_store import AssetStore, ImageUpload
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.access_guard import AccessGuard

logger = structlog.get_logger()


def resolve_image_urls(
    image_urls: Sequence[str],
    url_prefix: str,
    current: Sequence[OwnedAsset] = (),
) -> list[AssetRef]:
    """Turn image URLs into asset refs.

    A URL naming one of ``current`` (by its public URL) keeps that owned
    ref. Any other URL under ``url_prefix`` is rejected; everything else is
    external.
    """
    owned_by_url = {image_url(ref, url_prefix): ref for ref in current}
    upload_root = f"{url_prefix.rstrip('/')}/"
    refs: list[AssetRef] = []
    for index, url in enumerate(image_urls):
        if not isinstance(url, str) or not url.strip():
            raise ValidationError.for_field(f"image_urls.{index}", "Image URL cannot be empty")
        url = url.strip()
        if url in owned_by_url:
            refs.append(owned_by_url[url])
        elif url.startswith(upload_root):
            raise ValidationError.for_field(
                f"image_urls.{index}", "Uploaded image does not belong to this product"
            )
        else:
            refs.append(ExternalAsset(url))
    return refs


class AddProductHandler:

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
        fields: Mapping[str, Any],
        uploads: Sequence[ImageUpload] = (),
        image_urls: Sequence[str] = (),
    ) -> ProductDTO:
        """Add a new product to the catalog.

        Steps:
        1. Check the admin credential.
        2. Validate fields and every image before anything is written.
        3. Store the uploads, then persist the product.
        4. If persisting fails, delete the uploads stored by this call
           and re-raise the original error.
        """
        admin = self._access_guard.validate(token)
        draft = parse_payload(ProductDraft, fields)
        linked = resolve_image_urls(image_urls, self._asset_store.url_prefix)
        if not uploads and not linked:
            raise ValidationError.for_field("images", "At least one image is required")
        for upload in uploads:
            self._asset_store.check(upload)

        stored: list[OwnedAsset] = []
        try:
            for upload in uploads:
                stored.append(self._asset_store.store(upload))
            images: list[AssetRef] = [*stored, *linked]
            product = Product.create(
                product_id=self._product_repo.next_id(),
                name=draft.name,
                category=draft.category,
                price=Money(draft.price),
                description=draft.description,
                images=images,
                rating=draft.rating,
                review_count=draft.review_count,
            )
            self._product_repo.save(product)
        except Exception:
            release_assets(self._asset_store, stored, reason="product create failed")
            raise

        logger.info(
            "Product created",
            product_id=product.id,
            images=len(product.images),
            admin=admin.subject,
        )
        return product_to_dto(product, self._asset_store.url_prefix)
