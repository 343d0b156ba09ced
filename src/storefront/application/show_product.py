"""Application service: catalog queries (public)."""

from __future__ import annotations

from storefront.application.dto import ProductDTO, newest_first, product_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.product_repository import ProductRepository


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository, url_prefix: str = "/uploads") -> None:
        self._product_repo = product_repo
        self._url_prefix = url_prefix

    def handle(self, product_id: str) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product_to_dto(product, self._url_prefix)


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository, url_prefix: str = "/uploads") -> None:
        self._product_repo = product_repo
        self._url_prefix = url_prefix

    def handle(self) -> list[ProductDTO]:
        """Every product, most recently created first."""
        products = newest_first(self._product_repo.list_all())
        return [product_to_dto(p, self._url_prefix) for p in products]
