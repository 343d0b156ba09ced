"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import (
    AssetRef,
    Category,
    ExternalAsset,
    Money,
    OwnedAsset,
)
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if raw.get("id") == product_id:
                return self._file.decode(raw, self._to_domain)
        return None

    def list_all(self) -> list[Product]:
        return [self._file.decode(raw, self._to_domain) for raw in self._file.load()]

    def save(self, product: Product) -> None:
        records = self._file.load()

        # Upsert: replace if exists, otherwise append
        for i, raw in enumerate(records):
            if raw.get("id") == product.id:
                records[i] = self._to_raw(product)
                break
        else:
            records.append(self._to_raw(product))

        self._file.persist(records)

    def delete(self, product_id: str) -> bool:
        records = self._file.load()
        remaining = [raw for raw in records if raw.get("id") != product_id]
        if len(remaining) == len(records):
            return False
        self._file.persist(remaining)
        return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "category": product.category.value,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "description": product.description,
            "rating": str(product.rating),
            "review_count": product.review_count,
            "images": [_asset_to_raw(ref) for ref in product.images],
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            category=Category(raw["category"]),
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            description=raw["description"],
            images=[_asset_from_raw(item) for item in raw["images"]],
            rating=Decimal(raw.get("rating", "0")),
            review_count=raw.get("review_count", 0),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )


def _asset_to_raw(ref: AssetRef) -> dict:
    if isinstance(ref, OwnedAsset):
        return {"kind": "owned", "path": ref.path}
    return {"kind": "external", "url": ref.url}


def _asset_from_raw(raw: dict) -> AssetRef:
    if raw["kind"] == "owned":
        return OwnedAsset(raw["path"])
    return ExternalAsset(raw["url"])
