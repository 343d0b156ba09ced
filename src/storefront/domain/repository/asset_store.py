"""Abstract store for product image blobs.

Validation of uploads lives here so every backend enforces the same
rules. Concrete backends only move bytes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import AssetRef, ExternalAsset, OwnedAsset

MAX_UPLOAD_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded file as received at the boundary."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


class AssetStore(ABC):

    def __init__(
        self, max_bytes: int = MAX_UPLOAD_BYTES, url_prefix: str = "/uploads"
    ) -> None:
        self._max_bytes = max_bytes
        self.url_prefix = url_prefix

    def check(self, upload: ImageUpload) -> None:
        """Raise ValidationError if *upload* would be rejected by ``store``."""
        content_type = (upload.content_type or "").lower()
        if not content_type.startswith("image/"):
            raise ValidationError.for_field(
                "images", f"Only image files are allowed (got {upload.content_type!r})"
            )
        if upload.size > self._max_bytes:
            raise ValidationError.for_field(
                "images",
                f"'{upload.filename}' is {upload.size} bytes, "
                f"limit is {self._max_bytes}",
            )

    def store(self, upload: ImageUpload) -> OwnedAsset:
        """Validate and persist *upload* under a new unique name."""
        self.check(upload)
        return self._write(upload)

    def delete(self, ref: AssetRef) -> None:
        """Remove an owned blob. External refs and missing blobs are ignored."""
        if isinstance(ref, ExternalAsset):
            return
        self._remove(ref)

    @abstractmethod
    def _write(self, upload: ImageUpload) -> OwnedAsset:
        """Persist the blob; never overwrite an existing one."""

    @abstractmethod
    def _remove(self, ref: OwnedAsset) -> None:
        """Delete the blob if present."""
