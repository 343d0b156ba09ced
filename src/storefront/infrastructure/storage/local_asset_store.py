"""Filesystem-backed image store.

Blobs land flat in one upload directory under generated names, so the
directory can be served as-is by a static file server.
"""

from __future__ import annotations

import mimetypes
import uuid
from pathlib import Path, PurePath

import structlog

from storefront.domain.exceptions import StorageError
from storefront.domain.model.value_objects import OwnedAsset
from storefront.domain.repository.asset_store import (
    MAX_UPLOAD_BYTES,
    AssetStore,
    ImageUpload,
)

logger = structlog.get_logger()


class LocalAssetStore(AssetStore):

    def __init__(
        self,
        root_path: Path,
        max_bytes: int = MAX_UPLOAD_BYTES,
        url_prefix: str = "/uploads",
    ) -> None:
        super().__init__(max_bytes=max_bytes, url_prefix=url_prefix)
        self.root_path = Path(root_path)
        try:
            self.root_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("Failed to create upload directory", path=str(self.root_path), error=str(exc))
            raise StorageError() from exc

    # --- AssetStore backend ---------------------------------------------------

    def _write(self, upload: ImageUpload) -> OwnedAsset:
        name = f"image-{uuid.uuid4().hex}{self._extension(upload)}"
        target = self.root_path / name
        try:
            # "x" refuses to replace an existing file.
            with open(target, "xb") as fh:
                fh.write(upload.data)
        except OSError as exc:
            logger.error("Failed to store image", path=str(target), error=str(exc))
            raise StorageError() from exc

        logger.debug("Image stored", asset=name, size=upload.size)
        return OwnedAsset(name)

    def _remove(self, ref: OwnedAsset) -> None:
        target = self._resolve(ref)
        try:
            target.unlink(missing_ok=True)
        except OSError as exc:
            logger.error("Failed to delete image", path=str(target), error=str(exc))
            raise StorageError() from exc

    # --- Helpers --------------------------------------------------------------

    def exists(self, ref: OwnedAsset) -> bool:
        return self._resolve(ref).is_file()

    def _resolve(self, ref: OwnedAsset) -> Path:
        target = (self.root_path / ref.path).resolve()
        if target.parent != self.root_path.resolve():
            logger.error("Asset path escapes upload directory", asset=ref.path)
            raise StorageError()
        return target

    @staticmethod
    def _extension(upload: ImageUpload) -> str:
        suffix = PurePath(upload.filename or "").suffix.lower()
        if suffix and suffix[1:].isalnum():
            return suffix
        return mimetypes.guess_extension(upload.content_type.split(";")[0].strip()) or ""
