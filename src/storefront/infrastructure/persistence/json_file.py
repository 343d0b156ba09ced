"""A JSON list stored in one file, replaced atomically on every write."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Callable, TypeVar

import structlog

from storefront.domain.exceptions import DomainException, StorageError

logger = structlog.get_logger()

T = TypeVar("T")

# What a hand-edited or truncated record can raise while being rebuilt.
_MALFORMED = (KeyError, TypeError, ValueError, ArithmeticError, DomainException)


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def load(self) -> list[dict]:
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Failed to read store", path=str(self._file_path), error=str(exc))
            raise StorageError() from exc
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            logger.error("Store is not a list of records", path=str(self._file_path))
            raise StorageError()
        return records

    def decode(self, raw: dict, to_domain: Callable[[dict], T]) -> T:
        """Rebuild one record, reporting a malformed one as StorageError."""
        try:
            return to_domain(raw)
        except _MALFORMED as exc:
            logger.error(
                "Malformed record in store",
                path=str(self._file_path),
                record_id=raw.get("id"),
                error=repr(exc),
            )
            raise StorageError() from exc
    def persist(self, records: list[dict]) -> None:
        """Write *records* to a temp file, then swap it into place."""
        payload = json.dumps(records, indent=2) + "\n"
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=f".{self._file_path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            logger.error("Failed to write store", path=str(self._file_path), error=str(exc))
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError() from exc

    def _ensure_file(self) -> None:
        if self._file_path.exists():
            return
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to create store", path=str(self._file_path), error=str(exc))
            raise StorageError() from exc
