"""Best-effort removal of image blobs.

Used after a failed write (rollback) and after a successful one (assets no
longer referenced). A failed removal is logged and never raised: the
caller's outcome, success or original error, must reach the user as is.
"""

from __future__ import annotations

from typing import Iterable

import structlog

from storefront.domain.model.value_objects import AssetRef
from storefront.domain.repository.asset_store import AssetStore

logger = structlog.get_logger()


def release_assets(asset_store: AssetStore, refs: Iterable[AssetRef], reason: str) -> int:
    """Delete every ref in *refs*; return how many deletions failed."""
    failures = 0
    for ref in refs:
        try:
            asset_store.delete(ref)
        except Exception:
            failures += 1
            logger.warning("Asset cleanup failed", asset=str(ref), reason=reason, exc_info=True)
        else:
            logger.debug("Asset released", asset=str(ref), reason=reason)
    return failures
