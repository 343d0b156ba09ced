"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from datetime import timedelta

import structlog

from storefront.infrastructure.auth.jwt_access_guard import JwtAccessGuard
from storefront.infrastructure.config import get_settings
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.storage.local_asset_store import LocalAssetStore

logger = structlog.get_logger()

_DEV_JWT_SECRET = "insecure-development-secret-set-STOREFRONT_JWT_SECRET"


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(get_settings().data_dir / "products.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(get_settings().data_dir / "orders.json")


def asset_store() -> LocalAssetStore:
    settings = get_settings()
    return LocalAssetStore(
        settings.upload_dir,
        max_bytes=settings.max_upload_bytes,
        url_prefix=settings.upload_url_prefix,
    )


def access_guard() -> JwtAccessGuard:
    settings = get_settings()
    secret = settings.jwt_secret
    if not secret:
        # Local stacks work without extra env; production must set STOREFRONT_JWT_SECRET.
        logger.warning("STOREFRONT_JWT_SECRET not configured, using development secret")
        secret = _DEV_JWT_SECRET
    return JwtAccessGuard(
        secret=secret,
        admin_email=settings.admin_email,
        admin_password_hash=settings.admin_password_hash,
        ttl=timedelta(hours=settings.jwt_expiry_hours),
    )
