"""JWT-based admin access guard.

Admins log in with the configured email and password; the password is
checked against a PBKDF2 hash, never stored or compared in plain text.
A successful login yields an HS256 token valid for ``ttl``.

Claims:
- kind: "storefront_admin"
- sub: admin email
- role: "admin"
- iat/exp: issued/expiry
"""

from __future__ import annotations

import hmac
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt
import structlog

from storefront.domain.exceptions import UnauthorizedError
from storefront.domain.service.access_guard import AccessGuard, AdminClaims
from storefront.infrastructure.auth.passwords import verify_password

logger = structlog.get_logger()

JWT_ALGORITHM = "HS256"
TOKEN_KIND = "storefront_admin"
DEFAULT_TTL = timedelta(hours=24)
# RFC 7518 section 3.2: an HS256 key is at least as long as the hash output.
MIN_SECRET_BYTES = 32


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JwtAccessGuard(AccessGuard):

    def __init__(
        self,
        secret: str,
        admin_email: str,
        admin_password_hash: str,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("A JWT secret is required")
        if len(secret.encode("utf-8")) < MIN_SECRET_BYTES:
            raise ValueError(f"The JWT secret must be at least {MIN_SECRET_BYTES} bytes")
        self._secret = secret
        self._admin_email = admin_email.strip().lower()
        self._admin_password_hash = admin_password_hash
        self._ttl = ttl
        self._clock = clock

    def issue_credential(self, presented_id: str, presented_secret: str) -> str:
        if not self._admin_email or not self._admin_password_hash:
            logger.error("Admin login attempted but no admin account is configured")
            raise UnauthorizedError("Invalid credentials")

        email = (presented_id or "").strip().lower()
        email_ok = hmac.compare_digest(email.encode(), self._admin_email.encode())
        password_ok = verify_password(presented_secret or "", self._admin_password_hash)
        if not (email_ok and password_ok):
            logger.warning("Admin login rejected", email=email)
            raise UnauthorizedError("Invalid credentials")

        now = self._clock()
        payload = {
            "kind": TOKEN_KIND,
            "sub": self._admin_email,
            "role": "admin",
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        logger.info("Admin login succeeded", email=self._admin_email)
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def validate(self, token: str | None) -> AdminClaims:
        if not token:
            raise UnauthorizedError("Access denied. No token provided.")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError("Token expired") from None
        except jwt.InvalidTokenError:
            raise UnauthorizedError("Invalid token") from None

        if payload.get("kind") != TOKEN_KIND or payload.get("role") != "admin":
            raise UnauthorizedError("Invalid token")
        return AdminClaims(subject=str(payload["sub"]))
