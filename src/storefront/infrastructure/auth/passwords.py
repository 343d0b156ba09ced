"""PBKDF2-SHA256 password hashes for the admin secret.

Format: ``pbkdf2:sha256:<iterations>$<salt>$<hex digest>``.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

DEFAULT_ITERATIONS = 390_000


def hash_password(password: str, iterations: int = DEFAULT_ITERATIONS) -> str:
    """Hash a password using PBKDF2-SHA256 with a random salt."""
    salt = secrets.token_hex(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations)
    return f"pbkdf2:sha256:{iterations}${salt}${dk.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against a PBKDF2 hash. Malformed hashes never match."""
    if not password_hash.startswith("pbkdf2:sha256:"):
        return False
    parts = password_hash.split("$")
    if len(parts) != 3:
        return False
    header, salt, stored_hash = parts
    try:
        iterations = int(header.split(":")[2])
    except ValueError:
        return False
    if iterations <= 0:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations)
    return hmac.compare_digest(dk.hex(), stored_hash)
