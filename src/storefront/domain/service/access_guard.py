"""Admin access gate.

The catalog and the order ledger only need to know whether a caller holds
a valid admin credential; how credentials are issued and verified is up
to the implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AdminClaims:
    """Who a validated credential belongs to."""

    subject: str


class AccessGuard(ABC):

    @abstractmethod
    def issue_credential(self, presented_id: str, presented_secret: str) -> str:
        """Return a signed token, or raise UnauthorizedError."""

    @abstractmethod
    def validate(self, token: str | None) -> AdminClaims:
        """Return the token's claims, or raise UnauthorizedError."""
