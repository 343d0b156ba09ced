"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations

from dataclasses import dataclass


class DomainException(Exception):
    """Base class for all domain errors."""


@dataclass(frozen=True)
class FieldError:
    """A single violated field and what was wrong with it."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ValidationError(DomainException):
    """A business rule or invariant was violated.

    ``errors`` lists every violated field; ``field`` is the first of them
    (or None for rules that are not tied to one field).
    """

    def __init__(self, message: str, errors: list[FieldError] | None = None) -> None:
        super().__init__(message)
        self.errors: list[FieldError] = list(errors or [])

    @property
    def field(self) -> str | None:
        return self.errors[0].field if self.errors else None

    @classmethod
    def for_field(cls, field: str, message: str) -> ValidationError:
        return cls(f"{field}: {message}", [FieldError(field, message)])

    @classmethod
    def from_errors(cls, errors: list[FieldError]) -> ValidationError:
        return cls(str(errors[0]), errors)


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class UnauthorizedError(DomainException):
    """Missing, malformed, expired or forged admin credential."""


class InvalidStatusError(DomainException):
    """Order status outside the fixed set of allowed values."""


class StorageError(DomainException):
    """Persistence or blob storage failed.

    The message never names paths or ids. The underlying cause is logged
    where it is caught and kept as ``__cause__``.
    """

    def __init__(self, message: str = "Storage operation failed") -> None:
        super().__init__(message)
