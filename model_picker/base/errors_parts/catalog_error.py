"""
Structured catalog exception types.

``CatalogError`` carries a normalized :class:`ErrorCode` plus the provider and
model it concerns. Subclasses separate the failure families the catalog and
the selection synchronizer distinguish at their boundaries:

- ``NotFoundError``: unknown provider, or a model that does not resolve
  against a provider. Raised to the immediate caller of mutating calls.
- ``FetchError``: a provider's model-listing call failed. Converted into the
  provider's ``error`` status and never raised out of ``refresh``.
- ``PersistenceError``: a Store operation failed while loading state.
- ``InvalidIdentifierError``: malformed provider/model id or composite key.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode


class CatalogError(Exception):
    """Base class for catalog and selection failures.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging and display.
        provider: Provider id the error concerns, when known.
        model: Model id the error concerns, when known.
    """

    default_code = ErrorCode.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        code: Optional[ErrorCode] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.model = model
        self.code = code or self.default_code

    def __str__(self) -> str:
        return self.message


class NotFoundError(CatalogError):
    """Raised when a provider or model cannot be resolved."""

    default_code = ErrorCode.NOT_FOUND


class FetchError(CatalogError):
    """A provider's model listing failed; ``code`` holds the classification."""

    default_code = ErrorCode.FETCH_FAILED


class PersistenceError(CatalogError):
    """A Store read or write failed."""

    default_code = ErrorCode.PERSISTENCE


class InvalidIdentifierError(CatalogError, ValueError):
    """Malformed provider id, model id or composite key."""

    default_code = ErrorCode.VALIDATION


__all__ = [
    "CatalogError",
    "NotFoundError",
    "FetchError",
    "PersistenceError",
    "InvalidIdentifierError",
]
