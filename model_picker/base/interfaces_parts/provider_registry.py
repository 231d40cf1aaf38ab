"""IProviderRegistry Protocol (single-class module).

The registry contract consumed by the catalog: identifier lookup with an
explicit not-found failure and enumeration in registration order.
"""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from .provider import Provider


@runtime_checkable
class IProviderRegistry(Protocol):
    """Mapping from provider id to provider implementation."""

    def has_provider(self, provider_id: str) -> bool:  # pragma: no cover - interface
        """Return True when ``provider_id`` is registered."""
        ...

    def get_provider(self, provider_id: str) -> Provider:  # pragma: no cover - interface
        """Return the provider or raise ``NotFoundError``."""
        ...

    def get_all_providers(self) -> List[Provider]:  # pragma: no cover - interface
        """Return every registered provider in registration order."""
        ...
