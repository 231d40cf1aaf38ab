"""ModelListingProvider Protocol (single-class module).

Interface for providers that can list their currently available models.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from ..models import ModelConfig


@runtime_checkable
class ModelListingProvider(Protocol):
    """Interface to fetch the models a provider currently serves."""

    async def fetch_available_models(self) -> Sequence[ModelConfig]:  # pragma: no cover - interface
        """Return the provider's model list.

        Implementations own their retry/backoff policy and credential handling;
        any exception raised here is recorded by the catalog as the provider's
        ``error`` status.
        """
        ...
