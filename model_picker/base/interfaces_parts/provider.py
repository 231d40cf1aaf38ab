"""Provider Protocol (single-class module).

The capability set the registry and catalog rely on: static metadata, a fixed
built-in model list, a default-model lookup and an async listing call.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from ..models import ModelConfig, ProviderMetadata
from .has_default_model import HasDefaultModel
from .model_listing_provider import ModelListingProvider


@runtime_checkable
class Provider(ModelListingProvider, HasDefaultModel, Protocol):
    """A named source of selectable models."""

    @property
    def metadata(self) -> ProviderMetadata:  # pragma: no cover - interface
        ...

    @property
    def models(self) -> Sequence[ModelConfig]:  # pragma: no cover - interface
        ...
