"""Concrete base for providers with a fixed built-in model list.

``StaticProvider`` implements the ``Provider`` capability set. Its listing call
returns the built-in models; subclasses that talk to a vendor API override
``fetch_available_models`` and own their retry and credential policy.
"""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..interfaces import HasDefaultModel, ModelListingProvider
from ..keys import validate_model_id, validate_provider_id
from ..models import ModelConfig, ProviderMetadata


class StaticProvider(ModelListingProvider, HasDefaultModel):
    """Provider backed by static metadata and a built-in model list."""

    def __init__(self, metadata: ProviderMetadata, models: Sequence[ModelConfig] = ()) -> None:
        validate_provider_id(metadata.id)
        for model in models:
            validate_model_id(model.id)
        self._metadata = metadata
        self._models: Tuple[ModelConfig, ...] = tuple(models)

    @property
    def metadata(self) -> ProviderMetadata:
        return self._metadata

    @property
    def models(self) -> Tuple[ModelConfig, ...]:
        return self._models

    @property
    def requires_credentials(self) -> bool:
        """True when the provider declares credential fields."""
        return bool(self._metadata.required_keys)

    def get_default_model(self) -> Optional[ModelConfig]:
        """Return the first model flagged ``is_default``, or ``None``."""
        return next((m for m in self._models if m.is_default), None)

    async def fetch_available_models(self) -> Sequence[ModelConfig]:
        return self._models

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._metadata.id!r}, models={len(self._models)})"


__all__ = ["StaticProvider"]
