"""
Selectable units: a model paired with its provider's metadata.

``ModelConfigWithProvider`` is what the catalog stores per provider;
``KeyedModelConfigWithProvider`` carries the precomputed composite key and is
used by recency lists where identity must survive re-ordering.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..keys import make_key
from .model_config import ModelConfig
from .provider_metadata import ProviderMetadata


@dataclass(frozen=True)
class ModelConfigWithProvider:
    """A model together with the metadata of the provider that serves it."""

    model: ModelConfig
    provider: ProviderMetadata

    @property
    def key(self) -> str:
        """Composite ``provider:model`` key."""
        return make_key(self.provider.id, self.model.id)

    def with_key(self) -> "KeyedModelConfigWithProvider":
        return KeyedModelConfigWithProvider(model=self.model, provider=self.provider, key=self.key)

    def to_dict(self) -> Dict[str, Any]:
        return {"model": self.model.to_dict(), "provider": self.provider.to_dict()}


@dataclass(frozen=True)
class KeyedModelConfigWithProvider:
    """``ModelConfigWithProvider`` plus its precomputed composite key."""

    model: ModelConfig
    provider: ProviderMetadata
    key: str

    def without_key(self) -> ModelConfigWithProvider:
        return ModelConfigWithProvider(model=self.model, provider=self.provider)

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "model": self.model.to_dict(), "provider": self.provider.to_dict()}


__all__ = ["ModelConfigWithProvider", "KeyedModelConfigWithProvider"]
