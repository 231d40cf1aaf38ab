"""
Domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``model_picker.base.models_parts`` and defines the catalog snapshot alias.
"""

from types import MappingProxyType
from typing import Mapping

from .models_parts.model_config import ModelConfig, ModelOrigin
from .models_parts.provider_metadata import ProviderMetadata
from .models_parts.model_config_with_provider import (
    KeyedModelConfigWithProvider,
    ModelConfigWithProvider,
)
from .models_parts.provider_models_status import ProviderModelsStatus, ProviderStatus
from .models_parts.selection_state import LoadState, LoadStatus, SelectionSnapshot

# Read-only provider id -> status mapping; identity changes only on change.
CatalogSnapshot = Mapping[str, ProviderModelsStatus]

EMPTY_SNAPSHOT: CatalogSnapshot = MappingProxyType({})

__all__ = [
    "ModelConfig",
    "ModelOrigin",
    "ProviderMetadata",
    "ModelConfigWithProvider",
    "KeyedModelConfigWithProvider",
    "ProviderModelsStatus",
    "ProviderStatus",
    "LoadState",
    "LoadStatus",
    "SelectionSnapshot",
    "CatalogSnapshot",
    "EMPTY_SNAPSHOT",
]
