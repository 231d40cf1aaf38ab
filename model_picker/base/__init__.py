"""
Model Picker Base Package

Exports the provider-agnostic contracts, DTOs, the provider registry, the
model catalog and the selection synchronizer.

Layout:
- Interfaces: provider and registry capability Protocols
- Models (DTOs): frozen dataclasses for models, providers and snapshots
- Registry: string-keyed provider lookup
- Catalog: per-provider model lists with deduplicated refresh
- Selection: recency, credentials and current selection over the catalog
"""

from .catalog import ModelCatalog
from .errors import (
    CatalogError,
    ErrorCode,
    FetchError,
    InvalidIdentifierError,
    NotFoundError,
    PersistenceError,
)
from .interfaces import HasDefaultModel, IProviderRegistry, ModelListingProvider, Provider
from .keys import ids_from_key, make_key, provider_and_model_key
from .models import (
    CatalogSnapshot,
    KeyedModelConfigWithProvider,
    LoadState,
    LoadStatus,
    ModelConfig,
    ModelConfigWithProvider,
    ModelOrigin,
    ProviderMetadata,
    ProviderModelsStatus,
    ProviderStatus,
    SelectionSnapshot,
)
from .registry import ProviderRegistry, StaticProvider
from .selection import SelectionStateSynchronizer, flatten_and_sort_available_models
from .telemetry import CatalogTelemetry

__all__ = [
    # Models
    "ModelConfig",
    "ModelOrigin",
    "ProviderMetadata",
    "ModelConfigWithProvider",
    "KeyedModelConfigWithProvider",
    "ProviderModelsStatus",
    "ProviderStatus",
    "CatalogSnapshot",
    "LoadState",
    "LoadStatus",
    "SelectionSnapshot",
    # Keys
    "make_key",
    "provider_and_model_key",
    "ids_from_key",
    # Interfaces
    "Provider",
    "ModelListingProvider",
    "HasDefaultModel",
    "IProviderRegistry",
    # Errors
    "ErrorCode",
    "CatalogError",
    "NotFoundError",
    "FetchError",
    "PersistenceError",
    "InvalidIdentifierError",
    # Components
    "ProviderRegistry",
    "StaticProvider",
    "ModelCatalog",
    "SelectionStateSynchronizer",
    "flatten_and_sort_available_models",
    "CatalogTelemetry",
]
