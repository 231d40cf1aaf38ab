"""
Model catalog package

Public API:
- ModelCatalog
- CatalogPersistence / ProviderModelRecord (per-provider Store records)
"""

from .model_catalog import ModelCatalog, notify_listeners
from .persistence import (
    CatalogPersistence,
    PersistedModelsEnvelope,
    ProviderModelRecord,
    provider_models_key,
)

__all__ = [
    "ModelCatalog",
    "notify_listeners",
    "CatalogPersistence",
    "PersistedModelsEnvelope",
    "ProviderModelRecord",
    "provider_models_key",
]
