"""model_picker package

Unified, always-consistent list of selectable AI model/provider pairs.

Purpose:
    Keep per-provider model availability in a reactive in-memory catalog with
    deduplicated asynchronous refresh, and layer persisted user state (recently
    used models, providers with credentials, current selection) on top of it.

Public API (re-exported):
    - Version: ``__version__``
    - Components: :class:`ModelCatalog`, :class:`SelectionStateSynchronizer`,
      :class:`ProviderRegistry`, :class:`StaticProvider`
    - Stores: :class:`MemoryKeyValueStore`, :class:`SqliteKeyValueStore`
    - Exceptions: :class:`CatalogError` and subclasses, :class:`ErrorCode`
    - Config: :func:`get_settings`, :func:`create_store`, :func:`configure_logging`
    - Built-ins: :func:`default_registry`
"""

from .base import (
    CatalogError,
    CatalogTelemetry,
    ErrorCode,
    FetchError,
    InvalidIdentifierError,
    KeyedModelConfigWithProvider,
    LoadState,
    LoadStatus,
    ModelCatalog,
    ModelConfig,
    ModelConfigWithProvider,
    NotFoundError,
    PersistenceError,
    ProviderMetadata,
    ProviderModelsStatus,
    ProviderRegistry,
    ProviderStatus,
    SelectionSnapshot,
    SelectionStateSynchronizer,
    StaticProvider,
    flatten_and_sort_available_models,
    ids_from_key,
    make_key,
)
from .config import CatalogSettings, configure_logging, create_store, get_settings
from .persistence import KeyValueStore, MemoryKeyValueStore, SqliteKeyValueStore
from .providers import default_registry

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ModelCatalog",
    "SelectionStateSynchronizer",
    "flatten_and_sort_available_models",
    "ProviderRegistry",
    "StaticProvider",
    "CatalogTelemetry",
    "ModelConfig",
    "ModelConfigWithProvider",
    "KeyedModelConfigWithProvider",
    "ProviderMetadata",
    "ProviderModelsStatus",
    "ProviderStatus",
    "SelectionSnapshot",
    "LoadState",
    "LoadStatus",
    "make_key",
    "ids_from_key",
    "ErrorCode",
    "CatalogError",
    "NotFoundError",
    "FetchError",
    "PersistenceError",
    "InvalidIdentifierError",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SqliteKeyValueStore",
    "CatalogSettings",
    "get_settings",
    "create_store",
    "configure_logging",
    "default_registry",
]
