"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`model_picker.base.models_parts` if needed, while `model_picker.base.models`
remains the primary stable import path.
"""

from .model_config import ModelConfig, ModelOrigin
from .provider_metadata import ProviderMetadata
from .model_config_with_provider import KeyedModelConfigWithProvider, ModelConfigWithProvider
from .provider_models_status import ProviderModelsStatus, ProviderStatus
from .selection_state import LoadState, LoadStatus, SelectionSnapshot

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
]
