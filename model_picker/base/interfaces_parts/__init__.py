"""Single-class Protocol modules re-exported by ``model_picker.base.interfaces``."""

from .has_default_model import HasDefaultModel
from .model_listing_provider import ModelListingProvider
from .provider import Provider
from .provider_registry import IProviderRegistry

__all__ = [
    "HasDefaultModel",
    "ModelListingProvider",
    "Provider",
    "IProviderRegistry",
]
