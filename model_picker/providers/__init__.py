"""Built-in providers, HTTP listing providers and the default registry."""

from .builtin import BUILTIN_PROVIDERS, default_registry
from .http_listing import (
    HttpListingProvider,
    OllamaListingProvider,
    OpenAICompatibleListingProvider,
)

__all__ = [
    "BUILTIN_PROVIDERS",
    "default_registry",
    "HttpListingProvider",
    "OllamaListingProvider",
    "OpenAICompatibleListingProvider",
]
