"""
Provider registry package

Public API:
- ProviderRegistry
- StaticProvider
"""

from .provider_registry import ProviderRegistry
from .static_provider import StaticProvider

__all__ = ["ProviderRegistry", "StaticProvider"]
