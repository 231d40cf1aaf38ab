"""Provider registry: string-keyed lookup over provider implementations.

The registry is a mapping from provider id to implementation, resolved at call
time with an explicit ``NotFoundError`` for unknown ids. Registration order is
preserved and is the order the catalog seeds its snapshot in.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from ..errors import NotFoundError
from ..interfaces import Provider
from ..keys import validate_provider_id
from ..logging import get_logger
from ..models import ModelConfigWithProvider, ProviderMetadata


class ProviderRegistry:
    """Central registry of providers.

    Attributes:
        default_provider: Optional provider id hosts may preselect.
    """

    def __init__(self, default_provider: Optional[str] = None) -> None:
        self.default_provider = default_provider
        self._providers: Dict[str, Provider] = {}
        self.logger = get_logger("model_picker.registry")

    def register(self, provider: Provider) -> str:
        """Register ``provider`` and return its id.

        Raises:
            ValueError: If a provider with the same id is already registered.
        """
        provider_id = validate_provider_id(provider.metadata.id)
        if provider_id in self._providers:
            raise ValueError(f"Provider '{provider_id}' already registered")
        self._providers[provider_id] = provider
        self.logger.debug("Provider registered", extra={"provider": provider_id})
        return provider_id

    def unregister(self, provider_id: str) -> bool:
        """Remove a provider; returns False if it was not registered."""
        return self._providers.pop(provider_id, None) is not None

    def has_provider(self, provider_id: str) -> bool:
        return provider_id in self._providers

    def get_provider(self, provider_id: str) -> Provider:
        """Return the provider registered under ``provider_id``.

        Raises:
            NotFoundError: If the id is unknown.
        """
        try:
            return self._providers[provider_id]
        except KeyError:
            raise NotFoundError(
                f"Could not find provider '{provider_id}' in the registry",
                provider=provider_id,
            ) from None

    def provider_ids(self) -> List[str]:
        return list(self._providers)

    def get_all_providers(self) -> List[Provider]:
        return list(self._providers.values())

    def get_provider_metadata(self, provider_id: str) -> ProviderMetadata:
        return self.get_provider(provider_id).metadata

    def get_models_for_provider(self, provider_id: str) -> List[ModelConfigWithProvider]:
        provider = self.get_provider(provider_id)
        return [ModelConfigWithProvider(model=m, provider=provider.metadata) for m in provider.models]

    def get_all_models(self) -> List[ModelConfigWithProvider]:
        """Every built-in model of every provider, with provider metadata attached."""
        return [entry for pid in self._providers for entry in self.get_models_for_provider(pid)]

    def get_providers_by_capability(self, capability: str) -> List[Provider]:
        """Providers with at least one built-in model whose ``capability`` flag is True."""
        return [
            p for p in self._providers.values()
            if any(getattr(m, capability, None) is True for m in p.models)
        ]

    def get_providers_not_requiring_credentials(self) -> List[Provider]:
        return [p for p in self._providers.values() if not p.metadata.required_keys]

    def __len__(self) -> int:
        return len(self._providers)


__all__ = ["ProviderRegistry"]
