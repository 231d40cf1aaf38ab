"""
Static provider metadata.

Describes a provider for display and credential configuration. Immutable once
the provider is registered.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class ProviderMetadata:
    """Display and configuration metadata of a provider.

    Attributes:
        id: Provider identifier (no ``:`` allowed).
        name: Human-readable provider name.
        description: Short description.
        icon: Icon reference understood by the presentation layer.
        documentation_url: Link to the provider's documentation.
        api_key_url: Link where users obtain credentials.
        required_keys: Ordered credential field names; empty for providers that
            need no credentials (e.g. a local daemon).
    """

    id: str
    name: str
    description: str = ""
    icon: str = ""
    documentation_url: str = ""
    api_key_url: str = ""
    required_keys: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary of the metadata fields."""
        data = asdict(self)
        data["required_keys"] = list(self.required_keys)
        return data


__all__ = ["ProviderMetadata"]
