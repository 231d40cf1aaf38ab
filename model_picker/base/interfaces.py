"""
Capability interfaces (Protocols) for providers and the registry.

This module re-exports Protocols split into single-class modules under
``model_picker.base.interfaces_parts`` while keeping imports stable.
"""

from __future__ import annotations

from .interfaces_parts import (
    HasDefaultModel,
    IProviderRegistry,
    ModelListingProvider,
    Provider,
)

__all__ = [
    "Provider",
    "ModelListingProvider",
    "HasDefaultModel",
    "IProviderRegistry",
]
