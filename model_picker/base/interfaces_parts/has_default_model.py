"""HasDefaultModel Protocol (single-class module)."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ..models import ModelConfig


@runtime_checkable
class HasDefaultModel(Protocol):
    """Interface for providers that declare a default model."""

    def get_default_model(self) -> Optional[ModelConfig]:  # pragma: no cover - interface
        """Return the first model flagged ``is_default``, or ``None``."""
        ...
