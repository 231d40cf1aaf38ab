"""
Per-provider model list status held in the catalog snapshot.

Status moves ``idle -> loading -> ready | error`` and back to ``loading`` on
the next refresh. ``updated_at`` is excluded from equality so that an
unchanged write can be detected and skipped.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .model_config_with_provider import ModelConfigWithProvider


class ProviderStatus(str, Enum):
    """Fetch lifecycle state of one provider."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class ProviderModelsStatus:
    """Models of a provider plus the state of its most recent listing.

    Attributes:
        models: Ordered model entries, unique by model id.
        status: Current :class:`ProviderStatus`.
        error: Failure message when ``status`` is ``error``.
        updated_at: Epoch seconds of the last write (not part of equality).
    """

    models: Tuple[ModelConfigWithProvider, ...] = ()
    status: ProviderStatus = ProviderStatus.IDLE
    error: Optional[str] = None
    updated_at: Optional[float] = field(default=None, compare=False)

    def find(self, model_id: str) -> Optional[ModelConfigWithProvider]:
        """Return the entry for ``model_id`` or ``None``."""
        for entry in self.models:
            if entry.model.id == model_id:
                return entry
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "models": [m.to_dict() for m in self.models],
            "status": self.status.value,
            "error": self.error,
            "updated_at": self.updated_at,
        }


__all__ = ["ProviderStatus", "ProviderModelsStatus"]
