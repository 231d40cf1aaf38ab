"""
Observable state of the selection synchronizer.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .model_config_with_provider import KeyedModelConfigWithProvider


class LoadStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class LoadState:
    """Tri-state load status with an optional failure message."""

    status: LoadStatus = LoadStatus.LOADING
    message: Optional[str] = None


@dataclass(frozen=True)
class SelectionSnapshot:
    """Point-in-time view of recency, availability and the current selection.

    ``selected_model``, when set right after a selection, is always an element
    of ``recently_used_models``.
    """

    recently_used_models: Tuple[KeyedModelConfigWithProvider, ...] = ()
    models_with_credentials: Tuple[KeyedModelConfigWithProvider, ...] = ()
    providers_with_credentials: Tuple[str, ...] = ()
    selected_model: Optional[KeyedModelConfigWithProvider] = None
    load_state: LoadState = LoadState()


__all__ = ["LoadStatus", "LoadState", "SelectionSnapshot"]
