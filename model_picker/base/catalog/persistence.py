"""Per-provider model records owned by the catalog.

Each provider gets one Store record under ``models:<provider_id>`` holding the
non-builtin models the catalog has learned about (listing results), the ids
the user removed and the ids the user hid. The record is a versioned envelope
validated with pydantic::

    {"version": 1, "models": [{...ModelConfig...}], "removed": ["model-id"],
     "hidden": ["model-id"]}

Records written before ``hidden`` existed validate with an empty list.

Read failures of the Store raise :class:`PersistenceError`. Records that are
malformed or carry an unknown version are logged and treated as empty so a bad
record never blocks the catalog from starting.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field, ValidationError

from ...config.defaults import PERSISTED_MODELS_VERSION, PROVIDER_MODELS_KEY_PREFIX
from ...persistence.interfaces import KeyValueStore
from ..errors import PersistenceError
from ..log_support import LogContext
from ..logging import get_logger, log_event
from ..models import ModelConfig

_logger = get_logger("model_picker.catalog.persistence")


def provider_models_key(provider_id: str) -> str:
    """Store key of a provider's model record."""
    return f"{PROVIDER_MODELS_KEY_PREFIX}{provider_id}"


class PersistedModelsEnvelope(BaseModel):
    """On-disk shape of a provider's model record."""

    version: int
    models: List[Dict[str, Any]] = Field(default_factory=list)
    removed: List[str] = Field(default_factory=list)
    hidden: List[str] = Field(default_factory=list)


@dataclass(frozen=True)
class ProviderModelRecord:
    """Known non-builtin models of a provider plus user-removed and hidden ids.

    ``models`` keeps discovery order; ``removed`` keeps removal order.
    """

    models: Tuple[ModelConfig, ...] = ()
    removed: Tuple[str, ...] = ()
    hidden: Tuple[str, ...] = ()

    def find(self, model_id: str) -> Optional[ModelConfig]:
        return next((m for m in self.models if m.id == model_id), None)

    def is_removed(self, model_id: str) -> bool:
        return model_id in self.removed

    def is_hidden(self, model_id: str) -> bool:
        return model_id in self.hidden

    def apply_visibility(self, model: ModelConfig) -> ModelConfig:
        """Return ``model`` marked hidden when its id is recorded as hidden."""
        if self.is_hidden(model.id) and model.is_visible:
            return replace(model, visible=False)
        return model

    def with_visibility(self, model_id: str, visible: bool) -> "ProviderModelRecord":
        if visible:
            if model_id not in self.hidden:
                return self
            return replace(self, hidden=tuple(h for h in self.hidden if h != model_id))
        if model_id in self.hidden:
            return self
        return replace(self, hidden=self.hidden + (model_id,))

    def with_models(self, discovered: Sequence[ModelConfig]) -> "ProviderModelRecord":
        """Merge ``discovered`` models in; known ids are updated in place."""
        merged = list(self.models)
        index = {m.id: i for i, m in enumerate(merged)}
        for model in discovered:
            if model.id in index:
                merged[index[model.id]] = merge_model_fields(merged[index[model.id]], model)
            else:
                index[model.id] = len(merged)
                merged.append(model)
        return replace(self, models=tuple(merged))

    def mark_removed(self, model_id: str) -> "ProviderModelRecord":
        if model_id in self.removed:
            return self
        return replace(self, removed=self.removed + (model_id,))

    def restore(self, model_id: str) -> "ProviderModelRecord":
        if model_id not in self.removed:
            return self
        return replace(self, removed=tuple(r for r in self.removed if r != model_id))

    def to_envelope(self) -> Dict[str, Any]:
        return PersistedModelsEnvelope(
            version=PERSISTED_MODELS_VERSION,
            models=[m.to_dict() for m in self.models],
            removed=list(self.removed),
            hidden=list(self.hidden),
        ).model_dump()


EMPTY_RECORD = ProviderModelRecord()


def merge_model_fields(base: ModelConfig, update: ModelConfig) -> ModelConfig:
    """Overlay the set fields of ``update`` on ``base``.

    ``origin`` and ``discovered_at`` stick to ``base``: an entry keeps the
    source it was first seen from.
    """
    changes = {
        name: getattr(update, name)
        for name in (
            "display_name",
            "max_tokens",
            "context_length",
            "supports_vision",
            "supports_tools",
            "is_default",
        )
        if getattr(update, name) is not None
    }
    if base.discovered_at is None and update.discovered_at is not None:
        changes["discovered_at"] = update.discovered_at
    merged = replace(base, **changes)
    return base if merged == base else merged


class CatalogPersistence:
    """Load, save and delete provider model records in a Store."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    async def load(self, provider_id: str) -> ProviderModelRecord:
        """Return the provider's record, or an empty one when absent/malformed.

        Raises:
            PersistenceError: If the Store read fails.
        """
        key = provider_models_key(provider_id)
        try:
            raw = await self._store.get(key)
        except Exception as exc:
            raise PersistenceError(
                f"Failed to read '{key}': {exc}", provider=provider_id
            ) from exc
        if raw is None:
            return EMPTY_RECORD
        try:
            envelope = PersistedModelsEnvelope.model_validate(raw)
            if envelope.version != PERSISTED_MODELS_VERSION:
                raise ValueError(f"unsupported version {envelope.version}")
            models = tuple(ModelConfig.from_dict(m) for m in envelope.models)
        except (ValidationError, ValueError, TypeError) as exc:
            log_event(
                _logger,
                "catalog.storage.malformed",
                LogContext(provider=provider_id, extra={"key": key}),
                level=logging.WARNING,
                error=str(exc),
            )
            return EMPTY_RECORD
        return ProviderModelRecord(
            models=models,
            removed=tuple(dict.fromkeys(envelope.removed)),
            hidden=tuple(dict.fromkeys(envelope.hidden)),
        )

    async def save(self, provider_id: str, record: ProviderModelRecord) -> None:
        """Overwrite the provider's record.

        Raises:
            PersistenceError: If the Store write fails.
        """
        key = provider_models_key(provider_id)
        try:
            await self._store.set(key, record.to_envelope())
        except Exception as exc:
            raise PersistenceError(f"Failed to write '{key}': {exc}", provider=provider_id) from exc

    async def delete(self, provider_id: str) -> None:
        """Remove the provider's record.

        Raises:
            PersistenceError: If the Store delete fails.
        """
        key = provider_models_key(provider_id)
        try:
            await self._store.delete(key)
        except Exception as exc:
            raise PersistenceError(f"Failed to delete '{key}': {exc}", provider=provider_id) from exc


__all__ = [
    "CatalogPersistence",
    "PersistedModelsEnvelope",
    "ProviderModelRecord",
    "EMPTY_RECORD",
    "merge_model_fields",
    "provider_models_key",
]
