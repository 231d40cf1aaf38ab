"""Selection state layered on top of the model catalog.

The synchronizer keeps three pieces of user state consistent with the live
catalog snapshot:

* the recency list: models the user selected, most recent first, unique by
  composite key (persisted under ``recentlyUsedModels``);
* the credentialed providers (persisted under ``providersWithCredentials``);
* the currently selected model.

From these it derives the "available" pool, i.e. models of credentialed
providers that are not already in the recency list. Its state is published
through the same ``subscribe``/``get_snapshot`` surface as the catalog.

The synchronizer is the only writer of its two Store records and never writes
the catalog's per-provider records.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Any, Callable, List, Optional, Sequence, Tuple

from ...config.defaults import PROVIDERS_WITH_CREDENTIALS_KEY, RECENTLY_USED_MODELS_KEY
from ...persistence.interfaces import KeyValueStore
from ..catalog import ModelCatalog, notify_listeners
from ..errors import CatalogError, InvalidIdentifierError, PersistenceError, describe_exception
from ..keys import KEY_DELIMITER
from ..log_support import LogContext
from ..logging import get_logger, log_event
from ..models import (
    KeyedModelConfigWithProvider,
    LoadState,
    LoadStatus,
    ModelConfigWithProvider,
    ProviderModelsStatus,
    SelectionSnapshot,
)
from ..telemetry import CatalogTelemetry, emit
from .available import derive_available_models

Listener = Callable[[], None]
Keyed = KeyedModelConfigWithProvider


def _provider_of(key: str) -> str:
    return key.partition(KEY_DELIMITER)[0]


class SelectionStateSynchronizer:
    """Recency, credentials and current selection reconciled with a catalog.

    Args:
        catalog: The catalog whose snapshot selections resolve against.
        store: Store holding the recency and credential records.
        telemetry: Optional hooks; storage failures are reported here.
    """

    def __init__(
        self,
        catalog: ModelCatalog,
        store: KeyValueStore,
        *,
        telemetry: Optional[CatalogTelemetry] = None,
    ) -> None:
        self._catalog = catalog
        self._store = store
        self._telemetry = telemetry
        self._snapshot = SelectionSnapshot()
        self._listeners: List[Tuple[object, Listener]] = []
        # Serializes read-modify-write cycles on the two Store records.
        self._store_lock = asyncio.Lock()
        self.logger = get_logger("model_picker.selection")
        self._unsubscribe_catalog: Optional[Callable[[], None]] = catalog.subscribe(
            self._on_catalog_change
        )

    # ---- observable surface -------------------------------------------------

    def get_snapshot(self) -> SelectionSnapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns an idempotent unsubscribe callable."""
        token = object()
        self._listeners.append((token, listener))

        def unsubscribe() -> None:
            self._listeners[:] = [entry for entry in self._listeners if entry[0] is not token]

        return unsubscribe

    @property
    def recently_used_models(self) -> Tuple[Keyed, ...]:
        return self._snapshot.recently_used_models

    @property
    def models_with_credentials(self) -> Tuple[Keyed, ...]:
        return self._snapshot.models_with_credentials

    @property
    def providers_with_credentials(self) -> Tuple[str, ...]:
        return self._snapshot.providers_with_credentials

    @property
    def selected_model(self) -> Optional[Keyed]:
        return self._snapshot.selected_model

    @property
    def load_state(self) -> LoadState:
        return self._snapshot.load_state

    def close(self) -> None:
        """Stop following catalog changes."""
        if self._unsubscribe_catalog is not None:
            self._unsubscribe_catalog()
            self._unsubscribe_catalog = None

    # ---- load ---------------------------------------------------------------

    async def load(self, prefetch: bool = False) -> SelectionSnapshot:
        """Read persisted state and reconcile it with the catalog.

        Store reads run concurrently with ``catalog.initialize``. Persisted
        keys that no longer resolve, and credential entries for providers the
        registry does not know, are dropped from memory (the records
        themselves are left as they are). On failure the load state becomes
        ``error`` and the previous in-memory state is kept.
        """
        self._publish(replace(self._snapshot, load_state=LoadState(LoadStatus.LOADING)))
        try:
            stored_keys, stored_providers, _ = await asyncio.gather(
                self._read_list(RECENTLY_USED_MODELS_KEY),
                self._read_list(PROVIDERS_WITH_CREDENTIALS_KEY),
                self._catalog.initialize(prefetch=prefetch),
            )
        except (CatalogError, OSError) as exc:
            message = describe_exception(exc)
            log_event(self.logger, "selection.load.error", level=logging.ERROR, error=message)
            self._publish(replace(self._snapshot, load_state=LoadState(LoadStatus.ERROR, message)))
            return self._snapshot

        registry = self._catalog.registry
        credentialed = tuple(
            pid for pid in dict.fromkeys(stored_providers)
            if isinstance(pid, str) and registry.has_provider(pid)
        )
        recent: List[Keyed] = []
        for key in dict.fromkeys(stored_keys):
            entry = self._resolve_key(key)
            if entry is not None:
                recent.append(entry)

        previous = self._snapshot.selected_model
        if previous is not None and any(e.key == previous.key for e in recent):
            selected: Optional[Keyed] = previous
        else:
            selected = recent[0] if recent else None

        log_event(
            self.logger,
            "selection.load",
            recent=len(recent),
            dropped=len(stored_keys) - len(recent),
            providers=len(credentialed),
        )
        self._commit(tuple(recent), credentialed, selected, LoadState(LoadStatus.READY))
        return self._snapshot

    # ---- user actions -------------------------------------------------------

    async def set_selected_provider_and_model(
        self, provider_id: str, model_id: Optional[str] = None
    ) -> Optional[Keyed]:
        """Select a model; ``model_id`` defaults to the provider's default model.

        Returns ``None`` without changing anything when the model cannot be
        resolved. Otherwise the provider becomes credentialed and the model
        moves to the front of the recency list.
        """
        entry = self._resolve_selection(provider_id, model_id)
        if entry is None:
            log_event(
                self.logger,
                "selection.select",
                LogContext(provider=provider_id, model=model_id),
                level=logging.DEBUG,
                resolved=False,
            )
            return None

        recent = (entry,) + tuple(e for e in self._snapshot.recently_used_models if e.key != entry.key)
        credentialed = self._snapshot.providers_with_credentials
        if provider_id not in credentialed:
            credentialed = credentialed + (provider_id,)
        log_event(
            self.logger,
            "selection.select",
            LogContext(provider=provider_id, model=entry.model.id, key=entry.key),
            resolved=True,
        )
        try:
            self._commit(recent, credentialed, entry)
        finally:
            await self._persist_selection(provider_id, entry.key)
        return entry

    async def delete_provider(self, provider_id: str) -> Optional[Keyed]:
        """Forget a provider's credentials and recency entries.

        Returns the new selection: the first remaining recently used model,
        else the first available model, else ``None``. The catalog entry of
        the provider is left alone.
        """
        recent = tuple(e for e in self._snapshot.recently_used_models if e.provider.id != provider_id)
        credentialed = tuple(p for p in self._snapshot.providers_with_credentials if p != provider_id)
        selected = self._fallback_selection(recent, credentialed)
        log_event(
            self.logger,
            "selection.provider.deleted",
            LogContext(provider=provider_id),
            selected=selected.key if selected else None,
        )
        try:
            self._commit(recent, credentialed, selected)
        finally:
            await self._persist_provider_deletion(provider_id)
        return selected

    async def refresh_provider_models(self, provider_id: str) -> Optional[ProviderModelsStatus]:
        return await self._catalog.refresh(provider_id)

    # ---- internals ----------------------------------------------------------

    def _on_catalog_change(self) -> None:
        snapshot = self._catalog.get_snapshot()
        current = self._snapshot
        recent = tuple(e for e in current.recently_used_models if e.provider.id in snapshot)
        selected = current.selected_model
        if selected is not None and selected.provider.id not in snapshot:
            selected = self._fallback_selection(recent, current.providers_with_credentials)
        self._commit(recent, current.providers_with_credentials, selected)

    def _fallback_selection(
        self, recent: Sequence[Keyed], credentialed: Sequence[str]
    ) -> Optional[Keyed]:
        if recent:
            return recent[0]
        pool = derive_available_models(self._catalog.get_snapshot(), credentialed)
        return pool[0] if pool else None

    def _resolve_key(self, key: Any) -> Optional[Keyed]:
        if not isinstance(key, str):
            return None
        try:
            return self._catalog.get_model(key)
        except InvalidIdentifierError:
            return None

    def _resolve_selection(self, provider_id: str, model_id: Optional[str]) -> Optional[Keyed]:
        registry = self._catalog.registry
        if not registry.has_provider(provider_id):
            return None
        provider = registry.get_provider(provider_id)
        if model_id is None:
            default = provider.get_default_model()
            if default is None:
                return None
            model_id = default.id
        status = self._catalog.get_snapshot().get(provider_id)
        listed = status.find(model_id) if status is not None else None
        if listed is not None:
            return listed.with_key()
        builtin = next((m for m in provider.models if m.id == model_id), None)
        if builtin is None:
            return None
        return ModelConfigWithProvider(model=builtin, provider=provider.metadata).with_key()

    def _commit(
        self,
        recent: Tuple[Keyed, ...],
        credentialed: Tuple[str, ...],
        selected: Optional[Keyed],
        load_state: Optional[LoadState] = None,
    ) -> None:
        pool = derive_available_models(
            self._catalog.get_snapshot(), credentialed, (e.key for e in recent)
        )
        self._publish(
            SelectionSnapshot(
                recently_used_models=recent,
                models_with_credentials=pool,
                providers_with_credentials=credentialed,
                selected_model=selected,
                load_state=load_state or self._snapshot.load_state,
            )
        )

    def _publish(self, snapshot: SelectionSnapshot) -> None:
        if snapshot == self._snapshot:
            return
        self._snapshot = snapshot
        notify_listeners(list(self._listeners))

    async def _read_list(self, key: str) -> List[Any]:
        try:
            value = await self._store.get(key)
        except Exception as exc:
            raise PersistenceError(f"Failed to read '{key}': {exc}") from exc
        if value is None:
            return []
        if not isinstance(value, list):
            log_event(
                self.logger,
                "selection.storage.malformed",
                LogContext(key=key),
                level=logging.WARNING,
                type=type(value).__name__,
            )
            return []
        return value

    async def _write_list(self, key: str, value: List[Any]) -> None:
        try:
            await self._store.set(key, value)
        except Exception as exc:
            raise PersistenceError(f"Failed to write '{key}': {exc}") from exc

    async def _persist_selection(self, provider_id: str, key: str) -> None:
        record = RECENTLY_USED_MODELS_KEY
        async with self._store_lock:
            try:
                stored_keys = await self._read_list(record)
                await self._write_list(record, [key] + [k for k in stored_keys if k != key])
                record = PROVIDERS_WITH_CREDENTIALS_KEY
                stored_providers = await self._read_list(record)
                if provider_id not in stored_providers:
                    await self._write_list(record, stored_providers + [provider_id])
            except PersistenceError as exc:
                self._report_storage_error(record, exc)

    async def _persist_provider_deletion(self, provider_id: str) -> None:
        record = PROVIDERS_WITH_CREDENTIALS_KEY
        async with self._store_lock:
            try:
                stored_providers = await self._read_list(record)
                if provider_id in stored_providers:
                    await self._write_list(record, [p for p in stored_providers if p != provider_id])
                record = RECENTLY_USED_MODELS_KEY
                stored_keys = await self._read_list(record)
                kept = [k for k in stored_keys if not (isinstance(k, str) and _provider_of(k) == provider_id)]
                if len(kept) != len(stored_keys):
                    await self._write_list(record, kept)
            except PersistenceError as exc:
                self._report_storage_error(record, exc)

    def _report_storage_error(self, key: str, exc: PersistenceError) -> None:
        log_event(
            self.logger,
            "selection.storage.error",
            LogContext(key=key),
            level=logging.ERROR,
            error=str(exc),
        )
        emit(self._telemetry, "on_storage_error", "write", key, exc)


__all__ = ["SelectionStateSynchronizer"]
