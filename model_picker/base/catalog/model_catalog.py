"""Reactive in-memory catalog of per-provider model availability.

The catalog owns one :class:`ProviderModelsStatus` per provider and publishes
them as an immutable snapshot. Consumers read the snapshot synchronously and
subscribe to be told when it changes; the snapshot object is replaced only
when an entry actually changes, so identity comparison is a valid change test.

Concurrency model
-----------------
Everything runs on one asyncio event loop. Each provider has at most one
in-flight listing call: a non-forced ``refresh`` joins the running one, a
forced ``refresh`` starts a new one and marks the older run stale. When a
stale run completes its result is dropped and its callers receive the outcome
of the run that superseded it.

Persistence
-----------
Models learned from listing calls and the ids the user removed are recorded
per provider under ``models:<provider_id>`` (see
:mod:`model_picker.base.catalog.persistence`). Record writes that fail after a
mutation are logged and reported through telemetry; the in-memory change
stands.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ...persistence.interfaces import KeyValueStore
from ..errors import (
    FetchError,
    NotFoundError,
    PersistenceError,
    classify_exception,
    describe_exception,
)
from ..interfaces import IProviderRegistry, Provider
from ..keys import ids_from_key, validate_model_id, validate_provider_id
from ..log_support import LogContext
from ..logging import get_logger, log_event
from ..models import (
    EMPTY_SNAPSHOT,
    CatalogSnapshot,
    KeyedModelConfigWithProvider,
    ModelConfig,
    ModelConfigWithProvider,
    ModelOrigin,
    ProviderModelsStatus,
    ProviderStatus,
)
from ..telemetry import CatalogTelemetry, emit
from .persistence import (
    EMPTY_RECORD,
    CatalogPersistence,
    ProviderModelRecord,
    merge_model_fields,
    provider_models_key,
)

Listener = Callable[[], None]
Unsubscribe = Callable[[], None]


@dataclass(eq=False)
class _RefreshRun:
    """One listing call; identity doubles as the staleness token."""

    provider_id: str
    task: "Optional[asyncio.Future[Optional[ProviderModelsStatus]]]" = field(default=None)


def notify_listeners(listeners: Sequence[Tuple[object, Listener]]) -> None:
    """Call every listener in order, then re-raise the first failure.

    A listener that raises does not stop the remaining ones from running.
    """
    failures: List[BaseException] = []
    for _, listener in listeners:
        try:
            listener()
        except Exception as exc:
            failures.append(exc)
    if failures:
        raise failures[0]


class ModelCatalog:
    """Per-provider model lists with deduplicated asynchronous refresh.

    Args:
        registry: Provider lookup; decides which provider ids exist.
        store: Key-value store for the catalog's per-provider records.
        telemetry: Optional hooks notified of fetch and storage activity.
        clock: Returns epoch seconds; stamps ``updated_at``/``discovered_at``.
    """

    def __init__(
        self,
        registry: IProviderRegistry,
        store: KeyValueStore,
        *,
        telemetry: Optional[CatalogTelemetry] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._registry = registry
        self._persistence = CatalogPersistence(store)
        self._telemetry = telemetry
        self._clock = clock
        self._snapshot: CatalogSnapshot = EMPTY_SNAPSHOT
        self._listeners: List[Tuple[object, Listener]] = []
        self._in_flight: Dict[str, _RefreshRun] = {}
        self._records: Dict[str, ProviderModelRecord] = {}
        self._record_locks: Dict[str, asyncio.Lock] = {}
        self._init_task: Optional[asyncio.Future] = None
        self._initialized = False
        self.logger = get_logger("model_picker.catalog")

    # ---- observable surface -------------------------------------------------

    @property
    def registry(self) -> IProviderRegistry:
        return self._registry

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def get_snapshot(self) -> CatalogSnapshot:
        """Current provider id -> status mapping (read-only)."""
        return self._snapshot

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Register ``listener``; the returned callable removes it (idempotent).

        Listeners run synchronously, in registration order, after every
        snapshot change. Subscribing the same callable twice registers it
        twice.
        """
        token = object()
        self._listeners.append((token, listener))

        def unsubscribe() -> None:
            self._listeners[:] = [entry for entry in self._listeners if entry[0] is not token]

        return unsubscribe

    def get_model(self, key: str) -> Optional[KeyedModelConfigWithProvider]:
        """Resolve a composite key against the snapshot."""
        provider_id, model_id = ids_from_key(key)
        status = self._snapshot.get(provider_id)
        if status is None:
            return None
        entry = status.find(model_id)
        return entry.with_key() if entry is not None else None

    def get_pending_refresh(self, provider_id: str) -> Optional[asyncio.Future]:
        run = self._in_flight.get(provider_id)
        return run.task if run is not None else None

    # ---- lifecycle ----------------------------------------------------------

    async def initialize(self, prefetch: bool = False) -> None:
        """Seed every registry provider as ``idle`` with its recorded models.

        Concurrent callers share one initialization. Once it has succeeded,
        further calls return immediately (``prefetch`` included).

        Raises:
            PersistenceError: If a provider record cannot be read; the catalog
                stays uninitialized and a later call retries.
        """
        if self._initialized:
            return
        if self._init_task is None:
            self._init_task = asyncio.ensure_future(self._initialize(prefetch))
        task = self._init_task
        try:
            await asyncio.shield(task)
        except BaseException:
            if task.done() and self._init_task is task and not self._initialized:
                self._init_task = None
            raise

    async def _initialize(self, prefetch: bool) -> None:
        providers = self._registry.get_all_providers()
        provider_ids = [p.metadata.id for p in providers]
        try:
            records = await asyncio.gather(*(self._persistence.load(pid) for pid in provider_ids))
        except PersistenceError as exc:
            log_event(
                self.logger,
                "catalog.storage.error",
                LogContext(provider=exc.provider, extra={"op": "read"}),
                level=logging.ERROR,
                error=str(exc),
            )
            key = provider_models_key(exc.provider) if exc.provider else ""
            emit(self._telemetry, "on_storage_error", "read", key, exc)
            raise

        updated = dict(self._snapshot)
        for provider, record in zip(providers, records):
            pid = provider.metadata.id
            self._records[pid] = record
            existing = updated.get(pid)
            if existing is None:
                updated[pid] = ProviderModelsStatus(
                    models=self._seed_entries(provider, record), updated_at=self._clock()
                )
            else:
                updated[pid] = replace(
                    existing,
                    models=self._overlay_record(provider, existing.models, record),
                    updated_at=self._clock(),
                )
        self._initialized = True
        log_event(self.logger, "catalog.initialize", providers=len(provider_ids), prefetch=prefetch)
        self._replace_snapshot(updated)
        if prefetch:
            await self.refresh_all()

    # ---- refresh ------------------------------------------------------------

    async def refresh(
        self, provider_id: str, *, force: bool = False
    ) -> Optional[ProviderModelsStatus]:
        """Fetch a provider's models and publish the merged result.

        Returns the provider's final status. An unknown provider returns a
        transient ``error`` status that is not written to the snapshot. The
        result is ``None`` only when the provider was removed while its fetch
        was running.
        """
        state = self._ensure_provider_state(provider_id)
        if state is None:
            return self._unknown_provider(provider_id)

        current = self._in_flight.get(provider_id)
        if current is not None and not force:
            return await asyncio.shield(current.task)

        provider = self._registry.get_provider(provider_id)
        run = _RefreshRun(provider_id)
        run.task = asyncio.ensure_future(self._run_refresh(provider, run))
        self._in_flight[provider_id] = run
        self._write_status(provider_id, replace(state, status=ProviderStatus.LOADING, error=None))
        return await asyncio.shield(run.task)

    async def refresh_all(self) -> Dict[str, ProviderModelsStatus]:
        """Refresh every provider in the snapshot concurrently.

        One provider failing never affects the others. Exceptions other than
        fetch failures (for example a raising listener) are re-raised once
        every refresh has settled.
        """
        provider_ids = list(self._snapshot)
        results = await asyncio.gather(
            *(self.refresh(pid) for pid in provider_ids), return_exceptions=True
        )
        statuses: Dict[str, ProviderModelsStatus] = {}
        failures: List[BaseException] = []
        for pid, result in zip(provider_ids, results):
            if isinstance(result, BaseException):
                failures.append(result)
            elif result is not None:
                statuses[pid] = result
        if failures:
            raise failures[0]
        return statuses

    async def _run_refresh(
        self, provider: Provider, run: _RefreshRun
    ) -> Optional[ProviderModelsStatus]:
        pid = run.provider_id
        ctx = LogContext(provider=pid)
        started = time.perf_counter()
        emit(self._telemetry, "on_fetch_start", pid)
        log_event(self.logger, "catalog.refresh.start", ctx)

        fetched: List[ModelConfig] = []
        failure: Optional[FetchError] = None
        try:
            fetched = list(await provider.fetch_available_models())
            for model in fetched:
                validate_model_id(model.id)
        except asyncio.CancelledError:
            if self._in_flight.get(pid) is run:
                del self._in_flight[pid]
            raise
        except Exception as exc:
            failure = FetchError(
                describe_exception(exc), provider=pid, code=classify_exception(exc)
            )
            failure.__cause__ = exc

        if self._in_flight.get(pid) is not run:
            newer = self._in_flight.get(pid)
            log_event(self.logger, "catalog.refresh.superseded", ctx, level=logging.DEBUG)
            if newer is None:
                # Provider removed mid-flight, or a later run already finished.
                return self._snapshot.get(pid)
            return await asyncio.shield(newer.task)

        del self._in_flight[pid]
        state = self._snapshot.get(pid) or ProviderModelsStatus()
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        if failure is not None:
            log_event(
                self.logger,
                "catalog.refresh.error",
                ctx,
                level=logging.WARNING,
                code=failure.code.value,
                error=failure.message,
                elapsed_ms=elapsed_ms,
            )
            emit(self._telemetry, "on_fetch_error", pid, failure)
            self._write_status(
                pid, replace(state, status=ProviderStatus.ERROR, error=failure.message)
            )
            return self._snapshot.get(pid)

        builtin_ids = {m.id for m in provider.models}
        now = self._clock()
        discovered = [
            replace(m, origin=ModelOrigin.API, discovered_at=m.discovered_at or now)
            for m in fetched
            if m.id not in builtin_ids
        ]
        record = self._records.get(pid, EMPTY_RECORD)
        new_record = record.with_models(discovered)
        self._records[pid] = new_record
        models = self._merge_fetched(provider, state.models, fetched, new_record)

        log_event(
            self.logger,
            "catalog.refresh.success",
            ctx,
            count=len(models),
            elapsed_ms=elapsed_ms,
        )
        emit(self._telemetry, "on_fetch_success", pid, len(models))
        try:
            self._write_status(
                pid, replace(state, models=models, status=ProviderStatus.READY, error=None)
            )
        finally:
            if new_record != record:
                await self._save_record(pid)
        return self._snapshot.get(pid)

    # ---- user mutations -----------------------------------------------------

    async def add_user_model(self, provider_id: str, model_id: str) -> ModelConfigWithProvider:
        """Put a model back into a provider's list, appending it at the end.

        The model must resolve against the provider's built-in models or a
        model previously recorded for it. Adding a model already listed
        returns the existing entry unchanged.

        Raises:
            NotFoundError: Unknown provider, or the model does not resolve.
        """
        validate_provider_id(provider_id)
        validate_model_id(model_id)
        state = self._ensure_provider_state(provider_id)
        if state is None:
            emit(self._telemetry, "on_provider_not_found", provider_id)
            raise NotFoundError(f"Unknown provider '{provider_id}'", provider=provider_id)

        existing = state.find(model_id)
        if existing is not None:
            return existing

        provider = self._registry.get_provider(provider_id)
        record = self._records.get(provider_id, EMPTY_RECORD)
        model = self._resolve_model(provider, record, model_id)
        if model is None:
            raise NotFoundError(
                f"Model '{model_id}' is not available from provider '{provider_id}'",
                provider=provider_id,
                model=model_id,
            )

        entry = ModelConfigWithProvider(model=record.apply_visibility(model), provider=provider.metadata)
        self._records[provider_id] = record.restore(model_id)
        log_event(self.logger, "catalog.model.added", LogContext(provider=provider_id, model=model_id))
        emit(self._telemetry, "on_user_model_added", provider_id, model_id)
        try:
            self._write_status(provider_id, replace(state, models=state.models + (entry,)))
        finally:
            await self._save_record(provider_id)
        return entry

    async def remove_model(self, provider_id: str, model_id: str) -> bool:
        """Remove a model from a provider's list; it stays hidden across refreshes.

        Returns False (and changes nothing) when the model is not listed.
        """
        state = self._snapshot.get(provider_id)
        if state is None or state.find(model_id) is None:
            return False
        record = self._records.get(provider_id, EMPTY_RECORD)
        self._records[provider_id] = record.mark_removed(model_id)
        log_event(self.logger, "catalog.model.removed", LogContext(provider=provider_id, model=model_id))
        remaining = tuple(e for e in state.models if e.model.id != model_id)
        try:
            self._write_status(provider_id, replace(state, models=remaining))
        finally:
            await self._save_record(provider_id)
        return True

    async def set_model_visibility(self, provider_id: str, model_id: str, visible: bool) -> bool:
        """Show or hide a listed model; the choice survives refreshes and restarts.

        Returns False (and writes nothing) for an unknown provider, a model
        that is not listed, or a model already in the requested state.
        """
        state = self._ensure_provider_state(provider_id)
        if state is None:
            return False
        index = next((i for i, e in enumerate(state.models) if e.model.id == model_id), None)
        if index is None:
            return False
        entry = state.models[index]
        if entry.model.is_visible == visible:
            return False

        record = self._records.get(provider_id, EMPTY_RECORD)
        self._records[provider_id] = record.with_visibility(model_id, visible)
        log_event(
            self.logger,
            "catalog.model.visibility",
            LogContext(provider=provider_id, model=model_id),
            visible=visible,
        )
        models = list(state.models)
        models[index] = replace(entry, model=replace(entry.model, visible=visible))
        try:
            self._write_status(provider_id, replace(state, models=tuple(models)))
        finally:
            await self._save_record(provider_id)
        return True

    async def remove_provider(self, provider_id: str) -> bool:
        """Drop a provider's entry, its in-flight refresh and its record.

        A refresh still running for the provider completes without publishing.
        Returns whether the snapshot held the provider.
        """
        self._in_flight.pop(provider_id, None)
        self._records.pop(provider_id, None)
        present = provider_id in self._snapshot
        log_event(self.logger, "catalog.provider.removed", LogContext(provider=provider_id), present=present)
        try:
            if present:
                updated = dict(self._snapshot)
                del updated[provider_id]
                self._replace_snapshot(updated)
        finally:
            async with self._record_lock(provider_id):
                try:
                    await self._persistence.delete(provider_id)
                except PersistenceError as exc:
                    self._report_storage_error("delete", provider_id, exc)
        return present

    # ---- internals ----------------------------------------------------------

    def _ensure_provider_state(self, provider_id: str) -> Optional[ProviderModelsStatus]:
        """Snapshot entry for ``provider_id``, created lazily for registry providers."""
        state = self._snapshot.get(provider_id)
        if state is not None:
            return state
        if not self._registry.has_provider(provider_id):
            return None
        provider = self._registry.get_provider(provider_id)
        record = self._records.get(provider_id, EMPTY_RECORD)
        self._write_status(provider_id, ProviderModelsStatus(models=self._seed_entries(provider, record)))
        return self._snapshot[provider_id]

    def _unknown_provider(self, provider_id: str) -> ProviderModelsStatus:
        log_event(
            self.logger,
            "catalog.provider.unknown",
            LogContext(provider=provider_id),
            level=logging.WARNING,
        )
        emit(self._telemetry, "on_provider_not_found", provider_id)
        return ProviderModelsStatus(
            status=ProviderStatus.ERROR,
            error=f"Unknown provider '{provider_id}'",
            updated_at=self._clock(),
        )

    def _seed_entries(
        self, provider: Provider, record: ProviderModelRecord
    ) -> Tuple[ModelConfigWithProvider, ...]:
        builtin_ids = {m.id for m in provider.models}
        models = list(provider.models) + [m for m in record.models if m.id not in builtin_ids]
        return tuple(
            ModelConfigWithProvider(model=record.apply_visibility(m), provider=provider.metadata)
            for m in models
            if not record.is_removed(m.id)
        )

    def _overlay_record(
        self,
        provider: Provider,
        entries: Tuple[ModelConfigWithProvider, ...],
        record: ProviderModelRecord,
    ) -> Tuple[ModelConfigWithProvider, ...]:
        kept = []
        for entry in entries:
            if record.is_removed(entry.model.id):
                continue
            model = record.apply_visibility(entry.model)
            kept.append(entry if model is entry.model else replace(entry, model=model))
        listed = {e.model.id for e in kept}
        for model in record.models:
            if model.id not in listed and not record.is_removed(model.id):
                kept.append(
                    ModelConfigWithProvider(model=record.apply_visibility(model), provider=provider.metadata)
                )
                listed.add(model.id)
        return tuple(kept)

    def _merge_fetched(
        self,
        provider: Provider,
        entries: Tuple[ModelConfigWithProvider, ...],
        fetched: Sequence[ModelConfig],
        record: ProviderModelRecord,
    ) -> Tuple[ModelConfigWithProvider, ...]:
        """Update listed entries in place and append newly seen models."""
        by_id: Dict[str, ModelConfig] = {}
        for model in fetched:
            by_id[model.id] = merge_model_fields(by_id[model.id], model) if model.id in by_id else model
        merged: List[ModelConfigWithProvider] = []
        listed = set()
        for entry in entries:
            model = entry.model
            if model.id in by_id:
                model = merge_model_fields(model, by_id[model.id])
            merged.append(
                entry if model is entry.model else ModelConfigWithProvider(model=model, provider=entry.provider)
            )
            listed.add(model.id)
        for model_id in by_id:
            if model_id in listed or record.is_removed(model_id):
                continue
            model = record.apply_visibility(record.find(model_id) or by_id[model_id])
            merged.append(ModelConfigWithProvider(model=model, provider=provider.metadata))
            listed.add(model_id)
        return tuple(merged)

    @staticmethod
    def _resolve_model(
        provider: Provider, record: ProviderModelRecord, model_id: str
    ) -> Optional[ModelConfig]:
        builtin = next((m for m in provider.models if m.id == model_id), None)
        return builtin if builtin is not None else record.find(model_id)

    def _write_status(self, provider_id: str, status: ProviderModelsStatus) -> bool:
        """Publish ``status`` for ``provider_id`` when it differs from the current one."""
        if self._snapshot.get(provider_id) == status:
            return False
        updated = dict(self._snapshot)
        updated[provider_id] = replace(status, updated_at=self._clock())
        self._replace_snapshot(updated)
        return True

    def _replace_snapshot(self, updated: Dict[str, ProviderModelsStatus]) -> None:
        self._snapshot = MappingProxyType(updated)
        notify_listeners(list(self._listeners))

    def _record_lock(self, provider_id: str) -> asyncio.Lock:
        lock = self._record_locks.get(provider_id)
        if lock is None:
            lock = self._record_locks[provider_id] = asyncio.Lock()
        return lock

    async def _save_record(self, provider_id: str) -> None:
        # Writes for one provider land in order; each stores the latest record.
        async with self._record_lock(provider_id):
            record = self._records.get(provider_id)
            if record is None:
                return
            try:
                await self._persistence.save(provider_id, record)
            except PersistenceError as exc:
                self._report_storage_error("write", provider_id, exc)

    def _report_storage_error(self, op: str, provider_id: str, exc: PersistenceError) -> None:
        key = provider_models_key(provider_id)
        log_event(
            self.logger,
            "catalog.storage.error",
            LogContext(provider=provider_id, extra={"op": op, "key": key}),
            level=logging.ERROR,
            error=str(exc),
        )
        emit(self._telemetry, "on_storage_error", op, key, exc)


__all__ = ["ModelCatalog", "notify_listeners"]
