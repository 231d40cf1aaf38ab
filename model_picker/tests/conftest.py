"""Pytest configuration for the model picker test suite.

Fixtures build a two-provider registry out of scriptable ``MockProvider``
instances, an in-memory store, and the catalog/synchronizer pair bound to
them. Fixtures are synchronous; async tests use ``@pytest.mark.asyncio``.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from model_picker.base.catalog import ModelCatalog
from model_picker.base.models import ModelConfig
from model_picker.base.registry import ProviderRegistry
from model_picker.base.selection import SelectionStateSynchronizer
from model_picker.base.telemetry import CatalogTelemetry
from model_picker.mock import MockProvider
from model_picker.persistence.memory import MemoryKeyValueStore


class RecordingTelemetry(CatalogTelemetry):
    """Telemetry whose hooks append ``(hook, args)`` tuples to ``calls``."""

    def __init__(self) -> None:
        self.calls = []
        super().__init__(
            on_fetch_start=lambda *a: self.calls.append(("on_fetch_start", a)),
            on_fetch_success=lambda *a: self.calls.append(("on_fetch_success", a)),
            on_fetch_error=lambda *a: self.calls.append(("on_fetch_error", a)),
            on_storage_error=lambda *a: self.calls.append(("on_storage_error", a)),
            on_user_model_added=lambda *a: self.calls.append(("on_user_model_added", a)),
            on_provider_not_found=lambda *a: self.calls.append(("on_provider_not_found", a)),
        )

    def hooks(self) -> list:
        return [name for name, _ in self.calls]


@pytest.fixture()
def openai_provider() -> MockProvider:
    return MockProvider(
        "openai",
        [ModelConfig(id="gpt-4o", display_name="GPT-4o", is_default=True)],
        name="OpenAI",
    )


@pytest.fixture()
def anthropic_provider() -> MockProvider:
    return MockProvider("anthropic", [ModelConfig(id="claude", display_name="Claude")], name="Anthropic")


@pytest.fixture()
def registry(openai_provider: MockProvider, anthropic_provider: MockProvider) -> ProviderRegistry:
    reg = ProviderRegistry()
    reg.register(openai_provider)
    reg.register(anthropic_provider)
    return reg


@pytest.fixture()
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def telemetry() -> RecordingTelemetry:
    return RecordingTelemetry()


@pytest.fixture()
def catalog(registry: ProviderRegistry, store: MemoryKeyValueStore, telemetry: RecordingTelemetry) -> ModelCatalog:
    return ModelCatalog(registry, store, telemetry=telemetry)


@pytest.fixture()
def synchronizer(
    catalog: ModelCatalog, store: MemoryKeyValueStore, telemetry: RecordingTelemetry
) -> Iterator[SelectionStateSynchronizer]:
    sync = SelectionStateSynchronizer(catalog, store, telemetry=telemetry)
    yield sync
    sync.close()


class FailingStore(MemoryKeyValueStore):
    """Memory store whose reads and/or writes raise ``OSError``."""

    def __init__(self, *, fail_reads: bool = False, fail_writes: bool = False, initial=None) -> None:
        super().__init__(initial)
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    async def get(self, key):
        if self.fail_reads:
            raise OSError(f"read refused for {key}")
        return await super().get(key)

    async def set(self, key, value):
        if self.fail_writes:
            raise OSError(f"write refused for {key}")
        await super().set(key, value)

    async def delete(self, key):
        if self.fail_writes:
            raise OSError(f"delete refused for {key}")
        await super().delete(key)


@pytest.fixture()
def failing_store_cls():
    return FailingStore
