"""HTTP listing providers against an in-process httpx transport."""

from __future__ import annotations

import httpx
import pytest

from model_picker.base.catalog import ModelCatalog
from model_picker.base.errors import ErrorCode
from model_picker.base.models import ModelOrigin, ProviderMetadata, ProviderStatus
from model_picker.base.registry import ProviderRegistry
from model_picker.base.telemetry import CatalogTelemetry
from model_picker.persistence.memory import MemoryKeyValueStore
from model_picker.providers import OllamaListingProvider, OpenAICompatibleListingProvider


def _transport(status: int, payload, seen=None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, json=payload)

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_ollama_lists_pulled_models():
    seen = []
    provider = OllamaListingProvider(
        ProviderMetadata(id="ollama", name="Ollama"),
        base_url="http://ollama.test/",
        transport=_transport(
            200,
            {"models": [{"name": "llama3:latest", "model": "llama3:latest"}, {"name": "qwen3:8b"}, {"size": 1}]},
            seen,
        ),
    )
    models = await provider.fetch_available_models()
    assert [m.id for m in models] == ["llama3:latest", "qwen3:8b"]
    assert str(seen[0].url) == "http://ollama.test/api/tags"
    assert "authorization" not in seen[0].headers


@pytest.mark.asyncio
async def test_openai_compatible_sends_bearer_and_parses_data():
    seen = []
    provider = OpenAICompatibleListingProvider(
        ProviderMetadata(id="openrouter", name="OpenRouter", required_keys=("api_key",)),
        base_url="https://router.test/api/v1",
        api_key="sk-test",
        transport=_transport(
            200,
            {"data": [{"id": "a/b", "name": "A B", "context_length": 8192}, {"name": "no id"}]},
            seen,
        ),
    )
    models = await provider.fetch_available_models()
    assert [(m.id, m.display_name, m.context_length) for m in models] == [("a/b", "A B", 8192)]
    assert seen[0].headers["authorization"] == "Bearer sk-test"
    assert str(seen[0].url) == "https://router.test/api/v1/models"


@pytest.mark.asyncio
async def test_http_failure_becomes_classified_error_status():
    provider = OpenAICompatibleListingProvider(
        ProviderMetadata(id="openai", name="OpenAI"),
        base_url="https://api.test/v1",
        transport=_transport(401, {"error": "bad key"}),
    )
    registry = ProviderRegistry()
    registry.register(provider)
    errors = []
    catalog = ModelCatalog(
        registry,
        MemoryKeyValueStore(),
        telemetry=CatalogTelemetry(on_fetch_error=lambda pid, exc: errors.append(exc)),
    )
    await catalog.initialize()
    status = await catalog.refresh("openai")
    assert status.status is ProviderStatus.ERROR
    assert errors[0].code is ErrorCode.AUTH


@pytest.mark.asyncio
async def test_listed_models_merge_into_catalog():
    provider = OllamaListingProvider(
        ProviderMetadata(id="ollama", name="Ollama"),
        base_url="http://ollama.test",
        transport=_transport(200, {"models": [{"name": "qwen3:8b"}]}),
    )
    registry = ProviderRegistry()
    registry.register(provider)
    catalog = ModelCatalog(registry, MemoryKeyValueStore())
    await catalog.initialize(prefetch=True)
    entry = catalog.get_model("ollama:qwen3:8b")
    assert entry.model.origin is ModelOrigin.API
