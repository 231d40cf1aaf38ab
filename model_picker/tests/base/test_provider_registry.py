"""ProviderRegistry lookups and StaticProvider defaults."""

from __future__ import annotations

import pytest

from model_picker.base.errors import NotFoundError
from model_picker.base.models import ModelConfig, ProviderMetadata
from model_picker.base.registry import ProviderRegistry, StaticProvider
from model_picker.providers import BUILTIN_PROVIDERS, default_registry


def _provider(pid: str, *models: ModelConfig, keys=("api_key",)) -> StaticProvider:
    return StaticProvider(ProviderMetadata(id=pid, name=pid.title(), required_keys=keys), models)


def test_register_and_lookup_preserves_order():
    reg = ProviderRegistry()
    reg.register(_provider("b"))
    reg.register(_provider("a"))
    assert reg.provider_ids() == ["b", "a"]
    assert reg.has_provider("a")
    assert reg.get_provider("b").metadata.id == "b"
    assert len(reg) == 2


def test_duplicate_registration_rejected():
    reg = ProviderRegistry()
    reg.register(_provider("a"))
    with pytest.raises(ValueError):
        reg.register(_provider("a"))


def test_unknown_provider_raises_not_found():
    reg = ProviderRegistry()
    with pytest.raises(NotFoundError) as info:
        reg.get_provider("nope")
    assert info.value.provider == "nope"


def test_unregister():
    reg = ProviderRegistry()
    reg.register(_provider("a"))
    assert reg.unregister("a") is True
    assert reg.unregister("a") is False
    assert not reg.has_provider("a")


def test_model_listings_attach_metadata():
    reg = ProviderRegistry()
    reg.register(_provider("a", ModelConfig(id="m1", display_name="M1"), ModelConfig(id="m2", display_name="M2")))
    entries = reg.get_models_for_provider("a")
    assert [e.key for e in entries] == ["a:m1", "a:m2"]
    assert [e.key for e in reg.get_all_models()] == ["a:m1", "a:m2"]


def test_capability_and_credential_filters():
    reg = ProviderRegistry()
    reg.register(_provider("vision", ModelConfig(id="v", display_name="V", supports_vision=True)))
    reg.register(_provider("local", ModelConfig(id="l", display_name="L"), keys=()))
    assert [p.metadata.id for p in reg.get_providers_by_capability("supports_vision")] == ["vision"]
    assert [p.metadata.id for p in reg.get_providers_not_requiring_credentials()] == ["local"]


def test_static_provider_default_model():
    provider = _provider(
        "a",
        ModelConfig(id="m1", display_name="M1"),
        ModelConfig(id="m2", display_name="M2", is_default=True),
    )
    assert provider.get_default_model().id == "m2"
    assert _provider("b", ModelConfig(id="x", display_name="X")).get_default_model() is None


@pytest.mark.asyncio
async def test_static_provider_lists_builtin_models():
    provider = _provider("a", ModelConfig(id="m1", display_name="M1"))
    assert [m.id for m in await provider.fetch_available_models()] == ["m1"]


def test_default_registry_holds_builtins_with_one_default_each():
    reg = default_registry()
    assert reg.provider_ids() == [p.metadata.id for p in BUILTIN_PROVIDERS]
    for provider in reg.get_all_providers():
        defaults = [m for m in provider.models if m.is_default]
        assert len(defaults) == 1, provider.metadata.id
    assert reg.get_provider("ollama").requires_credentials is False
