"""Composite key construction and parsing."""

from __future__ import annotations

import pytest

from model_picker.base.errors import InvalidIdentifierError
from model_picker.base.keys import ids_from_key, make_key, provider_and_model_key
from model_picker.base.models import ModelConfig, ModelConfigWithProvider, ProviderMetadata


def test_make_key_joins_ids():
    assert make_key("openai", "gpt-4o") == "openai:gpt-4o"


def test_ids_from_key_splits_at_first_delimiter_only():
    assert ids_from_key("ollama:gpt-oss:20b") == ("ollama", "gpt-oss:20b")


def test_key_round_trip_with_colon_in_model_id():
    key = make_key("ollama", "llama3.2:3b")
    assert ids_from_key(key) == ("ollama", "llama3.2:3b")


@pytest.mark.parametrize("bad", ["no-delimiter", ":model", "provider:", "", 42])
def test_ids_from_key_rejects_malformed(bad):
    with pytest.raises(InvalidIdentifierError):
        ids_from_key(bad)


def test_provider_id_may_not_contain_delimiter():
    with pytest.raises(InvalidIdentifierError):
        make_key("bad:provider", "model")


def test_invalid_identifier_is_value_error():
    with pytest.raises(ValueError):
        make_key("", "model")


def test_provider_and_model_key_matches_entry_key():
    entry = ModelConfigWithProvider(
        model=ModelConfig(id="claude", display_name="Claude"),
        provider=ProviderMetadata(id="anthropic", name="Anthropic"),
    )
    assert provider_and_model_key(entry) == "anthropic:claude"
    assert entry.with_key().key == entry.key == "anthropic:claude"
