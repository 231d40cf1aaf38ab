"""Tests for MemoryKeyValueStore."""

from __future__ import annotations

import pytest

from model_picker.persistence import KeyValueStore
from model_picker.persistence.memory import MemoryKeyValueStore


@pytest.mark.asyncio
async def test_get_set_delete():
    store = MemoryKeyValueStore()
    assert await store.get("k") is None
    await store.set("k", ["a", "b"])
    assert await store.get("k") == ["a", "b"]
    await store.delete("k")
    assert await store.get("k") is None
    # Deleting an absent key is a no-op
    await store.delete("k")


@pytest.mark.asyncio
async def test_values_are_copied():
    store = MemoryKeyValueStore()
    value = {"models": [1]}
    await store.set("k", value)
    value["models"].append(2)
    fetched = await store.get("k")
    assert fetched == {"models": [1]}
    fetched["models"].append(3)
    assert await store.get("k") == {"models": [1]}


def test_initial_values_and_protocol():
    store = MemoryKeyValueStore({"b": 1, "a": 2})
    assert store.keys() == ["a", "b"]
    assert isinstance(store, KeyValueStore)
