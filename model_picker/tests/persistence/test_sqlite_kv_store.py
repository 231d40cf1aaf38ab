"""SQLite key-value store against temp-file and in-memory databases."""

from __future__ import annotations

import sqlite3

import pytest

from model_picker.config import create_store, get_settings
from model_picker.persistence.memory import MemoryKeyValueStore
from model_picker.persistence.sqlite import SqliteKeyValueStore, create_connection


@pytest.mark.asyncio
async def test_round_trip_and_overwrite(tmp_path):
    store = SqliteKeyValueStore(str(tmp_path / "kv.db"))
    try:
        await store.set("recentlyUsedModels", ["openai:gpt-4o"])
        await store.set("recentlyUsedModels", ["anthropic:claude", "openai:gpt-4o"])
        assert await store.get("recentlyUsedModels") == ["anthropic:claude", "openai:gpt-4o"]
        await store.delete("recentlyUsedModels")
        assert await store.get("recentlyUsedModels") is None
    finally:
        store.close()


@pytest.mark.asyncio
async def test_values_survive_reopen(tmp_path):
    path = str(tmp_path / "nested" / "kv.db")
    first = SqliteKeyValueStore(path)
    await first.set("models:openai", {"version": 1, "models": [], "removed": ["gpt-4o"]})
    first.close()

    second = SqliteKeyValueStore(path)
    try:
        assert await second.get("models:openai") == {"version": 1, "models": [], "removed": ["gpt-4o"]}
    finally:
        second.close()


def test_schema_created_on_supplied_connection():
    conn = create_connection(":memory:")
    SqliteKeyValueStore(conn=conn)
    cols = {row["name"] for row in conn.execute("PRAGMA table_info(kv)")}
    assert {"key", "value_json", "updated_at"} <= cols
    conn.close()


def test_close_is_idempotent():
    store = SqliteKeyValueStore(":memory:")
    store.close()
    store.close()
    with pytest.raises(sqlite3.ProgrammingError):
        store._get_sync("k")


def test_create_store_follows_settings(tmp_path):
    assert isinstance(create_store(get_settings({"db_path": ":memory:"}, environ={})), MemoryKeyValueStore)
    store = create_store(get_settings({"db_path": str(tmp_path / "c.db")}, environ={}))
    try:
        assert isinstance(store, SqliteKeyValueStore)
    finally:
        store.close()
