"""Persistence layer: the Store protocol and its memory/SQLite adapters."""

from .interfaces import KeyValueStore
from .memory import MemoryKeyValueStore
from .sqlite import SqliteKeyValueStore

__all__ = ["KeyValueStore", "MemoryKeyValueStore", "SqliteKeyValueStore"]
