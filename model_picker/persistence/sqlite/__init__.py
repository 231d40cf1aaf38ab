from __future__ import annotations

from .engine import create_connection, get_db_path, init_schema
from .kv_store import SqliteKeyValueStore

__all__ = [
    "create_connection",
    "get_db_path",
    "init_schema",
    "SqliteKeyValueStore",
]
