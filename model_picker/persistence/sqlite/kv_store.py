"""SQLite-backed implementation of the ``KeyValueStore`` protocol.

Stores each key as one row with a JSON-serialized value. Every write commits
immediately since the Store contract has no transactions. Blocking sqlite3
calls run in a worker thread via ``asyncio.to_thread`` so the event loop is
never blocked; a lock serializes access to the shared connection.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import sqlite3
import threading
from typing import Any, Optional

from .engine import create_connection, init_schema


class SqliteKeyValueStore:
    """Async key-value store persisted in a single SQLite table.

    Parameters
    ----------
    db_path:
        Database file path, ``":memory:"``, or ``None`` for the default path.
    conn:
        Optional pre-opened connection (schema is initialized on it).
    """

    def __init__(self, db_path: Optional[str] = None, *, conn: Optional[sqlite3.Connection] = None) -> None:
        self._conn = conn if conn is not None else create_connection(db_path)
        self._lock = threading.Lock()
        init_schema(self._conn)

    # Blocking primitives (run in worker threads)
    def _get_sync(self, key: str) -> Optional[Any]:
        with self._lock:
            row = self._conn.execute("SELECT value_json FROM kv WHERE key = ?", (key,)).fetchone()
        return json.loads(row[0]) if row else None

    def _set_sync(self, key: str, value: Any) -> None:
        value_json = json.dumps(value, ensure_ascii=False)
        with self._lock:
            self._conn.execute(
                "INSERT INTO kv(key, value_json, updated_at) VALUES(?, ?, CURRENT_TIMESTAMP) ON CONFLICT(key) DO UPDATE SET value_json=excluded.value_json, updated_at=CURRENT_TIMESTAMP",
                (key, value_json),
            )
            self._conn.commit()

    def _delete_sync(self, key: str) -> None:
        with self._lock:
            self._conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            self._conn.commit()

    # Store contract
    async def get(self, key: str) -> Optional[Any]:
        return await asyncio.to_thread(self._get_sync, key)

    async def set(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._set_sync, key, value)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._delete_sync, key)

    def close(self) -> None:
        """Close the underlying connection (idempotent)."""
        with self._lock, contextlib.suppress(sqlite3.ProgrammingError):
            self._conn.close()


__all__ = ["SqliteKeyValueStore"]
