"""SQLite engine helpers for the key-value store.

Purpose
-------
Provide safe, centralized helpers for opening SQLite connections and ensuring
schema availability for local development and light-concurrency scenarios.

Timeout and reliability strategy
--------------------------------
- Applies a standard ``busy_timeout`` (milliseconds) from
  ``model_picker.config.defaults`` to mitigate lock contention.
- Enables WAL journaling and NORMAL synchronous mode for durability with good
  interactive performance. In-memory databases keep SQLite's default journal.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

from ...config.defaults import (
    DEFAULT_DB_PATH,
    MEMORY_DB_PATH,
    SQLITE_BUSY_TIMEOUT_MS,
    SQLITE_JOURNAL_MODE,
    SQLITE_SYNCHRONOUS,
)


def get_db_path(db_path: Optional[str] = None) -> Path:
    """Return a concrete database file path.

    ``None`` selects ``DEFAULT_DB_PATH``; user-provided values are passed
    through ``Path.expanduser()`` to allow ``~`` home shortcuts.
    """
    return Path(db_path).expanduser() if db_path else DEFAULT_DB_PATH


def create_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Open a SQLite connection with sane defaults and apply PRAGMA settings.

    Behavior
    --------
    - Ensures the parent directory exists prior to opening the database file.
    - ``check_same_thread=False`` because blocking calls are dispatched to
      worker threads; the store serializes access with a lock.

    Returns
    -------
    sqlite3.Connection
        An open connection with ``row_factory`` set to ``sqlite3.Row``.
    """
    if db_path == MEMORY_DB_PATH:
        conn = sqlite3.connect(MEMORY_DB_PATH, check_same_thread=False)
    else:
        path = get_db_path(db_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(path), check_same_thread=False)
        conn.execute(f"PRAGMA journal_mode={SQLITE_JOURNAL_MODE};")
        conn.execute(f"PRAGMA synchronous={SQLITE_SYNCHRONOUS};")
    conn.row_factory = sqlite3.Row
    conn.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS};")  # ms
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the ``kv`` table if it does not exist, then commit.

    Schema
    ------
    - ``kv``: key -> JSON-serialized value with an ``updated_at`` timestamp
    """
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS kv (
            key TEXT PRIMARY KEY,
            value_json TEXT NOT NULL,
            updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
        """
    )
    conn.commit()


__all__ = ["get_db_path", "create_connection", "init_schema"]
