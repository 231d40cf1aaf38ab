"""In-memory implementation of the ``KeyValueStore`` protocol.

Reference implementation backed by a dictionary. Suitable for development,
testing and single-process applications that do not need persistence across
restarts. Values are deep-copied on the way in and out so callers never share
mutable state with the store.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Optional


class MemoryKeyValueStore:
    """Dictionary-backed async key-value store.

    Thread safety: Not thread-safe. Intended for a single event loop.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def get(self, key: str) -> Optional[Any]:
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        """Return the stored keys (diagnostics and tests)."""
        return sorted(self._data)


__all__ = ["MemoryKeyValueStore"]
