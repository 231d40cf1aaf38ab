"""Key-value Store protocol consumed by the catalog and the synchronizer.

Design Principles:
- No concrete behavior; pure structural typing via `Protocol`.
- Values are JSON-compatible Python objects (dicts, lists, strings, numbers).
- No transactions and no ordering guarantees across keys. Each logical record
  has exactly one writer: the catalog owns ``models:<provider>`` records, the
  selection synchronizer owns the recency and credential records.

Failure / Error Semantics:
- Implementations raise backend-specific exceptions on I/O failure; callers
  translate them at their boundary (see ``PersistenceError``).
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Async get/set/delete of opaque values by string key."""

    async def get(self, key: str) -> Optional[Any]:
        """Return the stored value or ``None`` when the key is absent."""
        ...

    async def set(self, key: str, value: Any) -> None:
        """Create or replace the value stored under ``key``."""
        ...

    async def delete(self, key: str) -> None:
        """Remove ``key``; deleting an absent key is a no-op."""
        ...


__all__ = ["KeyValueStore"]
