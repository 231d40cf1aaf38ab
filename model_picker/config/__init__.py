"""Configuration layer for the model picker core.

Public API
----------
* :class:`CatalogSettings` and :func:`get_settings` (defaults -> file -> env -> overrides)
* :func:`create_store` to build the Store named by the settings
* :func:`configure_logging` to apply the logging settings
* :mod:`model_picker.config.defaults` constants
"""
from __future__ import annotations

from typing import Optional

from .defaults import MEMORY_DB_PATH
from .settings import CatalogSettings, get_settings


def create_store(settings: Optional[CatalogSettings] = None):
    """Return a Store for ``settings.db_path``.

    ``":memory:"`` yields a :class:`MemoryKeyValueStore`; any other value opens
    a :class:`SqliteKeyValueStore` at that path.
    """
    # Local imports keep config importable from the persistence layer.
    from ..persistence.memory import MemoryKeyValueStore
    from ..persistence.sqlite import SqliteKeyValueStore

    settings = settings or get_settings()
    if settings.db_path == MEMORY_DB_PATH:
        return MemoryKeyValueStore()
    return SqliteKeyValueStore(settings.db_path)


def configure_logging(settings: Optional[CatalogSettings] = None):
    """Apply ``log_level`` and ``json_logs`` to the shared logger and return it."""
    from ..base.logging import configure_logger

    settings = settings or get_settings()
    return configure_logger(level=settings.log_level, json_mode=settings.json_logs)


__all__ = ["CatalogSettings", "get_settings", "create_store", "configure_logging"]
