"""Catalog settings merged from defaults, an optional file and the environment.

Merge order (later wins):
    1. Built-in defaults (:mod:`model_picker.config.defaults`)
    2. JSON config file pointed to by ``MODEL_PICKER_CONFIG_FILE``
    3. Environment variables (``MODEL_PICKER_DB_PATH``, ``MODEL_PICKER_PREFETCH``,
       ``MODEL_PICKER_LOG_LEVEL``, ``MODEL_PICKER_JSON_LOGS``)
    4. In-code overrides passed to :func:`get_settings`

A config file that is missing or does not contain a JSON object is ignored.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field

from .defaults import (
    DEFAULT_DB_PATH,
    DEFAULT_LOG_LEVEL,
    ENV_CONFIG_FILE,
    ENV_DB_PATH,
    ENV_JSON_LOGS,
    ENV_LOG_LEVEL,
    ENV_PREFETCH,
)

_TRUTHY = {"1", "true", "yes", "on"}


class CatalogSettings(BaseModel):
    """Runtime settings for wiring a catalog and its store.

    Attributes
    ----------
    db_path:
        SQLite database path, or ``":memory:"`` for a process-local store.
    prefetch:
        Whether ``initialize`` should refresh every provider immediately.
    log_level:
        Level name applied to the ``model_picker`` logger.
    json_logs:
        Emit JSON lines (True) or plain text (False).
    """

    db_path: str = Field(default=str(DEFAULT_DB_PATH))
    prefetch: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    json_logs: bool = True


def _load_file_config(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return {}
    p = Path(path).expanduser()
    if not p.is_file():
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if db_path := environ.get(ENV_DB_PATH):
        out["db_path"] = db_path
    if (prefetch := environ.get(ENV_PREFETCH)) is not None:
        out["prefetch"] = prefetch.strip().lower() in _TRUTHY
    if level := environ.get(ENV_LOG_LEVEL):
        out["log_level"] = level.strip().upper()
    if (json_logs := environ.get(ENV_JSON_LOGS)) is not None:
        out["json_logs"] = json_logs.strip().lower() in _TRUTHY
    return out


def get_settings(
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> CatalogSettings:
    """Return merged :class:`CatalogSettings`.

    Parameters
    ----------
    overrides:
        Explicit values; ``None`` entries are ignored.
    environ:
        Environment mapping to read (defaults to ``os.environ``).
    """
    env = os.environ if environ is None else environ
    merged: Dict[str, Any] = {}
    merged |= _load_file_config(env.get(ENV_CONFIG_FILE))
    merged |= _env_overrides(env)
    if overrides:
        merged |= {k: v for k, v in overrides.items() if v is not None}
    return CatalogSettings.model_validate(merged)


__all__ = ["CatalogSettings", "get_settings"]
