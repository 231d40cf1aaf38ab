"""model_picker.config.defaults
============================

Central place for small, stable default values used across the model_picker
package. These defaults can be overridden via environment variables or an
external configuration file (see :mod:`model_picker.config`), but provide
sensible fallbacks for local development and tests.

This module intentionally avoids importing from other packages to prevent
circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

from pathlib import Path

# ---- Store record keys ----
# Ordered list of composite keys, most recently selected first (selection-owned).
RECENTLY_USED_MODELS_KEY = "recentlyUsedModels"
# List of provider ids with stored credentials (selection-owned).
PROVIDERS_WITH_CREDENTIALS_KEY = "providersWithCredentials"
# Prefix of per-provider custom model records (catalog-owned).
PROVIDER_MODELS_KEY_PREFIX = "models:"
# Envelope version written to per-provider model records.
PERSISTED_MODELS_VERSION = 1


# ---- Environment variable names ----
ENV_CONFIG_FILE = "MODEL_PICKER_CONFIG_FILE"
ENV_DB_PATH = "MODEL_PICKER_DB_PATH"
ENV_PREFETCH = "MODEL_PICKER_PREFETCH"
ENV_LOG_LEVEL = "MODEL_PICKER_LOG_LEVEL"
ENV_JSON_LOGS = "MODEL_PICKER_JSON_LOGS"


# ---- Logging ----
BASE_LOGGER_NAME = "model_picker"
DEFAULT_LOG_LEVEL = "INFO"


# ---- SQLite store ----
DEFAULT_DB_PATH = Path.home() / ".model_picker" / "catalog.db"
MEMORY_DB_PATH = ":memory:"
# Standard busy timeout to mitigate lock contention (milliseconds).
SQLITE_BUSY_TIMEOUT_MS = 5000
# Journal and sync mode optimized for local development and light concurrency.
SQLITE_JOURNAL_MODE = "WAL"
SQLITE_SYNCHRONOUS = "NORMAL"


# ---- Built-in provider defaults ----
OPENAI_DEFAULT_MODEL = "gpt-4o"
ANTHROPIC_DEFAULT_MODEL = "claude-sonnet-4-5"
GEMINI_DEFAULT_MODEL = "gemini-2.5-pro"
OPENROUTER_DEFAULT_MODEL = "openrouter/auto"
OLLAMA_DEFAULT_MODEL = "gpt-oss:20b"


# ---- HTTP model listing ----
OLLAMA_DEFAULT_HOST = "http://localhost:11434"
OPENAI_BASE_URL = "https://api.openai.com/v1"
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
# Whole-request timeout for listing calls (seconds).
HTTP_LISTING_TIMEOUT_SECONDS = 10.0


__all__ = [
    "RECENTLY_USED_MODELS_KEY",
    "PROVIDERS_WITH_CREDENTIALS_KEY",
    "PROVIDER_MODELS_KEY_PREFIX",
    "PERSISTED_MODELS_VERSION",
    "ENV_CONFIG_FILE",
    "ENV_DB_PATH",
    "ENV_PREFETCH",
    "ENV_LOG_LEVEL",
    "ENV_JSON_LOGS",
    "BASE_LOGGER_NAME",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_DB_PATH",
    "MEMORY_DB_PATH",
    "SQLITE_BUSY_TIMEOUT_MS",
    "SQLITE_JOURNAL_MODE",
    "SQLITE_SYNCHRONOUS",
    "OPENAI_DEFAULT_MODEL",
    "ANTHROPIC_DEFAULT_MODEL",
    "GEMINI_DEFAULT_MODEL",
    "OPENROUTER_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_HOST",
    "OPENAI_BASE_URL",
    "OPENROUTER_BASE_URL",
    "HTTP_LISTING_TIMEOUT_SECONDS",
]
