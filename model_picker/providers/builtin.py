"""Built-in provider declarations.

Static metadata and model lists for the vendors the picker knows out of the
box. The keyed vendors list their built-in models; Ollama queries the local
server for pulled models. Hosts holding API keys can register an
:class:`OpenAICompatibleListingProvider` in place of a static entry.
"""
from __future__ import annotations

from typing import Optional, Sequence

from ..base.models import ModelConfig, ProviderMetadata
from ..base.registry import ProviderRegistry, StaticProvider
from ..config.defaults import (
    ANTHROPIC_DEFAULT_MODEL,
    GEMINI_DEFAULT_MODEL,
    OLLAMA_DEFAULT_HOST,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_MODEL,
)
from .http_listing import OllamaListingProvider


def _model(model_id: str, name: str, default: str, **caps) -> ModelConfig:
    return ModelConfig(id=model_id, display_name=name, is_default=True if model_id == default else None, **caps)


OPENAI = StaticProvider(
    ProviderMetadata(
        id="openai",
        name="OpenAI",
        description="GPT models served by the OpenAI API.",
        documentation_url="https://platform.openai.com/docs/models",
        api_key_url="https://platform.openai.com/api-keys",
        required_keys=("api_key",),
    ),
    [
        _model("gpt-4o", "GPT-4o", OPENAI_DEFAULT_MODEL, context_length=128000, max_tokens=16384, supports_vision=True, supports_tools=True),
        _model("gpt-4o-mini", "GPT-4o mini", OPENAI_DEFAULT_MODEL, context_length=128000, max_tokens=16384, supports_vision=True, supports_tools=True),
        _model("o3-mini", "o3-mini", OPENAI_DEFAULT_MODEL, context_length=200000, max_tokens=100000, supports_tools=True),
    ],
)

ANTHROPIC = StaticProvider(
    ProviderMetadata(
        id="anthropic",
        name="Anthropic",
        description="Claude models served by the Anthropic API.",
        documentation_url="https://docs.anthropic.com/en/docs/about-claude/models",
        api_key_url="https://console.anthropic.com/settings/keys",
        required_keys=("api_key",),
    ),
    [
        _model("claude-sonnet-4-5", "Claude Sonnet 4.5", ANTHROPIC_DEFAULT_MODEL, context_length=200000, max_tokens=64000, supports_vision=True, supports_tools=True),
        _model("claude-opus-4-1", "Claude Opus 4.1", ANTHROPIC_DEFAULT_MODEL, context_length=200000, max_tokens=32000, supports_vision=True, supports_tools=True),
        _model("claude-3-5-haiku-latest", "Claude Haiku 3.5", ANTHROPIC_DEFAULT_MODEL, context_length=200000, max_tokens=8192, supports_tools=True),
    ],
)

GEMINI = StaticProvider(
    ProviderMetadata(
        id="gemini",
        name="Google Gemini",
        description="Gemini models served by the Google AI API.",
        documentation_url="https://ai.google.dev/gemini-api/docs/models",
        api_key_url="https://aistudio.google.com/app/apikey",
        required_keys=("api_key",),
    ),
    [
        _model("gemini-2.5-pro", "Gemini 2.5 Pro", GEMINI_DEFAULT_MODEL, context_length=1048576, max_tokens=65536, supports_vision=True, supports_tools=True),
        _model("gemini-2.5-flash", "Gemini 2.5 Flash", GEMINI_DEFAULT_MODEL, context_length=1048576, max_tokens=65536, supports_vision=True, supports_tools=True),
    ],
)

OPENROUTER = StaticProvider(
    ProviderMetadata(
        id="openrouter",
        name="OpenRouter",
        description="Many vendors' models behind one OpenAI-compatible API.",
        documentation_url="https://openrouter.ai/docs",
        api_key_url="https://openrouter.ai/keys",
        required_keys=("api_key",),
    ),
    [
        _model("openrouter/auto", "Auto Router", OPENROUTER_DEFAULT_MODEL),
    ],
)

OLLAMA = OllamaListingProvider(
    ProviderMetadata(
        id="ollama",
        name="Ollama",
        description="Models running on a local Ollama server.",
        documentation_url="https://github.com/ollama/ollama/blob/main/docs/api.md",
    ),
    [
        _model("gpt-oss:20b", "gpt-oss 20B", OLLAMA_DEFAULT_MODEL, context_length=131072, supports_tools=True),
        _model("llama3.2:3b", "Llama 3.2 3B", OLLAMA_DEFAULT_MODEL, context_length=131072, supports_tools=True),
    ],
    base_url=OLLAMA_DEFAULT_HOST,
)

BUILTIN_PROVIDERS: Sequence[StaticProvider] = (OPENAI, ANTHROPIC, GEMINI, OPENROUTER, OLLAMA)


def default_registry(default_provider: Optional[str] = OPENAI.metadata.id) -> ProviderRegistry:
    """Return a fresh registry holding every built-in provider."""
    registry = ProviderRegistry(default_provider=default_provider)
    for provider in BUILTIN_PROVIDERS:
        registry.register(provider)
    return registry


__all__ = [
    "OPENAI",
    "ANTHROPIC",
    "GEMINI",
    "OPENROUTER",
    "OLLAMA",
    "BUILTIN_PROVIDERS",
    "default_registry",
]
