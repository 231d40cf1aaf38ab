"""Providers whose listing call queries a vendor HTTP endpoint.

Purpose
    Discover models that are not part of a provider's built-in list: models
    pulled into a local Ollama server, or models exposed by an OpenAI-compatible
    ``/models`` endpoint (OpenAI, OpenRouter, LM Studio, ...).

External dependencies
    * ``httpx`` async client, one per listing call.

Failure semantics
    Transport errors and non-2xx responses propagate to the catalog, which
    records them on the provider's ``error`` status. ``httpx.HTTPStatusError``
    carries the response so the status code drives error classification.
    Retries and credential checks are out of scope here.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import httpx

from ..base.log_support import LogContext
from ..base.logging import get_logger, log_event
from ..base.models import ModelConfig, ProviderMetadata
from ..base.registry import StaticProvider
from ..config.defaults import HTTP_LISTING_TIMEOUT_SECONDS

_logger = get_logger("model_picker.providers.http")


class HttpListingProvider(StaticProvider):
    """Base for providers that list models with one GET request.

    Subclasses set ``list_path`` and implement :meth:`parse_models`.
    """

    list_path: str = "/models"

    def __init__(
        self,
        metadata: ProviderMetadata,
        models: Sequence[ModelConfig] = (),
        *,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = HTTP_LISTING_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(metadata, models)
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    def request_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def parse_models(self, payload: Any) -> List[ModelConfig]:  # pragma: no cover - abstract
        raise NotImplementedError

    async def fetch_available_models(self) -> Sequence[ModelConfig]:
        url = f"{self.base_url}{self.list_path}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(url, headers=self.request_headers())
        response.raise_for_status()
        models = self.parse_models(response.json())
        log_event(
            _logger,
            "provider.models.listed",
            LogContext(provider=self.metadata.id),
            url=url,
            count=len(models),
        )
        return models


def _entries(payload: Any, field: str) -> List[Any]:
    items = payload.get(field, []) if isinstance(payload, dict) else payload
    return list(items) if isinstance(items, list) else []


class OllamaListingProvider(HttpListingProvider):
    """Lists models pulled into an Ollama server via ``GET /api/tags``."""

    list_path = "/api/tags"

    def parse_models(self, payload: Any) -> List[ModelConfig]:
        models: List[ModelConfig] = []
        for raw in _entries(payload, "models"):
            if isinstance(raw, dict):
                model_id = raw.get("model") or raw.get("name")
                name = raw.get("name") or model_id
            else:
                model_id = name = str(raw)
            if model_id:
                models.append(ModelConfig(id=str(model_id), display_name=str(name)))
        return models


class OpenAICompatibleListingProvider(HttpListingProvider):
    """Lists models from an OpenAI-style ``GET /models`` (``{"data": [{"id": ...}]}``)."""

    list_path = "/models"

    def parse_models(self, payload: Any) -> List[ModelConfig]:
        models: List[ModelConfig] = []
        for raw in _entries(payload, "data"):
            if not isinstance(raw, dict) or not raw.get("id"):
                continue
            context = raw.get("context_length")
            models.append(
                ModelConfig(
                    id=str(raw["id"]),
                    display_name=str(raw.get("name") or raw["id"]),
                    context_length=context if isinstance(context, int) else None,
                )
            )
        return models


__all__ = [
    "HttpListingProvider",
    "OllamaListingProvider",
    "OpenAICompatibleListingProvider",
]
