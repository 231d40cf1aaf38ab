"""Identifier validation and composite ``provider:model`` keys.

A composite key joins a provider id and a model id with ``:``. Splitting only
happens at the first delimiter, so model ids may contain ``:`` themselves
(e.g. ``ollama:gpt-oss:20b``) while provider ids may not.
"""

from __future__ import annotations

from typing import Any, Tuple

from .errors import InvalidIdentifierError

KEY_DELIMITER = ":"


def validate_provider_id(value: Any) -> str:
    """Return ``value`` when it is a usable provider id.

    Raises
    ------
    InvalidIdentifierError
        When the value is not a non-empty string or contains the key delimiter.
    """
    if not isinstance(value, str) or not value:
        raise InvalidIdentifierError(f"Provider id must be a non-empty string, got {value!r}")
    if KEY_DELIMITER in value:
        raise InvalidIdentifierError(
            f"Provider id may not contain '{KEY_DELIMITER}': {value!r}", provider=value
        )
    return value


def validate_model_id(value: Any) -> str:
    """Return ``value`` when it is a non-empty string model id."""
    if not isinstance(value, str) or not value:
        raise InvalidIdentifierError(f"Model id must be a non-empty string, got {value!r}")
    return value


def make_key(provider_id: str, model_id: str) -> str:
    """Build the composite key for a provider/model pair."""
    return f"{validate_provider_id(provider_id)}{KEY_DELIMITER}{validate_model_id(model_id)}"


def provider_and_model_key(entry: Any) -> str:
    """Composite key of a ``ModelConfigWithProvider``-like entry."""
    return make_key(entry.provider.id, entry.model.id)


def ids_from_key(key: str) -> Tuple[str, str]:
    """Split a composite key into ``(provider_id, model_id)``.

    Raises
    ------
    InvalidIdentifierError
        When the key has no delimiter or either side is empty.
    """
    if not isinstance(key, str):
        raise InvalidIdentifierError(f"Composite key must be a string, got {key!r}")
    provider_id, sep, model_id = key.partition(KEY_DELIMITER)
    if not sep or not provider_id or not model_id:
        raise InvalidIdentifierError(f"Invalid composite key format: {key!r}")
    return provider_id, model_id


__all__ = [
    "KEY_DELIMITER",
    "validate_provider_id",
    "validate_model_id",
    "make_key",
    "provider_and_model_key",
    "ids_from_key",
]
