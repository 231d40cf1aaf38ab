"""Derivations of the model lists shown by pickers."""
from __future__ import annotations

from typing import Collection, Iterable, Tuple

from ..models import CatalogSnapshot, KeyedModelConfigWithProvider, ModelConfigWithProvider


def derive_available_models(
    snapshot: CatalogSnapshot,
    credentialed: Collection[str],
    exclude_keys: Iterable[str] = (),
) -> Tuple[KeyedModelConfigWithProvider, ...]:
    """Visible models of credentialed providers that are not already recently used.

    Ordered by provider (snapshot order) then by each provider's model order.
    Providers without stored credentials contribute nothing.
    """
    excluded = set(exclude_keys)
    pool = []
    for provider_id, status in snapshot.items():
        if provider_id not in credentialed:
            continue
        for entry in status.models:
            if not entry.model.is_visible:
                continue
            keyed = entry.with_key()
            if keyed.key not in excluded:
                pool.append(keyed)
                excluded.add(keyed.key)
    return tuple(pool)


def flatten_and_sort_available_models(
    snapshot: CatalogSnapshot,
) -> Tuple[ModelConfigWithProvider, ...]:
    """Every visible model in the snapshot, newest discoveries first.

    Models without ``discovered_at`` (built-ins) sort last; ties are broken by
    provider name, then model display name, both case-insensitively.
    """
    visible = [
        entry for status in snapshot.values() for entry in status.models if entry.model.is_visible
    ]
    visible.sort(
        key=lambda e: (
            -(e.model.discovered_at or 0),
            e.provider.name.casefold(),
            e.model.display_name.casefold(),
        )
    )
    return tuple(visible)


__all__ = ["derive_available_models", "flatten_and_sort_available_models"]
