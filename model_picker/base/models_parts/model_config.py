"""
ModelConfig DTO describing one selectable model of a provider.

Identity is the ``id`` field; every other attribute is descriptive. The
``origin`` records where the entry came from (registry built-in list or a
provider listing call) and drives what the catalog persists.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class ModelOrigin(str, Enum):
    """Where a model entry was sourced from."""

    BUILTIN = "builtin"
    API = "api"


@dataclass(frozen=True)
class ModelConfig:
    """A single model offered by a provider.

    Attributes:
        id: Stable model identifier used in API calls.
        display_name: Human-friendly name.
        max_tokens: Optional maximum output tokens.
        context_length: Optional maximum context window size.
        supports_vision: Optional image input capability flag.
        supports_tools: Optional tool/function calling capability flag.
        is_default: Marks the provider's default model (at most one by convention).
        origin: Source of the entry, see :class:`ModelOrigin`.
        discovered_at: Epoch seconds when a non-builtin entry was first seen.
        visible: ``False`` hides the model from pickers; ``None`` means visible.
    """

    id: str
    display_name: str
    max_tokens: Optional[int] = None
    context_length: Optional[int] = None
    supports_vision: Optional[bool] = None
    supports_tools: Optional[bool] = None
    is_default: Optional[bool] = None
    origin: ModelOrigin = ModelOrigin.BUILTIN
    discovered_at: Optional[float] = None
    visible: Optional[bool] = None

    @property
    def is_visible(self) -> bool:
        return self.visible is not False

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary, dropping unset optional fields."""
        data = asdict(self)
        data["origin"] = self.origin.value
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ModelConfig":
        """Build a ``ModelConfig`` from its persisted form; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        if "display_name" not in values:
            values["display_name"] = values.get("id", "")
        if "origin" in values:
            values["origin"] = ModelOrigin(values["origin"])
        return cls(**values)


__all__ = ["ModelConfig", "ModelOrigin"]
