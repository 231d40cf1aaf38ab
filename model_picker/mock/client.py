"""Scriptable provider for offline tests of the catalog and selection layers.

Purpose
-------
Implements the ``Provider`` capability set without any network traffic. Tests
control what the listing call returns, make it fail, or hold it open on an
``asyncio.Event`` to observe ``loading`` states and overlapping refreshes.

External dependencies
---------------------
Standard library only.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from ..base.log_support import LogContext
from ..base.logging import get_logger, log_event
from ..base.models import ModelConfig, ProviderMetadata
from ..base.registry import StaticProvider


class MockProvider(StaticProvider):
    """Provider whose listing result is set by the test.

    Attributes
    ----------
    listing:
        Models returned by the next listing call; ``None`` returns the
        built-in models.
    failure:
        Exception raised by the next listing call instead of returning.
    gate:
        When set, listing calls wait for the event before completing.
    fetch_calls:
        Number of listing calls started.
    """

    def __init__(
        self,
        provider_id: str = "mock",
        models: Sequence[ModelConfig] = (),
        *,
        name: Optional[str] = None,
        required_keys: Sequence[str] = ("api_key",),
        listing: Optional[Sequence[ModelConfig]] = None,
        failure: Optional[BaseException] = None,
    ) -> None:
        metadata = ProviderMetadata(
            id=provider_id,
            name=name or provider_id.title(),
            required_keys=tuple(required_keys),
        )
        super().__init__(metadata, models)
        self.listing: Optional[List[ModelConfig]] = list(listing) if listing is not None else None
        self.failure = failure
        self.gate: Optional[asyncio.Event] = None
        self.fetch_calls = 0
        self.logger = get_logger("model_picker.mock")

    def hold(self) -> asyncio.Event:
        """Make listing calls block until the returned event is set."""
        self.gate = asyncio.Event()
        return self.gate

    async def fetch_available_models(self) -> Sequence[ModelConfig]:
        self.fetch_calls += 1
        call = self.fetch_calls
        # Capture the script at call time so overlapping calls see their own setup.
        listing = self.listing
        failure = self.failure
        gate = self.gate
        log_event(self.logger, "mock.fetch", LogContext(provider=self.metadata.id), level=logging.DEBUG, call=call)
        if gate is not None:
            await gate.wait()
        if failure is not None:
            raise failure
        return tuple(listing) if listing is not None else self.models


__all__ = ["MockProvider"]
