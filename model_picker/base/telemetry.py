"""Optional telemetry hooks for catalog activity.

Hosts that want counters or traces pass a :class:`CatalogTelemetry` with the
callbacks they care about. Every hook is optional. A hook that raises is
logged and ignored so observers cannot disturb catalog state.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .log_support import LogContext
from .logging import get_logger, log_event

_logger = get_logger("model_picker.telemetry")


@dataclass
class CatalogTelemetry:
    """Callbacks fired by the catalog and the selection synchronizer."""

    on_fetch_start: Optional[Callable[[str], None]] = None
    on_fetch_success: Optional[Callable[[str, int], None]] = None
    on_fetch_error: Optional[Callable[[str, BaseException], None]] = None
    on_storage_error: Optional[Callable[[str, str, BaseException], None]] = None
    on_user_model_added: Optional[Callable[[str, str], None]] = None
    on_provider_not_found: Optional[Callable[[str], None]] = None

    def emit(self, hook: str, *args: Any) -> None:
        """Invoke ``hook`` with ``args`` when it is set."""
        callback = getattr(self, hook, None)
        if callback is None:
            return
        try:
            callback(*args)
        except Exception as exc:  # observers must not break catalog flows
            log_event(
                _logger,
                "telemetry.hook.error",
                LogContext(extra={"hook": hook}),
                level=logging.WARNING,
                error=str(exc),
            )


def emit(telemetry: Optional[CatalogTelemetry], hook: str, *args: Any) -> None:
    """Fire ``hook`` on ``telemetry`` when one is configured."""
    if telemetry is not None:
        telemetry.emit(hook, *args)


__all__ = ["CatalogTelemetry", "emit"]
