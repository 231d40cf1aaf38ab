"""
Normalized catalog error codes (taxonomy).

Defines the `ErrorCode` enumeration attached to catalog errors and to
structured log events. Values are lowercase snake_case and are considered a
stable public contract for logging and telemetry.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    NOT_FOUND = "not_found"
    FETCH_FAILED = "fetch_failed"
    PERSISTENCE = "persistence"
    VALIDATION = "validation"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    UNAVAILABLE = "unavailable"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
