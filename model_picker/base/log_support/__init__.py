"""Formatter and context helpers behind ``model_picker.base.logging``."""

from .json_formatter import JsonFormatter
from .logging_context import LogContext

__all__ = ["JsonFormatter", "LogContext"]
