"""Mock provider package exposing scriptable providers for tests."""

from .client import MockProvider

__all__ = ["MockProvider"]
