"""Persistence interfaces package.

Defines the Store protocol; concrete implementations live under the
``memory`` and ``sqlite`` adapters.
"""

from .store import KeyValueStore  # noqa: F401

__all__ = ["KeyValueStore"]
