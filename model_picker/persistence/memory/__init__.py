from .memory_store import MemoryKeyValueStore

__all__ = ["MemoryKeyValueStore"]
