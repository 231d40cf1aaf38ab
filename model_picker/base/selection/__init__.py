"""
Selection state package

Public API:
- SelectionStateSynchronizer
- derive_available_models
- flatten_and_sort_available_models
"""

from .available import derive_available_models, flatten_and_sort_available_models
from .synchronizer import SelectionStateSynchronizer

__all__ = ["SelectionStateSynchronizer", "derive_available_models", "flatten_and_sort_available_models"]
