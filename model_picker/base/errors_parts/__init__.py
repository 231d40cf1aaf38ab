"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `model_picker.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .catalog_error import (
    CatalogError,
    FetchError,
    InvalidIdentifierError,
    NotFoundError,
    PersistenceError,
)
from .classification import classify_exception, describe_exception

__all__ = [
    "ErrorCode",
    "CatalogError",
    "NotFoundError",
    "FetchError",
    "PersistenceError",
    "InvalidIdentifierError",
    "classify_exception",
    "describe_exception",
]
