"""Unified catalog error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``model_picker.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.catalog_error import (
    CatalogError,
    FetchError,
    InvalidIdentifierError,
    NotFoundError,
    PersistenceError,
)
from .errors_parts.classification import classify_exception, describe_exception

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
