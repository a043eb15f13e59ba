"""Furikomi exception hierarchy.

Request validation failures are returned as values (see
``furikomi.models.errors``); these exceptions cover infrastructure faults.
"""

from __future__ import annotations


class FurikomiError(Exception):
    """Base exception for all Furikomi errors."""


class StorageError(FurikomiError):
    """Reading from a reference-data file store failed."""


class ReferenceFileNotFound(StorageError):
    """The requested reference file does not exist in the store."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Reference file not found: {path}")


class ReferenceDataError(FurikomiError):
    """A reference table is missing or cannot be parsed."""

    def __init__(self, table_name: str, reason: str) -> None:
        self.table_name = table_name
        self.reason = reason
        super().__init__(f"Reference data unavailable: {table_name} ({reason})")


class CacheError(FurikomiError):
    """Redis cache operation failed."""
