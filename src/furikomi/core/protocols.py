"""Protocol interfaces for Furikomi abstractions.

Structural typing only: backends and fixtures satisfy these without
inheritance, and can be checked with isinstance().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Protocol, runtime_checkable

if TYPE_CHECKING:
    from furikomi.models.transfer import BankEntry, BranchEntry


# ---------------------------------------------------------------------------
# Persistence: File Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IFileStore(Protocol):
    """Read-only file storage holding the reference JSON documents."""

    def read(self, path: str) -> bytes: ...


# ---------------------------------------------------------------------------
# Persistence: Cache Backend
# ---------------------------------------------------------------------------

@runtime_checkable
class ICacheBackend(Protocol):
    """Redis-compatible cache interface."""

    def get(self, key: str) -> str | None: ...

    def setex(self, key: str, ttl: int, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


# ---------------------------------------------------------------------------
# Reference Data
# ---------------------------------------------------------------------------

@runtime_checkable
class IReferenceData(Protocol):
    """Lookup tables for Zengin bank and branch codes.

    Both methods raise ``ReferenceDataError`` when the table is absent or
    unreadable. Returned mappings are read-only.
    """

    def get_banks(self) -> Mapping[str, BankEntry]: ...

    def get_branches(self, bank_code: str) -> Mapping[str, BranchEntry]: ...
