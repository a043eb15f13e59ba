"""In-memory backends for unit tests and fixtures."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from furikomi.core.exceptions import ReferenceDataError, ReferenceFileNotFound
from furikomi.models.transfer import BankEntry, BranchEntry


class MemoryFileStore:
    """Dict-backed IFileStore."""

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self._files: dict[str, bytes] = dict(files or {})
        self.reads: list[str] = []

    def put(self, path: str, data: bytes) -> None:
        self._files[path] = data

    def read(self, path: str) -> bytes:
        self.reads.append(path)
        try:
            return self._files[path]
        except KeyError as exc:
            raise ReferenceFileNotFound(path) from exc


class MemoryCacheBackend:
    """Dict-backed ICacheBackend. TTLs are recorded, not enforced."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = value
        self.ttls[key] = ttl

    def delete(self, key: str) -> None:
        self._store.pop(key, None)
        self.ttls.pop(key, None)


class StaticReferenceData:
    """IReferenceData over in-memory tables.

    ``banks`` maps 4-digit codes to bank names; ``branches`` maps 4-digit bank
    codes to {3-digit branch code: branch name}. A bank without an entry in
    ``branches`` behaves like a missing branch file.
    """

    def __init__(self, banks: Mapping[str, str],
                 branches: Mapping[str, Mapping[str, str]]) -> None:
        self._banks = MappingProxyType(
            {code: BankEntry(code=code, name=name) for code, name in banks.items()}
        )
        self._branches = {
            bank_code: MappingProxyType(
                {code: BranchEntry(code=code, name=name) for code, name in table.items()}
            )
            for bank_code, table in branches.items()
        }

    def get_banks(self) -> Mapping[str, BankEntry]:
        return self._banks

    def get_branches(self, bank_code: str) -> Mapping[str, BranchEntry]:
        try:
            return self._branches[bank_code]
        except KeyError:
            raise ReferenceDataError(f"branches/{bank_code}.json", "not found") from None
