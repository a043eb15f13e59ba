"""Bank/branch reference tables read from an IFileStore.

Layout (the common zengin-code JSON format)::

    banks.json               {"0001": {"code": "0001", "name": "みずほ", ...}, ...}
    branches/0001.json       {"001": {"code": "001", "name": "東京営業部", ...}, ...}

Each table is parsed once and then shared as a read-only mapping.
"""

from __future__ import annotations

import json
import logging
import threading
from types import MappingProxyType
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from furikomi.core.exceptions import CacheError, ReferenceDataError, ReferenceFileNotFound, StorageError
from furikomi.core.protocols import ICacheBackend, IFileStore
from furikomi.models.transfer import BankEntry, BranchEntry

logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT", bound=BaseModel)


def parse_table(table_name: str, raw: bytes | str, entry_type: type[EntryT]) -> Mapping[str, EntryT]:
    """Parse a JSON object of ``code -> record`` into a read-only mapping.

    Raises:
        ReferenceDataError: if the document is not a JSON object or a record
            lacks a ``name``.
    """
    try:
        data: Any = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ReferenceDataError(table_name, f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ReferenceDataError(table_name, "expected a JSON object keyed by code")

    entries: dict[str, EntryT] = {}
    for code, record in data.items():
        if not isinstance(record, dict):
            raise ReferenceDataError(table_name, f"record {code!r} is not an object")
        try:
            entries[code] = entry_type.model_validate({"code": code, **record})
        except PydanticValidationError as exc:
            raise ReferenceDataError(table_name, f"record {code!r}: {exc.errors()[0]['msg']}") from exc
    return MappingProxyType(entries)


class FileReferenceData:
    """IReferenceData backed by an IFileStore with optional shared cache."""

    def __init__(
        self,
        file_store: IFileStore,
        *,
        cache: ICacheBackend | None = None,
        cache_ttl: int = 3600,
        banks_file: str = "banks.json",
        branches_dir: str = "branches",
    ) -> None:
        self._store = file_store
        self._cache = cache
        self._cache_ttl = cache_ttl
        self._banks_file = banks_file
        self._branches_dir = branches_dir.strip("/")
        self._locks_guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._banks: Mapping[str, BankEntry] | None = None
        self._branches: dict[str, Mapping[str, BranchEntry]] = {}

    def branch_file(self, bank_code: str) -> str:
        return f"{self._branches_dir}/{bank_code}.json"

    def get_banks(self) -> Mapping[str, BankEntry]:
        if self._banks is None:
            with self._table_lock(self._banks_file):
                if self._banks is None:
                    self._banks = self._load(self._banks_file, BankEntry)
        return self._banks

    def get_branches(self, bank_code: str) -> Mapping[str, BranchEntry]:
        table = self._branches.get(bank_code)
        if table is None:
            path = self.branch_file(bank_code)
            with self._table_lock(path):
                table = self._branches.get(bank_code)
                if table is None:
                    table = self._load(path, BranchEntry)
                    self._branches[bank_code] = table
        return table

    # ---- internals ----

    def _table_lock(self, path: str) -> threading.Lock:
        """One lock per table, so a slow read only blocks loaders of that table."""
        with self._locks_guard:
            return self._locks.setdefault(path, threading.Lock())

    def _load(self, path: str, entry_type: type[EntryT]) -> Mapping[str, EntryT]:
        cached = self._cached_text(path)
        if cached is not None:
            try:
                table = parse_table(path, cached, entry_type)
            except ReferenceDataError:
                logger.warning("Discarding invalid cached copy of %s", path)
                self._evict_cached_text(path)
            else:
                logger.info("Loaded reference table %s from cache (%d entries)", path, len(table))
                return table

        raw = self._read_store(path)
        table = parse_table(path, raw, entry_type)
        self._store_cached_text(path, raw)
        logger.info("Loaded reference table %s (%d entries)", path, len(table))
        return table

    def _read_store(self, path: str) -> str:
        try:
            return self._store.read(path).decode("utf-8")
        except ReferenceFileNotFound as exc:
            raise ReferenceDataError(path, "not found") from exc
        except UnicodeDecodeError as exc:
            raise ReferenceDataError(path, f"not UTF-8: {exc}") from exc
        except StorageError as exc:
            raise ReferenceDataError(path, str(exc)) from exc

    def _cached_text(self, path: str) -> str | None:
        if self._cache is None:
            return None
        try:
            return self._cache.get(f"reference:{path}")
        except CacheError:
            logger.warning("Reference cache read failed for %s; reading store", path, exc_info=True)
            return None

    def _store_cached_text(self, path: str, raw: str) -> None:
        if self._cache is None:
            return
        try:
            self._cache.setex(f"reference:{path}", self._cache_ttl, raw)
        except CacheError:
            logger.warning("Reference cache write failed for %s", path, exc_info=True)

    def _evict_cached_text(self, path: str) -> None:
        if self._cache is None:
            return
        try:
            self._cache.delete(f"reference:{path}")
        except CacheError:
            logger.warning("Reference cache delete failed for %s", path, exc_info=True)
