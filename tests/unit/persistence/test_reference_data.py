"""Tests for FileReferenceData loading, memoization and caching."""

from __future__ import annotations

import json
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from furikomi.core.exceptions import CacheError, ReferenceDataError, StorageError
from furikomi.core.protocols import IReferenceData
from furikomi.models.transfer import BankEntry, BranchEntry
from furikomi.persistence.reference_data import FileReferenceData, parse_table
from tests.fakes import MemoryCacheBackend, MemoryFileStore, fixture_file_store, static_reference_data


class TestParseTable:
    def test_parses_code_keyed_object(self):
        table = parse_table("banks.json", '{"0001": {"name": "みずほ"}}', BankEntry)
        assert table["0001"] == BankEntry(code="0001", name="みずほ")

    def test_table_is_read_only(self):
        table = parse_table("banks.json", '{"0001": {"name": "みずほ"}}', BankEntry)
        with pytest.raises(TypeError):
            table["0002"] = BankEntry(name="x")  # type: ignore[index]

    def test_extra_fields_ignored(self):
        table = parse_table("b.json", '{"001": {"name": "本店", "url": "x"}}', BranchEntry)
        assert table["001"].name == "本店"

    @pytest.mark.parametrize(
        "raw",
        ["not json", "[]", '"text"', '{"0001": "みずほ"}', '{"0001": {"kana": "ミズホ"}}'],
    )
    def test_malformed_documents_raise(self, raw):
        with pytest.raises(ReferenceDataError) as info:
            parse_table("banks.json", raw, BankEntry)
        assert info.value.table_name == "banks.json"


class TestFileReferenceData:
    def test_satisfies_protocol(self):
        assert isinstance(FileReferenceData(MemoryFileStore()), IReferenceData)
        assert isinstance(static_reference_data(), IReferenceData)

    def test_loads_banks_and_branches(self):
        reference = FileReferenceData(fixture_file_store())
        assert set(reference.get_banks()) == {"0001", "0005", "0009"}
        assert reference.get_branches("0001")["004"].name == "丸の内中央"

    def test_tables_loaded_once(self):
        store = fixture_file_store()
        reference = FileReferenceData(store)
        for _ in range(3):
            reference.get_banks()
            reference.get_branches("0001")
        assert store.reads.count("banks.json") == 1
        assert store.reads.count("branches/0001.json") == 1

    def test_concurrent_first_access_reads_once(self):
        store = fixture_file_store()
        reference = FileReferenceData(store)
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: reference.get_banks(), range(32)))
        assert all(r is results[0] for r in results)
        assert store.reads.count("banks.json") == 1

    def test_missing_branch_file_names_table(self):
        reference = FileReferenceData(fixture_file_store())
        with pytest.raises(ReferenceDataError) as info:
            reference.get_branches("0009")
        assert info.value.table_name == "branches/0009.json"
        assert info.value.reason == "not found"

    def test_failed_load_is_retried(self):
        store = MemoryFileStore()
        reference = FileReferenceData(store)
        with pytest.raises(ReferenceDataError):
            reference.get_banks()
        store.put("banks.json", '{"0001": {"name": "みずほ"}}'.encode("utf-8"))
        assert reference.get_banks()["0001"].name == "みずほ"

    def test_storage_error_is_wrapped(self):
        class BrokenStore(MemoryFileStore):
            def read(self, path: str) -> bytes:
                raise StorageError("connection reset")

        with pytest.raises(ReferenceDataError, match="connection reset"):
            FileReferenceData(BrokenStore()).get_banks()

    def test_non_utf8_rejected(self):
        store = MemoryFileStore({"banks.json": "{}".encode("utf-16")})
        with pytest.raises(ReferenceDataError):
            FileReferenceData(store).get_banks()

    def test_custom_layout(self):
        store = MemoryFileStore({
            "zengin/banks.json": b'{"0001": {"name": "A"}}',
            "zengin/shiten/0001.json": b'{"001": {"name": "B"}}',
        })
        reference = FileReferenceData(
            store, banks_file="zengin/banks.json", branches_dir="zengin/shiten/",
        )
        assert reference.get_branches("0001")["001"].name == "B"

    def test_slow_table_does_not_block_other_tables(self):
        release = threading.Event()
        entered = threading.Event()

        class SlowStore(MemoryFileStore):
            def read(self, path: str) -> bytes:
                if path == "branches/0001.json":
                    entered.set()
                    release.wait(timeout=5)
                return super().read(path)

        store = fixture_file_store()
        slow = SlowStore({path: store.read(path) for path in ("branches/0001.json", "branches/0005.json")})
        reference = FileReferenceData(slow)
        first = threading.Thread(target=reference.get_branches, args=("0001",))
        first.start()
        try:
            assert entered.wait(timeout=5)
            second = threading.Thread(target=reference.get_branches, args=("0005",))
            second.start()
            second.join(timeout=2)
            assert not second.is_alive()
        finally:
            release.set()
            first.join(timeout=5)
        assert reference.get_branches("0005")["001"].name == "本店"
        assert reference.get_branches("0001")["001"].name == "東京営業部"


class TestSharedCache:
    def test_populates_cache_after_store_read(self):
        cache = MemoryCacheBackend()
        FileReferenceData(fixture_file_store(), cache=cache, cache_ttl=60).get_banks()
        cached = cache.get("reference:banks.json")
        assert cached is not None
        assert "0001" in json.loads(cached)
        assert cache.ttls["reference:banks.json"] == 60

    def test_cache_hit_skips_store(self):
        cache = MemoryCacheBackend()
        cache.setex("reference:banks.json", 60, '{"0042": {"name": "キャッシュ"}}')
        store = fixture_file_store()
        banks = FileReferenceData(store, cache=cache).get_banks()
        assert list(banks) == ["0042"]
        assert store.reads == []

    def test_corrupt_document_not_cached(self):
        cache = MemoryCacheBackend()
        store = MemoryFileStore({"banks.json": b"{broken"})
        with pytest.raises(ReferenceDataError):
            FileReferenceData(store, cache=cache).get_banks()
        assert cache.get("reference:banks.json") is None

    def test_cache_failure_falls_back_to_store(self):
        class DownCache(MemoryCacheBackend):
            def get(self, key: str) -> str | None:
                raise CacheError("redis down")

            def setex(self, key: str, ttl: int, value: str) -> None:
                raise CacheError("redis down")

        banks = FileReferenceData(fixture_file_store(), cache=DownCache()).get_banks()
        assert "0001" in banks

    def test_invalid_cached_copy_is_replaced_from_store(self):
        cache = MemoryCacheBackend()
        cache.setex("reference:banks.json", 60, "{broken")
        store = fixture_file_store()
        banks = FileReferenceData(store, cache=cache).get_banks()
        assert "0001" in banks
        assert store.reads == ["banks.json"]
        assert "0001" in json.loads(cache.get("reference:banks.json"))

    def test_invalid_cached_copy_is_evicted_when_store_fails(self):
        cache = MemoryCacheBackend()
        cache.setex("reference:banks.json", 60, '{"0001": "みずほ"}')
        with pytest.raises(ReferenceDataError) as info:
            FileReferenceData(MemoryFileStore(), cache=cache).get_banks()
        assert info.value.reason == "not found"
        assert cache.get("reference:banks.json") is None
