"""Shared test doubles and reference fixtures."""

from __future__ import annotations

from pathlib import Path

from furikomi.persistence.memory_backend import (
    MemoryCacheBackend,
    MemoryFileStore,
    StaticReferenceData,
)

FIXTURE_DIR = Path(__file__).resolve().parent.parent / "fixtures" / "reference"


def fixture_file_store() -> MemoryFileStore:
    """MemoryFileStore preloaded with every file under fixtures/reference."""
    store = MemoryFileStore()
    for path in FIXTURE_DIR.rglob("*.json"):
        store.put(path.relative_to(FIXTURE_DIR).as_posix(), path.read_bytes())
    return store


def static_reference_data() -> StaticReferenceData:
    """In-memory tables mirroring the JSON fixtures (0009 has no branch table)."""
    return StaticReferenceData(
        banks={"0001": "みずほ", "0005": "三菱ＵＦＪ", "0009": "三井住友"},
        branches={
            "0001": {"001": "東京営業部", "004": "丸の内中央"},
            "0005": {"001": "本店"},
        },
    )


__all__ = [
    "FIXTURE_DIR",
    "MemoryCacheBackend",
    "MemoryFileStore",
    "StaticReferenceData",
    "fixture_file_store",
    "static_reference_data",
]
