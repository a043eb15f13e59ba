"""Local directory backend implementing IFileStore."""

from __future__ import annotations

from pathlib import Path

from furikomi.core.exceptions import ReferenceFileNotFound, StorageError


class LocalFileStore:
    """IFileStore over a directory such as ``data/`` holding ``banks.json``."""

    def __init__(self, base_path: str | Path) -> None:
        self._base = Path(base_path)

    def read(self, path: str) -> bytes:
        target = self._base / path
        try:
            return target.read_bytes()
        except FileNotFoundError as exc:
            raise ReferenceFileNotFound(path) from exc
        except OSError as exc:
            raise StorageError(f"Local read failed for {str(target)!r}: {exc}") from exc
