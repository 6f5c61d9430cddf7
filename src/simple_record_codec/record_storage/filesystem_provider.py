"""Filesystem collaborator used by the record store."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


class StorageError(Exception):
    """Raised when a storage path is invalid or a filesystem operation fails."""


@dataclass(frozen=True)
class FilesystemEntry:
    """One entry returned by `FilesystemProvider.enumerate`."""

    path: str
    is_directory: bool
    size: int


class FilesystemProvider(Protocol):
    """Read/write/enumerate/delete operations on provider-relative paths."""

    def exists(self, path: str) -> bool: ...

    def read(self, path: str) -> bytes: ...

    def write(self, path: str, data: bytes) -> None: ...

    def delete(self, path: str, *, recursive: bool = False) -> None: ...

    def enumerate(self, path: str) -> list[FilesystemEntry]: ...


class LocalFilesystemProvider:
    """Provider backed by a directory on the local filesystem.

    Every path is resolved against `root`; paths escaping it are rejected with
    StorageError. OSErrors from the operating system propagate unchanged.
    """

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def read(self, path: str) -> bytes:
        return self._resolve(path).read_bytes()

    def write(self, path: str, data: bytes) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    def delete(self, path: str, *, recursive: bool = False) -> None:
        target = self._resolve(path)
        if target == self._root:
            raise StorageError("Refusing to delete the provider root.")
        if target.is_dir():
            if recursive:
                shutil.rmtree(target)
            else:
                target.rmdir()
            return
        target.unlink()

    def enumerate(self, path: str = "") -> list[FilesystemEntry]:
        directory = self._resolve(path)
        entries = []
        for child in sorted(directory.iterdir()):
            is_directory = child.is_dir()
            entries.append(
                FilesystemEntry(
                    path=child.relative_to(self._root).as_posix(),
                    is_directory=is_directory,
                    size=0 if is_directory else child.stat().st_size,
                )
            )
        return entries

    def _resolve(self, path: str) -> Path:
        candidate = (self._root / path).resolve()
        if candidate != self._root and self._root not in candidate.parents:
            raise StorageError(f"Path escapes the storage root: {path}")
        return candidate
