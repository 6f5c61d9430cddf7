"""Local filesystem provider tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from simple_record_codec.record_storage import (
    FilesystemEntry,
    LocalFilesystemProvider,
    StorageError,
)


def test_write_creates_parent_directories(tmp_path: Path) -> None:
    provider = LocalFilesystemProvider(tmp_path)

    provider.write("people/ada.rec", b"{}\n")

    assert (tmp_path / "people" / "ada.rec").read_bytes() == b"{}\n"
    assert provider.exists("people/ada.rec")
    assert provider.read("people/ada.rec") == b"{}\n"


def test_enumerate_lists_sorted_relative_entries(tmp_path: Path) -> None:
    provider = LocalFilesystemProvider(tmp_path)
    provider.write("b.rec", b"12")
    provider.write("a/c.rec", b"1")

    assert provider.enumerate("") == [
        FilesystemEntry(path="a", is_directory=True, size=0),
        FilesystemEntry(path="b.rec", is_directory=False, size=2),
    ]
    assert provider.enumerate("a") == [FilesystemEntry(path="a/c.rec", is_directory=False, size=1)]


def test_delete_directories_requires_recursive_when_not_empty(tmp_path: Path) -> None:
    provider = LocalFilesystemProvider(tmp_path)
    provider.write("a/c.rec", b"1")

    with pytest.raises(OSError):
        provider.delete("a")
    provider.delete("a", recursive=True)

    assert not provider.exists("a")


def test_paths_escaping_the_root_are_rejected(tmp_path: Path) -> None:
    provider = LocalFilesystemProvider(tmp_path / "store")

    with pytest.raises(StorageError, match="escapes the storage root"):
        provider.write("../outside.rec", b"x")
    assert not (tmp_path / "outside.rec").exists()


def test_root_cannot_be_deleted(tmp_path: Path) -> None:
    provider = LocalFilesystemProvider(tmp_path)

    with pytest.raises(StorageError, match="root"):
        provider.delete("", recursive=True)
