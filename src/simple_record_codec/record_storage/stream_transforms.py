"""Byte-stream transforms applied around encoded records."""

from __future__ import annotations

import gzip
from contextlib import AbstractContextManager, nullcontext
from typing import BinaryIO, Protocol


class StreamTransform(Protocol):
    """Wraps a raw binary stream; the wrapper is released when its context exits."""

    name: str

    def wrap_writer(self, raw: BinaryIO) -> AbstractContextManager[BinaryIO]: ...

    def wrap_reader(self, raw: BinaryIO) -> AbstractContextManager[BinaryIO]: ...


class IdentityTransform:
    """Pass-through transform."""

    name = "identity"

    def wrap_writer(self, raw: BinaryIO) -> AbstractContextManager[BinaryIO]:
        return nullcontext(raw)

    def wrap_reader(self, raw: BinaryIO) -> AbstractContextManager[BinaryIO]:
        return nullcontext(raw)


class GzipTransform:
    """gzip compression; closing the writer flushes the gzip trailer into `raw`."""

    name = "gzip"

    def __init__(self, compresslevel: int = 9) -> None:
        self._compresslevel = compresslevel

    def wrap_writer(self, raw: BinaryIO) -> AbstractContextManager[BinaryIO]:
        return gzip.GzipFile(fileobj=raw, mode="wb", compresslevel=self._compresslevel)

    def wrap_reader(self, raw: BinaryIO) -> AbstractContextManager[BinaryIO]:
        return gzip.GzipFile(fileobj=raw, mode="rb")
