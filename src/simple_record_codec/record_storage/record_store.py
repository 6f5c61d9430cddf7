"""Record store service persisting encoded records through a filesystem provider."""

from __future__ import annotations

import io
import logging
import zlib
from typing import Any

from simple_record_codec.schema_reflection import RecordSchema, SchemaCache
from simple_record_codec.structured_codec import DEFAULT_MAX_DEPTH, CodecError, decode, encode

from .filesystem_provider import FilesystemProvider, StorageError
from .storage_outcomes import StorageOutcome
from .stream_transforms import IdentityTransform, StreamTransform

_LOGGER = logging.getLogger("simple_record_codec.storage")
_LOGGER.addHandler(logging.NullHandler())


class RecordStore:
    """Saves, loads, lists and deletes records stored one per path.

    Encoding runs into an in-memory buffer wrapped by the stream transform and
    only a complete payload is handed to the provider, so a failed encode never
    leaves a partial file behind. Expected conditions come back as outcomes:
    a missing path is NOT_FOUND, codec and filesystem errors are FAILED.
    """

    def __init__(
        self,
        provider: FilesystemProvider,
        *,
        transform: StreamTransform | None = None,
        cache: SchemaCache | None = None,
        indent: int = 2,
        strict: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._provider = provider
        self._transform = transform or IdentityTransform()
        self._cache = cache
        self._indent = indent
        self._strict = strict
        self._max_depth = max_depth

    def save(self, path: str, schema: RecordSchema, value: Any) -> StorageOutcome:
        buffer = io.BytesIO()
        try:
            with self._transform.wrap_writer(buffer) as stream:
                encode(
                    schema,
                    value,
                    stream,
                    cache=self._cache,
                    indent=self._indent,
                    max_depth=self._max_depth,
                )
            payload = buffer.getvalue()
            self._provider.write(path, payload)
        except (CodecError, StorageError) as exc:
            return StorageOutcome.failed(path, exc)
        except OSError as exc:
            return StorageOutcome.failed(path, StorageError(f"Failed to write {path}: {exc}"))
        _LOGGER.debug(
            "Saved %s record to %s (%d bytes, %s)",
            schema.type_name,
            path,
            len(payload),
            self._transform.name,
        )
        return StorageOutcome.saved(path, len(payload))

    def load(self, path: str, schema: RecordSchema) -> StorageOutcome:
        try:
            if not self._provider.exists(path):
                _LOGGER.debug("No record stored at %s", path)
                return StorageOutcome.not_found(path)
            payload = self._provider.read(path)
            with self._transform.wrap_reader(io.BytesIO(payload)) as stream:
                node = decode(
                    schema,
                    stream,
                    strict=self._strict,
                    cache=self._cache,
                    max_depth=self._max_depth,
                )
        except (CodecError, StorageError) as exc:
            return StorageOutcome.failed(path, exc)
        except (OSError, EOFError, zlib.error) as exc:
            return StorageOutcome.failed(path, StorageError(f"Failed to read {path}: {exc}"))
        _LOGGER.debug("Loaded %s record from %s", schema.type_name, path)
        return StorageOutcome.loaded(path, node)

    def delete(self, path: str) -> StorageOutcome:
        try:
            if not self._provider.exists(path):
                return StorageOutcome.not_found(path)
            self._provider.delete(path, recursive=False)
        except StorageError as exc:
            return StorageOutcome.failed(path, exc)
        except OSError as exc:
            return StorageOutcome.failed(path, StorageError(f"Failed to delete {path}: {exc}"))
        _LOGGER.debug("Deleted record at %s", path)
        return StorageOutcome.deleted(path)

    def list_records(self, directory: str = "") -> list[str]:
        """Return the paths of records stored directly under `directory`.

        Raises:
          StorageError: If `directory` escapes the storage root, is not a directory,
            or cannot be read.
        """
        try:
            if not self._provider.exists(directory):
                return []
            entries = self._provider.enumerate(directory)
        except OSError as exc:
            raise StorageError(f"Failed to list {directory or '.'}: {exc}") from exc
        return [entry.path for entry in entries if not entry.is_directory]
