"""Record storage exports."""

from .filesystem_provider import (
    FilesystemEntry,
    FilesystemProvider,
    LocalFilesystemProvider,
    StorageError,
)
from .record_store import RecordStore
from .storage_outcomes import StorageOutcome, StorageStatus
from .stream_transforms import GzipTransform, IdentityTransform, StreamTransform

__all__ = [
    "FilesystemEntry",
    "FilesystemProvider",
    "GzipTransform",
    "IdentityTransform",
    "LocalFilesystemProvider",
    "RecordStore",
    "StorageError",
    "StorageOutcome",
    "StorageStatus",
    "StreamTransform",
]
