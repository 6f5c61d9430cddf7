"""Record storage domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class StorageStatus(str, Enum):
    """Record store operation outcome status."""

    SAVED = "saved"
    LOADED = "loaded"
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class StorageOutcome:
    """Outcome of one record store operation on one path."""

    path: str
    status: StorageStatus
    value: Any
    error: Exception | None

    @property
    def ok(self) -> bool:
        return self.status in {StorageStatus.SAVED, StorageStatus.LOADED, StorageStatus.DELETED}

    @staticmethod
    def saved(path: str, byte_count: int) -> StorageOutcome:
        return StorageOutcome(path=path, status=StorageStatus.SAVED, value=byte_count, error=None)

    @staticmethod
    def loaded(path: str, node: Any) -> StorageOutcome:
        return StorageOutcome(path=path, status=StorageStatus.LOADED, value=node, error=None)

    @staticmethod
    def deleted(path: str) -> StorageOutcome:
        return StorageOutcome(path=path, status=StorageStatus.DELETED, value=None, error=None)

    @staticmethod
    def not_found(path: str) -> StorageOutcome:
        return StorageOutcome(path=path, status=StorageStatus.NOT_FOUND, value=None, error=None)

    @staticmethod
    def failed(path: str, error: Exception) -> StorageOutcome:
        return StorageOutcome(path=path, status=StorageStatus.FAILED, value=None, error=error)
