"""Process-wide cache of reflected record schemas."""

from __future__ import annotations

import threading
from collections.abc import Mapping

from .schema_models import RecordSchema, ReflectionOptions

CacheKey = tuple[str, ReflectionOptions]


class SchemaCache:
    """Read-mostly schema cache.

    Readers take no lock: every write swaps in a fresh immutable snapshot.
    Writers are serialized by a single insertion lock, and the first insert for
    a key wins; an entry is only ever replaced wholesale through `replace`.
    """

    def __init__(self) -> None:
        self._entries: Mapping[CacheKey, RecordSchema] = {}
        self._insert_lock = threading.Lock()

    def get(self, type_name: str, options: ReflectionOptions) -> RecordSchema | None:
        return self._entries.get((type_name, options))

    def require(self, type_name: str, options: ReflectionOptions) -> RecordSchema:
        """Return the cached schema or raise KeyError naming the missing type."""
        schema = self.get(type_name, options)
        if schema is None:
            raise KeyError(f"No schema cached for type '{type_name}'.")
        return schema

    def insert_if_absent(self, schema: RecordSchema) -> RecordSchema:
        """Insert `schema` unless its key is already cached; return the cached entry."""
        key = (schema.type_name, schema.options)
        with self._insert_lock:
            existing = self._entries.get(key)
            if existing is not None:
                return existing
            self._entries = {**self._entries, key: schema}
            return schema

    def replace(self, schema: RecordSchema) -> RecordSchema:
        """Replace the entry for a redefined type."""
        key = (schema.type_name, schema.options)
        with self._insert_lock:
            self._entries = {**self._entries, key: schema}
        return schema

    def clear(self) -> None:
        with self._insert_lock:
            self._entries = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


DEFAULT_SCHEMA_CACHE = SchemaCache()
