"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from simple_record_codec.naming_policies import resolve_naming_policy
from simple_record_codec.schema_reflection import ReflectionOptions, TypeDescription
from simple_record_codec.structured_codec import DEFAULT_MAX_DEPTH


@dataclass(frozen=True)
class CodecSettings:
    """Normalized codec settings."""

    naming_policy: str
    include_all_fields: bool
    case_insensitive_lookup: bool
    strict: bool
    indent: int
    max_depth: int = DEFAULT_MAX_DEPTH

    def reflection_options(self) -> ReflectionOptions:
        return ReflectionOptions(
            include_all_fields=self.include_all_fields,
            naming_policy=resolve_naming_policy(self.naming_policy),
            case_insensitive_lookup=self.case_insensitive_lookup,
        )


@dataclass(frozen=True)
class StorageSettings:
    """Record store location and stream transform."""

    root: Path
    compress: bool


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    codec: CodecSettings
    storage: StorageSettings
    types: Mapping[str, TypeDescription]
