"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from simple_record_codec.naming_policies import NAMING_POLICIES
from simple_record_codec.schema_reflection import (
    FieldDeclaration,
    MemberRole,
    ScalarType,
    TypeDescription,
    ValueShape,
    collection_of,
    nested,
    optional,
    scalar,
    text,
)

from simple_record_codec.structured_codec import DEFAULT_MAX_DEPTH

from .runtime_settings import CodecSettings, Configuration, StorageSettings

_SCALAR_TYPE_NAMES = {scalar_type.value: scalar_type for scalar_type in ScalarType}
_WRAPPER_KEYS = ("nested", "collection", "optional")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text_content = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text_content)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    codec = _parse_codec_section(parsed.get("codec"))
    storage = _parse_storage_section(parsed.get("storage"), path.parent)
    types = _parse_types_section(parsed.get("types"))

    return Configuration(path=path, codec=codec, storage=storage, types=types)


def _parse_codec_section(value: Any) -> CodecSettings:
    section = _optional_mapping(value, "codec")
    naming_policy = _require_non_empty_string(
        section.get("naming_policy", "identity"), "codec.naming_policy"
    )
    if naming_policy not in NAMING_POLICIES:
        available = ", ".join(sorted(NAMING_POLICIES))
        raise ConfigurationError(
            f"codec.naming_policy '{naming_policy}' is unknown. Expected one of: {available}."
        )
    indent = _require_int(section.get("indent", 2), "codec.indent")
    if indent < 0:
        raise ConfigurationError("codec.indent must not be negative.")
    max_depth = _require_int(section.get("max_depth", DEFAULT_MAX_DEPTH), "codec.max_depth")
    if max_depth < 1:
        raise ConfigurationError("codec.max_depth must be at least 1.")
    return CodecSettings(
        naming_policy=naming_policy,
        include_all_fields=_require_bool(
            section.get("include_all_fields", False), "codec.include_all_fields"
        ),
        case_insensitive_lookup=_require_bool(
            section.get("case_insensitive_lookup", False), "codec.case_insensitive_lookup"
        ),
        strict=_require_bool(section.get("strict", False), "codec.strict"),
        indent=indent,
        max_depth=max_depth,
    )


def _parse_storage_section(value: Any, base_path: Path) -> StorageSettings:
    section = _optional_mapping(value, "storage")
    root = _require_non_empty_string(section.get("root", "records"), "storage.root")
    compress = _require_bool(section.get("compress", False), "storage.compress")
    return StorageSettings(root=_resolve_path(base_path, root), compress=compress)


def _parse_types_section(value: Any) -> dict[str, TypeDescription]:
    if not isinstance(value, Mapping) or not value:
        raise ConfigurationError("Configuration section 'types' must declare at least one type.")

    types: dict[str, TypeDescription] = {}
    for type_name, definition in value.items():
        name = _require_non_empty_string(type_name, "types key")
        types[name] = _parse_type_definition(name, definition)

    for description in types.values():
        for index, declaration in enumerate(description.fields):
            reference = _nested_reference(declaration.shape)
            if reference is not None and reference not in types:
                raise ConfigurationError(
                    f"types.{description.name}.fields[{index}].type references "
                    f"undeclared type '{reference}'."
                )
    return types


def _parse_type_definition(type_name: str, definition: Any) -> TypeDescription:
    label = f"types.{type_name}"
    section = _require_mapping(definition, label)
    raw_fields = section.get("fields")
    if isinstance(raw_fields, (str, bytes)) or not isinstance(raw_fields, Sequence):
        raise ConfigurationError(f"{label}.fields must be a list of field declarations.")
    fields = tuple(
        _parse_field_declaration(item, f"{label}.fields[{index}]")
        for index, item in enumerate(raw_fields)
    )
    abstract = _require_bool(section.get("abstract", False), f"{label}.abstract")
    return TypeDescription(name=type_name, fields=fields, abstract=abstract)


def _parse_field_declaration(value: Any, label: str) -> FieldDeclaration:
    entry = _require_mapping(value, label)
    name = _require_non_empty_string(entry.get("name"), f"{label}.name")
    if "type" not in entry:
        raise ConfigurationError(f"{label}.type is required.")
    shape = _parse_shape(entry["type"], f"{label}.type")
    role_name = _require_non_empty_string(entry.get("member", "property"), f"{label}.member")
    try:
        role = MemberRole(role_name.lower())
    except ValueError as exc:
        raise ConfigurationError(f"{label}.member must be 'property' or 'field'.") from exc
    include = entry.get("include")
    if include is not None:
        include = _require_bool(include, f"{label}.include")
    return FieldDeclaration(name=name, shape=shape, role=role, include=include)


def _parse_shape(value: Any, label: str) -> ValueShape:
    if isinstance(value, str):
        type_name = value.strip().lower()
        if type_name in {"string", "text"}:
            return text()
        if type_name in _SCALAR_TYPE_NAMES:
            return scalar(_SCALAR_TYPE_NAMES[type_name])
        raise ConfigurationError(f"{label} has unknown type '{value}'.")

    section = _require_mapping(value, label)
    keys = [key for key in _WRAPPER_KEYS if key in section]
    if len(keys) != 1 or len(section) != 1:
        raise ConfigurationError(
            f"{label} must be a type name or exactly one of: {', '.join(_WRAPPER_KEYS)}."
        )
    key = keys[0]
    if key == "nested":
        return nested(_require_non_empty_string(section[key], f"{label}.nested"))
    element = _parse_shape(section[key], f"{label}.{key}")
    if key == "collection":
        return collection_of(element)
    return optional(element)


def _nested_reference(shape: ValueShape | None) -> str | None:
    while shape is not None:
        if shape.record_name is not None:
            return shape.record_name
        shape = shape.element
    return None


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    return _require_mapping(value, section_name)


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    return value
