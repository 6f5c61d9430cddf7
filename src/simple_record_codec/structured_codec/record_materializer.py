"""Reconstruction of typed records from decoded value nodes."""

from __future__ import annotations

from typing import Any

from simple_record_codec.schema_reflection import (
    DEFAULT_SCHEMA_CACHE,
    FieldKind,
    RecordSchema,
    ScalarType,
    SchemaCache,
    ValueShape,
)
from simple_record_codec.value_nodes import (
    BoolNode,
    CollectionNode,
    NullNode,
    NumberNode,
    RecordNode,
    TextNode,
    ValueNode,
)

from .codec_errors import ROOT_PATH, MissingFieldError, TypeMismatchError, child_path, item_path


def materialize(
    schema: RecordSchema, node: RecordNode, *, cache: SchemaCache | None = None
) -> Any:
    """Build the record `node` describes.

    Types with a factory are instantiated with it and populated through
    ``setattr``; other types come back as dicts keyed by internal field names.
    Passthrough fields have no internal name and are left out.
    """
    resolved_cache = DEFAULT_SCHEMA_CACHE if cache is None else cache
    return _record(schema, node, ROOT_PATH, resolved_cache)


def _record(schema: RecordSchema, node: ValueNode, path: str, cache: SchemaCache) -> Any:
    if not isinstance(node, RecordNode):
        raise TypeMismatchError(path, f"record {schema.type_name}", node.kind.value)
    values: dict[str, Any] = {}
    for descriptor in schema.included_fields:
        field_path = child_path(path, descriptor.wire_name)
        child = node.get(descriptor.wire_name)
        if child is None:
            raise MissingFieldError(path, descriptor.name)
        values[descriptor.name] = _value(schema, descriptor.shape, child, field_path, cache)

    if schema.factory is None:
        return values
    instance = schema.factory()
    for name, value in values.items():
        setattr(instance, name, value)
    return instance


def _value(
    owner: RecordSchema, shape: ValueShape, node: ValueNode, path: str, cache: SchemaCache
) -> Any:
    if shape.kind == FieldKind.OPTIONAL and shape.element is not None:
        if isinstance(node, NullNode):
            return None
        return _value(owner, shape.element, node, path, cache)
    if shape.kind == FieldKind.NESTED and shape.record_name is not None:
        return _record(cache.require(shape.record_name, owner.options), node, path, cache)
    if shape.kind == FieldKind.COLLECTION and shape.element is not None:
        if not isinstance(node, CollectionNode):
            raise TypeMismatchError(path, shape.describe(), node.kind.value)
        element = shape.element
        return [
            _value(owner, element, item, item_path(path, index), cache)
            for index, item in enumerate(node.items)
        ]
    if shape.kind == FieldKind.STRING and isinstance(node, TextNode):
        return node.value
    if shape.kind == FieldKind.SCALAR and isinstance(node, (BoolNode, NumberNode)):
        if isinstance(node, BoolNode) == (shape.scalar == ScalarType.BOOLEAN):
            return node.value
    raise TypeMismatchError(path, shape.describe(), node.kind.value)
