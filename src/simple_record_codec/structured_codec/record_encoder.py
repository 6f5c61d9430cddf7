"""Record graph encoding service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Set
from decimal import Decimal
from typing import Any, Protocol

from simple_record_codec.schema_reflection import (
    DEFAULT_SCHEMA_CACHE,
    FieldKind,
    RecordSchema,
    ScalarType,
    SchemaCache,
    ValueShape,
)
from simple_record_codec.schema_reflection.schema_models import is_missing
from simple_record_codec.value_nodes import (
    NULL,
    BoolNode,
    CollectionNode,
    NumberNode,
    RecordNode,
    TextNode,
    ValueNode,
)

from .codec_errors import (
    ROOT_PATH,
    CyclicGraphError,
    MissingFieldError,
    NestingDepthError,
    TypeMismatchError,
    child_path,
    item_path,
)
from .codec_limits import DEFAULT_MAX_DEPTH, checked_float, integer_within_limit
from .wire_writer import render_node


class ByteWriter(Protocol):
    """Binary sink the encoder writes to."""

    def write(self, data: bytes, /) -> Any: ...


def encode(
    schema: RecordSchema,
    value: Any,
    writer: ByteWriter,
    *,
    cache: SchemaCache | None = None,
    indent: int = 2,
    encoding: str = "utf-8",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> int:
    """Encode `value` as a `schema` record into `writer` and return the byte count."""
    node = to_value_node(schema, value, cache=cache, max_depth=max_depth)
    return encode_node(node, writer, indent=indent, encoding=encoding)


def encode_node(
    node: ValueNode, writer: ByteWriter, *, indent: int = 2, encoding: str = "utf-8"
) -> int:
    """Write an already built node tree, including any passthrough fields."""
    payload = render_node(node, indent=indent).encode(encoding)
    writer.write(payload)
    return len(payload)


def encode_text(
    schema: RecordSchema,
    value: Any,
    *,
    cache: SchemaCache | None = None,
    indent: int = 2,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    node = to_value_node(schema, value, cache=cache, max_depth=max_depth)
    return render_node(node, indent=indent)


def to_value_node(
    schema: RecordSchema,
    value: Any,
    *,
    cache: SchemaCache | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> RecordNode:
    """Walk `value` depth-first in schema order and return its node tree.

    Raises:
      CyclicGraphError: If a record or collection contains one of its ancestors.
      NestingDepthError: If records and collections nest deeper than `max_depth`.
      MissingFieldError: If a required field is absent from a record.
      TypeMismatchError: If a value does not match its declared kind.
    """
    walker = _GraphWalker(DEFAULT_SCHEMA_CACHE if cache is None else cache, max_depth)
    return walker.record(schema, value, ROOT_PATH)


def describe_value(value: Any) -> str:
    """Name the kind of a Python value in the vocabulary used by codec errors."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "float"
    if isinstance(value, Decimal):
        return "decimal"
    if isinstance(value, str):
        return "text"
    if isinstance(value, (bytes, bytearray)):
        return "bytes"
    if isinstance(value, Mapping):
        return "record"
    if isinstance(value, Set):
        return "set"
    if isinstance(value, Sequence):
        return "collection"
    return f"record {type(value).__name__}"


class _GraphWalker:
    """Recursive walk threading the identities of the records and collections being visited."""

    def __init__(self, cache: SchemaCache, max_depth: int) -> None:
        self._cache = cache
        self._max_depth = max_depth
        self._active: set[int] = set()

    def record(self, schema: RecordSchema, value: Any, path: str) -> RecordNode:
        if _is_atomic(value) or _is_collection(value) or isinstance(value, Set):
            raise TypeMismatchError(path, f"record {schema.type_name}", describe_value(value))
        self._enter(value, path, schema.type_name)
        try:
            fields: list[tuple[str, ValueNode]] = []
            for descriptor in schema.included_fields:
                raw = descriptor.read(value)
                if is_missing(raw):
                    if descriptor.kind != FieldKind.OPTIONAL:
                        raise MissingFieldError(path, descriptor.name)
                    raw = None
                field_path = child_path(path, descriptor.wire_name)
                fields.append(
                    (descriptor.wire_name, self.value(schema, descriptor.shape, raw, field_path))
                )
        finally:
            self._active.discard(id(value))
        return RecordNode(fields=tuple(fields))

    def value(self, owner: RecordSchema, shape: ValueShape, raw: Any, path: str) -> ValueNode:
        if shape.kind == FieldKind.OPTIONAL and shape.element is not None:
            if raw is None:
                return NULL
            return self.value(owner, shape.element, raw, path)
        if shape.kind == FieldKind.STRING:
            if isinstance(raw, str):
                return TextNode(raw)
            raise TypeMismatchError(path, "text", describe_value(raw))
        if shape.kind == FieldKind.SCALAR and shape.scalar is not None:
            return _scalar_node(shape.scalar, raw, path)
        if shape.kind == FieldKind.NESTED and shape.record_name is not None:
            nested_schema = self._cache.require(shape.record_name, owner.options)
            return self.record(nested_schema, raw, path)
        if shape.kind == FieldKind.COLLECTION and shape.element is not None:
            return self.collection(owner, shape.element, raw, path)
        raise TypeMismatchError(path, shape.describe(), describe_value(raw))

    def collection(
        self, owner: RecordSchema, element: ValueShape, raw: Any, path: str
    ) -> CollectionNode:
        if not _is_collection(raw):
            expected = f"collection of {element.describe()}"
            raise TypeMismatchError(path, expected, describe_value(raw))
        self._enter(raw, path, "collection")
        try:
            items = tuple(
                self.value(owner, element, item, item_path(path, index))
                for index, item in enumerate(raw)
            )
        finally:
            self._active.discard(id(raw))
        return CollectionNode(items=items)

    def _enter(self, value: Any, path: str, type_name: str) -> None:
        identity = id(value)
        if identity in self._active:
            raise CyclicGraphError(path, type_name)
        if len(self._active) >= self._max_depth:
            raise NestingDepthError(path, self._max_depth)
        self._active.add(identity)


def _scalar_node(scalar_type: ScalarType, raw: Any, path: str) -> NumberNode | BoolNode:
    if scalar_type == ScalarType.BOOLEAN:
        if isinstance(raw, bool):
            return BoolNode(raw)
    elif isinstance(raw, bool):
        pass
    elif scalar_type == ScalarType.INTEGER:
        if isinstance(raw, int):
            if not integer_within_limit(raw):
                raise TypeMismatchError(path, scalar_type.value, "out-of-range integer")
            return NumberNode(raw)
    elif scalar_type == ScalarType.FLOAT:
        if isinstance(raw, float):
            return NumberNode(raw)
        if isinstance(raw, (int, Decimal)):
            converted = checked_float(raw)
            if converted is None:
                detail = f"{describe_value(raw)} not representable as float"
                raise TypeMismatchError(path, scalar_type.value, detail)
            return NumberNode(converted)
    elif scalar_type == ScalarType.DECIMAL:
        if isinstance(raw, Decimal):
            return NumberNode(raw)
        if isinstance(raw, int):
            return NumberNode(Decimal(raw))
    raise TypeMismatchError(path, scalar_type.value, describe_value(raw))


def _is_atomic(value: Any) -> bool:
    return value is None or isinstance(value, (bool, int, float, Decimal, str, bytes, bytearray))


def _is_collection(value: Any) -> bool:
    # Sets have no stable order, so they are not encodable collections.
    if isinstance(value, (str, bytes, bytearray, Mapping)):
        return False
    return isinstance(value, Sequence)
