"""Schema-driven decoding of wire text into value nodes."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal
from typing import Protocol

from simple_record_codec.schema_reflection import (
    DEFAULT_SCHEMA_CACHE,
    FieldKind,
    RecordSchema,
    ScalarType,
    SchemaCache,
    ValueShape,
)
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
    DuplicateFieldError,
    IncompleteInputError,
    MalformedInputError,
    MissingFieldError,
    NestingDepthError,
    TypeMismatchError,
    UnknownFieldError,
    child_path,
    item_path,
)
from .codec_limits import DEFAULT_MAX_DEPTH, checked_float, decimal_within_integer_limit
from .wire_scanner import Token, TokenKind, WireScanner

_BOOLEAN_WORDS = {"true": True, "false": False}
_NUMBER_WORDS = {"nan", "inf"}


class ByteReader(Protocol):
    """Binary source the decoder reads from."""

    def read(self, size: int = -1, /) -> bytes: ...


def decode(
    schema: RecordSchema,
    reader: ByteReader,
    *,
    strict: bool = False,
    cache: SchemaCache | None = None,
    encoding: str = "utf-8",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> RecordNode:
    """Read all of `reader` and decode it as a `schema` record."""
    payload = reader.read()
    try:
        text = payload.decode(encoding)
    except UnicodeDecodeError as exc:
        prefix = payload[: exc.start].decode(encoding, errors="replace")
        line = prefix.count("\n") + 1
        column = len(prefix) - prefix.rfind("\n")
        raise MalformedInputError(
            f"input is not valid {encoding}", line=line, column=column
        ) from exc
    return decode_text(schema, text, strict=strict, cache=cache, max_depth=max_depth)


def decode_text(
    schema: RecordSchema,
    text: str,
    *,
    strict: bool = False,
    cache: SchemaCache | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> RecordNode:
    """Decode wire text as a `schema` record.

    Fields come back in schema order whatever their order in the input. In
    non-strict mode unknown wire-names are kept as passthrough children; in
    strict mode they fail the decode. Any error aborts the whole decode.

    Raises:
      UnknownFieldError: Strict mode only, for a wire-name the schema lacks.
      TypeMismatchError: If a value's kind differs from the declared kind.
      MissingFieldError: If a required field is absent.
      DuplicateFieldError: If a record names the same field twice.
      NestingDepthError: If records and collections nest deeper than `max_depth`.
      MalformedInputError: If the text does not follow the wire grammar.
      IncompleteInputError: If the text ends inside a structure.
    """
    scanner = WireScanner(text)
    decoder = _RecordDecoder(
        scanner,
        DEFAULT_SCHEMA_CACHE if cache is None else cache,
        strict=strict,
        max_depth=max_depth,
    )
    node = decoder.record(schema, ROOT_PATH)
    trailing = scanner.next()
    if trailing.kind != TokenKind.END:
        raise MalformedInputError(
            f"unexpected {trailing.lexeme!r} after the root record",
            line=trailing.line,
            column=trailing.column,
        )
    return node


class _RecordDecoder:
    """Recursive descent: record open, fields until close, recursing for nested values."""

    def __init__(
        self, scanner: WireScanner, cache: SchemaCache, *, strict: bool, max_depth: int
    ) -> None:
        self._scanner = scanner
        self._cache = cache
        self._strict = strict
        self._max_depth = max_depth
        self._depth = 0

    @contextmanager
    def _nested(self, path: str) -> Iterator[None]:
        """Track one record or collection level, failing past the depth limit."""
        if self._depth >= self._max_depth:
            raise NestingDepthError(path, self._max_depth)
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def record(self, schema: RecordSchema, path: str) -> RecordNode:
        with self._nested(path):
            self._scanner.expect(TokenKind.LBRACE, path=path)
            values: dict[str, ValueNode] = {}
            passthrough: list[tuple[str, ValueNode]] = []
            unknown_keys: set[str] = set()

            while (wire_name := self._next_field_name(path)) is not None:
                field_path = child_path(path, wire_name)
                descriptor = schema.field_for_wire_name(wire_name)
                if descriptor is None:
                    if self._strict:
                        raise UnknownFieldError(field_path, wire_name, schema.type_name)
                    key = schema.lookup_key(wire_name)
                    if key in unknown_keys:
                        raise DuplicateFieldError(field_path, wire_name)
                    unknown_keys.add(key)
                    passthrough.append((wire_name, self.untyped(field_path)))
                    continue
                if descriptor.name in values:
                    raise DuplicateFieldError(field_path, wire_name)
                values[descriptor.name] = self.value(schema, descriptor.shape, field_path)

        fields: list[tuple[str, ValueNode]] = []
        for descriptor in schema.included_fields:
            node = values.get(descriptor.name)
            if node is None:
                if descriptor.kind != FieldKind.OPTIONAL:
                    raise MissingFieldError(path, descriptor.name)
                node = NULL
            fields.append((descriptor.wire_name, node))
        return RecordNode(fields=tuple(fields), passthrough=tuple(passthrough))

    def value(self, owner: RecordSchema, shape: ValueShape, path: str) -> ValueNode:
        token = self._scanner.peek()
        if token.kind == TokenKind.END:
            raise IncompleteInputError(
                shape.describe(), line=token.line, column=token.column, path=path
            )
        if shape.kind == FieldKind.OPTIONAL and shape.element is not None:
            if token.kind == TokenKind.WORD and token.lexeme == "null":
                self._scanner.next()
                return NULL
            return self.value(owner, shape.element, path)
        if shape.kind == FieldKind.NESTED and shape.record_name is not None:
            if token.kind != TokenKind.LBRACE:
                raise TypeMismatchError(path, shape.describe(), _describe_token(token, path))
            nested_schema = self._cache.require(shape.record_name, owner.options)
            return self.record(nested_schema, path)
        if shape.kind == FieldKind.COLLECTION and shape.element is not None:
            if token.kind != TokenKind.LBRACKET:
                raise TypeMismatchError(path, shape.describe(), _describe_token(token, path))
            return self.collection(owner, shape.element, path)

        self._scanner.next()
        if shape.kind == FieldKind.STRING:
            if token.kind == TokenKind.STRING:
                return TextNode(str(token.value))
            raise TypeMismatchError(path, "text", _describe_token(token, path))
        if shape.kind == FieldKind.SCALAR and shape.scalar is not None:
            return _scalar_node(shape.scalar, token, path)
        raise TypeMismatchError(path, shape.describe(), _describe_token(token, path))

    def collection(self, owner: RecordSchema, element: ValueShape, path: str) -> CollectionNode:
        with self._nested(path):
            self._scanner.expect(TokenKind.LBRACKET, path=path)
            items: list[ValueNode] = []
            while self._has_next_item(path):
                items.append(self.value(owner, element, item_path(path, len(items))))
        return CollectionNode(items=tuple(items))

    def untyped(self, path: str) -> ValueNode:
        """Decode a value the schema knows nothing about, keeping numbers lossless."""
        token = self._scanner.peek()
        if token.kind == TokenKind.LBRACE:
            with self._nested(path):
                self._scanner.next()
                fields: list[tuple[str, ValueNode]] = []
                seen: set[str] = set()
                while (wire_name := self._next_field_name(path)) is not None:
                    field_path = child_path(path, wire_name)
                    if wire_name in seen:
                        raise DuplicateFieldError(field_path, wire_name)
                    seen.add(wire_name)
                    fields.append((wire_name, self.untyped(field_path)))
            return RecordNode(fields=tuple(fields))
        if token.kind == TokenKind.LBRACKET:
            with self._nested(path):
                self._scanner.next()
                items: list[ValueNode] = []
                while self._has_next_item(path):
                    items.append(self.untyped(item_path(path, len(items))))
            return CollectionNode(items=tuple(items))

        self._scanner.next()
        kind = _describe_token(token, path)
        if kind == "null":
            return NULL
        if kind == "boolean":
            return BoolNode(_BOOLEAN_WORDS[token.lexeme])
        if kind == "number":
            return NumberNode(Decimal(token.lexeme))
        return TextNode(str(token.value))

    def _next_field_name(self, path: str) -> str | None:
        """Return the next field name after its colon, or None once the record closes."""
        self._scanner.skip_commas()
        token = self._scanner.next()
        if token.kind == TokenKind.RBRACE:
            return None
        if token.kind == TokenKind.END:
            raise IncompleteInputError(
                "a field name or '}'", line=token.line, column=token.column, path=path
            )
        if token.kind not in {TokenKind.WORD, TokenKind.STRING}:
            raise MalformedInputError(
                f"expected a field name but found {token.lexeme!r}",
                line=token.line,
                column=token.column,
                path=path,
            )
        wire_name = str(token.value)
        self._scanner.expect(TokenKind.COLON, path=child_path(path, wire_name))
        return wire_name

    def _has_next_item(self, path: str) -> bool:
        self._scanner.skip_commas()
        token = self._scanner.peek()
        if token.kind == TokenKind.RBRACKET:
            self._scanner.next()
            return False
        if token.kind == TokenKind.END:
            raise IncompleteInputError(
                "a collection item or ']'", line=token.line, column=token.column, path=path
            )
        return True


def _scalar_node(scalar_type: ScalarType, token: Token, path: str) -> BoolNode | NumberNode:
    actual = _describe_token(token, path)
    if scalar_type == ScalarType.BOOLEAN:
        if actual == "boolean":
            return BoolNode(_BOOLEAN_WORDS[token.lexeme])
        raise TypeMismatchError(path, scalar_type.value, actual)
    if actual != "number":
        raise TypeMismatchError(path, scalar_type.value, actual)

    number = Decimal(token.lexeme)
    if scalar_type == ScalarType.INTEGER:
        if not number.is_finite() or number != number.to_integral_value():
            detail = f"non-integral number {token.lexeme}"
            raise TypeMismatchError(path, scalar_type.value, detail)
        if not decimal_within_integer_limit(number):
            detail = f"out-of-range number {token.lexeme}"
            raise TypeMismatchError(path, scalar_type.value, detail)
        return NumberNode(int(number))
    if scalar_type == ScalarType.FLOAT:
        converted = checked_float(number)
        if converted is None:
            detail = f"out-of-range number {token.lexeme}"
            raise TypeMismatchError(path, scalar_type.value, detail)
        return NumberNode(converted)
    return NumberNode(number)


def _describe_token(token: Token, path: str) -> str:
    """Name the kind of value a token starts, or fail on tokens that cannot start one."""
    if token.kind == TokenKind.STRING:
        return "text"
    if token.kind == TokenKind.NUMBER:
        return "number"
    if token.kind == TokenKind.LBRACE:
        return "record"
    if token.kind == TokenKind.LBRACKET:
        return "collection"
    if token.kind == TokenKind.WORD:
        if token.lexeme == "null":
            return "null"
        if token.lexeme in _BOOLEAN_WORDS:
            return "boolean"
        if token.lexeme in _NUMBER_WORDS:
            return "number"
    if token.kind == TokenKind.END:
        raise IncompleteInputError("a value", line=token.line, column=token.column, path=path)
    raise MalformedInputError(
        f"unexpected {token.lexeme!r} where a value was expected",
        line=token.line,
        column=token.column,
        path=path,
    )
