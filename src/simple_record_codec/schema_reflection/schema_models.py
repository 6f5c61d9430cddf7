"""Schema reflection entities."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from simple_record_codec.naming_policies import NamingPolicy, identity

_MISSING = object()


class FieldKind(str, Enum):
    """Kind of value a field holds on the wire."""

    SCALAR = "scalar"
    STRING = "string"
    NESTED = "nested"
    COLLECTION = "collection"
    OPTIONAL = "optional"


class ScalarType(str, Enum):
    """Declared representation of a scalar field."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"


class MemberRole(str, Enum):
    """Whether a member is a property (included by default) or a plain field (opt-in)."""

    PROPERTY = "property"
    FIELD = "field"


@dataclass(frozen=True)
class ValueShape:
    """Recursive declaration of the type of one value.

    NESTED shapes reference their record either inline (a TypeDescription) or by
    type name, which is how self-referencing and mutually recursive types are
    declared. COLLECTION and OPTIONAL shapes carry the shape of their element.
    """

    kind: FieldKind
    scalar: ScalarType | None = None
    record: TypeDescription | str | None = None
    element: ValueShape | None = None

    def __post_init__(self) -> None:
        if self.kind == FieldKind.SCALAR and self.scalar is None:
            raise ValueError("Scalar shapes require a scalar type.")
        if self.kind == FieldKind.NESTED and self.record is None:
            raise ValueError("Nested shapes require a record reference.")
        if self.kind in {FieldKind.COLLECTION, FieldKind.OPTIONAL} and self.element is None:
            raise ValueError(f"{self.kind.value.capitalize()} shapes require an element shape.")

    @property
    def record_name(self) -> str | None:
        """Type name of the referenced record for NESTED shapes."""
        if isinstance(self.record, TypeDescription):
            return self.record.name
        return self.record

    def describe(self) -> str:
        """Short human-readable rendering used in diagnostics."""
        if self.kind == FieldKind.SCALAR and self.scalar is not None:
            return self.scalar.value
        if self.kind == FieldKind.NESTED:
            return f"record {self.record_name}"
        if self.element is not None:
            return f"{self.kind.value} of {self.element.describe()}"
        return self.kind.value


def scalar(scalar_type: ScalarType) -> ValueShape:
    return ValueShape(kind=FieldKind.SCALAR, scalar=scalar_type)


def text() -> ValueShape:
    return ValueShape(kind=FieldKind.STRING)


def nested(record: TypeDescription | str) -> ValueShape:
    return ValueShape(kind=FieldKind.NESTED, record=record)


def collection_of(element: ValueShape) -> ValueShape:
    return ValueShape(kind=FieldKind.COLLECTION, element=element)


def optional(element: ValueShape) -> ValueShape:
    return ValueShape(kind=FieldKind.OPTIONAL, element=element)


@dataclass(frozen=True)
class FieldDeclaration:
    """One member declared on a record type.

    `include` is the explicit inclusion marker; `None` defers to the member
    role and the reflection options.
    """

    name: str
    shape: ValueShape
    role: MemberRole = MemberRole.PROPERTY
    include: bool | None = None


@dataclass(frozen=True)
class TypeDescription:
    """Caller-supplied description of a record type."""

    name: str
    fields: tuple[FieldDeclaration, ...]
    factory: Callable[[], Any] | None = field(default=None, compare=False)
    abstract: bool = False


@dataclass(frozen=True)
class ReflectionOptions:
    """Options applied when reflecting a type description into a schema."""

    include_all_fields: bool = False
    naming_policy: NamingPolicy = identity
    case_insensitive_lookup: bool = False


@dataclass(frozen=True)
class FieldDescriptor:
    """Resolved field of a record schema."""

    name: str
    wire_name: str
    kind: FieldKind
    shape: ValueShape
    included: bool

    def read(self, record: Any) -> Any:
        """Return this field's value from a mapping or attribute-bearing record.

        Returns the module-level missing sentinel when the record lacks the field.
        """
        if isinstance(record, Mapping):
            return record.get(self.name, _MISSING)
        return getattr(record, self.name, _MISSING)


def is_missing(value: Any) -> bool:
    """Return True when `value` is the sentinel produced by FieldDescriptor.read."""
    return value is _MISSING


@dataclass(frozen=True)
class RecordSchema:
    """Ordered, immutable field layout for one record type."""

    type_name: str
    options: ReflectionOptions
    fields: tuple[FieldDescriptor, ...]
    description: TypeDescription
    _lookup: Mapping[str, FieldDescriptor] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        lookup = {
            self.lookup_key(descriptor.wire_name): descriptor
            for descriptor in self.fields
            if descriptor.included
        }
        object.__setattr__(self, "_lookup", lookup)

    @property
    def included_fields(self) -> tuple[FieldDescriptor, ...]:
        return tuple(descriptor for descriptor in self.fields if descriptor.included)

    @property
    def factory(self) -> Callable[[], Any] | None:
        return self.description.factory

    def lookup_key(self, wire_name: str) -> str:
        if self.options.case_insensitive_lookup:
            return wire_name.casefold()
        return wire_name

    def field_for_wire_name(self, wire_name: str) -> FieldDescriptor | None:
        """Reverse lookup from an encountered wire-name to an included field."""
        return self._lookup.get(self.lookup_key(wire_name))

    def accessors(self) -> list[tuple[str, Callable[[Any], Any]]]:
        """Ordered `(wire_name, accessor)` pairs for every included field."""
        return [(descriptor.wire_name, descriptor.read) for descriptor in self.included_fields]
