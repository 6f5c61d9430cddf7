"""Schema reflection service."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from .schema_cache import DEFAULT_SCHEMA_CACHE, SchemaCache
from .schema_models import (
    FieldDescriptor,
    FieldKind,
    MemberRole,
    RecordSchema,
    ReflectionOptions,
    TypeDescription,
    ValueShape,
)


class SchemaReflectionError(Exception):
    """Raised when a type description cannot be reflected into a schema."""


class DuplicateWireNameError(SchemaReflectionError):
    """Raised when two fields collapse to the same wire-name under the naming policy."""

    def __init__(self, type_name: str, wire_name: str, first: str, second: str) -> None:
        super().__init__(
            f"Type '{type_name}': fields '{first}' and '{second}' both map to "
            f"wire-name '{wire_name}'."
        )
        self.type_name = type_name
        self.wire_name = wire_name
        self.field_names = (first, second)


class UnconstructibleTypeError(SchemaReflectionError):
    """Raised when a type has no zero-argument construction path the codec can use."""

    def __init__(self, type_name: str) -> None:
        super().__init__(
            f"Type '{type_name}' is abstract and declares no factory; records cannot be built."
        )
        self.type_name = type_name


class UnresolvedTypeReferenceError(SchemaReflectionError):
    """Raised when a nested field references a type name that was never described."""

    def __init__(self, type_name: str, field_name: str, reference: str) -> None:
        super().__init__(
            f"Type '{type_name}': field '{field_name}' references unknown type '{reference}'."
        )
        self.type_name = type_name
        self.field_name = field_name
        self.reference = reference


def build_schema(
    description: TypeDescription,
    options: ReflectionOptions | None = None,
    *,
    catalog: Mapping[str, TypeDescription] | None = None,
    cache: SchemaCache | None = None,
) -> RecordSchema:
    """Reflect `description` and every type it reaches into cached record schemas.

    Nested types are resolved from inline descriptions, from `catalog` by name,
    or from schemas already cached under the same options. Nothing is cached
    unless the whole reachable set reflects successfully.

    Raises:
      DuplicateWireNameError: If two fields of one type share a wire-name.
      UnconstructibleTypeError: If an abstract type declares no factory.
      UnresolvedTypeReferenceError: If a nested type name cannot be resolved.
    """
    resolved_options = options or ReflectionOptions()
    resolved_cache = DEFAULT_SCHEMA_CACHE if cache is None else cache
    known: dict[str, TypeDescription] = dict(catalog or {})
    known[description.name] = description

    built: dict[str, RecordSchema] = {}
    pending = [description]
    while pending:
        current = pending.pop()
        if current.name in built:
            continue
        cached = resolved_cache.get(current.name, resolved_options)
        if cached is not None and cached.description == current:
            built[current.name] = cached
            continue
        built[current.name] = _reflect(current, resolved_options)
        for field_name, reference in _nested_references(current):
            if isinstance(reference, TypeDescription):
                known.setdefault(reference.name, reference)
                pending.append(known[reference.name])
            elif reference in known:
                pending.append(known[reference])
            elif resolved_cache.get(reference, resolved_options) is None:
                raise UnresolvedTypeReferenceError(current.name, field_name, reference)

    for schema in built.values():
        cached = resolved_cache.get(schema.type_name, resolved_options)
        if cached is None:
            resolved_cache.insert_if_absent(schema)
        elif cached is not schema and cached.description != schema.description:
            resolved_cache.replace(schema)
    return resolved_cache.require(description.name, resolved_options)


def _reflect(description: TypeDescription, options: ReflectionOptions) -> RecordSchema:
    if description.abstract and description.factory is None:
        raise UnconstructibleTypeError(description.name)

    descriptors: list[FieldDescriptor] = []
    claimed: dict[str, str] = {}
    for declaration in description.fields:
        wire_name = options.naming_policy(declaration.name)
        key = wire_name.casefold() if options.case_insensitive_lookup else wire_name
        if key in claimed:
            raise DuplicateWireNameError(
                description.name, wire_name, claimed[key], declaration.name
            )
        claimed[key] = declaration.name
        descriptors.append(
            FieldDescriptor(
                name=declaration.name,
                wire_name=wire_name,
                kind=declaration.shape.kind,
                shape=declaration.shape,
                included=_is_included(declaration.role, declaration.include, options),
            )
        )
    return RecordSchema(
        type_name=description.name,
        options=options,
        fields=tuple(descriptors),
        description=description,
    )


def _is_included(role: MemberRole, include: bool | None, options: ReflectionOptions) -> bool:
    if include is not None:
        return include
    return role == MemberRole.PROPERTY or options.include_all_fields


def _nested_references(
    description: TypeDescription,
) -> Iterator[tuple[str, TypeDescription | str]]:
    for declaration in description.fields:
        shape: ValueShape | None = declaration.shape
        while shape is not None:
            if shape.kind == FieldKind.NESTED and shape.record is not None:
                yield declaration.name, shape.record
            shape = shape.element
