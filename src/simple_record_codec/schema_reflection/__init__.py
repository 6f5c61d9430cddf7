"""Schema reflection exports."""

from .schema_builder import (
    DuplicateWireNameError,
    SchemaReflectionError,
    UnconstructibleTypeError,
    UnresolvedTypeReferenceError,
    build_schema,
)
from .schema_cache import DEFAULT_SCHEMA_CACHE, SchemaCache
from .schema_models import (
    FieldDeclaration,
    FieldDescriptor,
    FieldKind,
    MemberRole,
    RecordSchema,
    ReflectionOptions,
    ScalarType,
    TypeDescription,
    ValueShape,
    collection_of,
    nested,
    optional,
    scalar,
    text,
)
from .type_description_builder import TypeDescriptionBuilder

__all__ = [
    "DEFAULT_SCHEMA_CACHE",
    "DuplicateWireNameError",
    "FieldDeclaration",
    "FieldDescriptor",
    "FieldKind",
    "MemberRole",
    "RecordSchema",
    "ReflectionOptions",
    "ScalarType",
    "SchemaCache",
    "SchemaReflectionError",
    "TypeDescription",
    "TypeDescriptionBuilder",
    "UnconstructibleTypeError",
    "UnresolvedTypeReferenceError",
    "ValueShape",
    "build_schema",
    "collection_of",
    "nested",
    "optional",
    "scalar",
    "text",
]
