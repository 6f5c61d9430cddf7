"""Fluent builder for record type descriptions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Self

from .schema_models import (
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


class TypeDescriptionBuilder:
    """Collects field declarations in order and produces a TypeDescription.

    Example:
      person = (
          TypeDescriptionBuilder("Person")
          .text("first_name")
          .integer("age")
          .optional("nickname", text())
          .build()
      )
    """

    def __init__(
        self,
        name: str,
        *,
        factory: Callable[[], Any] | None = None,
        abstract: bool = False,
    ) -> None:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Type name must be a non-empty string.")
        self._name = name
        self._factory = factory
        self._abstract = abstract
        self._fields: list[FieldDeclaration] = []

    def field(
        self,
        name: str,
        shape: ValueShape,
        *,
        role: MemberRole = MemberRole.PROPERTY,
        include: bool | None = None,
    ) -> Self:
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Type '{self._name}': field names must be non-empty strings.")
        self._fields.append(FieldDeclaration(name=name, shape=shape, role=role, include=include))
        return self

    def text(self, name: str, **flags: Any) -> Self:
        return self.field(name, text(), **flags)

    def boolean(self, name: str, **flags: Any) -> Self:
        return self.field(name, scalar(ScalarType.BOOLEAN), **flags)

    def integer(self, name: str, **flags: Any) -> Self:
        return self.field(name, scalar(ScalarType.INTEGER), **flags)

    def floating(self, name: str, **flags: Any) -> Self:
        return self.field(name, scalar(ScalarType.FLOAT), **flags)

    def decimal(self, name: str, **flags: Any) -> Self:
        return self.field(name, scalar(ScalarType.DECIMAL), **flags)

    def nested(self, name: str, record: TypeDescription | str, **flags: Any) -> Self:
        return self.field(name, nested(record), **flags)

    def collection(self, name: str, element: ValueShape, **flags: Any) -> Self:
        return self.field(name, collection_of(element), **flags)

    def optional(self, name: str, element: ValueShape, **flags: Any) -> Self:
        return self.field(name, optional(element), **flags)

    def build(self) -> TypeDescription:
        return TypeDescription(
            name=self._name,
            fields=tuple(self._fields),
            factory=self._factory,
            abstract=self._abstract,
        )
