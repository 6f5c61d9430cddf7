"""Type description builder tests."""

from __future__ import annotations

import pytest
from simple_record_codec.schema_reflection import (
    FieldKind,
    MemberRole,
    ScalarType,
    TypeDescriptionBuilder,
    text,
)


def test_builder_keeps_declaration_order_and_flags() -> None:
    description = (
        TypeDescriptionBuilder("Person")
        .text("first_name")
        .integer("age")
        .decimal("balance")
        .optional("nickname", text())
        .text("secret", role=MemberRole.FIELD, include=True)
        .build()
    )

    assert description.name == "Person"
    assert [field.name for field in description.fields] == [
        "first_name",
        "age",
        "balance",
        "nickname",
        "secret",
    ]
    assert description.fields[1].shape.scalar == ScalarType.INTEGER
    assert description.fields[3].shape.kind == FieldKind.OPTIONAL
    assert description.fields[4].role == MemberRole.FIELD
    assert description.fields[4].include is True


def test_builder_rejects_empty_names() -> None:
    with pytest.raises(ValueError):
        TypeDescriptionBuilder(" ")
    with pytest.raises(ValueError, match="field names must be non-empty"):
        TypeDescriptionBuilder("Person").text("")


def test_descriptions_built_twice_compare_equal() -> None:
    first = TypeDescriptionBuilder("Tag").text("label").build()
    second = TypeDescriptionBuilder("Tag").text("label").build()

    assert first == second
    assert hash(first) == hash(second)
