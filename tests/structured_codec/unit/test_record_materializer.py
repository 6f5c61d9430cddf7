"""Record materializer tests."""

from __future__ import annotations

import pytest
from simple_record_codec.naming_policies import camel_case
from simple_record_codec.schema_reflection import (
    ReflectionOptions,
    SchemaCache,
    TypeDescriptionBuilder,
    build_schema,
    nested,
    text,
)
from simple_record_codec.structured_codec import (
    MissingFieldError,
    TypeMismatchError,
    decode_text,
    materialize,
)
from simple_record_codec.value_nodes import BoolNode, NumberNode, RecordNode, TextNode


class Person:
    def __init__(self) -> None:
        self.first_name = ""
        self.age = 0
        self.nickname: str | None = "unset"


def _person_schema(cache: SchemaCache):
    description = (
        TypeDescriptionBuilder("Person", factory=Person)
        .text("first_name")
        .integer("age")
        .optional("nickname", text())
        .build()
    )
    return build_schema(description, ReflectionOptions(naming_policy=camel_case), cache=cache)


def test_factory_types_are_instantiated_and_populated() -> None:
    cache = SchemaCache()
    schema = _person_schema(cache)
    node = decode_text(schema, '{firstName: "Alice", age: 30}', cache=cache)

    person = materialize(schema, node, cache=cache)

    assert isinstance(person, Person)
    assert (person.first_name, person.age, person.nickname) == ("Alice", 30, None)


def test_types_without_factory_become_dicts_keyed_by_internal_name() -> None:
    cache = SchemaCache()
    address = TypeDescriptionBuilder("Address").text("post_code").build()
    description = (
        TypeDescriptionBuilder("Person")
        .nested("home_address", address)
        .collection("previous", nested("Address"))
        .build()
    )
    schema = build_schema(description, ReflectionOptions(naming_policy=camel_case), cache=cache)
    node = decode_text(
        schema,
        '{homeAddress: {postCode: "0150"}, previous: [{postCode: "5003"}], extra: 1}',
        cache=cache,
    )

    assert materialize(schema, node, cache=cache) == {
        "home_address": {"post_code": "0150"},
        "previous": [{"post_code": "5003"}],
    }


def test_booleans_do_not_materialize_as_numbers() -> None:
    cache = SchemaCache()
    node = RecordNode(fields=(("firstName", TextNode("A")), ("age", BoolNode(True))))

    with pytest.raises(TypeMismatchError) as exc_info:
        materialize(_person_schema(cache), node, cache=cache)

    assert exc_info.value.path == "age"


def test_missing_nodes_fail() -> None:
    cache = SchemaCache()
    node = RecordNode(fields=(("firstName", TextNode("A")), ("age", NumberNode(1))))

    with pytest.raises(MissingFieldError, match="nickname"):
        materialize(_person_schema(cache), node, cache=cache)
