"""Encode/decode round-trip tests across naming policies and layouts."""

from __future__ import annotations

import io
from decimal import Decimal

import pytest
from simple_record_codec.naming_policies import NAMING_POLICIES
from simple_record_codec.schema_reflection import (
    ReflectionOptions,
    SchemaCache,
    TypeDescriptionBuilder,
    build_schema,
    collection_of,
    nested,
    optional,
    text,
)
from simple_record_codec.structured_codec import (
    decode,
    decode_text,
    encode,
    encode_node,
    materialize,
)


def _order_schema(cache: SchemaCache, options: ReflectionOptions):
    line_item = (
        TypeDescriptionBuilder("LineItem")
        .text("product_code")
        .integer("quantity")
        .decimal("unit_price")
        .build()
    )
    order = (
        TypeDescriptionBuilder("Order")
        .text("order_id")
        .boolean("is_paid")
        .floating("discount_ratio")
        .collection("line_items", nested(line_item))
        .optional("shipping_note", text())
        .collection("tag_groups", collection_of(text()))
        .optional("parent_order", nested("Order"))
        .build()
    )
    return build_schema(order, options, cache=cache)


ORDER = {
    "order_id": "A-17",
    "is_paid": True,
    "discount_ratio": 0.25,
    "line_items": [
        {"product_code": "tea \"green\"", "quantity": 2, "unit_price": Decimal("3.50")},
        {"product_code": "mug\nlarge", "quantity": 1, "unit_price": Decimal("12")},
    ],
    "shipping_note": None,
    "tag_groups": [["gift"], [], ["fragile", "ünïcode"]],
    "parent_order": {
        "order_id": "A-16",
        "is_paid": False,
        "discount_ratio": 0.0,
        "line_items": [],
        "shipping_note": "leave at door",
        "tag_groups": [],
        "parent_order": None,
    },
}


@pytest.mark.parametrize("policy_name", sorted(NAMING_POLICIES))
@pytest.mark.parametrize("indent", [0, 2, 4])
def test_decode_of_encode_reproduces_the_value(policy_name: str, indent: int) -> None:
    cache = SchemaCache()
    schema = _order_schema(cache, ReflectionOptions(naming_policy=NAMING_POLICIES[policy_name]))
    buffer = io.BytesIO()

    encode(schema, ORDER, buffer, cache=cache, indent=indent)
    buffer.seek(0)
    node = decode(schema, buffer, strict=True, cache=cache)

    assert materialize(schema, node, cache=cache) == ORDER


def test_camel_case_person_wire_text() -> None:
    cache = SchemaCache()
    description = TypeDescriptionBuilder("Person").text("first_name").integer("age").build()
    options = ReflectionOptions(naming_policy=NAMING_POLICIES["camel_case"])
    schema = build_schema(description, options, cache=cache)
    buffer = io.BytesIO()

    encode(schema, {"first_name": "Alice", "age": 30}, buffer, cache=cache)

    assert buffer.getvalue().decode("utf-8") == '{\n  firstName: "Alice"\n  age: 30\n}\n'
    buffer.seek(0)
    assert materialize(schema, decode(schema, buffer, cache=cache), cache=cache) == {
        "first_name": "Alice",
        "age": 30,
    }


def test_passthrough_fields_survive_a_re_encode() -> None:
    cache = SchemaCache()
    schema = build_schema(TypeDescriptionBuilder("Tag").text("label").build(), cache=cache)
    wire = '{label: "x", "legacy id": 12.50, extra: [true, {a: null}]}'

    node = decode_text(schema, wire, cache=cache)
    buffer = io.BytesIO()
    encode_node(node, buffer, indent=0)

    assert buffer.getvalue() == b'{label: "x", "legacy id": 12.50, extra: [true, {a: null}]}\n'
    assert decode_text(schema, buffer.getvalue().decode("utf-8"), cache=cache) == node


def test_optional_optional_null_round_trips() -> None:
    cache = SchemaCache()
    description = TypeDescriptionBuilder("Box").optional("inner", optional(text())).build()
    schema = build_schema(description, cache=cache)
    buffer = io.BytesIO()

    encode(schema, {"inner": None}, buffer, cache=cache, indent=0)

    assert buffer.getvalue() == b"{inner: null}\n"
