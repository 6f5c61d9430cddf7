"""Value node entity tests."""

from __future__ import annotations

from decimal import Decimal

from simple_record_codec.value_nodes import (
    NULL,
    BoolNode,
    CollectionNode,
    NodeKind,
    NumberNode,
    RecordNode,
    TextNode,
    to_plain,
)


def test_nodes_compare_structurally() -> None:
    first = RecordNode(fields=(("name", TextNode("Ada")), ("age", NumberNode(36))))
    second = RecordNode(fields=(("name", TextNode("Ada")), ("age", NumberNode(36))))

    assert first == second
    assert first != RecordNode(fields=(("age", NumberNode(36)), ("name", TextNode("Ada"))))


def test_bool_and_number_nodes_are_distinct() -> None:
    assert BoolNode(True) != NumberNode(1)


def test_node_kinds() -> None:
    assert NULL.kind == NodeKind.NULL
    assert CollectionNode(items=()).kind == NodeKind.COLLECTION
    assert RecordNode(fields=()).kind == NodeKind.RECORD


def test_record_node_lookup_by_wire_name() -> None:
    node = RecordNode(fields=(("name", TextNode("Ada")),))

    assert node.get("name") == TextNode("Ada")
    assert node.get("missing") is None
    assert node.wire_names == ("name",)


def test_to_plain_includes_passthrough_fields() -> None:
    node = RecordNode(
        fields=(
            ("name", TextNode("Ada")),
            ("tags", CollectionNode(items=(TextNode("math"), NULL))),
        ),
        passthrough=(("legacyId", NumberNode(Decimal("7"))),),
    )

    assert to_plain(node) == {"name": "Ada", "tags": ["math", None], "legacyId": Decimal("7")}
