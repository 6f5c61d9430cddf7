"""Value node entities."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

Number = int | float | Decimal


class NodeKind(str, Enum):
    """Tag of a value node."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    TEXT = "text"
    RECORD = "record"
    COLLECTION = "collection"


@dataclass(frozen=True)
class NullNode:
    kind = NodeKind.NULL


@dataclass(frozen=True)
class BoolNode:
    value: bool
    kind = NodeKind.BOOL


@dataclass(frozen=True)
class NumberNode:
    value: Number
    kind = NodeKind.NUMBER


@dataclass(frozen=True)
class TextNode:
    value: str
    kind = NodeKind.TEXT


@dataclass(frozen=True)
class RecordNode:
    """Ordered `(wire_name, node)` pairs of a record.

    `passthrough` keeps fields the schema did not recognise during a
    non-strict decode so they survive a re-encode.
    """

    fields: tuple[tuple[str, ValueNode], ...]
    passthrough: tuple[tuple[str, ValueNode], ...] = ()
    kind = NodeKind.RECORD

    @property
    def wire_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.fields)

    def get(self, wire_name: str) -> ValueNode | None:
        for name, node in self.fields:
            if name == wire_name:
                return node
        return None


@dataclass(frozen=True)
class CollectionNode:
    items: tuple[ValueNode, ...]
    kind = NodeKind.COLLECTION


ValueNode = NullNode | BoolNode | NumberNode | TextNode | RecordNode | CollectionNode

NULL = NullNode()


def to_plain(node: ValueNode) -> object:
    """Convert a node tree to plain dicts, lists and scalars keyed by wire-name."""
    if isinstance(node, RecordNode):
        return {name: to_plain(child) for name, child in (*node.fields, *node.passthrough)}
    if isinstance(node, CollectionNode):
        return [to_plain(item) for item in node.items]
    if isinstance(node, NullNode):
        return None
    return node.value
