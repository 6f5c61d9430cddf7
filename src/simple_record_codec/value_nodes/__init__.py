"""Value node exports."""

from .node_models import (
    NULL,
    BoolNode,
    CollectionNode,
    NodeKind,
    NullNode,
    Number,
    NumberNode,
    RecordNode,
    TextNode,
    ValueNode,
    to_plain,
)

__all__ = [
    "NULL",
    "BoolNode",
    "CollectionNode",
    "NodeKind",
    "NullNode",
    "Number",
    "NumberNode",
    "RecordNode",
    "TextNode",
    "ValueNode",
    "to_plain",
]
