"""Rendering of value nodes into the textual wire format."""

from __future__ import annotations

import json
import math
import re
from decimal import Decimal

from simple_record_codec.value_nodes import (
    BoolNode,
    CollectionNode,
    NullNode,
    NumberNode,
    RecordNode,
    TextNode,
    ValueNode,
)

_BARE_NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_.\-]*")


def render_node(node: ValueNode, *, indent: int = 2) -> str:
    """Render `node` as wire text terminated by a newline.

    A positive `indent` writes one field or item per line; zero or less writes
    the whole tree on a single line. Passthrough fields follow schema fields.
    """
    return _render(node, depth=0, indent=indent) + "\n"


def render_name(wire_name: str) -> str:
    if _BARE_NAME_PATTERN.fullmatch(wire_name):
        return wire_name
    return json.dumps(wire_name, ensure_ascii=False)


def render_number(value: int | float | Decimal) -> str:
    if isinstance(value, Decimal):
        if value.is_nan():
            return "nan"
        if value.is_infinite():
            return "-inf" if value < 0 else "inf"
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "nan"
        if math.isinf(value):
            return "-inf" if value < 0 else "inf"
        return repr(value)
    return str(value)


def _render(node: ValueNode, *, depth: int, indent: int) -> str:
    if isinstance(node, RecordNode):
        entries = [
            f"{render_name(name)}: {_render(child, depth=depth + 1, indent=indent)}"
            for name, child in (*node.fields, *node.passthrough)
        ]
        return _frame("{", "}", entries, depth=depth, indent=indent, separator="")
    if isinstance(node, CollectionNode):
        entries = [_render(item, depth=depth + 1, indent=indent) for item in node.items]
        return _frame("[", "]", entries, depth=depth, indent=indent, separator=",")
    if isinstance(node, NullNode):
        return "null"
    if isinstance(node, BoolNode):
        return "true" if node.value else "false"
    if isinstance(node, NumberNode):
        return render_number(node.value)
    if isinstance(node, TextNode):
        return json.dumps(node.value, ensure_ascii=False)
    raise TypeError(f"Cannot render value of type {type(node).__name__}.")


def _frame(
    opener: str, closer: str, entries: list[str], *, depth: int, indent: int, separator: str
) -> str:
    if not entries:
        return opener + closer
    if indent <= 0:
        return opener + ", ".join(entries) + closer
    inner_pad = " " * (indent * (depth + 1))
    outer_pad = " " * (indent * depth)
    body = f"{separator}\n".join(inner_pad + entry for entry in entries)
    return f"{opener}\n{body}\n{outer_pad}{closer}"
