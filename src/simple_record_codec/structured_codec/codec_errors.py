"""Structured codec error taxonomy.

Every error carries the path of the value it concerns within the graph,
e.g. ``person.addresses[2].city``; ``$`` denotes the root record.
"""

from __future__ import annotations

ROOT_PATH = "$"


class CodecError(Exception):
    """Base error for encode and decode failures."""

    def __init__(self, message: str, *, path: str = ROOT_PATH) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class CyclicGraphError(CodecError):
    """Raised when a value graph references one of its own ancestors."""

    def __init__(self, path: str, type_name: str) -> None:
        super().__init__(f"reference cycle back to a '{type_name}' value", path=path)
        self.type_name = type_name


class NestingDepthError(CodecError):
    """Raised when records and collections nest deeper than the configured limit."""

    def __init__(self, path: str, max_depth: int) -> None:
        super().__init__(f"nesting exceeds the maximum depth of {max_depth}", path=path)
        self.max_depth = max_depth


class UnknownFieldError(CodecError):
    """Raised in strict mode when input carries a wire-name the schema does not define."""

    def __init__(self, path: str, wire_name: str, type_name: str) -> None:
        super().__init__(f"unknown field '{wire_name}' for type '{type_name}'", path=path)
        self.wire_name = wire_name
        self.type_name = type_name


class TypeMismatchError(CodecError):
    """Raised when a value's kind differs from the kind the schema declares."""

    def __init__(self, path: str, expected: str, actual: str) -> None:
        super().__init__(f"expected {expected}, found {actual}", path=path)
        self.expected = expected
        self.actual = actual


class MissingFieldError(CodecError):
    """Raised when a required field is absent from a record."""

    def __init__(self, path: str, field_name: str) -> None:
        super().__init__(f"required field '{field_name}' is missing", path=path)
        self.field_name = field_name


class DuplicateFieldError(CodecError):
    """Raised when input names the same field twice within one record."""

    def __init__(self, path: str, wire_name: str) -> None:
        super().__init__(f"field '{wire_name}' appears more than once", path=path)
        self.wire_name = wire_name


class MalformedInputError(CodecError):
    """Raised when input text does not follow the wire grammar."""

    def __init__(self, message: str, *, line: int, column: int, path: str = ROOT_PATH) -> None:
        super().__init__(f"{message} (line {line}, column {column})", path=path)
        self.line = line
        self.column = column


class IncompleteInputError(CodecError):
    """Raised when the reader is exhausted in the middle of a structure."""

    def __init__(self, expected: str, *, line: int, column: int, path: str = ROOT_PATH) -> None:
        super().__init__(
            f"input ended while expecting {expected} (line {line}, column {column})", path=path
        )
        self.expected = expected
        self.line = line
        self.column = column


def child_path(parent: str, wire_name: str) -> str:
    if parent == ROOT_PATH:
        return wire_name
    return f"{parent}.{wire_name}"


def item_path(parent: str, index: int) -> str:
    return f"{parent}[{index}]"
