"""Discriminated results for callers that prefer outcomes over exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from simple_record_codec.schema_reflection import RecordSchema, SchemaCache
from simple_record_codec.value_nodes import RecordNode

from .codec_errors import CodecError
from .codec_limits import DEFAULT_MAX_DEPTH
from .record_decoder import ByteReader, decode
from .record_encoder import ByteWriter, encode


class OutcomeStatus(str, Enum):
    """Codec operation outcome status."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class CodecOutcome:
    """Either the value an operation produced or the codec error that aborted it."""

    status: OutcomeStatus
    value: Any
    error: CodecError | None

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.SUCCEEDED

    @staticmethod
    def succeeded(value: Any) -> CodecOutcome:
        return CodecOutcome(status=OutcomeStatus.SUCCEEDED, value=value, error=None)

    @staticmethod
    def failed(error: CodecError) -> CodecOutcome:
        return CodecOutcome(status=OutcomeStatus.FAILED, value=None, error=error)


def attempt_encode(
    schema: RecordSchema,
    value: Any,
    writer: ByteWriter,
    *,
    cache: SchemaCache | None = None,
    indent: int = 2,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> CodecOutcome:
    """Encode like `encode`, returning the byte count or the codec error as an outcome."""
    try:
        byte_count = encode(
            schema, value, writer, cache=cache, indent=indent, max_depth=max_depth
        )
    except CodecError as exc:
        return CodecOutcome.failed(exc)
    return CodecOutcome.succeeded(byte_count)


def attempt_decode(
    schema: RecordSchema,
    reader: ByteReader,
    *,
    strict: bool = False,
    cache: SchemaCache | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> CodecOutcome:
    """Decode like `decode`, returning the record node or the codec error as an outcome."""
    try:
        node: RecordNode = decode(
            schema, reader, strict=strict, cache=cache, max_depth=max_depth
        )
    except CodecError as exc:
        return CodecOutcome.failed(exc)
    return CodecOutcome.succeeded(node)
