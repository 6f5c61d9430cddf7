"""Structured codec exports."""

from .codec_errors import (
    CodecError,
    CyclicGraphError,
    DuplicateFieldError,
    IncompleteInputError,
    MalformedInputError,
    MissingFieldError,
    NestingDepthError,
    TypeMismatchError,
    UnknownFieldError,
)
from .codec_limits import DEFAULT_MAX_DEPTH, MAX_INTEGER_DIGITS
from .codec_outcomes import CodecOutcome, OutcomeStatus, attempt_decode, attempt_encode
from .record_decoder import ByteReader, decode, decode_text
from .record_encoder import ByteWriter, encode, encode_node, encode_text, to_value_node
from .record_materializer import materialize
from .wire_writer import render_node

__all__ = [
    "ByteReader",
    "ByteWriter",
    "CodecError",
    "CodecOutcome",
    "CyclicGraphError",
    "DEFAULT_MAX_DEPTH",
    "DuplicateFieldError",
    "IncompleteInputError",
    "MAX_INTEGER_DIGITS",
    "MalformedInputError",
    "MissingFieldError",
    "NestingDepthError",
    "OutcomeStatus",
    "TypeMismatchError",
    "UnknownFieldError",
    "attempt_decode",
    "attempt_encode",
    "decode",
    "decode_text",
    "encode",
    "encode_node",
    "encode_text",
    "materialize",
    "render_node",
    "to_value_node",
]
