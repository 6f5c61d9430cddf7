"""Codec outcome tests."""

from __future__ import annotations

import io

from simple_record_codec.schema_reflection import (
    SchemaCache,
    TypeDescriptionBuilder,
    build_schema,
    nested,
)
from simple_record_codec.structured_codec import (
    MissingFieldError,
    NestingDepthError,
    OutcomeStatus,
    TypeMismatchError,
    attempt_decode,
    attempt_encode,
)
from simple_record_codec.value_nodes import TextNode


def _tag_schema(cache: SchemaCache):
    return build_schema(TypeDescriptionBuilder("Tag").text("label").build(), cache=cache)


def test_attempt_encode_reports_byte_count() -> None:
    cache = SchemaCache()
    buffer = io.BytesIO()

    outcome = attempt_encode(_tag_schema(cache), {"label": "x"}, buffer, cache=cache, indent=0)

    assert outcome.ok
    assert outcome.value == len(b'{label: "x"}\n')
    assert outcome.error is None


def test_attempt_encode_captures_codec_errors() -> None:
    cache = SchemaCache()

    outcome = attempt_encode(_tag_schema(cache), {}, io.BytesIO(), cache=cache)

    assert outcome.status == OutcomeStatus.FAILED
    assert isinstance(outcome.error, MissingFieldError)
    assert outcome.value is None


def test_attempt_decode_returns_node_or_error() -> None:
    cache = SchemaCache()
    schema = _tag_schema(cache)

    decoded = attempt_decode(schema, io.BytesIO(b'{label: "x"}'), cache=cache)
    failed = attempt_decode(schema, io.BytesIO(b"{label: 1}"), cache=cache)

    assert decoded.ok
    assert decoded.value.get("label") == TextNode("x")
    assert not failed.ok
    assert isinstance(failed.error, TypeMismatchError)


def test_depth_limit_failures_become_outcomes() -> None:
    cache = SchemaCache()
    description = TypeDescriptionBuilder("Link").optional("next", nested("Link")).build()
    schema = build_schema(description, cache=cache)
    chain: dict = {"next": None}
    for _ in range(5):
        chain = {"next": chain}

    encoded = attempt_encode(schema, chain, io.BytesIO(), cache=cache, max_depth=4)
    decoded = attempt_decode(
        schema, io.BytesIO(b"{next: " * 600 + b"null" + b"}" * 600), cache=cache
    )

    assert isinstance(encoded.error, NestingDepthError)
    assert decoded.status == OutcomeStatus.FAILED
    assert isinstance(decoded.error, NestingDepthError)
