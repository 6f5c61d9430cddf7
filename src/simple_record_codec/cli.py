"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any

import click

from simple_record_codec.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from simple_record_codec.record_storage import (
    GzipTransform,
    IdentityTransform,
    LocalFilesystemProvider,
    RecordStore,
    StorageError,
    StorageOutcome,
    StorageStatus,
)
from simple_record_codec.schema_reflection import (
    RecordSchema,
    SchemaReflectionError,
    build_schema,
)
from simple_record_codec.structured_codec import (
    CodecError,
    decode_text,
    encode_text,
    materialize,
)
from simple_record_codec.value_nodes import RecordNode, to_plain


class CliError(Exception):
    """Custom CLI error."""


_CONFIG_OPTION = click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON codec configuration file",
)
_TYPE_OPTION = click.option(
    "--type",
    "type_name",
    required=True,
    help="Name of the record type declared under `types`",
)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="simple-record-codec")
@click.option("--verbose", is_flag=True, default=False, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """Schema-driven structured record codec."""
    if verbose:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        package_logger = logging.getLogger("simple_record_codec")
        package_logger.addHandler(handler)
        package_logger.setLevel(logging.DEBUG)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML codec configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML codec configuration with example types."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="schema")
@_CONFIG_OPTION
@_TYPE_OPTION
def show_schema(config_path: str, type_name: str) -> None:
    """Print the wire-names of a record type in encode order."""
    _, schema = _load_schema(config_path, type_name)
    for descriptor in schema.fields:
        marker = "included" if descriptor.included else "excluded"
        click.echo(f"{descriptor.wire_name}\t{descriptor.shape.describe()}\t{marker}")


@cli.command(name="encode")
@_CONFIG_OPTION
@_TYPE_OPTION
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a JSON document holding the record keyed by internal field names",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Write the encoded record here instead of standard output",
)
def encode_record(
    config_path: str, type_name: str, input_path: str, output_path: str | None
) -> None:
    """Encode a JSON record into the wire format."""
    configuration, schema = _load_schema(config_path, type_name)
    value = _read_json(input_path)
    try:
        encoded = encode_text(
            schema,
            value,
            indent=configuration.codec.indent,
            max_depth=configuration.codec.max_depth,
        )
    except CodecError as exc:
        raise CliError(str(exc)) from exc
    if output_path is None:
        click.echo(encoded, nl=False)
        return
    try:
        Path(output_path).write_text(encoded, encoding="utf-8")
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(Path(output_path).resolve()))


@cli.command(name="decode")
@_CONFIG_OPTION
@_TYPE_OPTION
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to an encoded record",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Fail on wire-names the schema does not define (overrides codec.strict).",
)
@click.option(
    "--internal-names",
    is_flag=True,
    default=False,
    help="Print the record keyed by internal field names instead of wire-names.",
)
def decode_record(
    config_path: str, type_name: str, input_path: str, strict: bool, internal_names: bool
) -> None:
    """Decode an encoded record and print it as JSON."""
    configuration, schema = _load_schema(config_path, type_name)
    try:
        text = Path(input_path).read_text(encoding="utf-8")
        node = decode_text(
            schema,
            text,
            strict=strict or configuration.codec.strict,
            max_depth=configuration.codec.max_depth,
        )
    except (CodecError, OSError, UnicodeDecodeError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(_render_json(schema, node, internal_names=internal_names))


@cli.command(name="save")
@_CONFIG_OPTION
@_TYPE_OPTION
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a JSON document holding the record keyed by internal field names",
)
@click.option("--name", "record_name", required=True, help="Record path inside storage.root")
def save_record(config_path: str, type_name: str, input_path: str, record_name: str) -> None:
    """Encode a JSON record into the configured record store."""
    configuration, schema = _load_schema(config_path, type_name)
    outcome = _record_store(configuration).save(record_name, schema, _read_json(input_path))
    _require_status(outcome, StorageStatus.SAVED)
    click.echo(f"{outcome.path}\t{outcome.value} bytes")


@cli.command(name="load")
@_CONFIG_OPTION
@_TYPE_OPTION
@click.option("--name", "record_name", required=True, help="Record path inside storage.root")
@click.option(
    "--internal-names",
    is_flag=True,
    default=False,
    help="Print the record keyed by internal field names instead of wire-names.",
)
def load_record(config_path: str, type_name: str, record_name: str, internal_names: bool) -> None:
    """Load a record from the configured record store and print it as JSON."""
    configuration, schema = _load_schema(config_path, type_name)
    outcome = _record_store(configuration).load(record_name, schema)
    _require_status(outcome, StorageStatus.LOADED)
    click.echo(_render_json(schema, outcome.value, internal_names=internal_names))


@cli.command(name="delete")
@_CONFIG_OPTION
@click.option("--name", "record_name", required=True, help="Record path inside storage.root")
def delete_record(config_path: str, record_name: str) -> None:
    """Delete a record from the configured record store."""
    configuration = _load_configuration(config_path)
    outcome = _record_store(configuration).delete(record_name)
    _require_status(outcome, StorageStatus.DELETED)
    click.echo(outcome.path)


@cli.command(name="list")
@_CONFIG_OPTION
@click.option("--directory", default="", help="Directory inside storage.root to list")
def list_records(config_path: str, directory: str) -> None:
    """List records stored in the configured record store."""
    configuration = _load_configuration(config_path)
    try:
        record_paths = _record_store(configuration).list_records(directory)
    except StorageError as exc:
        raise CliError(str(exc)) from exc
    for record_path in record_paths:
        click.echo(record_path)


def _load_configuration(config_path: str) -> Configuration:
    try:
        return load_configuration(config_path)
    except (ConfigurationError, OSError) as exc:
        raise CliError(str(exc)) from exc


def _load_schema(config_path: str, type_name: str) -> tuple[Configuration, RecordSchema]:
    configuration = _load_configuration(config_path)
    description = configuration.types.get(type_name)
    if description is None:
        declared = ", ".join(sorted(configuration.types))
        raise CliError(f"Type '{type_name}' is not declared. Declared types: {declared}.")
    try:
        schema = build_schema(
            description,
            configuration.codec.reflection_options(),
            catalog=configuration.types,
        )
    except SchemaReflectionError as exc:
        raise CliError(str(exc)) from exc
    return configuration, schema


def _record_store(configuration: Configuration) -> RecordStore:
    transform = GzipTransform() if configuration.storage.compress else IdentityTransform()
    return RecordStore(
        LocalFilesystemProvider(configuration.storage.root),
        transform=transform,
        indent=configuration.codec.indent,
        strict=configuration.codec.strict,
        max_depth=configuration.codec.max_depth,
    )


def _require_status(outcome: StorageOutcome, expected: StorageStatus) -> None:
    if outcome.status == expected:
        return
    if outcome.status == StorageStatus.NOT_FOUND:
        raise CliError(f"No record stored at {outcome.path}")
    raise CliError(str(outcome.error))


def _read_json(input_path: str) -> Any:
    try:
        text = Path(input_path).read_text(encoding="utf-8")
        return json.loads(text, parse_float=Decimal)
    except (OSError, json.JSONDecodeError) as exc:
        raise CliError(f"Failed to read JSON input {input_path}: {exc}") from exc


def _render_json(schema: RecordSchema, node: RecordNode, *, internal_names: bool) -> str:
    try:
        payload = materialize(schema, node) if internal_names else to_plain(node)
    except CodecError as exc:
        raise CliError(str(exc)) from exc
    return json.dumps(payload, indent=2, ensure_ascii=False, default=_json_default)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
