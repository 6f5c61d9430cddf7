"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "codec.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Codec configuration template for simple-record-codec.
# Declare every record type under `types` before running encode or decode.

codec:
  # identity | camel_case | pascal_case | snake_case | kebab_case
  naming_policy: "camel_case"
  # Include members declared with `member: field` even without `include: true`.
  include_all_fields: false
  case_insensitive_lookup: false
  # Reject wire-names the schema does not define instead of keeping them.
  strict: false
  indent: 2
  # Deepest nesting of records and collections accepted on encode and decode.
  max_depth: 128

storage:
  # Relative paths resolve against the directory holding this file.
  root: "records"
  # Wrap stored records in a gzip stream.
  compress: false

types:
  Address:
    fields:
      - name: "street"
        type: "string"
      - name: "city"
        type: "string"
  Person:
    fields:
      - name: "first_name"
        type: "string"
      - name: "age"
        type: "integer"
      - name: "balance"
        type: "decimal"
      - name: "tags"
        type:
          collection: "string"
      - name: "home"
        type:
          optional:
            nested: "Address"
      - name: "internal_note"
        type: "string"
        member: "field"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML codec configuration template with example types and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the codec configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Codec configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
