"""Configuration scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from simple_record_codec.configuration.config_scaffold_builder import (
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from simple_record_codec.configuration.loader import load_configuration


def test_build_placeholder_configuration_contains_all_supported_sections() -> None:
    scaffold = build_placeholder_configuration()

    assert "Codec configuration template" in scaffold
    assert "codec:" in scaffold
    assert "naming_policy:" in scaffold
    assert "storage:" in scaffold
    assert "max_depth:" in scaffold
    assert "compress:" in scaffold
    assert "types:" in scaffold
    assert "collection:" in scaffold
    assert "optional:" in scaffold
    assert "nested:" in scaffold
    assert 'member: "field"' in scaffold


def test_write_placeholder_configuration_writes_loadable_file(tmp_path: Path) -> None:
    output_path = tmp_path / "codec.yaml"

    written_path = write_placeholder_configuration(output_path)

    assert written_path == output_path.resolve()
    configuration = load_configuration(output_path)
    assert configuration.codec.naming_policy == "camel_case"
    assert configuration.codec.max_depth == 128
    assert sorted(configuration.types) == ["Address", "Person"]
    assert configuration.storage.root == (tmp_path / "records").resolve()


def test_write_placeholder_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "codec.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError, match="already exists"):
        write_placeholder_configuration(output_path)
