"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from simple_record_codec.cli import main

_CONFIG = """
storage:
  root: records
types:
  Link:
    fields:
      - name: next
        type:
          optional:
            nested: Link
"""


def _write_config(tmp_path: Path, extra: str = "") -> Path:
    config_path = tmp_path / "codec.yaml"
    config_path.write_text(extra + _CONFIG, encoding="utf-8")
    (tmp_path / "records").mkdir(exist_ok=True)
    return config_path


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["encode", "--type", "Person", "--input", "person.json"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--config" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["decode", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option: --bogus" in captured.err
    assert "Traceback" not in captured.err


def test_cli_errors_return_exit_code_one(tmp_path: Path, capsys) -> None:
    exit_code = main(
        ["schema", "--config", str(tmp_path / "missing.yaml"), "--type", "Person"]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Configuration file not found" in captured.err
    assert "Traceback" not in captured.err


@pytest.mark.parametrize(
    ("directory", "message"),
    [
        ("../..", "escapes the storage root"),
        ("stored.rec", "Failed to list stored.rec"),
    ],
)
def test_list_storage_errors_return_exit_code_one(
    tmp_path: Path, capsys, directory: str, message: str
) -> None:
    config_path = _write_config(tmp_path)
    (tmp_path / "records" / "stored.rec").write_text("{next: null}", encoding="utf-8")

    exit_code = main(["list", "--config", str(config_path), "--directory", directory])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert message in captured.err
    assert "Traceback" not in captured.err


def test_decode_past_the_configured_depth_returns_exit_code_one(tmp_path: Path, capsys) -> None:
    config_path = _write_config(tmp_path, "codec:\n  max_depth: 2\n")
    input_path = tmp_path / "deep.rec"
    input_path.write_text("{next: {next: {next: null}}}", encoding="utf-8")

    exit_code = main(
        ["decode", "--config", str(config_path), "--type", "Link", "--input", str(input_path)]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "next.next: nesting exceeds the maximum depth of 2" in captured.err
