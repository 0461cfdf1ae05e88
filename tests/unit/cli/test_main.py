"""Unit tests for CLI command handling."""

from __future__ import annotations

from cli.main import main
from tests.fixture_paths import fixture_path


def _run(tmp_path, *args: str) -> int:
    return main(["--storage-root", str(tmp_path), *args])


def test_cli_put_then_get_prints_value(tmp_path, capsys) -> None:
    """put should store a typed value that get prints back."""
    _run(tmp_path, "put", "Health", "42", "--type", "int")
    capsys.readouterr()

    exit_code = _run(tmp_path, "get", "Health")
    output = capsys.readouterr().out.strip()

    assert exit_code == 0 and output == "42"


def test_cli_put_negative_int(tmp_path, capsys) -> None:
    """Negative values should parse as positionals, not options."""
    _run(tmp_path, "put", "Delta", "-1", "--type", "int")
    capsys.readouterr()

    _run(tmp_path, "get", "Delta")

    assert capsys.readouterr().out.strip() == "-1"


def test_cli_get_missing_key_exits_nonzero(tmp_path, capsys) -> None:
    """Missing keys should report NOT FOUND on stderr and exit 1."""
    exit_code = _run(tmp_path, "get", "Nope")
    captured = capsys.readouterr()

    assert exit_code == 1 and "NOT FOUND" in captured.err


def test_cli_get_rejects_type_mismatch(tmp_path, capsys) -> None:
    """get --type should refuse records stored under another type."""
    _run(tmp_path, "put", "Alive", "true", "--type", "bool")

    exit_code = _run(tmp_path, "get", "Alive", "--type", "int")

    assert exit_code == 1 and "BOOL" in capsys.readouterr().err


def test_cli_enum_width_roundtrip(tmp_path, capsys) -> None:
    """Enums written at 32 bits should read back when the width matches."""
    _run(tmp_path, "put", "Mode", "300", "--type", "enum", "--enum-width", "32")
    capsys.readouterr()

    _run(tmp_path, "get", "Mode", "--enum-width", "32")

    assert capsys.readouterr().out.strip() == "300"


def test_cli_keys_and_delete(tmp_path, capsys) -> None:
    """delete should drop one key and keys should list the rest in order."""
    _run(tmp_path, "put", "a", "1", "--type", "int", "--format", "sav")
    _run(tmp_path, "put", "b", "x", "--type", "string", "--format", "sav")
    _run(tmp_path, "delete", "a", "--format", "sav")
    capsys.readouterr()

    exit_code = _run(tmp_path, "keys", "--format", "sav")

    assert exit_code == 0 and capsys.readouterr().out.splitlines() == ["b"]


def test_cli_delete_on_missing_file_fails(tmp_path, capsys) -> None:
    """delete against a missing save file should exit 1."""
    exit_code = _run(tmp_path, "delete", "a", "--file", "Ghost")

    assert exit_code == 1 and "not_found" in capsys.readouterr().err


def test_cli_path_prints_resolved_location(tmp_path, capsys) -> None:
    """path should print storage root / SavedGames / name + extension."""
    _run(tmp_path, "path", "--file", "Slot2", "--format", "dat")

    output = capsys.readouterr().out.strip()

    assert output == str(tmp_path.resolve() / "SavedGames" / "Slot2.dat")


def test_cli_delete_file(tmp_path, capsys) -> None:
    """delete-file should remove the save file once."""
    _run(tmp_path, "put", "a", "1", "--type", "int")
    capsys.readouterr()

    _run(tmp_path, "delete-file")
    _run(tmp_path, "delete-file")

    assert capsys.readouterr().out.splitlines() == ["deleted", "missing"]


def test_cli_invalid_value_reports_error(tmp_path, capsys) -> None:
    """Unparseable values should exit 1 with an error message."""
    exit_code = _run(tmp_path, "put", "Health", "lots", "--type", "int")

    assert exit_code == 1 and "error:" in capsys.readouterr().err


def test_cli_run_spec_prints_step_output(tmp_path, capsys) -> None:
    """run-spec should print each step output line."""
    exit_code = _run(tmp_path, "run-spec", str(fixture_path("run_spec/seed_profile.yaml")))
    output = capsys.readouterr().out.splitlines()

    assert exit_code == 0 and output[3] == "Health=42"
