"""Tests for the json2nosql command-line interface."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from json2nosql.cli import main


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def document_file(tmp_path: Path) -> Path:
    path = tmp_path / "data.json"
    path.write_text(
        json.dumps([{"user_id": 1, "name": "Ada", "address": {"city": "London"}}]),
        encoding="utf-8",
    )
    return path


# ---------------------------------------------------------------------------
# Informational commands
# ---------------------------------------------------------------------------


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 0
    assert "usage: json2nosql" in capsys.readouterr().out


def test_config_check(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["config-check"]) == 0

    out = capsys.readouterr().out
    assert "Configuration loaded successfully:" in out
    assert "- JSON2NOSQL_DEFAULT_DB_NAME: nosql_generator_db" in out
    assert "- JSON2NOSQL_STRICT_STRUCTURE: true" in out


def test_config_check_reports_invalid_environment(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("JSON2NOSQL_DEFAULT_BACKEND", "cassandra")

    assert main(["config-check"]) == 2
    assert "Configuration error:" in capsys.readouterr().err


def test_unknown_log_level(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--log-level", "loud", "backends"]) == 2
    assert "Unknown log level: loud" in capsys.readouterr().err


def test_log_level_comes_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JSON2NOSQL_LOG_LEVEL", "debug")

    assert main(["backends"]) == 0
    assert logging.getLogger().level == logging.DEBUG


def test_log_level_flag_overrides_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JSON2NOSQL_LOG_LEVEL", "DEBUG")

    assert main(["--log-level", "error", "backends"]) == 0
    assert logging.getLogger().level == logging.ERROR


def test_backends(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["backends"]) == 0

    out = capsys.readouterr().out
    for name in ("mongodb", "firebase", "dynamodb", "couchdb", "nested", "arrays"):
        assert f"- {name}\n" in out


def test_suggest_indexes(document_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["suggest-indexes", str(document_file)]) == 0

    out = capsys.readouterr().out
    assert "- user_id\n  reasons: id_field\n" in out
    assert "- name\n  reasons: identity_field\n" in out
    assert "Compound suggestion: user_id, name" in out


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


def test_generate_prints_code(document_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(
        ["generate", str(document_file), "-b", "mongodb", "-s", "flat", "--seed", "1"]
    )

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "db.items.insertMany([" in out
    assert '"address.city": "London"' in out


def test_generate_uses_configured_defaults(
    document_file: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("JSON2NOSQL_DEFAULT_BACKEND", "couchdb")
    monkeypatch.setenv("JSON2NOSQL_DEFAULT_DB_NAME", "shop")

    assert main(["generate", str(document_file)]) == 0
    assert 'const db = nano.use("shop");' in capsys.readouterr().out


def test_generate_is_reproducible_with_seed(
    document_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    args = ["generate", str(document_file), "-b", "firebase", "--add-ids", "--seed", "5"]

    main(args)
    first = capsys.readouterr().out
    main(args)
    second = capsys.readouterr().out

    assert first == second


def test_generate_json_payload(document_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(
        ["generate", str(document_file), "-b", "dynamodb", "-s", "references", "--json"]
    )

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["backend"] == "dynamodb"
    assert payload["structure"] == "references"
    assert payload["collections"] == {"Main": 1, "Address": 1}
    assert "addReferencedItems" in payload["code"]


def test_generate_to_directory(
    document_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    out_dir = tmp_path / "out"
    out_dir.mkdir()

    assert main(["generate", str(document_file), "-b", "couchdb", "-o", str(out_dir)]) == 0

    written = out_dir / "nosql_export_couchdb.js"
    assert written.exists()
    assert "async function main()" in written.read_text(encoding="utf-8")
    out = capsys.readouterr().out
    assert "Code generation succeeded:" in out
    assert "- documents: 1" in out


def test_generate_to_file(document_file: Path, tmp_path: Path) -> None:
    target = tmp_path / "seed.js"

    assert main(["generate", str(document_file), "-o", str(target)]) == 0
    assert target.read_text(encoding="utf-8").startswith("// MongoDB Shell Commands")


@pytest.mark.parametrize(
    ("args", "message"),
    [
        (["-s", "tree"], "Unsupported document structure"),
        (["-b", "cassandra"], "Unsupported database type"),
        (["--db-name", " "], "Invalid generation options"),
    ],
)
def test_generate_rejects_invalid_requests(
    document_file: Path,
    capsys: pytest.CaptureFixture[str],
    args: list[str],
    message: str,
) -> None:
    assert main(["generate", str(document_file), *args]) == 2
    assert message in capsys.readouterr().err


def test_generate_rejects_scalar_document(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "scalar.json"
    path.write_text('"hello"', encoding="utf-8")

    assert main(["generate", str(path)]) == 1
    assert "Document cannot be converted" in capsys.readouterr().err


def test_generate_reports_parse_errors(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "broken.json"
    path.write_text('{"a": }', encoding="utf-8")

    assert main(["generate", str(path)]) == 1
    assert "line 1, column 7" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# inspect / format
# ---------------------------------------------------------------------------


def test_inspect_reports_metrics(document_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["inspect", str(document_file)]) == 0

    out = capsys.readouterr().out
    assert "Valid: yes\n" in out
    assert "Issues:\n- (none)\n" in out
    assert "Warnings:\n- (none)\n" in out
    assert "- nodes: 6\n" in out
    assert "- depth: 3\n" in out
    assert "- value types: string=2, number=1, boolean=0, null=0, object=2, array=1\n" in out


def test_inspect_flags_duplicate_keys(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "dupes.json"
    path.write_text('{"id": 1, "id": 2, "tags": [1, "a"]}', encoding="utf-8")

    assert main(["inspect", str(path)]) == 1

    out = capsys.readouterr().out
    assert "Valid: no\n" in out
    assert '- Duplicate key "id" appears 2 times at root\n' in out
    assert "- Array at tags contains mixed types: number, string\n" in out


def test_inspect_json_payload(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "dupes.json"
    path.write_text('{"a": {"b": 1, "b": 2}, "c": {}}', encoding="utf-8")

    assert main(["inspect", str(path), "--json"]) == 1

    payload = json.loads(capsys.readouterr().out)
    assert payload["valid"] is False
    assert payload["duplicate_keys"] == [{"path": "a", "key": "b", "occurrences": 2}]
    assert payload["warnings"][0]["kind"] == "emptyObject"
    assert payload["metrics"]["object_count"] == 3


def test_inspect_reports_parse_errors(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "broken.json"
    path.write_text("[1,", encoding="utf-8")

    assert main(["inspect", str(path)]) == 1
    assert "Input could not be parsed:" in capsys.readouterr().err


def test_format_pretty_prints(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "data.json"
    path.write_text('{"b":1,"a":[true]}', encoding="utf-8")

    assert main(["format", str(path), "--sort-keys", "--indent", "4"]) == 0
    assert capsys.readouterr().out == '{\n    "a": [\n        true\n    ],\n    "b": 1\n}\n'


def test_format_minifies(document_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["format", str(document_file), "--minify"]) == 0
    assert capsys.readouterr().out == (
        '[{"user_id":1,"name":"Ada","address":{"city":"London"}}]\n'
    )
