"""Tests for json2nosql.parsing."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from json2nosql.parsing import (
    DocumentParseError,
    DuplicateKey,
    load_document,
    parse_document,
    read_document,
)


def test_load_document() -> None:
    assert load_document('{"a": [1, 2]}') == {"a": [1, 2]}
    assert load_document("[]") == []


def test_scalars_parse_and_are_rejected_later() -> None:
    assert load_document('"hello"') == "hello"


@pytest.mark.parametrize("text", ["", "   \n"])
def test_empty_input_is_rejected(text: str) -> None:
    with pytest.raises(DocumentParseError, match="Input is empty"):
        load_document(text)


def test_syntax_error_reports_position() -> None:
    with pytest.raises(DocumentParseError) as excinfo:
        load_document('{"a": }')

    error = excinfo.value
    assert error.line == 1
    assert error.column == 7
    assert "line 1, column 7" in str(error)
    assert '  {"a": }\n        ^' in str(error)


def test_syntax_error_on_later_line() -> None:
    with pytest.raises(DocumentParseError) as excinfo:
        load_document('{\n  "a": 1\n  "b": 2\n}')

    assert excinfo.value.line == 3
    assert excinfo.value.column == 3


def test_read_document_from_file(tmp_path: Path) -> None:
    path = tmp_path / "data.json"
    path.write_text('{"name": "Ada"}', encoding="utf-8")

    assert read_document(path) == {"name": "Ada"}


def test_read_document_from_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO('[{"a": 1}]'))

    assert read_document("-") == [{"a": 1}]


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DocumentParseError, match="Failed to read input file"):
        read_document(tmp_path / "missing.json")


# ---------------------------------------------------------------------------
# Duplicate keys
# ---------------------------------------------------------------------------


def test_parse_document_without_duplicates() -> None:
    assert parse_document('{"a": {"b": 1}}') == ({"a": {"b": 1}}, [])


def test_duplicate_keys_are_reported_with_paths() -> None:
    text = '{"name": "Ada", "name": "Grace", "items": [{"id": 1, "id": 2, "id": 3}]}'

    document, duplicates = parse_document(text)

    assert document == {"name": "Grace", "items": [{"id": 3}]}
    assert duplicates == [
        DuplicateKey(path="root", key="name", occurrences=2),
        DuplicateKey(path="items[0]", key="id", occurrences=3),
    ]
    assert duplicates[1].message == 'Duplicate key "id" appears 3 times at items[0]'


def test_load_document_logs_duplicate_keys(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="json2nosql.parsing"):
        document = load_document('{"a": 1, "a": 2}')

    assert document == {"a": 2}
    assert 'Duplicate key "a" appears 2 times at root; keeping the last value' in caplog.text


def test_duplicate_key_order_follows_first_occurrence() -> None:
    document, _ = parse_document('{"a": 1, "b": 2, "a": 3}')

    assert list(document) == ["a", "b"]
    assert document["a"] == 3
