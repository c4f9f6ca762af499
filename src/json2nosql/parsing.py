"""JSON document parsing with line/column error reporting."""

from __future__ import annotations

import json
import logging
import sys
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class DocumentParseError(ValueError):
    """Raised when input text is not valid JSON."""

    def __init__(self, message: str, *, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


@dataclass(frozen=True)
class DuplicateKey:
    """A key repeated inside one JSON object; the last occurrence wins."""

    path: str
    key: str
    occurrences: int

    @property
    def message(self) -> str:
        return f'Duplicate key "{self.key}" appears {self.occurrences} times at {self.path}'


class _Members(list):
    """Object members in source order, repeated keys included."""


def _error_excerpt(text: str, line: int, column: int) -> str:
    lines = text.splitlines()
    if not 1 <= line <= len(lines):
        return ""
    source_line = lines[line - 1]
    return f"\n  {source_line}\n  {' ' * max(column - 1, 0)}^"


def _build(value: Any, path: str, duplicates: list[DuplicateKey]) -> Any:
    if isinstance(value, _Members):
        counts = Counter(key for key, _ in value)
        for key, count in counts.items():
            if count > 1:
                duplicates.append(DuplicateKey(path=path or "root", key=key, occurrences=count))
        result = {}
        for key, item in value:
            result[key] = _build(item, f"{path}.{key}" if path else key, duplicates)
        return result
    if isinstance(value, list):
        return [
            _build(item, f"{path}[{index}]", duplicates) for index, item in enumerate(value)
        ]
    return value


def parse_document(text: str) -> tuple[Any, list[DuplicateKey]]:
    """Parse JSON text and report every object key that appears more than once."""
    if not text.strip():
        raise DocumentParseError("Input is empty; expected a JSON object or array.")

    try:
        raw = json.loads(text, object_pairs_hook=_Members)
    except json.JSONDecodeError as exc:
        raise DocumentParseError(
            f"Invalid JSON: {exc.msg} at line {exc.lineno}, column {exc.colno}"
            + _error_excerpt(text, exc.lineno, exc.colno),
            line=exc.lineno,
            column=exc.colno,
        ) from exc

    duplicates: list[DuplicateKey] = []
    return _build(raw, "", duplicates), duplicates


def load_document(text: str) -> Any:
    """Parse JSON text into a document value."""
    document, duplicates = parse_document(text)
    for duplicate in duplicates:
        logger.warning("%s; keeping the last value", duplicate.message)
    return document


def read_text(path: Path | str) -> str:
    """Read a JSON file as text; ``-`` reads standard input."""
    if str(path) == "-":
        return sys.stdin.read()

    source = Path(path)
    try:
        return source.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentParseError(f"Failed to read input file {source}: {exc}") from exc


def read_document(path: Path | str) -> Any:
    """Read and parse a JSON file; ``-`` reads standard input."""
    return load_document(read_text(path))
