"""Structural checks, size metrics and reformatting for JSON documents."""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from json2nosql.parsing import DuplicateKey, parse_document

MAX_RECOMMENDED_DEPTH = 10
LARGE_ARRAY_THRESHOLD = 1000

VALUE_TYPES = ("string", "number", "boolean", "null", "object", "array")


@dataclass(frozen=True)
class InspectionWarning:
    kind: str
    path: str
    message: str


@dataclass(frozen=True)
class DocumentMetrics:
    size: int
    node_count: int
    depth: int
    array_count: int
    object_count: int
    key_count: int
    value_types: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class InspectionReport:
    duplicate_keys: list[DuplicateKey]
    warnings: list[InspectionWarning]
    metrics: DocumentMetrics

    @property
    def valid(self) -> bool:
        """Duplicate keys lose data on parse; warnings alone keep a document valid."""
        return not self.duplicate_keys


def value_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _nodes(value: Any, path: str = "", depth: int = 0) -> Iterator[tuple[str, Any, int]]:
    yield path, value, depth
    if isinstance(value, dict):
        for key, item in value.items():
            yield from _nodes(item, f"{path}.{key}" if path else key, depth + 1)
    elif isinstance(value, list):
        for index, item in enumerate(value):
            yield from _nodes(item, f"{path}[{index}]", depth + 1)


def _containers(document: Any) -> list[tuple[str, Any, int]]:
    return [
        (path or "root", value, depth)
        for path, value, depth in _nodes(document)
        if isinstance(value, (dict, list))
    ]


def validate_document(document: Any) -> list[InspectionWarning]:
    """Flag empty collections, mixed-type arrays, deep nesting and large arrays."""
    containers = _containers(document)
    warnings: list[InspectionWarning] = []

    for path, value, _ in containers:
        if not value:
            kind = "emptyArray" if isinstance(value, list) else "emptyObject"
            label = "array" if isinstance(value, list) else "object"
            warnings.append(InspectionWarning(kind, path, f"Empty {label} found at {path}"))

    for path, value, _ in containers:
        if isinstance(value, list) and len(value) > 1:
            types = list(dict.fromkeys(value_type(item) for item in value))
            if len(types) > 1:
                warnings.append(
                    InspectionWarning(
                        "inconsistentArray",
                        path,
                        f"Array at {path} contains mixed types: {', '.join(types)}",
                    )
                )

    for path, _, depth in containers:
        if depth > MAX_RECOMMENDED_DEPTH:
            warnings.append(
                InspectionWarning("deepNesting", path, f"Deep nesting (depth {depth}) at {path}")
            )

    for path, value, _ in containers:
        if isinstance(value, list) and len(value) > LARGE_ARRAY_THRESHOLD:
            warnings.append(
                InspectionWarning(
                    "largeArray", path, f"Large array ({len(value)} items) at {path}"
                )
            )

    return warnings


def measure_document(document: Any) -> DocumentMetrics:
    """Count nodes, containers, keys and value types; size is compact UTF-8 bytes."""
    value_types = dict.fromkeys(VALUE_TYPES, 0)
    node_count = depth = array_count = object_count = key_count = 0
    for _, value, level in _nodes(document):
        node_count += 1
        depth = max(depth, level)
        kind = value_type(value)
        value_types[kind] += 1
        if kind == "array":
            array_count += 1
        elif kind == "object":
            object_count += 1
            key_count += len(value)

    return DocumentMetrics(
        size=len(minify_document(document).encode("utf-8")),
        node_count=node_count,
        depth=depth,
        array_count=array_count,
        object_count=object_count,
        key_count=key_count,
        value_types=value_types,
    )


def inspect_text(text: str) -> InspectionReport:
    """Parse ``text`` and report duplicate keys, structural warnings and metrics."""
    document, duplicates = parse_document(text)
    return InspectionReport(
        duplicate_keys=duplicates,
        warnings=validate_document(document),
        metrics=measure_document(document),
    )


def format_document(document: Any, *, indent: int = 2, sort_keys: bool = False) -> str:
    return json.dumps(document, indent=indent, sort_keys=sort_keys, ensure_ascii=False)


def minify_document(document: Any) -> str:
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False)
