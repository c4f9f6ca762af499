"""Flattening of nested objects into single-level documents."""

from __future__ import annotations

from typing import Any


def flatten_document(
    document: dict[str, Any],
    separator: str,
    prefix: str = "",
) -> dict[str, Any]:
    """Merge nested objects into the parent using ``separator``-joined keys.

    Lists are kept as-is. An empty nested object contributes no keys.
    """
    flattened: dict[str, Any] = {}
    for key, value in document.items():
        joined = f"{prefix}{separator}{key}" if prefix else key
        if isinstance(value, dict):
            flattened.update(flatten_document(value, separator, joined))
        else:
            flattened[joined] = value
    return flattened
