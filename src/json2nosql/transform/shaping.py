"""Apply a structure policy to a document root."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from json2nosql.models.options import Structure
from json2nosql.serialize.dialects import Dialect
from json2nosql.transform.documents import (
    ShapedDocument,
    convert_date_strings,
    ensure_document_root,
)
from json2nosql.transform.flatten import flatten_document
from json2nosql.transform.references import extract_references


@dataclass
class ShapePlan:
    """Documents to render, grouped by target collection.

    The first collection is the main one. For the array-wrapped policy the
    main collection holds the items and ``container`` is the wrapper
    document.
    """

    structure: Structure
    collections: dict[str, list[ShapedDocument]] = field(default_factory=dict)
    container: ShapedDocument | None = None

    @property
    def main_collection(self) -> str:
        return next(iter(self.collections))

    @property
    def main_documents(self) -> list[ShapedDocument]:
        return self.collections[self.main_collection]

    @property
    def document_count(self) -> int:
        return sum(len(items) for items in self.collections.values())

    def collection_sizes(self) -> dict[str, int]:
        return {name: len(items) for name, items in self.collections.items()}


def shape_documents(
    document: Any,
    structure: Structure,
    dialect: Dialect,
    *,
    main_collection: str,
    new_id: Callable[[], str],
    add_ids: bool = False,
    detect_dates: bool = False,
) -> ShapePlan:
    """Restructure ``document`` according to ``structure``.

    The input is deep-copied first and never mutated.
    """
    sources = ensure_document_root(document)
    if detect_dates:
        sources = [convert_date_strings(source) for source in sources]

    def keyed(fields: dict[str, Any]) -> ShapedDocument:
        return ShapedDocument(fields=fields, key=new_id() if add_ids else None)

    if structure is Structure.REFERENCES:
        collections = extract_references(
            sources, main_collection, dialect, new_id=new_id
        )
        return ShapePlan(structure=structure, collections=collections)

    if structure is Structure.ARRAY_WRAPPED:
        container = keyed({})
        items = [keyed(source) for source in sources]
        return ShapePlan(
            structure=structure,
            collections={main_collection: items},
            container=container,
        )

    if structure is Structure.FLAT:
        sources = [
            flatten_document(source, dialect.flatten_separator) for source in sources
        ]

    return ShapePlan(
        structure=structure,
        collections={main_collection: [keyed(source) for source in sources]},
    )
