"""Reference extraction: nested objects become their own collections."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from json2nosql.serialize.dialects import Dialect
from json2nosql.transform.documents import Reference, ShapedDocument


def _extractable_object(value: Any) -> bool:
    return isinstance(value, dict) and bool(value)


def _extractable_list(value: Any) -> bool:
    return (
        isinstance(value, list)
        and bool(value)
        and all(isinstance(item, dict) for item in value)
    )


def extract_references(
    documents: list[dict[str, Any]],
    main_collection: str,
    dialect: Dialect,
    *,
    new_id: Callable[[], str],
) -> dict[str, list[ShapedDocument]]:
    """Split ``documents`` into a main collection plus extracted collections.

    Every document receives a key. Extracted documents are processed
    recursively, so multi-level nesting yields one collection per level.
    """
    collections: dict[str, list[ShapedDocument]] = {main_collection: []}

    def shape(source: dict[str, Any], *, referenced: bool) -> ShapedDocument:
        shaped = ShapedDocument(key=new_id(), referenced=referenced)
        for key, value in source.items():
            if _extractable_object(value):
                name = dialect.object_collection_name(key)
                child = shape(value, referenced=True)
                collections.setdefault(name, []).append(child)
                shaped.fields[key] = Reference(
                    field=key, collection=name, ids=(child.key,), many=False
                )
            elif _extractable_list(value):
                name = dialect.list_collection_name(key)
                bucket = collections.setdefault(name, [])
                ids = []
                for item in value:
                    child = shape(item, referenced=True)
                    bucket.append(child)
                    ids.append(child.key)
                shaped.fields[key] = Reference(
                    field=key, collection=name, ids=tuple(ids), many=True
                )
            else:
                shaped.fields[key] = value
        return shaped

    for document in documents:
        # Register the parent before its children so it keeps list order.
        slot = len(collections[main_collection])
        collections[main_collection].append(ShapedDocument())
        collections[main_collection][slot] = shape(document, referenced=False)

    return collections
