"""Backend-specific literal and naming conventions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import Enum

from json2nosql.models.options import Backend
from json2nosql.serialize.literals import quote_string, to_iso_string


class IdKind(str, Enum):
    OBJECT_ID = "object_id"
    SHORT = "short"


def _pluralize(key: str) -> str:
    return key if key.endswith("s") else f"{key}s"


def _capitalize(key: str) -> str:
    return key[:1].upper() + key[1:]


def _singularize(key: str) -> str:
    return key[:-1] if key.endswith("s") else key


@dataclass(frozen=True)
class Dialect:
    """Leaf-literal and naming rules for one backend."""

    backend: Backend
    flatten_separator: str
    date_template: str
    id_kind: IdKind
    object_collection_name: Callable[[str], str]
    list_collection_name: Callable[[str], str]
    main_collection: str | None = None
    timestamp_template: str | None = None

    def date_literal(self, value: date) -> str:
        return self.date_template.format(iso=quote_string(to_iso_string(value)))

    def timestamp_literal(self, instant: date) -> str:
        if self.timestamp_template is not None:
            return self.timestamp_template
        return self.date_literal(instant)

    def main_collection_name(self, target_name: str) -> str:
        return self.main_collection or target_name


MONGODB = Dialect(
    backend=Backend.MONGODB,
    flatten_separator=".",
    date_template="ISODate({iso})",
    id_kind=IdKind.OBJECT_ID,
    object_collection_name=_pluralize,
    list_collection_name=_pluralize,
)

FIREBASE = Dialect(
    backend=Backend.FIREBASE,
    flatten_separator="_",
    date_template="new Date({iso})",
    id_kind=IdKind.SHORT,
    object_collection_name=_pluralize,
    list_collection_name=_pluralize,
    timestamp_template="serverTimestamp()",
)

DYNAMODB = Dialect(
    backend=Backend.DYNAMODB,
    flatten_separator="_",
    date_template="{iso}",
    id_kind=IdKind.SHORT,
    object_collection_name=_capitalize,
    list_collection_name=lambda key: _singularize(_capitalize(key)),
    main_collection="Main",
)

COUCHDB = Dialect(
    backend=Backend.COUCHDB,
    flatten_separator="_",
    date_template="{iso}",
    id_kind=IdKind.SHORT,
    object_collection_name=lambda key: key,
    list_collection_name=_singularize,
    main_collection="main",
)

_DIALECTS = {dialect.backend: dialect for dialect in (MONGODB, FIREBASE, DYNAMODB, COUCHDB)}


def get_dialect(backend: Backend) -> Dialect:
    return _DIALECTS[backend]
