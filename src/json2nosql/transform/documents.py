"""Document root validation and the shaped-document model."""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

_ISO_DATETIME = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d{1,6})?)?(Z|[+-]\d{2}:\d{2})?$"
)


class InvalidInputError(ValueError):
    """Raised when a document root cannot be converted to NoSQL documents."""


InvalidDocumentError = InvalidInputError


@dataclass(frozen=True)
class Reference:
    """Link left in a parent document after its value was extracted."""

    field: str
    collection: str
    ids: tuple[str, ...]
    many: bool = False


@dataclass
class ShapedDocument:
    """One document ready for rendering.

    ``fields`` keeps the source field order; a value may be a ``Reference``
    when the source value moved to another collection.
    """

    fields: dict[str, Any] = field(default_factory=dict)
    key: str | None = None
    referenced: bool = False

    @property
    def data_field_names(self) -> list[str]:
        return [name for name, value in self.fields.items() if not isinstance(value, Reference)]


def ensure_document_root(document: Any) -> list[dict[str, Any]]:
    """Return a deep-copied document list or raise for non-document roots."""
    if isinstance(document, dict):
        return [copy.deepcopy(document)]
    if isinstance(document, list):
        for index, item in enumerate(document):
            if not isinstance(item, dict):
                raise InvalidInputError(
                    f"Array element at index {index} is {type(item).__name__}, "
                    "expected an object."
                )
        return copy.deepcopy(document)
    raise InvalidInputError(
        "Document root must be a JSON object or array, "
        f"got {type(document).__name__}."
    )


def convert_date_strings(value: Any) -> Any:
    """Replace full ISO-8601 date-time strings with ``datetime`` values."""
    if isinstance(value, str):
        if _ISO_DATETIME.match(value):
            try:
                return datetime.fromisoformat(value)
            except ValueError:
                return value
        return value
    if isinstance(value, list):
        return [convert_date_strings(item) for item in value]
    if isinstance(value, dict):
        return {key: convert_date_strings(item) for key, item in value.items()}
    return value
