"""Value serialization into backend literal syntax."""

from json2nosql.serialize.dialects import Dialect, IdKind, get_dialect
from json2nosql.serialize.literals import (
    SerializationError,
    format_number,
    js_identifier,
    quote_string,
    render_key,
    render_value,
    to_iso_string,
)

__all__ = [
    "Dialect",
    "IdKind",
    "SerializationError",
    "format_number",
    "get_dialect",
    "js_identifier",
    "quote_string",
    "render_key",
    "render_value",
    "to_iso_string",
]
