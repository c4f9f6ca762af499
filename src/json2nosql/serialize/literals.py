"""Rendering of JSON values into JavaScript-style source literals."""

from __future__ import annotations

import math
import re
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from json2nosql.serialize.dialects import Dialect

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_NON_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9_$]")
_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


class SerializationError(RuntimeError):
    """Raised when a value cannot be rendered as a backend literal."""


def is_identifier(name: str) -> bool:
    return bool(_IDENTIFIER.match(name))


def js_identifier(name: str) -> str:
    """Coerce an arbitrary name into a usable JavaScript variable name."""
    cleaned = _NON_IDENTIFIER_CHARS.sub("_", name)
    if not cleaned:
        return "_"
    if cleaned[0].isdigit():
        return f"_{cleaned}"
    return cleaned


def quote_string(value: str) -> str:
    return '"' + "".join(_STRING_ESCAPES.get(char, char) for char in value) + '"'


def render_key(key: str) -> str:
    """Emit bare identifiers, quote everything else (``"address.city"``)."""
    return key if is_identifier(key) else quote_string(key)


def to_iso_string(value: date) -> str:
    """Format like JavaScript ``Date.prototype.toISOString``."""
    if isinstance(value, datetime):
        instant = value.astimezone(UTC) if value.tzinfo else value
    else:
        instant = datetime(value.year, value.month, value.day)
    return f"{instant:%Y-%m-%dT%H:%M:%S}.{instant.microsecond // 1000:03d}Z"


def format_number(value: float) -> str:
    """Format a finite float the way JavaScript ``Number#toString`` does.

    ``1e16`` prints as ``10000000000000000`` and ``1e-07`` as ``1e-7``.
    """
    if value == 0:
        return "0"
    sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    text = "".join(map(str, digits))
    size = len(text)
    point = exponent + size
    prefix = "-" if sign else ""
    if size <= point <= 21:
        return prefix + text + "0" * (point - size)
    if 0 < point <= 21:
        return f"{prefix}{text[:point]}.{text[point:]}"
    if -6 < point <= 0:
        return prefix + "0." + "0" * -point + text
    power = point - 1
    mantissa = text if size == 1 else f"{text[0]}.{text[1:]}"
    return f"{prefix}{mantissa}e{power:+d}"


def is_date_value(value: object) -> bool:
    return isinstance(value, date)


def render_value(value: Any, dialect: Dialect) -> str:
    """Render ``value`` using the literal syntax of ``dialect``."""
    return _render(value, dialect, active=set())


def _render(value: Any, dialect: Dialect, *, active: set[int]) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(f"Cannot render non-finite number: {value!r}")
        return format_number(value)
    if isinstance(value, str):
        return quote_string(value)
    if is_date_value(value):
        return dialect.date_literal(value)
    if isinstance(value, (list, tuple, dict)):
        marker = id(value)
        if marker in active:
            raise SerializationError("Cannot render cyclic structure.")
        active.add(marker)
        try:
            if isinstance(value, dict):
                entries = []
                for key, item in value.items():
                    if not isinstance(key, str):
                        raise SerializationError(
                            f"Object keys must be strings, got {type(key).__name__}."
                        )
                    entries.append(
                        f"{render_key(key)}: {_render(item, dialect, active=active)}"
                    )
                return "{ " + ", ".join(entries) + " }" if entries else "{}"
            return "[" + ", ".join(
                _render(item, dialect, active=active) for item in value
            ) + "]"
        finally:
            active.discard(marker)
    raise SerializationError(
        f"Unsupported value type for serialization: {type(value).__name__}"
    )
