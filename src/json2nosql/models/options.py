"""Generation options and backend/structure enumerations."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class UnsupportedStructureError(ValueError):
    """Raised when a structure policy is not recognized."""


class UnsupportedBackendError(UnsupportedStructureError):
    """Raised when a backend target is not recognized."""


class InvalidOptionsError(ValueError):
    """Raised when generation options fail validation."""


class Backend(str, Enum):
    MONGODB = "mongodb"
    FIREBASE = "firebase"
    DYNAMODB = "dynamodb"
    COUCHDB = "couchdb"


class Structure(str, Enum):
    NESTED = "nested"
    FLAT = "flat"
    REFERENCES = "references"
    ARRAY_WRAPPED = "arrays"


def _lookup(enum_type: type[Enum], value: object) -> Enum | None:
    if isinstance(value, enum_type):
        return value
    if not isinstance(value, str):
        return None
    normalized = value.strip().lower()
    for member in enum_type:
        if normalized in (member.value, member.name.lower()):
            return member
    return None


def parse_backend(value: Backend | str) -> Backend:
    """Resolve a backend from an enum member, value or member name."""
    backend = _lookup(Backend, value)
    if backend is None:
        supported = ", ".join(member.value for member in Backend)
        raise UnsupportedBackendError(
            f"Unsupported database type: {value!r}. Supported: {supported}."
        )
    return backend


def parse_structure(value: Structure | str) -> Structure:
    """Resolve a structure policy from an enum member, value or member name."""
    structure = _lookup(Structure, value)
    if structure is None:
        supported = ", ".join(member.value for member in Structure)
        raise UnsupportedStructureError(
            f"Unsupported document structure: {value!r}. Supported: {supported}."
        )
    return structure


class GenerationOptions(BaseModel):
    """Options recognized by every backend emitter."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    add_ids: bool = Field(default=False, alias="addIds")
    add_timestamps: bool = Field(default=False, alias="addTimestamps")
    add_indexes: bool = Field(default=False, alias="addIndexes")
    db_name: str | None = Field(default=None, alias="dbName")
    collection_name: str | None = Field(default=None, alias="collectionName")
    table_name: str | None = Field(default=None, alias="tableName")
    sort_key: str | None = Field(default=None, alias="sortKey")
    detect_dates: bool = Field(default=False, alias="detectDates")

    @field_validator("db_name", "collection_name", "table_name", "sort_key")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = value.strip()
        if not normalized:
            raise ValueError("value cannot be empty.")
        return normalized


def coerce_options(
    options: GenerationOptions | dict[str, Any] | None,
) -> GenerationOptions:
    """Validate a raw options mapping into ``GenerationOptions``."""
    if options is None:
        return GenerationOptions()
    if isinstance(options, GenerationOptions):
        return options
    try:
        return GenerationOptions.model_validate(options)
    except ValidationError as exc:
        messages = []
        for err in exc.errors():
            field = ".".join(str(item) for item in err["loc"]) or "options"
            messages.append(f"- {field}: {err['msg']}")
        raise InvalidOptionsError(
            "Invalid generation options:\n" + "\n".join(messages)
        ) from exc
