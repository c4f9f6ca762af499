"""Typed generation payload returned by the pipeline."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from json2nosql.models.options import Backend, Structure


class GeneratedArtifact(BaseModel):
    """Generated insertion code plus the metadata used to produce it."""

    model_config = ConfigDict(extra="forbid")

    backend: Backend
    structure: Structure
    target_name: str = Field(min_length=1)
    document_count: int = Field(ge=0)
    collections: dict[str, int] = Field(default_factory=dict)
    index_fields: list[str] = Field(default_factory=list)
    code: str
