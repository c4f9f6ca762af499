"""Typed models shared across the generation pipeline."""

from json2nosql.models.artifact import GeneratedArtifact
from json2nosql.models.options import (
    Backend,
    GenerationOptions,
    InvalidOptionsError,
    Structure,
    UnsupportedBackendError,
    UnsupportedStructureError,
    coerce_options,
    parse_backend,
    parse_structure,
)

__all__ = [
    "Backend",
    "GeneratedArtifact",
    "GenerationOptions",
    "InvalidOptionsError",
    "Structure",
    "UnsupportedBackendError",
    "UnsupportedStructureError",
    "coerce_options",
    "parse_backend",
    "parse_structure",
]
