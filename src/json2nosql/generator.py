"""Top-level generation entrypoints."""

from __future__ import annotations

import logging
from typing import Any

from json2nosql.config import Settings
from json2nosql.emitters import create_emitter
from json2nosql.models.artifact import GeneratedArtifact
from json2nosql.models.options import Backend, GenerationOptions, Structure
from json2nosql.sources import Clock, IdSource

logger = logging.getLogger(__name__)


def generate_artifact(
    document: Any,
    backend: Backend | str,
    structure: Structure | str,
    options: GenerationOptions | dict[str, Any] | None = None,
    *,
    settings: Settings | None = None,
    id_source: IdSource | None = None,
    clock: Clock | None = None,
) -> GeneratedArtifact:
    """Generate insertion code for ``document`` with its metadata."""
    emitter = create_emitter(
        backend, id_source=id_source, clock=clock, settings=settings
    )
    logger.info(
        "Generating %s documents with %s structure",
        emitter.backend.value,
        structure.value if isinstance(structure, Structure) else structure,
        extra={"backend": emitter.backend.value},
    )
    artifact = emitter.build(document, structure, options)
    logger.info(
        "Generated %d document(s) for %s",
        artifact.document_count,
        artifact.target_name,
        extra={"backend": artifact.backend.value, "structure": artifact.structure.value},
    )
    return artifact


def generate(
    document: Any,
    backend: Backend | str,
    structure: Structure | str,
    options: GenerationOptions | dict[str, Any] | None = None,
    *,
    settings: Settings | None = None,
    id_source: IdSource | None = None,
    clock: Clock | None = None,
) -> str:
    """Generate insertion code for ``document`` on ``backend``."""
    return generate_artifact(
        document,
        backend,
        structure,
        options,
        settings=settings,
        id_source=id_source,
        clock=clock,
    ).code
