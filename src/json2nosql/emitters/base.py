"""Backend-independent emitter contract and rendering helpers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from json2nosql.config import Settings
from json2nosql.indexes.advisor import IndexAdvice, advise_indexes
from json2nosql.models.artifact import GeneratedArtifact
from json2nosql.models.options import (
    Backend,
    GenerationOptions,
    Structure,
    UnsupportedStructureError,
    coerce_options,
    parse_structure,
)
from json2nosql.serialize.dialects import Dialect, IdKind, get_dialect
from json2nosql.serialize.literals import js_identifier, render_key, render_value
from json2nosql.sources import Clock, IdSource, RandomIdSource, SystemClock
from json2nosql.transform.documents import (
    Reference,
    ShapedDocument,
    convert_date_strings,
    ensure_document_root,
)
from json2nosql.transform.shaping import ShapePlan, shape_documents

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderContext:
    """Per-call values shared by all template fragments."""

    target: str
    options: GenerationOptions
    now: datetime
    plan: ShapePlan


def render_entries(entries: list[str], indent: int) -> str:
    """Render ``key: value`` entries one per line, comma separated."""
    pad = " " * indent
    last = len(entries) - 1
    return "".join(
        f"{pad}{entry}{',' if index < last else ''}\n"
        for index, entry in enumerate(entries)
    )


def render_object(entries: list[str], indent: int) -> str:
    """Render a multi-line object literal whose closing brace sits at ``indent``."""
    return "{\n" + render_entries(entries, indent + 2) + " " * indent + "}"


def render_object_list(objects: list[list[str]], indent: int) -> str:
    """Render ``[ {...}, {...} ]`` with each object on its own lines."""
    if not objects:
        return "[]"
    inner = " " * (indent + 2)
    body = ",\n".join(f"{inner}{render_object(entries, indent + 2)}" for entries in objects)
    return "[\n" + body + "\n" + " " * indent + "]"


def unique_identifiers(names: Iterable[str]) -> dict[str, str]:
    """Map each collection name to a distinct JavaScript identifier.

    Names that sanitize to the same identifier get a numeric suffix, so
    ``a-bs`` and ``a_bs`` become ``a_bs`` and ``a_bs2``.
    """
    used: set[str] = set()
    identifiers: dict[str, str] = {}
    for name in names:
        base = js_identifier(name)
        candidate, counter = base, 1
        while candidate in used:
            counter += 1
            candidate = f"{base}{counter}"
        used.add(candidate)
        identifiers[name] = candidate
    return identifiers


class Emitter(ABC):
    """Turns a JSON document into insertion code for one backend."""

    backend: ClassVar[Backend]
    array_target: ClassVar[str] = "items"
    empty_target: ClassVar[str] = "collection"

    def __init__(
        self,
        *,
        id_source: IdSource | None = None,
        clock: Clock | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.clock = clock or SystemClock()
        self.id_source = id_source or RandomIdSource(clock=self.clock)
        self.settings = settings or Settings()
        self.dialect: Dialect = get_dialect(self.backend)

    def generate(
        self,
        document: Any,
        structure: Structure | str,
        options: GenerationOptions | dict[str, Any] | None = None,
    ) -> str:
        """Return insertion code for ``document``."""
        return self.build(document, structure, options).code

    def build(
        self,
        document: Any,
        structure: Structure | str,
        options: GenerationOptions | dict[str, Any] | None = None,
    ) -> GeneratedArtifact:
        """Return insertion code together with generation metadata."""
        resolved_options = coerce_options(options)
        resolved_structure = self.resolve_structure(structure)
        ensure_document_root(document)

        target = self.resolve_target_name(document, resolved_options)
        plan = shape_documents(
            document,
            resolved_structure,
            self.dialect,
            main_collection=self.dialect.main_collection_name(target),
            new_id=self.new_id,
            add_ids=resolved_options.add_ids,
            detect_dates=resolved_options.detect_dates,
        )
        logger.debug(
            "Shaped %d document(s) into %d collection(s)",
            plan.document_count,
            len(plan.collections),
            extra={"backend": self.backend.value, "structure": resolved_structure.value},
        )
        context = RenderContext(
            target=target,
            options=resolved_options,
            now=self.clock.now(),
            plan=plan,
        )

        parts = [self.render_header(context), self.render_body(context)]
        advice = IndexAdvice()
        if resolved_options.add_indexes:
            sample_source = (
                convert_date_strings(document)
                if resolved_options.detect_dates
                else document
            )
            advice = advise_indexes(sample_source)
            parts.append(self.render_indexes(context, advice))
        parts.append(self.render_footer(context))

        return GeneratedArtifact(
            backend=self.backend,
            structure=resolved_structure,
            target_name=target,
            document_count=plan.document_count,
            collections=plan.collection_sizes(),
            index_fields=advice.fields,
            code="".join(parts),
        )

    def resolve_structure(self, structure: Structure | str) -> Structure:
        try:
            return parse_structure(structure)
        except UnsupportedStructureError:
            if self.settings.strict_structure:
                raise
            logger.warning(
                "Unknown document structure %r, falling back to nested",
                structure,
                extra={"backend": self.backend.value},
            )
            return Structure.NESTED

    def explicit_target(self, options: GenerationOptions) -> str | None:
        return options.collection_name

    def resolve_target_name(self, document: Any, options: GenerationOptions) -> str:
        explicit = self.explicit_target(options)
        if explicit:
            return explicit
        if isinstance(document, list):
            return self.array_target
        if isinstance(document, dict) and document:
            key = next(iter(document))
            if key.strip():
                return key
        return self.empty_target

    def db_name(self, options: GenerationOptions) -> str:
        return options.db_name or self.settings.default_db_name

    def new_id(self) -> str:
        if self.dialect.id_kind is IdKind.OBJECT_ID:
            return self.id_source.object_id()
        return self.id_source.short_id()

    def literal(self, value: Any) -> str:
        return render_value(value, self.dialect)

    def timestamp_entries(self, context: RenderContext) -> list[str]:
        if not context.options.add_timestamps:
            return []
        stamp = self.dialect.timestamp_literal(context.now)
        return [f"createdAt: {stamp}", f"updatedAt: {stamp}"]

    def field_entries(self, document: ShapedDocument) -> list[str]:
        entries: list[str] = []
        for name, value in document.fields.items():
            if isinstance(value, Reference):
                entries.extend(self.reference_entries(value))
            else:
                entries.append(f"{render_key(name)}: {self.literal(value)}")
        return entries

    def render_body(self, context: RenderContext) -> str:
        renderers = {
            Structure.NESTED: self.render_nested,
            Structure.FLAT: self.render_flat,
            Structure.REFERENCES: self.render_references,
            Structure.ARRAY_WRAPPED: self.render_array_wrapped,
        }
        return renderers[context.plan.structure](context)

    def render_footer(self, context: RenderContext) -> str:
        return ""

    @abstractmethod
    def reference_entries(self, reference: Reference) -> list[str]:
        """Render the link fields that replace an extracted value."""

    @abstractmethod
    def render_header(self, context: RenderContext) -> str:
        """Render imports, client setup and other boilerplate."""

    @abstractmethod
    def render_nested(self, context: RenderContext) -> str:
        """Render documents that keep their hierarchy."""

    @abstractmethod
    def render_flat(self, context: RenderContext) -> str:
        """Render flattened documents."""

    @abstractmethod
    def render_references(self, context: RenderContext) -> str:
        """Render the main collection and every extracted collection."""

    @abstractmethod
    def render_array_wrapped(self, context: RenderContext) -> str:
        """Render one container document holding all items."""

    @abstractmethod
    def render_indexes(self, context: RenderContext, advice: IndexAdvice) -> str:
        """Render index suggestions in backend syntax."""
