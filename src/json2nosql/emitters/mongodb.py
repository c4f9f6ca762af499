"""MongoDB shell code emitter."""

from __future__ import annotations

from json2nosql.emitters.base import (
    Emitter,
    RenderContext,
    render_object,
    render_object_list,
)
from json2nosql.indexes.advisor import IndexAdvice
from json2nosql.models.options import Backend
from json2nosql.serialize.literals import is_identifier, quote_string, render_key
from json2nosql.transform.documents import Reference, ShapedDocument


def collection_accessor(name: str) -> str:
    if is_identifier(name):
        return f"db.{name}"
    return f"db.getCollection({quote_string(name)})"


class MongoEmitter(Emitter):
    """Emits ``insertMany``/``insertOne`` calls for the mongo shell."""

    backend = Backend.MONGODB

    def _object_id(self, value: str) -> str:
        return f"ObjectId({quote_string(value)})"

    def reference_entries(self, reference: Reference) -> list[str]:
        if reference.many:
            ids = ", ".join(self._object_id(item) for item in reference.ids)
            return [f"{render_key(reference.field + 'Refs')}: [{ids}]"]
        return [f"{render_key(reference.field + 'Ref')}: {self._object_id(reference.ids[0])}"]

    def _document_entries(
        self,
        document: ShapedDocument,
        context: RenderContext,
        *,
        timestamps: bool = True,
    ) -> list[str]:
        entries: list[str] = []
        if document.key and (context.options.add_ids or document.referenced):
            entries.append(f"_id: {self._object_id(document.key)}")
        if timestamps:
            entries.extend(self.timestamp_entries(context))
        entries.extend(self.field_entries(document))
        return entries

    def _insert_many(
        self, collection: str, documents: list[ShapedDocument], context: RenderContext
    ) -> str:
        objects = [self._document_entries(document, context) for document in documents]
        return (
            f"{collection_accessor(collection)}.insertMany("
            f"{render_object_list(objects, 0)});\n\n"
        )

    def render_header(self, context: RenderContext) -> str:
        return (
            "// MongoDB Shell Commands\n"
            "// Run these commands in MongoDB shell or MongoDB Compass\n\n"
            f"use {self.db_name(context.options)};\n\n"
        )

    def render_nested(self, context: RenderContext) -> str:
        plan = context.plan
        return "// Nested document structure\n" + self._insert_many(
            plan.main_collection, plan.main_documents, context
        )

    def render_flat(self, context: RenderContext) -> str:
        plan = context.plan
        return "// Flat document structure\n" + self._insert_many(
            plan.main_collection, plan.main_documents, context
        )

    def render_references(self, context: RenderContext) -> str:
        result = "// Referenced document structure\n"
        for collection, documents in context.plan.collections.items():
            result += f"// Collection: {collection}\n"
            result += self._insert_many(collection, documents, context)
        return result

    def render_array_wrapped(self, context: RenderContext) -> str:
        plan = context.plan
        container = plan.container
        assert container is not None
        entries = self._document_entries(container, context)
        items = [
            self._document_entries(item, context, timestamps=False)
            for item in plan.main_documents
        ]
        entries.append(f"items: {render_object_list(items, 2)}")
        return (
            "// Array-based document structure\n"
            f"{collection_accessor(plan.main_collection)}.insertOne("
            f"{render_object(entries, 0)});\n\n"
        )

    def render_indexes(self, context: RenderContext, advice: IndexAdvice) -> str:
        result = "// Index Suggestions\n"
        if not advice.has_candidates:
            return result + "// No obvious index candidates found in this data structure\n"

        accessor = collection_accessor(context.target)
        for field in advice.fields:
            result += (
                f"{accessor}.createIndex({{ {render_key(field)}: 1 }}, "
                f"{{ name: {quote_string(field + '_index')} }});\n"
            )
        if advice.compound:
            keys = ", ".join(f"{render_key(field)}: 1" for field in advice.compound)
            result += "\n// Compound Index Suggestion\n"
            result += (
                f"{accessor}.createIndex({{ {keys} }}, "
                '{ name: "compound_index" });\n'
            )
        return result
