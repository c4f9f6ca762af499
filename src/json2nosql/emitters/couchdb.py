"""CouchDB (nano client) code emitter."""

from __future__ import annotations

from typing import Any

from json2nosql.emitters.base import (
    Emitter,
    RenderContext,
    render_entries,
    render_object,
    render_object_list,
    unique_identifiers,
)
from json2nosql.indexes.advisor import IndexAdvice
from json2nosql.models.options import Backend, GenerationOptions, Structure
from json2nosql.serialize.literals import quote_string, render_key
from json2nosql.transform.documents import Reference, ShapedDocument

_ENTRYPOINTS = {
    Structure.NESTED: "addNestedDocuments",
    Structure.FLAT: "addFlatDocuments",
    Structure.REFERENCES: "addReferencedDocuments",
    Structure.ARRAY_WRAPPED: "addArrayBasedDocument",
}


def _index_call(fields: list[str], name: str, label: str, indent: str = "  ") -> str:
    field_list = ", ".join(quote_string(field) for field in fields)
    return (
        f"{indent}try {{\n"
        f"{indent}  await db.createIndex({{\n"
        f"{indent}    index: {{ fields: [{field_list}] }},\n"
        f"{indent}    name: {quote_string(name)}\n"
        f"{indent}  }});\n"
        f"{indent}  console.log({quote_string(f'{label} created successfully')});\n"
        f"{indent}}} catch (err) {{\n"
        f"{indent}  console.error({quote_string(f'Error creating {label}:')}, err);\n"
        f"{indent}}}\n"
    )


class CouchEmitter(Emitter):
    """Emits ``db.insert``/``db.bulk`` calls plus a ``main()`` runner."""

    backend = Backend.COUCHDB

    def resolve_target_name(self, document: Any, options: GenerationOptions) -> str:
        return self.db_name(options)

    def _doc_id(self, collection: str, key: str) -> str:
        return quote_string(f"{collection}_{key}")

    def reference_entries(self, reference: Reference) -> list[str]:
        if reference.many:
            ids = ", ".join(self._doc_id(reference.collection, key) for key in reference.ids)
            return [f"{render_key(reference.field + 'Ids')}: [{ids}]"]
        return [
            f"{render_key(reference.field + 'Id')}: "
            f"{self._doc_id(reference.collection, reference.ids[0])}"
        ]

    def _document_entries(
        self, document: ShapedDocument, context: RenderContext
    ) -> list[str]:
        entries = [f"_id: {quote_string(document.key)}"] if document.key else []
        entries.extend(self.timestamp_entries(context))
        entries.extend(self.field_entries(document))
        return entries

    def _insert_documents(
        self, context: RenderContext, *, function_name: str, comment: str, label: str
    ) -> str:
        documents = context.plan.main_documents
        result = f"// {comment}\n"
        result += f"async function {function_name}() {{\n"
        if len(documents) == 1:
            entries = self._document_entries(documents[0], context)
            result += f"  // Prepare {label}\n"
            result += f"  const doc = {render_object(entries, 2)};\n\n"
            result += "  try {\n"
            result += "    const response = await db.insert(doc);\n"
            success = f"{label[:1].upper()}{label[1:]} inserted successfully:"
            result += f"    console.log({quote_string(success)}, response.id);\n"
            result += "    return response;\n"
            result += "  } catch (err) {\n"
            result += f"    console.error({quote_string(f'Error inserting {label}:')}, err);\n"
        else:
            objects = [self._document_entries(document, context) for document in documents]
            result += "  // Prepare documents for bulk insert\n"
            result += f"  const docs = {render_object_list(objects, 2)};\n\n"
            result += "  try {\n"
            result += "    const response = await db.bulk({ docs });\n"
            result += (
                '    console.log("Bulk insert successful:", response.length, '
                f"{quote_string(f'{label}s inserted')});\n"
            )
            result += "    return response;\n"
            result += "  } catch (err) {\n"
            result += f"    console.error({quote_string(f'Error inserting {label}s:')}, err);\n"
        result += "    throw err;\n"
        result += "  }\n"
        result += "}\n\n"
        return result

    def render_header(self, context: RenderContext) -> str:
        db_name = quote_string(context.target)
        created = quote_string(f"Database '{context.target}' created")
        exists = quote_string(f"Database '{context.target}' already exists")
        return (
            "// CouchDB Code\n"
            "// Requires nano (CouchDB client) to be installed\n\n"
            "// Import nano\n"
            'const nano = require("nano")("http://localhost:5984");\n\n'
            "// Create database if it doesn't exist\n"
            "async function createDatabase() {\n"
            "  try {\n"
            f"    await nano.db.create({db_name});\n"
            f"    console.log({created});\n"
            "  } catch (err) {\n"
            "    if (err.statusCode === 412) {\n"
            f"      console.log({exists});\n"
            "    } else {\n"
            '      console.error("Error creating database:", err);\n'
            "    }\n"
            "  }\n"
            "}\n\n"
            "// Get database reference\n"
            f"const db = nano.use({db_name});\n\n"
        )

    def render_nested(self, context: RenderContext) -> str:
        return "// Nested document structure\n" + self._insert_documents(
            context,
            function_name=_ENTRYPOINTS[Structure.NESTED],
            comment="Function to add nested documents",
            label="document",
        )

    def render_flat(self, context: RenderContext) -> str:
        return "// Flat document structure\n" + self._insert_documents(
            context,
            function_name=_ENTRYPOINTS[Structure.FLAT],
            comment="Function to add flat documents",
            label="flat document",
        )

    def render_references(self, context: RenderContext) -> str:
        result = "// Referenced document structure\n"
        result += "// Function to add documents with references\n"
        result += f"async function {_ENTRYPOINTS[Structure.REFERENCES]}() {{\n"
        identifiers = unique_identifiers(context.plan.collections)
        variables = []
        for doc_type, documents in context.plan.collections.items():
            variable = f"{identifiers[doc_type]}Docs"
            variables.append(variable)
            objects = []
            for document in documents:
                entries = [
                    f"_id: {self._doc_id(doc_type, document.key or '')}",
                    f"type: {quote_string(doc_type)}",
                ]
                entries.extend(self.timestamp_entries(context))
                entries.extend(self.field_entries(document))
                objects.append(entries)
            result += f"  // {doc_type} documents\n"
            result += f"  const {variable} = {render_object_list(objects, 2)};\n\n"
        spread = [f"...{variable}" for variable in variables]
        result += "  // Combine all documents for bulk insert\n"
        result += f"  const allDocs = [\n{render_entries(spread, 4)}  ];\n\n"
        result += "  try {\n"
        result += "    const response = await db.bulk({ docs: allDocs });\n"
        result += (
            '    console.log("Bulk insert successful:", response.length, '
            '"documents with references inserted");\n'
        )
        result += "    return response;\n"
        result += "  } catch (err) {\n"
        result += '    console.error("Error inserting documents with references:", err);\n'
        result += "    throw err;\n"
        result += "  }\n"
        result += "}\n\n"
        return result

    def render_array_wrapped(self, context: RenderContext) -> str:
        plan = context.plan
        container = plan.container
        assert container is not None
        items = []
        for item in plan.main_documents:
            entries = [f"id: {quote_string(item.key)}"] if item.key else []
            items.append(entries + self.field_entries(item))
        entries = [f"_id: {quote_string(container.key)}"] if container.key else []
        entries.extend(self.timestamp_entries(context))
        entries.append(f"items: {render_object_list(items, 4)}")

        result = "// Array-based document structure\n"
        result += "// Function to add array-based document\n"
        result += f"async function {_ENTRYPOINTS[Structure.ARRAY_WRAPPED]}() {{\n"
        result += "  // Prepare document with items array\n"
        result += f"  const doc = {render_object(entries, 2)};\n\n"
        result += "  try {\n"
        result += "    const response = await db.insert(doc);\n"
        result += (
            '    console.log("Array-based document inserted successfully:", response.id);\n'
        )
        result += "    return response;\n"
        result += "  } catch (err) {\n"
        result += '    console.error("Error inserting array-based document:", err);\n'
        result += "    throw err;\n"
        result += "  }\n"
        result += "}\n\n"
        return result

    def render_indexes(self, context: RenderContext, advice: IndexAdvice) -> str:
        result = "// CouchDB Index Suggestions\n"
        result += "// Function to create indexes\n"
        result += "async function createIndexes() {\n"
        if not advice.has_candidates:
            result += '  console.log("No obvious index candidates found in this data structure");\n'
            return result + "}\n\n"

        result += "  // Create type index for document types\n"
        result += _index_call(["type"], "type-index", "Type index") + "\n"
        for field in advice.fields:
            result += f"  // Create index for {field}\n"
            result += _index_call([field], f"{field}-index", f"{field} index") + "\n"
        if advice.compound:
            result += "  // Create compound index\n"
            result += _index_call(advice.compound, "compound-index", "Compound index")
        return result + "}\n\n"

    def render_footer(self, context: RenderContext) -> str:
        result = "// Main function to execute all operations\n"
        result += "async function main() {\n"
        result += "  await createDatabase();\n"
        result += f"  await {_ENTRYPOINTS[context.plan.structure]}();\n"
        if context.options.add_indexes:
            result += "  await createIndexes();\n"
        result += "}\n\n"
        result += "// Run the main function\n"
        result += 'main().catch(err => console.error("Error:", err));\n'
        return result
