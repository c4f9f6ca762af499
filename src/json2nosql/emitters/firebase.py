"""Firebase Firestore (modular SDK) code emitter."""

from __future__ import annotations

from json2nosql.emitters.base import (
    Emitter,
    RenderContext,
    render_object,
    render_object_list,
    unique_identifiers,
)
from json2nosql.indexes.advisor import IndexAdvice
from json2nosql.models.options import Backend
from json2nosql.serialize.literals import quote_string, render_key
from json2nosql.transform.documents import Reference, ShapedDocument


class FirebaseEmitter(Emitter):
    """Emits async functions that write documents with ``addDoc``/``setDoc``."""

    backend = Backend.FIREBASE

    def _doc_ref(self, collection: str, key: str) -> str:
        return f"doc(db, {quote_string(collection)}, {quote_string(key)})"

    def reference_entries(self, reference: Reference) -> list[str]:
        if reference.many:
            refs = ", ".join(self._doc_ref(reference.collection, key) for key in reference.ids)
            return [f"{render_key(reference.field + 'Refs')}: [{refs}]"]
        return [
            f"{render_key(reference.field + 'Ref')}: "
            f"{self._doc_ref(reference.collection, reference.ids[0])}"
        ]

    def _write_document(
        self,
        document: ShapedDocument,
        context: RenderContext,
        *,
        collection_ref: str,
        doc_var: str,
        assign_added: bool = False,
    ) -> str:
        entries = self.timestamp_entries(context) + self.field_entries(document)
        body = render_object(entries, 2)
        if document.key and (context.options.add_ids or document.referenced):
            return (
                f"  const {doc_var} = doc({collection_ref}, {quote_string(document.key)});\n"
                f"  await setDoc({doc_var}, {body});\n\n"
            )
        if assign_added:
            return f"  const {doc_var} = await addDoc({collection_ref}, {body});\n\n"
        return f"  await addDoc({collection_ref}, {body});\n\n"

    def _write_collection(
        self, context: RenderContext, *, function_name: str, comment: str, label: str
    ) -> str:
        plan = context.plan
        documents = plan.main_documents
        result = f"// {comment}\n"
        result += f"async function {function_name}() {{\n"
        result += (
            f"  const collectionRef = collection(db, {quote_string(plan.main_collection)});\n\n"
        )
        for index, document in enumerate(documents, start=1):
            result += f"  // Document {index}\n"
            result += self._write_document(
                document,
                context,
                collection_ref="collectionRef",
                doc_var=f"docRef{index}",
            )
        message = f"{len(documents)} {label} added to {plan.main_collection} collection"
        result += f"  console.log({quote_string(message)});\n"
        result += "}\n\n"
        return result

    def render_header(self, context: RenderContext) -> str:
        return (
            "// Firebase Firestore Code\n"
            "// Requires Firebase SDK to be initialized in your project\n\n"
            "// Import Firebase modules\n"
            "import { getFirestore, collection, doc, setDoc, addDoc, serverTimestamp } "
            'from "firebase/firestore";\n\n'
            "// Get Firestore instance\n"
            "const db = getFirestore();\n\n"
        )

    def render_nested(self, context: RenderContext) -> str:
        return "// Nested document structure\n" + self._write_collection(
            context,
            function_name="addNestedDocuments",
            comment="Function to add documents to Firestore",
            label="documents",
        )

    def render_flat(self, context: RenderContext) -> str:
        return "// Flat document structure\n" + self._write_collection(
            context,
            function_name="addFlatDocuments",
            comment="Function to add flat documents to Firestore",
            label="flat documents",
        )

    def render_references(self, context: RenderContext) -> str:
        result = "// Referenced document structure\n"
        result += "// Function to add documents with references to Firestore\n"
        result += "async function addReferencedDocuments() {\n"
        variables = unique_identifiers(context.plan.collections)
        for collection, documents in context.plan.collections.items():
            variable = variables[collection]
            result += f"  // Collection: {collection}\n"
            result += (
                f"  const {variable}Ref = collection(db, {quote_string(collection)});\n\n"
            )
            for index, document in enumerate(documents, start=1):
                result += f"  // {collection} document {index}\n"
                result += self._write_document(
                    document,
                    context,
                    collection_ref=f"{variable}Ref",
                    doc_var=f"{variable}Doc{index}",
                    assign_added=True,
                )
        result += '  console.log("Referenced documents added to Firestore");\n'
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
        entries = self.timestamp_entries(context)
        entries.append(f"items: {render_object_list(items, 4)}")
        body = render_object(entries, 2)

        result = "// Array-based document structure\n"
        result += "// Function to add array-based document to Firestore\n"
        result += "async function addArrayBasedDocument() {\n"
        result += (
            f"  const collectionRef = collection(db, {quote_string(plan.main_collection)});\n\n"
        )
        result += "  // Create a single document with items array\n"
        if container.key:
            result += f"  const docRef = doc(collectionRef, {quote_string(container.key)});\n"
            result += f"  await setDoc(docRef, {body});\n\n"
        else:
            result += f"  await addDoc(collectionRef, {body});\n\n"
        message = f"Array-based document added to {plan.main_collection} collection"
        result += f"  console.log({quote_string(message)});\n"
        result += "}\n\n"
        return result

    def render_indexes(self, context: RenderContext, advice: IndexAdvice) -> str:
        result = "// Index Suggestions for Firebase\n"
        result += "// Add these indexes in the Firebase console or using the Firebase CLI\n\n"
        if not advice.has_candidates:
            return result + "// No obvious index candidates found in this data structure\n\n"

        result += f"// Firebase indexes for collection: {context.target}\n"
        result += "/*\n"
        for field in advice.fields:
            result += f"  Field: {field}, Order: ASCENDING\n"
        if advice.compound:
            result += "\n  // Compound index suggestion:\n"
            for field in advice.compound:
                result += f"  Field: {field}, Order: ASCENDING\n"
        result += "*/\n\n"
        result += "// Firebase CLI command example:\n"
        result += "// firebase firestore:indexes --project your-project-id\n\n"
        return result
