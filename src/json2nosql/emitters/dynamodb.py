"""AWS DynamoDB (SDK v3 document client) code emitter."""

from __future__ import annotations

from json2nosql.emitters.base import (
    Emitter,
    RenderContext,
    render_object,
    render_object_list,
)
from json2nosql.indexes.advisor import IndexAdvice
from json2nosql.models.options import Backend, GenerationOptions
from json2nosql.serialize.literals import quote_string, render_key, to_iso_string
from json2nosql.transform.documents import Reference, ShapedDocument

# BatchWriteItem accepts at most 25 put/delete requests per call.
BATCH_WRITE_LIMIT = 25

_TRY_CLOSE = (
    "  } catch (err) {\n"
    '    console.error("Error:", err);\n'
    "  }\n"
    "}\n\n"
)


def _resource_name(table_name: str) -> str:
    cleaned = "".join(char for char in table_name if char.isalnum())
    return f"{cleaned or 'Dynamo'}Table"


class DynamoEmitter(Emitter):
    """Emits ``BatchWriteCommand``/``PutCommand`` calls for a single table."""

    backend = Backend.DYNAMODB
    array_target = "Items"
    empty_target = "DynamoTable"

    def explicit_target(self, options: GenerationOptions) -> str | None:
        return options.table_name

    def reference_entries(self, reference: Reference) -> list[str]:
        type_entry = f"{render_key(reference.field + 'Type')}: {quote_string(reference.collection)}"
        if reference.many:
            ids = ", ".join(quote_string(key) for key in reference.ids)
            return [f"{render_key(reference.field + 'Ids')}: [{ids}]", type_entry]
        return [
            f"{render_key(reference.field + 'Id')}: {quote_string(reference.ids[0])}",
            type_entry,
        ]

    def _iso_now(self, context: RenderContext) -> str:
        return quote_string(to_iso_string(context.now))

    def _item_entries(
        self, document: ShapedDocument, position: int, context: RenderContext
    ) -> list[str]:
        entries = [f"id: {quote_string(document.key or str(position))}"]
        if context.options.sort_key:
            entries.append(f"{render_key(context.options.sort_key)}: {self._iso_now(context)}")
        entries.extend(self.timestamp_entries(context))
        entries.extend(self.field_entries(document))
        return entries

    def _put_command(self, table: str, comment: str, entries: list[str]) -> str:
        return (
            f"    // {comment}\n"
            "    await docClient.send(\n"
            "      new PutCommand({\n"
            f"        TableName: {quote_string(table)},\n"
            f"        Item: {render_object(entries, 8)}\n"
            "      })\n"
            "    );\n\n"
        )

    def _put_each(
        self, context: RenderContext, *, function_name: str, comment: str, label: str
    ) -> str:
        documents = context.plan.main_documents
        result = f"// {comment}\n"
        result += f"async function {function_name}() {{\n"
        result += "  try {\n"
        for position, document in enumerate(documents, start=1):
            result += self._put_command(
                context.target,
                f"Item {position}",
                self._item_entries(document, position, context),
            )
        message = f"Success - {len(documents)} {label} added to {context.target}"
        result += f"    console.log({quote_string(message)});\n"
        return result + _TRY_CLOSE

    def _batch_write(self, context: RenderContext) -> str:
        result = "// Function to add items using BatchWriteCommand\n"
        result += "async function addNestedItems() {\n"
        result += "  const items = [];\n\n"
        for position, document in enumerate(context.plan.main_documents, start=1):
            entries = self._item_entries(document, position, context)
            result += f"  // Item {position}\n"
            result += "  items.push({\n"
            result += "    PutRequest: {\n"
            result += f"      Item: {render_object(entries, 6)}\n"
            result += "    }\n"
            result += "  });\n\n"
        result += "  const command = new BatchWriteCommand({\n"
        result += "    RequestItems: {\n"
        result += f"      {quote_string(context.target)}: items\n"
        result += "    }\n"
        result += "  });\n\n"
        result += "  try {\n"
        result += "    const response = await docClient.send(command);\n"
        result += (
            f"    console.log({quote_string(f'Success - items added to {context.target}')});\n"
        )
        result += "    return response;\n"
        return result + _TRY_CLOSE

    def render_header(self, context: RenderContext) -> str:
        return (
            "// AWS DynamoDB Code\n"
            "// Requires AWS SDK to be initialized in your project\n\n"
            "// Import AWS SDK modules\n"
            'import { DynamoDBClient } from "@aws-sdk/client-dynamodb";\n'
            "import { DynamoDBDocumentClient, PutCommand, BatchWriteCommand } "
            'from "@aws-sdk/lib-dynamodb";\n\n'
            "// Initialize DynamoDB client\n"
            'const client = new DynamoDBClient({ region: "us-east-1" });\n'
            "const docClient = DynamoDBDocumentClient.from(client);\n\n"
        )

    def render_nested(self, context: RenderContext) -> str:
        result = "// Nested document structure\n"
        if len(context.plan.main_documents) <= BATCH_WRITE_LIMIT:
            return result + self._batch_write(context)
        return result + self._put_each(
            context,
            function_name="addNestedItems",
            comment="Function to add items using individual PutCommand",
            label="items",
        )

    def render_flat(self, context: RenderContext) -> str:
        return "// Flat document structure\n" + self._put_each(
            context,
            function_name="addFlatItems",
            comment="Function to add flattened items",
            label="flat items",
        )

    def render_references(self, context: RenderContext) -> str:
        result = "// Referenced document structure using single table design\n"
        result += "// This approach uses a single table with different item types\n\n"
        result += "// Function to add items with references\n"
        result += "async function addReferencedItems() {\n"
        result += "  try {\n"
        for entity_type, documents in context.plan.collections.items():
            for position, document in enumerate(documents, start=1):
                key = f"{entity_type}#{document.key}"
                entries = [
                    f"PK: {quote_string(key)}",
                    f"SK: {quote_string(key)}",
                    f"type: {quote_string(entity_type)}",
                    f"id: {quote_string(document.key or str(position))}",
                ]
                entries.extend(self.timestamp_entries(context))
                entries.extend(self.field_entries(document))
                result += self._put_command(
                    context.target, f"{entity_type} item {position}", entries
                )
        if len(context.plan.collections) > 1:
            result += "    // Note: In a real application, you would create relationships\n"
            result += "    // between entities using GSIs (Global Secondary Indexes)\n"
            result += '    // Example: PK: "Main#123", SK: "RelatedEntity#456"\n\n'
        message = f"Success - items added to {context.target} with references"
        result += f"    console.log({quote_string(message)});\n"
        return result + _TRY_CLOSE

    def render_array_wrapped(self, context: RenderContext) -> str:
        plan = context.plan
        container = plan.container
        assert container is not None
        items = [
            [f"id: {quote_string(item.key or f'item-{position}')}"] + self.field_entries(item)
            for position, item in enumerate(plan.main_documents, start=1)
        ]
        entries = [f"id: {quote_string(container.key or 'main-item')}"]
        entries.extend(self.timestamp_entries(context))
        entries.append(f"items: {render_object_list(items, 10)}")

        result = "// Array-based document structure\n"
        result += "// Function to add a single item with array of sub-items\n"
        result += "async function addArrayBasedItem() {\n"
        result += "  try {\n"
        result += self._put_command(
            context.target, "Create a single item with sub-items array", entries
        )
        message = f"Success - array-based item added to {context.target}"
        result += f"    console.log({quote_string(message)});\n"
        return result + _TRY_CLOSE

    def render_indexes(self, context: RenderContext, advice: IndexAdvice) -> str:
        table = context.target
        result = "// DynamoDB Index Suggestions\n"
        result += "// These are suggestions for Global Secondary Indexes (GSIs)\n\n"
        if not advice.has_candidates:
            return result + "// No obvious index candidates found in this data structure\n\n"

        result += "// CloudFormation template snippet for GSIs\n"
        result += "/*\n"
        result += "Resources:\n"
        result += f"  {_resource_name(table)}:\n"
        result += "    Type: AWS::DynamoDB::Table\n"
        result += "    Properties:\n"
        result += f"      TableName: {table}\n"
        result += "      AttributeDefinitions:\n"
        result += "        - AttributeName: id\n"
        result += "          AttributeType: S\n"
        for field in advice.fields:
            result += f"        - AttributeName: {field}\n"
            result += "          AttributeType: S\n"
        result += "      KeySchema:\n"
        result += "        - AttributeName: id\n"
        result += "          KeyType: HASH\n"
        result += "      GlobalSecondaryIndexes:\n"
        gsis = []
        for field in advice.fields:
            gsis.append(
                f"        - IndexName: {field}Index\n"
                "          KeySchema:\n"
                f"            - AttributeName: {field}\n"
                "              KeyType: HASH\n"
                "          Projection:\n"
                "            ProjectionType: ALL\n"
            )
        result += "\n".join(gsis)
        result += "*/\n\n"

        first = advice.fields[0]
        result += "// AWS CLI command example:\n"
        result += "// aws dynamodb update-table \\\n"
        result += f"//   --table-name {table} \\\n"
        result += f"//   --attribute-definitions AttributeName={first},AttributeType=S \\\n"
        result += (
            '//   --global-secondary-index-updates "[{\\"Create\\":{\\"IndexName\\":'
            f'\\"{first}Index\\",\\"KeySchema\\":[{{\\"AttributeName\\":\\"{first}\\",'
            '\\"KeyType\\":\\"HASH\\"}],\\"Projection\\":{\\"ProjectionType\\":\\"ALL\\"}}}]"\n\n'
        )
        return result
