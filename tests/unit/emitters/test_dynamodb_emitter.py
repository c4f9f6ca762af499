"""Tests for json2nosql.emitters.dynamodb."""

from __future__ import annotations

from json2nosql.emitters.dynamodb import BATCH_WRITE_LIMIT

REFERENCED = {
    "name": "Ada",
    "profile": {"city": "London"},
    "tags": [{"label": "a"}, {"label": "b"}],
}


# ---------------------------------------------------------------------------
# Nested writes
# ---------------------------------------------------------------------------


def test_small_nested_input_uses_batch_write(make_emitter) -> None:
    code = make_emitter("dynamodb").generate([{"name": "Ada"}], "nested")

    assert "async function addNestedItems() {" in code
    assert (
        "  // Item 1\n"
        "  items.push({\n"
        "    PutRequest: {\n"
        "      Item: {\n"
        '        id: "1",\n'
        '        name: "Ada"\n'
        "      }\n"
        "    }\n"
        "  });\n"
    ) in code
    assert '      "Items": items\n' in code
    assert "new BatchWriteCommand(" in code


def test_batch_limit_boundary(make_emitter) -> None:
    emitter = make_emitter("dynamodb")
    at_limit = [{"n": index} for index in range(BATCH_WRITE_LIMIT)]
    over_limit = [{"n": index} for index in range(BATCH_WRITE_LIMIT + 1)]

    batched = emitter.generate(at_limit, "nested")
    individual = emitter.generate(over_limit, "nested")

    assert BATCH_WRITE_LIMIT == 25
    assert "new BatchWriteCommand(" in batched
    assert "new PutCommand(" not in batched
    assert "new BatchWriteCommand(" not in individual
    assert individual.count("new PutCommand(") == 26


def test_sort_key_and_timestamps(make_emitter) -> None:
    code = make_emitter("dynamodb").generate(
        [{"name": "Ada"}],
        "nested",
        {"sortKey": "sk", "addTimestamps": True, "tableName": "Users"},
    )

    assert (
        '        id: "1",\n'
        '        sk: "2024-01-02T03:04:05.000Z",\n'
        '        createdAt: "2024-01-02T03:04:05.000Z",\n'
        '        updatedAt: "2024-01-02T03:04:05.000Z",\n'
        '        name: "Ada"\n'
    ) in code
    assert '      "Users": items\n' in code


def test_ids_replace_positions(make_emitter) -> None:
    code = make_emitter("dynamodb").generate([{"a": 1}], "nested", {"addIds": True})

    assert 'id: "id000001",' in code
    assert 'id: "1"' not in code


# ---------------------------------------------------------------------------
# Other structures
# ---------------------------------------------------------------------------


def test_flat_uses_put_per_item(make_emitter) -> None:
    code = make_emitter("dynamodb").generate(
        [{"name": "Ada", "address": {"city": "London"}}], "flat"
    )

    assert "async function addFlatItems() {" in code
    assert "new PutCommand({\n" in code
    assert '        TableName: "Items",\n' in code
    assert 'address_city: "London"' in code
    assert "new BatchWriteCommand(" not in code


def test_references_use_single_table_keys(make_emitter) -> None:
    artifact = make_emitter("dynamodb").build(REFERENCED, "references")
    code = artifact.code

    assert artifact.collections == {"Main": 1, "Profile": 1, "Tag": 2}
    assert artifact.target_name == "name"
    assert 'PK: "Main#id000001",' in code
    assert 'SK: "Main#id000001",' in code
    assert 'type: "Main",' in code
    assert 'profileId: "id000002",' in code
    assert 'profileType: "Profile",' in code
    assert 'tagsIds: ["id000003", "id000004"],' in code
    assert 'tagsType: "Tag"\n' in code
    assert 'PK: "Tag#id000004",' in code
    assert "// between entities using GSIs (Global Secondary Indexes)" in code


def test_array_wrapped_default_keys(make_emitter) -> None:
    code = make_emitter("dynamodb").generate([{"a": 1}, {"a": 2}], "arrays")

    assert "async function addArrayBasedItem() {" in code
    assert 'id: "main-item",' in code
    assert 'id: "item-1",' in code
    assert 'id: "item-2",' in code


def test_dates_render_as_iso_strings(make_emitter) -> None:
    code = make_emitter("dynamodb").generate(
        {"at": "2024-01-02T03:04:05Z"}, "nested", {"detectDates": True}
    )

    assert 'at: "2024-01-02T03:04:05.000Z"' in code


# ---------------------------------------------------------------------------
# Index suggestions
# ---------------------------------------------------------------------------


def test_index_suggestions(make_emitter) -> None:
    code = make_emitter("dynamodb").generate(
        [{"user_id": 1, "email": "a@b.com"}], "nested", {"addIndexes": True}
    )

    assert "  ItemsTable:\n" in code
    assert "      TableName: Items\n" in code
    assert "        - AttributeName: user_id\n" in code
    assert "        - IndexName: emailIndex\n" in code
    assert "//   --table-name Items \\\n" in code
    assert "AttributeName=user_id,AttributeType=S" in code


def test_no_index_candidates(make_emitter) -> None:
    code = make_emitter("dynamodb").generate([{"bio": "x"}], "nested", {"addIndexes": True})

    assert "// No obvious index candidates found in this data structure" in code
    assert "CloudFormation" not in code
