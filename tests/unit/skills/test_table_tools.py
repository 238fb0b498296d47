"""Tests for TableTools: every outcome comes back as a Success/Failure envelope."""

from __future__ import annotations

from botocore.exceptions import ClientError

from dynamo_readonly.models.results import Failure, Success
from dynamo_readonly.persistence.dynamodb_backend import DynamoDBTableReader
from dynamo_readonly.skills.table_tools import TABLE_INFO_UNAVAILABLE, TableTools, normalize
from tests.fakes import ScriptedResource, ScriptedTable

ORDERS_DESCRIPTION = {
    "TableName": "orders",
    "KeySchema": [
        {"AttributeName": "PK", "KeyType": "HASH"},
        {"AttributeName": "SK", "KeyType": "RANGE"},
    ],
    "AttributeDefinitions": [
        {"AttributeName": "PK", "AttributeType": "S"},
        {"AttributeName": "SK", "AttributeType": "S"},
    ],
}


LIST_DENIED = ClientError(
    {"Error": {"Code": "AccessDeniedException", "Message": "not authorized to perform ListTables"}},
    "ListTables",
)


def _scripted_tools(tables=None, descriptions=None, list_error=None) -> TableTools:
    return TableTools(DynamoDBTableReader(ScriptedResource(tables, descriptions, list_error)))


class TestNormalize:
    async def test_wraps_value_in_success(self):
        async def ok():
            return [1, 2]

        assert await normalize("op", ok) == Success(data=[1, 2])

    async def test_client_error_uses_service_message(self):
        async def boom():
            raise ClientError(
                {"Error": {"Code": "AccessDeniedException", "Message": "User is not authorized"}},
                "Scan",
            )

        result = await normalize("op", boom)
        assert result == Failure(message="User is not authorized")

    async def test_unexpected_error_still_becomes_failure(self):
        async def boom():
            raise RuntimeError("socket closed")

        result = await normalize("op", boom)
        assert not result.ok
        assert result.message == "socket closed"

    async def test_empty_message_falls_back_to_class_name(self):
        async def boom():
            raise KeyError()

        assert (await normalize("op", boom)).message == "KeyError"


class TestEnvelopes:
    async def test_list_tables_returns_names(self, tools):
        result = await tools.list_tables()
        assert result.ok
        assert sorted(result.data) == ["customers", "orders"]

    async def test_list_tables_failure(self):
        result = await _scripted_tools(list_error=LIST_DENIED).list_tables()
        assert result == Failure(message="not authorized to perform ListTables")

    async def test_describe_missing_table_is_failure(self, tools):
        result = await tools.describe_table({"tableName": "nope"})
        assert not result.ok
        assert "not found" in result.message.lower()

    async def test_query_without_key_condition_is_failure(self, tools):
        result = await tools.query_table({
            "tableName": "orders",
            "expressionAttributeValues": {":pk": "CUSTOMER#001"},
        })
        assert isinstance(result, Failure)
        assert "keyConditionExpression" in result.message

    async def test_backend_expression_error_is_failure(self, tools):
        result = await tools.query_table({
            "tableName": "orders",
            "keyConditionExpression": "PK = :missing",
            "expressionAttributeValues": {":pk": "CUSTOMER#001"},
        })
        assert not result.ok

    async def test_scan_uses_configured_default_limit(self, reader):
        result = await TableTools(reader, scan_limit=2).scan_table({"tableName": "orders"})
        assert len(result.data) == 2

    async def test_get_item_miss_is_success_with_no_data(self, tools):
        result = await tools.get_item({
            "tableName": "orders", "key": {"PK": "CUSTOMER#404", "SK": "ORDER#0000"},
        })
        assert result == Success(data=None)

    async def test_get_item_hit(self, tools):
        result = await tools.get_item({
            "tableName": "customers", "key": {"customerId": "001"},
        })
        assert result.data == {"customerId": "001", "displayName": "Customer 001"}

    async def test_count_items(self, tools):
        result = await tools.count_items({"tableName": "customers"})
        assert result == Success(data=3)

    async def test_count_without_count_field_is_zero(self):
        tools = _scripted_tools({"orders": ScriptedTable("orders", pages=[{"Items": []}])})
        assert await tools.count_items({"tableName": "orders"}) == Success(data=0)

    async def test_paginate_query_success(self, tools):
        result = await tools.paginate_query_table({
            "tableName": "orders",
            "keyConditionExpression": "PK = :pk",
            "expressionAttributeValues": {":pk": "CUSTOMER#002"},
        })
        assert len(result.data) == 25

    async def test_paginate_query_fault_mid_drain_returns_no_rows(self):
        table = ScriptedTable("orders", pages=[
            {"Items": [{"n": 1}], "LastEvaluatedKey": {"PK": "a"}},
            ClientError({"Error": {"Code": "InternalServerError", "Message": "Internal error"}}, "Query"),
        ])
        result = await _scripted_tools({"orders": table}).paginate_query_table({
            "tableName": "orders",
            "keyConditionExpression": "PK = :pk",
            "expressionAttributeValues": {":pk": "a"},
        })
        assert result == Failure(message="Internal error")

    async def test_to_dict_shapes(self):
        assert Success(data=[1]).to_dict() == {"ok": True, "data": [1]}
        assert Failure(message="x").to_dict() == {"ok": False, "message": "x"}


class TestTableAttributes:
    async def test_summarizes_seeded_table(self, tools):
        summary = await tools.get_table_attributes("orders")
        assert [i.name for i in summary.indices] == ["status-index", "created-index"]

    async def test_missing_table_is_none_not_failure(self, tools):
        assert await tools.get_table_attributes("nope") is None

    async def test_globals_then_locals(self):
        description = {
            **ORDERS_DESCRIPTION,
            "GlobalSecondaryIndexes": [
                {"IndexName": "g1", "KeySchema": [{"AttributeName": "a", "KeyType": "HASH"}],
                 "Projection": {"ProjectionType": "ALL"}},
                {"IndexName": "g2", "KeySchema": [{"AttributeName": "b", "KeyType": "HASH"}],
                 "Projection": {"ProjectionType": "KEYS_ONLY"}},
            ],
            "LocalSecondaryIndexes": [
                {"IndexName": "l1", "KeySchema": [{"AttributeName": "PK", "KeyType": "HASH"}],
                 "Projection": {"ProjectionType": "ALL"}},
            ],
        }
        tools = _scripted_tools(descriptions={"orders": description})

        summary = (await tools.get_table_attributes("orders")).to_dict()

        assert [i["name"] for i in summary["indices"]] == ["g1", "g2", "l1"]
        assert all(set(i) == {"name", "keySchema"} for i in summary["indices"])
        assert summary["keySchema"] == ORDERS_DESCRIPTION["KeySchema"]
        assert summary["attributeDefinitions"] == ORDERS_DESCRIPTION["AttributeDefinitions"]


class TestTablesInfo:
    async def test_describes_every_table(self, tools):
        result = await tools.tables_info()
        assert sorted(t["TableName"] for t in result.data) == ["customers", "orders"]

    async def test_failed_description_is_marked_in_place(self):
        tools = _scripted_tools(descriptions={
            "a": ORDERS_DESCRIPTION,
            "b": RuntimeError("denied"),
        })
        result = await tools.tables_info()
        assert result.ok
        assert result.data[1] == {"TableName": "b", "Error": TABLE_INFO_UNAVAILABLE}
        assert result.data[0]["TableName"] == "orders"

    async def test_listing_failure_fails_the_snapshot(self):
        tools = _scripted_tools(descriptions={"a": ORDERS_DESCRIPTION}, list_error=LIST_DENIED)
        result = await tools.tables_info()
        assert result == Failure(message="not authorized to perform ListTables")
