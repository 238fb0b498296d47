"""Help text for the ``dynamodb-query-help`` prompt."""

from __future__ import annotations

import json
from typing import Any

from dynamo_readonly.skills.table_tools import TableTools

BASIC = "basic"
ADVANCED = "advanced"


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2, default=str)


def basic_help(table_name: str, description: dict[str, Any]) -> str:
    example = {
        "tableName": table_name,
        "keyConditionExpression": "partitionKeyName = :partitionValue",
        "expressionAttributeValues": {":partitionValue": "desired value"},
    }
    return f"""# Basic query guide for table {table_name}

## Table structure
{_dump(description.get("KeySchema"))}

## Query example
```json
{_dump(example)}
```

## Basic operations
1. Scan: use the 'scan-table' tool to scan the entire table.
2. Single item retrieval: use the 'get-item' tool.
3. Table information retrieval: use the 'describe-table' tool.
4. Item count: use the 'count-items' tool.
"""


def advanced_help(table_name: str, description: dict[str, Any]) -> str:
    example = {
        "tableName": table_name,
        "keyConditionExpression": "partitionKeyName = :partitionValue AND sortKeyName BETWEEN :low AND :high",
        "filterExpression": "attributeName = :attrValue",
        "expressionAttributeValues": {
            ":partitionValue": "desired value",
            ":low": "minimum value",
            ":high": "maximum value",
            ":attrValue": "filter value",
        },
    }
    gsis = description.get("GlobalSecondaryIndexes") or []
    if gsis:
        index_lines = "\n".join(f"- {idx.get('IndexName')}" for idx in gsis)
        indexes = f"This table has the following GSIs:\n{index_lines}"
    else:
        indexes = "This table has no GSI."

    return f"""# Advanced query guide for table {table_name}

## Table structure
{_dump(description)}

## Advanced query example
```json
{_dump(example)}
```

## Advanced expressions
1. Prefix match: "begins_with(attributeName, :prefix)"
2. Substring match (filters only): "contains(attributeName, :substring)"
3. Comparison operators: =, <>, <, <=, >, >=
4. Logical operators (filters only): AND, OR, NOT

## Query using indexes
{indexes}
"""


def fallback_help(table_name: str, error: str) -> str:
    return f"""# DynamoDB query help

An error occurred while getting detailed information about table "{table_name}": {error}

## General DynamoDB operations
1. Use the 'list-tables' tool to get the table list
2. Use the 'describe-table' tool to view table details
3. Use the 'scan-table' tool to scan
4. Use the 'query-table' tool to query
5. Use the 'paginate-query-table' tool to read every page of a query
6. Use the 'get-item' tool to retrieve an item
7. Use the 'count-items' tool to count items

First, check table information and try again.
"""


async def build_query_help(tools: TableTools, table_name: str, query_type: str = BASIC) -> str:
    """Guide for querying ``table_name``; anything but ``basic`` gets the advanced guide."""
    result = await tools.describe_table({"tableName": table_name})
    if not result.ok:
        return fallback_help(table_name, result.message)
    if (query_type or BASIC).strip().lower() == BASIC:
        return basic_help(table_name, result.data)
    return advanced_help(table_name, result.data)
