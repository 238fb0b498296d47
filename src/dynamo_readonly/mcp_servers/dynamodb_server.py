"""FastMCP server: read-only DynamoDB tools, resources and query-help prompt.

Runs over stdio. Every tool delegates to :class:`TableTools`, which always
hands back a Success/Failure envelope; a Failure is reported to the client
as an MCP tool error.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from dynamo_readonly.core.config import load_settings
from dynamo_readonly.core.exceptions import ConfigurationError
from dynamo_readonly.core.tracing import configure_logging
from dynamo_readonly.models.results import Result
from dynamo_readonly.persistence import create_persistence
from dynamo_readonly.skills.query_help import build_query_help
from dynamo_readonly.skills.table_tools import TableTools

logger = logging.getLogger(__name__)

SERVER_NAME = "dynamo-readonly-mcp"
ITEM_NOT_FOUND = "Could not find the corresponding item."

TableNameArg = Annotated[str, Field(description="Name of the table")]
ValuesArg = Annotated[
    dict[str, Any],
    Field(description="Expression attribute values (JSON object, e.g. {\":pk\": \"USER#1\"})"),
]
OptionalValuesArg = Annotated[
    dict[str, Any] | None,
    Field(description="Expression attribute values (JSON object, optional)"),
]
KeyConditionArg = Annotated[str, Field(description="Key condition expression (e.g. 'PK = :pk')")]
FilterArg = Annotated[str | None, Field(description="Filter expression (e.g. 'age > :minAge')")]
ProjectionArg = Annotated[str | None, Field(description="Projection expression (e.g. 'id, #n')")]


def _to_json(value: Any) -> str:
    return json.dumps(value, indent=2, default=str)


def _unwrap(result: Result) -> Any:
    if not result.ok:
        raise ToolError(f"Error occurred: {result.message}")
    return result.data


def create_server(tools: TableTools) -> FastMCP:
    """Register tools, resources and the prompt on a new FastMCP instance."""
    mcp = FastMCP(SERVER_NAME)

    @mcp.tool(name="list-tables", description="Get a list of all DynamoDB tables")
    async def list_tables() -> str:
        return _to_json(_unwrap(await tools.list_tables()))

    @mcp.tool(name="describe-table", description="Get detailed information about a DynamoDB table")
    async def describe_table(tableName: TableNameArg) -> str:  # noqa: N803 - tool argument name
        return _to_json(_unwrap(await tools.describe_table({"tableName": tableName})))

    @mcp.tool(name="scan-table", description="Scan items from a DynamoDB table")
    async def scan_table(
        tableName: TableNameArg,  # noqa: N803
        limit: Annotated[int | None, Field(description="Maximum number of items to return (default: 100)")] = None,
        filterExpression: FilterArg = None,  # noqa: N803
        expressionAttributeValues: OptionalValuesArg = None,  # noqa: N803
        projectionExpression: ProjectionArg = None,  # noqa: N803
    ) -> str:
        result = await tools.scan_table({
            "tableName": tableName,
            "limit": limit,
            "filterExpression": filterExpression,
            "expressionAttributeValues": expressionAttributeValues,
            "projectionExpression": projectionExpression,
        })
        return _to_json(_unwrap(result))

    @mcp.tool(name="query-table", description="Query items from a DynamoDB table based on conditions")
    async def query_table(
        tableName: TableNameArg,  # noqa: N803
        keyConditionExpression: KeyConditionArg,  # noqa: N803
        expressionAttributeValues: ValuesArg,  # noqa: N803
        indexName: Annotated[str | None, Field(description="Name of the index to use")] = None,  # noqa: N803
        filterExpression: FilterArg = None,  # noqa: N803
        limit: Annotated[int | None, Field(description="Maximum number of items to return")] = None,
        projectionExpression: ProjectionArg = None,  # noqa: N803
    ) -> str:
        result = await tools.query_table({
            "tableName": tableName,
            "keyConditionExpression": keyConditionExpression,
            "expressionAttributeValues": expressionAttributeValues,
            "indexName": indexName,
            "filterExpression": filterExpression,
            "limit": limit,
            "projectionExpression": projectionExpression,
        })
        return _to_json(_unwrap(result))

    @mcp.tool(name="paginate-query-table", description="Query a DynamoDB table and return every page of results")
    async def paginate_query_table(
        tableName: TableNameArg,  # noqa: N803
        keyConditionExpression: KeyConditionArg,  # noqa: N803
        expressionAttributeValues: ValuesArg,  # noqa: N803
        projectionExpression: ProjectionArg = None,  # noqa: N803
    ) -> str:
        result = await tools.paginate_query_table({
            "tableName": tableName,
            "keyConditionExpression": keyConditionExpression,
            "expressionAttributeValues": expressionAttributeValues,
            "projectionExpression": projectionExpression,
        })
        return _to_json(_unwrap(result))

    @mcp.tool(name="get-item", description="Get an item from a DynamoDB table based on a specific key")
    async def get_item(
        tableName: TableNameArg,  # noqa: N803
        key: Annotated[dict[str, Any], Field(description="Item key (JSON object)")],
    ) -> str:
        item = _unwrap(await tools.get_item({"tableName": tableName, "key": key}))
        if item is None:
            return ITEM_NOT_FOUND
        return _to_json(item)

    @mcp.tool(name="count-items", description="Count items in a DynamoDB table")
    async def count_items(
        tableName: TableNameArg,  # noqa: N803
        filterExpression: FilterArg = None,  # noqa: N803
        expressionAttributeValues: OptionalValuesArg = None,  # noqa: N803
    ) -> str:
        result = await tools.count_items({
            "tableName": tableName,
            "filterExpression": filterExpression,
            "expressionAttributeValues": expressionAttributeValues,
        })
        return f'Table "{tableName}" has {_unwrap(result)} items.'

    @mcp.resource(
        "dynamodb://tables-info",
        name="dynamodb-tables-info",
        description="DynamoDB table information",
        mime_type="application/json",
    )
    async def tables_info() -> str:
        result = await tools.tables_info()
        if not result.ok:
            return _to_json({"error": result.message})
        return _to_json(result.data)

    @mcp.resource(
        "dynamodb://table-schema/{table_name}",
        name="dynamodb-table-schema",
        description="DynamoDB table schema information",
        mime_type="application/json",
    )
    async def table_schema(table_name: str) -> str:
        summary = await tools.get_table_attributes(table_name)
        return _to_json(summary.to_dict() if summary is not None else None)

    @mcp.prompt(name="dynamodb-query-help", description="Prompt to help you write a DynamoDB query")
    async def query_help(tableName: str, queryType: str = "basic") -> str:  # noqa: N803
        return await build_query_help(tools, tableName, queryType)

    return mcp


def main() -> None:
    """Console entry point: validate configuration, then serve over stdio."""
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        configure_logging()
        logger.critical("%s", exc)
        sys.exit(1)

    configure_logging(settings.server.log_level)
    reader = create_persistence(settings)
    server = create_server(TableTools(reader, scan_limit=settings.server.scan_limit))
    logger.info("DynamoDB read-only MCP server is running")
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
