"""DynamoDB backend implementing ITableReader on a shared boto3 resource."""

from __future__ import annotations

import asyncio
import base64
from decimal import Decimal
from typing import Any

from boto3.dynamodb.types import Binary

from dynamo_readonly.core import tracing
from dynamo_readonly.core.exceptions import PaginationLimitError
from dynamo_readonly.core.types import Item, JsonDict
from dynamo_readonly.core.protocols import IDynamoResource
from dynamo_readonly.models.requests import (
    CountRequest,
    GetItemRequest,
    PaginatedQueryRequest,
    QueryRequest,
    ScanRequest,
)


def _decode(value: Any) -> Any:
    """Convert DynamoDB-native values into JSON-friendly Python values."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: _decode(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_decode(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted((_decode(v) for v in value), key=repr)
    if isinstance(value, Binary):
        return base64.b64encode(value.value).decode("ascii")
    return value


def _to_dynamodb(obj: Any) -> Any:
    """Convert JSON-parsed floats to Decimal, which boto3 requires for numbers."""
    if isinstance(obj, float):
        return Decimal(str(obj))
    if isinstance(obj, dict):
        return {k: _to_dynamodb(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_to_dynamodb(i) for i in obj]
    return obj


def _decode_items(items: list[Item] | None) -> list[Item]:
    return [_decode(item) for item in items or []]


class DynamoDBTableReader:
    """Production ITableReader backed by one injected boto3 DynamoDB resource.

    Every boto3 call runs in a worker thread, so each round-trip is a single
    await point and the event loop is free while DynamoDB answers.
    """

    def __init__(self, resource: IDynamoResource, max_pages: int | None = None) -> None:
        self._resource = resource
        self._max_pages = max_pages

    @property
    def _client(self) -> Any:
        return self._resource.meta.client

    def _table(self, name: str) -> Any:
        return self._resource.Table(name)

    async def _send(self, method: str, request: Any) -> JsonDict:
        bound = getattr(self._table(request.table_name), method)
        return await asyncio.to_thread(bound, **_to_dynamodb(request.to_params()))

    # ---- single-call operations ----

    async def list_tables(self) -> list[str]:
        names = await asyncio.to_thread(self._list_table_names)
        tracing.trace(tracing.RESPONSE_RECEIVED, "list-tables", table_count=len(names))
        return names

    def _list_table_names(self) -> list[str]:
        names: list[str] = []
        paginator = self._client.get_paginator("list_tables")
        for page in paginator.paginate():
            names.extend(page.get("TableNames", []))
        return names

    async def describe_table(self, table_name: str) -> JsonDict:
        resp = await asyncio.to_thread(self._client.describe_table, TableName=table_name)
        tracing.trace(tracing.RESPONSE_RECEIVED, "describe-table", table=table_name)
        return _decode(resp.get("Table", {}))

    async def scan(self, request: ScanRequest) -> list[Item]:
        resp = await self._send("scan", request)
        items = _decode_items(resp.get("Items"))
        tracing.trace(tracing.RESPONSE_RECEIVED, "scan-table",
                      table=request.table_name, item_count=len(items))
        return items

    async def query(self, request: QueryRequest) -> list[Item]:
        resp = await self._send("query", request)
        items = _decode_items(resp.get("Items"))
        tracing.trace(tracing.RESPONSE_RECEIVED, "query-table",
                      table=request.table_name, item_count=len(items))
        return items

    async def get_item(self, request: GetItemRequest) -> Item | None:
        """Return the item, or ``None`` when no item has that key."""
        resp = await self._send("get_item", request)
        item = resp.get("Item")
        tracing.trace(tracing.RESPONSE_RECEIVED, "get-item",
                      table=request.table_name, found=item is not None)
        return _decode(item) if item is not None else None

    async def count(self, request: CountRequest) -> int:
        resp = await self._send("scan", request)
        count = int(resp.get("Count") or 0)
        tracing.trace(tracing.RESPONSE_RECEIVED, "count-items",
                      table=request.table_name, count=count)
        return count

    # ---- paginated drain ----

    async def paginate_query(self, request: PaginatedQueryRequest) -> list[Item]:
        """Query every page, following ``LastEvaluatedKey`` until it is absent.

        Pages are concatenated in request order. An empty page does not end
        the drain; only a missing cursor does. Any fault aborts the whole
        drain and nothing collected so far is returned. Unless ``max_pages``
        was configured there is no page cap, so a broad key condition on a
        large table reads all of it.
        """
        table = self._table(request.table_name)
        params = _to_dynamodb(request.to_params())
        items: list[Item] = []
        page_count = 0

        while True:
            if self._max_pages is not None and page_count >= self._max_pages:
                raise PaginationLimitError(request.table_name, self._max_pages)

            page = await asyncio.to_thread(table.query, **params)
            page_count += 1
            page_items = _decode_items(page.get("Items"))
            items.extend(page_items)

            cursor = page.get("LastEvaluatedKey")
            tracing.trace(tracing.PAGE_DRAINED, "paginate-query-table",
                          table=request.table_name, page=page_count,
                          item_count=len(page_items), has_more=cursor is not None)
            if cursor is None:
                break
            params = {**params, "ExclusiveStartKey": cursor}

        tracing.trace(tracing.RESPONSE_RECEIVED, "paginate-query-table",
                      table=request.table_name, pages=page_count, item_count=len(items))
        return items
