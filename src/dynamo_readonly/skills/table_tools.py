"""Read-only table operations returning Success/Failure envelopes.

Every public coroutine here builds a request descriptor from raw tool
arguments, runs it on the injected :class:`ITableReader` and funnels the
outcome through :func:`normalize`. Nothing raised below this layer reaches
the MCP adapter.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from dynamo_readonly.core import tracing
from dynamo_readonly.core.exceptions import DynamoReadonlyError
from dynamo_readonly.core.protocols import ITableReader
from dynamo_readonly.models.requests import (
    DEFAULT_SCAN_LIMIT,
    build_count,
    build_describe_table,
    build_get_item,
    build_list_tables,
    build_paginated_query,
    build_query,
    build_scan,
)
from dynamo_readonly.models.results import Failure, Result, Success, TableSchemaSummary
from dynamo_readonly.skills.schema_summary import summarize_table

logger = logging.getLogger(__name__)

TABLE_INFO_UNAVAILABLE = "Could not get table information."


async def normalize(operation: str, call: Callable[[], Awaitable[Any]]) -> Result:
    """Run ``call`` and wrap its outcome; any exception becomes a Failure."""
    try:
        data = await call()
    except Exception as exc:  # noqa: BLE001 - envelope boundary
        failure = Failure.from_exception(exc)
        tracing.trace(tracing.ERROR_RAISED, operation,
                      error_type=type(exc).__name__, message=failure.message)
        if not isinstance(exc, (ClientError, BotoCoreError, DynamoReadonlyError)):
            logger.error("Unexpected error in %s", operation, exc_info=exc)
        return failure
    return Success(data=data)


class TableTools:
    """The seven read-only operations plus schema introspection helpers."""

    def __init__(self, reader: ITableReader, scan_limit: int = DEFAULT_SCAN_LIMIT) -> None:
        self._reader = reader
        self._scan_limit = scan_limit

    @staticmethod
    def _built(operation: str, request: Any) -> None:
        tracing.trace(tracing.REQUEST_BUILT, operation,
                      table=getattr(request, "table_name", None), params=request.to_params())

    async def list_tables(self) -> Result:
        async def run() -> list[str]:
            self._built("list-tables", build_list_tables())
            return await self._reader.list_tables()

        return await normalize("list-tables", run)

    async def describe_table(self, args: Mapping[str, Any]) -> Result:
        async def run() -> dict[str, Any]:
            request = build_describe_table(args)
            self._built("describe-table", request)
            return await self._reader.describe_table(request.table_name)

        return await normalize("describe-table", run)

    async def scan_table(self, args: Mapping[str, Any]) -> Result:
        async def run() -> list[dict[str, Any]]:
            request = build_scan(args, default_limit=self._scan_limit)
            self._built("scan-table", request)
            return await self._reader.scan(request)

        return await normalize("scan-table", run)

    async def query_table(self, args: Mapping[str, Any]) -> Result:
        async def run() -> list[dict[str, Any]]:
            request = build_query(args)
            self._built("query-table", request)
            return await self._reader.query(request)

        return await normalize("query-table", run)

    async def paginate_query_table(self, args: Mapping[str, Any]) -> Result:
        async def run() -> list[dict[str, Any]]:
            request = build_paginated_query(args)
            self._built("paginate-query-table", request)
            return await self._reader.paginate_query(request)

        return await normalize("paginate-query-table", run)

    async def get_item(self, args: Mapping[str, Any]) -> Result:
        """Success with ``data=None`` means the key matched no item."""
        async def run() -> dict[str, Any] | None:
            request = build_get_item(args)
            self._built("get-item", request)
            return await self._reader.get_item(request)

        return await normalize("get-item", run)

    async def count_items(self, args: Mapping[str, Any]) -> Result:
        async def run() -> int:
            request = build_count(args)
            self._built("count-items", request)
            return await self._reader.count(request)

        return await normalize("count-items", run)

    # ---- schema introspection ----

    async def get_table_attributes(self, table_name: str) -> TableSchemaSummary | None:
        """Schema summary for ``table_name``, or ``None`` if it cannot be described.

        Unlike the data operations this degrades to ``None`` instead of a
        Failure: a missing or inaccessible table is an ordinary answer here.
        """
        result = await self.describe_table({"tableName": table_name})
        if not result.ok:
            logger.info("Table attributes unavailable for %r: %s", table_name, result.message)
            return None
        return summarize_table(result.data)

    async def tables_info(self) -> Result:
        """Describe every table concurrently.

        A table whose description fails is reported in place as
        ``{"TableName": ..., "Error": ...}``; only a failure to list the
        tables fails the whole snapshot.
        """
        listed = await self.list_tables()
        if not listed.ok:
            return listed

        async def describe_or_marker(name: str) -> dict[str, Any]:
            result = await self.describe_table({"tableName": name})
            if result.ok:
                return result.data
            return {"TableName": name, "Error": TABLE_INFO_UNAVAILABLE}

        infos = await asyncio.gather(*(describe_or_marker(name) for name in listed.data))
        return Success(data=list(infos))
