"""Protocol interfaces for dynamo-readonly abstractions.

Structural typing, no inheritance required: the boto3-backed reader and the
in-memory test doubles both satisfy these without sharing a base class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from dynamo_readonly.core.types import Item, JsonDict

if TYPE_CHECKING:
    from dynamo_readonly.models.requests import (
        CountRequest,
        GetItemRequest,
        PaginatedQueryRequest,
        QueryRequest,
        ScanRequest,
    )


# ---------------------------------------------------------------------------
# Store client handle (boto3 DynamoDB service resource)
# ---------------------------------------------------------------------------

@runtime_checkable
class IDynamoResource(Protocol):
    """The subset of ``boto3.resource("dynamodb")`` the reader relies on."""

    meta: Any

    def Table(self, name: str) -> Any: ...  # noqa: N802 - boto3 naming


# ---------------------------------------------------------------------------
# Execution & pagination engine
# ---------------------------------------------------------------------------

@runtime_checkable
class ITableReader(Protocol):
    """Read-only DynamoDB operations. Faults propagate to the caller."""

    async def list_tables(self) -> list[str]: ...

    async def describe_table(self, table_name: str) -> JsonDict: ...

    async def scan(self, request: ScanRequest) -> list[Item]: ...

    async def query(self, request: QueryRequest) -> list[Item]: ...

    async def paginate_query(self, request: PaginatedQueryRequest) -> list[Item]: ...

    async def get_item(self, request: GetItemRequest) -> Item | None: ...

    async def count(self, request: CountRequest) -> int: ...
