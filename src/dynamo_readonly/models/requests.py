"""Request descriptors and the builders that assemble them from tool arguments.

Each descriptor is a frozen model. ``to_params()`` is the single place that
maps it onto boto3 ``Table`` keyword arguments: optional fields are emitted
only when they carry a value, never as ``None`` or ``""``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dynamo_readonly.core.exceptions import RequestValidationError

DEFAULT_SCAN_LIMIT = 100

R = TypeVar("R", bound="TableRequest")


class TableRequest(BaseModel):
    """Common base: every request except list-tables targets one table."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    table_name: str = Field(alias="tableName", min_length=1)

    @field_validator("table_name", mode="before")
    @classmethod
    def _strip_table_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    def to_params(self) -> dict[str, Any]:
        return {}


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    if isinstance(value, Mapping) and not value:
        return None
    return value


class ListTablesRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    def to_params(self) -> dict[str, Any]:
        return {}


class DescribeTableRequest(TableRequest):
    pass


class ScanRequest(TableRequest):
    limit: int = Field(default=DEFAULT_SCAN_LIMIT, gt=0)
    filter_expression: str | None = Field(default=None, alias="filterExpression")
    expression_attribute_values: dict[str, Any] | None = Field(
        default=None, alias="expressionAttributeValues"
    )
    projection_expression: str | None = Field(default=None, alias="projectionExpression")

    blank_as_absent = field_validator(
        "filter_expression", "expression_attribute_values", "projection_expression", mode="before"
    )(_blank_to_none)

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"Limit": self.limit}
        return params | _present(
            FilterExpression=self.filter_expression,
            ExpressionAttributeValues=self.expression_attribute_values,
            ProjectionExpression=self.projection_expression,
        )


class QueryRequest(TableRequest):
    key_condition_expression: str = Field(alias="keyConditionExpression", min_length=1)
    expression_attribute_values: dict[str, Any] = Field(alias="expressionAttributeValues")
    index_name: str | None = Field(default=None, alias="indexName")
    filter_expression: str | None = Field(default=None, alias="filterExpression")
    limit: int | None = Field(default=None, gt=0)
    projection_expression: str | None = Field(default=None, alias="projectionExpression")

    blank_as_absent = field_validator(
        "index_name", "filter_expression", "projection_expression", mode="before"
    )(_blank_to_none)

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "KeyConditionExpression": self.key_condition_expression,
            "ExpressionAttributeValues": self.expression_attribute_values,
        }
        return params | _present(
            IndexName=self.index_name,
            FilterExpression=self.filter_expression,
            Limit=self.limit,
            ProjectionExpression=self.projection_expression,
        )


class PaginatedQueryRequest(TableRequest):
    """Drains every page. Deliberately narrower than :class:`QueryRequest`."""

    key_condition_expression: str = Field(alias="keyConditionExpression", min_length=1)
    expression_attribute_values: dict[str, Any] = Field(alias="expressionAttributeValues")
    projection_expression: str | None = Field(default=None, alias="projectionExpression")

    blank_as_absent = field_validator("projection_expression", mode="before")(_blank_to_none)

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "KeyConditionExpression": self.key_condition_expression,
            "ExpressionAttributeValues": self.expression_attribute_values,
        }
        return params | _present(ProjectionExpression=self.projection_expression)


class GetItemRequest(TableRequest):
    key: dict[str, Any] = Field(min_length=1)

    def to_params(self) -> dict[str, Any]:
        return {"Key": self.key}


class CountRequest(TableRequest):
    filter_expression: str | None = Field(default=None, alias="filterExpression")
    expression_attribute_values: dict[str, Any] | None = Field(
        default=None, alias="expressionAttributeValues"
    )

    blank_as_absent = field_validator(
        "filter_expression", "expression_attribute_values", mode="before"
    )(_blank_to_none)

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"Select": "COUNT"}
        return params | _present(
            FilterExpression=self.filter_expression,
            ExpressionAttributeValues=self.expression_attribute_values,
        )


def _present(**fields: Any) -> dict[str, Any]:
    return {name: value for name, value in fields.items() if value is not None}


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def _build(model: type[R], operation: str, args: Mapping[str, Any] | None) -> R:
    try:
        return model.model_validate(dict(args or {}))
    except ValidationError as exc:
        problems = []
        for err in exc.errors():
            where = ".".join(str(p) for p in err["loc"]) or "arguments"
            problems.append(f"{where}: {err['msg']}")
        raise RequestValidationError(operation, problems) from exc


def build_list_tables(args: Mapping[str, Any] | None = None) -> ListTablesRequest:
    return ListTablesRequest()


def build_describe_table(args: Mapping[str, Any]) -> DescribeTableRequest:
    return _build(DescribeTableRequest, "describe-table", args)


def build_scan(args: Mapping[str, Any], default_limit: int = DEFAULT_SCAN_LIMIT) -> ScanRequest:
    """Build a scan descriptor; an absent or null ``limit`` becomes ``default_limit``."""
    args = dict(args or {})
    if args.get("limit") is None:
        args["limit"] = default_limit
    return _build(ScanRequest, "scan-table", args)


def build_query(args: Mapping[str, Any]) -> QueryRequest:
    return _build(QueryRequest, "query-table", args)


def build_paginated_query(args: Mapping[str, Any]) -> PaginatedQueryRequest:
    return _build(PaginatedQueryRequest, "paginate-query-table", args)


def build_get_item(args: Mapping[str, Any]) -> GetItemRequest:
    return _build(GetItemRequest, "get-item", args)


def build_count(args: Mapping[str, Any]) -> CountRequest:
    return _build(CountRequest, "count-items", args)
