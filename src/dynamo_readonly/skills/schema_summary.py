"""Table attribute summarizer: condense a DescribeTable result into a schema view."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dynamo_readonly.models.results import IndexSummary, TableSchemaSummary


def summarize_table(description: Mapping[str, Any] | None) -> TableSchemaSummary | None:
    """Reduce a table description to key schema, attribute types and indices.

    ``indices`` lists the global secondary indices first, then the local
    ones, each cut down to its name and key schema. A missing description
    yields ``None``.
    """
    if not description:
        return None

    indexes = [
        *(description.get("GlobalSecondaryIndexes") or []),
        *(description.get("LocalSecondaryIndexes") or []),
    ]
    return TableSchemaSummary(
        key_schema=list(description.get("KeySchema") or []),
        attribute_definitions=list(description.get("AttributeDefinitions") or []),
        indices=[
            IndexSummary(name=index.get("IndexName"), key_schema=list(index.get("KeySchema") or []))
            for index in indexes
        ],
    )
