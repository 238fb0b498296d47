"""dynamo-readonly exception hierarchy."""

from __future__ import annotations


class DynamoReadonlyError(Exception):
    """Base exception for all dynamo-readonly errors."""


class ConfigurationError(DynamoReadonlyError):
    """Required configuration is missing or invalid. Fatal at startup."""


class RequestValidationError(DynamoReadonlyError):
    """Tool arguments could not be turned into a request descriptor."""

    def __init__(self, operation: str, problems: list[str]) -> None:
        self.operation = operation
        self.problems = problems
        super().__init__(f"Invalid arguments for {operation}: {'; '.join(problems)}")


class PaginationLimitError(DynamoReadonlyError):
    """A paginated drain ran past the configured page cap."""

    def __init__(self, table_name: str, max_pages: int) -> None:
        self.table_name = table_name
        self.max_pages = max_pages
        super().__init__(
            f"Query on {table_name!r} returned more than {max_pages} pages; "
            "narrow the key condition"
        )
