"""In-memory backends for unit tests: scripted fakes of the boto3 resource."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any


class ScriptedTable:
    """Stands in for ``boto3`` ``Table``: serves pre-recorded query pages in order.

    A page entry that is an exception instance is raised instead of returned.
    Every call's keyword arguments are kept in ``calls``.
    """

    def __init__(self, name: str, pages: list[Any] | None = None) -> None:
        self.name = name
        self._pages = list(pages or [])
        self.calls: list[dict[str, Any]] = []

    def query(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(kwargs)
        if not self._pages:
            raise AssertionError(f"no scripted page left for {self.name!r}")
        page = self._pages.pop(0)
        if isinstance(page, BaseException):
            raise page
        return page

    def scan(self, **kwargs: Any) -> dict[str, Any]:
        return self.query(**kwargs)


class _ScriptedClient:
    def __init__(self, descriptions: dict[str, Any], list_error: BaseException | None = None) -> None:
        self._descriptions = descriptions
        self._list_error = list_error

    def describe_table(self, TableName: str) -> dict[str, Any]:  # noqa: N803 - boto3 naming
        desc = self._descriptions.get(TableName)
        if isinstance(desc, BaseException):
            raise desc
        if desc is None:
            raise LookupError(f"Requested resource not found: Table: {TableName} not found")
        return {"Table": desc}

    def get_paginator(self, operation: str) -> Any:
        if self._list_error is not None:
            raise self._list_error
        names = sorted(self._descriptions)
        return SimpleNamespace(paginate=lambda: iter([{"TableNames": names}]))


class ScriptedResource:
    """Stands in for ``boto3.resource("dynamodb")`` with scripted tables.

    ``list_error``, when given, is raised by every table listing.
    """

    def __init__(self, tables: dict[str, ScriptedTable] | None = None,
                 descriptions: dict[str, Any] | None = None,
                 list_error: BaseException | None = None) -> None:
        self._tables = tables or {}
        self.meta = SimpleNamespace(client=_ScriptedClient(descriptions or {}, list_error))

    def Table(self, name: str) -> ScriptedTable:  # noqa: N802 - boto3 naming
        if name not in self._tables:
            self._tables[name] = ScriptedTable(name)
        return self._tables[name]
