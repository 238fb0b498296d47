"""Result envelope and schema summary models."""

from __future__ import annotations

from typing import Any, Literal

from botocore.exceptions import ClientError
from pydantic import BaseModel, ConfigDict, Field


class Success(BaseModel):
    """Operation completed; ``data`` is the JSON-ready payload (may be ``None``)."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


class Failure(BaseModel):
    """Operation failed; ``message`` is safe to show to the caller."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    message: str

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_exception(cls, exc: BaseException) -> Failure:
        return cls(message=describe_exception(exc))


Result = Success | Failure


def describe_exception(exc: BaseException) -> str:
    """Human-readable message for ``exc`` without traceback noise.

    botocore ``ClientError`` carries the service message in the parsed
    response; everything else falls back to ``str(exc)`` or the class name.
    """
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        message = error.get("Message")
        if message:
            return message
    return str(exc) or type(exc).__name__


class IndexSummary(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str | None = None
    key_schema: list[dict[str, Any]] = Field(default_factory=list, alias="keySchema")


class TableSchemaSummary(BaseModel):
    """Condensed table schema: keys, attribute types and all secondary indices."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key_schema: list[dict[str, Any]] = Field(default_factory=list, alias="keySchema")
    attribute_definitions: list[dict[str, Any]] = Field(
        default_factory=list, alias="attributeDefinitions"
    )
    indices: list[IndexSummary] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
