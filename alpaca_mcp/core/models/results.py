"""Fetch results and the MCP tool envelope."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from alpaca_mcp.core.exceptions import format_tool_error, to_compact_json


class ErrorKind(str, Enum):
    """Classification of a failed fetch."""

    CONFIGURATION = "configuration"
    UPSTREAM_HTTP = "upstream_http"
    TRANSPORT = "transport"
    DECODE = "decode"
    VALIDATION = "validation"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class FetchError:
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a fetcher: either ``payload`` or ``error`` is meaningful."""

    payload: Any = None
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, payload: Any) -> FetchResult:
        return cls(payload=payload)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> FetchResult:
        return cls(error=FetchError(kind=kind, message=message))


class TextContent(BaseModel):
    type: str = "text"
    text: str


class ToolEnvelope(BaseModel):
    """Uniform wrapper returned by every tool."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent]
    is_error: bool | None = Field(None, alias="isError")

    @property
    def text(self) -> str:
        return self.content[0].text

    @classmethod
    def from_result(cls, result: FetchResult, error_prefix: str) -> ToolEnvelope:
        """Convert a fetch result, prefixing error messages with ``error_prefix``."""
        if result.error is not None:
            return cls(
                content=[TextContent(text=format_tool_error(error_prefix, result.error.message))],
                is_error=True,
            )
        return cls(content=[TextContent(text=to_compact_json(result.payload))])

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
