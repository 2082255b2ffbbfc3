"""Data models."""

from alpaca_mcp.core.models.results import (
    ErrorKind,
    FetchError,
    FetchResult,
    TextContent,
    ToolEnvelope,
)
from alpaca_mcp.core.models.upstream import (
    Asset,
    BarsPage,
    CalendarDay,
    NewsArticle,
    NewsPage,
    UpstreamModel,
)

__all__ = [
    "Asset",
    "BarsPage",
    "CalendarDay",
    "ErrorKind",
    "FetchError",
    "FetchResult",
    "NewsArticle",
    "NewsPage",
    "TextContent",
    "ToolEnvelope",
    "UpstreamModel",
]
