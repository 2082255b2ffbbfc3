"""Exception handling module."""

from alpaca_mcp.core.exceptions.base import (
    AlpacaMCPError,
    ConfigurationError,
    UpstreamHTTPError,
)
from alpaca_mcp.core.exceptions.messages import (
    ASSETS_ERROR_PREFIX,
    MARKET_DAYS_ERROR_PREFIX,
    MISSING_CREDENTIALS_MESSAGE,
    NEWS_ERROR_PREFIX,
    STOCK_BARS_ERROR_PREFIX,
    format_missing_endpoint,
    format_tool_error,
    format_upstream_error,
    to_compact_json,
)

__all__ = [
    "AlpacaMCPError",
    "ConfigurationError",
    "UpstreamHTTPError",
    "ASSETS_ERROR_PREFIX",
    "MARKET_DAYS_ERROR_PREFIX",
    "MISSING_CREDENTIALS_MESSAGE",
    "NEWS_ERROR_PREFIX",
    "STOCK_BARS_ERROR_PREFIX",
    "format_missing_endpoint",
    "format_tool_error",
    "format_upstream_error",
    "to_compact_json",
]
