"""Fixed error messages shared by the request layer and the tools."""

import json
from typing import Any

MISSING_CREDENTIALS_MESSAGE = (
    "Alpaca credentials not configured. Set ALPACA_API_KEY and ALPACA_SECRET_KEY."
)
MISSING_ENDPOINT_MESSAGE = "Alpaca endpoint not configured. Set {variable}."

# Prefixes used when a fetcher failure is turned into an error envelope.
ASSETS_ERROR_PREFIX = "Error fetching assets"
STOCK_BARS_ERROR_PREFIX = "Error fetching stock bars"
MARKET_DAYS_ERROR_PREFIX = "Error fetching market days"
NEWS_ERROR_PREFIX = "Error fetching news"


def to_compact_json(value: Any) -> str:
    """Serialize ``value`` without whitespace between tokens."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def format_upstream_error(status_code: int, reason: str, body: Any) -> str:
    """Render ``<status> <reason> - <json-body>``."""
    return f"{status_code} {reason} - {to_compact_json(body)}"


def format_missing_endpoint(variable: str) -> str:
    return MISSING_ENDPOINT_MESSAGE.format(variable=variable)


def format_tool_error(prefix: str, message: str) -> str:
    """Render the text carried by an error envelope."""
    return f"{prefix}: {message}"
