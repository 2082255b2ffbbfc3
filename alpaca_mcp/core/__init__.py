"""Core request, pagination and fetch layer."""

from alpaca_mcp.core.config import AlpacaSettings, load_settings
from alpaca_mcp.core.exceptions import AlpacaMCPError, ConfigurationError, UpstreamHTTPError
from alpaca_mcp.core.http_client import AlpacaHttpClient, HttpConfig, build_url
from alpaca_mcp.core.models import FetchResult, ToolEnvelope
from alpaca_mcp.core.services import MarketDataService, get_batches

__all__ = [
    "AlpacaHttpClient",
    "AlpacaMCPError",
    "AlpacaSettings",
    "ConfigurationError",
    "FetchResult",
    "HttpConfig",
    "MarketDataService",
    "ToolEnvelope",
    "UpstreamHTTPError",
    "build_url",
    "get_batches",
    "load_settings",
]
