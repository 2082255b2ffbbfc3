"""
alpaca-mcp - Alpaca market data and broker reads as MCP tools.

Exposes tradable assets, historical stock bars, the market calendar and news
from the Alpaca REST API to Model Context Protocol clients.
"""

__version__ = "1.0.0"

from alpaca_mcp.core import (
    AlpacaHttpClient,
    AlpacaSettings,
    MarketDataService,
    get_batches,
)

__all__ = [
    "AlpacaHttpClient",
    "AlpacaSettings",
    "MarketDataService",
    "get_batches",
    "__version__",
]
