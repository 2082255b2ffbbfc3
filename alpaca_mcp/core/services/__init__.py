"""Fetch services."""

from alpaca_mcp.core.services.batching import get_batches
from alpaca_mcp.core.services.market_data import (
    BARS_BATCH_SIZE,
    BARS_PAGE_LIMIT,
    AssetClass,
    MarketDataService,
    classify_error,
)
from alpaca_mcp.core.services.pagination import iterate_pages

__all__ = [
    "BARS_BATCH_SIZE",
    "BARS_PAGE_LIMIT",
    "AssetClass",
    "MarketDataService",
    "classify_error",
    "get_batches",
    "iterate_pages",
]
