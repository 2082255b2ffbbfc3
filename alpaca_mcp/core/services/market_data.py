"""
Market data fetchers.

Each public fetcher returns a ``FetchResult`` and never raises: failures are
classified, logged and handed back as the error variant. Pages and symbol
batches are awaited strictly one after another, and a failure anywhere drops
everything gathered so far.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from alpaca_mcp.core.config import AlpacaSettings
from alpaca_mcp.core.exceptions import ConfigurationError, UpstreamHTTPError
from alpaca_mcp.core.http_client import AlpacaHttpClient, HttpConfig
from alpaca_mcp.core.logging import logger
from alpaca_mcp.core.models import (
    Asset,
    BarsPage,
    CalendarDay,
    ErrorKind,
    FetchResult,
    NewsPage,
)
from alpaca_mcp.core.services.batching import get_batches
from alpaca_mcp.core.services.pagination import iterate_pages

ASSETS_PATH = "/v1/assets"
BARS_PATH = "/v2/stocks/bars"
CALENDAR_PATH = "/v2/calendar"
NEWS_PATH = "/v1beta1/news"

# Upstream limits for the bars endpoint
BARS_BATCH_SIZE = 2000
BARS_PAGE_LIMIT = 10000

_ASSET_LIST = TypeAdapter(list[Asset])
_CALENDAR = TypeAdapter(list[CalendarDay])


class AssetClass(str, Enum):
    US_EQUITY = "us_equity"
    CRYPTO = "crypto"


def classify_error(exc: Exception) -> ErrorKind:
    """Map an exception raised while fetching to an ``ErrorKind``."""
    if isinstance(exc, ConfigurationError):
        return ErrorKind.CONFIGURATION
    if isinstance(exc, UpstreamHTTPError):
        return ErrorKind.UPSTREAM_HTTP
    if isinstance(exc, httpx.TransportError):
        return ErrorKind.TRANSPORT
    if isinstance(exc, json.JSONDecodeError):
        return ErrorKind.DECODE
    if isinstance(exc, ValidationError):
        return ErrorKind.VALIDATION
    return ErrorKind.UNEXPECTED


class MarketDataService:
    """Fetchers for assets, stock bars, market days and news."""

    def __init__(
        self,
        settings: AlpacaSettings,
        http_config: HttpConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self.http_config = http_config or HttpConfig.from_settings(settings)
        self._transport = transport

    def _client(self) -> AlpacaHttpClient:
        return AlpacaHttpClient(self.settings, self.http_config, self._transport)

    def _data_base(self) -> str:
        # credentials take precedence over endpoint errors
        self.settings.require_credentials()
        return self.settings.require_endpoint()

    def _broker_base(self) -> str:
        self.settings.require_credentials()
        return self.settings.require_broker_endpoint()

    async def _guard(
        self, operation: str, fetch: Callable[[], Awaitable[Any]]
    ) -> FetchResult:
        try:
            payload = await fetch()
        except Exception as exc:
            kind = classify_error(exc)
            logger.bind(error_kind=kind.value).opt(exception=exc).warning(
                f"{operation} failed: {exc}"
            )
            return FetchResult.failure(kind, str(exc))
        return FetchResult.success(payload)

    async def get_assets(
        self, asset_class: AssetClass | str = AssetClass.US_EQUITY
    ) -> FetchResult:
        """Active assets of ``asset_class`` that are tradable."""

        async def fetch() -> list[dict[str, Any]]:
            base = self._broker_base()
            params = {"status": "active", "asset_class": AssetClass(asset_class).value}
            async with self._client() as client:
                raw = await client.request(base, ASSETS_PATH, params=params)
            assets = _ASSET_LIST.validate_python(raw)
            return [asset.to_payload() for asset in assets if asset.tradable is True]

        return await self._guard("get-assets", fetch)

    async def get_stock_bars(
        self, symbols: list[str], start: str, end: str, timeframe: str
    ) -> FetchResult:
        """Bars for ``symbols`` merged into ``{"bars": {symbol: ...}}``."""

        async def fetch() -> dict[str, Any]:
            base = self._data_base()
            bars: dict[str, Any] = {}
            async with self._client() as client:
                for batch in get_batches(symbols, BARS_BATCH_SIZE):
                    joined = ",".join(batch)

                    async def fetch_page(page_token: str | None) -> BarsPage:
                        params: dict[str, Any] = {
                            "timeframe": timeframe,
                            "limit": BARS_PAGE_LIMIT,
                            "start": start,
                            "end": end,
                            "symbols": joined,
                        }
                        if page_token:
                            params["page_token"] = page_token
                        raw = await client.request(base, BARS_PATH, params=params)
                        return BarsPage.model_validate(raw)

                    async for page in iterate_pages(fetch_page):
                        bars.update(page.bars)
            return {"bars": bars}

        return await self._guard("get-stock-bars", fetch)

    async def get_market_days(self, start: str, end: str) -> FetchResult:
        """Trading calendar between ``start`` and ``end``."""

        async def fetch() -> list[dict[str, Any]]:
            base = self._data_base()
            async with self._client() as client:
                raw = await client.request(
                    base, CALENDAR_PATH, params={"start": start, "end": end}
                )
            return [day.to_payload() for day in _CALENDAR.validate_python(raw)]

        return await self._guard("get-market-days", fetch)

    async def get_news(self, start: str, end: str, symbols: list[str]) -> FetchResult:
        """News articles for ``symbols``, newest first, across all pages.

        Continuation requests carry only ``page_token``; the filters of the
        first request are not repeated.
        """

        async def fetch() -> list[dict[str, Any]]:
            base = self._data_base()
            articles: list[dict[str, Any]] = []
            async with self._client() as client:

                async def fetch_page(page_token: str | None) -> NewsPage:
                    if page_token:
                        params: dict[str, Any] = {"page_token": page_token}
                    else:
                        params = {
                            "sort": "desc",
                            "start": start,
                            "end": end,
                            "symbols": ",".join(symbols),
                            "include_content": True,
                        }
                    raw = await client.request(base, NEWS_PATH, params=params)
                    return NewsPage.model_validate(raw)

                async for page in iterate_pages(fetch_page):
                    articles.extend(article.to_payload() for article in page.news)
            return articles

        return await self._guard("get-news", fetch)
