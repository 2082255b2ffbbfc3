"""
FastMCP Server for Alpaca

This module implements the MCP (Model Context Protocol) server interface for
alpaca-mcp, exposing the market data fetchers as MCP tools.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Annotated, Any, Literal

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from mcp.types import TextContent
from pydantic import Field, ValidationError

from alpaca_mcp.core.config import AlpacaSettings, SettingsProvider
from alpaca_mcp.core.exceptions import (
    ASSETS_ERROR_PREFIX,
    MARKET_DAYS_ERROR_PREFIX,
    NEWS_ERROR_PREFIX,
    STOCK_BARS_ERROR_PREFIX,
)
from alpaca_mcp.core.logging import log_context, logger
from alpaca_mcp.core.models import ErrorKind, FetchResult, ToolEnvelope
from alpaca_mcp.core.services import MarketDataService

SERVER_NAME = "Alpaca MCP Server"
SERVER_VERSION = "1.0.0"
SERVER_INSTRUCTIONS = "Expose Alpaca API via MCP"

TOOL_NAMES = ("get-assets", "get-stock-bars", "get-market-days", "get-news")


class AlpacaMCPServer:
    """
    Alpaca MCP server.

    Every tool call builds fresh settings through ``settings_provider`` and a
    fresh ``MarketDataService``; nothing is shared between invocations.
    """

    def __init__(
        self,
        settings_provider: SettingsProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the server.

        Args:
            settings_provider: Callable building ``AlpacaSettings``, called per tool call
            transport: Optional httpx transport used for upstream requests
        """
        self.settings_provider = settings_provider or AlpacaSettings
        self._transport = transport
        self.mcp = FastMCP(
            SERVER_NAME, instructions=SERVER_INSTRUCTIONS, version=SERVER_VERSION
        )
        self._setup_tools()

    async def _invoke(
        self,
        tool: str,
        error_prefix: str,
        call: Callable[[MarketDataService], Awaitable[FetchResult]],
    ) -> ToolEnvelope:
        with log_context(tool=tool):
            logger.info(f"Calling {tool}")
            try:
                settings = self.settings_provider()
            except ValidationError as exc:
                logger.warning(f"Invalid settings: {exc}")
                result = FetchResult.failure(ErrorKind.CONFIGURATION, str(exc))
            else:
                service = MarketDataService(settings, transport=self._transport)
                result = await call(service)
            return ToolEnvelope.from_result(result, error_prefix)

    async def get_assets(self, asset_class: str = "us_equity") -> ToolEnvelope:
        return await self._invoke(
            "get-assets",
            ASSETS_ERROR_PREFIX,
            lambda service: service.get_assets(asset_class),
        )

    async def get_stock_bars(
        self, symbols: list[str], start: str, end: str, timeframe: str
    ) -> ToolEnvelope:
        return await self._invoke(
            "get-stock-bars",
            STOCK_BARS_ERROR_PREFIX,
            lambda service: service.get_stock_bars(symbols, start, end, timeframe),
        )

    async def get_market_days(self, start: str, end: str) -> ToolEnvelope:
        return await self._invoke(
            "get-market-days",
            MARKET_DAYS_ERROR_PREFIX,
            lambda service: service.get_market_days(start, end),
        )

    async def get_news(self, start: str, end: str, symbols: list[str]) -> ToolEnvelope:
        return await self._invoke(
            "get-news",
            NEWS_ERROR_PREFIX,
            lambda service: service.get_news(start, end, symbols),
        )

    def _setup_tools(self) -> None:
        """Register the four tools with FastMCP."""

        def render(envelope: ToolEnvelope) -> list[TextContent]:
            # FastMCP reports a ToolError as isError with the message as text
            if envelope.is_error:
                raise ToolError(envelope.text)
            return [TextContent(type="text", text=item.text) for item in envelope.content]

        @self.mcp.tool(name="get-assets")
        async def get_assets(
            assetClass: Annotated[  # noqa: N803
                Literal["us_equity", "crypto"], Field(description="Asset class to list")
            ] = "us_equity",
        ):
            """List active, tradable assets of an asset class."""
            return render(await self.get_assets(assetClass))

        @self.mcp.tool(name="get-stock-bars")
        async def get_stock_bars(
            symbols: Annotated[list[str], Field(description="Ticker symbols")],
            start: Annotated[str, Field(description="Start date or RFC-3339 time")],
            end: Annotated[str, Field(description="End date or RFC-3339 time")],
            timeframe: Annotated[str, Field(description='Bar timeframe, e.g. "1Day"')],
        ):
            """Historical bars for a list of stocks, keyed by symbol."""
            return render(await self.get_stock_bars(symbols, start, end, timeframe))

        @self.mcp.tool(name="get-market-days")
        async def get_market_days(
            start: Annotated[str, Field(description="First date, YYYY-MM-DD")],
            end: Annotated[str, Field(description="Last date, YYYY-MM-DD")],
        ):
            """Market calendar: trading days with open and close times."""
            return render(await self.get_market_days(start, end))

        @self.mcp.tool(name="get-news")
        async def get_news(
            start: Annotated[str, Field(description="Start date or RFC-3339 time")],
            end: Annotated[str, Field(description="End date or RFC-3339 time")],
            symbols: Annotated[list[str], Field(description="Ticker symbols")],
        ):
            """News articles for symbols, newest first, including content."""
            return render(await self.get_news(start, end, symbols))

    async def start(self, transport: str = "stdio", **transport_kwargs: Any) -> None:
        """
        Start the MCP server.

        Args:
            transport: Transport method ("stdio", "http", or "sse")
            transport_kwargs: host/port for the network transports
        """
        logger.info(f"Starting {SERVER_NAME} {SERVER_VERSION} with {transport} transport")
        await self.mcp.run_async(transport=transport, **transport_kwargs)

    def run(self, transport: str = "stdio", **transport_kwargs: Any) -> None:
        """Run the MCP server synchronously."""
        asyncio.run(self.start(transport, **transport_kwargs))


def create_mcp_server(
    settings_provider: SettingsProvider | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AlpacaMCPServer:
    """
    Create and configure an Alpaca MCP server.

    Args:
        settings_provider: Optional settings factory, defaults to the environment
        transport: Optional httpx transport for upstream requests

    Returns:
        Configured AlpacaMCPServer instance
    """
    return AlpacaMCPServer(settings_provider=settings_provider, transport=transport)


if __name__ == "__main__":
    create_mcp_server().run()
