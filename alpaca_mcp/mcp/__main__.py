"""
Main entry point for the Alpaca MCP Server.

This module provides the command-line interface for running the server with
different transport modes.
"""

import argparse
import asyncio
import sys
from functools import partial

from alpaca_mcp.core.config import AlpacaSettings
from alpaca_mcp.core.logging import configure_logging, logger
from alpaca_mcp.mcp.server import create_mcp_server


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Alpaca MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "sse"],
        default="stdio",
        help="Transport method for MCP communication",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host address for HTTP/SSE transport",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8001,
        help="Port for HTTP/SSE transport",
    )
    parser.add_argument(
        "--env-file",
        help="Read ALPACA_* settings from this file instead of .env",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level, overrides ALPACA_MCP_LOG_LEVEL",
    )
    parser.add_argument(
        "--log-file",
        help="Append JSON log lines to this file, overrides ALPACA_MCP_LOG_FILE",
    )
    return parser


async def main(argv: list[str] | None = None) -> None:
    """Main entry point for the MCP server."""
    args = build_parser().parse_args(argv)

    settings_provider = (
        partial(AlpacaSettings, _env_file=args.env_file) if args.env_file else AlpacaSettings
    )
    settings = settings_provider()
    configure_logging(
        args.log_level or settings.log_level,
        file_path=args.log_file or settings.log_file,
    )

    server = create_mcp_server(settings_provider=settings_provider)
    transport_kwargs = {}
    if args.transport != "stdio":
        transport_kwargs = {"host": args.host, "port": args.port}

    try:
        await server.start(args.transport, **transport_kwargs)
    except KeyboardInterrupt:
        logger.info("Shutting down Alpaca MCP Server...")


def cli() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
