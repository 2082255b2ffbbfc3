"""
alpaca-mcp MCP Server Package

This package provides the MCP (Model Context Protocol) server exposing Alpaca
assets, stock bars, market days and news as tools.
"""

from alpaca_mcp.mcp.server import AlpacaMCPServer, create_mcp_server

__all__ = ["AlpacaMCPServer", "create_mcp_server"]
