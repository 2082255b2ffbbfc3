"""Logging utilities for monitoring and debugging."""

from alpaca_mcp.core.logging.config import LogConfig
from alpaca_mcp.core.logging.logger import configure_logging, log_context, logger

__all__ = [
    "LogConfig",
    "configure_logging",
    "log_context",
    "logger",
]
