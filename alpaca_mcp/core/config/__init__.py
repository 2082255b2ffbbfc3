"""Configuration management module."""

from alpaca_mcp.core.config.settings import (
    AlpacaSettings,
    SettingsProvider,
    load_settings,
)

__all__ = ["AlpacaSettings", "SettingsProvider", "load_settings"]
