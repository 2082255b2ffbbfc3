"""Core exception classes for alpaca-mcp."""

from typing import Any

from alpaca_mcp.core.exceptions.messages import format_upstream_error


class AlpacaMCPError(Exception):
    """Base exception for alpaca-mcp."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        """Initialise the exception.

        Args:
            message: Human readable error message
            error_code: Stable error code
            details: Extra details for logging
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ConfigurationError(AlpacaMCPError):
    """Raised when credentials or endpoints are missing."""

    def __init__(
        self,
        message: str,
        missing: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if missing:
            super_details["missing"] = missing
        super().__init__(message, "CONFIGURATION_ERROR", super_details)
        self.missing = missing or []


class UpstreamHTTPError(AlpacaMCPError):
    """Raised when the Alpaca API answers with a non-success status."""

    def __init__(
        self,
        status_code: int,
        reason: str,
        body: Any,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        super_details["status_code"] = status_code
        super().__init__(
            format_upstream_error(status_code, reason, body),
            "UPSTREAM_HTTP_ERROR",
            super_details,
        )
        self.status_code = status_code
        self.reason = reason
        self.body = body
