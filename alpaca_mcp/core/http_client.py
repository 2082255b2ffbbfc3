"""
HTTP client for the Alpaca REST API.

This module provides the single authenticated request helper every fetcher
goes through. URLs are built by literal concatenation of base and path, the
query string keeps the parameter mapping's insertion order, and non-success
responses are raised as ``UpstreamHTTPError``. There is no retry layer here.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

import httpx

from alpaca_mcp.core.config import AlpacaSettings
from alpaca_mcp.core.exceptions import UpstreamHTTPError
from alpaca_mcp.core.logging import logger

KEY_ID_HEADER = "APCA-API-KEY-ID"
SECRET_KEY_HEADER = "APCA-API-SECRET-KEY"


@dataclass
class HttpConfig:
    """Configuration for HTTP client behavior."""

    timeout: float | None = None
    user_agent: str = "alpaca-mcp/1.0.0"
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Validate HTTP configuration."""
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_settings(cls, settings: AlpacaSettings) -> HttpConfig:
        return cls(timeout=settings.http_timeout)


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(params: Mapping[str, Any]) -> str:
    """Form-encode ``params`` in insertion order, skipping ``None`` values."""
    return urlencode(
        [(key, _stringify(value)) for key, value in params.items() if value is not None]
    )


def build_url(base: str, path: str, params: Mapping[str, Any] | None = None) -> str:
    """Concatenate ``base`` and ``path`` as-is and append the query string."""
    query = encode_query(params or {})
    return f"{base}{path}?{query}" if query else f"{base}{path}"


class AlpacaHttpClient:
    """
    Authenticated HTTP client for Alpaca.

    Credentials are checked on every request before any network activity, so
    a misconfigured server fails fast with ``ConfigurationError``.
    """

    def __init__(
        self,
        settings: AlpacaSettings,
        http_config: HttpConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self.http_config = http_config or HttpConfig.from_settings(settings)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> AlpacaHttpClient:
        if self._client is None:
            self._client = self._build_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.http_config.timeout),
            headers={
                "User-Agent": self.http_config.user_agent,
                **self.http_config.headers,
            },
            follow_redirects=True,
            transport=self._transport,
        )

    async def close(self) -> None:
        """Close HTTP client and cleanup resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        base: str,
        path: str,
        method: str = "GET",
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Perform an authenticated call and return the decoded JSON body.

        Raises:
            ConfigurationError: credentials are missing, raised before any I/O
            UpstreamHTTPError: the response status is not 2xx
            json.JSONDecodeError: a response body is not valid JSON
            httpx.TransportError: connection level failures, unwrapped
        """
        key_id, secret_key = self.settings.require_credentials()

        url = build_url(base, path, params)
        logger.debug("Alpaca request", method=method, path=path)
        headers = {KEY_ID_HEADER: key_id, SECRET_KEY_HEADER: secret_key}

        if self._client is not None:
            response = await self._client.request(method, url, headers=headers)
        else:
            # not entered: the connection pool lives for this call only
            async with self._build_client() as client:
                response = await client.request(method, url, headers=headers)

        if not response.is_success:
            body = response.json()
            raise UpstreamHTTPError(response.status_code, response.reason_phrase, body)
        return response.json()
