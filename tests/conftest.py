"""Pytest configuration for the alpaca-mcp test suite."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable

import httpx
import pytest

from alpaca_mcp.core.config import AlpacaSettings

ALPACA_ENV_VARS = (
    "ALPACA_API_KEY",
    "ALPACA_SECRET_KEY",
    "ALPACA_ENDPOINT",
    "ALPACA_BROKER_ENDPOINT",
    "ALPACA_MCP_LOG_LEVEL",
    "ALPACA_MCP_HTTP_TIMEOUT",
    "ALPACA_MCP_LOG_FILE",
)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--alpaca-run-integration",
        action="store_true",
        default=False,
        help="Run integration tests that call the live Alpaca API.",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register the integration marker."""

    config.addinivalue_line(
        "markers",
        "integration: marks tests requiring the live Alpaca API",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--alpaca-run-integration"):
        return

    skip_integration = pytest.mark.skip(
        reason="integration tests require --alpaca-run-integration",
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path, request) -> None:
    """Keep the developer's ALPACA_* variables and .env out of unit tests."""

    if "integration" in request.keywords:
        return
    for name in ALPACA_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> AlpacaSettings:
    return AlpacaSettings(
        api_key="key",
        secret_key="secret",
        endpoint="https://api/",
        broker_endpoint="https://broker/",
    )


class RecordingTransport(httpx.MockTransport):
    """Mock transport answering from a queue of responses and recording requests."""

    def __init__(self, responses: Iterable[httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._responses = list(responses)
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"unexpected request to {request.url}")
        return self._responses.pop(0)

    @property
    def urls(self) -> list[str]:
        return [str(request.url) for request in self.requests]


def json_response(status_code: int, body: object) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(body).encode(),
        headers={"Content-Type": "application/json"},
    )


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Build a ``RecordingTransport`` from ``(status, body)`` pairs or ready responses."""

    def _make(*pages: tuple[int, object] | httpx.Response) -> RecordingTransport:
        return RecordingTransport(
            page if isinstance(page, httpx.Response) else json_response(*page)
            for page in pages
        )

    return _make
