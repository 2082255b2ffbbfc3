import json
from unittest.mock import AsyncMock, patch

import pytest

from alpaca_mcp.core.logging import configure_logging, logger
from alpaca_mcp.mcp.__main__ import build_parser, main


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    configure_logging()


def test_parser_defaults():
    args = build_parser().parse_args([])

    assert args.transport == "stdio"
    assert args.host == "127.0.0.1"
    assert args.port == 8001
    assert args.env_file is None
    assert args.log_level is None
    assert args.log_file is None


def test_parser_rejects_unknown_transport():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--transport", "websocket"])


@pytest.mark.asyncio
async def test_main_starts_stdio_without_network_options():
    with patch("alpaca_mcp.mcp.server.AlpacaMCPServer.start", new_callable=AsyncMock) as start:
        await main(["--log-level", "ERROR"])

    start.assert_awaited_once_with("stdio")


@pytest.mark.asyncio
async def test_main_passes_host_and_port_for_http(tmp_path):
    env_file = tmp_path / "alpaca.env"
    env_file.write_text("ALPACA_MCP_LOG_LEVEL=WARNING\n")

    with patch("alpaca_mcp.mcp.server.AlpacaMCPServer.start", new_callable=AsyncMock) as start:
        await main(["--transport", "http", "--port", "9000", "--env-file", str(env_file)])

    start.assert_awaited_once_with("http", host="127.0.0.1", port=9000)


@pytest.mark.asyncio
async def test_main_writes_logs_to_log_file_option(tmp_path):
    log_file = tmp_path / "server.jsonl"

    with patch("alpaca_mcp.mcp.server.AlpacaMCPServer.start", new_callable=AsyncMock):
        await main(["--log-file", str(log_file)])
    logger.info("after startup")

    messages = [json.loads(line)["message"] for line in log_file.read_text().splitlines()]
    assert messages[-1] == "after startup"


@pytest.mark.asyncio
async def test_main_reads_log_file_from_env(tmp_path, monkeypatch):
    log_file = tmp_path / "env.jsonl"
    monkeypatch.setenv("ALPACA_MCP_LOG_FILE", str(log_file))

    with patch("alpaca_mcp.mcp.server.AlpacaMCPServer.start", new_callable=AsyncMock):
        await main(["--log-level", "WARNING"])
    logger.info("filtered")
    logger.warning("written")

    records = [json.loads(line) for line in log_file.read_text().splitlines()]
    assert [record["message"] for record in records] == ["written"]
