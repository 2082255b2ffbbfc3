"""Tests for structured logging with trace propagation."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from alpaca_mcp.core.config import AlpacaSettings
from alpaca_mcp.core.logging import configure_logging, log_context, logger
from alpaca_mcp.core.models import ErrorKind
from alpaca_mcp.core.services import MarketDataService


def _read_records(stream: io.StringIO) -> list[dict[str, object]]:
    stream.seek(0)
    lines = [line for line in stream.getvalue().splitlines() if line.strip()]
    return [json.loads(line) for line in lines]


def _read_file_records(path: Path) -> list[dict[str, object]]:
    return [json.loads(line) for line in path.read_text().splitlines() if line.strip()]


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    configure_logging()


def test_structured_log_contains_trace_and_context() -> None:
    buffer = io.StringIO()
    configure_logging(console_stream=buffer)

    with log_context(trace_id="trace-123", tool="get-news", request_id="req-42"):
        logger.info("news fetched", symbol="AAPL")

    records = _read_records(buffer)
    assert len(records) == 1
    record = records[0]
    assert record["trace_id"] == "trace-123"
    assert record["tool"] == "get-news"
    assert record["error_kind"] is None
    assert record["context"]["request_id"] == "req-42"
    assert record["context"]["symbol"] == "AAPL"


def test_trace_id_propagates_within_context() -> None:
    buffer = io.StringIO()
    configure_logging(console_stream=buffer)

    with log_context() as trace_id:
        logger.info("first event")
        logger.info("second event")

    logger.info("outside context")

    records = _read_records(buffer)
    assert len(records) == 3
    assert records[0]["trace_id"] == records[1]["trace_id"] == trace_id
    assert records[2]["trace_id"] != trace_id


def test_level_filters_records() -> None:
    buffer = io.StringIO()
    configure_logging("WARNING", console_stream=buffer)

    logger.info("dropped")
    logger.warning("kept")

    assert [record["message"] for record in _read_records(buffer)] == ["kept"]


def test_file_sink_appends_json_lines(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "alpaca-mcp.jsonl"
    configure_logging(console_output=False, file_path=str(log_file))

    with log_context(tool="get-assets"):
        logger.info("assets fetched")
    logger.info("done")

    records = _read_file_records(log_file)
    assert [record["message"] for record in records] == ["assets fetched", "done"]
    assert records[0]["tool"] == "get-assets"
    assert records[1]["tool"] is None


def test_file_sink_runs_alongside_console(tmp_path: Path) -> None:
    buffer = io.StringIO()
    log_file = tmp_path / "alpaca-mcp.jsonl"
    configure_logging(console_stream=buffer, file_path=str(log_file))

    logger.warning("both sinks")

    assert _read_records(buffer)[0]["message"] == "both sinks"
    assert _read_file_records(log_file)[0]["level"] == "WARNING"


@pytest.mark.asyncio
async def test_failed_fetch_is_logged_with_error_kind() -> None:
    buffer = io.StringIO()
    configure_logging(console_stream=buffer)

    with log_context(tool="get-market-days"):
        result = await MarketDataService(AlpacaSettings()).get_market_days("2021-01-01", "2021-01-02")

    assert result.error.kind is ErrorKind.CONFIGURATION
    records = _read_records(buffer)
    assert records[-1]["level"] == "WARNING"
    assert records[-1]["tool"] == "get-market-days"
    assert records[-1]["error_kind"] == "configuration"
    assert records[-1]["exception"].startswith("ConfigurationError: Alpaca credentials")
