"""Tests for structured logging configuration."""

import json
import logging
import pathlib
import sys

import pytest
import structlog

import ide_bridge.telemetry.logger as logger_module
from ide_bridge.telemetry.logger import configure_logging, get_logger


@pytest.fixture
def file_logging(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch):
    """Fixture that points logging at a temporary directory and restores it afterwards."""
    log_dir = tmp_path / "logs"
    monkeypatch.setattr(logger_module, "_get_log_dir", lambda: log_dir)
    monkeypatch.setattr(logger_module, "_get_log_level", lambda: "DEBUG")
    structlog.reset_defaults()
    logging.root.handlers.clear()
    configure_logging()
    yield log_dir
    monkeypatch.undo()
    structlog.reset_defaults()
    configure_logging()


def read_entries(log_dir: pathlib.Path) -> list[dict]:
    for handler in logging.root.handlers:
        handler.flush()
    lines = (log_dir / "current.jsonl").read_text(encoding="utf-8").splitlines()
    return [json.loads(line) for line in lines if line.strip()]


class TestLoggerConfiguration:
    """Test logger configuration and setup."""

    def test_get_logger_returns_bound_logger(self) -> None:
        """Test that get_logger returns a usable logger."""
        log = get_logger(__name__)

        assert hasattr(log, "info")
        assert hasattr(log, "warning")
        assert hasattr(log, "error")

    def test_get_logger_configures_on_first_call(self, file_logging) -> None:
        """Test that get_logger configures structlog when needed."""
        structlog.reset_defaults()

        get_logger("ide_bridge.test.first")

        assert structlog.is_configured()

    def test_logger_emits_structured_json(self, file_logging) -> None:
        """Test events are written as JSON lines with component and timestamp."""
        log = get_logger("ide_bridge.tools.invoker")
        log.info("tool_call_started", tool_name="FileBuild", trace_id="trace-123", timeout_seconds=130)

        entry = read_entries(file_logging)[-1]

        assert entry["event"] == "tool_call_started"
        assert entry["tool_name"] == "FileBuild"
        assert entry["timeout_seconds"] == 130
        assert entry["trace_id"] == "trace-123"
        assert entry["component"] == "invoker"
        assert entry["level"] == "info"
        assert "timestamp" in entry

    def test_console_handler_uses_stderr(self, file_logging) -> None:
        """Test no handler writes to stdout, which carries the MCP transport."""
        streams = [
            handler.stream
            for handler in logging.root.handlers
            if isinstance(handler, logging.StreamHandler)
            and not isinstance(handler, logging.FileHandler)
        ]

        assert streams
        assert all(stream not in (sys.stdout, sys.__stdout__) for stream in streams)

    def test_exceptions_are_rendered(self, file_logging) -> None:
        """Test exc_info is serialized into the entry."""
        log = get_logger("ide_bridge.build.incremental")
        try:
            raise RuntimeError("sweep failed")
        except RuntimeError:
            log.warning("error_details_collection_failed", exc_info=True)

        entry = read_entries(file_logging)[-1]

        assert entry["event"] == "error_details_collection_failed"
        assert "RuntimeError: sweep failed" in entry["exception"]
