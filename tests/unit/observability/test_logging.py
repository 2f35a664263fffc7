"""Unit tests for observability logging."""

from __future__ import annotations

import json
import logging

import pytest
import structlog
from structlog.testing import capture_logs

from attr_masker.observability.logging import LoggerFactory, get_logger


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


# ---------------------------------------------------------------------------
# get_logger
# ---------------------------------------------------------------------------


class TestGetLogger:
    def test_binds_initial_values(self) -> None:
        with capture_logs() as logs:
            get_logger("masking", model="Patient").info("masking.model.done", masked=2)
        assert logs == [
            {"model": "Patient", "masked": 2, "event": "masking.model.done", "log_level": "info"}
        ]

    def test_without_initial_values(self) -> None:
        with capture_logs() as logs:
            get_logger().warning("masking.rejected")
        assert logs[0]["event"] == "masking.rejected"
        assert logs[0]["log_level"] == "warning"


# ---------------------------------------------------------------------------
# LoggerFactory
# ---------------------------------------------------------------------------


class TestLoggerFactory:
    def test_replaces_root_handlers(self) -> None:
        LoggerFactory.configure(level=logging.WARNING)
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        assert root.level == logging.WARNING

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        LoggerFactory.configure(json_output=True)
        get_logger("attr_masker.test").info("masking.done", models=3)
        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "masking.done"
        assert payload["models"] == 3
        assert payload["level"] == "info"
        assert payload["logger"] == "attr_masker.test"
        assert "timestamp" in payload

    def test_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        LoggerFactory.configure()
        get_logger("attr_masker.test").info("masking.done", models=3)
        err = capsys.readouterr().err
        assert "masking.done" in err
        assert "models=3" in err

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        LoggerFactory.configure(level=logging.ERROR, json_output=True)
        get_logger("attr_masker.test").info("masking.record", outcome="masked")
        assert capsys.readouterr().err == ""
