"""Tests for logging configuration."""

import io
import json
import logging

import pytest
import structlog

from rainfx.logging_config import HANDLER_NAME, bind_run_context, configure_logging, get_logger


@pytest.fixture
def stream():
    """Configure JSON logging into a buffer, removing the handler afterwards."""
    buf = io.StringIO()
    configure_logging("INFO", stream=buf)
    yield buf
    structlog.contextvars.clear_contextvars()
    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(handler)


def records(buf):
    return [json.loads(line) for line in buf.getvalue().splitlines() if line.startswith("{")]


class TestConfigureLogging:
    """Test handler installation and rendering."""

    def test_json_lines(self, stream):
        get_logger("rainfx.test.json").info("pool_resized", size=900)
        (record,) = records(stream)
        assert record["event"] == "pool_resized"
        assert record["size"] == 900
        assert record["level"] == "info"

    def test_reconfigure_replaces_handler(self, stream):
        """Test a second call redirects output instead of stacking handlers."""
        other = io.StringIO()
        configure_logging("INFO", stream=other)

        get_logger("rainfx.test.redirect").info("window_opened")

        ours = [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]
        assert len(ours) == 1
        assert "window_opened" in other.getvalue()
        assert "window_opened" not in stream.getvalue()

    def test_level_filters(self, stream):
        configure_logging("WARNING", stream=stream)
        log = get_logger("rainfx.test.level")
        log.info("quiet")
        log.warning("loud")
        assert [r["event"] for r in records(stream)] == ["loud"]

    def test_quiet_third_party(self, stream):
        configure_logging("DEBUG", stream=stream)
        assert logging.getLogger("PIL").level == logging.WARNING


class TestRunContext:
    """Test run-wide context binding."""

    def test_bound_values_on_every_line(self, stream):
        bind_run_context(command="render", seed=7, env=None)
        get_logger("rainfx.test.context").info("video_recorded")
        (record,) = records(stream)
        assert record["command"] == "render"
        assert record["seed"] == 7
        assert "env" not in record

    def test_rebinding_replaces(self, stream):
        bind_run_context(command="render", seed=7)
        bind_run_context(command="snapshot")
        assert structlog.contextvars.get_contextvars() == {"command": "snapshot"}
