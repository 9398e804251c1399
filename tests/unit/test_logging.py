"""Tests for logging utilities."""

import json
import logging
from pathlib import Path

import pytest
from rich.logging import RichHandler

from cmdroute.utils.logging import (
    CONTEXT_ATTR,
    JSONFormatter,
    PlainFormatter,
    get_logger,
    log_with_context,
    setup_logging,
)


def make_record(context: dict | None = None) -> logging.LogRecord:
    record = logging.LogRecord(
        name="cmdroute.commands.registry",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg="Command '%s' registered twice",
        args=("ping",),
        exc_info=None,
    )
    if context is not None:
        setattr(record, CONTEXT_ATTR, context)
    return record


class TestFormatters:
    """Tests for the log formatters."""

    def test_json_includes_context(self) -> None:
        """Test JSON output merges structured context."""
        data = json.loads(JSONFormatter().format(make_record({"command": "ping"})))

        assert data["level"] == "WARNING"
        assert data["logger"] == "cmdroute.commands.registry"
        assert data["message"] == "Command 'ping' registered twice"
        assert data["command"] == "ping"

    def test_plain_appends_context(self) -> None:
        """Test plain output lists context as key=value pairs."""
        line = PlainFormatter().format(make_record({"command": "ping"}))

        assert line.startswith("WARNING")
        assert line.endswith("[command=ping]")

    def test_plain_without_context(self) -> None:
        """Test plain output with no context has no trailing brackets."""
        line = PlainFormatter().format(make_record())

        assert line.endswith("registered twice")


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_rich_console_handler(self) -> None:
        """Test the default console handler renders through Rich."""
        logger = setup_logging(level="debug")

        assert logger.name == "cmdroute"
        assert logger.level == logging.DEBUG
        assert isinstance(logger.handlers[0], RichHandler)
        assert logger.propagate is False

    def test_plain_handler(self) -> None:
        """Test colorless console logging."""
        logger = setup_logging(use_color=False)

        assert isinstance(logger.handlers[0].formatter, PlainFormatter)

    def test_file_handler(self, temp_dir: Path) -> None:
        """Test file logs are written as JSON."""
        log_file = temp_dir / "logs" / "cmdroute.log"
        logger = setup_logging(level="INFO", log_file=log_file, use_color=False)

        log_with_context(
            get_logger("cmdroute.test"), logging.INFO, "hello", command="ping"
        )
        for handler in logger.handlers:
            handler.flush()

        data = json.loads(log_file.read_text().splitlines()[-1])
        assert data["message"] == "hello"
        assert data["command"] == "ping"

    def test_repeated_setup_replaces_handlers(self) -> None:
        """Test calling setup twice does not duplicate handlers."""
        setup_logging()
        logger = setup_logging()

        assert len(logger.handlers) == 1


class TestLogWithContext:
    """Tests for log_with_context."""

    def test_context_attached(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test context fields land on the record."""
        with caplog.at_level(logging.INFO, logger="cmdroute"):
            log_with_context(
                get_logger("cmdroute.test"), logging.INFO, "registered", command="a.b"
            )

        record = caplog.records[-1]
        assert record.getMessage() == "registered"
        assert getattr(record, CONTEXT_ATTR) == {"command": "a.b"}
