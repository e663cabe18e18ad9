"""Tests for structlog configuration."""

import io
import json
import logging

import pytest
import structlog

from command_context.config import LoggingSettings
from command_context.logging import PACKAGE_LOGGER, configure_logging


@pytest.fixture(autouse=True)
def restore_logging():
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    package_logger.handlers = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate
    structlog.reset_defaults()


def lines(stream: io.StringIO) -> list[str]:
    return [line for line in stream.getvalue().splitlines() if line]


def test_json_format() -> None:
    """Test JSON format renders one object per event."""
    stream = io.StringIO()
    configure_logging(LoggingSettings(level="INFO", format="json"), stream=stream)

    structlog.get_logger("command_context.tests").info("context_assembled", returned=3)

    [line] = lines(stream)
    event = json.loads(line)
    assert event["event"] == "context_assembled"
    assert event["returned"] == 3
    assert event["level"] == "info"
    assert event["logger"] == "command_context.tests"
    assert "timestamp" in event


def test_console_format() -> None:
    """Test console format renders human-readable lines."""
    stream = io.StringIO()
    configure_logging(LoggingSettings(level="DEBUG", format="console"), stream=stream)

    structlog.get_logger("command_context.tests").debug(
        "selection_only_context", command_id="explain"
    )

    [line] = lines(stream)
    assert "selection_only_context" in line
    assert "command_id=explain" in line


def test_level_filters_events() -> None:
    """Test events below the configured level are dropped."""
    stream = io.StringIO()
    configure_logging(LoggingSettings(level="WARNING"), stream=stream)
    log = structlog.get_logger("command_context.tests")

    log.info("provider_started")
    log.warning("provider_failed", provider="open_tabs")

    [line] = lines(stream)
    assert json.loads(line)["event"] == "provider_failed"


def test_stdlib_records_share_the_renderer() -> None:
    """Test plain stdlib records under the package are rendered too."""
    stream = io.StringIO()
    configure_logging(LoggingSettings(), stream=stream)

    logging.getLogger("command_context.tests").warning("plain record")

    [line] = lines(stream)
    assert json.loads(line)["event"] == "plain record"


def test_reconfigure_replaces_handler() -> None:
    """Test repeated configuration installs a single handler."""
    first = configure_logging(LoggingSettings(), stream=io.StringIO())
    second = configure_logging(LoggingSettings(), stream=io.StringIO())

    handlers = logging.getLogger(PACKAGE_LOGGER).handlers
    assert second in handlers
    assert first not in handlers


def test_host_root_logger_untouched() -> None:
    """Test configuration does not add handlers to the root logger."""
    before = list(logging.getLogger().handlers)

    configure_logging(LoggingSettings(), stream=io.StringIO())

    assert logging.getLogger().handlers == before
    assert logging.getLogger(PACKAGE_LOGGER).propagate is False
