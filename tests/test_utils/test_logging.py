"""
Tests for structured logging utilities.

Tests cover:
- Logger namespacing
- Key/value and JSON output
- Masking of postage batch IDs and signatures
- LogContext fields
- Level helpers
"""

import io
import json
import logging

import pytest

from swarm_blockstore.utils.logging import (
    ROOT_LOGGER_NAME,
    LogContext,
    configure_logging,
    disable_logging,
    enable_debug,
    get_logger,
    set_level,
)

from tests.conftest import LONG_STAMP


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Restore the package logger after each test."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.disabled = False
    root.propagate = True


class TestGetLogger:
    """Tests for get_logger."""

    def test_namespaced(self) -> None:
        """Test loggers live under the package root."""
        assert get_logger("swarm_blockstore.storage").name == "swarm_blockstore.storage"
        assert get_logger("myapp").name == "swarm_blockstore.myapp"
        assert get_logger(ROOT_LOGGER_NAME).name == ROOT_LOGGER_NAME

    def test_null_handler_installed(self) -> None:
        """Test the library is silent until configured."""
        root = logging.getLogger(ROOT_LOGGER_NAME)
        assert any(isinstance(h, logging.NullHandler) for h in root.handlers)


class TestConfigureLogging:
    """Tests for configure_logging output."""

    def test_key_value_format(self) -> None:
        """Test extras are appended as key=value pairs."""
        stream = io.StringIO()
        configure_logging("DEBUG", stream=stream)

        get_logger("test").debug("Bee request", extra={"method": "POST", "status": 201})

        line = stream.getvalue()
        assert "Bee request" in line
        assert "method=POST" in line
        assert "status=201" in line

    def test_json_format(self) -> None:
        """Test JSON lines with extras as keys."""
        stream = io.StringIO()
        configure_logging("INFO", json_format=True, stream=stream)

        get_logger("test").info("Tag created", extra={"uid": 7})

        payload = json.loads(stream.getvalue().strip())
        assert payload["message"] == "Tag created"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "swarm_blockstore.test"
        assert payload["uid"] == 7

    def test_reconfigure_replaces_handler(self) -> None:
        """Test calling twice does not duplicate output."""
        stream = io.StringIO()
        configure_logging("INFO", stream=io.StringIO())
        configure_logging("INFO", stream=stream)

        get_logger("test").info("once")

        assert stream.getvalue().count("once") == 1

    def test_stamp_masked(self) -> None:
        """Test postage batch IDs and signatures never appear in full."""
        stream = io.StringIO()
        configure_logging("INFO", json_format=True, stream=stream)

        get_logger("test").info("upload", extra={"stamp": LONG_STAMP, "signature": "ab" * 65})

        payload = json.loads(stream.getvalue().strip())
        assert payload["stamp"] == LONG_STAMP[:8] + "***"
        assert payload["signature"] == "abababab***"
        assert LONG_STAMP not in stream.getvalue()


class TestLogContext:
    """Tests for LogContext."""

    def test_fields_added_and_removed(self) -> None:
        """Test context fields apply only inside the block."""
        stream = io.StringIO()
        configure_logging("INFO", json_format=True, stream=stream)
        logger = get_logger("test")

        with LogContext(upload="site-v2"):
            logger.info("inside")
        logger.info("outside")

        inside, outside = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert inside["upload"] == "site-v2"
        assert "upload" not in outside

    def test_explicit_extra_wins(self) -> None:
        """Test call-site extras are not overwritten by the context."""
        stream = io.StringIO()
        configure_logging("INFO", json_format=True, stream=stream)

        with LogContext(operation="outer"):
            get_logger("test").info("call", extra={"operation": "inner"})

        assert json.loads(stream.getvalue())["operation"] == "inner"


class TestLevelHelpers:
    """Tests for set_level, disable_logging and enable_debug."""

    def test_set_level(self) -> None:
        """Test setting the package level by name."""
        set_level("warning")
        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.WARNING

    def test_disable_and_enable(self) -> None:
        """Test silencing and re-enabling output."""
        stream = io.StringIO()
        configure_logging("INFO", stream=stream)
        logger = get_logger("test")

        disable_logging()
        logger.info("hidden")
        enable_debug()
        logger.debug("shown")

        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()
