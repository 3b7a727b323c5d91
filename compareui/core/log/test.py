"""Tests for core logging module."""

import logging
from io import StringIO

import pytest

from .lib import get_logger, setup_logging


class TestLogging:
    """Test core logging API."""

    @pytest.mark.unit
    def test_get_logger(self) -> None:
        """Verify logger instance creation."""
        logger = get_logger("test")
        assert logger.name == "test"
        assert isinstance(logger, logging.Logger)

    @pytest.mark.unit
    def test_get_logger_default_name(self) -> None:
        """Verify default logger name."""
        logger = get_logger()
        assert logger.name == "compareui"

    @pytest.mark.unit
    def test_module_loggers_nest_under_package(self) -> None:
        """Module loggers created with __name__ are children of the default."""
        child = get_logger("compareui.llm.generator.lib")
        assert child.parent is not None
        assert child.name.startswith(get_logger().name)

    @pytest.mark.unit
    def test_setup_logging(self) -> None:
        """Verify logging setup."""
        stream = StringIO()
        setup_logging(level=logging.DEBUG, stream=stream)
        logger = get_logger("test_setup")
        logger.debug("test message")

        # basicConfig is a no-op when the root logger already has handlers,
        # so only the API contract is checked here.
        assert logger.level == logging.NOTSET

    @pytest.mark.unit
    def test_setup_logging_quiets_http_clients(self) -> None:
        """HTTP client loggers are raised to WARNING above DEBUG."""
        setup_logging(level=logging.INFO, stream=StringIO())
        assert logging.getLogger("httpx").level == logging.WARNING
