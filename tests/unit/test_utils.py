"""Test utils module functionality."""

import logging
from collections.abc import Iterator
from unittest.mock import Mock

import pytest
import structlog

from daybook.config import Settings
from daybook.errors import InjectionError, InputCancelled
from daybook.utils import error_handler
from daybook.utils.error_handler import ErrorHandler, handle_errors
from daybook.utils.logger import get_logger, preview, setup_logging
from daybook.utils.mixins import LoggerMixin


@pytest.fixture(autouse=True)
def _reset_logging_state() -> Iterator[None]:
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    try:
        yield
    finally:
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()
        structlog.reset_defaults()


@pytest.fixture
def error_logger(monkeypatch: pytest.MonkeyPatch) -> Mock:
    logger = Mock()
    monkeypatch.setattr(error_handler, "logger", logger)
    return logger


class TestLogger:
    """Test logging functionality."""

    def test_setup_logging(self):
        """Test logging setup from the cached settings doesn't raise errors."""
        setup_logging()
        assert logging.getLogger().level == logging.INFO

    def test_log_level(self):
        setup_logging(Settings(log_level="warning"))
        assert logging.getLogger().level == logging.WARNING

    def test_development_mode_enables_debug(self):
        setup_logging(Settings(dev=True, log_level="ERROR"))
        assert logging.getLogger().level == logging.DEBUG

    def test_writes_plain_message_to_file(self, tmp_path):
        """Test log file output uses raw message format."""
        log_file = tmp_path / "logs" / "journal.log"
        setup_logging(Settings(log_file=log_file))

        test_message = "logging format check"
        logging.getLogger("format-check").info(test_message)

        root_logger = logging.getLogger()
        file_handlers = [
            handler
            for handler in root_logger.handlers
            if isinstance(handler, logging.FileHandler)
        ]
        assert file_handlers, "FileHandler is not configured"
        for handler in file_handlers:
            handler.flush()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert lines, "log file is empty"
        assert lines[-1].endswith(test_message)

    def test_get_logger_returns_logger(self):
        """Test get_logger returns a logger instance."""
        logger = get_logger("test")
        assert logger is not None
        assert hasattr(logger, "info")
        assert hasattr(logger, "error")
        assert hasattr(logger, "warning")

    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            (None, ""),
            ("short", "short"),
            ("two\nlines", "two\\nlines"),
            ("x" * 60, "x" * 50 + "..."),
        ],
    )
    def test_preview(self, content, expected):
        assert preview(content) == expected


class TestLoggerMixin:
    """Test LoggerMixin functionality."""

    def test_logger_mixin_provides_logger(self):
        """Test LoggerMixin provides logger property."""

        class Component(LoggerMixin):
            pass

        logger = Component().logger

        assert logger is not None
        assert hasattr(logger, "info")
        assert hasattr(logger, "debug")


class TestErrorHandling:
    """Failures are logged, cancellations are not"""

    def test_log_and_reraise(self, error_logger: Mock):
        error = InjectionError(InjectionError.EDIT_FAILED, "a.md")

        with pytest.raises(InjectionError):
            ErrorHandler.log_and_reraise("inject string", error, uri="a.md")

        error_logger.error.assert_called_once_with(
            "Failed to inject string", error="Failed to applied edit", uri="a.md"
        )

    def test_log_and_return_default(self, error_logger: Mock):
        result = ErrorHandler.log_and_return_default("read", ValueError("bad"), [])

        assert result == []
        error_logger.error.assert_called_once()

    def test_cancellation_is_not_logged(self, error_logger: Mock):
        with pytest.raises(InputCancelled):
            ErrorHandler.log_and_reraise("process input", InputCancelled())

        error_logger.error.assert_not_called()

    async def test_decorated_coroutine(self, error_logger: Mock):
        @handle_errors("load page")
        async def load_page():
            raise FileNotFoundError("missing.md")

        with pytest.raises(FileNotFoundError):
            await load_page()

        error_logger.error.assert_called_once()
        assert error_logger.error.call_args.args == ("Failed to load page",)

    async def test_decorated_coroutine_default(self, error_logger: Mock):
        @handle_errors("load page", default_return="fallback", reraise=False)
        async def load_page():
            raise RuntimeError("boom")

        assert await load_page() == "fallback"

    def test_decorated_function(self, error_logger: Mock):
        @handle_errors("parse", default_return=0, reraise=False, source="input box")
        def parse():
            raise ValueError("bad date")

        assert parse() == 0
        error_logger.error.assert_called_once_with(
            "Failed to parse", error="bad date", source="input box"
        )

    async def test_decorated_coroutine_cancelled(self, error_logger: Mock):
        @handle_errors("process input")
        async def process():
            raise InputCancelled()

        with pytest.raises(InputCancelled):
            await process()

        error_logger.error.assert_not_called()

    async def test_success_is_passed_through(self, error_logger: Mock):
        @handle_errors("load page")
        async def load_page():
            return "page"

        assert await load_page() == "page"
        error_logger.error.assert_not_called()
