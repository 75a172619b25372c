"""
Tests for logging_manager module.

Tests the TeabookLogger event files and console level, timed operations,
the safe_logger function and NullLogger class that let library code log
without None checks, and the shared CLI error handler.
"""
import logging
import pytest
from unittest.mock import MagicMock

from teabook.core.cli import setup_logger
from teabook.core.exceptions import DatasetError
from teabook.core.logging_manager import (
    NullLogger,
    TeabookLogger,
    format_cli_error,
    handle_cli_error,
    safe_logger,
)


def console_handler(logger):
    return next(
        h for h in logger.logger.handlers if not isinstance(h, logging.FileHandler)
    )


class TestNullLogger:
    """Tests for NullLogger class."""

    def test_null_logger_methods_are_no_ops(self):
        """Every NullLogger method accepts the TeabookLogger arguments."""
        logger = NullLogger()
        logger.log_operation("op", {"key": "value"}, duration=0.5)
        logger.log_error(ValueError("x"), {"context": "test"})
        logger.log_debug("debug", {"key": "value"})
        logger.log_warning("warning", {"key": "value"})

    def test_null_logger_log_cli_error_returns_formatted(self):
        result = NullLogger().log_cli_error(DatasetError("missing"), {"context": "test"})
        assert result == "❌ DatasetError: missing"

    def test_null_logger_timed_yields_details(self):
        with NullLogger().timed("query", {"dataset": "d.yaml"}) as details:
            details["results"] = 2
        assert details == {"dataset": "d.yaml", "results": 2}


class TestSafeLogger:
    """Tests for safe_logger function."""

    def test_safe_logger_returns_logger_when_provided(self):
        mock_logger = MagicMock(spec=TeabookLogger)
        assert safe_logger(mock_logger) is mock_logger

    def test_safe_logger_returns_null_logger_when_none(self):
        assert isinstance(safe_logger(None), NullLogger)

    def test_safe_logger_null_logger_is_singleton(self):
        assert safe_logger(None) is safe_logger(None)

    def test_works_with_log_details(self):
        mock_logger = MagicMock(spec=TeabookLogger)
        details = {"query": "yabukita", "results": 1}

        safe_logger(mock_logger).log_operation("search", details)
        mock_logger.log_operation.assert_called_once_with("search", details)


class TestTeabookLogger:
    """Tests for file output and console level of TeabookLogger."""

    def test_writes_component_log(self, tmp_path):
        logger = TeabookLogger(tmp_path, "test")
        logger.log_operation("load_dataset", {"cultivars": 3})
        logger.log_debug("search", {"results": 2})
        logger.log_debug("facets")

        content = (tmp_path / "test.log").read_text(encoding="utf-8")
        assert 'OPERATION - load_dataset: {"cultivars": 3}' in content
        assert 'DEBUG - search: {"results": 2}' in content
        assert content.rstrip().endswith("DEBUG - facets")

    def test_duration_in_milliseconds(self, tmp_path):
        logger = TeabookLogger(tmp_path, "test")
        logger.log_operation("analyze", {"rows": 2}, duration=0.25)

        content = (tmp_path / "test.log").read_text(encoding="utf-8")
        assert '{"rows": 2, "duration_ms": 250.0}' in content

    def test_timed_logs_block_details(self, tmp_path):
        logger = TeabookLogger(tmp_path, "test")
        with logger.timed("query", {"dataset": "d.yaml"}) as details:
            details["results"] = 4

        content = (tmp_path / "test.log").read_text(encoding="utf-8")
        assert 'OPERATION - query: {"dataset": "d.yaml", "results": 4, "duration_ms": ' in content

    def test_timed_skips_failed_block(self, tmp_path):
        logger = TeabookLogger(tmp_path, "test")
        with pytest.raises(DatasetError):
            with logger.timed("query"):
                raise DatasetError("missing")

        assert "OPERATION" not in (tmp_path / "test.log").read_text(encoding="utf-8")

    def test_errors_go_to_error_log(self, tmp_path):
        logger = TeabookLogger(tmp_path, "test")
        try:
            raise ValueError("bad value")
        except ValueError as e:
            logger.log_error(e, {"operation": "analyze"})

        content = (tmp_path / "errors.log").read_text(encoding="utf-8")
        assert "ERROR - ValueError: bad value [operation=analyze]" in content
        assert "Traceback" in content

    def test_console_level_follows_verbose(self, tmp_path):
        assert console_handler(TeabookLogger(tmp_path, "quiet")).level == logging.WARNING
        assert console_handler(TeabookLogger(tmp_path, "loud", verbose=True)).level == logging.INFO

    def test_same_component_does_not_stack_handlers(self, tmp_path):
        TeabookLogger(tmp_path, "test")
        logger = TeabookLogger(tmp_path, "test")
        assert len(logger.logger.handlers) == 3

    def test_log_cli_error_message(self, tmp_path):
        logger = TeabookLogger(tmp_path, "test")
        message = logger.log_cli_error(DatasetError("not found"))
        assert message == "❌ DatasetError: not found"

    def test_setup_logger_creates_operations_dir(self, tmp_path):
        logger = setup_logger(tmp_path, "search", verbose=True)
        assert (tmp_path / "operations").is_dir()
        assert logger.log_dir == tmp_path / "operations"
        assert logger.component_name == "search"
        assert logger.verbose is True


class TestFormatCliError:
    """Tests for format_cli_error."""

    def test_traceback_appended(self):
        try:
            raise DatasetError("broken")
        except DatasetError as e:
            message = format_cli_error(e, show_traceback=True)

        assert message.startswith("❌ DatasetError: broken\n\nTraceback")


class TestHandleCliError:
    """Tests for handle_cli_error."""

    def test_exits_with_message(self, capsys):
        ctx = MagicMock()
        ctx.obj = {"logger": None, "verbose": False}

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ctx, DatasetError("missing file"), "query")

        assert exc_info.value.code == 1
        assert "DatasetError: missing file" in capsys.readouterr().err

    def test_logs_context(self):
        logger = MagicMock(spec=TeabookLogger)
        logger.log_cli_error.return_value = "❌ ValueError: x"
        ctx = MagicMock()
        ctx.obj = {"logger": logger, "verbose": True}

        with pytest.raises(SystemExit):
            handle_cli_error(ctx, ValueError("x"), "analyze", {"dataset": "d.yaml"}, exit_code=2)

        args, kwargs = logger.log_cli_error.call_args
        assert args[1] == {"operation": "analyze", "dataset": "d.yaml"}
        assert kwargs["show_traceback"] is True
