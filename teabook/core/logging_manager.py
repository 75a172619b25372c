#!/usr/bin/env python3
"""
logging_manager.py
------------------
Event log for teabook searches, analyses and search-state storage.

Every component (``search``, ``analysis``...) gets one ``teabook.<component>``
logger with three handlers:

    <component>.log   every event, DEBUG and up, rotated
    errors.log        failures with their traceback, rotated
    console (stderr)  warnings only; INFO events too when verbose

Events are single lines ``KIND - name: {json details}``. Timed operations
carry a ``duration_ms`` detail.

Usage:
    logger = TeabookLogger(log_dir, "search", verbose=True)

    with logger.timed("query", {"dataset": "data/dataset.yaml"}) as details:
        results = engine.search(...)
        details["results"] = len(results)

Library code takes an optional logger and goes through ``safe_logger``.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import time
import traceback
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

# --- Third party imports ---
import click

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _event_line(kind: str, name: str, details: Optional[Dict[str, Any]]) -> str:
    if not details:
        return f"{kind} - {name}"
    return f"{kind} - {name}: {json.dumps(details, default=str)}"


def _without_traceback(record: logging.LogRecord) -> bool:
    # Failures reach the terminal through handle_cli_error
    return not record.exc_info


def format_cli_error(error: Exception, show_traceback: bool = False) -> str:
    """
    One-line terminal message for an error, optionally followed by its traceback.

    Examples:
        >>> format_cli_error(DatasetError("File not found"))
        '❌ DatasetError: File not found'
    """
    message = f"❌ {type(error).__name__}: {error}"
    if show_traceback:
        trace = "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )
        return f"{message}\n\n{trace}"
    return message


class TeabookLogger:
    """
    Structured event log for one teabook component.

    Attributes:
        log_dir: Directory holding the log files
        component_name: Component label, also the log file name
        verbose: Whether INFO events are echoed to the console
        logger: Underlying ``logging.Logger``
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "teabook",
        verbose: bool = False,
        max_bytes: int = 2 * 1024 * 1024,
        backup_count: int = 3,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.verbose = verbose
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.logger = logging.getLogger(f"teabook.{component_name}")
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        # A second logger for the same component replaces the first one's handlers
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        file_formatter = logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT)
        for file_name, level in (
            (f"{component_name}.log", logging.DEBUG),
            ("errors.log", logging.ERROR),
        ):
            handler = RotatingFileHandler(
                self.log_dir / file_name,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            handler.setLevel(level)
            handler.setFormatter(file_formatter)
            self.logger.addHandler(handler)

        console = logging.StreamHandler()
        console.setLevel(logging.INFO if verbose else logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        console.addFilter(_without_traceback)
        self.logger.addHandler(console)

    def log_operation(
        self,
        operation: str,
        details: Optional[Dict[str, Any]] = None,
        duration: Optional[float] = None,
    ) -> None:
        """
        Record a completed operation at INFO level.

        Args:
            operation: Operation name (``query``, ``load_dataset``...)
            details: JSON-serializable details
            duration: Elapsed seconds, logged as ``duration_ms``
        """
        details = dict(details or {})
        if duration is not None:
            details["duration_ms"] = round(duration * 1000, 2)
        self.logger.info(_event_line("OPERATION", operation, details))

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.logger.debug(_event_line("DEBUG", message, details))

    def log_warning(
        self, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.logger.warning(_event_line("WARNING", message, details))

    def log_error(
        self, error: Exception, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record an error, its context and its traceback."""
        message = f"ERROR - {type(error).__name__}: {error}"
        if context:
            message += " [" + ", ".join(f"{k}={v}" for k, v in context.items()) + "]"
        self.logger.error(message, exc_info=error)

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """Log an error raised under a CLI command and return its terminal message."""
        self.log_error(error, context or {"source": "cli"})
        return format_cli_error(error, show_traceback)

    @contextmanager
    def timed(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> Iterator[Dict[str, Any]]:
        """
        Log ``operation`` with its duration when the block completes.

        The yielded dict is logged as the operation details and may be
        filled in by the block. Nothing is logged if the block raises.
        """
        details = dict(details or {})
        started = time.perf_counter()
        yield details
        self.log_operation(operation, details, duration=time.perf_counter() - started)


class NullLogger:
    """TeabookLogger stand-in that records nothing."""

    def log_operation(
        self,
        operation: str,
        details: Optional[Dict[str, Any]] = None,
        duration: Optional[float] = None,
    ) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return format_cli_error(error, show_traceback)

    @contextmanager
    def timed(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> Iterator[Dict[str, Any]]:
        yield dict(details or {})


_null_logger = NullLogger()


def safe_logger(logger: Optional[TeabookLogger]) -> TeabookLogger:
    """
    Return the provided logger, or a shared NullLogger for None.

    Usage:
        safe_logger(self.logger).log_debug("search", {"results": 3})
    """
    return logger if logger is not None else _null_logger  # type: ignore[return-value]


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Log a failed CLI command, print a short message to stderr and exit.

    The traceback is printed too when the command group ran with ``-v``.

    Args:
        ctx: Click context whose ``obj`` holds ``logger`` and ``verbose``
        error: Exception that stopped the command
        operation: Command name (``query``, ``analyze``...)
        additional_context: Extra context such as the dataset path
        exit_code: Process exit status

    Note:
        Never returns; always calls sys.exit()
    """
    obj = ctx.obj or {}
    context = {"operation": operation, **(additional_context or {})}
    message = safe_logger(obj.get("logger")).log_cli_error(
        error, context, show_traceback=obj.get("verbose", False)
    )
    click.echo(message, err=True)
    sys.exit(exit_code)
