#!/usr/bin/env python3
"""
cli.py
------
Shared CLI utilities for teabook commands.

Functions:
    setup_logger: Initialize TeabookLogger for CLI operations
    parse_where: Parse FIELD:OPERATOR:VALUE filter options
    coerce_value: Read numeric filter values as numbers

Usage:
    from teabook.core.cli import setup_logger

    logger = setup_logger(log_dir, "search")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple, Union

# --- Local imports ---
from teabook.core.exceptions import ValidationError
from teabook.core.logging_manager import TeabookLogger


def setup_logger(
    log_dir: Path, component_name: str, verbose: bool = False
) -> TeabookLogger:
    """
    Setup logging for CLI operations.

    Creates the operations log directory if it doesn't exist and initializes
    a TeabookLogger instance for the specified component.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g., 'search')
        verbose: Echo operation events to the console

    Returns:
        Configured TeabookLogger instance

    Examples:
        >>> from teabook.core.paths import LOG_DIR
        >>> logger = setup_logger(LOG_DIR, "search", verbose=True)
        >>> logger.log_operation("query", {"results": 3})
    """
    operations_log_dir = log_dir / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return TeabookLogger(
        operations_log_dir, component_name=component_name, verbose=verbose
    )


def parse_where(option: str) -> Tuple[str, str, str]:
    """
    Split a ``FIELD:OPERATOR:VALUE`` option into its parts.

    The value may itself contain colons; only the first two separate.

    Raises:
        ValidationError: If the option does not have three parts
    """
    parts = option.split(":", 2)
    if len(parts) != 3 or not parts[0] or not parts[1]:
        raise ValidationError(
            f"Invalid filter '{option}': expected FIELD:OPERATOR:VALUE"
        )
    field_name, operator, value = parts
    return field_name, operator, value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def coerce_value(
    value: str, field_values: Optional[Iterable[Any]] = None
) -> Union[int, float, str]:
    """
    Read a command-line filter value as a number when it looks like one.

    When the values the field actually holds are given, the filter value
    stays text unless at least one of them is a number, so ``equals``
    still matches numeric-looking string ids.

    Examples:
        >>> coerce_value("5")
        5
        >>> coerce_value("12.5")
        12.5
        >>> coerce_value("2020,2023")
        '2020,2023'
        >>> coerce_value("1", ["1", "2"])
        '1'
    """
    if field_values is not None:
        present = [v for v in field_values if v is not None]
        if present and not any(_is_number(v) for v in present):
            return value

    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return value
