#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the teabook project.

This module defines the exceptions raised by the subsystems that can
actually fail. The search, filter and aggregation core never raises for
missing or empty inputs; it degrades to empty results instead.

Exception Hierarchy:
    Exception (built-in)
    ├── ValidationError - Entity, filter or configuration values are invalid
    ├── DatasetError - Dataset files cannot be read or are malformed
    └── StorageError - Key-value store (search history, saved searches) failures

Usage:
    from teabook.core.exceptions import DatasetError, ValidationError

    try:
        dataset = load_dataset(path)
    except ValidationError as e:
        logger.log_warning(f"Invalid record: {e}")
    except DatasetError as e:
        logger.log_error(e)
"""


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Invalid date formats
    - Missing required fields
    - Values outside their allowed range (germination rate, scores)
    - Unknown enum values (weather, severity, status)

    Examples:
        >>> raise ValidationError("Invalid date format: expected YYYY-MM-DD")
        >>> raise ValidationError("Required field 'name' missing or empty")
        >>> raise ValidationError("growth_score must be between 1 and 5, got 7")
    """

    pass


class DatasetError(Exception):
    """
    Exception for dataset loading failures.

    Raised when a YAML dataset cannot be turned into entity collections:
    - File not found or not readable
    - YAML syntax errors
    - Top-level structure is not a mapping of entity lists

    Examples:
        >>> raise DatasetError("Dataset file not found: data/dataset.yaml")
        >>> raise DatasetError("Section 'cultivars' must be a list")
    """

    pass


class StorageError(Exception):
    """
    Exception for key-value store failures.

    Raised when the SQLite-backed store used for search history and
    saved searches cannot complete an operation:
    - Connection or query errors
    - Integrity violations
    - Values that cannot be serialized to JSON

    Examples:
        >>> raise StorageError("Storage operation failed: database is locked")
        >>> raise StorageError("Value for key 'search_history' is not JSON serializable")
    """

    pass
