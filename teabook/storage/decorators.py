#!/usr/bin/env python3
"""
decorators.py
--------------------
Shared decorators for key-value store operations.
"""
from functools import wraps
from typing import Callable
from datetime import datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from teabook.core.exceptions import StorageError
from teabook.core.logging_manager import safe_logger


def log_storage_operation(operation_name: str):
    """
    Decorator to log store operations with timing and context.

    The wrapped method's instance must expose a ``logger`` attribute
    (None is fine).

    Args:
        operation_name: Name of the operation being logged

    Returns:
        Decorator function
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            logger = safe_logger(getattr(self, "logger", None))
            start_time = datetime.now()

            try:
                result = function(self, *args, **kwargs)
            except Exception as e:
                logger.log_error(
                    e,
                    {
                        "operation": operation_name,
                        "duration_seconds": (datetime.now() - start_time).total_seconds(),
                    },
                )
                raise

            logger.log_debug(
                f"{operation_name}_completed",
                {"duration_seconds": (datetime.now() - start_time).total_seconds()},
            )
            return result

        return wrapper

    return decorator


def handle_storage_errors(function: Callable) -> Callable:
    """
    Decorator translating SQLAlchemy errors into StorageError.

    Args:
        function: Function to wrap

    Returns:
        Wrapped function with error handling
    """

    @wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except IntegrityError as e:
            raise StorageError(f"Data integrity violation: {e}") from e
        except SQLAlchemyError as e:
            raise StorageError(f"Storage operation failed: {e}") from e

    return wrapper
