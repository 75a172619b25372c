#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities for teabook records.

Provides type-safe conversion, validation, and normalization functions
used when building entities from dictionaries and YAML datasets.
"""
from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar

from .exceptions import ValidationError

E = TypeVar("E", bound=Enum)


class DataValidator:
    """Centralized data validation for entity construction."""

    @staticmethod
    def validate_required_fields(
        data: Dict[str, Any], required_fields: List[str], allow_falsy: bool = False
    ) -> None:
        """
        Validate that required fields are present and non-empty.

        Args:
            data: Data dictionary to validate
            required_fields: List of required field names
            allow_falsy: Accept present-but-falsy values (0, "", False)

        Raises:
            ValidationError: If validation fails, naming every missing field
        """
        missing = []
        for field in required_fields:
            if field not in data or data[field] is None:
                missing.append(field)
            elif not allow_falsy and not data[field]:
                missing.append(field)

        if missing:
            raise ValidationError(
                f"Required field(s) missing or empty: {', '.join(repr(f) for f in missing)}"
            )

    @staticmethod
    def normalize_date(date_value: Any) -> Optional[date]:
        """
        Normalize various date inputs to date object.

        Args:
            date_value: ISO date string, date object, or datetime

        Returns:
            Normalized date object or None

        Raises:
            ValidationError: If a string cannot be parsed as YYYY-MM-DD
        """
        if isinstance(date_value, datetime):
            return date_value.date()
        elif isinstance(date_value, date):
            return date_value
        elif isinstance(date_value, str):
            text = date_value.strip()
            if not text:
                return None
            try:
                return date.fromisoformat(text[:10])
            except ValueError:
                raise ValidationError(
                    f"Invalid date format: {date_value!r} (expected YYYY-MM-DD)"
                )
        return None

    @staticmethod
    def normalize_datetime(value: Any) -> Optional[datetime]:
        """
        Normalize an ISO 8601 timestamp.

        A trailing ``Z`` is accepted as UTC.
        """
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        if isinstance(value, str) and value.strip():
            text = value.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            try:
                return datetime.fromisoformat(text)
            except ValueError:
                raise ValidationError(f"Invalid timestamp: {value!r}")
        return None

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Normalize string value.

        Args:
            value: Value to normalize

        Returns:
            Stripped string, or None for None/blank input
        """
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @staticmethod
    def normalize_int(value: Any) -> Optional[int]:
        """
        Convert value to integer safely.

        Raises:
            ValidationError: If the value is not integral
        """
        if value is None or value == "":
            return None
        if isinstance(value, bool):
            raise ValidationError(f"Cannot convert boolean '{value}' to integer")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Cannot convert '{value}' to integer")
        if not number.is_integer():
            raise ValidationError(f"Expected an integer, got '{value}'")
        return int(number)

    @staticmethod
    def normalize_float(value: Any) -> Optional[float]:
        """
        Convert value to float safely.

        Raises:
            ValidationError: If the value is not numeric
        """
        if value is None or value == "":
            return None
        if isinstance(value, bool):
            raise ValidationError(f"Cannot convert boolean '{value}' to number")
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Cannot convert '{value}' to number")

    @staticmethod
    def validate_range(
        name: str, value: Optional[float], minimum: float, maximum: Optional[float] = None
    ) -> None:
        """
        Check that a numeric value lies within inclusive bounds.

        None values are accepted (absent optional fields).
        """
        if value is None:
            return
        if value < minimum or (maximum is not None and value > maximum):
            if maximum is None:
                raise ValidationError(f"{name} must be >= {minimum}, got {value}")
            raise ValidationError(
                f"{name} must be between {minimum} and {maximum}, got {value}"
            )

    @staticmethod
    def normalize_enum(enum_cls: Type[E], value: Any) -> E:
        """
        Convert a raw value to a member of ``enum_cls``.

        Matching is case-insensitive on the member value.

        Raises:
            ValidationError: If the value is not a valid choice
        """
        if isinstance(value, enum_cls):
            return value
        if isinstance(value, str):
            try:
                return enum_cls(value.strip().lower())
            except ValueError:
                pass
        choices = ", ".join(str(member.value) for member in enum_cls)
        raise ValidationError(
            f"Invalid {enum_cls.__name__} value {value!r} (choices: {choices})"
        )
