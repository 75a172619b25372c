#!/usr/bin/env python3
"""
filters.py
----------
Generic field filters for the analysis panel.

Items may be any mapping or object; a condition names a field, an
operator and a comparison value. Conditions combine with AND. Filters
never raise on odd data: a condition that cannot be evaluated (unknown
operator, non-numeric value for a numeric operator) excludes the item.

Operators:
    equals / not_equals           strict equality
    contains / not_contains       case-insensitive substring
    starts_with / ends_with       case-insensitive prefix / suffix
    greater_than / less_than      numeric (or ISO date) comparison
    between                       inclusive [min, max], list or "min,max"
    in / not_in                   membership, list or "a,b,c"

Usage:
    conditions = [
        FilterCondition(field="year", operator="between", value=[2020, 2023]),
        FilterCondition(field="location", operator="contains", value="shizuoka"),
    ]
    kept = apply_filters(cultivars, conditions)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import math
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

# --- Local imports ---
from teabook.core.logging_manager import TeabookLogger, safe_logger
from teabook.models.enums import FilterOperator


def get_field(item: Any, name: str) -> Any:
    """Look a field up by key on mappings, by attribute otherwise."""
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def as_text(value: Any) -> str:
    """String form used by text operators and group keys."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def to_number(value: Any) -> Optional[float]:
    """
    Coerce a value to a finite float.

    Returns None when the value has no numeric reading.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return float(value)
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            number = float(as_text(value).strip())
    except (OverflowError, ValueError):
        # Ints beyond float range raise OverflowError
        return None
    return number if math.isfinite(number) else None


def _to_comparable(value: Any) -> Optional[Union[float, date]]:
    number = to_number(value)
    if number is not None:
        return number
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def _ordered(left: Any, right: Any) -> Optional[tuple]:
    """Coerce both sides to the same comparable type, or None."""
    left_value = _to_comparable(left)
    right_value = _to_comparable(right)
    if left_value is None or right_value is None:
        return None
    if isinstance(left_value, float) != isinstance(right_value, float):
        return None
    return left_value, right_value


def _strict_equals(left: Any, right: Any) -> bool:
    # True == 1 in Python; keep booleans apart from numbers
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def _split_values(value: Any) -> List[str]:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",")]
    if isinstance(value, Iterable):
        return [as_text(part) for part in value]
    return [as_text(value)]


def _bounds(value: Any) -> Optional[tuple]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, Sequence) or len(value) != 2:
        return None
    low, high = to_number(value[0]), to_number(value[1])
    if low is None or high is None:
        return None
    return low, high


@dataclass
class FilterCondition:
    """
    One analysis filter.

    Attributes:
        field: Name of the item field to test
        operator: FilterOperator (raw strings accepted)
        value: Comparison value
        label: Human-readable description; generated when empty
        id: Identifier used to remove or update the condition
    """

    field: str
    operator: Union[FilterOperator, str]
    value: Any = None
    label: str = ""
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])

    def __post_init__(self) -> None:
        try:
            self.operator = FilterOperator(self.operator)
        except ValueError:
            # Unknown operators are kept and evaluate to False
            pass
        if not self.label:
            self.label = f"{self.field} {self.operator_label} {self._value_label()}"

    @property
    def operator_label(self) -> str:
        if isinstance(self.operator, FilterOperator):
            return self.operator.label
        return str(self.operator)

    def _value_label(self) -> str:
        if isinstance(self.value, (list, tuple)):
            return ", ".join(as_text(v) for v in self.value)
        return as_text(self.value)

    def matches(self, item: Any) -> bool:
        return evaluate_condition(item, self)


def evaluate_condition(item: Any, condition: FilterCondition) -> bool:
    """
    Evaluate one condition against one item.

    Returns:
        True if the item satisfies the condition; False otherwise,
        including for unknown operators
    """
    field_value = get_field(item, condition.field)
    expected = condition.value
    operator = condition.operator

    if operator is FilterOperator.EQUALS:
        return _strict_equals(field_value, expected)
    if operator is FilterOperator.NOT_EQUALS:
        return not _strict_equals(field_value, expected)

    if operator in (
        FilterOperator.CONTAINS,
        FilterOperator.NOT_CONTAINS,
        FilterOperator.STARTS_WITH,
        FilterOperator.ENDS_WITH,
    ):
        text = as_text(field_value).casefold()
        needle = as_text(expected).casefold()
        if operator is FilterOperator.CONTAINS:
            return needle in text
        if operator is FilterOperator.NOT_CONTAINS:
            return needle not in text
        if operator is FilterOperator.STARTS_WITH:
            return text.startswith(needle)
        return text.endswith(needle)

    if operator in (FilterOperator.GREATER_THAN, FilterOperator.LESS_THAN):
        pair = _ordered(field_value, expected)
        if pair is None:
            return False
        left, right = pair
        return left > right if operator is FilterOperator.GREATER_THAN else left < right

    if operator is FilterOperator.BETWEEN:
        bounds = _bounds(expected)
        number = to_number(field_value)
        if bounds is None or number is None:
            return False
        return bounds[0] <= number <= bounds[1]

    if operator in (FilterOperator.IN, FilterOperator.NOT_IN):
        if expected is None:
            return False
        member = as_text(field_value) in _split_values(expected)
        return member if operator is FilterOperator.IN else not member

    return False


def apply_filters(
    items: Optional[Iterable[Any]],
    conditions: Optional[Sequence[FilterCondition]],
    logger: Optional[TeabookLogger] = None,
) -> List[Any]:
    """
    Keep the items satisfying every condition.

    Args:
        items: Mappings or objects
        conditions: Conditions combined with AND; none keeps everything
        logger: Optional logger

    Returns:
        New list of the surviving items, in input order
    """
    items = list(items or [])
    conditions = list(conditions or [])
    kept = [item for item in items if all(evaluate_condition(item, c) for c in conditions)]

    safe_logger(logger).log_debug(
        "apply_filters",
        {
            "items": len(items),
            "kept": len(kept),
            "conditions": [condition.label for condition in conditions],
        },
    )
    return kept
