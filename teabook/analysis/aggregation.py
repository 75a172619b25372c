#!/usr/bin/env python3
"""
aggregation.py
--------------
Group-by aggregation, summary statistics and insights for the analysis panel.

Items are mappings or objects with a numeric value field (``value`` by
default). Without ``group_by`` the whole collection is one group and the
population standard deviation is reported as well.

Statistics over an empty collection are undefined and reported as None
rather than NaN; ``Summary.is_defined`` tells callers whether to display
them.

Usage:
    config = AnalysisConfig(aggregation_type="average", group_by="location",
                            value_field="height")
    result = analyze(records, config)
    for row in result.data:
        print(row["location"], row["value"], row["count"])
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import statistics
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

# --- Local imports ---
from teabook.analysis.filters import FilterCondition, apply_filters, as_text, get_field, to_number
from teabook.core.logging_manager import TeabookLogger, safe_logger
from teabook.core.validators import DataValidator
from teabook.models.enums import AggregationType, SortOrder

# Insight thresholds
HIGH_VARIANCE_RATIO = 0.5
OUTLIER_RATIO = 2.0

DEFAULT_VALUE_FIELD = "value"


@dataclass
class AnalysisConfig:
    """
    Aggregation settings.

    Attributes:
        aggregation_type: Function applied per group
        group_by: Field to partition by; None aggregates everything
        sort_by: Row field to sort on (numerically)
        sort_order: Row sort direction
        limit: Maximum number of rows
        value_field: Numeric field aggregated in each item
    """

    aggregation_type: Union[AggregationType, str] = AggregationType.COUNT
    group_by: Optional[str] = None
    sort_by: Optional[str] = "value"
    sort_order: Union[SortOrder, str] = SortOrder.DESC
    limit: Optional[int] = None
    value_field: str = DEFAULT_VALUE_FIELD

    def __post_init__(self) -> None:
        self.aggregation_type = DataValidator.normalize_enum(
            AggregationType, self.aggregation_type
        )
        self.sort_order = DataValidator.normalize_enum(SortOrder, self.sort_order)
        if self.limit is not None:
            self.limit = DataValidator.normalize_int(self.limit)
            DataValidator.validate_range("limit", self.limit, 1)


@dataclass
class Summary:
    """
    Summary statistics; None marks a statistic that is undefined.

    ``standard_deviation`` is only computed for ungrouped analyses.
    """

    total: int = 0
    average: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    median: Optional[float] = None
    standard_deviation: Optional[float] = None

    @property
    def is_defined(self) -> bool:
        return self.average is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "average": self.average,
            "min": self.min,
            "max": self.max,
            "median": self.median,
            "standard_deviation": self.standard_deviation,
        }


@dataclass
class AnalysisResult:
    data: List[Dict[str, Any]] = field(default_factory=list)
    summary: Summary = field(default_factory=Summary)
    groups: Optional[Dict[str, List[Any]]] = None
    insights: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": [dict(row) for row in self.data],
            "summary": self.summary.to_dict(),
            "groups": (
                {key: len(members) for key, members in self.groups.items()}
                if self.groups is not None
                else None
            ),
            "insights": list(self.insights),
        }


# ----- Statistics -----

def median(values: Sequence[float]) -> Optional[float]:
    """Middle value; even-length input averages the two central values."""
    if not values:
        return None
    return statistics.median(values)


def standard_deviation(values: Sequence[float]) -> Optional[float]:
    """Population standard deviation (divides by n)."""
    if not values:
        return None
    return statistics.pstdev(values)


def aggregate(
    values: Sequence[float], aggregation_type: Union[AggregationType, str]
) -> Optional[float]:
    """
    Apply one aggregation function.

    ``count`` and ``sum`` are 0 for empty input; the others are None.
    """
    aggregation_type = AggregationType(aggregation_type)
    if aggregation_type is AggregationType.COUNT:
        return len(values)
    if aggregation_type is AggregationType.SUM:
        return sum(values)
    if not values:
        return None
    if aggregation_type is AggregationType.AVERAGE:
        return statistics.fmean(values)
    if aggregation_type is AggregationType.MIN:
        return min(values)
    if aggregation_type is AggregationType.MAX:
        return max(values)
    return median(values)


def summarize(values: Sequence[float], with_deviation: bool = True) -> Summary:
    """Summary statistics of a list of numbers."""
    if not values:
        return Summary(total=0)
    return Summary(
        total=len(values),
        average=statistics.fmean(values),
        min=min(values),
        max=max(values),
        median=median(values),
        standard_deviation=standard_deviation(values) if with_deviation else None,
    )


def generate_insights(summary: Summary) -> List[str]:
    """
    Heuristic observations about a summary.

    Always reports the record count; flags high variance when the standard
    deviation exceeds half the average, and possible outliers when the
    maximum exceeds twice the average.
    """
    insights = [f"Analyzed {summary.total} records"]
    if not summary.is_defined:
        return insights

    if (
        summary.standard_deviation is not None
        and summary.standard_deviation > summary.average * HIGH_VARIANCE_RATIO
    ):
        insights.append("High variance: values are widely spread around the average")
    if summary.max > summary.average * OUTLIER_RATIO:
        insights.append("Possible outlier: maximum is more than twice the average")
    return insights


# ----- Analysis -----

def _numeric_values(items: Iterable[Any], value_field: str) -> List[float]:
    # Missing or non-numeric values count as 0
    values = []
    for item in items:
        number = to_number(get_field(item, value_field))
        values.append(number if number is not None else 0.0)
    return values


def _group(items: Iterable[Any], group_by: str) -> Dict[str, List[Any]]:
    groups: Dict[str, List[Any]] = {}
    for item in items:
        groups.setdefault(as_text(get_field(item, group_by)), []).append(item)
    return groups


def _sort_rows(rows: List[Dict[str, Any]], sort_by: str, sort_order: SortOrder) -> List[Dict[str, Any]]:
    present = [row for row in rows if to_number(row.get(sort_by)) is not None]
    missing = [row for row in rows if to_number(row.get(sort_by)) is None]
    present.sort(key=lambda row: to_number(row.get(sort_by)), reverse=sort_order.reverse)
    return present + missing


def analyze(
    items: Optional[Iterable[Any]],
    config: Optional[AnalysisConfig] = None,
    conditions: Optional[Sequence[FilterCondition]] = None,
    logger: Optional[TeabookLogger] = None,
) -> AnalysisResult:
    """
    Aggregate a collection.

    Args:
        items: Mappings or objects
        config: Aggregation settings (defaults: ungrouped count)
        conditions: Optional filters applied first
        logger: Optional logger

    Returns:
        AnalysisResult with rows, summary, optional groups and insights
    """
    config = config or AnalysisConfig()
    items = list(items or [])
    if conditions:
        items = apply_filters(items, conditions, logger=logger)

    groups: Optional[Dict[str, List[Any]]] = None
    rows: List[Dict[str, Any]] = []

    if config.group_by:
        groups = _group(items, config.group_by)
        for key, members in groups.items():
            values = _numeric_values(members, config.value_field)
            rows.append(
                {
                    config.group_by: key,
                    "value": aggregate(values, config.aggregation_type),
                    "count": len(members),
                }
            )
        summary = summarize([row["value"] for row in rows], with_deviation=False)
    else:
        values = _numeric_values(items, config.value_field)
        summary = summarize(values)
        if values:
            rows.append(
                {"value": aggregate(values, config.aggregation_type), "count": len(values)}
            )

    if config.sort_by:
        rows = _sort_rows(rows, config.sort_by, config.sort_order)
    if config.limit:
        rows = rows[: config.limit]

    result = AnalysisResult(
        data=rows,
        summary=summary,
        groups=groups,
        insights=generate_insights(summary),
    )

    safe_logger(logger).log_debug(
        "analyze",
        {
            "items": len(items),
            "aggregation": config.aggregation_type.value,
            "group_by": config.group_by,
            "rows": len(rows),
        },
    )
    return result
