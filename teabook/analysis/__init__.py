"""
Analysis Package
----------------

Custom field filters and aggregation for ad-hoc numeric analysis.

Usage:
    from teabook.analysis import AnalysisConfig, FilterCondition, analyze

    result = analyze(
        records,
        AnalysisConfig(aggregation_type="median", group_by="weather", value_field="height"),
        conditions=[FilterCondition(field="height", operator="greater_than", value=5)],
    )
"""
from .filters import FilterCondition, apply_filters, evaluate_condition
from .aggregation import (
    AnalysisConfig,
    AnalysisResult,
    Summary,
    aggregate,
    analyze,
    generate_insights,
    median,
    standard_deviation,
)

__all__ = [
    "FilterCondition",
    "apply_filters",
    "evaluate_condition",
    "AnalysisConfig",
    "AnalysisResult",
    "Summary",
    "aggregate",
    "analyze",
    "generate_insights",
    "median",
    "standard_deviation",
]
