"""
Models Package
--------------

Typed trial records, enumerations and dataset loading.

Usage:
    from teabook.models import Cultivar, GrowthRecord, HealthIssue, load_dataset
"""
from .entities import Cultivar, Entity, GrowthRecord, HealthIssue
from .enums import (
    AggregationType,
    CultivarStatus,
    EntityKind,
    FilterOperator,
    HealthStatus,
    IssueStatus,
    IssueType,
    SearchCategory,
    Severity,
    SortField,
    SortOrder,
    Weather,
)
from .dataset import Dataset, load_dataset

__all__ = [
    # Entities
    "Cultivar",
    "GrowthRecord",
    "HealthIssue",
    "Entity",
    "Dataset",
    "load_dataset",
    # Enums
    "AggregationType",
    "CultivarStatus",
    "EntityKind",
    "FilterOperator",
    "HealthStatus",
    "IssueStatus",
    "IssueType",
    "SearchCategory",
    "Severity",
    "SortField",
    "SortOrder",
    "Weather",
]
