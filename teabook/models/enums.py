"""
Enumeration Types
------------------

Enum classes for teabook entities, searches and analyses.

Enums:
    - EntityKind: Discriminant of the entity union (tea, growth, health)
    - CultivarStatus: Whether a breeding line is still being trialled
    - Weather: Weather at the time of a growth observation
    - IssueType / Severity / IssueStatus: Health issue classification
    - HealthStatus: Coarse health bucket derived from severity
    - SearchCategory / SortField / SortOrder: Search parameters
    - FilterOperator / AggregationType: Analysis panel parameters

Every enum is a ``str`` subclass so members compare equal to their raw
values, which keeps dataset dictionaries and CLI options interchangeable
with typed entities.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import List


class EntityKind(str, Enum):
    """
    Discriminant carried by every entity class.

    The value doubles as the search result type tag and as the prefix of
    composite result ids (``tea-<id>``).
    """

    CULTIVAR = "tea"
    GROWTH = "growth"
    HEALTH = "health"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available entity kind choices."""
        return [kind.value for kind in cls]


class CultivarStatus(str, Enum):
    """Trial status of a cultivar."""

    ACTIVE = "active"
    DISCARDED = "discarded"

    @classmethod
    def choices(cls) -> List[str]:
        return [status.value for status in cls]


class Weather(str, Enum):
    """Weather recorded with a growth observation."""

    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    SNOWY = "snowy"

    @classmethod
    def choices(cls) -> List[str]:
        return [weather.value for weather in cls]


class IssueType(str, Enum):
    """
    Category of a health issue.
    - DISEASE: Fungal, bacterial or viral disease
    - PEST: Insect or animal damage
    - NUTRITION: Nutrient deficiency or excess
    - ENVIRONMENTAL: Frost, drought, heat and similar stress
    - OTHER: Anything else
    """

    DISEASE = "disease"
    PEST = "pest"
    NUTRITION = "nutrition"
    ENVIRONMENTAL = "environmental"
    OTHER = "other"

    @classmethod
    def choices(cls) -> List[str]:
        return [issue_type.value for issue_type in cls]


class Severity(str, Enum):
    """Severity of a health issue."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def choices(cls) -> List[str]:
        return [severity.value for severity in cls]

    @property
    def health_status(self) -> "HealthStatus":
        """Map severity onto the coarse health bucket."""
        mapping = {
            Severity.LOW: HealthStatus.HEALTHY,
            Severity.MEDIUM: HealthStatus.WARNING,
            Severity.HIGH: HealthStatus.CRITICAL,
        }
        return mapping[self]


class IssueStatus(str, Enum):
    """Lifecycle status of a health issue."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    RECURRED = "recurred"

    @classmethod
    def choices(cls) -> List[str]:
        return [status.value for status in cls]


class HealthStatus(str, Enum):
    """Coarse health bucket used for faceting."""

    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


class SearchCategory(str, Enum):
    """Which entity collections a search covers."""

    ALL = "all"
    TEAS = "teas"
    GROWTH = "growth"
    HEALTH = "health"

    @classmethod
    def choices(cls) -> List[str]:
        return [category.value for category in cls]

    @property
    def kinds(self) -> List[EntityKind]:
        """Entity kinds searched by this category, in result order."""
        if self is SearchCategory.ALL:
            return [EntityKind.CULTIVAR, EntityKind.GROWTH, EntityKind.HEALTH]
        mapping = {
            SearchCategory.TEAS: EntityKind.CULTIVAR,
            SearchCategory.GROWTH: EntityKind.GROWTH,
            SearchCategory.HEALTH: EntityKind.HEALTH,
        }
        return [mapping[self]]


class SortField(str, Enum):
    """Sort keys for search results."""

    RELEVANCE = "relevance"
    DATE = "date"
    NAME = "name"
    GROWTH_SCORE = "growthScore"
    GERMINATION_RATE = "germinationRate"

    @classmethod
    def choices(cls) -> List[str]:
        return [sort_field.value for sort_field in cls]


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def choices(cls) -> List[str]:
        return [order.value for order in cls]

    @property
    def reverse(self) -> bool:
        """Value for the ``reverse`` argument of ``sorted``."""
        return self is SortOrder.DESC


class FilterOperator(str, Enum):
    """
    Comparison operators of the analysis panel filters.

    String operators compare case-insensitively; ordering operators
    coerce both sides to numbers.
    """

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    BETWEEN = "between"
    IN = "in"
    NOT_IN = "not_in"

    @classmethod
    def choices(cls) -> List[str]:
        return [operator.value for operator in cls]

    @property
    def label(self) -> str:
        """Short symbol or phrase used in generated condition labels."""
        labels = {
            FilterOperator.EQUALS: "=",
            FilterOperator.NOT_EQUALS: "≠",
            FilterOperator.CONTAINS: "contains",
            FilterOperator.NOT_CONTAINS: "does not contain",
            FilterOperator.STARTS_WITH: "starts with",
            FilterOperator.ENDS_WITH: "ends with",
            FilterOperator.GREATER_THAN: ">",
            FilterOperator.LESS_THAN: "<",
            FilterOperator.BETWEEN: "between",
            FilterOperator.IN: "in",
            FilterOperator.NOT_IN: "not in",
        }
        return labels[self]


class AggregationType(str, Enum):
    """Aggregation functions of the analysis panel."""

    COUNT = "count"
    SUM = "sum"
    AVERAGE = "average"
    MIN = "min"
    MAX = "max"
    MEDIAN = "median"

    @classmethod
    def choices(cls) -> List[str]:
        return [aggregation.value for aggregation in cls]
