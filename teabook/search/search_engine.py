#!/usr/bin/env python3
"""
search_engine.py
----------------
Faceted search across cultivars, growth records and health issues.

Combines structural filters (status, location, generation, date range,
severity, health status) with free-text matching, relevance scoring and
highlighting. Everything is computed in memory from the collections passed
in; nothing is cached between calls.

Query Syntax Examples:
    "yabukita"                          # Text search
    "mildew category:health"            # Only health issues
    "status:active location:shizuoka"   # Structural filters only
    "category:health health:critical"   # Issues whose severity is high
    "aphid from:2024-04-01 to:2024-06-30 sort:date order:asc"

Usage:
    # Parse query
    filters = SearchQueryParser.parse("yabukita status:active")

    # Execute search
    engine = SearchEngine(logger)
    results = engine.search(cultivars, growth_records, health_issues, filters)

    for result in results:
        print(result.title, result.relevance_score)
"""
# --- Standard library imports ---
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

# --- Local imports ---
from teabook.core.exceptions import ValidationError
from teabook.core.logging_manager import TeabookLogger, safe_logger
from teabook.core.validators import DataValidator
from teabook.models.entities import Cultivar, Entity, GrowthRecord, HealthIssue
from teabook.models.enums import EntityKind, SearchCategory, SortField, SortOrder
from teabook.search.highlight import highlight_text
from teabook.search.scoring import contains, score_relevance

UNKNOWN_CULTIVAR = "Unknown"

# Facet windows for "recent records", in days before today
DATE_RANGE_WINDOWS = (
    ("last_7_days", 7),
    ("last_30_days", 30),
    ("last_3_months", 90),
    ("last_year", 365),
)

MIN_SUGGESTION_LENGTH = 2


@dataclass
class DateRange:
    """Inclusive date interval; either bound may be open."""

    start: Optional[date] = None
    end: Optional[date] = None

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DateRange":
        return cls(
            start=DataValidator.normalize_date(data.get("start")),
            end=DataValidator.normalize_date(data.get("end")),
        )


def parse_sort_field(value: Any) -> SortField:
    """
    Accept ``growthScore``, ``growth_score`` or ``GROWTH-SCORE`` alike.

    Raises:
        ValidationError: If the value names no sort field
    """
    if isinstance(value, SortField):
        return value
    wanted = str(value).replace("_", "").replace("-", "").lower()
    for sort_field in SortField:
        if sort_field.value.lower() == wanted:
            return sort_field
    raise ValidationError(
        f"Invalid sort field {value!r} (choices: {', '.join(SortField.choices())})"
    )


@dataclass
class SearchFilters:
    """Query-time search parameters."""

    query: str = ""
    category: SearchCategory = SearchCategory.ALL
    status: Optional[str] = None
    location: Optional[str] = None
    generation: Optional[str] = None
    date_range: Optional[DateRange] = None
    severity: Optional[str] = None
    health_status: Optional[str] = None
    sort_by: SortField = SortField.RELEVANCE
    sort_order: SortOrder = SortOrder.DESC

    @property
    def text(self) -> str:
        """Stripped free-text query."""
        return self.query.strip()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "category": self.category.value,
            "status": self.status,
            "location": self.location,
            "generation": self.generation,
            "date_range": self.date_range.to_dict() if self.date_range else None,
            "severity": self.severity,
            "health_status": self.health_status,
            "sort_by": self.sort_by.value,
            "sort_order": self.sort_order.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SearchFilters":
        """
        Rebuild filters from ``to_dict`` output (camelCase keys accepted).

        Raises:
            ValidationError: If category, sort field or order is invalid
        """
        date_range = data.get("date_range", data.get("dateRange"))
        sort_by = data.get("sort_by", data.get("sortBy"))
        sort_order = data.get("sort_order", data.get("sortOrder"))
        category = data.get("category")
        return cls(
            query=str(data.get("query") or ""),
            category=(
                DataValidator.normalize_enum(SearchCategory, category)
                if category
                else SearchCategory.ALL
            ),
            status=DataValidator.normalize_string(data.get("status")),
            location=DataValidator.normalize_string(data.get("location")),
            generation=DataValidator.normalize_string(data.get("generation")),
            date_range=DateRange.from_dict(date_range) if date_range else None,
            severity=DataValidator.normalize_string(data.get("severity")),
            health_status=DataValidator.normalize_string(
                data.get("health_status", data.get("healthStatus"))
            ),
            sort_by=parse_sort_field(sort_by) if sort_by else SortField.RELEVANCE,
            sort_order=(
                DataValidator.normalize_enum(SortOrder, sort_order)
                if sort_order
                else SortOrder.DESC
            ),
        )


@dataclass
class HighlightFragment:
    """One highlighted field of a search result."""

    field: str
    value: str
    highlighted_value: str


@dataclass
class SearchResult:
    """A ranked search hit wrapping one source entity."""

    id: str
    type: EntityKind
    title: str
    description: str
    data: Entity
    relevance_score: int = 0
    highlights: List[HighlightFragment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "relevance_score": self.relevance_score,
            "highlights": [
                {
                    "field": fragment.field,
                    "value": fragment.value,
                    "highlighted_value": fragment.highlighted_value,
                }
                for fragment in self.highlights
            ],
            "data": self.data.to_dict(),
        }


@dataclass
class FacetCount:
    value: str
    count: int
    selected: bool = False


@dataclass
class SearchStats:
    total_results: int
    results_by_type: Dict[str, int]


class SearchQueryParser:
    """Parse search query strings into SearchFilters objects."""

    @staticmethod
    def parse(query_string: str) -> SearchFilters:
        """
        Parse search query string.

        Examples:
            "yabukita" → text search
            "status:active location:shizuoka" → filters
            "mildew category:health severity:high" → mixed
            "from:2024-01-01 to:2024-03-31 sort:date" → date range

        Tokens of the form ``key:value`` with an unknown key are kept as
        text; known keys with unparseable values are ignored.

        Returns:
            SearchFilters object
        """
        filters = SearchFilters()
        text_parts = []
        start: Optional[date] = None
        end: Optional[date] = None

        for token in query_string.split():
            if ":" not in token:
                text_parts.append(token)
                continue

            key, value = token.split(":", 1)
            key = key.lower()

            if key == "category":
                try:
                    filters.category = SearchCategory(value.lower())
                except ValueError:
                    pass

            elif key == "status":
                filters.status = value.lower()

            elif key == "location":
                filters.location = value

            elif key in ("generation", "gen"):
                filters.generation = value

            elif key == "severity":
                filters.severity = value.lower()

            elif key in ("health", "health_status"):
                filters.health_status = value.lower()

            elif key == "from":
                try:
                    start = date.fromisoformat(value)
                except ValueError:
                    pass

            elif key == "to":
                try:
                    end = date.fromisoformat(value)
                except ValueError:
                    pass

            elif key == "sort":
                try:
                    filters.sort_by = parse_sort_field(value)
                except ValidationError:
                    pass

            elif key == "order":
                try:
                    filters.sort_order = SortOrder(value.lower())
                except ValueError:
                    pass

            else:
                text_parts.append(token)

        if start is not None or end is not None:
            filters.date_range = DateRange(start=start, end=end)

        filters.query = " ".join(text_parts)
        return filters


class SearchEngine:
    """Execute searches over caller-owned entity collections."""

    def __init__(self, logger: Optional[TeabookLogger] = None):
        self.logger = logger

    # ----- Search -----

    def search(
        self,
        cultivars: Optional[Sequence[Cultivar]],
        growth_records: Optional[Sequence[GrowthRecord]],
        health_issues: Optional[Sequence[HealthIssue]],
        filters: Optional[SearchFilters] = None,
    ) -> List[SearchResult]:
        """
        Execute a search and return ranked results.

        Args:
            cultivars: Cultivar collection
            growth_records: Growth record collection
            health_issues: Health issue collection
            filters: Query and structural filters (defaults: everything)

        Returns:
            Results sorted per ``filters.sort_by`` / ``filters.sort_order``,
            one per matching entity
        """
        started = datetime.now()
        filters = filters or SearchFilters()
        cultivars = list(cultivars or [])
        growth_records = list(growth_records or [])
        health_issues = list(health_issues or [])
        query = filters.text
        names = {cultivar.id: cultivar.name for cultivar in cultivars}
        kinds = filters.category.kinds

        results: List[SearchResult] = []

        if EntityKind.CULTIVAR in kinds:
            for cultivar in cultivars:
                if self._match_cultivar(cultivar, filters, query):
                    results.append(self._cultivar_result(cultivar, query))

        if EntityKind.GROWTH in kinds:
            for record in growth_records:
                if self._match_growth(record, filters, query):
                    results.append(self._growth_result(record, query, names))

        if EntityKind.HEALTH in kinds:
            for issue in health_issues:
                if self._match_health(issue, filters, query):
                    results.append(self._health_result(issue, query, names))

        results = self.sort_results(results, filters.sort_by, filters.sort_order)

        safe_logger(self.logger).log_debug(
            "search",
            {
                "query": query,
                "category": filters.category.value,
                "results": len(results),
                "duration_seconds": (datetime.now() - started).total_seconds(),
            },
        )
        return results

    # ----- Structural + coarse text filters -----

    @staticmethod
    def _match_cultivar(cultivar: Cultivar, filters: SearchFilters, query: str) -> bool:
        if filters.status and cultivar.status.value != filters.status:
            return False
        if filters.location and not contains(cultivar.location, filters.location):
            return False
        if filters.generation and cultivar.generation != filters.generation:
            return False
        if query:
            searchable = " ".join(
                [cultivar.name, cultivar.location, cultivar.aroma, cultivar.note, cultivar.generation]
            )
            return contains(searchable, query)
        return True

    @staticmethod
    def _match_growth(record: GrowthRecord, filters: SearchFilters, query: str) -> bool:
        if filters.date_range and not filters.date_range.contains(record.date):
            return False
        if query:
            searchable = " ".join(
                [record.notes, record.weather.value, record.date.isoformat()]
            )
            return contains(searchable, query)
        return True

    @staticmethod
    def _match_health(issue: HealthIssue, filters: SearchFilters, query: str) -> bool:
        if filters.severity and issue.severity.value != filters.severity:
            return False
        if (
            filters.health_status
            and issue.severity.health_status.value != filters.health_status
        ):
            return False
        if filters.status and issue.status.value != filters.status:
            return False
        if filters.date_range and not filters.date_range.contains(issue.date):
            return False
        if query:
            searchable = " ".join(
                [issue.description, " ".join(issue.symptoms), issue.cause or "", issue.treatment or ""]
            )
            return contains(searchable, query)
        return True

    # ----- Result building -----

    @staticmethod
    def _highlights(fields: Iterable[tuple], query: str) -> List[HighlightFragment]:
        if not query:
            return []
        fragments = []
        for name, value in fields:
            if not contains(value, query):
                continue
            highlighted = highlight_text(value, query)
            if highlighted != value:
                fragments.append(
                    HighlightFragment(field=name, value=value, highlighted_value=highlighted)
                )
        return fragments

    def _cultivar_result(self, cultivar: Cultivar, query: str) -> SearchResult:
        return SearchResult(
            id=f"{EntityKind.CULTIVAR.value}-{cultivar.id}",
            type=EntityKind.CULTIVAR,
            title=cultivar.name,
            description=f"{cultivar.location} - generation {cultivar.generation}",
            data=cultivar,
            relevance_score=score_relevance(cultivar, query),
            highlights=self._highlights(
                [
                    ("name", cultivar.name),
                    ("location", cultivar.location),
                    ("aroma", cultivar.aroma),
                    ("note", cultivar.note),
                    ("generation", cultivar.generation),
                ],
                query,
            ),
        )

    def _growth_result(
        self, record: GrowthRecord, query: str, names: Mapping[str, str]
    ) -> SearchResult:
        cultivar_name = names.get(record.cultivar_id, UNKNOWN_CULTIVAR)
        return SearchResult(
            id=f"{EntityKind.GROWTH.value}-{record.id}",
            type=EntityKind.GROWTH,
            title=f"{cultivar_name} - {record.date.isoformat()}",
            description=record.notes or "Growth record",
            data=record,
            relevance_score=score_relevance(record, query),
            highlights=self._highlights(
                [
                    ("notes", record.notes),
                    ("weather", record.weather.value),
                    ("date", record.date.isoformat()),
                ],
                query,
            ),
        )

    def _health_result(
        self, issue: HealthIssue, query: str, names: Mapping[str, str]
    ) -> SearchResult:
        cultivar_name = names.get(issue.cultivar_id, UNKNOWN_CULTIVAR)
        fields = [("description", issue.description)]
        fields.extend(("symptoms", symptom) for symptom in issue.symptoms)
        fields.append(("cause", issue.cause or ""))
        fields.append(("treatment", issue.treatment or ""))
        return SearchResult(
            id=f"{EntityKind.HEALTH.value}-{issue.id}",
            type=EntityKind.HEALTH,
            title=f"{cultivar_name} - {issue.type.value}",
            description=issue.description,
            data=issue,
            relevance_score=score_relevance(issue, query),
            highlights=self._highlights(fields, query),
        )

    # ----- Sorting -----

    @staticmethod
    def _result_date(result: SearchResult) -> date:
        # Cultivars only know their starting year; treat it as January 1st
        if result.type is EntityKind.CULTIVAR:
            return result.data.started_on or date.min
        return result.data.date

    @staticmethod
    def _cultivar_metric(result: SearchResult, attribute: str) -> float:
        if result.type is EntityKind.CULTIVAR:
            return getattr(result.data, attribute)
        return 0

    @classmethod
    def sort_results(
        cls,
        results: List[SearchResult],
        sort_by: SortField = SortField.RELEVANCE,
        sort_order: SortOrder = SortOrder.DESC,
    ) -> List[SearchResult]:
        """
        Stable sort of results; DESC puts the largest key first.

        Non-cultivar results use 0 for growth score and germination rate.
        """
        if sort_by is SortField.RELEVANCE:
            key = lambda r: r.relevance_score  # noqa: E731
        elif sort_by is SortField.DATE:
            key = cls._result_date
        elif sort_by is SortField.NAME:
            key = lambda r: (r.title.casefold(), r.title)  # noqa: E731
        elif sort_by is SortField.GROWTH_SCORE:
            key = lambda r: cls._cultivar_metric(r, "growth_score")  # noqa: E731
        else:
            key = lambda r: cls._cultivar_metric(r, "germination_rate")  # noqa: E731

        return sorted(results, key=key, reverse=sort_order.reverse)

    # ----- Facets, statistics, suggestions -----

    @staticmethod
    def _facet(values: Iterable[str], selected: Optional[str] = None) -> List[FacetCount]:
        counts = Counter(value for value in values if value)
        facet = [
            FacetCount(value=value, count=count, selected=(value == selected))
            for value, count in counts.items()
        ]
        facet.sort(key=lambda f: (-f.count, f.value))
        return facet

    def facets(
        self,
        cultivars: Optional[Sequence[Cultivar]],
        growth_records: Optional[Sequence[GrowthRecord]],
        health_issues: Optional[Sequence[HealthIssue]],
        filters: Optional[SearchFilters] = None,
        today: Optional[date] = None,
    ) -> Dict[str, List[FacetCount]]:
        """
        Count entities per categorical value for the enabled categories.

        Args:
            cultivars: Cultivar collection
            growth_records: Growth record collection
            health_issues: Health issue collection
            filters: Active filters; used for category and ``selected`` flags
            today: Reference day for the recent-records windows

        Returns:
            Mapping of facet name to counts sorted by count descending
        """
        filters = filters or SearchFilters()
        today = today or date.today()
        kinds = filters.category.kinds
        cultivars = list(cultivars or []) if EntityKind.CULTIVAR in kinds else []
        growth_records = list(growth_records or []) if EntityKind.GROWTH in kinds else []
        health_issues = list(health_issues or []) if EntityKind.HEALTH in kinds else []

        result: Dict[str, List[FacetCount]] = {}

        if EntityKind.CULTIVAR in kinds:
            result["status"] = self._facet((c.status.value for c in cultivars), filters.status)
            result["location"] = self._facet((c.location for c in cultivars), filters.location)
            result["generation"] = self._facet(
                (c.generation for c in cultivars), filters.generation
            )

        if EntityKind.GROWTH in kinds:
            result["weather"] = self._facet(r.weather.value for r in growth_records)

        if EntityKind.HEALTH in kinds:
            result["issue_type"] = self._facet(i.type.value for i in health_issues)
            result["severity"] = self._facet(
                (i.severity.value for i in health_issues), filters.severity
            )
            result["issue_status"] = self._facet(
                (i.status.value for i in health_issues), filters.status
            )
            result["health_status"] = self._facet(
                (i.severity.health_status.value for i in health_issues),
                filters.health_status,
            )

        if EntityKind.GROWTH in kinds or EntityKind.HEALTH in kinds:
            dated = [r.date for r in growth_records] + [i.date for i in health_issues]
            result["date_ranges"] = self._date_range_facet(dated, today, filters.date_range)

        safe_logger(self.logger).log_debug(
            "facets", {name: len(counts) for name, counts in result.items()}
        )
        return result

    @staticmethod
    def _date_range_facet(
        days: List[date], today: date, selected: Optional[DateRange]
    ) -> List[FacetCount]:
        facet = []
        for label, window in DATE_RANGE_WINDOWS:
            window_range = DateRange(start=today - timedelta(days=window), end=today)
            facet.append(
                FacetCount(
                    value=label,
                    count=sum(1 for day in days if window_range.contains(day)),
                    selected=(selected == window_range),
                )
            )
        return facet

    @staticmethod
    def stats(results: Sequence[SearchResult]) -> SearchStats:
        """Total number of results and a per-type breakdown."""
        by_type = Counter(result.type.value for result in results)
        return SearchStats(total_results=len(results), results_by_type=dict(by_type))

    @staticmethod
    def suggestions(
        cultivars: Optional[Sequence[Cultivar]], query: Optional[str], limit: int = 10
    ) -> List[str]:
        """
        Suggest names, locations and generations containing the query.

        Queries shorter than two characters yield no suggestions.
        """
        query = (query or "").strip()
        if len(query) < MIN_SUGGESTION_LENGTH:
            return []

        suggestions: List[str] = []
        for cultivar in cultivars or []:
            for candidate in (cultivar.name, cultivar.location, cultivar.generation):
                if contains(candidate, query) and candidate not in suggestions:
                    suggestions.append(candidate)
                    if len(suggestions) >= limit:
                        return suggestions
        return suggestions
