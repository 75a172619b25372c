"""Tests for SearchQueryParser and SearchFilters serialization."""
import pytest
from datetime import date

from teabook.core.exceptions import ValidationError
from teabook.models import SearchCategory, SortField, SortOrder
from teabook.search.search_engine import (
    DateRange,
    SearchFilters,
    SearchQueryParser,
    parse_sort_field,
)


class TestSearchQueryParser:
    """Tests for query string parsing."""

    def test_plain_text(self):
        filters = SearchQueryParser.parse("yabukita")
        assert filters.query == "yabukita"
        assert filters.category is SearchCategory.ALL
        assert filters.sort_by is SortField.RELEVANCE
        assert filters.sort_order is SortOrder.DESC

    def test_mixed_text_and_filters(self):
        filters = SearchQueryParser.parse("gray mildew category:health severity:HIGH")
        assert filters.query == "gray mildew"
        assert filters.category is SearchCategory.HEALTH
        assert filters.severity == "high"

    def test_cultivar_filters(self):
        filters = SearchQueryParser.parse("status:Active location:Shizuoka gen:F1")
        assert filters.query == ""
        assert filters.status == "active"
        assert filters.location == "Shizuoka"
        assert filters.generation == "F1"

    def test_health_status(self):
        filters = SearchQueryParser.parse("category:health health:Critical")
        assert filters.health_status == "critical"
        assert SearchQueryParser.parse("health_status:warning").health_status == "warning"

    def test_date_range(self):
        filters = SearchQueryParser.parse("aphid from:2024-04-01 to:2024-06-30")
        assert filters.date_range == DateRange(start=date(2024, 4, 1), end=date(2024, 6, 30))

    def test_open_date_range(self):
        filters = SearchQueryParser.parse("from:2024-04-01")
        assert filters.date_range.start == date(2024, 4, 1)
        assert filters.date_range.end is None

    def test_invalid_values_are_ignored(self):
        filters = SearchQueryParser.parse("from:yesterday category:flowers sort:colour order:up")
        assert filters.date_range is None
        assert filters.category is SearchCategory.ALL
        assert filters.sort_by is SortField.RELEVANCE
        assert filters.sort_order is SortOrder.DESC
        assert filters.query == ""

    def test_sort_fields(self):
        filters = SearchQueryParser.parse("sort:growth_score order:ASC")
        assert filters.sort_by is SortField.GROWTH_SCORE
        assert filters.sort_order is SortOrder.ASC
        assert SearchQueryParser.parse("sort:germinationRate").sort_by is SortField.GERMINATION_RATE

    def test_unknown_key_stays_in_text(self):
        filters = SearchQueryParser.parse("note:sweet yabukita")
        assert filters.query == "note:sweet yabukita"

    def test_empty_string(self):
        assert SearchQueryParser.parse("") == SearchFilters()


class TestParseSortField:
    """Tests for tolerant sort field parsing."""

    @pytest.mark.parametrize("raw", ["growthScore", "growth_score", "GROWTH-SCORE"])
    def test_spellings(self, raw):
        assert parse_sort_field(raw) is SortField.GROWTH_SCORE

    def test_invalid(self):
        with pytest.raises(ValidationError, match="Invalid sort field"):
            parse_sort_field("colour")


class TestSearchFiltersSerialization:
    """Tests for SearchFilters.to_dict / from_dict."""

    def test_round_trip(self):
        filters = SearchFilters(
            query="aphid",
            category=SearchCategory.HEALTH,
            severity="high",
            health_status="critical",
            date_range=DateRange(start=date(2024, 4, 1)),
            sort_by=SortField.DATE,
            sort_order=SortOrder.ASC,
        )
        assert SearchFilters.from_dict(filters.to_dict()) == filters

    def test_camel_case_keys(self):
        filters = SearchFilters.from_dict(
            {
                "query": "x",
                "category": "teas",
                "dateRange": {"start": "2024-01-01", "end": None},
                "sortBy": "germinationRate",
                "sortOrder": "ASC",
                "healthStatus": "warning",
            }
        )
        assert filters.category is SearchCategory.TEAS
        assert filters.date_range == DateRange(start=date(2024, 1, 1))
        assert filters.sort_by is SortField.GERMINATION_RATE
        assert filters.sort_order is SortOrder.ASC
        assert filters.health_status == "warning"

    def test_invalid_category(self):
        with pytest.raises(ValidationError):
            SearchFilters.from_dict({"category": "flowers"})

    def test_text_is_stripped(self):
        assert SearchFilters(query="  yabukita ").text == "yabukita"
