"""
Tests for entity dataclasses.

Tests:
- from_dict with snake_case and camelCase keys
- Range and enum validation
- to_dict output and the kind discriminant
"""
import pytest
from datetime import date, datetime, timezone

from teabook.core.exceptions import ValidationError
from teabook.models import (
    Cultivar,
    CultivarStatus,
    EntityKind,
    FilterOperator,
    GrowthRecord,
    HealthIssue,
    IssueStatus,
    IssueType,
    SearchCategory,
    Severity,
    SortField,
    Weather,
)


class TestCultivar:
    """Tests for Cultivar."""

    def test_from_dict_camel_case(self):
        cultivar = Cultivar.from_dict(
            {
                "id": 1,
                "name": " Yabukita ",
                "generation": "F1",
                "year": "2021",
                "germinationRate": 85,
                "growthScore": 4,
                "diseaseResistance": 3,
                "status": "Active",
            }
        )
        assert cultivar.id == "1"
        assert cultivar.name == "Yabukita"
        assert cultivar.year == 2021
        assert cultivar.germination_rate == 85.0
        assert cultivar.status is CultivarStatus.ACTIVE
        assert cultivar.kind is EntityKind.CULTIVAR

    def test_defaults(self):
        cultivar = Cultivar.from_dict({"id": "c", "name": "X"})
        assert cultivar.growth_score == 1.0
        assert cultivar.status is CultivarStatus.ACTIVE
        assert cultivar.images == []
        assert cultivar.started_on is None

    def test_missing_name(self):
        with pytest.raises(ValidationError, match="'name'"):
            Cultivar.from_dict({"id": "c"})

    @pytest.mark.parametrize(
        "field, value",
        [("germination_rate", 120), ("growth_score", 0), ("disease_resistance", 6)],
    )
    def test_out_of_range(self, field, value):
        with pytest.raises(ValidationError, match=field):
            Cultivar.from_dict({"id": "c", "name": "X", field: value})

    @pytest.mark.parametrize("year", [0, 10000])
    def test_year_outside_calendar(self, year):
        with pytest.raises(ValidationError, match="year"):
            Cultivar.from_dict({"id": "c", "name": "X", "year": year})

    def test_started_on_without_calendar_date(self):
        assert Cultivar(id="c", name="X", year=10000).started_on is None

    def test_invalid_status(self):
        with pytest.raises(ValidationError, match="CultivarStatus"):
            Cultivar.from_dict({"id": "c", "name": "X", "status": "lost"})

    def test_started_on(self, cultivars):
        assert cultivars[0].started_on == date(2021, 1, 1)

    def test_to_dict_round_trip(self, cultivars):
        data = cultivars[2].to_dict()
        assert data["status"] == "discarded"
        assert Cultivar.from_dict(data) == cultivars[2]


class TestGrowthRecord:
    """Tests for GrowthRecord."""

    def test_from_dict(self):
        record = GrowthRecord.from_dict(
            {
                "id": "g",
                "teaId": "c1",
                "date": "2024-04-01",
                "height": "12.5",
                "leafCount": 8,
                "weather": "RAINY",
                "createdAt": "2024-04-01T08:00:00Z",
            }
        )
        assert record.cultivar_id == "c1"
        assert record.date == date(2024, 4, 1)
        assert record.height == 12.5
        assert record.leaf_count == 8
        assert record.weather is Weather.RAINY
        assert record.created_at == datetime(2024, 4, 1, 8, tzinfo=timezone.utc)
        assert record.kind is EntityKind.GROWTH

    def test_negative_height(self):
        with pytest.raises(ValidationError, match="height"):
            GrowthRecord.from_dict({"id": "g", "cultivar_id": "c", "date": "2024-01-01", "height": -1})

    def test_bad_date(self):
        with pytest.raises(ValidationError, match="date"):
            GrowthRecord.from_dict({"id": "g", "cultivar_id": "c", "date": "01/04/2024"})

    def test_missing_cultivar(self):
        with pytest.raises(ValidationError, match="cultivar_id"):
            GrowthRecord.from_dict({"id": "g", "date": "2024-01-01"})

    def test_to_dict(self, growth_records):
        data = growth_records[0].to_dict()
        assert data["date"] == "2024-04-01"
        assert data["weather"] == "sunny"
        assert data["created_at"] is None


class TestHealthIssue:
    """Tests for HealthIssue."""

    def test_from_dict(self):
        issue = HealthIssue.from_dict(
            {
                "id": "h",
                "teaId": "c1",
                "date": date(2024, 5, 2),
                "type": "pest",
                "severity": "high",
                "symptoms": "curled leaves",
                "cause": "  ",
                "imageUrls": ["a.png"],
                "status": "recurred",
            }
        )
        assert issue.type is IssueType.PEST
        assert issue.severity is Severity.HIGH
        assert issue.symptoms == ["curled leaves"]
        assert issue.cause is None
        assert issue.image_urls == ["a.png"]
        assert issue.status is IssueStatus.RECURRED
        assert issue.kind is EntityKind.HEALTH

    def test_defaults(self):
        issue = HealthIssue.from_dict({"id": "h", "cultivar_id": "c", "date": "2024-05-02"})
        assert issue.type is IssueType.OTHER
        assert issue.severity is Severity.LOW
        assert issue.status is IssueStatus.OPEN

    def test_invalid_severity(self):
        with pytest.raises(ValidationError, match="Severity"):
            HealthIssue.from_dict(
                {"id": "h", "cultivar_id": "c", "date": "2024-05-02", "severity": "extreme"}
            )

    def test_to_dict_round_trip(self, health_issues):
        assert HealthIssue.from_dict(health_issues[0].to_dict()) == health_issues[0]


class TestEnums:
    """Tests for enum helpers."""

    def test_severity_health_status(self):
        assert Severity.LOW.health_status.value == "healthy"
        assert Severity.MEDIUM.health_status.value == "warning"
        assert Severity.HIGH.health_status.value == "critical"

    def test_category_kinds(self):
        assert SearchCategory.ALL.kinds == [EntityKind.CULTIVAR, EntityKind.GROWTH, EntityKind.HEALTH]
        assert SearchCategory.TEAS.kinds == [EntityKind.CULTIVAR]

    def test_choices(self):
        assert "growthScore" in SortField.choices()
        assert FilterOperator.NOT_EQUALS.label == "≠"
