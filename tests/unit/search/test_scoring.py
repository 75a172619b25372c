"""
Tests for relevance scoring.

Tests:
- Cultivar field weights, exact vs partial name
- Growth record and health issue weights
- Blank queries and unknown objects
"""
from datetime import date

from teabook.models import Cultivar, GrowthRecord, HealthIssue
from teabook.search.scoring import contains, score_relevance


class TestContains:
    """Tests for the case-insensitive substring helper."""

    def test_case_insensitive(self):
        assert contains("Yabukita", "YABU")

    def test_folds_like_the_highlighter(self):
        """Lowercasing keeps ß distinct from ss, as re.IGNORECASE does."""
        assert contains("Straße", "STRAßE")
        assert not contains("Straße", "STRASSE")
        assert score_relevance(Cultivar(id="s", name="Straße"), "STRASSE") == 0

    def test_none_and_empty_never_match(self):
        assert not contains(None, "a")
        assert not contains("", "a")


class TestCultivarScoring:
    """Tests for cultivar relevance."""

    def test_exact_name_scores_100(self):
        """An exact (case-insensitive) name match outranks a partial one."""
        assert score_relevance(Cultivar(id="a", name="Yabukita"), "yabukita") == 100

    def test_partial_name_scores_50(self):
        assert score_relevance(Cultivar(id="b", name="Yabukitax"), "yabukita") == 50

    def test_weights_are_additive(self):
        """Name and location matches add up."""
        cultivar = Cultivar(id="c", name="Shizuoka Gold", location="Shizuoka")
        assert score_relevance(cultivar, "shizuoka") == 80

    def test_generation_match(self, cultivars):
        assert score_relevance(cultivars[0], "F1") == 15

    def test_aroma_and_note(self):
        cultivar = Cultivar(id="d", name="X", aroma="sweet", note="very sweet")
        assert score_relevance(cultivar, "sweet") == 30

    def test_query_is_stripped(self, cultivars):
        assert score_relevance(cultivars[0], "  yabukita  ") == 100


class TestGrowthScoring:
    """Tests for growth record relevance."""

    def test_notes(self, growth_records):
        assert score_relevance(growth_records[0], "flush") == 40

    def test_notes_and_weather(self, growth_records):
        """'rain' hits both the notes and the 'rainy' weather."""
        assert score_relevance(growth_records[1], "rain") == 60

    def test_partial_iso_date(self, growth_records):
        assert score_relevance(growth_records[1], "2024-05") == 15

    def test_no_match(self, growth_records):
        assert score_relevance(growth_records[2], "aphid") == 0


class TestHealthScoring:
    """Tests for health issue relevance."""

    def test_description_and_symptom(self, health_issues):
        assert score_relevance(health_issues[0], "leaves") == 70

    def test_description_and_cause(self, health_issues):
        assert score_relevance(health_issues[0], "aphid") == 65

    def test_treatment(self, health_issues):
        assert score_relevance(health_issues[0], "neem") == 20

    def test_symptoms_score_once(self):
        """Several matching symptoms still add the symptom weight once."""
        issue = HealthIssue(
            id="h", cultivar_id="c", date=date(2024, 1, 1),
            description="x", symptoms=["leaf spots", "leaf curl"],
        )
        assert score_relevance(issue, "leaf") == 30

    def test_missing_cause_and_treatment(self, health_issues):
        assert score_relevance(health_issues[2], "frost") == 40


class TestEdgeCases:
    """Tests for blank queries and unknown entities."""

    def test_blank_query_scores_zero(self, cultivars):
        assert score_relevance(cultivars[0], "") == 0
        assert score_relevance(cultivars[0], "   ") == 0
        assert score_relevance(cultivars[0], None) == 0

    def test_unknown_object_scores_zero(self):
        assert score_relevance({"name": "Yabukita"}, "yabukita") == 0

    def test_score_is_never_negative(self, growth_records):
        record = GrowthRecord(id="g", cultivar_id="c", date=date(2024, 1, 1))
        assert score_relevance(record, "anything") >= 0
