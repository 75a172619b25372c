"""
conftest.py
-----------
Shared pytest fixtures for teabook tests.

Provides fixtures for:
- Sample cultivars, growth records and health issues
- A YAML dataset file holding the same records
- An in-memory key-value store
"""
import pytest
from datetime import date

from teabook.models import (
    Cultivar,
    CultivarStatus,
    GrowthRecord,
    HealthIssue,
    IssueStatus,
    IssueType,
    Severity,
    Weather,
)
from teabook.storage import KeyValueStore


# ----- Entity Fixtures -----

@pytest.fixture
def cultivars():
    """Three cultivars across two locations and two generations."""
    return [
        Cultivar(
            id="c1",
            name="Yabukita",
            generation="F1",
            location="Shizuoka",
            year=2021,
            germination_rate=85.0,
            growth_score=4.0,
            disease_resistance=3.0,
            aroma="floral, sweet",
            note="Standard sencha cultivar",
        ),
        Cultivar(
            id="c2",
            name="Saemidori",
            generation="F2",
            location="Kagoshima",
            year=2019,
            germination_rate=70.0,
            growth_score=3.0,
            disease_resistance=4.0,
            aroma="umami",
            note="Early budding",
        ),
        Cultivar(
            id="c3",
            name="Benifuuki",
            generation="F1",
            location="Shizuoka Makinohara",
            year=2023,
            germination_rate=60.0,
            growth_score=5.0,
            disease_resistance=5.0,
            aroma="astringent",
            note="Anti-allergy line",
            status=CultivarStatus.DISCARDED,
        ),
    ]


@pytest.fixture
def growth_records():
    """Four observations; the last one belongs to an unknown cultivar."""
    return [
        GrowthRecord(
            id="g1", cultivar_id="c1", date=date(2024, 4, 1), height=12.5,
            leaf_count=8, weather=Weather.SUNNY, temperature=18.0,
            notes="New flush appeared",
        ),
        GrowthRecord(
            id="g2", cultivar_id="c1", date=date(2024, 5, 1), height=15.0,
            leaf_count=10, weather=Weather.RAINY, temperature=16.5,
            notes="Steady growth after rain",
        ),
        GrowthRecord(
            id="g3", cultivar_id="c2", date=date(2024, 4, 15), height=9.0,
            leaf_count=5, weather=Weather.CLOUDY, temperature=14.0,
        ),
        GrowthRecord(
            id="g4", cultivar_id="missing", date=date(2024, 6, 1), height=3.0,
            leaf_count=2, weather=Weather.SNOWY, temperature=-1.0,
            notes="Orphan record",
        ),
    ]


@pytest.fixture
def health_issues():
    """One issue per severity level."""
    return [
        HealthIssue(
            id="h1", cultivar_id="c1", date=date(2024, 5, 2), type=IssueType.PEST,
            severity=Severity.HIGH, description="Aphid infestation on new leaves",
            symptoms=["curled leaves", "sticky residue"], cause="aphids",
            treatment="neem oil",
        ),
        HealthIssue(
            id="h2", cultivar_id="c2", date=date(2024, 5, 20), type=IssueType.DISEASE,
            severity=Severity.MEDIUM, description="Gray blight",
            symptoms=["brown spots"], cause="fungus", status=IssueStatus.RESOLVED,
        ),
        HealthIssue(
            id="h3", cultivar_id="c3", date=date(2024, 6, 10),
            type=IssueType.ENVIRONMENTAL, severity=Severity.LOW,
            description="Frost damage", status=IssueStatus.IN_PROGRESS,
        ),
    ]


# ----- File Fixtures -----

DATASET_YAML = """\
cultivars:
  - id: c1
    name: Yabukita
    generation: F1
    location: Shizuoka
    year: 2021
    germinationRate: 85
    growthScore: 4
    diseaseResistance: 3
    aroma: floral, sweet
    note: Standard sencha cultivar
  - id: c2
    name: Saemidori
    generation: F2
    location: Kagoshima
    year: 2019
    germination_rate: 70
    growth_score: 3
    disease_resistance: 4
    aroma: umami
    note: Early budding
  - id: c3
    name: Benifuuki
    generation: F1
    location: Shizuoka Makinohara
    year: 2023
    germination_rate: 60
    growth_score: 5
    disease_resistance: 5
    aroma: astringent
    note: Anti-allergy line
    status: discarded
growthRecords:
  - {id: g1, teaId: c1, date: 2024-04-01, height: 12.5, leafCount: 8, weather: sunny, notes: New flush appeared}
  - {id: g2, teaId: c1, date: 2024-05-01, height: 15.0, leafCount: 10, weather: rainy, notes: Steady growth after rain}
  - {id: g3, teaId: c2, date: 2024-04-15, height: 9.0, leafCount: 5, weather: cloudy}
  - {id: g4, teaId: missing, date: 2024-06-01, height: 3.0, leafCount: 2, weather: snowy, notes: Orphan record}
healthIssues:
  - id: h1
    teaId: c1
    date: 2024-05-02
    type: pest
    severity: high
    description: Aphid infestation on new leaves
    symptoms: [curled leaves, sticky residue]
    cause: aphids
    treatment: neem oil
  - id: h2
    teaId: c2
    date: 2024-05-20
    type: disease
    severity: medium
    description: Gray blight
    symptoms: [brown spots]
    cause: fungus
    status: resolved
  - id: h3
    teaId: c3
    date: 2024-06-10
    type: environmental
    severity: low
    description: Frost damage
    status: in_progress
"""


@pytest.fixture
def dataset_file(tmp_path):
    """YAML dataset holding the same records as the entity fixtures."""
    path = tmp_path / "dataset.yaml"
    path.write_text(DATASET_YAML, encoding="utf-8")
    return path


# ----- Storage Fixtures -----

@pytest.fixture
def kv_store():
    """Fresh in-memory key-value store."""
    return KeyValueStore()
