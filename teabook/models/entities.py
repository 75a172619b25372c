"""
Entity Models
-------------

Dataclasses for the three record types of a breeding trial log.

Classes:
    - Cultivar: A tea variety or breeding line
    - GrowthRecord: One growth observation of a cultivar
    - HealthIssue: One disease, pest or stress episode of a cultivar

Each class carries a ``kind`` class attribute (an ``EntityKind``) so that
code handling the ``Entity`` union dispatches on an explicit discriminant
instead of probing which fields an object happens to have.

``from_dict`` accepts both snake_case keys and the camelCase keys used by
the browser application's JSON (``teaId``, ``germinationRate``, ...).
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import MAXYEAR, MINYEAR, date, datetime
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Union

# --- Local imports ---
from teabook.core.validators import DataValidator
from teabook.models.enums import (
    CultivarStatus,
    EntityKind,
    IssueStatus,
    IssueType,
    Severity,
    Weather,
)


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the value of the first key present in ``data``."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _string_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


def _iso(value: Optional[Union[date, datetime]]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass
class Cultivar:
    """
    A tea variety or breeding line under trial.

    Attributes:
        id: Opaque identifier
        name: Variety name (e.g. "Yabukita")
        generation: Generation label (e.g. "F1")
        location: Field or greenhouse where it grows
        year: Year the line was started
        germination_rate: Percentage, 0-100
        growth_score: Rating, 1-5
        disease_resistance: Rating, 1-5
        aroma: Free-text aroma description
        note: Free-text note
        status: Active or discarded
        images: Image references
    """

    kind: ClassVar[EntityKind] = EntityKind.CULTIVAR

    id: str
    name: str
    generation: str = ""
    location: str = ""
    year: Optional[int] = None
    germination_rate: float = 0.0
    growth_score: float = 1.0
    disease_resistance: float = 1.0
    aroma: str = ""
    note: str = ""
    status: CultivarStatus = CultivarStatus.ACTIVE
    images: List[str] = field(default_factory=list)

    @property
    def started_on(self) -> Optional[date]:
        """First day of the starting year, used to order cultivars by date."""
        if self.year is None or not MINYEAR <= self.year <= MAXYEAR:
            return None
        return date(self.year, 1, 1)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Cultivar":
        """
        Build a Cultivar from a raw dictionary.

        Raises:
            ValidationError: If required fields are missing or values are
                out of range
        """
        DataValidator.validate_required_fields(dict(data), ["id", "name"])

        germination_rate = DataValidator.normalize_float(
            _pick(data, "germination_rate", "germinationRate")
        )
        growth_score = DataValidator.normalize_float(
            _pick(data, "growth_score", "growthScore")
        )
        disease_resistance = DataValidator.normalize_float(
            _pick(data, "disease_resistance", "diseaseResistance")
        )
        DataValidator.validate_range("germination_rate", germination_rate, 0, 100)
        DataValidator.validate_range("growth_score", growth_score, 1, 5)
        DataValidator.validate_range("disease_resistance", disease_resistance, 1, 5)
        year = DataValidator.normalize_int(data.get("year"))
        DataValidator.validate_range("year", year, MINYEAR, MAXYEAR)

        status = _pick(data, "status")
        return cls(
            id=str(data["id"]),
            name=str(data["name"]).strip(),
            generation=_text(data.get("generation")),
            location=_text(data.get("location")),
            year=year,
            germination_rate=germination_rate if germination_rate is not None else 0.0,
            growth_score=growth_score if growth_score is not None else 1.0,
            disease_resistance=(
                disease_resistance if disease_resistance is not None else 1.0
            ),
            aroma=_text(data.get("aroma")),
            note=_text(_pick(data, "note", "notes")),
            status=(
                DataValidator.normalize_enum(CultivarStatus, status)
                if status is not None
                else CultivarStatus.ACTIVE
            ),
            images=_string_list(data.get("images")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "generation": self.generation,
            "location": self.location,
            "year": self.year,
            "germination_rate": self.germination_rate,
            "growth_score": self.growth_score,
            "disease_resistance": self.disease_resistance,
            "aroma": self.aroma,
            "note": self.note,
            "status": self.status.value,
            "images": list(self.images),
        }


@dataclass
class GrowthRecord:
    """
    A dated growth observation for one cultivar.

    Attributes:
        id: Opaque identifier
        cultivar_id: Id of the observed cultivar
        date: Observation day
        height: Plant height in cm (>= 0)
        leaf_count: Number of leaves (>= 0)
        weather: Weather on the day
        temperature: Air temperature in °C
        notes: Free-text observation notes
        image_url: Optional image reference
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    kind: ClassVar[EntityKind] = EntityKind.GROWTH

    id: str
    cultivar_id: str
    date: date
    height: float = 0.0
    leaf_count: int = 0
    weather: Weather = Weather.SUNNY
    temperature: Optional[float] = None
    notes: str = ""
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GrowthRecord":
        """
        Build a GrowthRecord from a raw dictionary.

        Raises:
            ValidationError: If required fields are missing or values are
                out of range
        """
        raw = dict(data)
        raw.setdefault("cultivar_id", _pick(data, "teaId", "tea_id", "cultivarId"))
        DataValidator.validate_required_fields(raw, ["id", "cultivar_id", "date"])

        height = DataValidator.normalize_float(data.get("height"))
        leaf_count = DataValidator.normalize_int(_pick(data, "leaf_count", "leafCount"))
        DataValidator.validate_range("height", height, 0)
        DataValidator.validate_range("leaf_count", leaf_count, 0)

        weather = data.get("weather")
        return cls(
            id=str(data["id"]),
            cultivar_id=str(raw["cultivar_id"]),
            date=DataValidator.normalize_date(data["date"]),
            height=height if height is not None else 0.0,
            leaf_count=leaf_count if leaf_count is not None else 0,
            weather=(
                DataValidator.normalize_enum(Weather, weather)
                if weather is not None
                else Weather.SUNNY
            ),
            temperature=DataValidator.normalize_float(data.get("temperature")),
            notes=_text(data.get("notes")),
            image_url=DataValidator.normalize_string(_pick(data, "image_url", "imageUrl")),
            created_at=DataValidator.normalize_datetime(_pick(data, "created_at", "createdAt")),
            updated_at=DataValidator.normalize_datetime(_pick(data, "updated_at", "updatedAt")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "cultivar_id": self.cultivar_id,
            "date": self.date.isoformat(),
            "height": self.height,
            "leaf_count": self.leaf_count,
            "weather": self.weather.value,
            "temperature": self.temperature,
            "notes": self.notes,
            "image_url": self.image_url,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


@dataclass
class HealthIssue:
    """
    A disease, pest or stress episode observed on one cultivar.

    Attributes:
        id: Opaque identifier
        cultivar_id: Id of the affected cultivar
        date: Day the issue was observed
        type: Issue category
        severity: Low, medium or high
        description: What was observed
        symptoms: Individual symptoms
        cause: Suspected cause
        treatment: Treatment applied
        notes: Follow-up notes
        image_urls: Image references
        status: Lifecycle status
        resolved_at: When the issue was resolved
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    kind: ClassVar[EntityKind] = EntityKind.HEALTH

    id: str
    cultivar_id: str
    date: date
    type: IssueType = IssueType.OTHER
    severity: Severity = Severity.LOW
    description: str = ""
    symptoms: List[str] = field(default_factory=list)
    cause: Optional[str] = None
    treatment: Optional[str] = None
    notes: Optional[str] = None
    image_urls: List[str] = field(default_factory=list)
    status: IssueStatus = IssueStatus.OPEN
    resolved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HealthIssue":
        """
        Build a HealthIssue from a raw dictionary.

        Raises:
            ValidationError: If required fields are missing or enum values
                are unknown
        """
        raw = dict(data)
        raw.setdefault("cultivar_id", _pick(data, "teaId", "tea_id", "cultivarId"))
        DataValidator.validate_required_fields(raw, ["id", "cultivar_id", "date"])

        issue_type = data.get("type")
        severity = data.get("severity")
        status = data.get("status")
        return cls(
            id=str(data["id"]),
            cultivar_id=str(raw["cultivar_id"]),
            date=DataValidator.normalize_date(data["date"]),
            type=(
                DataValidator.normalize_enum(IssueType, issue_type)
                if issue_type is not None
                else IssueType.OTHER
            ),
            severity=(
                DataValidator.normalize_enum(Severity, severity)
                if severity is not None
                else Severity.LOW
            ),
            description=_text(data.get("description")),
            symptoms=_string_list(data.get("symptoms")),
            cause=DataValidator.normalize_string(data.get("cause")),
            treatment=DataValidator.normalize_string(data.get("treatment")),
            notes=DataValidator.normalize_string(data.get("notes")),
            image_urls=_string_list(_pick(data, "image_urls", "imageUrls")),
            status=(
                DataValidator.normalize_enum(IssueStatus, status)
                if status is not None
                else IssueStatus.OPEN
            ),
            resolved_at=DataValidator.normalize_datetime(_pick(data, "resolved_at", "resolvedAt")),
            created_at=DataValidator.normalize_datetime(_pick(data, "created_at", "createdAt")),
            updated_at=DataValidator.normalize_datetime(_pick(data, "updated_at", "updatedAt")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "cultivar_id": self.cultivar_id,
            "date": self.date.isoformat(),
            "type": self.type.value,
            "severity": self.severity.value,
            "description": self.description,
            "symptoms": list(self.symptoms),
            "cause": self.cause,
            "treatment": self.treatment,
            "notes": self.notes,
            "image_urls": list(self.image_urls),
            "status": self.status.value,
            "resolved_at": _iso(self.resolved_at),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


# Tagged union of every searchable record; dispatch on ``entity.kind``.
Entity = Union[Cultivar, GrowthRecord, HealthIssue]
