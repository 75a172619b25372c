"""
dataset.py
----------
In-memory collections of trial records and their YAML loader.

A dataset file is a YAML mapping with up to three lists:

    cultivars:
      - {id: c1, name: Yabukita, generation: F1, location: Shizuoka, year: 2021}
    growth_records:
      - {id: g1, cultivar_id: c1, date: 2024-04-01, height: 12.5, weather: sunny}
    health_issues:
      - {id: h1, cultivar_id: c1, date: 2024-05-02, type: pest, severity: high}

The camelCase section names ``growthRecords`` and ``healthIssues`` exported
by the browser application are accepted as well.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

# --- Third party imports ---
import yaml

# --- Local imports ---
from teabook.core.exceptions import DatasetError, ValidationError
from teabook.core.logging_manager import TeabookLogger, safe_logger
from teabook.models.entities import Cultivar, GrowthRecord, HealthIssue

T = TypeVar("T")

SECTION_KEYS = {
    "cultivars": ("cultivars", "teas"),
    "growth_records": ("growth_records", "growthRecords"),
    "health_issues": ("health_issues", "healthIssues"),
}


@dataclass
class Dataset:
    """Caller-owned entity collections handed to the search and analysis core."""

    cultivars: List[Cultivar] = field(default_factory=list)
    growth_records: List[GrowthRecord] = field(default_factory=list)
    health_issues: List[HealthIssue] = field(default_factory=list)

    def cultivar_by_id(self, cultivar_id: str) -> Optional[Cultivar]:
        for cultivar in self.cultivars:
            if cultivar.id == cultivar_id:
                return cultivar
        return None

    def __len__(self) -> int:
        return len(self.cultivars) + len(self.growth_records) + len(self.health_issues)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Dataset":
        """
        Build a dataset from a parsed YAML/JSON mapping.

        Raises:
            DatasetError: If a section is not a list or a record is invalid
        """
        return cls(
            cultivars=_parse_section(data, "cultivars", Cultivar.from_dict),
            growth_records=_parse_section(data, "growth_records", GrowthRecord.from_dict),
            health_issues=_parse_section(data, "health_issues", HealthIssue.from_dict),
        )


def _parse_section(
    data: Dict[str, Any], section: str, factory: Callable[[Dict[str, Any]], T]
) -> List[T]:
    raw_items = None
    for key in SECTION_KEYS[section]:
        if key in data:
            raw_items = data[key]
            break

    if raw_items is None:
        return []
    if not isinstance(raw_items, list):
        raise DatasetError(f"Section '{section}' must be a list")

    items = []
    for index, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            raise DatasetError(f"{section}[{index}] must be a mapping")
        try:
            items.append(factory(raw))
        except ValidationError as e:
            raise DatasetError(f"{section}[{index}]: {e}") from e
    return items


def load_dataset(path: Path, logger: Optional[TeabookLogger] = None) -> Dataset:
    """
    Load a YAML dataset file.

    Args:
        path: Path to the YAML file
        logger: Optional logger

    Returns:
        Dataset with typed entities

    Raises:
        DatasetError: If the file is missing, unparsable or malformed
    """
    path = Path(path)
    if not path.is_file():
        raise DatasetError(f"Dataset file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise DatasetError(f"Cannot parse YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DatasetError(f"Dataset {path} must be a mapping of entity lists")

    dataset = Dataset.from_dict(data)
    safe_logger(logger).log_operation(
        "load_dataset",
        {
            "path": str(path),
            "cultivars": len(dataset.cultivars),
            "growth_records": len(dataset.growth_records),
            "health_issues": len(dataset.health_issues),
        },
    )
    return dataset
