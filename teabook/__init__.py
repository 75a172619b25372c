"""
teabook
=======

Search and analysis toolkit for tea-cultivar breeding trial records.

The package works on plain in-memory collections of cultivars, growth
records and health issues. It ranks and highlights free-text matches,
computes facet counts, filters arbitrary records by field conditions and
aggregates numeric fields with summary statistics.

Main Components:
    - models: Entity dataclasses, enums and the YAML dataset loader
    - search: Relevance scoring, highlighting, faceted search and CLI
    - analysis: Field filters and group-by aggregation
    - storage: Key-value store for search history and saved searches
    - core: Logging, exceptions, paths and validators

Example Usage:
    >>> from teabook import SearchEngine, SearchFilters, load_dataset
    >>> dataset = load_dataset("data/dataset.yaml")
    >>> engine = SearchEngine()
    >>> results = engine.search(
    ...     dataset.cultivars, dataset.growth_records, dataset.health_issues,
    ...     SearchFilters(query="yabukita"),
    ... )

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"

from teabook.models import Cultivar, Dataset, GrowthRecord, HealthIssue, load_dataset
from teabook.search.search_engine import (
    SearchEngine,
    SearchFilters,
    SearchQueryParser,
    SearchResult,
)
from teabook.analysis import AnalysisConfig, FilterCondition, analyze, apply_filters

__all__ = [
    "Cultivar",
    "Dataset",
    "GrowthRecord",
    "HealthIssue",
    "load_dataset",
    "SearchEngine",
    "SearchFilters",
    "SearchQueryParser",
    "SearchResult",
    "AnalysisConfig",
    "FilterCondition",
    "analyze",
    "apply_filters",
]
