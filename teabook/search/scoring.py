#!/usr/bin/env python3
"""
scoring.py
----------
Relevance scoring of trial records against a free-text query.

Scores are additive integers: every field that contains the query adds
its weight. Matching is case-insensitive substring matching on the
stripped query.

Weights:
    Cultivar      exact name 100 (else partial name 50), location 30,
                  aroma 20, generation 15, note 10
    GrowthRecord  notes 40, weather 20, ISO date 15
    HealthIssue   description 40, any symptom 30, cause 25, treatment 20

Usage:
    score = score_relevance(cultivar, "yabukita")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Optional

# --- Local imports ---
from teabook.models.entities import Cultivar, GrowthRecord, HealthIssue
from teabook.models.enums import EntityKind

EXACT_NAME_WEIGHT = 100
PARTIAL_NAME_WEIGHT = 50
LOCATION_WEIGHT = 30
AROMA_WEIGHT = 20
GENERATION_WEIGHT = 15
NOTE_WEIGHT = 10

GROWTH_NOTES_WEIGHT = 40
WEATHER_WEIGHT = 20
DATE_WEIGHT = 15

DESCRIPTION_WEIGHT = 40
SYMPTOM_WEIGHT = 30
CAUSE_WEIGHT = 25
TREATMENT_WEIGHT = 20


def contains(text: Optional[str], needle: str) -> bool:
    """
    Case-insensitive substring test; None never matches.

    Folds with ``str.lower`` like the highlighter's ``re.IGNORECASE``,
    so "STRASSE" does not match "Straße" here either.
    """
    if not text:
        return False
    return needle.lower() in text.lower()


def _score_cultivar(cultivar: Cultivar, query: str) -> int:
    score = 0
    if cultivar.name.lower() == query.lower():
        score += EXACT_NAME_WEIGHT
    elif contains(cultivar.name, query):
        score += PARTIAL_NAME_WEIGHT

    if contains(cultivar.location, query):
        score += LOCATION_WEIGHT
    if contains(cultivar.aroma, query):
        score += AROMA_WEIGHT
    if contains(cultivar.note, query):
        score += NOTE_WEIGHT
    if contains(cultivar.generation, query):
        score += GENERATION_WEIGHT
    return score


def _score_growth(record: GrowthRecord, query: str) -> int:
    score = 0
    if contains(record.notes, query):
        score += GROWTH_NOTES_WEIGHT
    if contains(record.weather.value, query):
        score += WEATHER_WEIGHT
    # Raw match on the ISO string, so "2024-05" hits every May record
    if query in record.date.isoformat():
        score += DATE_WEIGHT
    return score


def _score_health(issue: HealthIssue, query: str) -> int:
    score = 0
    if contains(issue.description, query):
        score += DESCRIPTION_WEIGHT
    if any(contains(symptom, query) for symptom in issue.symptoms):
        score += SYMPTOM_WEIGHT
    if contains(issue.cause, query):
        score += CAUSE_WEIGHT
    if contains(issue.treatment, query):
        score += TREATMENT_WEIGHT
    return score


def score_relevance(entity: Any, query: Optional[str]) -> int:
    """
    Score how well an entity matches a query.

    Args:
        entity: Cultivar, GrowthRecord or HealthIssue
        query: Free-text query

    Returns:
        Non-negative score; 0 for blank queries and unknown entity kinds
    """
    query = (query or "").strip()
    if not query:
        return 0

    kind = getattr(entity, "kind", None)
    if kind is EntityKind.CULTIVAR:
        return _score_cultivar(entity, query)
    if kind is EntityKind.GROWTH:
        return _score_growth(entity, query)
    if kind is EntityKind.HEALTH:
        return _score_health(entity, query)
    return 0
