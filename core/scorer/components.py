#!/usr/bin/env python3
"""
Component Scorers - Motivation, distance, skill and freshness sub-scores.

Every scorer returns a ComponentScore in [0, 100]. Missing data resolves
to a documented neutral value instead of a penalty:

- Motivation: neutral functions vector when the questionnaire is absent
- Distance:   55 when either side lacks coordinates
- Skill:      70 when nothing is required, 50 when the volunteer lists no skills
"""

from datetime import datetime, timezone
from typing import Iterable, List, Mapping, Optional

from core.matching.affinity import (
    FUNCTION_DIMENSIONS,
    VALUE_DIMENSIONS,
    category_functions_vector,
    category_values_vector,
)
from core.matching.profile import functions_to_vector, values_to_vector, strongest_dimension
from core.matching.vector_math import cosine_similarity, haversine_km
from core.scorer.models import ComponentScore, MAX_HIGHLIGHTS

SECONDS_PER_DAY = 24 * 60 * 60

FUNCTION_HIGHLIGHTS = {
    'values': "Driven by values",
    'understanding': "Eager to learn",
    'social': "Socially motivated",
    'career': "Career focused",
    'protection': "Personal growth",
    'enhancement': "Self-improvement",
}

VALUE_HIGHLIGHTS = {
    'care': "Caring",
    'universalism': "Socially engaged",
    'self_direction': "Independent",
    'stimulation': "Adventurous",
    'hedonism': "Enjoys the moment",
    'achievement': "Results driven",
    'power': "Takes the lead",
    'security': "Steady",
    'conformity': "Reliable",
    'tradition': "Rooted in tradition",
}

STRONG_MOTIVATION_THRESHOLD = 82.0
STRONG_DIMENSION_THRESHOLD = 4.0
VALUES_HIGHLIGHT_SIMILARITY = 70.0

# Distance bands (km) and the scores they map to
VERY_CLOSE_KM = 2.0
CLOSE_KM = 5.0
NEAR_TAIL_SCORE = 85.0
FAR_TAIL_SCORE = 40.0
MISSING_COORDINATES_SCORE = 55.0

NO_SKILLS_REQUIRED_SCORE = 70.0
NO_VOLUNTEER_SKILLS_SCORE = 50.0
NO_CATEGORIES_OVERLAP = 50.0


def _normalise(names: Iterable[str]) -> set:
    return {name.strip().lower() for name in names if name}


def score_motivation(
    functions: Optional[Mapping[str, float]],
    values: Optional[Mapping[str, float]],
    interests: Iterable[str],
    categories: Iterable[str]
) -> ComponentScore:
    """
    Calculate motivational alignment between a volunteer and a vacancy.

    Formula:
    - with a values profile:    0.50 * functions_cos + 0.25 * values_cos + 0.25 * overlap
    - without a values profile: 0.65 * functions_cos + 0.35 * overlap

    where overlap = |interests ∩ categories| / |categories| * 100
    (50 when the vacancy declares no categories).

    Args:
        functions: Parsed functions-inventory answers, or None
        values: Parsed values-model answers, or None
        interests: Volunteer interest category names
        categories: Vacancy category names

    Returns:
        ComponentScore with at most three highlights
    """
    categories = list(categories)
    interest_set = _normalise(interests)

    functions_sim = cosine_similarity(
        functions_to_vector(functions),
        category_functions_vector(categories)
    )

    matched_categories = [c for c in categories if c.strip().lower() in interest_set]
    if categories:
        overlap = len(matched_categories) / len(categories) * 100.0
    else:
        overlap = NO_CATEGORIES_OVERLAP

    values_sim = None
    if values is not None:
        values_sim = cosine_similarity(
            values_to_vector(values),
            category_values_vector(categories)
        )
        score = functions_sim * 0.50 + values_sim * 0.25 + overlap * 0.25
    else:
        score = functions_sim * 0.65 + overlap * 0.35

    highlights: List[str] = []
    if matched_categories:
        highlights.append(f"Interested in {matched_categories[0]}")

    if functions is not None:
        dim, value = strongest_dimension(functions, FUNCTION_DIMENSIONS)
        if value >= STRONG_DIMENSION_THRESHOLD:
            highlights.append(FUNCTION_HIGHLIGHTS[dim])

    if values is not None and values_sim >= VALUES_HIGHLIGHT_SIMILARITY:
        dim, value = strongest_dimension(values, VALUE_DIMENSIONS)
        if value >= STRONG_DIMENSION_THRESHOLD and len(highlights) < MAX_HIGHLIGHTS:
            highlights.append(VALUE_HIGHLIGHTS[dim])

    if score >= STRONG_MOTIVATION_THRESHOLD and len(highlights) < MAX_HIGHLIGHTS:
        highlights.append("Strong motivational match")

    return ComponentScore(score=score, highlights=highlights)


def score_distance(
    volunteer_lat: Optional[float],
    volunteer_lon: Optional[float],
    vacancy_lat: Optional[float],
    vacancy_lon: Optional[float],
    remote: bool,
    max_distance_km: float
) -> ComponentScore:
    """
    Calculate geographic accessibility.

    - Remote vacancy           -> 100
    - Missing coordinates      -> 55 (neutral, never penalised)
    - <= 2 km                  -> 100
    - <= 5 km                  -> 90
    - beyond 5 km              -> linear from 85 (5 km) to 40 (max distance), floored at 0

    Out-of-range vacancies are filtered before scoring, so the tail below
    40 is only a soft signal.
    """
    if remote:
        return ComponentScore(score=100.0, highlights=["Remote possible"])

    if None in (volunteer_lat, volunteer_lon, vacancy_lat, vacancy_lon):
        return ComponentScore(score=MISSING_COORDINATES_SCORE)

    km = haversine_km(volunteer_lat, volunteer_lon, vacancy_lat, vacancy_lon)

    if km <= VERY_CLOSE_KM:
        return ComponentScore(score=100.0, highlights=[f"Very close ({round(km, 1)} km)"])

    if km <= CLOSE_KM:
        return ComponentScore(score=90.0, highlights=[f"Close ({round(km)} km)"])

    span = max_distance_km - CLOSE_KM
    if span > 0:
        score = NEAR_TAIL_SCORE - (km - CLOSE_KM) / span * (NEAR_TAIL_SCORE - FAR_TAIL_SCORE)
    else:
        # Radius at or below 5 km: everything further is already past the max
        score = FAR_TAIL_SCORE - (km - CLOSE_KM)

    return ComponentScore(score=max(0.0, score))


def score_skills(volunteer_skills: Iterable[str], required_skills: Iterable[str]) -> ComponentScore:
    """
    Calculate the share of required skills the volunteer has.

    Comparison is case-insensitive. Returns 70 when the vacancy requires
    nothing and 50 when the volunteer has no recorded skills.
    """
    required = list(required_skills)
    if not required:
        return ComponentScore(score=NO_SKILLS_REQUIRED_SCORE)

    volunteer_set = _normalise(volunteer_skills)
    if not volunteer_set:
        return ComponentScore(score=NO_VOLUNTEER_SKILLS_SCORE)

    matched = [s for s in required if s.strip().lower() in volunteer_set]
    score = len(matched) / len(required) * 100.0

    highlights: List[str] = []
    if len(matched) >= 2:
        highlights.append(f"{len(matched)} skills match")
    elif len(matched) == 1:
        highlights.append(f"Skill match: {matched[0]}")

    return ComponentScore(score=score, highlights=highlights)


def score_freshness(
    created_at: datetime,
    window_days: float,
    now: Optional[datetime] = None
) -> ComponentScore:
    """Linear decay from 100 (posted now) to 0 at window_days; no highlights."""
    now = now or datetime.now(timezone.utc)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)

    age_days = max(0.0, (now - created_at).total_seconds() / SECONDS_PER_DAY)
    if window_days <= 0:
        return ComponentScore(score=100.0 if age_days == 0 else 0.0)

    return ComponentScore(score=max(0.0, 100.0 - age_days / window_days * 100.0))
