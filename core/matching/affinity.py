#!/usr/bin/env python3
"""
Category Affinity Tables - Reference motivational vectors per category.

Each row describes the typical motivational mix of volunteers who choose
that domain, once for the 6-dimension functions inventory (scale 1-5) and
once for the 10-dimension values model (scale 0-5).

The dimension tuples below are the single source of truth for vector
ordering. Volunteer answers are turned into vectors with the same tuples
(see core.matching.profile), so reordering one side silently corrupts
every similarity computed against the other.
"""
from types import MappingProxyType
from typing import Iterable, List, Mapping, Tuple

FUNCTION_DIMENSIONS: Tuple[str, ...] = (
    'values',
    'understanding',
    'social',
    'career',
    'protection',
    'enhancement',
)

VALUE_DIMENSIONS: Tuple[str, ...] = (
    'care',
    'universalism',
    'self_direction',
    'stimulation',
    'hedonism',
    'achievement',
    'power',
    'security',
    'conformity',
    'tradition',
)

NEUTRAL_FUNCTIONS_VECTOR: Tuple[float, ...] = (3.0,) * len(FUNCTION_DIMENSIONS)
NEUTRAL_VALUES_VECTOR: Tuple[float, ...] = (2.5,) * len(VALUE_DIMENSIONS)


def _freeze(rows: Mapping[str, Mapping[str, float]], dimensions: Tuple[str, ...]) -> Mapping[str, Tuple[float, ...]]:
    return MappingProxyType({
        name: tuple(float(row[dim]) for dim in dimensions)
        for name, row in rows.items()
    })


CATEGORY_FUNCTIONS: Mapping[str, Tuple[float, ...]] = _freeze({
    "Nature & Environment": {
        'values': 5, 'understanding': 4, 'social': 2,
        'career': 2, 'protection': 3, 'enhancement': 3,
    },
    "Education": {
        'values': 4, 'understanding': 5, 'social': 4,
        'career': 5, 'protection': 2, 'enhancement': 4,
    },
    "Care & Welfare": {
        'values': 5, 'understanding': 3, 'social': 5,
        'career': 3, 'protection': 4, 'enhancement': 3,
    },
    "Sport & Recreation": {
        'values': 3, 'understanding': 2, 'social': 5,
        'career': 2, 'protection': 3, 'enhancement': 5,
    },
    "Culture & Arts": {
        'values': 3, 'understanding': 4, 'social': 4,
        'career': 3, 'protection': 2, 'enhancement': 4,
    },
    "Animals": {
        'values': 5, 'understanding': 3, 'social': 2,
        'career': 1, 'protection': 4, 'enhancement': 2,
    },
    "Refugees & Integration": {
        'values': 5, 'understanding': 4, 'social': 5,
        'career': 3, 'protection': 3, 'enhancement': 3,
    },
    "Elderly": {
        'values': 5, 'understanding': 2, 'social': 5,
        'career': 2, 'protection': 4, 'enhancement': 2,
    },
    "Youth": {
        'values': 4, 'understanding': 4, 'social': 5,
        'career': 4, 'protection': 2, 'enhancement': 3,
    },
    "Technology": {
        'values': 3, 'understanding': 5, 'social': 2,
        'career': 5, 'protection': 2, 'enhancement': 5,
    },
    "Health": {
        'values': 5, 'understanding': 4, 'social': 4,
        'career': 4, 'protection': 4, 'enhancement': 3,
    },
    "Events": {
        'values': 3, 'understanding': 2, 'social': 5,
        'career': 3, 'protection': 2, 'enhancement': 3,
    },
}, FUNCTION_DIMENSIONS)


CATEGORY_VALUES: Mapping[str, Tuple[float, ...]] = _freeze({
    "Nature & Environment": {
        'care': 3, 'universalism': 5, 'self_direction': 4, 'stimulation': 3, 'hedonism': 2,
        'achievement': 2, 'power': 1, 'security': 2, 'conformity': 2, 'tradition': 2,
    },
    "Education": {
        'care': 4, 'universalism': 4, 'self_direction': 4, 'stimulation': 3, 'hedonism': 2,
        'achievement': 4, 'power': 2, 'security': 3, 'conformity': 3, 'tradition': 2,
    },
    "Care & Welfare": {
        'care': 5, 'universalism': 4, 'self_direction': 2, 'stimulation': 2, 'hedonism': 1,
        'achievement': 2, 'power': 1, 'security': 4, 'conformity': 3, 'tradition': 3,
    },
    "Sport & Recreation": {
        'care': 3, 'universalism': 2, 'self_direction': 3, 'stimulation': 5, 'hedonism': 5,
        'achievement': 4, 'power': 2, 'security': 2, 'conformity': 2, 'tradition': 2,
    },
    "Culture & Arts": {
        'care': 2, 'universalism': 4, 'self_direction': 5, 'stimulation': 4, 'hedonism': 4,
        'achievement': 3, 'power': 1, 'security': 1, 'conformity': 1, 'tradition': 3,
    },
    "Animals": {
        'care': 5, 'universalism': 5, 'self_direction': 3, 'stimulation': 2, 'hedonism': 2,
        'achievement': 1, 'power': 0, 'security': 2, 'conformity': 2, 'tradition': 1,
    },
    "Refugees & Integration": {
        'care': 5, 'universalism': 5, 'self_direction': 3, 'stimulation': 3, 'hedonism': 1,
        'achievement': 2, 'power': 1, 'security': 2, 'conformity': 2, 'tradition': 1,
    },
    "Elderly": {
        'care': 5, 'universalism': 3, 'self_direction': 2, 'stimulation': 1, 'hedonism': 1,
        'achievement': 1, 'power': 0, 'security': 4, 'conformity': 4, 'tradition': 4,
    },
    "Youth": {
        'care': 4, 'universalism': 4, 'self_direction': 4, 'stimulation': 4, 'hedonism': 3,
        'achievement': 3, 'power': 1, 'security': 2, 'conformity': 2, 'tradition': 2,
    },
    "Technology": {
        'care': 2, 'universalism': 3, 'self_direction': 5, 'stimulation': 4, 'hedonism': 2,
        'achievement': 5, 'power': 3, 'security': 2, 'conformity': 1, 'tradition': 1,
    },
    "Health": {
        'care': 5, 'universalism': 4, 'self_direction': 2, 'stimulation': 2, 'hedonism': 1,
        'achievement': 3, 'power': 1, 'security': 5, 'conformity': 3, 'tradition': 2,
    },
    "Events": {
        'care': 2, 'universalism': 2, 'self_direction': 3, 'stimulation': 5, 'hedonism': 5,
        'achievement': 3, 'power': 2, 'security': 1, 'conformity': 2, 'tradition': 2,
    },
}, VALUE_DIMENSIONS)


def _mean_vector(
    categories: Iterable[str],
    table: Mapping[str, Tuple[float, ...]],
    neutral: Tuple[float, ...]
) -> List[float]:
    known = [table[name] for name in categories if name in table]
    if not known:
        return list(neutral)

    n = len(known)
    return [sum(column) / n for column in zip(*known)]


def category_functions_vector(categories: Iterable[str]) -> List[float]:
    """
    Mean functions-inventory vector for a set of category names.

    Unknown categories are ignored; an empty or entirely unknown set
    yields the neutral [3, 3, 3, 3, 3, 3] vector.
    """
    return _mean_vector(categories, CATEGORY_FUNCTIONS, NEUTRAL_FUNCTIONS_VECTOR)


def category_values_vector(categories: Iterable[str]) -> List[float]:
    """Mean values-model vector for a set of category names (neutral when unknown)."""
    return _mean_vector(categories, CATEGORY_VALUES, NEUTRAL_VALUES_VECTOR)
