#!/usr/bin/env python3
"""
Motivational Profile Vectorizer.

Turns questionnaire answers into vectors that line up with the category
affinity tables. Answers arrive either as a mapping or as the JSON string
stored on the volunteer record.
"""
import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from core.matching.affinity import (
    FUNCTION_DIMENSIONS,
    VALUE_DIMENSIONS,
    NEUTRAL_FUNCTIONS_VECTOR,
)

logger = logging.getLogger(__name__)

RawProfile = Union[str, Mapping[str, Any], None]


def _parse_profile(raw: RawProfile, dimensions: Tuple[str, ...]) -> Optional[Dict[str, float]]:
    if raw is None or raw == "":
        return None

    data = raw
    if isinstance(raw, str):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.debug("Ignoring malformed profile JSON")
            return None

    if not isinstance(data, Mapping):
        return None

    parsed = {}
    for dim in dimensions:
        value = data.get(dim)
        # bool is an int subclass but never a valid answer
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        parsed[dim] = float(value)
    return parsed


def parse_functions_profile(raw: RawProfile) -> Optional[Dict[str, float]]:
    """
    Parse a functions-inventory answer set.

    Returns None when the input is missing, malformed, or any of the six
    dimensions is absent or non-numeric.
    """
    return _parse_profile(raw, FUNCTION_DIMENSIONS)


def parse_values_profile(raw: RawProfile) -> Optional[Dict[str, float]]:
    """Parse a values-model answer set (all ten dimensions required)."""
    return _parse_profile(raw, VALUE_DIMENSIONS)


def functions_to_vector(profile: Optional[Mapping[str, float]]) -> List[float]:
    """Order a functions profile by FUNCTION_DIMENSIONS; neutral when absent."""
    if profile is None:
        return list(NEUTRAL_FUNCTIONS_VECTOR)
    return [float(profile[dim]) for dim in FUNCTION_DIMENSIONS]


def values_to_vector(profile: Mapping[str, float]) -> List[float]:
    """Order a values profile by VALUE_DIMENSIONS."""
    return [float(profile[dim]) for dim in VALUE_DIMENSIONS]


def strongest_dimension(profile: Mapping[str, float], dimensions: Tuple[str, ...]) -> Tuple[str, float]:
    """Return the (dimension, value) pair with the highest answer; first wins on ties."""
    best = dimensions[0]
    for dim in dimensions[1:]:
        if profile[dim] > profile[best]:
            best = dim
    return best, profile[best]

