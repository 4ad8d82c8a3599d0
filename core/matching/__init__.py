"""Matching Module - Vector math, affinity tables and profile vectorization."""
from core.matching.models import VolunteerProfile, VacancyCandidate, DEFAULT_MAX_DISTANCE_KM
from core.matching.vector_math import cosine_similarity, haversine_km
from core.matching.affinity import (
    FUNCTION_DIMENSIONS, VALUE_DIMENSIONS,
    CATEGORY_FUNCTIONS, CATEGORY_VALUES,
    category_functions_vector, category_values_vector,
)
from core.matching.profile import (
    parse_functions_profile, parse_values_profile,
    functions_to_vector, values_to_vector,
)

__all__ = [
    'VolunteerProfile', 'VacancyCandidate', 'DEFAULT_MAX_DISTANCE_KM',
    'cosine_similarity', 'haversine_km',
    'FUNCTION_DIMENSIONS', 'VALUE_DIMENSIONS',
    'CATEGORY_FUNCTIONS', 'CATEGORY_VALUES',
    'category_functions_vector', 'category_values_vector',
    'parse_functions_profile', 'parse_values_profile',
    'functions_to_vector', 'values_to_vector',
]
