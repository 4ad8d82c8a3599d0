#!/usr/bin/env python3
"""
Matching Models - Request-scoped snapshots of volunteers and vacancies.

These are plain frozen dataclasses, detached from the ORM so scoring can
run after the database session is closed.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

DEFAULT_MAX_DISTANCE_KM = 25.0


@dataclass(frozen=True)
class VolunteerProfile:
    """Snapshot of a volunteer used as the subject (or candidate) of a ranking."""
    id: Any
    functions: Optional[Dict[str, float]] = None  # 6 dims, 1-5
    values: Optional[Dict[str, float]] = None  # 10 dims, 0-5
    interests: FrozenSet[str] = frozenset()
    skills: FrozenSet[str] = frozenset()
    lat: Optional[float] = None
    lon: Optional[float] = None
    max_distance_km: float = DEFAULT_MAX_DISTANCE_KM
    embedding: Optional[List[float]] = field(default=None, compare=False, repr=False)

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lon is not None


@dataclass(frozen=True)
class VacancyCandidate:
    """Snapshot of a vacancy together with its organisation's exposure counter."""
    id: Any
    organisation_id: Any
    created_at: datetime
    title: str = ""
    categories: Tuple[str, ...] = ()  # ordered, first match wins the highlight
    required_skills: FrozenSet[str] = frozenset()
    lat: Optional[float] = None
    lon: Optional[float] = None
    remote: bool = False
    organisation_swipe_count: int = 0
    embedding: Optional[List[float]] = field(default=None, compare=False, repr=False)

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lon is not None
