#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from typing import List, Dict, Any
from dataclasses import dataclass, field

from core.matching.models import VacancyCandidate, VolunteerProfile

MAX_HIGHLIGHTS = 3


@dataclass
class ComponentScore:
    """Sub-score in [0, 100] with the highlights that explain it."""
    score: float
    highlights: List[str] = field(default_factory=list)


@dataclass
class MatchScore:
    """Weighted total plus the component breakdown surfaced to the UI."""
    total: float
    motivation: float
    distance: float
    skill: float
    freshness: float
    fairness_weight: float
    highlights: List[str] = field(default_factory=list)

    def to_snapshot(self) -> Dict[str, Any]:
        """Plain-dict form stored on a swipe row for analytics."""
        return {
            'total': self.total,
            'motivation': self.motivation,
            'distance': self.distance,
            'skill': self.skill,
            'freshness': self.freshness,
            'fairness_weight': self.fairness_weight,
            'highlights': list(self.highlights),
        }


@dataclass
class RankedVacancy:
    """A vacancy candidate annotated with its score."""
    candidate: VacancyCandidate
    score: MatchScore


@dataclass
class RankedVolunteer:
    """A volunteer candidate annotated with its score against one vacancy."""
    candidate: VolunteerProfile
    score: MatchScore
