#!/usr/bin/env python3
"""
Scoring Service - Exact re-ranking of a bounded candidate set.

Takes the candidates returned by the retrieval pipeline and calculates:
- four component scores (motivation, distance, skill, freshness)
- the weighted sum of those components
- the fairness multiplier for the owning organisation

Scoring is pure: no I/O happens here apart from reading the cached weights.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from core.matching.models import VacancyCandidate, VolunteerProfile
from core.scorer.components import (
    score_motivation,
    score_distance,
    score_skills,
    score_freshness,
)
from core.scorer.fairness import fairness_weight, NEUTRAL_WEIGHT
from core.scorer.models import MatchScore, RankedVacancy, RankedVolunteer, MAX_HIGHLIGHTS
from core.scorer.weights import ScoringWeights, ScoringWeightsStore

logger = logging.getLogger(__name__)


def _combine(
    volunteer: VolunteerProfile,
    vacancy: VacancyCandidate,
    weights: ScoringWeights,
    fairness: float,
    now: datetime
) -> MatchScore:
    motivation = score_motivation(
        volunteer.functions, volunteer.values, volunteer.interests, vacancy.categories
    )
    distance = score_distance(
        volunteer.lat, volunteer.lon, vacancy.lat, vacancy.lon,
        vacancy.remote, volunteer.max_distance_km
    )
    skill = score_skills(volunteer.skills, vacancy.required_skills)
    freshness = score_freshness(vacancy.created_at, weights.freshness_window_days, now)

    raw = (
        motivation.score * weights.motivation
        + distance.score * weights.distance
        + skill.score * weights.skill
        + freshness.score * weights.freshness
    )
    total = min(100.0, round(raw * fairness, 1))

    highlights = motivation.highlights + distance.highlights + skill.highlights

    return MatchScore(
        total=max(0.0, total),
        motivation=round(motivation.score, 1),
        distance=round(distance.score, 1),
        skill=round(skill.score, 1),
        freshness=round(freshness.score, 1),
        fairness_weight=round(fairness, 2),
        highlights=highlights[:MAX_HIGHLIGHTS],
    )


class ScoringService:
    """Scores and ranks candidates using the current weights snapshot."""

    def __init__(self, weights_store: ScoringWeightsStore):
        self.weights_store = weights_store

    def score(
        self,
        volunteer: VolunteerProfile,
        vacancy: VacancyCandidate,
        apply_fairness: bool = True,
        now: Optional[datetime] = None
    ) -> MatchScore:
        """Score a single volunteer/vacancy pair."""
        weights = self.weights_store.get()
        now = now or datetime.now(timezone.utc)
        fairness = self._fairness(vacancy, weights) if apply_fairness else NEUTRAL_WEIGHT
        return _combine(volunteer, vacancy, weights, fairness, now)

    def rank_vacancies(
        self,
        volunteer: VolunteerProfile,
        candidates: List[VacancyCandidate],
        take: int,
        now: Optional[datetime] = None
    ) -> List[RankedVacancy]:
        """
        Rank vacancies for a volunteer, best first.

        Weights are read once so the whole ranking uses a single snapshot.
        """
        weights = self.weights_store.get()
        now = now or datetime.now(timezone.utc)

        ranked = [
            RankedVacancy(
                candidate=vacancy,
                score=_combine(volunteer, vacancy, weights, self._fairness(vacancy, weights), now)
            )
            for vacancy in candidates
        ]
        # Stable sort keeps retrieval order between equal totals
        ranked.sort(key=lambda r: r.score.total, reverse=True)

        logger.debug(f"Ranked {len(ranked)} vacancies for volunteer {volunteer.id}")
        return ranked[:max(0, take)]

    def rank_volunteers(
        self,
        vacancy: VacancyCandidate,
        candidates: List[VolunteerProfile],
        take: int,
        now: Optional[datetime] = None
    ) -> List[RankedVolunteer]:
        """
        Rank volunteers for one vacancy, best first.

        Every candidate shares the same organisation, so fairness is neutral.
        """
        weights = self.weights_store.get()
        now = now or datetime.now(timezone.utc)

        ranked = [
            RankedVolunteer(
                candidate=volunteer,
                score=_combine(volunteer, vacancy, weights, NEUTRAL_WEIGHT, now)
            )
            for volunteer in candidates
        ]
        ranked.sort(key=lambda r: r.score.total, reverse=True)

        logger.debug(f"Ranked {len(ranked)} volunteers for vacancy {vacancy.id}")
        return ranked[:max(0, take)]

    @staticmethod
    def _fairness(vacancy: VacancyCandidate, weights: ScoringWeights) -> float:
        return fairness_weight(
            vacancy.organisation_swipe_count,
            weights.small_org_threshold,
            weights.large_org_threshold
        )
