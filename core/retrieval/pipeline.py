#!/usr/bin/env python3
"""
Candidate Retrieval Pipeline - Retrieve, filter, then hand off to scoring.

Flow:
1. Exclude pairs the subject already swiped
2. Strategies are tried in order; each returns a bounded candidate pool
3. ORM rows are snapshotted into VolunteerProfile / VacancyCandidate
4. Candidates outside the travel radius are dropped; an empty result
   moves on to the next strategy

A failing strategy is logged and the next one is tried, so ranking
requests degrade to recency order instead of erroring.
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from core.matching.models import VacancyCandidate, VolunteerProfile, DEFAULT_MAX_DISTANCE_KM
from core.matching.profile import parse_functions_profile, parse_values_profile
from core.matching.vector_math import haversine_km
from core.retrieval.strategies import RetrievalStrategy
from database.models import Vacancy, Volunteer
from database.models.swipe import ACTOR_VOLUNTEER, ACTOR_ORGANISATION

logger = logging.getLogger(__name__)

T = TypeVar('T')


def to_volunteer_profile(row: Volunteer) -> VolunteerProfile:
    """Snapshot a volunteer row, parsing the stored questionnaires."""
    embedding = row.embedding
    return VolunteerProfile(
        id=row.id,
        functions=parse_functions_profile(row.functions_profile),
        values=parse_values_profile(row.values_profile),
        interests=frozenset(row.interests or ()),
        skills=frozenset(row.skills or ()),
        lat=row.lat,
        lon=row.lon,
        max_distance_km=row.max_distance_km or DEFAULT_MAX_DISTANCE_KM,
        embedding=list(embedding) if embedding is not None else None,
    )


def to_vacancy_candidate(row: Vacancy, organisation_swipe_count: int = 0) -> VacancyCandidate:
    embedding = row.embedding
    return VacancyCandidate(
        id=row.id,
        organisation_id=row.organisation_id,
        created_at=row.created_at,
        title=row.title or "",
        categories=tuple(row.categories or ()),
        required_skills=frozenset(row.required_skills or ()),
        lat=row.lat,
        lon=row.lon,
        remote=bool(row.remote),
        organisation_swipe_count=organisation_swipe_count,
        embedding=list(embedding) if embedding is not None else None,
    )


def within_travel_distance(volunteer: VolunteerProfile, vacancy: VacancyCandidate) -> bool:
    """Hard filter: remote and unknown locations pass, everything else must be in range."""
    if vacancy.remote:
        return True
    if not (volunteer.has_coordinates and vacancy.has_coordinates):
        return True
    km = haversine_km(volunteer.lat, volunteer.lon, vacancy.lat, vacancy.lon)
    return km <= volunteer.max_distance_km


class CandidateRetrievalPipeline:
    """Runs retrieval strategies in priority order against one unit of work."""

    def __init__(self, strategies: Sequence[RetrievalStrategy]):
        if not strategies:
            raise ValueError("At least one retrieval strategy is required")
        self.strategies = list(strategies)

    def _retrieve(
        self,
        subject_embedding: Optional[List[float]],
        fetch: Callable[[RetrievalStrategy], List[T]]
    ) -> Tuple[List[T], str]:
        """First strategy whose in-range candidates are non-empty wins."""
        for strategy in self.strategies:
            if not strategy.is_available(subject_embedding):
                continue
            try:
                candidates = fetch(strategy)
            except Exception as e:
                logger.warning(f"{strategy.name} retrieval failed, falling back: {e}")
                continue
            if candidates:
                return candidates, strategy.name
            logger.debug(f"{strategy.name} retrieval returned no candidates within range")
        return [], "none"

    def vacancies_for_volunteer(
        self,
        repos: Any,
        volunteer: Volunteer,
        take: int
    ) -> Tuple[VolunteerProfile, List[VacancyCandidate]]:
        """
        Retrieve open vacancies the volunteer has not swiped yet.

        Args:
            repos: Repositories bundle from swipe_uow
            volunteer: Volunteer row (subject)
            take: Requested page size

        Returns:
            (subject profile, filtered candidates)
        """
        profile = to_volunteer_profile(volunteer)
        exclude_ids = repos.swipes.swiped_vacancy_ids(ACTOR_VOLUNTEER, volunteer.id)

        def fetch(strategy: RetrievalStrategy) -> List[VacancyCandidate]:
            rows = strategy.fetch_vacancies(repos.vacancies, profile.embedding, take, exclude_ids)
            if not rows:
                return []
            counts: Dict[Any, int] = repos.vacancies.organisation_swipe_counts(
                row.organisation_id for row in rows
            )
            candidates = [
                to_vacancy_candidate(row, counts.get(row.organisation_id, 0))
                for row in rows
            ]
            return [c for c in candidates if within_travel_distance(profile, c)]

        in_range, used = self._retrieve(profile.embedding, fetch)

        logger.info(
            f"Retrieved {len(in_range)} vacancies within range via {used} "
            f"for volunteer {volunteer.id}"
        )
        return profile, in_range

    def volunteers_for_vacancy(
        self,
        repos: Any,
        vacancy: Vacancy,
        take: int
    ) -> Tuple[VacancyCandidate, List[VolunteerProfile]]:
        """Retrieve approved volunteers the organisation has not swiped for this vacancy."""
        subject = to_vacancy_candidate(vacancy)
        exclude_ids = repos.swipes.swiped_volunteer_ids(ACTOR_ORGANISATION, vacancy.id)

        def fetch(strategy: RetrievalStrategy) -> List[VolunteerProfile]:
            rows = strategy.fetch_volunteers(repos.volunteers, subject.embedding, take, exclude_ids)
            profiles = [to_volunteer_profile(row) for row in rows]
            return [p for p in profiles if within_travel_distance(p, subject)]

        in_range, used = self._retrieve(subject.embedding, fetch)

        logger.info(
            f"Retrieved {len(in_range)} volunteers within range via {used} "
            f"for vacancy {vacancy.id}"
        )
        return subject, in_range
