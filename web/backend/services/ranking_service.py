#!/usr/bin/env python3
"""
Ranking service - retrieve a bounded candidate set, then score and sort it.
"""

import logging
from typing import Any, Callable, ContextManager, List, Optional

from core.config_loader import RetrievalConfig
from core.exceptions import VolunteerNotFoundException, VacancyNotFoundException
from core.retrieval.pipeline import CandidateRetrievalPipeline
from core.scorer import ScoringService, RankedVacancy, RankedVolunteer
from ..models.responses import (
    MatchScoreModel,
    RankedVacancyItem,
    RankedVolunteerItem,
)
from ..utils import safe_datetime_iso, sorted_names

logger = logging.getLogger(__name__)


class RankingService:
    """Serves ranked vacancy and volunteer pages."""

    def __init__(
        self,
        pipeline: CandidateRetrievalPipeline,
        scoring: ScoringService,
        uow_factory: Callable[[], ContextManager[Any]],
        retrieval_config: Optional[RetrievalConfig] = None
    ):
        self.pipeline = pipeline
        self.scoring = scoring
        self.uow_factory = uow_factory
        self.retrieval_config = retrieval_config or RetrievalConfig()

    def clamp_take(self, take: Optional[int]) -> int:
        if take is None:
            return self.retrieval_config.default_take
        return max(1, min(take, self.retrieval_config.max_take))

    def ranked_vacancies(self, volunteer_id: Any, take: Optional[int] = None) -> List[RankedVacancy]:
        """
        Rank open vacancies for a volunteer.

        Raises:
            VolunteerNotFoundException: Unknown volunteer
        """
        take = self.clamp_take(take)
        with self.uow_factory() as repos:
            volunteer = repos.volunteers.get_by_id(volunteer_id)
            if volunteer is None:
                raise VolunteerNotFoundException(f"Volunteer {volunteer_id} not found")
            profile, candidates = self.pipeline.vacancies_for_volunteer(repos, volunteer, take)

        # Snapshots are detached, scoring runs outside the transaction
        return self.scoring.rank_vacancies(profile, candidates, take)

    def ranked_volunteers(self, vacancy_id: Any, take: Optional[int] = None) -> List[RankedVolunteer]:
        """
        Rank volunteers for one vacancy.

        Raises:
            VacancyNotFoundException: Unknown vacancy
        """
        take = self.clamp_take(take)
        with self.uow_factory() as repos:
            vacancy = repos.vacancies.get_by_id(vacancy_id)
            if vacancy is None:
                raise VacancyNotFoundException(f"Vacancy {vacancy_id} not found")
            subject, candidates = self.pipeline.volunteers_for_vacancy(repos, vacancy, take)

        return self.scoring.rank_volunteers(subject, candidates, take)


def to_vacancy_item(ranked: RankedVacancy) -> RankedVacancyItem:
    vacancy = ranked.candidate
    return RankedVacancyItem(
        vacancy_id=str(vacancy.id),
        organisation_id=str(vacancy.organisation_id),
        title=vacancy.title,
        categories=list(vacancy.categories),
        remote=vacancy.remote,
        created_at=safe_datetime_iso(vacancy.created_at),
        score=MatchScoreModel.model_validate(ranked.score)
    )


def to_volunteer_item(ranked: RankedVolunteer) -> RankedVolunteerItem:
    volunteer = ranked.candidate
    return RankedVolunteerItem(
        volunteer_id=str(volunteer.id),
        interests=sorted_names(volunteer.interests),
        skills=sorted_names(volunteer.skills),
        score=MatchScoreModel.model_validate(ranked.score)
    )
