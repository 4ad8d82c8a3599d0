#!/usr/bin/env python3
"""
Ranking endpoints - ranked vacancies for a volunteer and ranked volunteers
for a vacancy.
"""

import uuid
from typing import Optional
from fastapi import APIRouter, Depends, Query

from ..dependencies import get_ranking_service
from ..services.ranking_service import RankingService, to_vacancy_item, to_volunteer_item
from ..models.responses import RankedVacanciesResponse, RankedVolunteersResponse

router = APIRouter(prefix="/api", tags=["rankings"])


@router.get(
    "/volunteers/{volunteer_id}/ranked-vacancies",
    response_model=RankedVacanciesResponse
)
def get_ranked_vacancies(
    volunteer_id: uuid.UUID,
    take: Optional[int] = Query(default=None, ge=1, description="Page size, capped server-side"),
    service: RankingService = Depends(get_ranking_service)
):
    """
    Rank open vacancies for a volunteer.

    Vacancies already swiped and vacancies beyond the volunteer's travel
    distance (unless remote) are excluded. Sorted by total score, highest
    first.
    """
    ranked = service.ranked_vacancies(volunteer_id, take)
    return RankedVacanciesResponse(
        volunteer_id=str(volunteer_id),
        count=len(ranked),
        vacancies=[to_vacancy_item(r) for r in ranked]
    )


@router.get(
    "/vacancies/{vacancy_id}/ranked-volunteers",
    response_model=RankedVolunteersResponse
)
def get_ranked_volunteers(
    vacancy_id: uuid.UUID,
    take: Optional[int] = Query(default=None, ge=1, description="Page size, capped server-side"),
    service: RankingService = Depends(get_ranking_service)
):
    """Rank approved volunteers for one of an organisation's vacancies."""
    ranked = service.ranked_volunteers(vacancy_id, take)
    return RankedVolunteersResponse(
        vacancy_id=str(vacancy_id),
        count=len(ranked),
        volunteers=[to_volunteer_item(r) for r in ranked]
    )
