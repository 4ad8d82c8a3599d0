#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict


class MatchScoreModel(BaseModel):
    """Weighted total with its component breakdown."""
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "total": 78.4,
                "motivation": 81.0,
                "distance": 90.0,
                "skill": 70.0,
                "freshness": 96.7,
                "fairness_weight": 1.0,
                "highlights": ["Interested in Education", "Close (4 km)"]
            }
        }
    )

    total: float = Field(ge=0, le=100)
    motivation: float = Field(ge=0, le=100)
    distance: float = Field(ge=0, le=100)
    skill: float = Field(ge=0, le=100)
    freshness: float = Field(ge=0, le=100)
    fairness_weight: float
    highlights: List[str] = []


class RankedVacancyItem(BaseModel):
    vacancy_id: str
    organisation_id: str
    title: str
    categories: List[str] = []
    remote: bool = False
    created_at: Optional[str] = None
    score: MatchScoreModel


class RankedVacanciesResponse(BaseModel):
    success: bool = True
    volunteer_id: str
    count: int
    vacancies: List[RankedVacancyItem]


class RankedVolunteerItem(BaseModel):
    volunteer_id: str
    interests: List[str] = []
    skills: List[str] = []
    score: MatchScoreModel


class RankedVolunteersResponse(BaseModel):
    success: bool = True
    vacancy_id: str
    count: int
    volunteers: List[RankedVolunteerItem]


class SwipeResponse(BaseModel):
    """Outcome of a swipe."""
    success: bool = True
    swipe_id: str
    direction: str
    matched: bool = False
    match_id: Optional[str] = None
    match_status: Optional[str] = None
    conversation_id: Optional[str] = None
    today_count: int
    daily_limit: Optional[int] = None
    streak_days: Optional[int] = None


class SwipeCountResponse(BaseModel):
    success: bool = True
    today_count: int
    daily_limit: int
    remaining: Optional[int] = None


class MatchStatusResponse(BaseModel):
    success: bool = True
    match_id: str
    status: str
    started_at: Optional[str] = None
    conversation_id: Optional[str] = None


class ScoringWeightsResponse(BaseModel):
    """Scoring weights currently in effect."""
    motivation: float
    distance: float
    skill: float
    freshness: float
    freshness_window_days: int
    small_org_threshold: int
    large_org_threshold: int


class EmbeddingCoverageResponse(BaseModel):
    success: bool = True
    enabled: bool
    coverage: Dict[str, Dict[str, int]]


class EmbeddingBackfillResponse(BaseModel):
    success: bool = True
    volunteers: int
    vacancies: int
    errors: List[str] = []
