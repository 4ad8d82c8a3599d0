#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

import uuid
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal


class SwipeRequest(BaseModel):
    """A volunteer's swipe on a vacancy."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "volunteer_id": "550e8400-e29b-41d4-a716-446655440000",
                "vacancy_id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                "direction": "LIKE",
                "reason": "cause",
                "score_snapshot": {"total": 82.5}
            }
        }
    )

    volunteer_id: uuid.UUID
    vacancy_id: uuid.UUID
    direction: str = Field(..., description="LIKE, DISLIKE or SUPER_LIKE (case-insensitive)")
    reason: Optional[str] = Field(None, description="Required for like and super_like")
    score_snapshot: Optional[dict] = Field(None, description="MatchScore shown when swiping")


class OrganisationSwipeRequest(BaseModel):
    """An organisation's swipe on a volunteer for one of its vacancies."""
    volunteer_id: uuid.UUID
    vacancy_id: uuid.UUID
    direction: str = Field(..., description="LIKE, DISLIKE or SUPER_LIKE (case-insensitive)")


class UndoSwipeRequest(BaseModel):
    """Undo the actor's most recent swipe."""
    actor_type: Literal["volunteer", "organisation"] = "volunteer"
    actor_id: uuid.UUID
    vacancy_id: uuid.UUID
    volunteer_id: Optional[uuid.UUID] = Field(
        None,
        description="Required to disambiguate organisation undos"
    )


class MatchStatusUpdate(BaseModel):
    """Organisation action on a match."""
    organisation_id: uuid.UUID
    status: str = Field(..., description="ACCEPTED, REJECTED or COMPLETED")


class ScoringWeightsUpdate(BaseModel):
    """Partial update of the scoring weights. Omitted fields keep their value."""
    # Ranges and the sum are checked against the merged result
    motivation: Optional[float] = None
    distance: Optional[float] = None
    skill: Optional[float] = None
    freshness: Optional[float] = None
    freshness_window_days: Optional[int] = None
    small_org_threshold: Optional[int] = None
    large_org_threshold: Optional[int] = None


class EmbeddingBackfillRequest(BaseModel):
    limit: int = Field(default=50, ge=1, le=500, description="Rows per entity type")
