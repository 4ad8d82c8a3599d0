#!/usr/bin/env python3
"""
Swipe endpoints - record, undo and count swipes for both sides.
"""

import uuid
import logging
from typing import Literal
from fastapi import APIRouter, Depends, Query

from core.app_context import AppContext
from core.swipes.swipe_service import SwipeResult
from database.models.swipe import ACTOR_VOLUNTEER
from ..dependencies import get_app_context
from ..models.requests import SwipeRequest, OrganisationSwipeRequest, UndoSwipeRequest
from ..models.responses import SwipeResponse, SwipeCountResponse
from ..utils import optional_str

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["swipes"])


def _to_response(result: SwipeResult, daily_limit: int = None) -> SwipeResponse:
    return SwipeResponse(
        swipe_id=str(result.swipe_id),
        direction=result.direction,
        matched=result.matched,
        match_id=optional_str(result.match_id),
        match_status=result.match_status,
        conversation_id=optional_str(result.conversation_id),
        today_count=result.today_count,
        daily_limit=daily_limit,
        streak_days=result.streak_days
    )


@router.post("/swipes", response_model=SwipeResponse)
def create_swipe(
    request: SwipeRequest,
    ctx: AppContext = Depends(get_app_context)
):
    """
    Record a volunteer's swipe on a vacancy.

    A like creates a pending match, or an accepted one when the organisation
    already liked this volunteer. Returns 429 once the daily cap is used up.
    """
    result = ctx.swipe_service.record_swipe(
        volunteer_id=request.volunteer_id,
        vacancy_id=request.vacancy_id,
        direction=request.direction.upper(),
        reason=request.reason,
        score_snapshot=request.score_snapshot
    )
    return _to_response(result, ctx.config.swipes.daily_limit)


@router.delete("/swipes")
def undo_swipe(
    request: UndoSwipeRequest,
    ctx: AppContext = Depends(get_app_context)
):
    """
    Undo the actor's most recent swipe.

    Only the latest swipe can be undone; anything else returns 409.
    """
    today_count = ctx.swipe_service.undo_last_swipe(
        actor_type=request.actor_type,
        actor_id=request.actor_id,
        vacancy_id=request.vacancy_id,
        volunteer_id=request.volunteer_id
    )
    return {"success": True, "today_count": today_count}


@router.get("/swipes/today", response_model=SwipeCountResponse)
def get_today_count(
    actor_id: uuid.UUID,
    actor_type: Literal["volunteer", "organisation"] = Query(default=ACTOR_VOLUNTEER),
    ctx: AppContext = Depends(get_app_context)
):
    """Swipes used since local midnight. Only volunteers have a daily cap."""
    count = ctx.swipe_service.today_count(actor_type, actor_id)
    limit = ctx.config.swipes.daily_limit
    return SwipeCountResponse(
        today_count=count,
        daily_limit=limit,
        remaining=max(0, limit - count) if actor_type == ACTOR_VOLUNTEER else None
    )


@router.post("/organisations/{organisation_id}/swipes", response_model=SwipeResponse)
def create_organisation_swipe(
    organisation_id: uuid.UUID,
    request: OrganisationSwipeRequest,
    ctx: AppContext = Depends(get_app_context)
):
    """
    Record an organisation's swipe on a volunteer.

    Resolves a pending match for the pair: like accepts, dislike rejects.
    """
    result = ctx.swipe_service.record_organisation_swipe(
        organisation_id=organisation_id,
        volunteer_id=request.volunteer_id,
        vacancy_id=request.vacancy_id,
        direction=request.direction.upper()
    )
    logger.info(f"Organisation {organisation_id} swiped {result.direction} on volunteer {request.volunteer_id}")
    return _to_response(result)
