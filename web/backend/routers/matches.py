#!/usr/bin/env python3
"""
Match endpoints - organisation actions on a match.
"""

import uuid
from fastapi import APIRouter, Depends

from core.app_context import AppContext
from ..dependencies import get_app_context
from ..models.requests import MatchStatusUpdate
from ..models.responses import MatchStatusResponse
from ..utils import optional_str, safe_datetime_iso

router = APIRouter(prefix="/api/matches", tags=["matches"])


@router.patch("/{match_id}", response_model=MatchStatusResponse)
def update_match_status(
    match_id: uuid.UUID,
    update: MatchStatusUpdate,
    ctx: AppContext = Depends(get_app_context)
):
    """
    Move a match to a new status on behalf of the owning organisation.

    Allowed: PENDING -> ACCEPTED, PENDING -> REJECTED, ACCEPTED -> COMPLETED.
    Other transitions return 409; another organisation's match returns 403.
    """
    result = ctx.match_service.transition(
        match_id=match_id,
        organisation_id=update.organisation_id,
        status=update.status.upper()
    )
    return MatchStatusResponse(
        match_id=str(result.match_id),
        status=result.status,
        started_at=safe_datetime_iso(result.started_at),
        conversation_id=optional_str(result.conversation_id)
    )
