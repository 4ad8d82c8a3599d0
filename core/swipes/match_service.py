#!/usr/bin/env python3
"""
Match Service - Organisation-driven match status changes.

Allowed transitions:
- PENDING  -> ACCEPTED (stamps started_at, opens a conversation)
- PENDING  -> REJECTED
- ACCEPTED -> COMPLETED

Everything else, including repeating the current status, raises
InvalidMatchTransition. The conversation is written in the same unit of
work as the ACCEPTED status; follow-up work runs after commit.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, ContextManager, Optional

from core.exceptions import (
    InvalidMatchTransition,
    MatchAccessDenied,
    MatchNotFoundException,
)
from database.models import Conversation, Match
from database.models.match import ALLOWED_TRANSITIONS, ACCEPTED, REJECTED
from database.uow import swipe_uow

logger = logging.getLogger(__name__)


def apply_transition(repos: Any, match: Match, status: str, now: datetime) -> Optional[Conversation]:
    """
    Move a locked match row to `status` inside the caller's unit of work.

    Returns:
        The conversation when the match became ACCEPTED, else None

    Raises:
        InvalidMatchTransition: If the transition is not allowed
    """
    if status not in ALLOWED_TRANSITIONS.get(match.status, ()):
        raise InvalidMatchTransition(match.status, status)

    previous = match.status
    match.status = status

    conversation = None
    if status == ACCEPTED:
        if match.started_at is None:
            match.started_at = now
        match.resolved_at = now
        repos.session.flush()
        conversation = repos.matches.create_conversation(match.id)
    elif status == REJECTED:
        match.resolved_at = now

    logger.info(f"Match {match.id}: {previous} -> {status}")
    return conversation


@dataclass
class MatchTransitionResult:
    match_id: Any
    status: str
    started_at: Optional[datetime] = None
    conversation_id: Optional[Any] = None


class MatchService:
    """Explicit organisation actions on a match."""

    def __init__(
        self,
        uow_factory: Callable[[], ContextManager[Any]] = swipe_uow,
        side_effects: Optional[Any] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)
    ):
        self.uow_factory = uow_factory
        self.side_effects = side_effects
        self.clock = clock

    def transition(self, match_id: Any, organisation_id: Any, status: str) -> MatchTransitionResult:
        """
        Change a match's status on behalf of the owning organisation.

        Raises:
            MatchNotFoundException: Unknown match
            MatchAccessDenied: Match belongs to another organisation's vacancy
            InvalidMatchTransition: Transition not allowed from the current status
        """
        with self.uow_factory() as repos:
            match = repos.matches.get_by_id(match_id, for_update=True)
            if match is None:
                raise MatchNotFoundException(f"Match {match_id} not found")

            vacancy = repos.vacancies.get_by_id(match.vacancy_id)
            if vacancy is None or vacancy.organisation_id != organisation_id:
                raise MatchAccessDenied(f"Match {match_id} belongs to another organisation")

            conversation = apply_transition(repos, match, status, self.clock())
            result = MatchTransitionResult(
                match_id=match.id,
                status=match.status,
                started_at=match.started_at,
                conversation_id=conversation.id if conversation else None,
            )

        if self.side_effects is not None:
            if status == ACCEPTED:
                self.side_effects.on_match_accepted(result.match_id, organisation_id)
            elif status == REJECTED:
                self.side_effects.on_match_rejected(result.match_id, organisation_id)

        return result
