#!/usr/bin/env python3
"""
Swipe Service - Records swipes and derives matches from them.

Volunteer side:
- LIKE / SUPER_LIKE upserts a PENDING match for the pair
- if the organisation already liked the volunteer for this vacancy the
  match is accepted straight away (mutual interest)

Organisation side:
- LIKE on a PENDING match accepts it, DISLIKE rejects it
- without a pending match the swipe is stored as interest only

Both sides lock the volunteer row so concurrent swipes on the same pair
serialise; organisation swipes take the organisation row lock before it.
Undo takes the same actor lock before reading the latest swipe. Every
write for one swipe shares one transaction.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Callable, ContextManager, Dict, Optional, Tuple
from zoneinfo import ZoneInfo

from core.config_loader import SwipeConfig
from core.exceptions import (
    DailySwipeLimitExceeded,
    InvalidSwipeException,
    MatchAccessDenied,
    SuperLikeLimitExceeded,
    SwipeUndoNotAllowed,
    VacancyNotFoundException,
    VolunteerNotFoundException,
)
from core.swipes.match_service import apply_transition
from database.models.match import PENDING, ACCEPTED, REJECTED
from database.models.swipe import (
    ACTOR_ORGANISATION,
    ACTOR_VOLUNTEER,
    DIRECTIONS,
    POSITIVE_DIRECTIONS,
    SUPER_LIKE,
)
from database.uow import swipe_uow

logger = logging.getLogger(__name__)

ACTOR_TYPES = (ACTOR_VOLUNTEER, ACTOR_ORGANISATION)


@dataclass
class SwipeResult:
    """Outcome of one swipe, as returned to the client."""
    swipe_id: Any
    direction: str
    matched: bool = False  # mutual interest, match ACCEPTED
    match_id: Optional[Any] = None
    match_status: Optional[str] = None
    conversation_id: Optional[Any] = None
    today_count: int = 0
    streak_days: Optional[int] = None


class SwipeService:
    def __init__(
        self,
        config: Optional[SwipeConfig] = None,
        uow_factory: Callable[[], ContextManager[Any]] = swipe_uow,
        side_effects: Optional[Any] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)
    ):
        self.config = config or SwipeConfig()
        self.uow_factory = uow_factory
        self.side_effects = side_effects
        self.clock = clock
        self.tz = ZoneInfo(self.config.timezone)

    def _today(self) -> Tuple[datetime, date, datetime]:
        """(now, local date, local midnight as an aware datetime)."""
        now = self.clock()
        local_now = now.astimezone(self.tz)
        midnight = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
        return now, local_now.date(), midnight

    def _validate(self, direction: str, reason: Optional[str], require_reason: bool) -> None:
        if direction not in DIRECTIONS:
            raise InvalidSwipeException(f"Invalid direction '{direction}'")
        if require_reason and direction in POSITIVE_DIRECTIONS and reason not in self.config.match_reasons:
            raise InvalidSwipeException(
                f"A reason is required for a like, one of: {', '.join(self.config.match_reasons)}"
            )

    def record_swipe(
        self,
        volunteer_id: Any,
        vacancy_id: Any,
        direction: str,
        reason: Optional[str] = None,
        score_snapshot: Optional[Dict[str, Any]] = None
    ) -> SwipeResult:
        """
        Record a volunteer's swipe on a vacancy.

        Raises:
            InvalidSwipeException: Bad direction or missing like reason
            DailySwipeLimitExceeded / SuperLikeLimitExceeded: Caps reached
            VolunteerNotFoundException / VacancyNotFoundException
        """
        self._validate(direction, reason, require_reason=True)
        now, local_date, midnight = self._today()
        created_match = False

        with self.uow_factory() as repos:
            volunteer = repos.volunteers.get_for_update(volunteer_id)
            if volunteer is None:
                raise VolunteerNotFoundException(f"Volunteer {volunteer_id} not found")
            vacancy = repos.vacancies.get_by_id(vacancy_id)
            if vacancy is None:
                raise VacancyNotFoundException(f"Vacancy {vacancy_id} not found")

            existing = repos.swipes.get(ACTOR_VOLUNTEER, volunteer_id, vacancy_id)
            if existing is None:
                used = repos.swipes.count_since(ACTOR_VOLUNTEER, volunteer_id, midnight)
                if used >= self.config.daily_limit:
                    raise DailySwipeLimitExceeded(self.config.daily_limit)

            if direction == SUPER_LIKE and (existing is None or existing.direction != SUPER_LIKE):
                used = repos.swipes.count_since(ACTOR_VOLUNTEER, volunteer_id, midnight, direction=SUPER_LIKE)
                if used >= self.config.super_like_daily_limit:
                    raise SuperLikeLimitExceeded(self.config.super_like_daily_limit)

            swipe = repos.swipes.upsert(
                ACTOR_VOLUNTEER, volunteer_id, volunteer_id, vacancy_id,
                direction, reason, score_snapshot
            )
            result = SwipeResult(swipe_id=swipe.id, direction=direction)

            if direction in POSITIVE_DIRECTIONS:
                match, created_match = repos.matches.create_pending(volunteer_id, vacancy_id)
                conversation = None
                if match.status == PENDING:
                    org_swipe = repos.swipes.get(ACTOR_ORGANISATION, volunteer_id, vacancy_id)
                    if org_swipe is not None and org_swipe.direction in POSITIVE_DIRECTIONS:
                        conversation = apply_transition(repos, match, ACCEPTED, now)
                result.match_id = match.id
                result.match_status = match.status
                result.matched = match.status == ACCEPTED
                result.conversation_id = conversation.id if conversation else None

            result.streak_days = repos.volunteers.touch_streak(volunteer, local_date)
            result.today_count = repos.swipes.count_since(ACTOR_VOLUNTEER, volunteer_id, midnight)
            organisation_id = vacancy.organisation_id

        if self.side_effects is not None and result.match_id is not None:
            if result.conversation_id is not None:
                self.side_effects.on_match_accepted(result.match_id, organisation_id)
            elif created_match:
                self.side_effects.on_match_created(result.match_id)

        logger.info(
            f"Volunteer {volunteer_id} swiped {direction} on vacancy {vacancy_id} "
            f"(today: {result.today_count}, match: {result.match_status})"
        )
        return result

    def record_organisation_swipe(
        self,
        organisation_id: Any,
        volunteer_id: Any,
        vacancy_id: Any,
        direction: str
    ) -> SwipeResult:
        """
        Record an organisation's swipe on a volunteer for one of its vacancies.

        Raises:
            MatchAccessDenied: Vacancy belongs to another organisation
        """
        self._validate(direction, None, require_reason=False)
        now, _, midnight = self._today()
        resolved = None

        with self.uow_factory() as repos:
            repos.vacancies.get_organisation_for_update(organisation_id)
            volunteer = repos.volunteers.get_for_update(volunteer_id)
            if volunteer is None:
                raise VolunteerNotFoundException(f"Volunteer {volunteer_id} not found")
            vacancy = repos.vacancies.get_by_id(vacancy_id)
            if vacancy is None:
                raise VacancyNotFoundException(f"Vacancy {vacancy_id} not found")
            if vacancy.organisation_id != organisation_id:
                raise MatchAccessDenied(f"Vacancy {vacancy_id} belongs to another organisation")

            swipe = repos.swipes.upsert(
                ACTOR_ORGANISATION, organisation_id, volunteer_id, vacancy_id, direction
            )
            result = SwipeResult(swipe_id=swipe.id, direction=direction)

            match = repos.matches.get_by_pair(volunteer_id, vacancy_id, for_update=True)
            if match is not None:
                conversation = None
                if match.status == PENDING:
                    resolved = ACCEPTED if direction in POSITIVE_DIRECTIONS else REJECTED
                    conversation = apply_transition(repos, match, resolved, now)
                result.match_id = match.id
                result.match_status = match.status
                result.matched = match.status == ACCEPTED
                result.conversation_id = conversation.id if conversation else None

            result.today_count = repos.swipes.count_since(ACTOR_ORGANISATION, organisation_id, midnight)

        if self.side_effects is not None:
            if resolved == ACCEPTED:
                self.side_effects.on_match_accepted(result.match_id, organisation_id)
            elif resolved == REJECTED:
                self.side_effects.on_match_rejected(result.match_id, organisation_id)

        return result

    def undo_last_swipe(
        self,
        actor_type: str,
        actor_id: Any,
        vacancy_id: Any,
        volunteer_id: Optional[Any] = None
    ) -> int:
        """
        Remove the actor's most recent swipe.

        A PENDING match created by a volunteer's like goes with it; matches
        that already moved on are left alone.

        Returns:
            Today's swipe count after the undo

        Raises:
            SwipeUndoNotAllowed: The swipe named is not the actor's latest
        """
        if actor_type not in ACTOR_TYPES:
            raise InvalidSwipeException(f"Invalid actor type '{actor_type}'")
        _, _, midnight = self._today()

        with self.uow_factory() as repos:
            if actor_type == ACTOR_VOLUNTEER:
                repos.volunteers.get_for_update(actor_id)
            else:
                repos.vacancies.get_organisation_for_update(actor_id)

            latest = repos.swipes.get_latest(actor_type, actor_id)
            if (
                latest is None
                or latest.vacancy_id != vacancy_id
                or (volunteer_id is not None and latest.volunteer_id != volunteer_id)
            ):
                raise SwipeUndoNotAllowed("Only the most recent swipe can be undone")

            if actor_type == ACTOR_ORGANISATION:
                repos.volunteers.get_for_update(latest.volunteer_id)
            if actor_type == ACTOR_VOLUNTEER and latest.direction in POSITIVE_DIRECTIONS:
                removed = repos.matches.delete_pending(latest.volunteer_id, latest.vacancy_id)
                if removed:
                    logger.info(f"Undo removed pending match for {latest.volunteer_id}/{latest.vacancy_id}")

            repos.swipes.delete(latest)
            today = repos.swipes.count_since(actor_type, actor_id, midnight)

        logger.info(f"{actor_type} {actor_id} undid swipe on vacancy {vacancy_id} (today: {today})")
        return today

    def today_count(self, actor_type: str, actor_id: Any) -> int:
        _, _, midnight = self._today()
        with self.uow_factory() as repos:
            return repos.swipes.count_since(actor_type, actor_id, midnight)
