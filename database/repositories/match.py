import logging
from datetime import datetime
from typing import Any, List, Optional, Tuple

from sqlalchemy import select, delete
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import joinedload

from database.models import Match, Conversation, Message, Vacancy, Organisation
from database.models.match import PENDING, ACCEPTED, REJECTED, COMPLETED
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

RESOLVED_STATUSES = (ACCEPTED, REJECTED, COMPLETED)


class MatchRepository(BaseRepository):
    def get_by_id(self, match_id: Any, for_update: bool = False) -> Optional[Match]:
        return self._one(select(Match).where(Match.id == match_id), for_update)

    def get_with_parties(self, match_id: Any) -> Optional[Match]:
        """Load a match with volunteer, vacancy and organisation for notifications."""
        stmt = (
            select(Match)
            .options(
                joinedload(Match.volunteer),
                joinedload(Match.vacancy).joinedload(Vacancy.organisation),
                joinedload(Match.conversation),
            )
            .where(Match.id == match_id)
        )
        return self.db.execute(stmt).unique().scalar_one_or_none()

    def get_by_pair(self, volunteer_id: Any, vacancy_id: Any, for_update: bool = False) -> Optional[Match]:
        stmt = select(Match).where(
            Match.volunteer_id == volunteer_id,
            Match.vacancy_id == vacancy_id
        )
        return self._one(stmt, for_update)

    def create_pending(self, volunteer_id: Any, vacancy_id: Any) -> Tuple[Match, bool]:
        """
        Insert a PENDING match for the pair unless one exists.

        Returns:
            (match, created) with the row locked for the rest of the transaction
        """
        stmt = insert(Match).values(
            volunteer_id=volunteer_id,
            vacancy_id=vacancy_id,
            status=PENDING
        ).on_conflict_do_nothing(
            constraint='uq_match_pair'
        ).returning(Match.id)
        inserted_id = self.db.execute(stmt).scalar()

        match = self.get_by_pair(volunteer_id, vacancy_id, for_update=True)
        return match, inserted_id is not None

    def delete_pending(self, volunteer_id: Any, vacancy_id: Any) -> int:
        stmt = delete(Match).where(
            Match.volunteer_id == volunteer_id,
            Match.vacancy_id == vacancy_id,
            Match.status == PENDING
        )
        return self.db.execute(stmt).rowcount or 0

    def create_conversation(self, match_id: Any) -> Conversation:
        stmt = insert(Conversation).values(match_id=match_id).on_conflict_do_nothing(
            index_elements=['match_id']
        )
        self.db.execute(stmt)
        return self.db.execute(
            select(Conversation).where(Conversation.match_id == match_id)
        ).scalar_one()

    def add_system_message(self, conversation_id: Any, content: str) -> Message:
        message = Message(conversation_id=conversation_id, type='SYSTEM', content=content)
        self.db.add(message)
        self.db.flush()
        return message

    def response_times_for_organisation(self, organisation_id: Any) -> List[Tuple[datetime, datetime]]:
        """(created_at, started_at) for resolved matches on the organisation's vacancies."""
        stmt = (
            select(Match.created_at, Match.started_at)
            .join(Vacancy, Match.vacancy_id == Vacancy.id)
            .where(
                Vacancy.organisation_id == organisation_id,
                Match.status.in_(RESOLVED_STATUSES),
                Match.started_at.isnot(None)
            )
        )
        return [(created, started) for created, started in self.db.execute(stmt).all()]

    def update_organisation_sla(
        self,
        organisation_id: Any,
        avg_response_hours: float,
        sla_score: int
    ) -> None:
        organisation = self.db.get(Organisation, organisation_id)
        if organisation is None:
            logger.warning(f"Organisation {organisation_id} vanished before SLA update")
            return
        organisation.avg_response_hours = avg_response_hours
        organisation.sla_score = sla_score
