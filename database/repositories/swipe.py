import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete, func
from sqlalchemy.dialects.postgresql import insert

from database.models import Swipe
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class SwipeRepository(BaseRepository):
    def get(self, actor_type: str, volunteer_id: Any, vacancy_id: Any) -> Optional[Swipe]:
        stmt = select(Swipe).where(
            Swipe.actor_type == actor_type,
            Swipe.volunteer_id == volunteer_id,
            Swipe.vacancy_id == vacancy_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def upsert(
        self,
        actor_type: str,
        actor_id: Any,
        volunteer_id: Any,
        vacancy_id: Any,
        direction: str,
        reason: Optional[str] = None,
        score_snapshot: Optional[Dict[str, Any]] = None
    ) -> Swipe:
        """
        Insert the swipe, or update direction/reason/snapshot when the pair
        was already swiped by this actor type. created_at is kept so a
        re-swipe does not move the row into today's count; swiped_at is
        bumped so the row becomes the actor's latest swipe.
        """
        stmt = insert(Swipe).values(
            actor_type=actor_type,
            actor_id=actor_id,
            volunteer_id=volunteer_id,
            vacancy_id=vacancy_id,
            direction=direction,
            reason=reason,
            score_snapshot=score_snapshot
        ).on_conflict_do_update(
            constraint='uq_swipe_actor_pair',
            set_={
                'direction': direction,
                'reason': reason,
                'score_snapshot': score_snapshot,
                'swiped_at': func.clock_timestamp()
            }
        )
        self.db.execute(stmt)
        refreshed = select(Swipe).where(
            Swipe.actor_type == actor_type,
            Swipe.volunteer_id == volunteer_id,
            Swipe.vacancy_id == vacancy_id
        ).execution_options(populate_existing=True)
        return self.db.execute(refreshed).scalar_one()

    def count_since(
        self,
        actor_type: str,
        actor_id: Any,
        since: datetime,
        direction: Optional[str] = None
    ) -> int:
        stmt = select(func.count(Swipe.id)).where(
            Swipe.actor_type == actor_type,
            Swipe.actor_id == actor_id,
            Swipe.created_at >= since
        )
        if direction is not None:
            stmt = stmt.where(Swipe.direction == direction)
        return int(self.db.execute(stmt).scalar() or 0)

    def get_latest(self, actor_type: str, actor_id: Any) -> Optional[Swipe]:
        stmt = (
            select(Swipe)
            .where(Swipe.actor_type == actor_type, Swipe.actor_id == actor_id)
            .order_by(Swipe.swiped_at.desc(), Swipe.created_at.desc(), Swipe.id.desc())
            .limit(1)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def delete(self, swipe: Swipe) -> None:
        self.db.execute(delete(Swipe).where(Swipe.id == swipe.id))

    def swiped_vacancy_ids(self, actor_type: str, volunteer_id: Any) -> List[Any]:
        stmt = select(Swipe.vacancy_id).where(
            Swipe.actor_type == actor_type,
            Swipe.volunteer_id == volunteer_id
        )
        return list(self.db.execute(stmt).scalars().all())

    def swiped_volunteer_ids(self, actor_type: str, vacancy_id: Any) -> List[Any]:
        stmt = select(Swipe.volunteer_id).where(
            Swipe.actor_type == actor_type,
            Swipe.vacancy_id == vacancy_id
        )
        return list(self.db.execute(stmt).scalars().all())
