import logging
from datetime import date
from typing import Any, Iterable, List, Optional, Tuple

from sqlalchemy import select

from database.models import Volunteer
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class VolunteerRepository(BaseRepository):
    def get_by_id(self, volunteer_id: Any) -> Optional[Volunteer]:
        return self.db.get(Volunteer, volunteer_id)

    def get_for_update(self, volunteer_id: Any) -> Optional[Volunteer]:
        return self._one(select(Volunteer).where(Volunteer.id == volunteer_id), for_update=True)

    def find_recent(
        self,
        limit: int,
        exclude_ids: Iterable[Any] = ()
    ) -> List[Volunteer]:
        stmt = select(Volunteer).where(Volunteer.status == 'approved')
        stmt = self._exclude(stmt, Volunteer.id, exclude_ids)
        stmt = stmt.order_by(Volunteer.created_at.desc()).limit(limit)
        return self.db.execute(stmt).scalars().all()

    def find_similar(
        self,
        query_embedding: List[float],
        limit: int,
        exclude_ids: Iterable[Any] = ()
    ) -> List[Tuple[Volunteer, float]]:
        distance = Volunteer.embedding.cosine_distance(query_embedding).label('distance')
        stmt = select(Volunteer, distance).where(
            Volunteer.status == 'approved',
            Volunteer.embedding.isnot(None)
        )
        stmt = self._exclude(stmt, Volunteer.id, exclude_ids)
        stmt = stmt.order_by('distance').limit(limit)
        return [(row[0], float(row._mapping['distance'])) for row in self.db.execute(stmt).all()]

    def touch_streak(self, volunteer: Volunteer, today: date) -> int:
        """
        Update the activity streak for a swipe made on `today` (local date).

        Same day keeps the streak, the next day extends it, any gap resets to 1.
        """
        last = volunteer.last_active_date
        if last is None:
            streak = 1
        else:
            gap = (today - last).days
            if gap <= 0:
                streak = volunteer.streak_days or 1
            elif gap == 1:
                streak = (volunteer.streak_days or 0) + 1
            else:
                streak = 1

        volunteer.streak_days = streak
        volunteer.last_active_date = today
        return streak
