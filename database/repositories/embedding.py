from typing import Dict, List

from sqlalchemy import select, func

from database.models import Volunteer, Vacancy
from database.repositories.base import BaseRepository


class EmbeddingRepository(BaseRepository):
    def coverage(self) -> Dict[str, Dict[str, int]]:
        """Total and embedded row counts for volunteers and vacancies."""
        stats = {}
        for name, model in (('volunteers', Volunteer), ('vacancies', Vacancy)):
            total = self.db.execute(select(func.count(model.id))).scalar() or 0
            embedded = self.db.execute(
                select(func.count(model.id)).where(model.embedding.isnot(None))
            ).scalar() or 0
            stats[name] = {'total': int(total), 'embedded': int(embedded)}
        return stats

    def volunteers_missing_embedding(self, limit: int) -> List[Volunteer]:
        stmt = (
            select(Volunteer)
            .where(Volunteer.embedding.is_(None))
            .order_by(Volunteer.created_at)
            .limit(limit)
        )
        return self.db.execute(stmt).scalars().all()

    def vacancies_missing_embedding(self, limit: int) -> List[Vacancy]:
        stmt = (
            select(Vacancy)
            .where(Vacancy.embedding.is_(None))
            .order_by(Vacancy.created_at)
            .limit(limit)
        )
        return self.db.execute(stmt).scalars().all()
