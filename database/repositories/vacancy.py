import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.orm import joinedload

from database.models import Vacancy, Organisation, Swipe
from database.models.swipe import ACTOR_VOLUNTEER
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class VacancyRepository(BaseRepository):
    def get_by_id(self, vacancy_id: Any) -> Optional[Vacancy]:
        stmt = (
            select(Vacancy)
            .options(joinedload(Vacancy.organisation))
            .where(Vacancy.id == vacancy_id)
        )
        return self._one(stmt)

    def get_organisation_for_update(self, organisation_id: Any) -> Optional[Organisation]:
        """Row lock serialising swipes and undos made by one organisation."""
        return self._one(select(Organisation).where(Organisation.id == organisation_id), for_update=True)

    def _open_vacancies(self, exclude_ids: Iterable[Any]):
        stmt = (
            select(Vacancy)
            .join(Organisation, Vacancy.organisation_id == Organisation.id)
            .where(
                Vacancy.status == 'active',
                Organisation.status == 'approved'
            )
        )
        return self._exclude(stmt, Vacancy.id, exclude_ids)

    def find_recent(
        self,
        limit: int,
        exclude_ids: Iterable[Any] = ()
    ) -> List[Vacancy]:
        stmt = self._open_vacancies(exclude_ids).order_by(Vacancy.created_at.desc()).limit(limit)
        return self.db.execute(stmt).scalars().all()

    def find_similar(
        self,
        query_embedding: List[float],
        limit: int,
        exclude_ids: Iterable[Any] = ()
    ) -> List[Tuple[Vacancy, float]]:
        distance = Vacancy.embedding.cosine_distance(query_embedding).label('distance')
        stmt = (
            self._open_vacancies(exclude_ids)
            .add_columns(distance)
            .where(Vacancy.embedding.isnot(None))
            .order_by('distance')
            .limit(limit)
        )
        return [(row[0], float(row._mapping['distance'])) for row in self.db.execute(stmt).all()]

    def organisation_swipe_counts(self, organisation_ids: Iterable[Any]) -> Dict[Any, int]:
        """Volunteer swipes received across each organisation's vacancies."""
        organisation_ids = list(set(organisation_ids))
        if not organisation_ids:
            return {}

        stmt = (
            select(Vacancy.organisation_id, func.count(Swipe.id))
            .join(Swipe, Swipe.vacancy_id == Vacancy.id)
            .where(
                Vacancy.organisation_id.in_(organisation_ids),
                Swipe.actor_type == ACTOR_VOLUNTEER
            )
            .group_by(Vacancy.organisation_id)
        )
        counts = {org_id: int(count) for org_id, count in self.db.execute(stmt).all()}
        return {org_id: counts.get(org_id, 0) for org_id in organisation_ids}
