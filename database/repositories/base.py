from typing import Any, Iterable, Optional

from sqlalchemy import Select
from sqlalchemy.orm import Session


class BaseRepository:
    def __init__(self, db: Session):
        self.db = db

    def _one(self, stmt: Select, for_update: bool = False) -> Optional[Any]:
        """Single row or None; for_update takes a row lock until the unit of work ends."""
        if for_update:
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    @staticmethod
    def _exclude(stmt: Select, column: Any, ids: Iterable[Any]) -> Select:
        ids = list(ids)
        if ids:
            stmt = stmt.where(column.notin_(ids))
        return stmt
