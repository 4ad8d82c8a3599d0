import logging
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert

from database.models import AppSettings
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

SCORING_WEIGHTS_KEY = 'scoring_weights'


class SettingsRepository(BaseRepository):
    def get_value(self, key: str) -> Optional[Any]:
        return self._one(select(AppSettings.value).where(AppSettings.key == key))

    def set_value(self, key: str, value: Any) -> None:
        stmt = insert(AppSettings).values(key=key, value=value).on_conflict_do_update(
            index_elements=['key'],
            set_={'value': value}
        )
        self.db.execute(stmt)


class DatabaseWeightsBackend:
    """WeightsBackend that keeps the scoring weights in app_settings.

    Each call opens its own short transaction so the weights cache can be
    shared across requests.
    """

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def load(self) -> Optional[Dict[str, Any]]:
        session = self.session_factory()
        try:
            return SettingsRepository(session).get_value(SCORING_WEIGHTS_KEY)
        finally:
            session.close()

    def save(self, data: Dict[str, Any]) -> None:
        session = self.session_factory()
        try:
            SettingsRepository(session).set_value(SCORING_WEIGHTS_KEY, data)
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
