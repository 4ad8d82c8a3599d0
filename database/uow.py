import contextlib
import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from sqlalchemy.orm import Session

from database.repositories import (
    VolunteerRepository,
    VacancyRepository,
    SwipeRepository,
    MatchRepository,
    SettingsRepository,
    EmbeddingRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    """Repositories sharing one Session, and therefore one transaction."""
    session: Session
    volunteers: VolunteerRepository
    vacancies: VacancyRepository
    swipes: SwipeRepository
    matches: MatchRepository
    settings: SettingsRepository
    embeddings: EmbeddingRepository

    @classmethod
    def for_session(cls, session: Session) -> "Repositories":
        return cls(
            session=session,
            volunteers=VolunteerRepository(session),
            vacancies=VacancyRepository(session),
            swipes=SwipeRepository(session),
            matches=MatchRepository(session),
            settings=SettingsRepository(session),
            embeddings=EmbeddingRepository(session),
        )


def _default_session_factory() -> Session:
    from database.database import SessionLocal
    return SessionLocal()


@contextlib.contextmanager
def swipe_uow(session_factory: Optional[Callable[[], Session]] = None) -> Iterator[Repositories]:
    """Per-unit-of-work transaction scope.

    Yields a Repositories bundle bound to a fresh Session. Commits on
    success, rolls back on exception, always closes. A swipe, the match it
    creates or advances, and the conversation opened on acceptance are all
    written inside one of these scopes.

    Usage:
        with swipe_uow() as repos:
            repos.swipes.upsert(...)
            repos.matches.create_pending(...)
        # commit happens automatically on successful exit
    """
    session = (session_factory or _default_session_factory)()
    try:
        yield Repositories.for_session(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
