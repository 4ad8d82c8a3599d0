import contextlib
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from core.config_loader import get_config
from database.models import Base

_db_config = get_config().database
DATABASE_URL = _db_config.url

# create_engine is lazy; no connection is made until first use
engine = create_engine(
    DATABASE_URL,
    pool_size=_db_config.pool_size,
    max_overflow=_db_config.max_overflow,
    pool_pre_ping=True,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextlib.contextmanager
def db_session_scope():
    """Provide a transactional scope around a series of operations."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_all() -> None:
    """Create every table on the configured engine."""
    Base.metadata.create_all(bind=engine)
