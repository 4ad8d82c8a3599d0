import logging
from sqlalchemy import text
from tenacity import retry, stop_after_attempt, wait_fixed

from core.config_loader import get_config
from database.database import engine, create_all, db_session_scope
from database.repositories.settings import SettingsRepository, SCORING_WEIGHTS_KEY

logger = logging.getLogger(__name__)


def seed_scoring_weights(session, weights: dict) -> bool:
    """Store the configured weights unless an admin has already set some."""
    repo = SettingsRepository(session)
    if repo.get_value(SCORING_WEIGHTS_KEY) is not None:
        return False
    repo.set_value(SCORING_WEIGHTS_KEY, weights)
    return True


@retry(stop=stop_after_attempt(5), wait=wait_fixed(2))
def init_db():
    logger.info("Initializing database...")
    try:
        # pgvector must exist before the embedding columns are created
        with engine.connect() as connection:
            connection.execute(text("CREATE EXTENSION IF NOT EXISTS vector;"))
            connection.commit()
            logger.info("Checked/Created 'vector' extension.")

        create_all()
        logger.info("Tables created or verified.")

        with db_session_scope() as session:
            if seed_scoring_weights(session, get_config().matching.weights.model_dump()):
                logger.info("Seeded scoring weights from config.")

    except Exception as e:
        logger.error(f"Error initializing DB: {e}")
        raise


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
