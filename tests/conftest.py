"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import os
import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture(scope="session")
def test_database():
    """
    Session-scoped fixture that automatically manages the test database container.

    Uses testcontainers to start PostgreSQL with pgvector before tests and
    stops it after all tests complete. Uses an external database instead if
    TEST_DATABASE_URL is set.
    """
    from sqlalchemy import create_engine, text

    # If TEST_DATABASE_URL is set, use external database
    external_url = os.environ.get("TEST_DATABASE_URL")
    postgres = None
    if external_url:
        from tests import is_database_available
        if not is_database_available(external_url):
            pytest.skip("External database not available")
        db_url = external_url
    else:
        try:
            from testcontainers.postgres import PostgresContainer

            postgres = PostgresContainer(
                image="pgvector/pgvector:pg16",
                username="testuser",
                password="testpass",
                dbname="volunteermatch_test",
            )
            postgres.start()
            db_url = postgres.get_connection_url()
        except Exception as e:
            pytest.skip(f"Could not start test database container: {e}")

    # pgvector must exist before the embedding columns are created
    from database.models import Base
    engine = create_engine(db_url)
    with engine.connect() as conn:
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        conn.commit()
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    engine.dispose()

    yield db_url

    if postgres is not None:
        postgres.stop()


@pytest.fixture
def db_engine(test_database):
    """Engine bound to the test database; rows are wiped after each test."""
    from sqlalchemy import create_engine
    from database.models import Base

    engine = create_engine(test_database, pool_size=10, max_overflow=10)
    yield engine

    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    from sqlalchemy.orm import sessionmaker
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
