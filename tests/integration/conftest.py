"""
Integration test configuration with testcontainers.

Provides a session-scoped PostgreSQL 16 container and, per test, a
``PostgresCaseStore`` on a freshly migrated, empty schema.

Usage:
    @pytest.mark.integration
    async def test_example(pg_store: PostgresCaseStore) -> None:
        async with pg_store.transaction() as tx:
            ...

Note: Docker must be running; without it these tests are skipped.
"""

from collections.abc import AsyncGenerator, Generator

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from testcontainers.postgres import PostgresContainer

from src.bootstrap.database import to_async_url
from src.infrastructure.adapters.persistence import PostgresCaseStore
from tests.integration.sql_helpers import CASE_TABLES, apply_migrations


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """Session-scoped PostgreSQL 16 container, started once per run."""
    container = PostgresContainer("postgres:16-alpine", driver=None)
    try:
        container.start()
    except Exception as exc:  # docker.errors.DockerException and friends
        pytest.skip(f"Docker is not available: {exc}")
    yield container
    container.stop()


@pytest.fixture(scope="session")
def postgres_async_url(postgres_container: PostgresContainer) -> str:
    """asyncpg URL of the container."""
    return to_async_url(postgres_container.get_connection_url())


@pytest.fixture
async def pg_engine(postgres_async_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Engine on a migrated schema; every case table is emptied afterwards."""
    engine = create_async_engine(postgres_async_url, echo=False)
    await apply_migrations(engine)

    yield engine

    async with engine.begin() as conn:
        await conn.execute(text(f"TRUNCATE {', '.join(CASE_TABLES)} CASCADE"))
    await engine.dispose()


@pytest.fixture
def pg_store(pg_engine: AsyncEngine) -> PostgresCaseStore:
    return PostgresCaseStore(
        async_sessionmaker(bind=pg_engine, class_=AsyncSession, expire_on_commit=False)
    )
