"""Database session factory bootstrap (PostgreSQL via SQLAlchemy).

Used only when ``CASE_STORE_BACKEND=postgres``.

Usage:
    from src.bootstrap.database import get_session_factory

    session_factory = get_session_factory(CaseStoreConfig.from_environment())
    async with session_factory() as session:
        ...
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from structlog import get_logger

from src.config.case_config import CaseStoreConfig

logger = get_logger()

_session_factory: async_sessionmaker[AsyncSession] | None = None
_engine: AsyncEngine | None = None


def to_async_url(url: str) -> str:
    """Convert a PostgreSQL URL to the asyncpg driver form.

    Args:
        url: ``postgresql://``, ``postgres://`` or already
            ``postgresql+asyncpg://``.

    Returns:
        postgresql+asyncpg:// URL string.
    """
    if url.startswith("postgresql+asyncpg://"):
        return url
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    return f"postgresql+asyncpg://{url}"


def mask_password(url: str) -> str:
    """Hide the password of a connection URL for logging."""
    if "@" not in url:
        return url
    credentials, host = url.split("@", 1)
    if ":" not in credentials.split("//", 1)[-1]:
        return url
    user_part = credentials.rsplit(":", 1)[0]
    return f"{user_part}:***@{host}"


def get_session_factory(config: CaseStoreConfig) -> async_sessionmaker[AsyncSession]:
    """Get the SQLAlchemy async session factory.

    Creates a singleton engine and factory on first call.

    Raises:
        ValueError: If the config carries no database URL.
    """
    global _session_factory, _engine

    if _session_factory is None:
        if not config.database_url:
            raise ValueError("DATABASE_URL is required for the postgres case store")
        log = logger.bind(component="database_bootstrap")
        url = to_async_url(config.database_url)
        log.info("creating_database_engine", url=mask_password(url))

        _engine = create_async_engine(
            url,
            echo=config.echo_sql,
            pool_pre_ping=True,
        )
        _session_factory = async_sessionmaker(
            bind=_engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        log.info("database_session_factory_created")

    return _session_factory


def reset_database_bootstrap() -> None:
    """Reset database singleton for testing."""
    global _session_factory, _engine
    _session_factory = None
    _engine = None


async def close_database_engine() -> None:
    """Dispose of the engine on shutdown."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        logger.info("database_engine_closed")
    _engine = None
    _session_factory = None
