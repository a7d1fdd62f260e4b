"""PostgreSQL persistence for the case store (SQLAlchemy async + asyncpg)."""

from src.infrastructure.adapters.persistence.postgres_case_store import (
    PostgresCaseStore,
)

__all__: list[str] = ["PostgresCaseStore"]
