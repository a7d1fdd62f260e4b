"""Case-lifecycle engine configuration.

Environment-driven configuration for sequence allocation and for the case
store backend, following the same frozen-dataclass pattern as the rest of
the configuration package.

Environment Variables (Sequence allocation):
- CASE_SEQUENCE_MAX_RETRIES: Attempts before a number collision surfaces
  as a conflict (default: 5)

Environment Variables (Store):
- CASE_STORE_BACKEND: "memory" or "postgres" (default: memory)
- DATABASE_URL: PostgreSQL connection string (required for postgres)
- SQLALCHEMY_ECHO: Echo SQL statements when "1", "true" or "yes"

Environment Variables (Runtime):
- ENVIRONMENT: "production" or "development" (default: development)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool_env(key: str) -> bool:
    """True when the variable is set to 1, true or yes (case-insensitive)."""
    return os.environ.get(key, "").lower() in ("1", "true", "yes")


class StoreBackend(Enum):
    """Available case store implementations."""

    MEMORY = "memory"
    POSTGRES = "postgres"


@dataclass(frozen=True)
class SequenceAllocationConfig:
    """Configuration for year-scoped sequence allocation.

    Attributes:
        max_retries: How many times a transaction that lost a number to a
            concurrent writer is retried before SequenceConflictError
            reaches the caller. Default: 5.
    """

    max_retries: int = 5

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got {self.max_retries}")

    @classmethod
    def from_environment(cls) -> "SequenceAllocationConfig":
        """Create config from environment variables with defaults.

        Environment Variables:
            CASE_SEQUENCE_MAX_RETRIES: Retry budget (default: 5)

        Returns:
            SequenceAllocationConfig with values from environment or defaults.
        """
        return cls(max_retries=_get_int_env("CASE_SEQUENCE_MAX_RETRIES", 5))


@dataclass(frozen=True)
class CaseStoreConfig:
    """Configuration for the case store backend.

    Attributes:
        backend: Which store implementation to wire.
        database_url: PostgreSQL URL, required for the postgres backend.
        echo_sql: Whether SQLAlchemy echoes statements.
    """

    backend: StoreBackend = StoreBackend.MEMORY
    database_url: str | None = None
    echo_sql: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.backend == StoreBackend.POSTGRES and not self.database_url:
            raise ValueError("database_url is required for the postgres backend")

    @classmethod
    def from_environment(cls) -> "CaseStoreConfig":
        """Create config from environment variables with defaults.

        Raises:
            ValueError: If CASE_STORE_BACKEND names an unknown backend.
        """
        raw_backend = os.environ.get("CASE_STORE_BACKEND", StoreBackend.MEMORY.value)
        try:
            backend = StoreBackend(raw_backend.strip().lower())
        except ValueError:
            allowed = ", ".join(b.value for b in StoreBackend)
            raise ValueError(
                f"Unknown CASE_STORE_BACKEND {raw_backend!r}; expected one of: {allowed}"
            ) from None
        return cls(
            backend=backend,
            database_url=os.environ.get("DATABASE_URL") or None,
            echo_sql=_get_bool_env("SQLALCHEMY_ECHO"),
        )


def get_environment() -> str:
    """Return the runtime environment name (default: development)."""
    return os.environ.get("ENVIRONMENT", "development").strip().lower()


# Default configuration
DEFAULT_SEQUENCE_ALLOCATION_CONFIG = SequenceAllocationConfig()

# Testing config: fail fast on collisions
TEST_SEQUENCE_ALLOCATION_CONFIG = SequenceAllocationConfig(max_retries=2)
