"""Configuration module for the case-lifecycle engine.

Available Configurations:
- SequenceAllocationConfig: Retry budget for sequence number collisions
- CaseStoreConfig: Store backend selection and database settings
"""

from src.config.case_config import (
    DEFAULT_SEQUENCE_ALLOCATION_CONFIG,
    TEST_SEQUENCE_ALLOCATION_CONFIG,
    CaseStoreConfig,
    SequenceAllocationConfig,
    StoreBackend,
    get_environment,
)

__all__ = [
    "CaseStoreConfig",
    "DEFAULT_SEQUENCE_ALLOCATION_CONFIG",
    "SequenceAllocationConfig",
    "StoreBackend",
    "TEST_SEQUENCE_ALLOCATION_CONFIG",
    "get_environment",
]
