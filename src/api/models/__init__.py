"""
API models (Pydantic DTOs) for the case-lifecycle engine.

This module contains all Pydantic request/response models
used by API endpoints.
"""

from src.api.models.common import DateTimeWithZ, ProblemDetail
from src.api.models.health import HealthResponse

__all__: list[str] = ["DateTimeWithZ", "HealthResponse", "ProblemDetail"]
