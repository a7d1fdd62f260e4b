"""Authorization adapters."""

from src.infrastructure.adapters.auth.role_capability_checker import (
    RoleCapabilityChecker,
)

__all__: list[str] = ["RoleCapabilityChecker"]
