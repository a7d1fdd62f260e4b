"""API dependencies for dependency injection.

Service singletons live in ``src.bootstrap.case_store``; routes depend on
these getters so tests can swap the store with ``set_case_store``.
"""

from src.api.auth.actor_auth import get_actor, require_capability
from src.bootstrap.case_store import (
    get_capability_checker,
    get_case_store,
    get_decision_publication_ledger,
    get_notification_workflow_service,
    get_protocol_resource_converter,
    get_session_lifecycle_service,
)

__all__: list[str] = [
    "get_actor",
    "get_capability_checker",
    "get_case_store",
    "get_decision_publication_ledger",
    "get_notification_workflow_service",
    "get_protocol_resource_converter",
    "get_session_lifecycle_service",
    "require_capability",
]
