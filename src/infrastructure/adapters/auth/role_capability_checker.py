"""Role-based capability checker.

Capability Matrix:
    ADMIN: every action
    EMPLOYEE: every action except REVERT_SESSION, DELETE_DECISION and
        DELETE_NOTIFICATION_LIST
    EXTERNAL: no action
"""

from __future__ import annotations

import structlog

from src.application.ports.capability_checker import (
    Actor,
    ActorRole,
    CapabilityCheckerProtocol,
    CaseAction,
)

logger = structlog.get_logger(__name__)

ADMIN_ONLY_ACTIONS: frozenset[CaseAction] = frozenset(
    {
        CaseAction.REVERT_SESSION,
        CaseAction.DELETE_DECISION,
        CaseAction.DELETE_NOTIFICATION_LIST,
    }
)

ROLE_CAPABILITIES: dict[ActorRole, frozenset[CaseAction]] = {
    ActorRole.ADMIN: frozenset(CaseAction),
    ActorRole.EMPLOYEE: frozenset(CaseAction) - ADMIN_ONLY_ACTIONS,
    ActorRole.EXTERNAL: frozenset(),
}


class RoleCapabilityChecker(CapabilityCheckerProtocol):
    """Capability predicate driven by a static role matrix.

    Attributes:
        _capabilities: Allowed actions per role.
    """

    def __init__(
        self, capabilities: dict[ActorRole, frozenset[CaseAction]] | None = None
    ) -> None:
        self._capabilities = capabilities or ROLE_CAPABILITIES

    def has_capability(
        self,
        actor: Actor,
        action: CaseAction,
        target: object | None = None,
    ) -> bool:
        allowed = action in self._capabilities.get(actor.role, frozenset())
        if not allowed:
            logger.info(
                "capability_denied",
                actor_id=actor.actor_id,
                role=actor.role.value,
                action=action.value,
            )
        return allowed
