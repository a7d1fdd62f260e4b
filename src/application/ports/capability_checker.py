"""Port interface for capability checks.

Role checks are consolidated into a single predicate,
``has_capability(actor, action, target=None)``, injected into the request
boundary. The core never inspects roles itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class ActorRole(Enum):
    """Roles an authenticated actor may hold.

    ADMIN is the highest administrative capability.
    """

    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"
    EXTERNAL = "EXTERNAL"


class CaseAction(Enum):
    """Every mutating operation exposed by the core."""

    REGISTER_PROTOCOL = "register_protocol"
    ADMIT_PROTOCOL = "admit_protocol"
    CONVERT_PROTOCOL = "convert_protocol"
    CREATE_SESSION = "create_session"
    COMPLETE_SESSION = "complete_session"
    REVERT_SESSION = "revert_session"
    MANAGE_SESSION_AGENDA = "manage_session_agenda"
    REORDER_VOTINGS = "reorder_votings"
    DISTRIBUTE_RESOURCE = "distribute_resource"
    CREATE_DECISION = "create_decision"
    UPDATE_DECISION = "update_decision"
    DELETE_DECISION = "delete_decision"
    PUBLISH_DECISIONS = "publish_decisions"
    REVERT_DECISION = "revert_decision"
    CREATE_NOTIFICATION_LIST = "create_notification_list"
    FINALIZE_NOTIFICATION_LIST = "finalize_notification_list"
    DELETE_NOTIFICATION_LIST = "delete_notification_list"
    MANAGE_NOTIFICATION_ITEMS = "manage_notification_items"
    MANAGE_NOTIFICATION_ATTEMPTS = "manage_notification_attempts"
    CONFIRM_NOTIFICATION_ATTEMPT = "confirm_notification_attempt"
    EXPIRE_NOTIFICATION_ATTEMPTS = "expire_notification_attempts"


@dataclass(frozen=True)
class Actor:
    """An identified caller.

    Attributes:
        actor_id: Opaque identifier, recorded in audit fields such as
            ``confirmed_by`` and ``created_by``.
        role: The actor's role.
    """

    actor_id: str
    role: ActorRole


class CapabilityCheckerProtocol(Protocol):
    """Decides whether an actor may perform an action."""

    def has_capability(
        self,
        actor: Actor,
        action: CaseAction,
        target: object | None = None,
    ) -> bool:
        """Return True when the actor may perform the action.

        Args:
            actor: The caller.
            action: The operation requested.
            target: Optional entity the action applies to.
        """
        ...
