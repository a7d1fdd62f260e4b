"""Actor resolution and capability enforcement.

Identity comes from the ``X-Actor-Id`` and ``X-Actor-Role`` headers set by
the upstream gateway. Missing or unknown identity is a 401; an actor
without the capability for an action gets a 403 before the core runs.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

import structlog
from fastapi import Depends, Header, HTTPException, status

from src.application.ports.capability_checker import (
    Actor,
    ActorRole,
    CapabilityCheckerProtocol,
    CaseAction,
)
from src.bootstrap.case_store import get_capability_checker
from src.domain.exceptions import ForbiddenError

logger = structlog.get_logger(__name__)


def get_actor(
    x_actor_id: Annotated[
        str | None,
        Header(description="Identifier of the authenticated actor."),
    ] = None,
    x_actor_role: Annotated[
        str | None,
        Header(description="Actor role: ADMIN, EMPLOYEE or EXTERNAL."),
    ] = None,
) -> Actor:
    """Resolve the calling actor from request headers.

    Raises:
        HTTPException 401: If a header is missing or the role is unknown.
    """
    log = logger.bind(component="actor_auth")

    if not x_actor_id or not x_actor_id.strip():
        log.warning("auth_failed", reason="missing_actor_id")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Actor-Id header is required",
        )
    if not x_actor_role:
        log.warning("auth_failed", reason="missing_role", actor_id=x_actor_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Actor-Role header is required",
        )
    try:
        role = ActorRole(x_actor_role.strip().upper())
    except ValueError:
        log.warning("auth_failed", reason="unknown_role", actor_id=x_actor_id, role=x_actor_role)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Unknown actor role: {x_actor_role}",
        ) from None

    return Actor(actor_id=x_actor_id.strip(), role=role)


def require_capability(action: CaseAction) -> Callable[..., Awaitable[Actor]]:
    """Dependency factory: resolve the actor and check it may ``action``.

    Usage:
        @router.post("/{session_id}/complete")
        async def complete(actor: Actor = Depends(require_capability(CaseAction.COMPLETE_SESSION))):
            ...
    """

    async def _check(
        actor: Actor = Depends(get_actor),
        checker: CapabilityCheckerProtocol = Depends(get_capability_checker),
    ) -> Actor:
        if not checker.has_capability(actor, action):
            raise ForbiddenError(
                f"Actor {actor.actor_id} ({actor.role.value}) may not {action.value}"
            )
        return actor

    return _check
