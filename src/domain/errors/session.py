"""Adjudication session errors."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from src.domain.exceptions import (
    ConflictError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
)

if TYPE_CHECKING:
    from src.domain.models.session import SessionStatus


class SessionNotFoundError(NotFoundError):
    """Raised when a session cannot be found."""

    def __init__(self, session_id: UUID) -> None:
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class InvalidSessionTransitionError(InvalidStateError):
    """Raised when a session status transition is not allowed.

    Completing is only legal from PENDENTE and reverting only from
    CONCLUIDA.

    Attributes:
        session_id: The session.
        from_status: Current status.
        to_status: Attempted target status.
    """

    def __init__(
        self,
        session_id: UUID,
        from_status: SessionStatus,
        to_status: SessionStatus,
    ) -> None:
        self.session_id = session_id
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Invalid session transition for {session_id}: "
            f"{from_status.value} -> {to_status.value}"
        )


class PendingSessionResourcesError(InvalidStateError):
    """Raised when completing a session whose agenda is not fully adjudicated.

    Attributes:
        session_id: The session.
        pending_count: Number of agenda resources without a terminal status.
        total_count: Number of resources on the agenda.
    """

    def __init__(self, session_id: UUID, pending_count: int, total_count: int) -> None:
        self.session_id = session_id
        self.pending_count = pending_count
        self.total_count = total_count
        super().__init__(
            f"Session {session_id} has {pending_count} of {total_count} resources "
            "without a result; every resource must have a result before completion"
        )


class SessionNotOpenError(InvalidStateError):
    """Raised when changing the agenda of a session that is not PENDENTE."""

    def __init__(self, session_id: UUID, status: SessionStatus) -> None:
        self.session_id = session_id
        self.status = status
        super().__init__(
            f"Session {session_id} is {status.value}; its agenda cannot be changed"
        )


class SessionResourceNotFoundError(NotFoundError):
    """Raised when a resource is not on the given session's agenda."""

    def __init__(self, session_id: UUID, session_resource_id: UUID) -> None:
        self.session_id = session_id
        self.session_resource_id = session_resource_id
        super().__init__(
            f"Resource {session_resource_id} not found in session {session_id}"
        )


class ResourceAlreadyOnAgendaError(ConflictError):
    """Raised when adding a resource already on the session's agenda."""

    def __init__(self, session_id: UUID, resource_id: UUID) -> None:
        self.session_id = session_id
        self.resource_id = resource_id
        super().__init__(
            f"Resource {resource_id} is already on the agenda of session {session_id}"
        )


class DuplicateDistributionError(ConflictError):
    """Raised when a resource is distributed twice in the same session."""

    def __init__(self, session_id: UUID, resource_id: UUID) -> None:
        self.session_id = session_id
        self.resource_id = resource_id
        super().__init__(
            f"Resource {resource_id} was already distributed in session {session_id}"
        )


class DistributionNotFoundError(NotFoundError):
    """Raised when a distribution record cannot be found."""

    def __init__(self, distribution_id: UUID) -> None:
        self.distribution_id = distribution_id
        super().__init__(f"Distribution not found: {distribution_id}")


class VotingNotFoundError(NotFoundError):
    """Raised when voting ids do not belong to the resource being reordered.

    Attributes:
        resource_id: The resource whose votings are being reordered.
        voting_ids: The unknown voting ids.
    """

    def __init__(self, resource_id: UUID, voting_ids: list[UUID]) -> None:
        self.resource_id = resource_id
        self.voting_ids = voting_ids
        ids = ", ".join(str(v) for v in voting_ids)
        super().__init__(f"Votings not found for resource {resource_id}: {ids}")


class InvalidVotingOrderError(InvalidInputError):
    """Raised when a reorder batch is empty or malformed."""


class InvalidAdjudicationStatusError(InvalidInputError):
    """Raised when a session tries to assign an unknown or forbidden status."""

    def __init__(self, status: object, allowed: list[str]) -> None:
        self.status = status
        self.allowed = allowed
        super().__init__(
            f"Invalid adjudication status: {status!r}. Allowed: {', '.join(allowed)}"
        )


class MissingAdjudicationDetailError(InvalidInputError):
    """Raised when a status requires a detail that was not supplied.

    Attributes:
        status: The requested status.
        field: Name of the missing field.
    """

    def __init__(self, status: str, field: str) -> None:
        self.status = status
        self.field = field
        super().__init__(f"Status {status} requires {field}")


class IncompleteMinutesError(InvalidInputError):
    """Raised when minutes text still contains an unfilled placeholder."""

    def __init__(self, placeholder: str) -> None:
        self.placeholder = placeholder
        super().__init__(
            f"Minutes text still contains {placeholder}; complete it before saving"
        )


class InvalidSessionInputError(InvalidInputError):
    """Raised when a new session's number or date is missing or malformed."""


class DuplicateSessionNumberError(ConflictError):
    """Raised when a session number is already taken.

    Attributes:
        session_number: The number that was requested.
    """

    def __init__(self, session_number: str) -> None:
        self.session_number = session_number
        super().__init__(f"Session number already exists: {session_number}")
