"""Protocol conversion errors.

Conversion preconditions are checked in a fixed order and each has its own
error: missing protocol, protocol not admitted, protocol already converted,
unknown resource type. Intake adds its own input and admission errors.
"""

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
    from src.domain.models.case_protocol import ProtocolStatus


class ProtocolNotFoundError(NotFoundError):
    """Raised when a protocol cannot be found.

    Attributes:
        protocol_id: The protocol ID that was not found.
    """

    def __init__(self, protocol_id: UUID) -> None:
        self.protocol_id = protocol_id
        super().__init__(f"Protocol not found: {protocol_id}")


class ProtocolNotAdmittedError(InvalidStateError):
    """Raised when converting a protocol that was not admitted as a resource.

    Attributes:
        protocol_id: The protocol that is not admitted.
    """

    def __init__(self, protocol_id: UUID) -> None:
        self.protocol_id = protocol_id
        super().__init__(
            f"Protocol {protocol_id} was not admitted as a resource; "
            "only admitted protocols can be converted"
        )


class ProtocolAlreadyConvertedError(ConflictError):
    """Raised when a protocol already owns a resource.

    Attributes:
        protocol_id: The protocol that was already converted.
        resource_id: The resource it was converted into, when known.
    """

    def __init__(self, protocol_id: UUID, resource_id: UUID | None = None) -> None:
        self.protocol_id = protocol_id
        self.resource_id = resource_id
        super().__init__(f"Protocol {protocol_id} was already converted into a resource")


class InvalidResourceTypeError(InvalidInputError):
    """Raised when the requested resource type is missing or unknown.

    Attributes:
        resource_type: The value received.
        allowed: The accepted values.
    """

    def __init__(self, resource_type: object, allowed: list[str]) -> None:
        self.resource_type = resource_type
        self.allowed = allowed
        super().__init__(
            f"Invalid resource type: {resource_type!r}. Allowed: {', '.join(allowed)}"
        )


class InvalidProtocolInputError(InvalidInputError):
    """Raised when a protocol is registered without a process number."""


class ProtocolNotInAnalysisError(InvalidStateError):
    """Raised when admitting a protocol that already left EM_ANALISE.

    Attributes:
        protocol_id: The protocol.
        status: Its current status.
    """

    def __init__(self, protocol_id: UUID, status: ProtocolStatus) -> None:
        self.protocol_id = protocol_id
        self.status = status
        super().__init__(
            f"Protocol {protocol_id} is {status.value}; only protocols in "
            "EM_ANALISE can be admitted"
        )
