"""Protocol intake and conversion to Resource.

Protocols are registered in EM_ANALISE and admitted while still in analysis.
Conversion turns an admitted protocol into a numbered resource exactly once.
Preconditions are checked in a fixed order, each with its own error:

1. The protocol exists (ProtocolNotFoundError)
2. It was admitted as a resource (ProtocolNotAdmittedError)
3. It has not been converted yet (ProtocolAlreadyConvertedError)
4. The resource type is known (InvalidResourceTypeError)

The resource number is allocated for the current year in the same
transaction that stores the resource and moves the protocol to
CONCLUIDO: both writes land or neither does.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from uuid import UUID, uuid4

from src.application.ports.case_store import CaseStoreProtocol, CaseTransaction
from src.application.services.base import LoggingMixin
from src.application.services.sequence_allocator import SequenceAllocator
from src.domain.errors.protocol import (
    InvalidProtocolInputError,
    InvalidResourceTypeError,
    ProtocolAlreadyConvertedError,
    ProtocolNotAdmittedError,
    ProtocolNotFoundError,
)
from src.domain.models.case_protocol import CaseProtocol, ProtocolStatus
from src.domain.models.resource import Resource, ResourceStatus, ResourceType
from src.domain.models.sequence import SequenceScope


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_resource_type(value: object) -> ResourceType:
    """Parse a resource type, rejecting missing and unknown values.

    Raises:
        InvalidResourceTypeError: If the value is not a known type.
    """
    if isinstance(value, ResourceType):
        return value
    allowed = [t.value for t in ResourceType]
    if not isinstance(value, str) or value not in allowed:
        raise InvalidResourceTypeError(resource_type=value, allowed=allowed)
    return ResourceType(value)


class ProtocolResourceConverter(LoggingMixin):
    """Service registering protocols and converting admitted ones into resources.

    Attributes:
        _store: Case store.
        _allocator: Sequence allocator (retries on number collisions).
        _now: Clock, injectable for tests.
    """

    def __init__(
        self,
        store: CaseStoreProtocol,
        allocator: SequenceAllocator,
        now: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._store = store
        self._allocator = allocator
        self._now = now
        self._init_logger(component="protocol")

    async def register(self, process_number: str) -> CaseProtocol:
        """Register a new protocol in EM_ANALISE, not yet admitted.

        Raises:
            InvalidProtocolInputError: If the process number is blank.
        """
        number = (process_number or "").strip()
        if not number:
            raise InvalidProtocolInputError("Process number is required")

        protocol = CaseProtocol(
            id=uuid4(),
            process_number=number,
            status=ProtocolStatus.EM_ANALISE,
        )
        async with self._store.transaction() as tx:
            await tx.protocols.save(protocol)

        self._log_operation("register_protocol", protocol_id=str(protocol.id)).info(
            "protocol_registered"
        )
        return protocol

    async def admit(self, protocol_id: UUID) -> CaseProtocol:
        """Admit a protocol as a resource, making it convertible.

        Admitting an already admitted protocol returns it unchanged.

        Raises:
            ProtocolNotFoundError: If the protocol does not exist.
            ProtocolNotInAnalysisError: If it left EM_ANALISE.
        """
        log = self._log_operation("admit_protocol", protocol_id=str(protocol_id))
        async with self._store.transaction() as tx:
            protocol = await tx.protocols.get(protocol_id)
            if protocol is None:
                raise ProtocolNotFoundError(protocol_id=protocol_id)
            if protocol.is_admitted_as_resource:
                return protocol
            admitted = protocol.admitted()
            await tx.protocols.update(admitted)

        log.info("protocol_admitted")
        return admitted

    async def convert(self, protocol_id: UUID, resource_type: object) -> Resource:
        """Convert a protocol into a resource.

        Args:
            protocol_id: The protocol to convert.
            resource_type: VOLUNTARIO or OFICIO (enum or its string value).

        Returns:
            The created resource, in EM_ANALISE.

        Raises:
            ProtocolNotFoundError: If the protocol does not exist.
            ProtocolNotAdmittedError: If it was not admitted as a resource.
            ProtocolAlreadyConvertedError: If it already owns a resource.
            InvalidResourceTypeError: If resource_type is missing or unknown.
            SequenceConflictError: If the number collided on every retry.
        """
        log = self._log_operation("convert_protocol", protocol_id=str(protocol_id))
        log.info("convert_protocol_started")

        async def _convert(tx: CaseTransaction) -> Resource:
            protocol = await tx.protocols.get(protocol_id)
            if protocol is None:
                raise ProtocolNotFoundError(protocol_id=protocol_id)
            if not protocol.is_admitted_as_resource:
                raise ProtocolNotAdmittedError(protocol_id=protocol_id)
            existing = await tx.resources.get_by_protocol(protocol_id)
            if existing is not None:
                raise ProtocolAlreadyConvertedError(
                    protocol_id=protocol_id, resource_id=existing.id
                )
            parsed_type = parse_resource_type(resource_type)

            number = await self._allocator.allocate(
                tx, SequenceScope.RESOURCE, self._now().year
            )
            resource = Resource(
                id=uuid4(),
                protocol_id=protocol.id,
                process_number=protocol.process_number,
                sequence_number=number.sequence_number,
                year=number.year,
                type=parsed_type,
                status=ResourceStatus.EM_ANALISE,
            )
            await tx.resources.save(resource)
            await tx.protocols.update(protocol.concluded())
            return resource

        try:
            resource = await self._allocator.run_in_transaction(
                _convert, operation_name="convert_protocol"
            )
        except (
            ProtocolNotFoundError,
            ProtocolNotAdmittedError,
            ProtocolAlreadyConvertedError,
            InvalidResourceTypeError,
        ) as exc:
            log.warning("convert_protocol_rejected", reason=type(exc).__name__)
            raise

        log.info(
            "convert_protocol_completed",
            resource_id=str(resource.id),
            resource_number=resource.resource_number,
        )
        return resource
