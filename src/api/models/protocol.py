"""Protocol intake and conversion request/response models."""

from uuid import UUID

from pydantic import BaseModel, Field

from src.api.models.common import DateTimeWithZ
from src.domain.models.case_protocol import CaseProtocol
from src.domain.models.resource import Resource


class RegisterProtocolRequest(BaseModel):
    """Body of POST /v1/protocols."""

    process_number: str = Field(..., min_length=1, description="Administrative process number")


class ProtocolResponse(BaseModel):
    """An intake protocol."""

    id: UUID
    process_number: str
    status: str
    is_admitted_as_resource: bool
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, protocol: CaseProtocol) -> "ProtocolResponse":
        return cls(
            id=protocol.id,
            process_number=protocol.process_number,
            status=protocol.status.value,
            is_admitted_as_resource=protocol.is_admitted_as_resource,
            created_at=protocol.created_at,
            updated_at=protocol.updated_at,
        )


class ConvertProtocolRequest(BaseModel):
    """Body of POST /v1/protocols/{protocol_id}/convert.

    Attributes:
        resource_type: VOLUNTARIO or OFICIO; validated by the core.
    """

    resource_type: str = Field(..., min_length=1, description="VOLUNTARIO or OFICIO")


class ResourceResponse(BaseModel):
    """A numbered resource."""

    id: UUID
    protocol_id: UUID
    process_number: str
    resource_number: str
    sequence_number: int
    year: int
    type: str
    status: str
    created_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, resource: Resource) -> "ResourceResponse":
        return cls(
            id=resource.id,
            protocol_id=resource.protocol_id,
            process_number=resource.process_number,
            resource_number=resource.resource_number,
            sequence_number=resource.sequence_number,
            year=resource.year,
            type=resource.type.value,
            status=resource.status.value,
            created_at=resource.created_at,
        )
