"""Protocol intake and conversion routes."""

from uuid import UUID

from fastapi import APIRouter, Depends

from src.api.auth.actor_auth import require_capability
from src.api.models.common import ProblemDetail
from src.api.models.protocol import (
    ConvertProtocolRequest,
    ProtocolResponse,
    RegisterProtocolRequest,
    ResourceResponse,
)
from src.application.ports.capability_checker import Actor, CaseAction
from src.application.services.protocol_resource_converter import (
    ProtocolResourceConverter,
)
from src.bootstrap.case_store import get_protocol_resource_converter

router = APIRouter(prefix="/v1/protocols", tags=["protocols"])


@router.post(
    "",
    response_model=ProtocolResponse,
    responses={400: {"model": ProblemDetail, "description": "Missing process number"}},
    summary="Register a protocol in EM_ANALISE",
)
async def register_protocol(
    request_data: RegisterProtocolRequest,
    actor: Actor = Depends(require_capability(CaseAction.REGISTER_PROTOCOL)),
    converter: ProtocolResourceConverter = Depends(get_protocol_resource_converter),
) -> ProtocolResponse:
    protocol = await converter.register(request_data.process_number)
    return ProtocolResponse.from_domain(protocol)


@router.post(
    "/{protocol_id}/admit",
    response_model=ProtocolResponse,
    responses={
        400: {"model": ProblemDetail, "description": "Protocol is no longer in analysis"},
        404: {"model": ProblemDetail, "description": "Protocol not found"},
    },
)
async def admit_protocol(
    protocol_id: UUID,
    actor: Actor = Depends(require_capability(CaseAction.ADMIT_PROTOCOL)),
    converter: ProtocolResourceConverter = Depends(get_protocol_resource_converter),
) -> ProtocolResponse:
    """Admit a protocol as a resource so it can be converted."""
    return ProtocolResponse.from_domain(await converter.admit(protocol_id))


@router.post(
    "/{protocol_id}/convert",
    response_model=ResourceResponse,
    responses={
        400: {"model": ProblemDetail, "description": "Not admitted, already converted or bad type"},
        404: {"model": ProblemDetail, "description": "Protocol not found"},
    },
    summary="Convert an admitted protocol into a numbered resource",
)
async def convert_protocol(
    protocol_id: UUID,
    request_data: ConvertProtocolRequest,
    actor: Actor = Depends(require_capability(CaseAction.CONVERT_PROTOCOL)),
    converter: ProtocolResourceConverter = Depends(get_protocol_resource_converter),
) -> ResourceResponse:
    resource = await converter.convert(protocol_id, request_data.resource_type)
    return ResourceResponse.from_domain(resource)
