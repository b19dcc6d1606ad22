from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ridebook.core.modules.identifier.models import AllocatedIdentifier
from ridebook.utils import SCOPE_CODE_RE
from ridebook.web.deps import AppDep
from ridebook.web.openapi import ErrorResponse

router = APIRouter(tags=["identifiers"])


class ScopedAllocationRequest(BaseModel):
    """Request to allocate an identifier owned by an operator."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    scope_code: str = Field(..., pattern=SCOPE_CODE_RE.pattern, description="Owning operator code, e.g. OP001")


class GlobalAllocationRequest(BaseModel):
    """Request to allocate an identifier from a platform-wide stream. Takes no fields."""

    model_config = ConfigDict(extra="forbid")


class ScopedIdentifierResponse(BaseModel):
    """Identifier allocated within an operator's stream."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = Field(default=True)
    id: str = Field(..., description="Formatted identifier")
    scope_code: str = Field(..., description="Operator code the identifier belongs to")
    sequence_number: int = Field(..., description="Underlying counter value")

    @classmethod
    def from_domain(cls, allocated: AllocatedIdentifier) -> "ScopedIdentifierResponse":
        return cls(id=allocated.id, scope_code=allocated.scope_code or "", sequence_number=allocated.sequence_number)


class GlobalIdentifierResponse(BaseModel):
    """Identifier allocated from a platform-wide stream."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = Field(default=True)
    id: str = Field(..., description="Formatted identifier")
    sequence_number: int = Field(..., description="Underlying counter value")

    @classmethod
    def from_domain(cls, allocated: AllocatedIdentifier) -> "GlobalIdentifierResponse":
        return cls(id=allocated.id, sequence_number=allocated.sequence_number)


ALLOCATION_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse, "description": "Missing or malformed input"},
    503: {"model": ErrorResponse, "description": "Counter contention or store outage, safe to retry"},
}


@router.post(
    "/ids/booking",
    summary="Allocate booking identifier",
    description="Allocate the next booking identifier of an operator, formatted as `{scopeCode}/00000001`.",
    operation_id="allocateBookingId",
    responses=ALLOCATION_RESPONSES,
)
async def allocate_booking_id(request: ScopedAllocationRequest, app: AppDep) -> ScopedIdentifierResponse:
    allocated = await app.allocate_booking_id(request.scope_code)
    return ScopedIdentifierResponse.from_domain(allocated)


@router.post(
    "/ids/driver",
    summary="Allocate driver identifier",
    description="Allocate the next driver identifier of an operator, formatted as `{scopeCode}/DR0001`.",
    operation_id="allocateDriverId",
    responses=ALLOCATION_RESPONSES,
)
async def allocate_driver_id(request: ScopedAllocationRequest, app: AppDep) -> ScopedIdentifierResponse:
    allocated = await app.allocate_driver_id(request.scope_code)
    return ScopedIdentifierResponse.from_domain(allocated)


@router.post(
    "/ids/admin",
    summary="Allocate admin identifier",
    description="Allocate the next platform admin identifier, formatted as `AD001`.",
    operation_id="allocateAdminId",
    responses=ALLOCATION_RESPONSES,
)
async def allocate_admin_id(app: AppDep, _: GlobalAllocationRequest | None = None) -> GlobalIdentifierResponse:
    allocated = await app.allocate_admin_id()
    return GlobalIdentifierResponse.from_domain(allocated)


@router.post(
    "/ids/passenger",
    summary="Allocate passenger identifier",
    description="Allocate the next passenger identifier, formatted as `CU001`.",
    operation_id="allocatePassengerId",
    responses=ALLOCATION_RESPONSES,
)
async def allocate_passenger_id(app: AppDep, _: GlobalAllocationRequest | None = None) -> GlobalIdentifierResponse:
    allocated = await app.allocate_passenger_id()
    return GlobalIdentifierResponse.from_domain(allocated)


@router.post(
    "/ids/operator",
    summary="Allocate operator code",
    description="Allocate the next operator code, formatted as `OP001`. Used when an operator is approved.",
    operation_id="allocateOperatorId",
    responses=ALLOCATION_RESPONSES,
)
async def allocate_operator_id(app: AppDep, _: GlobalAllocationRequest | None = None) -> GlobalIdentifierResponse:
    allocated = await app.allocate_operator_id()
    return GlobalIdentifierResponse.from_domain(allocated)
