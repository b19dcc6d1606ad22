"""Kinds of human-readable identifiers and the result of allocating one."""

from enum import StrEnum

from pydantic import BaseModel, Field


class IdentifierKind(StrEnum):
    """Entity kinds that receive sequential display identifiers."""

    BOOKING = "booking"
    DRIVER = "driver"
    ADMIN = "admin"
    PASSENGER = "passenger"
    OPERATOR = "operator"


class AllocatedIdentifier(BaseModel):
    """A freshly allocated identifier together with the sequence number behind it."""

    kind: IdentifierKind
    id: str = Field(..., description="Formatted display identifier, e.g. OP001/00000001")
    scope_code: str | None = Field(default=None, description="Owning scope (operator code) for scoped kinds")
    sequence_number: int = Field(..., ge=1)
