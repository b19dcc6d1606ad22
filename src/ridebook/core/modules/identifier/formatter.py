"""Mapping from (kind, scope code, sequence number) to display identifiers.

Downstream systems parse these strings, so the patterns are fixed:

    booking    OP001/00000001
    driver     OP001/DR0042
    admin      AD003
    passenger  CU003
    operator   OP003

Widths are minimums; larger numbers simply get more digits.
"""

from dataclasses import dataclass

from ridebook.core.modules.identifier.models import IdentifierKind


@dataclass(frozen=True)
class IdentifierFormat:
    namespace: str  # counter namespace, suffixed with _<scope> for scoped kinds
    prefix: str
    width: int
    scoped: bool


FORMATS: dict[IdentifierKind, IdentifierFormat] = {
    IdentifierKind.BOOKING: IdentifierFormat(namespace="bookingId", prefix="", width=8, scoped=True),
    IdentifierKind.DRIVER: IdentifierFormat(namespace="driverId", prefix="DR", width=4, scoped=True),
    IdentifierKind.ADMIN: IdentifierFormat(namespace="adminId", prefix="AD", width=3, scoped=False),
    IdentifierKind.PASSENGER: IdentifierFormat(namespace="passengerId", prefix="CU", width=3, scoped=False),
    IdentifierKind.OPERATOR: IdentifierFormat(namespace="operatorId", prefix="OP", width=3, scoped=False),
}


def is_scoped(kind: IdentifierKind) -> bool:
    return FORMATS[kind].scoped


def namespace_for(kind: IdentifierKind, scope_code: str | None = None) -> str:
    """Counter namespace for a kind, e.g. ``bookingId_OP001`` or ``adminId``."""
    fmt = FORMATS[kind]
    if not fmt.scoped:
        return fmt.namespace
    if not scope_code:
        raise ValueError(f"{kind} identifiers require a scope code")
    return f"{fmt.namespace}_{scope_code}"


def format_identifier(kind: IdentifierKind, scope_code: str | None, value: int) -> str:
    """Render the display identifier for an allocated sequence number."""
    if value < 0:
        raise ValueError(f"Sequence number must be non-negative, got {value}")
    fmt = FORMATS[kind]
    number = f"{fmt.prefix}{value:0{fmt.width}d}"
    if fmt.scoped:
        return f"{scope_code}/{number}"
    return number
