import structlog

from ridebook.core.core import Service
from ridebook.core.modules.identifier.formatter import format_identifier, is_scoped, namespace_for
from ridebook.core.modules.identifier.models import AllocatedIdentifier, IdentifierKind
from ridebook.errors import ValidationError
from ridebook.utils import is_scope_code

logger = structlog.get_logger(__name__)


class IdentifierService(Service):
    """Allocates sequential display identifiers for drivers, bookings, passengers, admins and operators."""

    async def allocate(self, kind: IdentifierKind, scope_code: str | None = None) -> AllocatedIdentifier:
        """Validate the scope, allocate the next number of the kind's namespace and format it.

        Scope validation happens before any store access, so rejected requests never
        touch a counter.
        """
        if is_scoped(kind):
            if not scope_code:
                raise ValidationError(f"Scope code is required for {kind} identifiers")
            if not is_scope_code(scope_code):
                raise ValidationError(f"Invalid scope code '{scope_code}'")
        elif scope_code:
            raise ValidationError(f"{kind.capitalize()} identifiers do not take a scope code")

        namespace = namespace_for(kind, scope_code)
        value = await self.core.services.counter.get_next_sequence(namespace)
        identifier = format_identifier(kind, scope_code, value)
        logger.info("identifier_allocated", kind=kind, namespace=namespace, identifier=identifier)
        return AllocatedIdentifier(kind=kind, id=identifier, scope_code=scope_code, sequence_number=value)
