from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from ridebook.config import Config
from ridebook.core.core import Core
from ridebook.core.modules.counter.models import Counter
from ridebook.core.modules.counter.store import TransactionalStore
from ridebook.core.modules.identifier.models import AllocatedIdentifier, IdentifierKind
from ridebook.errors import ValidationError


class App:
    """Facade for all application operations, validates input before delegating to Core."""

    def __init__(self, config: Config, store: TransactionalStore | None = None) -> None:
        self._core = Core(config, store)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def allocate_booking_id(self, scope_code: str) -> AllocatedIdentifier:
        """Allocate the next booking identifier of an operator, e.g. OP001/00000001."""
        return await self._core.services.identifier.allocate(IdentifierKind.BOOKING, scope_code)

    async def allocate_driver_id(self, scope_code: str) -> AllocatedIdentifier:
        """Allocate the next driver identifier of an operator, e.g. OP001/DR0001."""
        return await self._core.services.identifier.allocate(IdentifierKind.DRIVER, scope_code)

    async def allocate_admin_id(self) -> AllocatedIdentifier:
        """Allocate the next platform admin identifier, e.g. AD001."""
        return await self._core.services.identifier.allocate(IdentifierKind.ADMIN)

    async def allocate_passenger_id(self) -> AllocatedIdentifier:
        """Allocate the next passenger identifier, e.g. CU001."""
        return await self._core.services.identifier.allocate(IdentifierKind.PASSENGER)

    async def allocate_operator_id(self) -> AllocatedIdentifier:
        """Allocate the next operator code, e.g. OP001."""
        return await self._core.services.identifier.allocate(IdentifierKind.OPERATOR)

    async def get_counter(self, namespace: str) -> Counter:
        """Read the committed value of a counter without allocating."""
        if not namespace.strip():
            raise ValidationError("Namespace is required")
        return await self._core.services.counter.get_counter(namespace)
