from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, cast

from ridebook.config import Config
from ridebook.core.modules.counter.store import TransactionalStore, create_store

if TYPE_CHECKING:
    from ridebook.core.modules.counter.service import CounterService
    from ridebook.core.modules.identifier.service import IdentifierService


class Service:
    """Base class for services with direct access to the counter store."""

    def __init__(self, store: TransactionalStore) -> None:
        self.store = store
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    counter: CounterService
    identifier: IdentifierService

    def __init__(self, store: TransactionalStore) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []

        # (attribute_name, module_path, class_name); counter first, identifier depends on it
        service_configs = [
            ("counter", "ridebook.core.modules.counter.service", "CounterService"),
            ("identifier", "ridebook.core.modules.identifier.service", "IdentifierService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(store)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, the counter store, and all service instances."""

    config: Config
    store: TransactionalStore
    services: Services

    def __init__(self, config: Config, store: TransactionalStore | None = None) -> None:
        """Initialize core with config and a store; the store is built from config when not injected."""
        self.config = config
        self.store = store if store is not None else create_store(config.database_url)
        self.services = Services(self.store)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and release the store's connections."""
        await self.services.stop_all()
        await self.store.close()
