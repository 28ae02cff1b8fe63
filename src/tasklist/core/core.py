from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, cast

from tasklist.config import Config
from tasklist.core.modules.session.token import TokenCodec
from tasklist.core.store import DocumentStore, open_store

if TYPE_CHECKING:
    from tasklist.core.modules.access.service import AccessService
    from tasklist.core.modules.session.service import SessionService
    from tasklist.core.modules.todo.service import TodoService
    from tasklist.core.modules.user.service import UserService


class Service:
    """Base class for services with direct document store access."""

    def __init__(self, store: DocumentStore) -> None:
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

    user: UserService
    session: SessionService
    access: AccessService
    todo: TodoService

    def __init__(self, store: DocumentStore) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []
        self._store = store

        # Service configuration: (attribute_name, module_path, class_name)
        service_configs = [
            ("user", "tasklist.core.modules.user.service", "UserService"),
            ("session", "tasklist.core.modules.session.service", "SessionService"),
            ("access", "tasklist.core.modules.access.service", "AccessService"),
            ("todo", "tasklist.core.modules.todo.service", "TodoService"),
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
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services that have cleanup logic."""
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, document store, and all service instances."""

    config: Config
    store: DocumentStore
    tokens: TokenCodec
    services: Services

    def __init__(self, config: Config, store: DocumentStore | None = None) -> None:
        """Initialize core with config and a store (opened from config.database_url if not given)."""
        self.config = config
        self.store = store if store is not None else open_store(config.database_url)
        self.tokens = TokenCodec(config.session_secret_key)
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
        """Start all services on application startup."""
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close the store on shutdown."""
        await self.services.stop_all()
        await self.store.close()
