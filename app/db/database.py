"""
Database Composition Module.

Ties the pieces of the data layer together for the host application:

- build_registry: register the shop models on a connection and wire them
- ShopModels: typed access to the mapped classes
- Database: connection, registry, models and lifecycle in one value
- create_database: build all of the above from settings

Usage:

    database = create_database(get_settings())
    await database.initialize()
    stats = await database.get_database_stats()
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from app.core.config import Settings
from app.core.events import DiagnosticEmitter, LoggingDiagnostics
from app.db.associations import wire_all
from app.db.lifecycle import DatabaseLifecycle
from app.db.registry import ModelFactory, ModelRegistry
from app.db.session import DatabaseConnection
from app.models import SHOP_MODELS
from app.schemas.stats import DatabaseStats


def build_registry(
    connection: DatabaseConnection,
    factories: Iterable[Tuple[str, ModelFactory]] = SHOP_MODELS,
    diagnostics: Optional[DiagnosticEmitter] = None,
) -> ModelRegistry:
    """
    Register every model factory on a new registry, then wire associations.

    Registration finishes before wiring starts, so every peer a model refers
    to is already present when its `associate` runs.
    """
    registry = ModelRegistry(connection, diagnostics=diagnostics)
    for name, factory in factories:
        registry.register(name, factory)
    wire_all(registry)
    return registry


@dataclass(frozen=True)
class ShopModels:
    """Mapped classes of the shop, one field per entity."""
    Product: type
    Category: type
    Order: type
    OrderLine: type
    User: type

    @classmethod
    def from_registry(cls, registry: ModelRegistry) -> "ShopModels":
        return cls(
            Product=registry["Product"].model,
            Category=registry["Category"].model,
            Order=registry["Order"].model,
            OrderLine=registry["OrderLine"].model,
            User=registry["User"].model,
        )


@dataclass(frozen=True)
class Database:
    """The assembled data layer."""
    connection: DatabaseConnection
    registry: ModelRegistry
    models: ShopModels
    lifecycle: DatabaseLifecycle

    async def initialize(self) -> bool:
        return await self.lifecycle.initialize()

    async def test_connection(self) -> bool:
        return await self.lifecycle.test_connection()

    async def get_database_stats(self) -> Optional[DatabaseStats]:
        return await self.lifecycle.get_database_stats()

    def session(self):
        """
        Open an AsyncSession on the shared engine for downstream queries.
        """
        return self.connection.session_factory()


def assemble_database(
    connection: DatabaseConnection,
    development: bool = False,
    diagnostics: Optional[DiagnosticEmitter] = None,
) -> Database:
    """
    Build the data layer around an existing connection.
    """
    diagnostics = diagnostics or LoggingDiagnostics()
    registry = build_registry(connection, diagnostics=diagnostics)
    return Database(
        connection=connection,
        registry=registry,
        models=ShopModels.from_registry(registry),
        lifecycle=DatabaseLifecycle(registry, development=development, diagnostics=diagnostics),
    )


def create_database(settings: Settings, diagnostics: Optional[DiagnosticEmitter] = None) -> Database:
    """
    Build the data layer from application settings.

    No connection is opened here; the pool connects on the first `initialize`.
    """
    connection = DatabaseConnection.from_settings(settings)
    return assemble_database(connection, development=settings.is_development, diagnostics=diagnostics)
