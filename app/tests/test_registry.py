"""
@file: test_registry.py
@description:
Test suite for the model registry:
- Registration, lookup and iteration order
- Duplicate names and late registration
- Propagation of factory failures

@dependencies:
- pytest: For test framework
- app.db.registry: The registry under test
- app.models: Entity factories
"""

import pytest
from sqlalchemy import Column, Table
from sqlalchemy import types as sa_types

from app.core.errors import ConfigurationError
from app.core.events import DiagnosticEvent
from app.db.associations import wire_all
from app.db.registry import ModelDefinition, ModelRegistry
from app.models import SHOP_MODELS, define_category, define_order, define_order_line, define_product, define_user
from app.db.session import DatabaseConnection
from app.tests.helpers import sqlite_url


@pytest.fixture
def connection(tmp_path):
    """An engine that is never opened; registration needs no live store."""
    return DatabaseConnection(sqlite_url(tmp_path))


def test_register_stores_definition(connection, diagnostics):
    """A registered definition is returned and reachable by name."""
    registry = ModelRegistry(connection, diagnostics=diagnostics)

    definition = registry.register("Category", define_category)

    assert registry["Category"] is definition
    assert registry.get("Category") is definition
    assert "Category" in registry
    assert definition.table.name == "categories"
    assert definition.table.metadata is connection.metadata
    assert registry.connection is connection
    assert diagnostics.of(DiagnosticEvent.MODEL_REGISTERED) == [(None, {"model": "Category", "table": "categories"})]


def test_registration_order_is_preserved(connection, diagnostics):
    """Iteration follows registration order."""
    registry = ModelRegistry(connection, diagnostics=diagnostics)
    for name, factory in SHOP_MODELS:
        registry.register(name, factory)

    assert registry.names() == ["Product", "Category", "Order", "OrderLine", "User"]
    assert list(registry) == registry.names()
    assert len(registry) == 5


def test_duplicate_name_keeps_first(connection, diagnostics):
    """Registering a name twice fails and leaves the first definition in place."""
    registry = ModelRegistry(connection, diagnostics=diagnostics)
    first = registry.register("Product", define_product)

    with pytest.raises(ConfigurationError):
        registry.register("Product", define_category)

    assert registry["Product"] is first
    assert registry.names() == ["Product"]


def test_factory_receives_connection_and_types(connection, diagnostics):
    """The factory is called with the shared connection and sqlalchemy.types."""
    received = {}

    def define_audit(conn, types):
        received["connection"] = conn
        received["types"] = types
        table = Table("audit", conn.metadata, Column("id", types.Integer, primary_key=True))
        return ModelDefinition("Audit", type("Audit", (), {}), table)

    registry = ModelRegistry(connection, diagnostics=diagnostics)
    registry.register("Audit", define_audit)

    assert received["connection"] is connection
    assert received["types"] is sa_types


def test_factory_error_propagates_unchanged(connection, diagnostics):
    """Exceptions raised by a factory reach the caller as-is."""
    def broken_factory(conn, types):
        raise ValueError("bad column definition")

    registry = ModelRegistry(connection, diagnostics=diagnostics)

    with pytest.raises(ValueError, match="bad column definition"):
        registry.register("Broken", broken_factory)
    assert "Broken" not in registry


def test_factory_must_return_model_definition(connection, diagnostics):
    registry = ModelRegistry(connection, diagnostics=diagnostics)

    with pytest.raises(ConfigurationError):
        registry.register("Nothing", lambda conn, types: object())


def test_unknown_model_lookup(connection, diagnostics):
    """Looking up a missing peer names it in the error."""
    registry = ModelRegistry(connection, diagnostics=diagnostics)

    with pytest.raises(ConfigurationError, match="Inventory"):
        registry["Inventory"]
    assert registry.get("Inventory") is None


def test_register_after_wiring_is_rejected(connection, diagnostics):
    registry = ModelRegistry(connection, diagnostics=diagnostics)
    registry.register("Category", define_category)
    registry.register("Product", define_product)
    registry.register("OrderLine", define_order_line)
    registry.register("Order", define_order)
    registry.register("User", define_user)
    wire_all(registry)

    with pytest.raises(ConfigurationError):
        registry.register("Extra", define_category)
