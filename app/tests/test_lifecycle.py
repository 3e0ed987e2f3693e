"""
@file: test_lifecycle.py
@description:
Test suite for the connection lifecycle manager, focusing on:
- The non-throwing connection probe
- initialize() success, failure and retry
- Development-only, non-destructive schema verification
- Production runs never touching the schema

@dependencies:
- pytest / pytest_asyncio: For async tests
- unittest.mock: For replacing store operations
- app.db.lifecycle: The lifecycle manager under test

@notes:
- Tests run against SQLite files created per test by aiosqlite
"""

import pytest
from unittest import mock
from sqlalchemy import text

from app.core.errors import StartupError, VerificationError
from app.core.events import DiagnosticEvent
from app.db.database import assemble_database
from app.db.lifecycle import ConnectionState, DatabaseLifecycle
from app.db.registry import ModelRegistry
from app.db.session import DatabaseConnection
from app.tests.helpers import schema_snapshot

SHOP_TABLES = {"categories", "products", "users", "orders", "order_lines"}


@pytest.mark.asyncio
async def test_test_connection_success(database, diagnostics):
    assert await database.test_connection() is True
    assert diagnostics.of(DiagnosticEvent.CONNECTION_ESTABLISHED) == [(None, {"dialect": "sqlite"})]


@pytest.mark.asyncio
async def test_test_connection_unreachable_store(tmp_path, diagnostics):
    """A store that cannot be opened yields False instead of an exception."""
    connection = DatabaseConnection(f"sqlite+aiosqlite:///{tmp_path}/missing/dir/shop.db")
    database = assemble_database(connection, diagnostics=diagnostics)
    try:
        assert await database.test_connection() is False
    finally:
        await connection.dispose()

    [(error, fields)] = diagnostics.of(DiagnosticEvent.CONNECTION_FAILED)
    assert error is not None
    assert fields == {"dialect": "sqlite"}


@pytest.mark.asyncio
@pytest.mark.parametrize("failure", [
    ConnectionRefusedError("connection refused"),
    TimeoutError("pool acquire timed out"),
    OSError("network unreachable"),
    RuntimeError("password authentication failed"),
])
async def test_test_connection_never_raises(database, failure):
    with mock.patch.object(database.connection, "authenticate", new_callable=mock.AsyncMock) as mock_auth:
        mock_auth.side_effect = failure

        assert await database.test_connection() is False
        mock_auth.assert_awaited_once()


@pytest.mark.asyncio
async def test_test_connection_is_repeatable(database):
    results = [await database.test_connection() for _ in range(3)]
    assert results == [True, True, True]
    assert database.lifecycle.state is ConnectionState.UNCONNECTED


@pytest.mark.asyncio
async def test_initialize_development_verifies_and_reports(database, diagnostics):
    """Development mode creates missing tables and logs the row counts."""
    assert await database.initialize() is True

    assert database.lifecycle.state is ConnectionState.READY
    assert SHOP_TABLES <= set(await database.connection.table_names())

    names = diagnostics.names()
    assert names.index(DiagnosticEvent.CONNECTION_ESTABLISHED) < names.index(DiagnosticEvent.SCHEMA_VERIFIED)
    assert names.index(DiagnosticEvent.SCHEMA_VERIFIED) < names.index(DiagnosticEvent.STATS_REPORTED)
    assert names[-1] == DiagnosticEvent.INITIALIZED


@pytest.mark.asyncio
async def test_initialize_production_never_touches_schema(production_database, diagnostics):
    """Production mode authenticates only: no sync call, no stats."""
    connection = production_database.connection
    with mock.patch.object(connection, "sync", new_callable=mock.AsyncMock) as mock_sync, \
            mock.patch("app.db.lifecycle.get_database_stats", new_callable=mock.AsyncMock) as mock_stats:
        assert await production_database.initialize() is True

        assert mock_sync.await_count == 0
        assert mock_stats.await_count == 0

    assert await connection.table_names() == []
    assert DiagnosticEvent.SCHEMA_VERIFICATION_STARTED not in diagnostics.names()


@pytest.mark.asyncio
async def test_initialize_development_calls_sync_once(database):
    with mock.patch.object(database.connection, "sync", new_callable=mock.AsyncMock) as mock_sync:
        mock_sync.return_value = []
        await database.initialize()

        mock_sync.assert_awaited_once_with()


@pytest.mark.asyncio
async def test_initialize_fails_when_store_unreachable(database):
    with mock.patch.object(database.lifecycle, "test_connection", new_callable=mock.AsyncMock) as mock_test:
        mock_test.return_value = False

        with pytest.raises(StartupError):
            await database.initialize()

    assert database.lifecycle.state is ConnectionState.FAILED


@pytest.mark.asyncio
async def test_initialize_can_be_retried_after_failure(database):
    with mock.patch.object(database.connection, "authenticate", new_callable=mock.AsyncMock) as mock_auth:
        mock_auth.side_effect = OSError("store restarting")
        with pytest.raises(StartupError):
            await database.initialize()

    assert await database.initialize() is True
    assert database.lifecycle.state is ConnectionState.READY


@pytest.mark.asyncio
async def test_second_initialize_is_a_caller_error(database):
    await database.initialize()

    with pytest.raises(StartupError, match="already"):
        await database.initialize()
    assert database.lifecycle.state is ConnectionState.READY


@pytest.mark.asyncio
async def test_initialize_requires_wired_registry(connection, diagnostics):
    lifecycle = DatabaseLifecycle(ModelRegistry(connection, diagnostics=diagnostics), development=True)

    with pytest.raises(StartupError, match="wired"):
        await lifecycle.initialize()
    assert lifecycle.state is ConnectionState.UNCONNECTED


@pytest.mark.asyncio
async def test_verification_keeps_existing_schema(database):
    """With all tables present, verification leaves the schema byte-for-byte alone."""
    await database.connection.sync()
    before = await schema_snapshot(database.connection)

    assert await database.initialize() is True

    assert await schema_snapshot(database.connection) == before


@pytest.mark.asyncio
async def test_verification_never_alters_existing_tables(database):
    """A table with an unexpected layout is left as is; only missing tables are created."""
    async with database.connection.engine.begin() as conn:
        await conn.execute(text(
            "CREATE TABLE products (id INTEGER PRIMARY KEY, name VARCHAR(50), legacy_sku VARCHAR(20))"
        ))
    legacy = (await schema_snapshot(database.connection))["products"]

    created = await database.lifecycle.verify_schema()

    after = await schema_snapshot(database.connection)
    assert after["products"] == legacy
    assert set(created) == SHOP_TABLES - {"products"}
    assert set(after) == SHOP_TABLES


@pytest.mark.asyncio
async def test_verification_failure_does_not_abort(database, diagnostics):
    with mock.patch.object(database.connection, "sync", new_callable=mock.AsyncMock) as mock_sync:
        mock_sync.side_effect = RuntimeError("permission denied for schema public")

        assert await database.initialize() is True

    [(error, _)] = diagnostics.of(DiagnosticEvent.SCHEMA_VERIFICATION_FAILED)
    assert isinstance(error, VerificationError)
    assert database.lifecycle.state is ConnectionState.READY
