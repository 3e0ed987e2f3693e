"""
@file: conftest.py
@description:
This module provides pytest fixtures and configuration for the shop data layer
test suite. It sets up common test fixtures that can be reused across test modules.

Fixtures include:
- Environment configuration for testing
- A recording diagnostics emitter
- SQLite-backed connections (aiosqlite) in a temporary directory
- A fully assembled data layer in development mode

@dependencies:
- pytest / pytest_asyncio: For test framework and async fixtures
- app.db: The data layer under test

@notes:
- Every test gets its own database file and its own model registry
- Environment variables are temporarily modified during tests
"""

import os

import pytest
import pytest_asyncio

from app.core.config import get_settings
from app.db.database import assemble_database
from app.db.session import DatabaseConnection
from app.tests.helpers import RecordingDiagnostics, sqlite_url


@pytest.fixture(autouse=True)
def setup_test_environment():
    """
    Fixture that sets up the test environment.
    This fixture runs automatically for each test.
    """
    original_env = {}
    test_env = {
        "APP_ENV": "test",
        "DB_HOST": "localhost",
        "DB_NAME": "shop_test",
        "DB_USER": "shop",
        "DB_PASS": "secret",
    }

    for key, value in test_env.items():
        if key in os.environ:
            original_env[key] = os.environ[key]
        os.environ[key] = value
    get_settings.cache_clear()

    yield

    for key in test_env:
        if key in original_env:
            os.environ[key] = original_env[key]
        else:
            os.environ.pop(key, None)
    get_settings.cache_clear()


@pytest.fixture
def diagnostics():
    return RecordingDiagnostics()


@pytest_asyncio.fixture
async def connection(tmp_path):
    """A pooled connection to an empty SQLite database file."""
    conn = DatabaseConnection(sqlite_url(tmp_path))
    yield conn
    await conn.dispose()


@pytest.fixture
def database(connection, diagnostics):
    """The assembled shop data layer in development mode."""
    return assemble_database(connection, development=True, diagnostics=diagnostics)


@pytest.fixture
def production_database(connection, diagnostics):
    """The assembled shop data layer in production mode."""
    return assemble_database(connection, development=False, diagnostics=diagnostics)
