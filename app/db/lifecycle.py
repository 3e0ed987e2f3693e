"""
Connection Lifecycle Module.

Sequences the startup of the data layer against the shared DatabaseConnection:

    UNCONNECTED -> AUTHENTICATING -> READY    (initialize succeeded)
                                  -> FAILED   (store unreachable; caller may retry)

`test_connection` is a non-throwing health probe that can be called any number
of times. `initialize` is meant to run once per process: it authenticates and,
in development mode only, verifies the schema without altering it and logs the
stats summary. Production schema changes go through migrations, never through
this module.
"""

from enum import Enum
from typing import List, Optional

from app.core.errors import DatabaseConnectionError, StartupError, VerificationError
from app.core.events import DiagnosticEmitter, DiagnosticEvent
from app.db.registry import ModelRegistry
from app.schemas.stats import DatabaseStats
from app.services.stats import get_database_stats


class ConnectionState(str, Enum):
    UNCONNECTED = "unconnected"
    AUTHENTICATING = "authenticating"
    READY = "ready"
    FAILED = "failed"


class DatabaseLifecycle:
    """
    Startup and health operations for a wired model registry.

    Args:
        registry: The wired registry; its connection is the one being managed.
        development: Whether the process runs in development mode.
        diagnostics: Emitter for lifecycle events; defaults to the registry's.
    """

    def __init__(
        self,
        registry: ModelRegistry,
        development: bool = False,
        diagnostics: Optional[DiagnosticEmitter] = None,
    ):
        self.registry = registry
        self.development = development
        self.diagnostics = diagnostics or registry.diagnostics
        self._state = ConnectionState.UNCONNECTED

    @property
    def connection(self):
        return self.registry.connection

    @property
    def state(self) -> ConnectionState:
        return self._state

    async def test_connection(self) -> bool:
        """
        Authenticate against the store using a pooled connection.

        Returns:
            bool: True if the store answered, False for any failure. Never raises.
        """
        try:
            await self.connection.authenticate()
        except Exception as e:
            error = DatabaseConnectionError(f"Authentication failed: {e}")
            self.diagnostics.emit(DiagnosticEvent.CONNECTION_FAILED, error=error, dialect=self.connection.dialect_name)
            return False
        self.diagnostics.emit(DiagnosticEvent.CONNECTION_ESTABLISHED, dialect=self.connection.dialect_name)
        return True

    async def verify_schema(self) -> List[str]:
        """
        Confirm that every model table exists, creating only the missing ones.

        Existing structure is never altered or dropped. Failures are reported
        and swallowed because verification is a best-effort diagnostic.

        Returns:
            List[str]: Tables that were created; empty if none were missing or
            the verification failed.
        """
        self.diagnostics.emit(DiagnosticEvent.SCHEMA_VERIFICATION_STARTED, models=len(self.registry))
        try:
            created = await self.connection.sync()
        except Exception as e:
            error = VerificationError(f"Schema verification failed: {e}")
            self.diagnostics.emit(DiagnosticEvent.SCHEMA_VERIFICATION_FAILED, error=error)
            return []
        self.diagnostics.emit(
            DiagnosticEvent.SCHEMA_VERIFIED,
            created=",".join(created) if created else "none",
        )
        return created

    async def get_database_stats(self) -> Optional[DatabaseStats]:
        """
        Row counts per entity, or None if any count failed.
        """
        return await get_database_stats(self.registry, self.diagnostics)

    async def initialize(self) -> bool:
        """
        Connect to the store and prepare the data layer.

        Returns:
            bool: True once the data layer is ready.

        Raises:
            StartupError: If the store cannot be reached, or if initialize is
                called again after it succeeded or while it is running.
        """
        if self._state in (ConnectionState.READY, ConnectionState.AUTHENTICATING):
            raise StartupError(f"Database initialization already {self._state.value}")

        if not self.registry.wired:
            raise StartupError("Model associations must be wired before initializing the database")

        self.diagnostics.emit(DiagnosticEvent.INITIALIZE_STARTED, development=self.development)
        self._state = ConnectionState.AUTHENTICATING

        connected = await self.test_connection()
        if not connected:
            self._state = ConnectionState.FAILED
            raise StartupError("Could not connect to the database")

        if self.development:
            await self.verify_schema()
            await self.get_database_stats()

        self._state = ConnectionState.READY
        self.diagnostics.emit(DiagnosticEvent.INITIALIZED)
        return True


__all__ = ["ConnectionState", "DatabaseLifecycle"]
