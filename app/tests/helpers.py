"""
Shared helpers for the data layer tests.
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import inspect

from app.core.events import DiagnosticEvent
from app.db.session import DatabaseConnection


class RecordingDiagnostics:
    """Diagnostic emitter that keeps every event in memory."""

    def __init__(self):
        self.events: List[Tuple[DiagnosticEvent, Optional[BaseException], Dict[str, Any]]] = []

    def emit(self, event, error=None, **fields):
        self.events.append((event, error, fields))

    def names(self) -> List[DiagnosticEvent]:
        return [event for event, _, _ in self.events]

    def of(self, event: DiagnosticEvent) -> List[Tuple[Optional[BaseException], Dict[str, Any]]]:
        return [(error, fields) for name, error, fields in self.events if name == event]


def sqlite_url(directory) -> str:
    return f"sqlite+aiosqlite:///{directory}/shop.db"


async def schema_snapshot(connection: DatabaseConnection) -> Dict[str, List[Tuple[str, str, bool]]]:
    """Column names, types and nullability of every table in the store."""

    def _inspect(sync_conn):
        inspector = inspect(sync_conn)
        return {
            table: [(col["name"], str(col["type"]), col["nullable"]) for col in inspector.get_columns(table)]
            for table in inspector.get_table_names()
        }

    async with connection.engine.connect() as conn:
        return await conn.run_sync(_inspect)
