"""
Database Connection Management Module.

This module owns the single shared connection handle of the data layer: an async
SQLAlchemy engine with a bounded pool, the MetaData and mapper registry every
model is defined on, and a session factory for downstream queries.

Key features:
- Pooled async engine (max 5 connections, no overflow, 30s acquire timeout,
  connections recycled after 10s)
- Authentication probe (`SELECT 1`)
- Non-destructive schema sync: creates missing tables, never alters or drops
- Row counts for the stats reporter

Usage:
- Build one DatabaseConnection per process, usually via `from_settings`
- Pass it to the model registry and the lifecycle manager; never create a second one
"""

from typing import List, Optional, Union

from sqlalchemy import Table, func, inspect, select, text
from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import PoolSettings, Settings
from app.core.logger import setup_logger
from app.db.base import create_mapper_registry

logger = setup_logger("app.db.session")


class DatabaseConnection:
    """
    Shared connection handle for the whole data layer.

    The engine connects lazily: no connection is opened until the first
    authentication, sync or query.
    """

    def __init__(
        self,
        url: Union[str, URL],
        pool: Optional[PoolSettings] = None,
        echo: bool = False,
    ):
        self.pool = pool or PoolSettings()
        self.engine: AsyncEngine = create_async_engine(
            url,
            echo=echo,
            pool_pre_ping=True,
            pool_size=self.pool.max_size,
            max_overflow=0,
            pool_timeout=self.pool.acquire_timeout,
            pool_recycle=self.pool.idle_timeout,
        )
        self.metadata, self.mapper_registry = create_mapper_registry()
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseConnection":
        """
        Build the connection from application settings.

        SQL statements are echoed in development mode only.
        """
        return cls(settings.database_url, pool=settings.pool, echo=settings.is_development)

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    async def authenticate(self) -> None:
        """
        Check out a pooled connection and run a trivial query.

        Raises whatever the driver raises; callers decide how to report it.
        """
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def table_names(self) -> List[str]:
        """
        List the tables that currently exist in the store.
        """
        async with self.engine.connect() as conn:
            return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

    async def sync(self) -> List[str]:
        """
        Create tables that are defined in the metadata but missing in the store.

        Existing tables are left exactly as they are: no column is added,
        altered or dropped.

        Returns:
            List[str]: Names of the tables that had to be created.
        """
        async with self.engine.begin() as conn:
            existing = set(await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names()))
            missing = [table for table in self.metadata.sorted_tables if table.name not in existing]
            if missing:
                await conn.run_sync(self.metadata.create_all, tables=missing, checkfirst=True)
        created = [table.name for table in missing]
        if created:
            logger.debug(f"Created missing tables: {', '.join(created)}")
        return created

    async def count(self, table: Table) -> int:
        """
        Count the rows of a table on its own pooled connection.
        """
        async with self.engine.connect() as conn:
            result = await conn.execute(select(func.count()).select_from(table))
            return int(result.scalar_one())

    async def dispose(self) -> None:
        """
        Close every pooled connection.

        Production processes rely on process exit instead; this exists for
        scripts and tests that open several engines in one process.
        """
        await self.engine.dispose()
