"""
Database initialization script.

Connects to the configured store, verifies the schema in development mode and
prints the row counts. Run it when setting up an environment:

    python -m app.db.init_db

Exits with status 1 if the store cannot be reached.
"""

import asyncio
import sys

from app.core.config import get_settings
from app.core.errors import ConfigurationError, StartupError
from app.core.logger import setup_logger
from app.db.database import create_database

logger = setup_logger("app.db.init_db")


async def init_db() -> int:
    """Initialize the database and report its row counts."""
    database = create_database(get_settings())
    try:
        await database.initialize()
        stats = await database.get_database_stats()
        if stats is None:
            logger.warning("Database initialized but statistics are unavailable")
        else:
            print(stats.model_dump_json(by_alias=True))
        print("Database initialized successfully!")
        return 0
    except StartupError as e:
        logger.error(f"Database initialization failed: {str(e)}")
        return 1
    finally:
        await database.connection.dispose()


def main() -> int:
    try:
        return asyncio.run(init_db())
    except ConfigurationError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
