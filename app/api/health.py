"""
@file: health.py
@description:
Health check endpoints for the shop backend.

- GET /health: the process is up (no external dependencies)
- GET /health/db: readiness probe; True if the store answers
- GET /health/db/stats: row counts per entity, 503 if unavailable

@dependencies:
- FastAPI APIRouter for route definitions.
- app.db.database: The assembled data layer stored on app.state
- app.core.logger: For component-specific logging

@notes:
- The database endpoints never raise on store failures; the data layer turns
  them into a False or None result.
"""

from fastapi import APIRouter, HTTPException, Request

from app.core.logger import setup_logger
from app.db.database import Database

# Create a component-specific logger
logger = setup_logger("app.api.health")

# Create a new router instance for health checks
router = APIRouter()


def _database(request: Request) -> Database:
    return request.app.state.database


@router.get("/health", tags=["Health"])
async def health_check():
    """
    Health Check Endpoint

    Returns:
        dict: A dictionary containing status and message.
    """
    logger.debug("Health check requested")
    return {
        "status": "OK",
        "message": "Health check successful"
    }


@router.get("/health/db", tags=["Health"])
async def health_db_check(request: Request):
    """
    Check database connectivity through the pooled connection.

    Returns:
        dict: Whether the store is reachable and the lifecycle state.
    """
    database = _database(request)
    ok = await database.test_connection()
    return {
        "database": "ok" if ok else "unreachable",
        "ok": ok,
        "state": database.lifecycle.state.value,
    }


@router.get("/health/db/stats", tags=["Health"])
async def health_db_stats(request: Request):
    """
    Row counts for every shop entity.

    Raises:
        HTTPException: 503 if any count query failed.
    """
    stats = await _database(request).get_database_stats()
    if stats is None:
        logger.warning("Database statistics requested but unavailable")
        raise HTTPException(status_code=503, detail="Database statistics unavailable")
    return stats.model_dump(by_alias=True)
