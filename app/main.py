"""
Main application entry point for the shop backend.

This module builds the FastAPI application and runs the data layer bootstrap in
its lifespan: the database is initialized once at startup, and startup aborts
if the store cannot be reached.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.health import router as health_router
from app.core.config import get_settings
from app.db.database import Database, create_database


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        database: A prebuilt data layer. If None, one is created from the
            environment settings when the application starts.

    Returns:
        FastAPI: The configured application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.database is None:
            app.state.database = create_database(get_settings())
        await app.state.database.initialize()
        try:
            yield
        finally:
            await app.state.database.connection.dispose()

    app = FastAPI(
        title="Shop API",
        description="Backend API for the shop catalog and orders",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.database = database

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Restrict this in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api/v1")

    # Root endpoint for basic health check
    @app.get("/")
    async def root():
        """
        Root endpoint providing a simple health check and API information.
        """
        return {
            "status": "online",
            "api": "Shop API",
            "version": "0.1.0"
        }

    return app


app = create_app()

if __name__ == "__main__":
    # Run the API with uvicorn when script is executed directly
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
