"""
orderkeep FastAPI application entry point.

Run locally:
  uvicorn main:app --reload --port 8000
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from api.documents import router as documents_router
from api.health import router as health_router
from config import Settings, get_settings
from database.adapter import DocumentStore
from database.connection import initialize_database
from logging_setup import configure_logging


logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI app; settings default to the environment."""

    settings = settings or get_settings()
    app = FastAPI(
        debug=settings.debug,
        title="orderkeep - Order-preserving JSON storage",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.include_router(health_router, prefix="/api", tags=["health"])
    app.include_router(documents_router, prefix="/api", tags=["documents"])

    @app.on_event("startup")
    def startup() -> None:
        """Initialize settings, logging, database schema and the document store."""

        configure_logging(settings)
        app.state.settings = settings

        print("=" * 60)
        print("[orderkeep] Order-preserving JSON storage")
        print("=" * 60)

        # Database auto-initialize on first run.
        initialize_database(settings)
        app.state.store = DocumentStore(settings)
        logger.info("Using database at %s", settings.database_path)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
