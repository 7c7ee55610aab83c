"""FastAPI application for Parcelbook.

Provides REST endpoints for projects and their nested entities, derived
ledger figures, portfolio summaries, report export and developer notes.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from parcelbook import __version__
from parcelbook.core.config import Settings
from parcelbook.export.renderer import ReportRenderer
from parcelbook.ledger.catalog import CategoryCatalog
from parcelbook.ledger.models import Project
from parcelbook.projects.autosave import EditingSession
from parcelbook.projects.store import InMemoryProjectStore, NoteStore
from parcelbook.repositories.protocols import NoteRepository, ProjectRepository
from parcelbook.web.notes_router import router as notes_router
from parcelbook.web.portfolio_router import router as portfolio_router
from parcelbook.web.projects_router import router as projects_router

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str = __version__
    storage: str
    environment: str


def create_app(
    settings: Settings | None = None,
    project_store: ProjectRepository | None = None,
    note_store: NoteRepository | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Uses the factory pattern so tests can create isolated app instances
    with their own stores.

    Args:
        settings: Application settings. Defaults to Settings().
        project_store: Optional pre-built project repository.
        note_store: Optional pre-built note repository.

    Returns:
        A configured FastAPI instance.
    """
    if settings is None:
        settings = Settings()

    logging.getLogger("parcelbook").setLevel(settings.log_level.upper())

    db_manager = None
    if settings.storage.backend == "sql" and (project_store is None or note_store is None):
        from parcelbook.db.engine import DatabaseManager
        from parcelbook.repositories.postgres.notes import PostgresNoteRepository
        from parcelbook.repositories.postgres.projects import PostgresProjectRepository

        db_manager = DatabaseManager(settings.storage.database_url, echo=settings.storage.echo)
        project_store = project_store or PostgresProjectRepository(db_manager)
        note_store = note_store or PostgresNoteRepository(db_manager)
        logger.info("Using SQL storage at %s", settings.storage.database_url)

    if project_store is None:
        project_store = InMemoryProjectStore()
    if note_store is None:
        note_store = NoteStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if db_manager is not None:
            await db_manager.create_all()
        yield
        if db_manager is not None:
            await db_manager.close()

    app = FastAPI(
        title="Parcelbook",
        description="Bookkeeping for real-estate development projects",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    # CORS for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store on app state for access in route handlers
    app.state.settings = settings
    app.state.project_store = project_store
    app.state.note_store = note_store
    catalog = CategoryCatalog(settings.ledger.catalog_path)
    app.state.catalog = catalog
    app.state.report_renderer = ReportRenderer(settings.report)

    def open_editing_session(project: Project) -> EditingSession:
        """Editing session that auto-saves to this app's project store."""
        return EditingSession(
            project,
            project_store,
            catalog,
            delay_ms=settings.autosave.debounce_ms,
        )

    app.state.open_editing_session = open_editing_session
    if db_manager is not None:
        app.state.db_manager = db_manager

    app.include_router(projects_router)
    app.include_router(portfolio_router)
    app.include_router(notes_router)

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check() -> dict[str, Any]:
        return {
            "status": "healthy",
            "service": "parcelbook",
            "storage": "sql" if db_manager is not None else "memory",
            "environment": settings.environment,
        }

    return app
