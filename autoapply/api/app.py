"""FastAPI application exposing the store and the AI flows over HTTP.

The store is created (unless one is injected) and initialized in the
lifespan, then shared with every route through ``app.state``.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from pydantic import BaseModel

from autoapply import __version__
from autoapply.api.routes import assistant_router, tracker_router
from autoapply.config.settings import Settings, get_settings
from autoapply.export.pdf import PDFExporter
from autoapply.search.service import JobSearchService
from autoapply.tailoring.service import ResumeTailorService
from autoapply.tracker.store import ApplicationStore, create_store

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    timestamp: datetime
    store_ready: bool


def create_app(
    store: ApplicationStore | None = None,
    *,
    settings: Settings | None = None,
    search_service: JobSearchService | None = None,
    tailor_service: ResumeTailorService | None = None,
    exporter: PDFExporter | None = None,
) -> FastAPI:
    """Build the API application.

    Args:
        store: Store to serve. Built from settings at startup if omitted.
        settings: Settings used for anything not injected.
        search_service: Job search flow. Built at startup if omitted.
        tailor_service: Tailoring flow. Built at startup if omitted.
        exporter: PDF exporter. Built from settings at startup if omitted.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        cfg = settings or get_settings()
        app.state.store = store or create_store(cfg)
        app.state.search_service = search_service or JobSearchService()
        app.state.tailor_service = tailor_service or ResumeTailorService()
        app.state.exporter = exporter or PDFExporter(output_dir=cfg.output_dir)

        await app.state.store.initialize()
        logger.info("API ready")
        try:
            yield
        finally:
            await app.state.store.close()

    app = FastAPI(
        title="AutoApply",
        version=__version__,
        description="Job search, resume tailoring, and application tracking",
        lifespan=lifespan,
    )

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        current = getattr(app.state, "store", None)
        return HealthResponse(
            timestamp=datetime.now(UTC),
            store_ready=bool(current and current.is_ready),
        )

    app.include_router(tracker_router)
    app.include_router(assistant_router)
    return app


app = create_app()
