"""Request-scoped accessors for objects shared through ``app.state``."""

from __future__ import annotations

from fastapi import HTTPException, Request

from autoapply.export.pdf import PDFExporter
from autoapply.search.service import JobSearchService
from autoapply.tailoring.service import ResumeTailorService
from autoapply.tracker.store import ApplicationStore


def get_store(request: Request) -> ApplicationStore:
    store: ApplicationStore | None = getattr(request.app.state, "store", None)
    if store is None or not store.is_ready:
        raise HTTPException(status_code=503, detail="Store is not ready")
    return store


def get_search_service(request: Request) -> JobSearchService:
    return request.app.state.search_service


def get_tailor_service(request: Request) -> ResumeTailorService:
    return request.app.state.tailor_service


def get_exporter(request: Request) -> PDFExporter:
    return request.app.state.exporter
