"""AI assistant routes: job search, resume tailoring, and PDF download.

- POST /api/search-jobs - Find postings for a profile description
- POST /api/tailor-resume - Tailor a resume (and cover letter) to a job
- POST /api/download-resume - Render tailored resume text to a PDF
"""

import logging
from io import BytesIO

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse, StreamingResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from autoapply.api.dependencies import get_exporter, get_search_service, get_tailor_service
from autoapply.export.pdf import DEFAULT_FILENAME, PDFExporter, PDFExportError
from autoapply.search.models import JobSearchRequest
from autoapply.search.service import JobSearchError, JobSearchService
from autoapply.tailoring.models import TailorRequest, TailorResult
from autoapply.tailoring.service import ResumeTailorService, TailoringError
from autoapply.tracker.models import JobPosting

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["assistant"])


class DownloadResumeRequest(BaseModel):
    """Body of a PDF download request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    tailored_resume: str = Field(..., description="Resume text to render")


@router.post("/search-jobs", response_model=list[JobPosting])
async def search_jobs(
    request: JobSearchRequest,
    service: JobSearchService = Depends(get_search_service),
) -> list[JobPosting]:
    try:
        return await service.search(request)
    except JobSearchError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post(
    "/tailor-resume",
    response_model=TailorResult,
    response_model_exclude_none=True,
)
async def tailor_resume(
    request: TailorRequest,
    service: ResumeTailorService = Depends(get_tailor_service),
) -> TailorResult:
    try:
        return await service.tailor(request)
    except TailoringError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/download-resume", response_model=None)
async def download_resume(
    request: DownloadResumeRequest,
    exporter: PDFExporter = Depends(get_exporter),
) -> StreamingResponse | PlainTextResponse:
    try:
        pdf_bytes = await run_in_threadpool(exporter.render, request.tailored_resume)
    except PDFExportError as e:
        logger.error(f"/api/download-resume error: {e}")
        return PlainTextResponse("PDF generation failed", status_code=500)

    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{DEFAULT_FILENAME}"'},
    )
