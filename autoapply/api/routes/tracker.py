"""Profile, application tracking, and dashboard routes.

- GET/PATCH /api/profile - Read or merge-update the user profile
- GET/POST /api/applications - List (filtered, sorted) or start tracking
- PATCH/DELETE /api/applications/{application_id} - Update or stop tracking
- GET /api/dashboard - Summary counts and per-status breakdown
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from autoapply.api.dependencies import get_store
from autoapply.tracker.models import (
    ApplicationPatch,
    ApplicationStatus,
    JobPosting,
    TrackedApplication,
    UserProfile,
    UserProfilePatch,
)
from autoapply.tracker.store import ApplicationStore
from autoapply.tracker.views import application_counts, select_applications, status_breakdown

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["tracker"])

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TrackApplicationRequest(BaseModel):
    """Body for starting to track a job."""

    model_config = _CAMEL

    job: JobPosting
    status: ApplicationStatus = ApplicationStatus.BOOKMARKED


class DashboardCounts(BaseModel):
    model_config = _CAMEL

    total: int
    applied: int
    interviewing: int


class DashboardResponse(BaseModel):
    """Dashboard summary."""

    model_config = _CAMEL

    counts: DashboardCounts
    status_breakdown: dict[str, int]


@router.get("/profile", response_model=UserProfile)
async def get_profile(store: ApplicationStore = Depends(get_store)) -> UserProfile:
    return store.user_profile


@router.patch("/profile", response_model=UserProfile)
async def update_profile(
    patch: UserProfilePatch,
    store: ApplicationStore = Depends(get_store),
) -> UserProfile:
    return await store.update_user_profile(patch)


@router.get("/applications", response_model=list[TrackedApplication])
async def list_applications(
    status: ApplicationStatus | None = None,
    search: str | None = None,
    store: ApplicationStore = Depends(get_store),
) -> list[TrackedApplication]:
    return select_applications(store.tracked_applications, status=status, search=search)


@router.post("/applications", response_model=TrackedApplication, status_code=201)
async def track_application(
    request: TrackApplicationRequest,
    store: ApplicationStore = Depends(get_store),
) -> TrackedApplication:
    return await store.add_tracked_application(request.job, request.status)


@router.patch("/applications/{application_id}", response_model=TrackedApplication)
async def update_application(
    application_id: str,
    patch: ApplicationPatch,
    store: ApplicationStore = Depends(get_store),
) -> TrackedApplication:
    if store.get_tracked_application(application_id) is None:
        raise HTTPException(status_code=404, detail="Application not found")
    updated = await store.update_tracked_application(application_id, patch)
    if updated is None:
        raise HTTPException(status_code=404, detail="Application not found")
    return updated


@router.delete("/applications/{application_id}", status_code=204)
async def remove_application(
    application_id: str,
    store: ApplicationStore = Depends(get_store),
) -> Response:
    await store.remove_tracked_application(application_id)
    return Response(status_code=204)


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(store: ApplicationStore = Depends(get_store)) -> DashboardResponse:
    applications = store.tracked_applications
    counts = application_counts(applications)
    return DashboardResponse(
        counts=DashboardCounts(**counts.to_dict()),
        status_breakdown={
            status.value: count for status, count in status_breakdown(applications).items()
        },
    )
