"""LLM-backed job search.

Example:
    from autoapply.search import JobSearchService

    service = JobSearchService()
    postings = await service.search_for_profile(profile, "Indeed", "python")
"""

from autoapply.search.models import JobBoard, JobSearchRequest, SearchResultItem
from autoapply.search.service import (
    JobSearchError,
    JobSearchService,
    ProfileIncompleteError,
    build_profile_summary,
)

__all__ = [
    "JobSearchService",
    "JobSearchError",
    "ProfileIncompleteError",
    "JobSearchRequest",
    "SearchResultItem",
    "JobBoard",
    "build_profile_summary",
]
