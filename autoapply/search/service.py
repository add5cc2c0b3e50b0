"""Job search service.

Asks the LLM for postings matching a profile on a chosen job board and
returns them as JobPosting records ready to be tracked.
"""

from __future__ import annotations

import logging

from autoapply.llm.client import LLMClient, LLMError
from autoapply.llm.config import LLMConfig
from autoapply.search.models import JobBoard, JobSearchLLMResponse, JobSearchRequest
from autoapply.search.prompts import JOB_SEARCH_SYSTEM_PROMPT, build_job_search_prompt
from autoapply.tracker.models import JobPosting, UserProfile

logger = logging.getLogger(__name__)


class JobSearchError(Exception):
    """Raised when a job search cannot be completed."""


class ProfileIncompleteError(JobSearchError):
    """Raised when the profile lacks the resume text a search needs."""


def build_profile_summary(profile: UserProfile) -> str:
    """Render the profile as the free-text description sent to the search flow."""
    prefs = profile.preferences
    return (
        f"Resume: {profile.resume_content or ''}\n"
        f"Preferences: Location - {prefs.location}, Job Titles - {prefs.job_titles}"
    )


class JobSearchService:
    """Service for LLM-backed job search."""

    def __init__(
        self,
        config: LLMConfig | None = None,
        llm: LLMClient | None = None,
    ):
        """Initialize the search service.

        Args:
            config: Optional LLMConfig. Uses global config if not provided.
            llm: Optional pre-built client (mainly for tests).
        """
        self.llm = llm or LLMClient(config=config)

    async def search(self, request: JobSearchRequest) -> list[JobPosting]:
        """Run a job search.

        Args:
            request: Profile text, job board, and optional keywords.

        Returns:
            Postings in the order the model ranked them, each with a new id.

        Raises:
            JobSearchError: If the LLM call fails or returns unusable output.
        """
        logger.info(f"Searching {request.job_board.value} for relevant jobs")
        try:
            response = await self.llm.generate_structured(
                prompt=build_job_search_prompt(request),
                output_model=JobSearchLLMResponse,
                system_prompt=JOB_SEARCH_SYSTEM_PROMPT,
            )
        except LLMError as e:
            logger.error(f"Job search failed: {e}")
            raise JobSearchError(
                "An error occurred while searching for jobs. Please try again."
            ) from e

        postings = [item.to_posting() for item in response.jobs]
        logger.info(f"Found {len(postings)} potential jobs")
        return postings

    async def search_for_profile(
        self,
        profile: UserProfile,
        job_board: JobBoard | str = JobBoard.LINKEDIN,
        keywords: str | None = None,
    ) -> list[JobPosting]:
        """Search using the stored profile.

        Raises:
            ProfileIncompleteError: If the profile has no resume content.
            JobSearchError: If the search itself fails.
        """
        if not profile.resume_content:
            raise ProfileIncompleteError(
                "Please upload your resume and complete your profile before searching for jobs."
            )
        request = JobSearchRequest(
            user_profile=build_profile_summary(profile),
            job_board=JobBoard(job_board),
            keywords=keywords or None,
        )
        return await self.search(request)
