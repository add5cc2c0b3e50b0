"""Resume tailoring service.

Rewrites a resume (and optionally a cover letter) toward a job description.
"""

from __future__ import annotations

import logging

from autoapply.llm.client import LLMClient, LLMError
from autoapply.llm.config import LLMConfig
from autoapply.tailoring.models import TailorRequest, TailorResult
from autoapply.tailoring.prompts import TAILOR_SYSTEM_PROMPT, build_tailor_prompt

logger = logging.getLogger(__name__)


class TailoringError(Exception):
    """Raised when tailoring cannot be completed."""


class ResumeTailorService:
    """Service for tailoring resumes and cover letters.

    When the request carries no cover letter the cover-letter part is
    skipped, and any cover letter the model produces anyway is dropped.
    """

    def __init__(
        self,
        config: LLMConfig | None = None,
        llm: LLMClient | None = None,
    ):
        """Initialize the tailoring service.

        Args:
            config: Optional LLMConfig. Uses global config if not provided.
            llm: Optional pre-built client (mainly for tests).
        """
        self.llm = llm or LLMClient(config=config)

    async def tailor(self, request: TailorRequest) -> TailorResult:
        """Tailor the resume in ``request`` to its job description.

        Raises:
            TailoringError: If the LLM call fails or returns no resume.
        """
        logger.info(
            "Tailoring resume"
            + (f" for {request.job_title}" if request.job_title else "")
            + (" with cover letter" if request.has_cover_letter else "")
        )
        try:
            result = await self.llm.generate_structured(
                prompt=build_tailor_prompt(request),
                output_model=TailorResult,
                system_prompt=TAILOR_SYSTEM_PROMPT,
            )
        except LLMError as e:
            logger.error(f"Tailoring failed: {e}")
            raise TailoringError(f"Failed to tailor resume: {e}") from e

        if not result.tailored_resume.strip():
            raise TailoringError("Failed to tailor resume: model returned an empty resume")

        if not request.has_cover_letter and result.tailored_cover_letter is not None:
            logger.debug("Discarding cover letter produced without an input cover letter")
            result = result.model_copy(update={"tailored_cover_letter": None})

        return result
