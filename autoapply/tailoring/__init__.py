"""Resume and cover letter tailoring."""

from autoapply.tailoring.models import TailorRequest, TailorResult
from autoapply.tailoring.service import ResumeTailorService, TailoringError

__all__ = ["ResumeTailorService", "TailoringError", "TailorRequest", "TailorResult"]
