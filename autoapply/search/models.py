"""Data models for the job search flow."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from autoapply.tracker.models import JobPosting

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobBoard(str, Enum):
    """Job boards the search prompt can target."""

    INDEED = "Indeed"
    LINKEDIN = "LinkedIn"


class JobSearchRequest(BaseModel):
    """Input to the job search flow."""

    model_config = _CAMEL

    user_profile: str = Field(
        ..., min_length=1, description="Profile text: resume plus preferences"
    )
    job_board: JobBoard = Field(default=JobBoard.LINKEDIN)
    keywords: str | None = Field(default=None, description="Keywords to refine the search")


class SearchResultItem(BaseModel):
    """One job posting as returned by the model (no id yet)."""

    model_config = _CAMEL

    title: str
    company: str
    location: str = ""
    url: str = Field(..., min_length=1)
    description: str = ""
    relevance_score: float = 0.0

    @field_validator("relevance_score", mode="before")
    @classmethod
    def clamp_relevance(cls, v: Any) -> float:
        """Clamp scores into [0, 1]; models occasionally drift outside."""
        if v is None:
            return 0.0
        try:
            score = float(v)
        except (TypeError, ValueError):
            raise ValueError(f"relevanceScore must be a number, got {v!r}") from None
        return min(1.0, max(0.0, score))

    def to_posting(self) -> JobPosting:
        """Convert to a JobPosting with a freshly assigned id."""
        return JobPosting(
            title=self.title,
            company=self.company,
            location=self.location,
            url=self.url,
            description=self.description,
            relevance_score=self.relevance_score,
        )


class JobSearchLLMResponse(BaseModel):
    """LLM response structure for job search."""

    jobs: list[SearchResultItem] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def accept_bare_list(cls, data: Any) -> Any:
        """Some models answer with the array itself instead of an object."""
        if isinstance(data, list):
            return {"jobs": data}
        return data
