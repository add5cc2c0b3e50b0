"""Data models for resume and cover letter tailoring."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TailorRequest(BaseModel):
    """Input to the tailoring flow."""

    model_config = _CAMEL

    resume: str = Field(..., min_length=1, description="The user provided resume")
    job_description: str = Field(
        ..., min_length=1, description="Job description to tailor the resume to"
    )
    cover_letter: str | None = Field(default=None, description="The user provided cover letter")
    job_title: str | None = Field(default=None, description="Target job title")

    @field_validator("cover_letter", "job_title", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def has_cover_letter(self) -> bool:
        return self.cover_letter is not None


class TailorResult(BaseModel):
    """Output of the tailoring flow."""

    model_config = _CAMEL

    tailored_resume: str = Field(..., description="The tailored resume")
    tailored_cover_letter: str | None = Field(
        default=None, description="The tailored cover letter"
    )
