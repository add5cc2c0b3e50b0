"""Data models for the application tracker.

Contains Pydantic models for:
- UserProfile: the single profile record per store
- JobPosting: a search result or manually tracked job
- TrackedApplication: a job plus its workflow state
- UserProfilePatch / ApplicationPatch: the fields each update may touch

Every entity is frozen; updates produce new instances. Fields serialize
with camelCase aliases, which is the persisted blob layout.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

ENTITY_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)

PATCH_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="forbid",
)


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return str(uuid4())


def coerce_timestamp(value: Any) -> datetime | None:
    """Normalize a timestamp input to an aware UTC datetime.

    Accepts datetimes, dates and ISO-8601 strings (including bare
    ``YYYY-MM-DD``). Naive values are interpreted as UTC. Empty strings
    mean "no date".
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        value = datetime.fromisoformat(value)
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if not isinstance(value, datetime):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class ApplicationStatus(str, Enum):
    """Workflow status of a tracked application."""

    BOOKMARKED = "Bookmarked"
    DRAFT = "Draft"
    APPLIED = "Applied"
    VIEWED = "Viewed"
    INTERVIEWING = "Interviewing"
    OFFER = "Offer"
    REJECTED = "Rejected"


class Address(BaseModel):
    """Postal address; every part is optional."""

    model_config = ENTITY_CONFIG

    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None


class JobPreferences(BaseModel):
    """Job search preferences."""

    model_config = ENTITY_CONFIG

    location: str = ""
    job_titles: str = Field(default="", description="Comma-separated job titles")

    def job_title_list(self) -> list[str]:
        """Split the comma-separated titles into a clean list."""
        return [title.strip() for title in self.job_titles.split(",") if title.strip()]


class UserProfile(BaseModel):
    """The user's profile.

    ``UserProfile()`` is the well-defined empty profile used whenever no
    persisted copy exists.
    """

    model_config = ENTITY_CONFIG

    name: str = ""
    email: str = ""
    phone: str | None = None
    address: Address | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    portfolio_url: str | None = None
    resume_file_name: str | None = None
    resume_content: str | None = Field(
        default=None, description="Raw text extracted from the uploaded resume"
    )
    preferences: JobPreferences = Field(default_factory=JobPreferences)
    cover_letter_template: str | None = None

    def merged(self, patch: UserProfilePatch) -> UserProfile:
        """Return a copy with the patch's explicitly set fields applied."""
        return self.model_copy(update=patch.changes())


class JobPosting(BaseModel):
    """A job posting, keyed for deduplication by its URL."""

    model_config = ENTITY_CONFIG

    id: str = Field(default_factory=new_id)
    title: str
    company: str
    location: str = ""
    url: str
    description: str = ""
    relevance_score: float = Field(default=0.0, ge=0.0, le=1.0)


class TrackedApplication(BaseModel):
    """A tracked job with its workflow state and tailored documents."""

    model_config = ENTITY_CONFIG

    id: str = Field(default_factory=new_id)
    job: JobPosting
    applied_date: datetime | None = None
    status: ApplicationStatus = ApplicationStatus.BOOKMARKED
    notes: str | None = None
    tailored_resume: str | None = None
    tailored_cover_letter: str | None = None

    @field_validator("applied_date", mode="before")
    @classmethod
    def parse_applied_date(cls, v: Any) -> datetime | None:
        """Normalize applied dates to aware UTC datetimes."""
        return coerce_timestamp(v)


class UserProfilePatch(BaseModel):
    """Partial update for UserProfile.

    Only fields passed explicitly are merged, so an unset field never
    overwrites stored data. Unknown fields are rejected.
    """

    model_config = PATCH_CONFIG

    name: str = ""
    email: str = ""
    phone: str | None = None
    address: Address | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    portfolio_url: str | None = None
    resume_file_name: str | None = None
    resume_content: str | None = None
    preferences: JobPreferences = Field(default_factory=JobPreferences)
    cover_letter_template: str | None = None

    def changes(self) -> dict[str, Any]:
        """Return the explicitly set fields."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class ApplicationPatch(BaseModel):
    """Partial update for TrackedApplication.

    ``id`` and ``job`` are not patchable. Unknown fields are rejected.
    """

    model_config = PATCH_CONFIG

    status: ApplicationStatus = ApplicationStatus.BOOKMARKED
    notes: str | None = None
    applied_date: datetime | None = None
    tailored_resume: str | None = None
    tailored_cover_letter: str | None = None

    @field_validator("applied_date", mode="before")
    @classmethod
    def parse_applied_date(cls, v: Any) -> datetime | None:
        """Normalize applied dates to aware UTC datetimes."""
        return coerce_timestamp(v)

    def changes(self) -> dict[str, Any]:
        """Return the explicitly set fields."""
        return {name: getattr(self, name) for name in self.model_fields_set}


APPLICATION_LIST = TypeAdapter(list[TrackedApplication])


def dump_profile(profile: UserProfile) -> str:
    """Serialize a profile to its persisted JSON form."""
    return profile.model_dump_json(by_alias=True)


def dump_applications(applications: list[TrackedApplication]) -> str:
    """Serialize the ordered application list to its persisted JSON form."""
    return APPLICATION_LIST.dump_json(applications, by_alias=True).decode("utf-8")
