"""Tests for tracker data models."""

import json
from datetime import UTC, date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from autoapply.tracker.models import (
    ApplicationPatch,
    ApplicationStatus,
    JobPosting,
    JobPreferences,
    TrackedApplication,
    UserProfile,
    UserProfilePatch,
    coerce_timestamp,
    dump_applications,
    dump_profile,
)


class TestApplicationStatus:
    """Test the status enum."""

    def test_has_seven_statuses_in_workflow_order(self):
        assert [s.value for s in ApplicationStatus] == [
            "Bookmarked",
            "Draft",
            "Applied",
            "Viewed",
            "Interviewing",
            "Offer",
            "Rejected",
        ]

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValueError):
            ApplicationStatus("Ghosted")


class TestUserProfile:
    """Test the profile model."""

    def test_empty_profile_defaults(self):
        profile = UserProfile()
        assert profile.name == ""
        assert profile.email == ""
        assert profile.resume_content is None
        assert profile.preferences == JobPreferences()

    def test_profile_is_frozen(self):
        profile = UserProfile(name="Ada")
        with pytest.raises(ValidationError):
            profile.name = "Grace"

    def test_serializes_with_camel_case_keys(self):
        profile = UserProfile(
            name="Ada",
            linkedin_url="https://linkedin.com/in/ada",
            preferences=JobPreferences(location="Remote", job_titles="Engineer, Architect"),
        )
        data = json.loads(dump_profile(profile))

        assert data["linkedinUrl"] == "https://linkedin.com/in/ada"
        assert data["preferences"]["jobTitles"] == "Engineer, Architect"
        assert "linkedin_url" not in data

    def test_parses_camel_case_blob(self):
        blob = '{"name": "Ada", "resumeContent": "text", "preferences": {"jobTitles": "Dev"}}'
        profile = UserProfile.model_validate_json(blob)

        assert profile.resume_content == "text"
        assert profile.preferences.job_titles == "Dev"

    def test_job_title_list_splits_and_trims(self):
        prefs = JobPreferences(job_titles=" Engineer , ,Architect ")
        assert prefs.job_title_list() == ["Engineer", "Architect"]


class TestUserProfilePatch:
    """Test partial profile updates."""

    def test_changes_only_includes_explicit_fields(self):
        patch = UserProfilePatch(name="Ada")
        assert patch.changes() == {"name": "Ada"}

    def test_explicit_none_is_a_change(self):
        patch = UserProfilePatch.model_validate({"phone": None})
        assert patch.changes() == {"phone": None}

    def test_accepts_camel_case_keys(self):
        patch = UserProfilePatch.model_validate({"resumeContent": "text"})
        assert patch.changes() == {"resume_content": "text"}

    def test_unknown_field_is_rejected(self):
        with pytest.raises(ValidationError):
            UserProfilePatch.model_validate({"favouriteColour": "blue"})

    def test_merged_is_shallow(self):
        profile = UserProfile(
            name="Ada",
            email="ada@example.com",
            preferences=JobPreferences(location="London", job_titles="Engineer"),
        )
        merged = profile.merged(
            UserProfilePatch(preferences=JobPreferences(job_titles="Architect"))
        )

        assert merged.name == "Ada"
        assert merged.email == "ada@example.com"
        assert merged.preferences == JobPreferences(location="", job_titles="Architect")
        assert profile.preferences.location == "London"


class TestJobPosting:
    """Test the job posting model."""

    def test_id_is_generated(self):
        a = JobPosting(title="Dev", company="A", url="https://a.example")
        b = JobPosting(title="Dev", company="A", url="https://a.example")
        assert a.id and b.id
        assert a.id != b.id

    def test_relevance_score_must_be_in_range(self):
        with pytest.raises(ValidationError):
            JobPosting(title="Dev", company="A", url="https://a.example", relevance_score=1.5)


class TestTrackedApplication:
    """Test the tracked application model."""

    def test_defaults(self, sample_job):
        app = TrackedApplication(job=sample_job)
        assert app.status == ApplicationStatus.BOOKMARKED
        assert app.applied_date is None
        assert app.notes is None

    def test_round_trips_through_persisted_layout(self, sample_job):
        app = TrackedApplication(
            id="app-1",
            job=sample_job,
            status=ApplicationStatus.APPLIED,
            applied_date=datetime(2024, 3, 2, 9, 30, tzinfo=UTC),
            tailored_resume="resume",
        )
        data = json.loads(dump_applications([app]))[0]

        assert data["appliedDate"].startswith("2024-03-02T09:30:00")
        assert data["tailoredResume"] == "resume"
        assert data["job"]["relevanceScore"] == 0.8
        assert TrackedApplication.model_validate(data) == app


class TestCoerceTimestamp:
    """Test applied date normalization."""

    def test_none_and_blank(self):
        assert coerce_timestamp(None) is None
        assert coerce_timestamp("  ") is None

    def test_date_only_string_is_midnight_utc(self):
        assert coerce_timestamp("2024-03-02") == datetime(2024, 3, 2, tzinfo=UTC)

    def test_date_object(self):
        assert coerce_timestamp(date(2024, 3, 2)) == datetime(2024, 3, 2, tzinfo=UTC)

    def test_naive_datetime_is_treated_as_utc(self):
        assert coerce_timestamp(datetime(2024, 3, 2, 8)) == datetime(2024, 3, 2, 8, tzinfo=UTC)

    def test_offset_is_converted_to_utc(self):
        value = datetime(2024, 3, 2, 10, tzinfo=timezone(timedelta(hours=2)))
        result = coerce_timestamp(value)
        assert result == datetime(2024, 3, 2, 8, tzinfo=UTC)
        assert result.tzinfo == UTC

    def test_garbage_is_rejected_by_models(self, sample_job):
        with pytest.raises(ValidationError):
            TrackedApplication(job=sample_job, applied_date="not a date")


class TestApplicationPatch:
    """Test partial application updates."""

    def test_changes_only_includes_explicit_fields(self):
        patch = ApplicationPatch(notes="Called recruiter")
        assert patch.changes() == {"notes": "Called recruiter"}

    def test_id_and_job_are_not_patchable(self, sample_job):
        with pytest.raises(ValidationError):
            ApplicationPatch.model_validate({"id": "other"})
        with pytest.raises(ValidationError):
            ApplicationPatch.model_validate({"job": sample_job.model_dump()})

    def test_status_string_is_parsed(self):
        patch = ApplicationPatch.model_validate({"status": "Interviewing"})
        assert patch.changes() == {"status": ApplicationStatus.INTERVIEWING}
