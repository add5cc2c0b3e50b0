"""Derived views over tracked applications.

Pure functions: they never mutate their input and hold no state, so
callers recompute them from the store's current snapshot whenever the
data or the filter parameters change.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from autoapply.tracker.models import ApplicationStatus, TrackedApplication

# Undated applications sort as if applied at the epoch, i.e. last.
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


@dataclass(frozen=True)
class ApplicationCounts:
    """Summary counts shown on the dashboard."""

    total: int
    applied: int
    interviewing: int

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "applied": self.applied,
            "interviewing": self.interviewing,
        }


def filter_by_status(
    applications: Iterable[TrackedApplication],
    status: ApplicationStatus | str | None = None,
) -> list[TrackedApplication]:
    """Keep applications with exactly ``status``; None keeps everything."""
    if status is None:
        return list(applications)
    wanted = ApplicationStatus(status)
    return [app for app in applications if app.status == wanted]


def search_applications(
    applications: Iterable[TrackedApplication],
    term: str | None = None,
) -> list[TrackedApplication]:
    """Case-insensitive substring match on job title or company."""
    if not term:
        return list(applications)
    needle = term.lower()
    return [
        app
        for app in applications
        if needle in app.job.title.lower() or needle in app.job.company.lower()
    ]


def sort_by_applied_date(
    applications: Iterable[TrackedApplication],
) -> list[TrackedApplication]:
    """Newest applied date first; ties keep their existing order."""
    return sorted(
        applications,
        key=lambda app: app.applied_date or EPOCH,
        reverse=True,
    )


def select_applications(
    applications: Iterable[TrackedApplication],
    status: ApplicationStatus | str | None = None,
    search: str | None = None,
) -> list[TrackedApplication]:
    """Filter by status, then by search term, then sort by applied date."""
    selected = filter_by_status(applications, status)
    selected = search_applications(selected, search)
    return sort_by_applied_date(selected)


def application_counts(
    applications: Iterable[TrackedApplication],
) -> ApplicationCounts:
    """Count all, Applied, and Interviewing applications."""
    apps = list(applications)
    return ApplicationCounts(
        total=len(apps),
        applied=sum(1 for app in apps if app.status == ApplicationStatus.APPLIED),
        interviewing=sum(
            1 for app in apps if app.status == ApplicationStatus.INTERVIEWING
        ),
    )


def status_breakdown(
    applications: Iterable[TrackedApplication],
) -> dict[ApplicationStatus, int]:
    """Count applications per status, including statuses with zero entries."""
    counts = {status: 0 for status in ApplicationStatus}
    for app in applications:
        counts[app.status] += 1
    return counts
