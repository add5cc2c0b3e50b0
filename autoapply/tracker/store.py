"""Application state store.

The ApplicationStore is the single source of truth for the user profile
and the tracked application list. It:
- loads both blobs from a Storage backend on initialize
- applies every mutation to in-memory state first
- re-serializes and writes the affected blob after each mutation
- exposes immutable snapshots for reads
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from autoapply.tracker.models import (
    APPLICATION_LIST,
    ApplicationPatch,
    ApplicationStatus,
    JobPosting,
    TrackedApplication,
    UserProfile,
    UserProfilePatch,
    coerce_timestamp,
    dump_applications,
    dump_profile,
)
from autoapply.tracker.storage import Storage, StorageError, create_storage

if TYPE_CHECKING:
    from autoapply.config.settings import Settings

logger = logging.getLogger(__name__)

PROFILE_KEY = "autoapply_userProfile"
APPLICATIONS_KEY = "autoapply_trackedApplications"


class StoreState(str, Enum):
    """Lifecycle of an ApplicationStore. READY is terminal."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


class StoreError(Exception):
    """Base exception for store operations."""


class StoreNotReadyError(StoreError):
    """Raised when an operation is used before initialize() has completed."""


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ApplicationStore:
    """In-memory profile and application state backed by a Storage port.

    Persistence is best-effort: a failed write is logged and the in-memory
    state stays authoritative.
    """

    def __init__(
        self,
        storage: Storage,
        *,
        namespace: str | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the store.

        Args:
            storage: Backend holding the persisted blobs.
            namespace: Optional prefix scoping both keys to one user.
            clock: Source of "now" for applied dates. Defaults to UTC now.
        """
        self.storage = storage
        self._clock = clock or _utcnow
        prefix = f"{namespace}:" if namespace else ""
        self.profile_key = f"{prefix}{PROFILE_KEY}"
        self.applications_key = f"{prefix}{APPLICATIONS_KEY}"

        self._state = StoreState.UNINITIALIZED
        self._profile: UserProfile | None = None
        self._applications: list[TrackedApplication] = []

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is StoreState.READY

    async def initialize(self) -> None:
        """Load persisted state, substituting defaults for missing or bad blobs.

        Never raises for storage or parse failures; they are logged and the
        affected piece of state falls back to its default.
        """
        if self._state is not StoreState.UNINITIALIZED:
            return

        self._state = StoreState.LOADING

        try:
            await self.storage.initialize()
        except StorageError as e:
            logger.warning(f"Storage initialization failed, using defaults: {e}")

        try:
            self._profile = await self._load_profile()
            self._applications = await self._load_applications()
        finally:
            self._state = StoreState.READY

        logger.info(
            f"Store ready with {len(self._applications)} tracked application(s)"
        )

    async def close(self) -> None:
        """Close the underlying storage."""
        await self.storage.close()

    # Reads

    @property
    def user_profile(self) -> UserProfile:
        """The current profile (frozen snapshot)."""
        self._require_ready()
        return self._profile or UserProfile()

    @property
    def tracked_applications(self) -> tuple[TrackedApplication, ...]:
        """The tracked applications, most recently added first."""
        self._require_ready()
        return tuple(self._applications)

    def get_tracked_application(self, application_id: str) -> TrackedApplication | None:
        """Look up one tracked application by id."""
        self._require_ready()
        for app in self._applications:
            if app.id == application_id:
                return app
        return None

    # Mutations

    async def update_user_profile(
        self, patch: UserProfilePatch | Mapping[str, Any]
    ) -> UserProfile:
        """Shallow-merge ``patch`` onto the profile and persist it.

        Raises:
            pydantic.ValidationError: If a mapping patch names unknown fields.
        """
        self._require_ready()
        if not isinstance(patch, UserProfilePatch):
            patch = UserProfilePatch.model_validate(patch)

        self._profile = (self._profile or UserProfile()).merged(patch)
        await self._write(self.profile_key, dump_profile(self._profile))
        return self._profile

    async def add_tracked_application(
        self,
        job: JobPosting,
        status: ApplicationStatus = ApplicationStatus.BOOKMARKED,
    ) -> TrackedApplication:
        """Start tracking ``job``, replacing any entry with the same URL.

        The new record is placed first. Adding with status Applied stamps
        the applied date with the current time.
        """
        self._require_ready()
        status = ApplicationStatus(status)
        application = TrackedApplication(
            job=job,
            status=status,
            applied_date=self._clock() if status == ApplicationStatus.APPLIED else None,
        )
        self._applications = [application] + [
            app for app in self._applications if app.job.url != job.url
        ]
        await self._write_applications()
        return application

    async def update_tracked_application(
        self,
        application_id: str,
        patch: ApplicationPatch | Mapping[str, Any],
    ) -> TrackedApplication | None:
        """Merge ``patch`` onto the application with ``application_id``.

        The record keeps its position. Setting status Applied on an undated
        record stamps the current time; an existing date is kept. An unknown
        id is a silent no-op and returns None.
        """
        self._require_ready()
        if not isinstance(patch, ApplicationPatch):
            patch = ApplicationPatch.model_validate(patch)

        changes = patch.changes()
        updated: TrackedApplication | None = None
        for index, app in enumerate(self._applications):
            if app.id != application_id:
                continue
            updated = app.model_copy(update=changes)
            if (
                changes.get("status") == ApplicationStatus.APPLIED
                and updated.applied_date is None
            ):
                updated = updated.model_copy(
                    update={"applied_date": coerce_timestamp(self._clock())}
                )
            self._applications[index] = updated
            break

        if updated is None:
            logger.debug(f"No tracked application with id {application_id}")

        await self._write_applications()
        return updated

    async def remove_tracked_application(self, application_id: str) -> None:
        """Stop tracking the application with ``application_id`` (idempotent)."""
        self._require_ready()
        self._applications = [
            app for app in self._applications if app.id != application_id
        ]
        await self._write_applications()

    # Internals

    def _require_ready(self) -> None:
        if self._state is not StoreState.READY:
            raise StoreNotReadyError(
                f"Store is {self._state.value}; call initialize() first"
            )

    async def _read(self, key: str) -> str | None:
        try:
            return await self.storage.get(key)
        except StorageError as e:
            logger.warning(f"Failed to read {key}, using defaults: {e}")
            return None

    async def _load_profile(self) -> UserProfile:
        raw = await self._read(self.profile_key)
        if raw is None:
            return UserProfile()
        try:
            return UserProfile.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable profile blob: {e}")
            return UserProfile()

    async def _load_applications(self) -> list[TrackedApplication]:
        raw = await self._read(self.applications_key)
        if raw is None:
            return []
        try:
            return APPLICATION_LIST.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable applications blob: {e}")
            return []

    async def _write_applications(self) -> None:
        await self._write(self.applications_key, dump_applications(self._applications))

    async def _write(self, key: str, payload: str) -> None:
        try:
            await self.storage.set(key, payload)
        except StorageError as e:
            logger.error(f"Failed to persist {key}; keeping in-memory state: {e}")


def create_store(settings: Settings) -> ApplicationStore:
    """Build an uninitialized store on the configured storage backend."""
    return ApplicationStore(
        create_storage(settings),
        namespace=settings.storage_namespace,
    )
