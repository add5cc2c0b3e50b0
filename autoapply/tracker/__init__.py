"""Application tracking state.

This module provides the application state store: the user profile and
the tracked application list, persisted through a pluggable key-value
backend, plus pure derived views for listing and dashboards.

Public API:
- ApplicationStore: Single source of truth for profile and applications
- Storage, SQLiteStorage, JSONFileStorage, MemoryStorage: Persistence backends
- UserProfile, JobPosting, TrackedApplication: Data models
- UserProfilePatch, ApplicationPatch: Partial updates
- ApplicationStatus: Enum for application status values
"""

from autoapply.tracker.models import (
    Address,
    ApplicationPatch,
    ApplicationStatus,
    JobPosting,
    JobPreferences,
    TrackedApplication,
    UserProfile,
    UserProfilePatch,
)
from autoapply.tracker.storage import (
    JSONFileStorage,
    MemoryStorage,
    SQLiteStorage,
    Storage,
    StorageError,
    create_storage,
)
from autoapply.tracker.store import (
    ApplicationStore,
    StoreError,
    StoreNotReadyError,
    StoreState,
    create_store,
)

__all__ = [
    "ApplicationStore",
    "StoreState",
    "StoreError",
    "StoreNotReadyError",
    "Storage",
    "StorageError",
    "SQLiteStorage",
    "JSONFileStorage",
    "MemoryStorage",
    "create_storage",
    "create_store",
    "Address",
    "JobPreferences",
    "UserProfile",
    "UserProfilePatch",
    "JobPosting",
    "TrackedApplication",
    "ApplicationPatch",
    "ApplicationStatus",
]
