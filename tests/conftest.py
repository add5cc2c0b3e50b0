"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime

import pytest

from autoapply.tracker.models import JobPosting
from autoapply.tracker.storage import MemoryStorage
from autoapply.tracker.store import ApplicationStore

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

ENV_KEYS_TO_REMOVE = [
    "STORAGE_BACKEND",
    "STORE_DB_PATH",
    "STORE_DIR",
    "STORAGE_NAMESPACE",
    "OUTPUT_DIR",
    "LOG_LEVEL",
    "LLM_PROVIDER",
    "LLM_MODEL",
    "LLM_API_KEY",
    "LLM_BASE_URL",
    "LLM_MAX_RETRIES",
    "LLM_TIMEOUT",
]


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo configure_logging() so caplog sees package records."""
    yield
    from autoapply.utils.logging import reset_logging

    reset_logging()


@pytest.fixture
def isolated_env(monkeypatch):
    """Remove AutoApply env vars and reset cached settings."""
    from autoapply.config.settings import reset_settings
    from autoapply.llm.config import reset_llm_config

    for key in ENV_KEYS_TO_REMOVE:
        monkeypatch.delenv(key, raising=False)
    reset_settings()
    reset_llm_config()
    yield
    reset_settings()
    reset_llm_config()


@pytest.fixture
def fixed_clock():
    """Clock returning a constant UTC timestamp."""
    return lambda: FIXED_NOW


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
async def store(memory_storage, fixed_clock) -> ApplicationStore:
    """An initialized store over empty in-memory storage."""
    store = ApplicationStore(memory_storage, clock=fixed_clock)
    await store.initialize()
    return store


@pytest.fixture
def sample_job() -> JobPosting:
    return JobPosting(
        id="job-1",
        title="Backend Engineer",
        company="Acme",
        location="Remote",
        url="https://example.com/jobs/1",
        description="Build Python services.",
        relevance_score=0.8,
    )


@pytest.fixture
def make_job():
    """Factory for distinct postings numbered ``n``."""

    def _make(n: int, **overrides) -> JobPosting:
        fields = {
            "id": f"job-{n}",
            "title": f"Engineer {n}",
            "company": f"Company {n}",
            "url": f"https://example.com/jobs/{n}",
        }
        fields.update(overrides)
        return JobPosting(**fields)

    return _make
