"""Tests for Settings configuration class."""

from pathlib import Path

import pytest
from pydantic import ValidationError


class TestSettingsDefaults:
    """Test that Settings loads sensible defaults."""

    def test_settings_loads_with_defaults(self, isolated_env):
        """Settings should load with default values when no env vars are set."""
        from autoapply.config.settings import Settings, StorageBackend

        settings = Settings(_env_file=None)

        assert settings.storage_backend == StorageBackend.SQLITE
        assert settings.store_db_path == Path("./data/autoapply.db")
        assert settings.store_dir == Path("./data/store")
        assert settings.storage_namespace is None
        assert settings.output_dir == Path("./artifacts")
        assert settings.log_level == "INFO"


class TestSettingsFromEnvironment:
    """Test that environment variables override defaults."""

    def test_env_overrides_storage(self, isolated_env, monkeypatch, tmp_path):
        from autoapply.config.settings import Settings, StorageBackend

        monkeypatch.setenv("STORAGE_BACKEND", "JSON")
        monkeypatch.setenv("STORE_DIR", str(tmp_path / "store"))
        monkeypatch.setenv("STORAGE_NAMESPACE", "alice")

        settings = Settings(_env_file=None)

        assert settings.storage_backend == StorageBackend.JSON
        assert settings.store_dir == tmp_path / "store"
        assert settings.storage_namespace == "alice"

    def test_blank_namespace_is_unset(self, isolated_env, monkeypatch):
        from autoapply.config.settings import Settings

        monkeypatch.setenv("STORAGE_NAMESPACE", "   ")

        assert Settings(_env_file=None).storage_namespace is None

    def test_log_level_is_uppercased(self, isolated_env, monkeypatch):
        from autoapply.config.settings import Settings

        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert Settings(_env_file=None).log_level == "DEBUG"


class TestSettingsValidation:
    """Test rejection of invalid values."""

    def test_invalid_backend_raises(self, isolated_env):
        from autoapply.config.settings import Settings

        with pytest.raises(ValidationError, match="Invalid storage backend"):
            Settings(_env_file=None, storage_backend="redis")

    def test_invalid_log_level_raises(self, isolated_env):
        from autoapply.config.settings import Settings

        with pytest.raises(ValidationError, match="Invalid log level"):
            Settings(_env_file=None, log_level="LOUD")


class TestSettingsSingleton:
    """Test get_settings/reset_settings."""

    def test_get_settings_returns_same_instance(self, isolated_env):
        from autoapply.config.settings import get_settings

        assert get_settings() is get_settings()

    def test_reset_settings_builds_new_instance(self, isolated_env):
        from autoapply.config.settings import get_settings, reset_settings

        first = get_settings()
        reset_settings()

        assert get_settings() is not first
