"""Configuration settings for AutoApply."""

from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageBackend(str, Enum):
    """Backing store for the persisted profile and application blobs."""

    SQLITE = "sqlite"
    JSON = "json"
    MEMORY = "memory"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage
    storage_backend: StorageBackend = Field(
        default=StorageBackend.SQLITE,
        description="Persistence backend: 'sqlite', 'json', or 'memory'",
    )
    store_db_path: Path = Field(
        default=Path("./data/autoapply.db"),
        description="Path to the SQLite key-value database (sqlite backend)",
    )
    store_dir: Path = Field(
        default=Path("./data/store"),
        description="Directory holding one JSON file per key (json backend)",
    )
    storage_namespace: str | None = Field(
        default=None,
        description="Optional prefix scoping the persisted keys to one user",
    )

    # Paths
    output_dir: Path = Field(
        default=Path("./artifacts"),
        description="Directory for exported PDF documents",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR",
    )

    @field_validator("storage_backend", mode="before")
    @classmethod
    def validate_storage_backend(cls, v: str | StorageBackend) -> StorageBackend:
        """Convert string backend names to StorageBackend."""
        if isinstance(v, StorageBackend):
            return v
        if isinstance(v, str):
            try:
                return StorageBackend(v.lower().strip())
            except ValueError:
                raise ValueError(
                    f"Invalid storage backend: {v}. Must be 'sqlite', 'json' or 'memory'"
                ) from None
        raise ValueError(f"Invalid storage backend type: {type(v)}")

    @field_validator("storage_namespace", mode="before")
    @classmethod
    def normalize_namespace(cls, v: str | None) -> str | None:
        """Treat blank namespaces as unset."""
        if v is None:
            return None
        value = str(v).strip()
        return value or None

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


# Singleton instance for easy import
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the application settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (useful for testing)."""
    global _settings
    _settings = None
