"""Application configuration."""

from autoapply.config.settings import (
    Settings,
    StorageBackend,
    get_settings,
    reset_settings,
)

__all__ = ["Settings", "StorageBackend", "get_settings", "reset_settings"]
