"""Configuration for the LLM-backed flows (job search and tailoring)."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMConfig(BaseSettings):
    """LLM provider settings.

    Settings can be overridden via environment variables prefixed with LLM_.

    Example: LLM_PROVIDER=anthropic LLM_MODEL=claude-3-5-sonnet-latest
    """

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="openai",
        description="LLM provider (openai, anthropic, gemini, etc.)",
    )
    model: str = Field(
        default="gpt-4o-mini",
        description="LLM model name",
    )
    api_key: str | None = Field(
        default=None,
        description="API key for LLM provider",
    )
    base_url: str | None = Field(
        default=None,
        description="Base URL for OpenAI-compatible endpoints",
    )
    max_retries: Annotated[int, Field(ge=0)] = Field(
        default=0,
        description="Extra attempts after a failed call (0 = single request)",
    )
    timeout: Annotated[float, Field(gt=0)] = Field(
        default=120.0,
        description="Timeout in seconds for LLM calls",
    )

    @field_validator("provider", mode="before")
    @classmethod
    def normalize_provider(cls, v: str) -> str:
        """Lower-case the provider name."""
        if not isinstance(v, str) or not v.strip():
            raise ValueError("provider must be a non-empty string")
        return v.strip().lower()


# Singleton instance
_llm_config: LLMConfig | None = None


def get_llm_config() -> LLMConfig:
    """Get the LLM configuration singleton."""
    global _llm_config
    if _llm_config is None:
        _llm_config = LLMConfig()
    return _llm_config


def reset_llm_config() -> None:
    """Reset the configuration singleton (useful for testing)."""
    global _llm_config
    _llm_config = None
