"""LLM access shared by the AI flows."""

from autoapply.llm.client import LLMClient, LLMError
from autoapply.llm.config import LLMConfig, get_llm_config, reset_llm_config

__all__ = ["LLMClient", "LLMError", "LLMConfig", "get_llm_config", "reset_llm_config"]
