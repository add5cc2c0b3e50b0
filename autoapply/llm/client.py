"""LLM client shared by the job search and tailoring flows.

Wraps LiteLLM so callers send a prompt and get back a validated Pydantic
model, with a single ``LLMError`` for every failure mode.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, TypeVar

from litellm import Timeout, acompletion
from pydantic import BaseModel, ValidationError

from autoapply.llm.config import LLMConfig, get_llm_config

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class LLMError(Exception):
    """Exception raised when LLM operations fail."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class LLMClient:
    """Structured-output LLM client.

    By default every call is a single request; ``max_retries`` adds linear
    backoff retries for transport errors only. Parse and validation
    errors are never retried.
    """

    def __init__(self, config: LLMConfig | None = None):
        """Initialize the LLM client.

        Args:
            config: Optional LLMConfig. Uses global config if not provided.
        """
        self.config = config or get_llm_config()
        self._setup_provider_env()

    def _setup_provider_env(self) -> None:
        """Export provider settings LiteLLM only reads from the environment."""
        if self.config.base_url and self.config.provider == "anthropic":
            # The Anthropic SDK appends /v1 itself.
            base_url = self.config.base_url.rstrip("/")
            if base_url.endswith("/v1"):
                base_url = base_url[:-3]
            os.environ["ANTHROPIC_BASE_URL"] = base_url
            if self.config.api_key:
                os.environ["ANTHROPIC_API_KEY"] = self.config.api_key

    def _get_model_name(self) -> str:
        """Get the model name formatted for LiteLLM routing."""
        model = self.config.model
        provider = self.config.provider

        if "/" in model:
            return model
        if provider == "anthropic":
            return f"anthropic/{model}"
        # Custom endpoints (local models, proxies) speak the OpenAI protocol.
        if self.config.base_url:
            return f"openai/{model}"
        if provider == "openai":
            return model
        return f"{provider}/{model}"

    async def generate_structured(
        self,
        prompt: str,
        output_model: type[T],
        system_prompt: str | None = None,
    ) -> T:
        """Generate output matching a Pydantic model.

        Args:
            prompt: The user prompt to send to the LLM.
            output_model: Pydantic model class defining the expected output.
            system_prompt: Optional system prompt for context.

        Returns:
            Parsed Pydantic model instance.

        Raises:
            LLMError: If the call fails or the response cannot be parsed.
        """
        response = await self._complete(
            self._build_messages(prompt, system_prompt),
            response_format=output_model,
        )
        return self._parse_response(response, output_model)

    async def generate_text(
        self,
        prompt: str,
        system_prompt: str | None = None,
    ) -> str:
        """Generate a plain text response.

        Raises:
            LLMError: If the call fails or returns no content.
        """
        response = await self._complete(self._build_messages(prompt, system_prompt))
        content = response.choices[0].message.content
        if not content:
            raise LLMError("LLM returned no content.")
        return content

    @staticmethod
    def _build_messages(prompt: str, system_prompt: str | None) -> list[dict]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return messages

    async def _complete(
        self,
        messages: list[dict],
        response_format: type[BaseModel] | None = None,
    ) -> Any:
        """Call the model, retrying transport failures up to ``max_retries``."""
        attempts = self.config.max_retries + 1
        for attempt in range(attempts):
            try:
                return await self._call_completion(messages, response_format)

            except Timeout as e:
                raise LLMError(
                    f"LLM request timed out after {self.config.timeout}s. "
                    "Increase LLM_TIMEOUT or use a faster model.",
                    e,
                ) from e

            except Exception as e:
                if attempt + 1 >= attempts:
                    raise LLMError(f"LLM call failed: {e}", e) from e
                is_rate_limit = "rate_limit" in str(e).lower() or "429" in str(e)
                wait_time = (8 if is_rate_limit else 2) * (attempt + 1)
                logger.warning(
                    f"LLM call failed (attempt {attempt + 1}), retrying in {wait_time}s: {e}"
                )
                await asyncio.sleep(wait_time)

        raise LLMError("LLM call failed: no attempts were made")

    async def _call_completion(
        self,
        messages: list[dict],
        response_format: type[BaseModel] | None = None,
    ) -> Any:
        """Make the actual LiteLLM API call."""
        kwargs: dict[str, Any] = {
            "model": self._get_model_name(),
            "messages": messages,
            "timeout": self.config.timeout,
        }
        if self.config.api_key:
            kwargs["api_key"] = self.config.api_key
        # Anthropic reads its base URL from the environment (see _setup_provider_env).
        if self.config.base_url and self.config.provider != "anthropic":
            kwargs["base_url"] = self.config.base_url
        if response_format:
            kwargs["response_format"] = response_format

        return await acompletion(**kwargs)

    def _parse_response(self, response: Any, output_model: type[T]) -> T:
        """Validate the response content against ``output_model``.

        Raises:
            LLMError: If the content is missing, not JSON, or fails validation.
        """
        message = response.choices[0].message
        content = getattr(message, "content", None)

        # Some providers return structured output as tool call arguments.
        if content is None:
            tool_calls = getattr(message, "tool_calls", None) or []
            if tool_calls:
                arguments = getattr(getattr(tool_calls[0], "function", None), "arguments", None)
                if isinstance(arguments, str) and arguments.strip():
                    content = arguments

        if content is None:
            raise LLMError("LLM returned no content to parse.")

        try:
            return output_model.model_validate_json(extract_json(content))
        except ValidationError as e:
            raise LLMError(f"Failed to parse LLM response - validation error: {e}", e) from e


def extract_json(content: str) -> str:
    """Pull the JSON payload out of a model reply.

    Handles markdown code fences and leading prose before the first
    JSON object or array.
    """
    content = content.strip()

    if content.startswith("```"):
        first_newline = content.find("\n")
        if first_newline != -1:
            content = content[first_newline + 1 :]
        if content.endswith("```"):
            content = content[:-3]
        content = content.strip()

    if content.startswith(("{", "[")):
        return content

    candidates = []
    for open_char, close_char in (("{", "}"), ("[", "]")):
        start = content.find(open_char)
        if start != -1:
            candidates.append((start, open_char, close_char))

    for start, open_char, close_char in sorted(candidates):
        depth = 0
        for idx in range(start, len(content)):
            ch = content[idx]
            if ch == open_char:
                depth += 1
            elif ch == close_char:
                depth -= 1
                if depth == 0:
                    return content[start : idx + 1]

    return content
