"""
Chat-completion client (OpenAI SDK pointed at an OpenAI-compatible API,
Groq by default). One request per README, no retries.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import openai
from openai import OpenAI

from config import DEFAULT_MODEL, GROQ_BASE_URL, Settings
from errors import CompletionError, ConfigurationError, GenerationEmptyError

logger = logging.getLogger(__name__)

TEMPERATURE = 0.8
MAX_TOKENS = 2500

MISSING_KEY_MESSAGE = "Groq API key is not configured. Please set GROQ_API_KEY or OPENAI_API_KEY."


class CompletionClient:
    def __init__(
        self,
        api_key: Optional[str],
        *,
        base_url: str = GROQ_BASE_URL,
        model: str = DEFAULT_MODEL,
        client: Optional[Any] = None,
    ) -> None:
        self.model = model
        self.base_url = base_url
        self._client = client
        if self._client is None and api_key:
            self._client = OpenAI(api_key=api_key, base_url=base_url, max_retries=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionClient":
        return cls(settings.llm_api_key, base_url=settings.llm_base_url, model=settings.llm_model)

    @property
    def configured(self) -> bool:
        return self._client is not None

    def ensure_configured(self) -> None:
        if not self.configured:
            raise ConfigurationError(MISSING_KEY_MESSAGE)

    def complete(self, system_prompt: str, context: str) -> str:
        """Send system + user messages, return the first choice's text."""
        self.ensure_configured()
        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": context},
                ],
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
            )
        except openai.OpenAIError as e:
            logger.warning("Completion request to %s failed: %s", self.base_url, e)
            raise CompletionError(f"README generation failed: {e}") from e

        choices = getattr(completion, "choices", None) or []
        content = choices[0].message.content if choices and choices[0].message else None
        if not content:
            raise GenerationEmptyError("Failed to generate README")
        return content
